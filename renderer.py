# renderer.py
"""
Host wrapper around pygame.

PygameCanvas adapts a pygame Surface to the small drawing protocol the show
needs (compositing mode, rectangle fill, line stroke). FrameScheduler provides
the "run this callback before the next repaint" primitive on top of the pygame
event loop and clock.
"""
import logging
import math

import pygame

import constants
from color import to_rgb

logger = logging.getLogger("fireworks")


class PygameCanvas:
    """
    A drawing surface with canvas-style compositing.

    - "destination-out": fill_rect() erases existing content in proportion to
      the fill alpha (a multiply towards black).
    - "lighter": strokes are collected on an overlay and added onto the screen
      when the mode changes or present() is called, so overlapping strokes
      brighten rather than occlude.
    - "source-over": plain painting.
    """
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.mode = constants.COMPOSITE_SOURCE_OVER
        self._overlay = pygame.Surface(screen.get_size())
        self._overlay_dirty = False

    def get_size(self):
        return self.screen.get_size()

    def set_composite_mode(self, mode: str):
        if mode not in (constants.COMPOSITE_SOURCE_OVER,
                        constants.COMPOSITE_DESTINATION_OUT,
                        constants.COMPOSITE_LIGHTER):
            raise ValueError(f"Unsupported compositing mode: {mode}")
        if mode != self.mode:
            self._flush_overlay()
        self.mode = mode

    def fill_rect(self, rect, rgba):
        """Fills `rect` with an (r, g, b, a) color whose alpha is in [0, 1]."""
        alpha = min(max(float(rgba[3]), 0.0), 1.0)
        if self.mode == constants.COMPOSITE_DESTINATION_OUT:
            keep = int(round(255 * (1.0 - alpha)))
            self.screen.fill((keep, keep, keep), rect, special_flags=pygame.BLEND_RGB_MULT)
        elif self.mode == constants.COMPOSITE_LIGHTER:
            self._overlay.fill(to_rgb(rgba, alpha), rect, special_flags=pygame.BLEND_RGB_ADD)
            self._overlay_dirty = True
        else:
            fill = pygame.Surface(pygame.Rect(rect).size, pygame.SRCALPHA)
            fill.fill((*to_rgb(rgba), int(round(255 * alpha))))
            self.screen.blit(fill, pygame.Rect(rect).topleft)

    def stroke_line(self, start, end, color, alpha: float = 1.0):
        start = (float(start[0]), float(start[1]))
        end = (float(end[0]), float(end[1]))
        if self.mode == constants.COMPOSITE_LIGHTER:
            self._add_line(start, end, to_rgb(color, alpha))
        else:
            pygame.draw.line(self.screen, to_rgb(color, alpha), start, end, constants.LINE_WIDTH)

    def _add_line(self, start, end, rgb):
        """
        Draws the line on a black scratch surface covering only its bounding
        box, then adds that onto the overlay, so strokes within one frame sum.
        """
        pad = constants.LINE_WIDTH
        left = math.floor(min(start[0], end[0])) - pad
        top = math.floor(min(start[1], end[1])) - pad
        right = math.ceil(max(start[0], end[0])) + pad + 1
        bottom = math.ceil(max(start[1], end[1])) + pad + 1

        scratch = pygame.Surface((right - left, bottom - top))
        pygame.draw.line(
            scratch, rgb,
            (start[0] - left, start[1] - top),
            (end[0] - left, end[1] - top),
            constants.LINE_WIDTH
        )
        self._overlay.blit(scratch, (left, top), special_flags=pygame.BLEND_RGB_ADD)
        self._overlay_dirty = True

    def present(self):
        """Composites any pending additive strokes onto the screen."""
        self._flush_overlay()

    def _flush_overlay(self):
        if not self._overlay_dirty:
            return
        self.screen.blit(self._overlay, (0, 0), special_flags=pygame.BLEND_RGB_ADD)
        self._overlay.fill(constants.BLACK)
        self._overlay_dirty = False


class FrameScheduler:
    """
    Runs one registered callback per display refresh.

    Data Contract:
    - request_frame(callback) registers `callback` to run once on the next
      frame; a callback re-registers itself to keep the loop alive.
    - run() returns when the window is closed, when no callback is pending,
      or after max_frames frames.
    """
    def __init__(self, fps: int = constants.FPS, clock=None):
        self.fps = fps
        self.clock = clock or pygame.time.Clock()
        self._pending = None
        self.frames_run = 0

    def request_frame(self, callback):
        self._pending = callback

    def run(self, max_frames=None):
        running = True
        while running and self._pending is not None:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    logger.info("Window closed; stopping the frame loop.")
                    running = False
            if not running:
                break

            callback, self._pending = self._pending, None
            callback()
            pygame.display.flip()
            self.clock.tick(self.fps)
            self.frames_run += 1

            if max_frames is not None and self.frames_run >= max_frames:
                logger.info(f"Reached max_frames ({max_frames}). Stopping the frame loop.")
                running = False
