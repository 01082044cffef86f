import pygame
import pytest

import constants
from color import Color
from renderer import FrameScheduler, PygameCanvas


@pytest.fixture
def surface():
    surface = pygame.Surface((20, 20))
    surface.fill((200, 100, 40))
    return surface


def test_destination_out_fill_dims_existing_pixels(surface):
    canvas = PygameCanvas(surface)
    canvas.set_composite_mode(constants.COMPOSITE_DESTINATION_OUT)
    canvas.fill_rect((0, 0, 20, 20), (0, 0, 0, 0.5))
    r, g, b, *_ = surface.get_at((10, 10))
    assert r == pytest.approx(100, abs=2)
    assert g == pytest.approx(50, abs=2)
    assert b == pytest.approx(20, abs=2)


def test_full_alpha_erase_clears_to_black(surface):
    canvas = PygameCanvas(surface)
    canvas.set_composite_mode(constants.COMPOSITE_DESTINATION_OUT)
    canvas.fill_rect((0, 0, 20, 20), (0, 0, 0, 1.0))
    assert tuple(surface.get_at((3, 3)))[:3] == (0, 0, 0)


def test_lighter_strokes_add_onto_existing_pixels(surface):
    canvas = PygameCanvas(surface)
    canvas.set_composite_mode(constants.COMPOSITE_LIGHTER)
    canvas.stroke_line((0, 5), (19, 5), Color(50.0, 50.0, 50.0))
    # Nothing lands on the screen until the additive layer is presented.
    assert tuple(surface.get_at((5, 5)))[:3] == (200, 100, 40)
    canvas.present()
    assert tuple(surface.get_at((5, 5)))[:3] == (250, 150, 90)
    # Untouched rows stay as they were.
    assert tuple(surface.get_at((5, 15)))[:3] == (200, 100, 40)


def test_lighter_saturates_instead_of_wrapping(surface):
    canvas = PygameCanvas(surface)
    canvas.set_composite_mode(constants.COMPOSITE_LIGHTER)
    canvas.stroke_line((0, 5), (19, 5), Color(255.0, 255.0, 255.0))
    canvas.present()
    assert tuple(surface.get_at((5, 5)))[:3] == (255, 255, 255)


def test_overlay_is_cleared_after_present(surface):
    canvas = PygameCanvas(surface)
    canvas.set_composite_mode(constants.COMPOSITE_LIGHTER)
    canvas.stroke_line((0, 5), (19, 5), Color(10.0, 10.0, 10.0))
    canvas.present()
    canvas.present()
    assert tuple(surface.get_at((5, 5)))[:3] == (210, 110, 50)


def test_source_over_stroke_paints_directly(surface):
    canvas = PygameCanvas(surface)
    canvas.stroke_line((0, 5), (19, 5), Color(300.0, -5.0, 7.5))
    assert tuple(surface.get_at((5, 5)))[:3] == (255, 0, 7)


def test_unknown_mode_rejected(surface):
    canvas = PygameCanvas(surface)
    with pytest.raises(ValueError):
        canvas.set_composite_mode("multiply")


def test_get_size_reports_surface_dimensions(surface):
    assert PygameCanvas(surface).get_size() == (20, 20)


class _InstantClock:
    def __init__(self):
        self.ticks = 0

    def tick(self, fps):
        self.ticks += 1
        return 0


@pytest.fixture
def display():
    pygame.display.init()
    pygame.display.set_mode((10, 10))
    yield
    pygame.display.quit()


def test_scheduler_runs_self_registering_callback(display):
    clock = _InstantClock()
    scheduler = FrameScheduler(fps=60, clock=clock)
    seen = []

    def callback():
        seen.append(len(seen))
        scheduler.request_frame(callback)

    scheduler.request_frame(callback)
    scheduler.run(max_frames=5)

    assert seen == [0, 1, 2, 3, 4]
    assert clock.ticks == 5
    assert scheduler.frames_run == 5


def test_scheduler_stops_when_nothing_is_pending(display):
    scheduler = FrameScheduler(fps=60, clock=_InstantClock())
    calls = []
    scheduler.request_frame(lambda: calls.append(1))
    scheduler.run()
    assert calls == [1]


def test_scheduler_stops_on_quit_event(display):
    scheduler = FrameScheduler(fps=60, clock=_InstantClock())
    calls = []

    def callback():
        calls.append(1)
        scheduler.request_frame(callback)

    scheduler.request_frame(callback)
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    scheduler.run(max_frames=10)
    assert calls == []


def test_overlapping_lighter_strokes_sum_within_a_frame():
    surface = pygame.Surface((20, 20))
    canvas = PygameCanvas(surface)
    canvas.set_composite_mode(constants.COMPOSITE_LIGHTER)
    canvas.stroke_line((0, 5), (19, 5), Color(50.0, 50.0, 50.0))
    canvas.stroke_line((0, 5), (19, 5), Color(50.0, 50.0, 50.0))
    canvas.present()
    assert tuple(surface.get_at((5, 5)))[:3] == (100, 100, 100)


def test_crossing_lighter_strokes_brighten_only_where_they_meet():
    surface = pygame.Surface((20, 20))
    canvas = PygameCanvas(surface)
    canvas.set_composite_mode(constants.COMPOSITE_LIGHTER)
    canvas.stroke_line((0, 10), (19, 10), Color(40.0, 0.0, 0.0))
    canvas.stroke_line((10, 0), (10, 19), Color(40.0, 0.0, 0.0))
    canvas.present()
    assert tuple(surface.get_at((10, 10)))[:3] == (80, 0, 0)
    assert tuple(surface.get_at((3, 10)))[:3] == (40, 0, 0)
    assert tuple(surface.get_at((10, 3)))[:3] == (40, 0, 0)
    assert tuple(surface.get_at((3, 3)))[:3] == (0, 0, 0)


def test_lighter_stroke_partly_off_screen_is_clipped(surface):
    canvas = PygameCanvas(surface)
    canvas.set_composite_mode(constants.COMPOSITE_LIGHTER)
    canvas.stroke_line((-30, 5), (5, 5), Color(10.0, 10.0, 10.0))
    canvas.present()
    assert tuple(surface.get_at((0, 5)))[:3] == (210, 110, 50)
