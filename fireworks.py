# fireworks.py
"""
The frame driver.

FireworkShow owns the rocket and spark pools and, once started, runs one
fade / draw / update / spawn pass per scheduled frame, re-registering itself
with the scheduler every time.
"""
import logging

import numpy as np

import constants
from color import color_from_hue, random_color
from particle_system import ParticleSystem
from rocket import Rocket

logger = logging.getLogger("fireworks")

COLOR_MODES = ("random", "hue")

# --- Data Contracts ---
#
# class FireworkShow:
#   - __init__(self, canvas, scheduler, config, rng, log_throttle=300):
#     - Inputs:
#       - canvas: get_size(), set_composite_mode(), fill_rect(), stroke_line(), present().
#       - scheduler: request_frame(callback).
#       - config: The 'simulation' section of config.json.
#       - rng: np.random.Generator used for every random draw.
#     - Side Effects: Creates an empty rocket list and ParticleSystem.
#
#   - start(self) -> None: registers frame() with the scheduler.
#
#   - frame(self) -> None:
#     - Side Effects: Re-registers itself, draws to the canvas, mutates both pools.
#     - Invariants: Every live entity is drawn and updated exactly once. A rocket
#       that bursts is removed and its sparks are added in the same frame. An
#       exception in the frame body is logged and never stops the loop.


class FireworkShow:
    """
    Orchestrates the animation: both entity pools, the spawn timer and the
    cosmetic hue all live here and are only touched from frame().
    """
    def __init__(self, canvas, scheduler, config: dict, rng: np.random.Generator, log_throttle: int = 300):
        self.canvas = canvas
        self.scheduler = scheduler
        self.rng = rng
        self.log_throttle = log_throttle

        self.fade_alpha = config.get('fade_alpha', 0.5)
        self.spawn_interval_min = config.get('spawn_interval_min', 30)
        self.spawn_interval_max = config.get('spawn_interval_max', 80)
        self.color_mode = config.get('color_mode', 'random')

        if self.spawn_interval_min > self.spawn_interval_max:
            raise ValueError(
                f"spawn_interval_min ({self.spawn_interval_min}) exceeds "
                f"spawn_interval_max ({self.spawn_interval_max})"
            )
        if self.color_mode not in COLOR_MODES:
            raise ValueError(f"Unknown color_mode '{self.color_mode}', expected one of {COLOR_MODES}")

        self.rockets = []
        self.particles = ParticleSystem(config, rng)

        self.spawn_interval = self.spawn_interval_max
        self.spawn_tick = 0
        self.hue = 120.0
        self.frame_count = 0

        logger.info(
            f"FireworkShow created: spawn interval [{self.spawn_interval_min}, {self.spawn_interval_max}] frames, "
            f"fade alpha {self.fade_alpha}, color mode '{self.color_mode}'."
        )

    def start(self):
        """Begins the self-sustaining frame loop."""
        logger.info("Starting the fireworks loop.")
        self.scheduler.request_frame(self.frame)

    def frame(self):
        """Runs one animation frame, then the next one is already scheduled."""
        self.scheduler.request_frame(self.frame)
        try:
            self._render_frame()
        except Exception:
            logger.exception(f"Frame {self.frame_count} failed; continuing with the next frame.")
        self.frame_count += 1

    def _render_frame(self):
        self._fade()

        self._update_rockets()

        self.particles.draw(self.canvas)
        self.particles.update()

        self._schedule_launch()

        self.spawn_interval = int(self.rng.integers(self.spawn_interval_min, self.spawn_interval_max + 1))
        self.hue = float(self.rng.uniform(0.0, 360.0))

        self.canvas.present()

        # Hot loops must throttle logs
        if self.log_throttle and self.frame_count % self.log_throttle == 0:
            logger.debug(
                f"Frame={self.frame_count}, Rockets={len(self.rockets)}, "
                f"Particles={len(self.particles)}, SpawnTick={self.spawn_tick}/{self.spawn_interval}"
            )

    def _fade(self):
        """Dims everything drawn so far instead of clearing, leaving fading trails."""
        width, height = self.canvas.get_size()
        self.canvas.set_composite_mode(constants.COMPOSITE_DESTINATION_OUT)
        self.canvas.fill_rect((0, 0, width, height), (0, 0, 0, self.fade_alpha))
        self.canvas.set_composite_mode(constants.COMPOSITE_LIGHTER)

    def _update_rockets(self):
        """
        Draws then advances every rocket. Iterates over a snapshot, so removals
        never shift a rocket that has not been visited. A landed rocket leaves
        the pool before its sparks are added: if the frame fails afterwards it
        can never burst a second time.
        """
        for rocket in list(self.rockets):
            rocket.draw(self.canvas)
            burst = rocket.update()
            if burst is not None:
                self.rockets.remove(rocket)
                self.particles.spawn_burst(burst.position, burst.color)
                logger.debug(f"Rocket burst at {burst.position} after {rocket.distance_traveled:.1f}px.")

    def _schedule_launch(self):
        if self.spawn_tick >= self.spawn_interval:
            self.launch_rocket()
            self.spawn_tick = 0
        else:
            self.spawn_tick += 1

    def launch_rocket(self) -> Rocket:
        """Launches a rocket from the bottom centre towards a random point in the upper half."""
        width, height = self.canvas.get_size()
        start = (width / 2, height)
        target = (self.rng.uniform(0, width), self.rng.uniform(0, height / 2))
        brightness = float(self.rng.uniform(*constants.ROCKET_BRIGHTNESS_RANGE))

        if self.color_mode == 'hue':
            color = color_from_hue(self.hue, brightness)
        else:
            color = random_color(self.rng)

        rocket = Rocket(start, target, color, brightness=brightness)
        self.rockets.append(rocket)
        return rocket
