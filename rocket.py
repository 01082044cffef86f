# rocket.py

import logging
from collections import deque, namedtuple

import numpy as np

import constants
from color import Color

logger = logging.getLogger("fireworks")

# Emitted by Rocket.update() on the frame the rocket reaches its target.
Burst = namedtuple('Burst', ['position', 'color'])


class Rocket:
    """
    A single firework in flight from its launch point to its burst point.

    Data Contract:
    - Inputs:
        - start_position: (x, y) launch origin.
        - target_position: (x, y) burst location.
        - color (Color): Fixed for the rocket's life and inherited by its sparks.
        - velocity (float): Initial speed along the launch bearing.
        - acceleration (float): Multiplier applied to velocity every update.
        - brightness (float): Cosmetic lightness in percent.
    - Invariants:
        - start_position, target_position, total_distance and angle never change.
        - The trail always holds exactly ROCKET_TRAIL_LENGTH points,
          most-recent-first.
        - target_radius stays in [1, 8.3): it grows by 0.3 while below 8, so
          it can reach 8.2 for one frame before resetting to 1.
        - update() returns a Burst on the first frame in which the projected
          distance from the start reaches total_distance, and None before that.
    """
    def __init__(self, start_position, target_position, color: Color,
                 velocity: float = constants.ROCKET_INITIAL_VELOCITY,
                 acceleration: float = constants.ROCKET_ACCELERATION,
                 brightness: float = constants.ROCKET_BRIGHTNESS_RANGE[0]):
        self.start_position = np.array(start_position, dtype=float)
        self.target_position = np.array(target_position, dtype=float)
        self.position = self.start_position.copy()
        self.color = color
        self.velocity = velocity
        self.acceleration = acceleration
        self.brightness = brightness

        delta = self.target_position - self.start_position
        self.total_distance = float(np.hypot(delta[0], delta[1]))
        self.distance_traveled = 0.0
        # atan2(0, 0) is 0, so coincident points still give a valid bearing.
        self.angle = float(np.arctan2(delta[1], delta[0]))
        self.target_radius = constants.ROCKET_TARGET_RADIUS_MIN

        self.trail = deque(
            (self.start_position.copy() for _ in range(constants.ROCKET_TRAIL_LENGTH)),
            maxlen=constants.ROCKET_TRAIL_LENGTH
        )

        logger.debug(
            f"Rocket created: start={self.start_position}, target={self.target_position}, "
            f"distance={self.total_distance:.1f}"
        )

    def update(self):
        """
        Advances the rocket by one frame.

        Returns a Burst at the target position when the rocket arrives this
        frame; the position is left untouched in that case. Returns None while
        the rocket is still in flight.
        """
        self.trail.appendleft(self.position.copy())

        if self.target_radius < constants.ROCKET_TARGET_RADIUS_MAX:
            self.target_radius += constants.ROCKET_TARGET_RADIUS_STEP
        else:
            self.target_radius = constants.ROCKET_TARGET_RADIUS_MIN

        self.velocity *= self.acceleration
        step = np.array([np.cos(self.angle), np.sin(self.angle)]) * self.velocity

        next_position = self.position + step
        offset = next_position - self.start_position
        self.distance_traveled = float(np.hypot(offset[0], offset[1]))

        if self.distance_traveled >= self.total_distance:
            return Burst(self.target_position.copy(), self.color)

        self.position = next_position
        return None

    def draw(self, canvas):
        """Strokes the tail from the oldest trail point to the current position."""
        canvas.stroke_line(self.trail[-1], self.position, self.color)
