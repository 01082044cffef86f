# particle_system.py

import numpy as np
import logging
import numba
import constants

logger = logging.getLogger("fireworks")

# --- JIT-Compiled Physics Functions ---
# Kept outside the ParticleSystem class and operating only on NumPy arrays and
# scalars, as required by Numba's nopython mode.

@numba.jit(nopython=True)
def _advance_particles_jit(count, positions, trails, angles, velocities, gravities, alphas, decays, friction, alive):
    """
    Numba-accelerated single-frame update of every spark.
    Shifts each trail, integrates position, fades alpha and writes the survival
    flag into `alive`. Arrays are modified in place.
    """
    trail_length = trails.shape[1]
    for i in range(count):
        # Most-recent-first: shift the history back and drop the oldest point.
        for k in range(trail_length - 1, 0, -1):
            trails[i, k, 0] = trails[i, k - 1, 0]
            trails[i, k, 1] = trails[i, k - 1, 1]
        trails[i, 0, 0] = positions[i, 0]
        trails[i, 0, 1] = positions[i, 1]

        velocities[i] *= friction
        positions[i, 0] += np.cos(angles[i]) * velocities[i]
        positions[i, 1] += np.sin(angles[i]) * velocities[i] * gravities[i]

        alphas[i] -= decays[i]
        alive[i] = alphas[i] > decays[i]


class ParticleSystem:
    """
    Owns every live spark using NumPy arrays (Structure of Arrays).

    Data Contract:
    - Inputs:
        - config (dict): The 'simulation' section of the config file.
        - rng (np.random.Generator): The master random number generator.
    - Outputs: None. This class modifies its internal state.
    - Side Effects: Manages the lifecycle of all spark data.
    - Invariants:
        - All internal arrays share the same length (num_particles).
        - Every trail holds exactly PARTICLE_TRAIL_LENGTH points, most-recent-first.
        - After update(), no spark with alpha <= decay remains.
        - If max_particles is set, num_particles never exceeds it.
    """
    def __init__(self, config: dict, rng: np.random.Generator):
        self.rng = rng
        self.particles_per_burst = config.get('particles_per_burst', 50)
        self.max_particles = config.get('max_particles') or 0
        self.apply_alpha = config.get('apply_particle_alpha', False)
        self.friction = constants.PARTICLE_FRICTION

        if self.particles_per_burst < 0:
            raise ValueError(f"particles_per_burst must be non-negative, got {self.particles_per_burst}")
        if self.max_particles < 0:
            raise ValueError(f"max_particles must be non-negative, got {self.max_particles}")

        self._cap_reached = False

        # --- Initialize empty state arrays ---
        trail_length = constants.PARTICLE_TRAIL_LENGTH
        self.positions = np.zeros((0, 2), dtype=float)
        self.trails = np.zeros((0, trail_length, 2), dtype=float)
        self.angles = np.zeros(0, dtype=float)
        self.velocities = np.zeros(0, dtype=float)
        self.gravities = np.zeros(0, dtype=float)
        self.alphas = np.zeros(0, dtype=float)
        self.decays = np.zeros(0, dtype=float)
        self.colors = np.zeros((0, 3), dtype=float)

        logger.info(
            f"ParticleSystem created: {self.particles_per_burst} sparks per burst, "
            f"cap={self.max_particles or 'none'}."
        )

    @property
    def num_particles(self) -> int:
        return self.positions.shape[0]

    def __len__(self):
        return self.num_particles

    def spawn_burst(self, position, color):
        """
        Adds particles_per_burst sparks at `position`, all sharing `color`, each
        with an independently drawn angle, velocity and decay.
        """
        count = self.particles_per_burst
        angles = self.rng.uniform(0.0, 2.0 * np.pi, count)
        velocities = self.rng.uniform(*constants.PARTICLE_VELOCITY_RANGE, count)
        decays = self.rng.uniform(*constants.PARTICLE_DECAY_RANGE, count)
        self._append(position, color, angles, velocities, decays)

    def add_particle(self, position, color, angle: float, velocity: float, decay: float):
        """Adds one spark with explicit motion parameters."""
        self._append(position, color, np.array([angle]), np.array([velocity]), np.array([decay]))

    def _append(self, position, color, angles, velocities, decays):
        count = len(angles)
        if count == 0:
            return

        position = np.asarray(position, dtype=float)
        trail_length = constants.PARTICLE_TRAIL_LENGTH

        self.positions = np.concatenate([self.positions, np.tile(position, (count, 1))])
        self.trails = np.concatenate([self.trails, np.tile(position, (count, trail_length, 1))])
        self.angles = np.concatenate([self.angles, np.asarray(angles, dtype=float)])
        self.velocities = np.concatenate([self.velocities, np.asarray(velocities, dtype=float)])
        self.gravities = np.concatenate([self.gravities, np.full(count, constants.PARTICLE_GRAVITY)])
        self.alphas = np.concatenate([self.alphas, np.ones(count)])
        self.decays = np.concatenate([self.decays, np.asarray(decays, dtype=float)])
        self.colors = np.concatenate([self.colors, np.tile(np.asarray(color, dtype=float), (count, 1))])

        self._enforce_cap()

    def _enforce_cap(self):
        """Drops the oldest sparks when the pool exceeds max_particles."""
        if not self.max_particles or self.num_particles <= self.max_particles:
            self._cap_reached = False
            return

        excess = self.num_particles - self.max_particles
        if not self._cap_reached:
            logger.warning(
                f"Spark pool exceeded its cap of {self.max_particles}; dropping the oldest sparks."
            )
            self._cap_reached = True
        logger.debug(f"Dropped {excess} oldest spark(s) to respect the cap.")
        self._keep(slice(excess, None))

    def _keep(self, selector):
        """Compacts every state array down to the selected rows."""
        self.positions = self.positions[selector]
        self.trails = self.trails[selector]
        self.angles = self.angles[selector]
        self.velocities = self.velocities[selector]
        self.gravities = self.gravities[selector]
        self.alphas = self.alphas[selector]
        self.decays = self.decays[selector]
        self.colors = self.colors[selector]

    def update(self) -> int:
        """
        Advances every spark by one frame, then removes the expired ones.
        Marks survivors first and compacts afterwards, so every spark is
        visited exactly once regardless of how many expire.

        Returns the number of sparks removed.
        """
        count = self.num_particles
        if count == 0:
            return 0

        alive = np.ones(count, dtype=np.bool_)
        _advance_particles_jit(
            count, self.positions, self.trails, self.angles, self.velocities,
            self.gravities, self.alphas, self.decays, self.friction, alive
        )

        expired = count - int(np.count_nonzero(alive))
        if expired:
            self._keep(alive)
        return expired

    def draw(self, canvas):
        """
        Strokes each spark's tail from its oldest trail point to its position.
        Alpha only modulates the stroke when apply_particle_alpha is enabled.
        """
        oldest = self.trails[:, -1, :]
        for i in range(self.num_particles):
            alpha = self.alphas[i] if self.apply_alpha else 1.0
            canvas.stroke_line(oldest[i], self.positions[i], self.colors[i], alpha)
