import os

# pygame must never try to open a real window or audio device under test.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest


class RecordingCanvas:
    """Stands in for PygameCanvas and records every drawing call."""

    def __init__(self, width=1000, height=800):
        self.width = width
        self.height = height
        self.calls = []
        self.lines = []
        self.mode = "source-over"

    def get_size(self):
        return (self.width, self.height)

    def set_composite_mode(self, mode):
        self.mode = mode
        self.calls.append(("mode", mode))

    def fill_rect(self, rect, rgba):
        self.calls.append(("fill", tuple(rect), tuple(rgba), self.mode))

    def stroke_line(self, start, end, color, alpha=1.0):
        line = (tuple(np.asarray(start, dtype=float)), tuple(np.asarray(end, dtype=float)),
                tuple(np.asarray(color, dtype=float)), alpha, self.mode)
        self.lines.append(line)
        self.calls.append(("line",) + line)

    def present(self):
        self.calls.append(("present",))

    def reset(self):
        self.calls.clear()
        self.lines.clear()


class FakeScheduler:
    def __init__(self):
        self.pending = None
        self.requests = 0

    def request_frame(self, callback):
        self.pending = callback
        self.requests += 1

    def run(self, frames):
        for _ in range(frames):
            callback, self.pending = self.pending, None
            callback()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def sim_config():
    return {
        "particles_per_burst": 50,
        "max_particles": 0,
        "spawn_interval_min": 30,
        "spawn_interval_max": 80,
        "fade_alpha": 0.5,
        "color_mode": "random",
        "apply_particle_alpha": False,
    }
