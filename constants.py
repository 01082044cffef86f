# constants.py

"""
Application Constants

This module defines static configuration values for the application's framework
and the fixed physics of rockets and sparks. These are not expected to change
between simulation runs; tunable run parameters live in config.json.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

# Default screen dimensions (overridable by the "display" config section)
WIDTH = 1280  # Pixels
HEIGHT = 720  # Pixels

# Framerate
FPS = 60  # Frames per second

# Colors (RGB)
BLACK = (0, 0, 0)

# Window Title
TITLE = "Fireworks"

# Stroke width of rocket and spark trails
LINE_WIDTH = 1  # Pixels

# Compositing modes understood by the canvas
COMPOSITE_SOURCE_OVER = "source-over"
COMPOSITE_DESTINATION_OUT = "destination-out"  # Erase: dims what is already drawn
COMPOSITE_LIGHTER = "lighter"  # Additive: overlapping strokes brighten

# Rocket physics
ROCKET_TRAIL_LENGTH = 3  # Points kept for the tail
ROCKET_INITIAL_VELOCITY = 1.2  # Pixels per frame
ROCKET_ACCELERATION = 1.05  # Multiplier applied to velocity every frame
ROCKET_TARGET_RADIUS_MIN = 1.0
ROCKET_TARGET_RADIUS_MAX = 8.0
ROCKET_TARGET_RADIUS_STEP = 0.3
ROCKET_BRIGHTNESS_RANGE = (50.0, 70.0)  # Percent lightness, used by the "hue" color mode

# Spark physics
PARTICLE_TRAIL_LENGTH = 5  # Points kept for the tail
PARTICLE_VELOCITY_RANGE = (1.0, 10.0)  # Pixels per frame, [min, max)
PARTICLE_FRICTION = 0.98  # Multiplier applied to velocity every frame
PARTICLE_GRAVITY = 1.0  # Vertical bias factor; 1 is neutral
PARTICLE_DECAY_RANGE = (0.015, 0.06)  # Alpha lost per frame, [min, max)

# Color channel upper bound (exclusive) for randomly drawn colors
COLOR_CHANNEL_MAX = 255.0
