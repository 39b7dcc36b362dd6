"""
Feedback Editor - Constants and Configuration

This module contains all constant values used throughout the application:
- Framebuffer dimensions and limits
- Background / sentinel color
- Transform object defaults and constraints
- Spawn zone geometry
- Handle geometry
- Overlay palette
"""

# ======================================================================
# FRAMEBUFFER
# ======================================================================
# Buffer size is fixed for the lifetime of a Scene. Resizing the window
# never resizes the logical buffer.

DEFAULT_BUFFER_WIDTH = 800
DEFAULT_BUFFER_HEIGHT = 600

BUFFER_MIN_WIDTH = 320
BUFFER_MIN_HEIGHT = 240
BUFFER_MAX_WIDTH = 1000
BUFFER_MAX_HEIGHT = 1000

BYTES_PER_PIXEL = 4  # R, G, B, A

# ======================================================================
# BACKGROUND
# ======================================================================
# The background doubles as the feedback sentinel: previous-frame pixels
# of exactly this RGB are not resampled.

BACKGROUND_COLOR = (0x48, 0xb2, 0xe8)
BACKGROUND_ALPHA = 0xff

# ======================================================================
# TRANSFORM CONSTRAINTS
# ======================================================================

SCALE_MIN = 0.1
SCALE_MAX = 1.0

OPACITY_MIN = 0
OPACITY_MAX = 255
DEFAULT_OPACITY = 200

# Seed object created with every new Scene
SEED_SCALE = 0.6
SEED_ROTATION = 0.0

# ======================================================================
# SPAWN ZONE
# ======================================================================
# Inclusive rectangle in buffer pixels: [min_x, max_x] x [min_y, max_y]

SPAWN_ZONE_MIN = (20, 20)
SPAWN_ZONE_MAX = (80, 80)

# New objects: scale = SPAWN_SCALE +/- SPAWN_SCALE_JITTER
SPAWN_SCALE = 0.545
SPAWN_SCALE_JITTER = 0.05
SPAWN_ROTATION_JITTER = 0.05  # radians
SPAWN_POSITION_JITTER = 0.05  # fraction of buffer width/height

# ======================================================================
# HANDLES
# ======================================================================
# Handle geometry is expressed in screen pixels and divided by the object's
# scale, so handles keep a constant on-screen size.

HANDLE_UNIT = 10.0
# Upper bound on the local unit as a fraction of min(half_w, half_h)
HANDLE_UNIT_MAX_FRACTION = 1.0 / 8.0

# Rotate band spans +/- this angle around straight up
ROTATE_ARC_HALF_ANGLE = 0.7853981633974483  # pi / 4

# Opacity change per pixel of vertical drag
OPACITY_DRAG_RATE = 1.0

# Interior grid lines drawn across each object's canvas (per axis)
BORDER_GRID_DIVISIONS = 3

# ======================================================================
# OVERLAY PALETTE
# ======================================================================
# Four tiers: neutral border, hoverable handle, hovered handle, grabbed handle

COLOR_NEUTRAL = (0xe8, 0xe8, 0xe8)
COLOR_HOVERABLE = (0x5e, 0x48, 0xe8)
COLOR_HOVERING = (0xe8, 0xc8, 0x48)
COLOR_GRABBING = (0xe8, 0x48, 0x5e)

SPAWN_ZONE_COLOR = (0x48, 0xe8, 0x7c)
SPAWN_ZONE_HOVER_COLOR = (0xe8, 0xc8, 0x48)

# ======================================================================
# INSTRUMENTATION
# ======================================================================

# Average frame time is reported once every N frames
FRAME_REPORT_INTERVAL = 60
