"""Application configuration constants."""

from __future__ import annotations

# Sampling
NUM_WALLPAPERS = 5

# Double-tap detection
DOUBLE_TAP_DELAY_MS = 300   # milliseconds
DOUBLE_TAP_RADIUS = 20      # same unit as touch coordinates

# Remote image source
IMAGE_URL_TEMPLATE = "https://unsplash.it/{width}/{height}?image={id}"

# Background work
TASK_WORKERS = 2
UI_EVENTS_PER_TICK = 100
WORKER_POLL_TIMEOUT_S = 0.1
WORKER_JOIN_TIMEOUT_S = 1.0

# Media store
MEDIA_DIR = "SplashWalls"
MEDIA_FORMAT = "JPEG"
MEDIA_QUALITY = 95
MEDIA_BACKGROUND = (255, 255, 255)

# Supported image extensions
IMG_EXTS = frozenset({".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"})

# Strings for the shell
SAVED_TITLE = "Saved"
SAVED_MESSAGE = "Wallpaper successfully saved to Camera Roll"
UNKNOWN_AUTHOR = "Unknown"
