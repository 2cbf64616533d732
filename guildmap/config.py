"""Global paths, constants, and defaults for Guild Map."""

import os
from pathlib import Path

# ── Paths ──────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(os.environ.get("GUILDMAP_ROOT", Path(__file__).resolve().parent.parent))
CONTENT_DIR = PROJECT_ROOT / "content"
CATALOG_PATH = Path(os.environ.get("GUILDMAP_CATALOG", CONTENT_DIR / "map.json"))

# ── Navigation ─────────────────────────────────────────────────────────────
SITE_BASE_URL = os.environ.get("GUILDMAP_SITE_URL", "http://localhost:8000/")

# ── Design Space ───────────────────────────────────────────────────────────
BASE_WIDTH = 1536         # polygons are authored against this resolution
BASE_HEIGHT = 1024

# ── Display ────────────────────────────────────────────────────────────────
WINDOW_WIDTH = 1152
WINDOW_HEIGHT = 768
DISPLAY_FPS = int(os.environ.get("GUILDMAP_FPS", "60"))
BACKGROUND_COLOR = (0.08, 0.06, 0.04, 1.0)

# ── Hit Testing ────────────────────────────────────────────────────────────
HIT_EXPAND_PX = 18        # touch tolerance around region polygons
MARKER_SIZE_PX = 52       # native marker hit box and halo base

# ── Particles ──────────────────────────────────────────────────────────────
PARTICLE_COUNT = 40
PARTICLE_ALPHA_DECAY = 0.0006      # per frame
PARTICLE_MARGIN_X = 40.0
PARTICLE_MARGIN_TOP = 20.0
PARTICLE_COLOR = (255, 200, 80)

# ── Glow ───────────────────────────────────────────────────────────────────
REGION_PULSE_RATE = 0.004          # radians per millisecond
MARKER_PULSE_RATE = 2.8            # radians per second
MARKER_PULSE_BASE = 6.0
MARKER_PULSE_AMPLITUDE = 4.0

# ── Tooltip ────────────────────────────────────────────────────────────────
TOOLTIP_OFFSET_PX = 12
TOOLTIP_MARGIN_PX = 6
TOOLTIP_MAX_WIDTH = 260
TOUCH_TOOLTIP_HIDE_S = 1.5
