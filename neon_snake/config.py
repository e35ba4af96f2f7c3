"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

# ── Window & Grid ─────────────────────────────────────────────────
CANVAS          = 720             # square play area, in pixels
PANEL_H         = 60
WIDTH, HEIGHT   = CANVAS, CANVAS + PANEL_H
OFFSET_X        = 0
OFFSET_Y        = PANEL_H
GRID_SIZE       = 24
GRID_MIN        = 4
GRID_MAX        = CANVAS // 10    # keeps cells at least 10 px wide
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG_TOP      = (0,   20,  30)
BG_BOTTOM   = (0,   0,   0)
GRID_COL    = (0,   255, 213)
APPLE_COL   = (255, 45,  91)
APPLE_GLOW  = (255, 60,  90)
LEAF_COL    = (77,  224, 122)
SHINE_COL   = (255, 255, 255)
FLASH_COL   = (255, 40,  100)
UI_COL      = (120, 170, 190)
ACCENT_COL  = (0,   255, 213)
PANEL_BG    = (4,   12,  18)
BORDER_COL  = (16,  60,  70)

# ── Gameplay ──────────────────────────────────────────────────────
INITIAL_GROWTH   = 3          # length the snake is trimmed to at the start
APPLE_REWARD     = 1
APPLE_ATTEMPTS   = 500        # random samples before the fallback cell
APPLE_FALLBACK   = (5, 3)     # offset from the head used by the fallback

# ── Particles ─────────────────────────────────────────────────────
PARTICLE_APPLE_COUNT = 18
PARTICLE_SPEED       = (0.6, 3.4)
PARTICLE_LIFE        = (40.0, 80.0)
PARTICLE_SIZE        = (2.0, 6.0)
PARTICLE_HUE         = (330.0, 410.0)
PARTICLE_FRICTION    = 0.98
PARTICLE_DECAY       = 1.6
PARTICLE_MAX_LIFE    = 80.0

FLASH_FRAMES = 8

# ── Speed (ticks per second) ──────────────────────────────────────
SPEED_MIN     = 4
SPEED_MAX     = 30
SPEED_DEFAULT = 10

# ── Game States ───────────────────────────────────────────────────
STATE_IDLE    = "idle"
STATE_RUNNING = "running"
STATE_PAUSED  = "paused"
STATE_OVER    = "over"
