"""
settings.py — Runtime configuration.

Environment (optional):
    NEON_SNAKE_SPEED       Ticks per second (default 10, clamped to 4..30)
    NEON_SNAKE_GRID        Cells per side (default 24, clamped to 4..72)
    NEON_SNAKE_FPS         Frame cap (default 60)
    NEON_SNAKE_HIGHSCORE   Highscore file (default ~/.neon_snake/highscore.json)
    NEON_SNAKE_LOG         Log level name (default INFO)
"""

import math
import os
from dataclasses import dataclass

from .config import (
    SPEED_MIN, SPEED_MAX, SPEED_DEFAULT, GRID_SIZE, GRID_MIN, GRID_MAX, FPS,
)
from .storage import DEFAULT_PATH


def clamp_speed(speed) -> float:
    """Non-positive or oversized speeds are pulled back into range."""
    speed = float(speed)
    if math.isnan(speed):
        raise ValueError("speed must be a number")
    return max(float(SPEED_MIN), min(float(SPEED_MAX), speed))


def speed_to_interval(speed) -> float:
    """Milliseconds between ticks."""
    return 1000.0 / clamp_speed(speed)


def _env_number(environ, name: str, default, cast):
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class Settings:
    speed: float = SPEED_DEFAULT
    grid_size: int = GRID_SIZE
    fps: int = FPS
    highscore_path: str = DEFAULT_PATH
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ
        speed = _env_number(environ, "NEON_SNAKE_SPEED", SPEED_DEFAULT, float)
        grid = _env_number(environ, "NEON_SNAKE_GRID", GRID_SIZE, int)
        fps = _env_number(environ, "NEON_SNAKE_FPS", FPS, int)
        return cls(
            speed=clamp_speed(speed),
            grid_size=max(GRID_MIN, min(GRID_MAX, grid)),
            fps=max(1, fps),
            highscore_path=environ.get("NEON_SNAKE_HIGHSCORE") or DEFAULT_PATH,
            log_level=(environ.get("NEON_SNAKE_LOG") or "INFO").upper(),
        )
