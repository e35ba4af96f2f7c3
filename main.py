"""
main.py — Entry point.

Run with:
    python main.py

Requires:
    pip install pygame

Settings come from NEON_SNAKE_* environment variables (see neon_snake/settings.py).
"""

import logging

from neon_snake.controller import GameController
from neon_snake.settings import Settings


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    GameController(settings).run()


if __name__ == "__main__":
    main()
