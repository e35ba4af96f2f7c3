"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame window and event pump.
  - Translate raw keyboard and mouse/touch events into Commands.
  - Pace frames and hand each one to the LoopController.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Model's job).

Input never mutates the model directly: every handler only pushes onto the
loop's command queue, which is drained at the start of the next frame.

The controller is the only layer that imports pygame directly for events.
"""

import logging
import sys
import pygame

from .commands import Command, swipe_to_command
from .config import WIDTH, HEIGHT
from .loop import LoopController
from .model import GameModel
from .settings import Settings
from .storage import HighScoreStore
from .view import GameView

logger = logging.getLogger(__name__)

KEY_COMMANDS = {
    pygame.K_UP:       Command.UP,
    pygame.K_w:        Command.UP,
    pygame.K_DOWN:     Command.DOWN,
    pygame.K_s:        Command.DOWN,
    pygame.K_LEFT:     Command.LEFT,
    pygame.K_a:        Command.LEFT,
    pygame.K_RIGHT:    Command.RIGHT,
    pygame.K_d:        Command.RIGHT,
    pygame.K_SPACE:    Command.PAUSE,
    pygame.K_p:        Command.PAUSE,
    pygame.K_RETURN:   Command.START,
    pygame.K_r:        Command.RESTART,
    pygame.K_PLUS:     Command.FASTER,
    pygame.K_EQUALS:   Command.FASTER,
    pygame.K_KP_PLUS:  Command.FASTER,
    pygame.K_MINUS:    Command.SLOWER,
    pygame.K_KP_MINUS: Command.SLOWER,
}

QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)


class GameController:
    """
    Owns the main loop.
    Glues Model <-> View without them knowing about each other.
    """

    def __init__(self, settings: Settings = None):
        self.settings = settings or Settings()
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Neon Snake")
        self.clock  = pygame.time.Clock()
        self.model  = GameModel(
            grid_size=self.settings.grid_size,
            store=HighScoreStore(self.settings.highscore_path),
        )
        self.view   = GameView(self.screen, self.settings.grid_size)
        self.model.add_listener(self.view)
        self.view.on_highscore(self.model.highscore)
        self.loop   = LoopController(self.model, self._render, self.settings.speed)
        self._drag_start = None

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        logger.info("Neon Snake: grid %d, speed %g, highscore %d",
                    self.settings.grid_size, self.loop.speed, self.model.highscore)
        while True:
            self.clock.tick(self.settings.fps)
            self._handle_events()
            self.loop.frame(pygame.time.get_ticks())

    def _render(self, model: GameModel) -> None:
        self.view.render(model, speed=self.loop.speed)
        pygame.display.flip()

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._drag_start = event.pos
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._handle_drag_end(event.pos)

    def _handle_keydown(self, key: int) -> None:
        if key in QUIT_KEYS:
            self._quit()
        command = KEY_COMMANDS.get(key)
        if command is not None:
            self.loop.commands.push(command)

    def _handle_drag_end(self, pos: tuple[int, int]) -> None:
        if self._drag_start is None:
            return
        dx = pos[0] - self._drag_start[0]
        dy = pos[1] - self._drag_start[1]
        self._drag_start = None
        command = swipe_to_command(dx, dy)
        if command is not None:
            self.loop.commands.push(command)

    # ── Utilities ─────────────────────────────────────────────────
    @staticmethod
    def _quit() -> None:
        pygame.quit()
        sys.exit()
