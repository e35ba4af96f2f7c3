"""
loop.py — Frame/tick timing.

The LoopController is called once per frame with the current time in
milliseconds. Per frame it:
  1. applies every queued command to the model,
  2. runs at most one simulation tick, when the tick interval has elapsed,
  3. advances particles while the game is running,
  4. renders, always.

Starting or resuming resets the last-tick timestamp so a long pause does
not turn into an immediate tick.
"""

import logging

from .commands import Command, CommandQueue
from .config import SPEED_DEFAULT, STATE_RUNNING
from .model import GameModel
from .settings import clamp_speed

logger = logging.getLogger(__name__)


class LoopController:
    def __init__(self, model: GameModel, render, speed: float = SPEED_DEFAULT):
        self.model = model
        self.render = render
        self.commands = CommandQueue()
        self.speed: float = clamp_speed(speed)
        self.last_tick: float = 0.0

    # ── Timing ───────────────────────────────────────────────────
    @property
    def interval(self) -> float:
        """Milliseconds between ticks."""
        return 1000.0 / self.speed

    @property
    def armed(self) -> bool:
        """True while ticks are being scheduled."""
        return self.model.state == STATE_RUNNING

    def set_speed(self, speed: float) -> None:
        self.speed = clamp_speed(speed)
        logger.debug("Speed set to %.1f ticks/s (%.1f ms)", self.speed, self.interval)

    def faster(self) -> None:
        self.set_speed(self.speed + 1)

    def slower(self) -> None:
        self.set_speed(self.speed - 1)

    # ── Frame ────────────────────────────────────────────────────
    def frame(self, now: float) -> bool:
        """Run one frame. Returns True if a simulation tick happened."""
        self._apply_commands(now)

        ticked = False
        running = self.armed
        if running and now - self.last_tick >= self.interval:
            self.last_tick = now
            self.model.tick()
            ticked = True
        if running:
            self.model.particles.advance()

        self.render(self.model)
        return ticked

    def _apply_commands(self, now: float) -> None:
        for command in self.commands.drain():
            was_running = self.armed
            self._dispatch(command)
            if self.armed and not was_running:
                self.last_tick = now

    def _dispatch(self, command: Command) -> None:
        model = self.model
        if command.direction is not None:
            model.steer(command.direction)
        elif command is Command.START:
            model.start()
        elif command is Command.PAUSE:
            model.toggle_pause()
        elif command is Command.RESTART:
            model.restart()
        elif command is Command.FASTER:
            self.faster()
        elif command is Command.SLOWER:
            self.slower()
