"""
commands.py — Normalised input.

Keyboard keys, mouse drags and touch swipes all end up as Command values in
a CommandQueue. The loop controller drains the queue once per frame, before
the simulation tick, so input capture never touches game state directly.
"""

from collections import deque
from enum import Enum

from .model import Direction

SWIPE_THRESHOLD = 20   # pixels


class Command(Enum):
    UP      = "up"
    DOWN    = "down"
    LEFT    = "left"
    RIGHT   = "right"
    START   = "start"
    PAUSE   = "pause"      # toggles pause / resume
    RESTART = "restart"
    FASTER  = "faster"
    SLOWER  = "slower"

    @property
    def direction(self) -> Direction:
        """The Direction a steering command maps to, else None."""
        return DIRECTIONS.get(self)


DIRECTIONS = {
    Command.UP:    Direction.UP,
    Command.DOWN:  Direction.DOWN,
    Command.LEFT:  Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
}


class CommandQueue:
    """FIFO of pending commands, filled by input handlers."""

    def __init__(self):
        self._pending: deque[Command] = deque()

    def __len__(self) -> int:
        return len(self._pending)

    def push(self, command: Command) -> None:
        self._pending.append(command)

    def drain(self):
        """Yield and remove every queued command in arrival order."""
        while self._pending:
            yield self._pending.popleft()


def swipe_to_command(dx: float, dy: float, threshold: float = SWIPE_THRESHOLD):
    """
    Turn a drag vector into a steering command.
    The dominant axis wins; drags shorter than `threshold` return None.
    """
    if abs(dx) > abs(dy):
        if dx > threshold:
            return Command.RIGHT
        if dx < -threshold:
            return Command.LEFT
    else:
        if dy > threshold:
            return Command.DOWN
        if dy < -threshold:
            return Command.UP
    return None
