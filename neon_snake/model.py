"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling.
Exposes a clean API for the loop controller to read/write.

Classes:
    Direction     — immutable (dx, dy) value object
    Snake         — body, velocity, growth target
    GameListener  — no-op base for score / game-over observers
    GameModel     — top-level model; owns the snake, apple, score, particles
"""

import logging
import random
from collections import deque

from .config import (
    GRID_SIZE, INITIAL_GROWTH, APPLE_REWARD, APPLE_ATTEMPTS, APPLE_FALLBACK,
    PARTICLE_APPLE_COUNT, CANVAS,
    STATE_IDLE, STATE_RUNNING, STATE_PAUSED, STATE_OVER,
)
from .particles import ParticleSystem
from .storage import MemoryHighScoreStore

logger = logging.getLogger(__name__)


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction (or the zero velocity)."""
    NONE  = None  # filled below after class definition
    LEFT  = None
    RIGHT = None
    UP    = None
    DOWN  = None

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    @property
    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def is_opposite(self, other: "Direction") -> bool:
        if self.is_zero or other.is_zero:
            return False
        return self.x == -other.x and self.y == -other.y

    def copy(self) -> "Direction":
        return Direction(self.x, self.y)

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __repr__(self):
        return f"Direction({self.x}, {self.y})"


Direction.NONE  = Direction( 0,  0)
Direction.LEFT  = Direction(-1,  0)
Direction.RIGHT = Direction( 1,  0)
Direction.UP    = Direction( 0, -1)
Direction.DOWN  = Direction( 0,  1)
ALL_DIRS = [Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP]


# ──────────────────────────── Grid ───────────────────────────────
def in_bounds(cell: tuple[int, int], grid_size: int = GRID_SIZE) -> bool:
    x, y = cell
    return 0 <= x < grid_size and 0 <= y < grid_size


def place_apple(
    occupied,
    grid_size: int = GRID_SIZE,
    anchor: tuple[int, int] = None,
    rng: random.Random = None,
) -> tuple[int, int]:
    """
    Pick a random cell that is not in `occupied`.

    After APPLE_ATTEMPTS rejected samples, fall back to a fixed offset from
    `anchor` (the snake head), scanning forward row by row from there until
    a free cell turns up. On a completely full board the offset cell itself
    is returned.
    """
    rng = rng or random
    occupied = set(occupied)
    for _ in range(APPLE_ATTEMPTS):
        pos = (rng.randrange(grid_size), rng.randrange(grid_size))
        if pos not in occupied:
            return pos

    if anchor is None:
        anchor = (grid_size // 2, grid_size // 2)
    fx = (anchor[0] + APPLE_FALLBACK[0]) % grid_size
    fy = (anchor[1] + APPLE_FALLBACK[1]) % grid_size
    start = fy * grid_size + fx
    total = grid_size * grid_size
    for i in range(total):
        idx = (start + i) % total
        pos = (idx % grid_size, idx // grid_size)
        if pos not in occupied:
            logger.debug("Apple placement fell back to %s after %d samples",
                         pos, APPLE_ATTEMPTS)
            return pos
    logger.debug("Board is full; apple placed on %s", (fx, fy))
    return fx, fy


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Pure game data for the snake.
    No rendering. No input handling.
    """

    def __init__(self, start_x: int, start_y: int, growth: int = INITIAL_GROWTH):
        self.body: deque[tuple[int, int]] = deque([(start_x, start_y)])
        self.velocity: Direction = Direction.NONE
        self.growth: int = growth

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> tuple[int, int]:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    # ── Commands ─────────────────────────────────────────────────
    def request_direction(self, new_dir: Direction) -> bool:
        """Change velocity now; refused if it would reverse the snake."""
        if new_dir.is_opposite(self.velocity):
            return False
        self.velocity = new_dir.copy()
        return True

    def next_head(self) -> tuple[int, int]:
        hx, hy = self.head
        return hx + self.velocity.x, hy + self.velocity.y

    def push_head(self, cell: tuple[int, int]) -> None:
        self.body.appendleft(cell)

    def trim(self) -> None:
        while len(self.body) > self.growth:
            self.body.pop()

    # ── Queries ──────────────────────────────────────────────────
    def occupies(self, cell: tuple[int, int]) -> bool:
        return cell in self.body


# ───────────────────────── GameListener ──────────────────────────
class GameListener:
    """Score sink. Override whichever hooks you care about."""

    def on_score(self, score: int) -> None:
        pass

    def on_highscore(self, highscore: int) -> None:
        pass

    def on_game_over(self, score: int, highscore: int) -> None:
        pass


# ─────────────────────────── GameModel ───────────────────────────
class GameModel:
    """
    Top-level model.  Owns all game state.
    The loop controller calls tick() once per simulation step.
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        store=None,
        rng: random.Random = None,
        tile_size: int = None,
    ):
        self.grid_size = grid_size
        self.rng = rng or random.Random()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.highscore: int = self.store.load()
        self.listeners: list[GameListener] = []
        self.particles = ParticleSystem(tile_size or CANVAS // grid_size, rng=self.rng)

        self.state: str = STATE_IDLE
        self.score: int = 0
        self.ticks: int = 0
        self.snake: Snake = None
        self.apple: tuple[int, int] = (0, 0)
        self._reset_entities()

    # ── Listeners ────────────────────────────────────────────────
    def add_listener(self, listener: GameListener) -> None:
        self.listeners.append(listener)

    def _emit(self, hook: str, *args) -> None:
        for listener in self.listeners:
            getattr(listener, hook)(*args)

    # ── Public API ───────────────────────────────────────────────
    @property
    def start_cell(self) -> tuple[int, int]:
        return self.grid_size // 2, self.grid_size // 2

    def start(self) -> None:
        """Idle/Paused → Running; a finished round is restarted first."""
        if self.state == STATE_OVER:
            self.restart()
        if self.state == STATE_RUNNING:
            return
        if self.snake.velocity.is_zero:
            self.snake.velocity = Direction.RIGHT.copy()
        if self.state == STATE_IDLE:
            logger.info("Round started (highscore %d)", self.highscore)
        self.state = STATE_RUNNING

    def pause(self) -> None:
        if self.state == STATE_RUNNING:
            self.state = STATE_PAUSED

    def resume(self) -> None:
        if self.state == STATE_PAUSED:
            self.start()

    def toggle_pause(self) -> None:
        if self.state == STATE_RUNNING:
            self.pause()
        elif self.state == STATE_PAUSED:
            self.resume()
        elif self.state == STATE_IDLE:
            self.start()

    def steer(self, direction: Direction) -> bool:
        """Directional input: wakes an idle or paused game, then turns."""
        if self.state == STATE_OVER:
            return False
        self.start()
        return self.snake.request_direction(direction)

    def restart(self) -> None:
        self._reset_entities()
        self.state = STATE_IDLE
        self._emit("on_score", self.score)

    def tick(self) -> None:
        """Advance the snake by one cell. Only acts while running."""
        if self.state != STATE_RUNNING:
            return
        self.ticks += 1
        snake = self.snake
        head = snake.next_head()

        # Checked against the body before the tail moves: stepping onto the
        # current tail cell counts as a collision.
        if not in_bounds(head, self.grid_size) or snake.occupies(head):
            self._game_over()
            return

        snake.push_head(head)

        if head == self.apple:
            snake.growth += 1
            self._add_score(APPLE_REWARD)
            self.apple = self._spawn_apple()
            self.particles.spawn(head, PARTICLE_APPLE_COUNT)

        snake.trim()

    # ── Private helpers ──────────────────────────────────────────
    def _reset_entities(self) -> None:
        self.snake = Snake(*self.start_cell)
        self.score = 0
        self.ticks = 0
        self.apple = self._spawn_apple()
        self.particles.clear()

    def _spawn_apple(self) -> tuple[int, int]:
        return place_apple(self.snake.body, self.grid_size,
                           anchor=self.snake.head, rng=self.rng)

    def _add_score(self, delta: int) -> None:
        self.score += delta
        self._emit("on_score", self.score)
        if self.score > self.highscore:
            self.highscore = self.score
            self.store.save(self.highscore)
            self._emit("on_highscore", self.highscore)

    def _game_over(self) -> None:
        self.state = STATE_OVER
        logger.info("Game over: score %d, highscore %d", self.score, self.highscore)
        self._emit("on_game_over", self.score, self.highscore)
