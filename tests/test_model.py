import random
from collections import deque

import pytest

from neon_snake.config import (
    INITIAL_GROWTH, STATE_IDLE, STATE_RUNNING, STATE_PAUSED, STATE_OVER,
)
from neon_snake.model import (
    ALL_DIRS, Direction, GameModel, Snake, in_bounds, place_apple,
)
from neon_snake.storage import MemoryHighScoreStore


class FixedRng:
    """Always samples the top-left cell."""

    def randrange(self, n):
        return 0


def running(model, body=None, velocity=Direction.RIGHT, growth=None):
    model.start()
    if body is not None:
        model.snake.body = deque(body)
    model.snake.velocity = velocity
    if growth is not None:
        model.snake.growth = growth
    return model


# ── Grid ─────────────────────────────────────────────────────────
@pytest.mark.parametrize("cell, expected", [
    ((0, 0), True),
    ((23, 23), True),
    ((24, 0), False),
    ((0, 24), False),
    ((-1, 5), False),
    ((5, -1), False),
])
def test_in_bounds(cell, expected):
    assert in_bounds(cell, 24) is expected


# ── Direction ────────────────────────────────────────────────────
def test_direction_opposites():
    assert Direction.LEFT.is_opposite(Direction.RIGHT)
    assert Direction.UP.is_opposite(Direction.DOWN)
    assert not Direction.UP.is_opposite(Direction.LEFT)
    assert not Direction.NONE.is_opposite(Direction.NONE)
    assert not Direction.LEFT.is_opposite(Direction.NONE)


def test_snake_rejects_reversal():
    snake = Snake(5, 5)
    assert snake.request_direction(Direction.RIGHT)
    assert not snake.request_direction(Direction.LEFT)
    assert snake.velocity == Direction.RIGHT
    assert snake.request_direction(Direction.UP)
    assert snake.velocity == Direction.UP


# ── Apple placement ──────────────────────────────────────────────
def test_place_apple_avoids_occupied():
    rng = random.Random(7)
    occupied = {(x, y) for x in range(24) for y in range(12)}
    for _ in range(50):
        cell = place_apple(occupied, 24, anchor=(0, 0), rng=rng)
        assert cell not in occupied
        assert in_bounds(cell, 24)


def test_place_apple_single_free_cell():
    free = (7, 3)
    occupied = {(x, y) for x in range(24) for y in range(24)} - {free}
    assert place_apple(occupied, 24, anchor=(12, 12), rng=random.Random(0)) == free


def test_place_apple_fallback_uses_head_offset():
    occupied = {(0, 0)}
    assert place_apple(occupied, 24, anchor=(10, 10), rng=FixedRng()) == (15, 13)


def test_place_apple_fallback_wraps_around_grid():
    occupied = {(0, 0)}
    assert place_apple(occupied, 24, anchor=(21, 22), rng=FixedRng()) == (2, 1)


def test_place_apple_fallback_scans_past_occupied_offset():
    occupied = {(0, 0), (15, 13), (16, 13)}
    assert place_apple(occupied, 24, anchor=(10, 10), rng=FixedRng()) == (17, 13)


def test_place_apple_full_board_returns_offset_cell():
    occupied = {(x, y) for x in range(3) for y in range(3)}
    assert place_apple(occupied, 3, anchor=(0, 0), rng=random.Random(0)) == (2, 0)


# ── Lifecycle ────────────────────────────────────────────────────
def test_new_model_is_idle_at_center(model):
    assert model.state == STATE_IDLE
    assert list(model.snake.body) == [(12, 12)]
    assert model.snake.velocity == Direction.NONE
    assert model.snake.growth == INITIAL_GROWTH
    assert model.score == 0
    assert model.apple not in model.snake.body


def test_start_seeds_rightward_velocity(model):
    model.start()
    assert model.state == STATE_RUNNING
    assert model.snake.velocity == Direction.RIGHT


def test_tick_does_nothing_unless_running(model):
    model.tick()
    assert list(model.snake.body) == [(12, 12)]
    model.start()
    model.pause()
    model.tick()
    assert list(model.snake.body) == [(12, 12)]


def test_toggle_pause_cycles(model):
    model.toggle_pause()
    assert model.state == STATE_RUNNING
    model.toggle_pause()
    assert model.state == STATE_PAUSED
    model.toggle_pause()
    assert model.state == STATE_RUNNING


def test_steer_from_idle_starts_and_turns(model):
    assert model.steer(Direction.UP)
    assert model.state == STATE_RUNNING
    assert model.snake.velocity == Direction.UP


def test_steer_from_idle_cannot_reverse_seeded_velocity(model):
    assert not model.steer(Direction.LEFT)
    assert model.state == STATE_RUNNING
    assert model.snake.velocity == Direction.RIGHT


def test_steer_resumes_paused_game(model):
    model.start()
    model.pause()
    model.steer(Direction.DOWN)
    assert model.state == STATE_RUNNING
    assert model.snake.velocity == Direction.DOWN


def test_opposite_direction_is_noop_while_running(model):
    running(model, velocity=Direction.UP)
    assert not model.steer(Direction.DOWN)
    assert model.snake.velocity == Direction.UP


def test_steer_ignored_after_game_over(model):
    running(model, body=[(23, 12)])
    model.tick()
    assert model.state == STATE_OVER
    assert not model.steer(Direction.UP)
    assert model.state == STATE_OVER


# ── Ticks ────────────────────────────────────────────────────────
def test_plain_move_trims_to_growth(model):
    model.apple = (0, 0)
    running(model, body=[(12, 12), (11, 12), (10, 12)])
    model.tick()
    assert list(model.snake.body) == [(13, 12), (12, 12), (11, 12)]


def test_snake_grows_up_to_target(model):
    model.apple = (0, 0)
    running(model)
    model.tick()
    model.tick()
    assert len(model.snake) == 3
    model.tick()
    assert len(model.snake) == 3
    assert model.snake.head == (15, 12)


def test_eating_apple(model, recorder):
    running(model, body=[(12, 12)], growth=3)
    model.apple = (13, 12)
    model.tick()
    assert model.snake.growth == 4
    assert model.score == 1
    assert list(model.snake.body) == [(13, 12), (12, 12)]
    assert model.apple not in {(13, 12), (12, 12)}
    assert recorder.scores == [1]
    assert len(model.particles) == 18


def test_boundary_collision_ends_game(model, recorder):
    running(model, body=[(23, 12), (22, 12)])
    model.tick()
    assert model.state == STATE_OVER
    assert list(model.snake.body) == [(23, 12), (22, 12)]
    assert recorder.game_overs == [(0, 0)]


@pytest.mark.parametrize("head, velocity", [
    ((0, 5), Direction.LEFT),
    ((5, 0), Direction.UP),
    ((5, 23), Direction.DOWN),
])
def test_every_wall_is_fatal(model, head, velocity):
    running(model, body=[head], velocity=velocity)
    model.tick()
    assert model.state == STATE_OVER
    assert list(model.snake.body) == [head]


def test_self_collision_ends_game(model, recorder):
    body = [(10, 10), (9, 10), (8, 10), (9, 11)]
    running(model, body=body, velocity=Direction.LEFT, growth=4)
    model.tick()
    assert model.state == STATE_OVER
    assert list(model.snake.body) == body
    assert len(recorder.game_overs) == 1


def test_moving_onto_current_tail_is_a_collision(model):
    body = [(5, 5), (6, 5), (6, 6), (5, 6)]
    running(model, body=body, velocity=Direction.DOWN, growth=4)
    model.tick()
    assert model.state == STATE_OVER
    assert list(model.snake.body) == body


def test_game_over_reports_final_score_and_highscore(recorder):
    model = GameModel(store=MemoryHighScoreStore(9), rng=random.Random(3))
    model.add_listener(recorder)
    running(model, body=[(23, 0)])
    model.score = 4
    model.tick()
    assert recorder.game_overs == [(4, 9)]


# ── Score & highscore ────────────────────────────────────────────
def test_highscore_loaded_from_store():
    model = GameModel(store=MemoryHighScoreStore(42))
    assert model.highscore == 42


def test_new_record_is_saved(store, model, recorder):
    running(model, body=[(12, 12)])
    model.apple = (13, 12)
    model.tick()
    assert model.highscore == 1
    assert store.value == 1
    assert recorder.highscores == [1]


def test_score_below_record_is_not_saved(recorder):
    store = MemoryHighScoreStore(5)
    model = GameModel(store=store, rng=random.Random(5))
    model.add_listener(recorder)
    running(model, body=[(12, 12)])
    model.apple = (13, 12)
    model.tick()
    assert model.score == 1
    assert store.value == 5
    assert recorder.highscores == []


# ── Restart ──────────────────────────────────────────────────────
def test_restart_resets_round(model, recorder):
    running(model, body=[(12, 12)])
    model.apple = (13, 12)
    model.tick()
    model.snake.body = deque([(23, 12)])
    model.tick()
    assert model.state == STATE_OVER

    model.restart()
    assert model.state == STATE_IDLE
    assert list(model.snake.body) == [(12, 12)]
    assert model.snake.velocity == Direction.NONE
    assert model.snake.growth == INITIAL_GROWTH
    assert model.score == 0
    assert len(model.particles) == 0
    assert recorder.scores[-1] == 0
    assert model.highscore == 1


def test_start_after_game_over_restarts(model):
    running(model, body=[(23, 12)])
    model.tick()
    model.start()
    assert model.state == STATE_RUNNING
    assert list(model.snake.body) == [(12, 12)]
    assert model.snake.velocity == Direction.RIGHT


# ── Invariants over random play ──────────────────────────────────
def test_random_play_keeps_invariants():
    rng = random.Random(99)
    model = GameModel(grid_size=10, rng=random.Random(100))
    model.start()
    growth = model.snake.growth
    rounds = 0
    for _ in range(3000):
        if rng.random() < 0.3:
            model.steer(rng.choice(ALL_DIRS))
        before = list(model.snake.body)
        model.tick()
        snake = model.snake
        if model.state == STATE_OVER:
            assert list(snake.body) == before
            rounds += 1
            model.restart()
            model.start()
            growth = model.snake.growth
            continue
        assert all(in_bounds(cell, 10) for cell in snake.body)
        assert len(snake.body) <= snake.growth
        assert len(set(snake.body)) == len(snake.body)
        assert snake.growth >= growth
        growth = snake.growth
        assert model.apple not in snake.body
    assert rounds > 0


def test_direction_compares_by_value():
    assert Direction(1, 0) == Direction.RIGHT
    assert Direction(0, -1) in ALL_DIRS
    assert Direction(0, 1) != Direction.UP
