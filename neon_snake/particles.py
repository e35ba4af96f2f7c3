"""
particles.py — Cosmetic particle bursts.

Particles live in pixel space, are advanced once per rendered frame and
never feed back into the game rules.

Classes:
    Particle        — position, velocity, life, size and hue of one spark
    ParticleSystem  — owns every live particle; spawn / advance / clear
"""

import math
import random

from .config import (
    PARTICLE_APPLE_COUNT, PARTICLE_SPEED, PARTICLE_LIFE, PARTICLE_SIZE,
    PARTICLE_HUE, PARTICLE_FRICTION, PARTICLE_DECAY, PARTICLE_MAX_LIFE,
)


# ─────────────────────────── Particle ────────────────────────────
class Particle:
    """Visual-only data; updated by the particle system, rendered by the view."""

    def __init__(self, x: float, y: float, rng: random.Random):
        angle = rng.uniform(0, math.tau)
        speed = rng.uniform(*PARTICLE_SPEED)
        self.x = x
        self.y = y
        self.vx = math.cos(angle) * speed
        self.vy = math.sin(angle) * speed
        self.life: float = rng.uniform(*PARTICLE_LIFE)
        self.size: float = rng.uniform(*PARTICLE_SIZE)
        self.hue: float = rng.uniform(*PARTICLE_HUE)

    @property
    def alive(self) -> bool:
        return self.life > 0

    @property
    def fraction(self) -> float:
        """Remaining life in [0, 1]; drives alpha and radius when drawn."""
        return max(0.0, min(1.0, self.life / PARTICLE_MAX_LIFE))

    def update(self) -> None:
        self.x  += self.vx
        self.y  += self.vy
        self.vx *= PARTICLE_FRICTION
        self.vy *= PARTICLE_FRICTION
        self.life -= PARTICLE_DECAY


# ──────────────────────── ParticleSystem ─────────────────────────
class ParticleSystem:
    """Every live particle, plus the grid → pixel mapping for bursts."""

    def __init__(self, tile_size: int, rng: random.Random = None):
        self.tile_size = tile_size
        self.rng = rng or random.Random()
        self.particles: list[Particle] = []

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def spawn(self, cell: tuple[int, int], count: int = PARTICLE_APPLE_COUNT) -> None:
        """Burst `count` particles from the pixel centre of `cell`."""
        cx = cell[0] * self.tile_size + self.tile_size / 2
        cy = cell[1] * self.tile_size + self.tile_size / 2
        for _ in range(count):
            self.particles.append(Particle(cx, cy, self.rng))

    def advance(self) -> None:
        for p in self.particles:
            p.update()
        self.particles = [p for p in self.particles if p.alive]

    def clear(self) -> None:
        self.particles = []
