"""
view.py — View layer.

Draws one frame from the model, back to front:
  - Pre-rendered background gradient and grid (built once, blitted every frame)
  - Apple with a layered glow halo, rounded body, leaf and highlight
  - Snake tail-to-head, brightening towards the head, with a head outline
  - Particles, faded and shrunk by remaining life
  - Pink flash for a few frames after a game over
  - HUD panel (score, best, speed) and idle / paused / game-over overlays

The view is also the score sink: the model reports score, highscore and
game-over through the GameListener hooks.

Public API:
    GameView(screen, grid_size)      — bind to a pygame surface
    view.render(model, speed=None)   — draw the current frame (no flip)
"""

import math
import pygame

from .config import (
    WIDTH, PANEL_H, CANVAS, OFFSET_X, OFFSET_Y, GRID_SIZE,
    BG_TOP, BG_BOTTOM, GRID_COL, APPLE_COL, APPLE_GLOW, LEAF_COL, SHINE_COL,
    FLASH_COL, UI_COL, ACCENT_COL, PANEL_BG, BORDER_COL, FLASH_FRAMES,
    STATE_IDLE, STATE_PAUSED, STATE_OVER,
)
from .model import GameListener, GameModel, Snake
from .particles import ParticleSystem


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def segment_color(index: int, length: int) -> tuple:
    """Body colour for segment `index` (0 = head) of a snake of `length`."""
    t = index / max(1, length - 1)
    r = int(120 + (1 - t) * 135)
    g = int(255 - (1 - t) * 60)
    b = int(200 + t * 40)
    return r, g, b


def particle_color(hue: float, fraction: float) -> tuple:
    c = pygame.Color(0, 0, 0)
    c.hsla = (hue % 360, 90, 60, 100)
    return c.r, c.g, c.b, int(255 * max(0.0, min(1.0, fraction)))


# ─────────────────────────── GameView ────────────────────────────
class GameView(GameListener):
    """Renders the complete game frame from a GameModel snapshot."""

    # ── Construction ─────────────────────────────────────────────
    def __init__(self, screen: pygame.Surface, grid_size: int = GRID_SIZE):
        self.screen = screen
        self.grid_size = grid_size
        self.tile = CANVAS // grid_size
        self._init_fonts()
        self._build_static_surfaces()

        # Score sink state
        self.score: int = 0
        self.highscore: int = 0
        self.final: tuple[int, int] = (0, 0)
        self._disp_score: float = 0.0

        self._flash: int = 0
        self._anim_tick: int = 0

    # ── GameListener hooks ───────────────────────────────────────
    def on_score(self, score: int) -> None:
        self.score = score
        if score == 0:
            self._disp_score = 0.0

    def on_highscore(self, highscore: int) -> None:
        self.highscore = highscore

    def on_game_over(self, score: int, highscore: int) -> None:
        self.final = (score, highscore)
        self._flash = FLASH_FRAMES

    # ── Main entry ───────────────────────────────────────────────
    def render(self, model: GameModel, speed: float = None) -> None:
        self._anim_tick += 1
        self.highscore = max(self.highscore, model.highscore)
        self._disp_score += (self.score - self._disp_score) * 0.25

        # ── Base layers
        self.screen.fill(BG_BOTTOM)
        self.screen.blit(self._bg_surf, (OFFSET_X, OFFSET_Y))
        self.screen.blit(self._grid_surf, (OFFSET_X, OFFSET_Y))

        # ── Game content
        self._draw_apple(model.apple)
        self._draw_snake(model.snake)
        self._draw_particles(model.particles)
        self._draw_flash()

        # ── Chrome
        self._draw_panel(model, speed)

        # ── State overlays
        if model.state == STATE_IDLE:
            self._draw_idle_overlay()
        elif model.state == STATE_PAUSED:
            self._draw_paused_overlay()
        elif model.state == STATE_OVER:
            self._draw_game_over_overlay()

    # ── Geometry ─────────────────────────────────────────────────
    def cell_origin(self, cell: tuple[int, int]) -> tuple[int, int]:
        return OFFSET_X + cell[0] * self.tile, OFFSET_Y + cell[1] * self.tile

    def cell_center(self, cell: tuple[int, int]) -> tuple[int, int]:
        x, y = self.cell_origin(cell)
        return x + self.tile // 2, y + self.tile // 2

    # ── Static surface pre-builds ─────────────────────────────────
    def _build_static_surfaces(self) -> None:
        # Diagonal-ish dark gradient, approximated top to bottom
        self._bg_surf = pygame.Surface((CANVAS, CANVAS))
        for y in range(CANVAS):
            pygame.draw.line(self._bg_surf, _lerp_color(BG_TOP, BG_BOTTOM, y / CANVAS),
                             (0, y), (CANVAS, y))

        # Grid (drawn once, very faint)
        self._grid_surf = pygame.Surface((CANVAS, CANVAS), pygame.SRCALPHA)
        span = self.tile * self.grid_size
        for i in range(self.grid_size + 1):
            pos = i * self.tile
            pygame.draw.line(self._grid_surf, _with_alpha(GRID_COL, 15), (pos, 0), (pos, span))
            pygame.draw.line(self._grid_surf, _with_alpha(GRID_COL, 15), (0, pos), (span, pos))

    # ── Apple ────────────────────────────────────────────────────
    def _draw_apple(self, apple: tuple[int, int]) -> None:
        tile = self.tile
        x, y = self.cell_center(apple)
        ox, oy = self.cell_origin(apple)
        r = tile * 0.38

        # Layered outer glow
        glow_r = max(2, int(r * 1.2))
        inner = max(1, int(r * 0.1))
        glow = pygame.Surface((glow_r * 2, glow_r * 2), pygame.SRCALPHA)
        for gr in range(glow_r, inner, -1):
            a = int(240 * (1 - (gr - inner) / (glow_r - inner)) ** 1.5 + 5)
            pygame.draw.circle(glow, _with_alpha(APPLE_GLOW, a), (glow_r, glow_r), gr)
        self.screen.blit(glow, (x - glow_r, y - glow_r))

        # Body
        body = pygame.Rect(ox + int(tile * 0.12), oy + int(tile * 0.12),
                           int(tile * 0.76), int(tile * 0.76))
        pygame.draw.rect(self.screen, APPLE_COL, body, border_radius=max(1, int(tile * 0.14)))

        # Leaf, tilted
        lw, lh = max(2, int(r * 0.68)), max(1, int(r * 0.36))
        leaf = pygame.Surface((lw, lh), pygame.SRCALPHA)
        pygame.draw.ellipse(leaf, LEAF_COL, leaf.get_rect())
        leaf = pygame.transform.rotate(leaf, math.degrees(0.6))
        self.screen.blit(leaf, leaf.get_rect(center=(int(x + r * 0.18), int(y - r * 0.6))))

        # Shine
        sw, sh = max(2, int(r * 0.26)), max(1, int(r * 0.16))
        shine = pygame.Surface((sw, sh), pygame.SRCALPHA)
        pygame.draw.ellipse(shine, _with_alpha(SHINE_COL, 153), shine.get_rect())
        self.screen.blit(shine, shine.get_rect(center=(int(x - r * 0.25), int(y - r * 0.15))))

    # ── Snake body ───────────────────────────────────────────────
    def _draw_snake(self, snake: Snake) -> None:
        if not snake.body:
            return
        tile = self.tile
        inset = int(tile * 0.08)
        size = int(tile * 0.84)
        radius = max(1, int(tile * 0.18))
        length = len(snake.body)

        self._draw_head_glow(snake.head)
        for i in range(length - 1, -1, -1):
            ox, oy = self.cell_origin(snake.body[i])
            rect = pygame.Rect(ox + inset, oy + inset, size, size)
            pygame.draw.rect(self.screen, segment_color(i, length), rect, border_radius=radius)

        # Head accent
        hx, hy = self.cell_origin(snake.head)
        outline = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.rect(outline, _with_alpha(SHINE_COL, 89), outline.get_rect(),
                         max(2, int(tile * 0.06)))
        self.screen.blit(outline, (hx + inset, hy + inset))

    def _draw_head_glow(self, head: tuple[int, int]) -> None:
        """Soft cyan glow around the head, drawn under the body (additive)."""
        cx, cy = self.cell_center(head)
        glow_size = self.tile
        glow = pygame.Surface((glow_size * 2, glow_size * 2))
        for gr in range(glow_size, 0, -2):
            k = 0.2 * (1 - gr / glow_size) ** 0.6
            pygame.draw.circle(glow, tuple(int(c * k) for c in ACCENT_COL),
                               (glow_size, glow_size), gr)
        self.screen.blit(glow, (cx - glow_size, cy - glow_size),
                         special_flags=pygame.BLEND_RGB_ADD)

    # ── Particles ────────────────────────────────────────────────
    def _draw_particles(self, particles: ParticleSystem) -> None:
        for p in particles:
            radius = p.size * p.fraction
            if radius < 0.5:
                continue
            color = particle_color(p.hue, p.fraction)
            d = int(radius * 2) + 2
            s = pygame.Surface((d, d), pygame.SRCALPHA)
            pygame.draw.circle(s, color, (d // 2, d // 2), max(1, int(radius)))
            self.screen.blit(s, (OFFSET_X + int(p.x) - d // 2, OFFSET_Y + int(p.y) - d // 2))

    def _draw_flash(self) -> None:
        if self._flash <= 0:
            return
        t = FLASH_FRAMES - self._flash
        alpha = int(255 * 0.9 * (1 - t / FLASH_FRAMES))
        surf = pygame.Surface((CANVAS, CANVAS), pygame.SRCALPHA)
        surf.fill(_with_alpha(FLASH_COL, alpha))
        self.screen.blit(surf, (OFFSET_X, OFFSET_Y))
        self._flash -= 1

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, model: GameModel, speed: float) -> None:
        pygame.draw.rect(self.screen, PANEL_BG, (0, 0, WIDTH, PANEL_H))
        pygame.draw.line(self.screen, BORDER_COL,
                         (0, PANEL_H - 1), (WIDTH, PANEL_H - 1), 1)

        self.screen.blit(self.font_small.render("SCORE", True, UI_COL), (16, 6))
        self.screen.blit(
            self.font_big.render(str(round(self._disp_score)), True, ACCENT_COL),
            (16, 24),
        )

        best = self.font_small.render("BEST", True, UI_COL)
        self.screen.blit(best, best.get_rect(topright=(WIDTH - 16, 6)))
        hs = self.font_big.render(str(self.highscore), True, APPLE_COL)
        self.screen.blit(hs, hs.get_rect(topright=(WIDTH - 16, 24)))

        if speed is not None:
            label = self.font_small.render(f"SPEED {speed:g}", True, UI_COL)
            self.screen.blit(label, label.get_rect(center=(WIDTH // 2, 22)))
        if model.state == STATE_PAUSED:
            badge = self.font_tiny.render("[ PAUSED ]", True, ACCENT_COL)
            self.screen.blit(badge, badge.get_rect(center=(WIDTH // 2, 44)))

    # ── Overlay infrastructure ────────────────────────────────────
    def _draw_overlay_base(self) -> None:
        surf = pygame.Surface((CANVAS, CANVAS), pygame.SRCALPHA)
        surf.fill((0, 8, 12, 200))
        self.screen.blit(surf, (OFFSET_X, OFFSET_Y))

    def _draw_animated_title(self, title: str, color: tuple, cy: int) -> int:
        pulse = 0.82 + 0.18 * math.sin(self._anim_tick * 0.05)
        bright = tuple(min(255, int(c * pulse)) for c in color)
        surf = self.font_title.render(title, True, bright)
        gw, gh = surf.get_width() + 50, surf.get_height() + 16
        glow = pygame.Surface((gw, gh), pygame.SRCALPHA)
        glow.fill(_with_alpha(color, int(35 * pulse)))
        self.screen.blit(glow, (WIDTH // 2 - gw // 2, cy - 8))
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy + surf.get_height() // 2)))
        return cy + surf.get_height() + 14

    def _draw_text_line(self, text: str, color: tuple, cy: int, font: pygame.font.Font) -> int:
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy)))
        return cy + surf.get_height() + 8

    def _draw_controls_hint(self, cy: int) -> None:
        hints = [("ARROWS/WASD", "MOVE"), ("SPACE/P", "PAUSE"), ("R", "RESTART"), ("+ / -", "SPEED")]
        col_w = 150
        sx = WIDTH // 2 - (len(hints) * col_w) // 2
        for i, (key, action) in enumerate(hints):
            x = sx + i * col_w + col_w // 2
            k_surf = self.font_tiny.render(key, True, (200, 255, 245))
            a_surf = self.font_tiny.render(action, True, UI_COL)
            kw = k_surf.get_width() + 12
            kh = k_surf.get_height() + 4
            pygame.draw.rect(self.screen, (10, 40, 48), (x - kw // 2, cy, kw, kh), border_radius=3)
            pygame.draw.rect(self.screen, BORDER_COL, (x - kw // 2, cy, kw, kh), 1, border_radius=3)
            self.screen.blit(k_surf, k_surf.get_rect(center=(x, cy + kh // 2)))
            self.screen.blit(a_surf, a_surf.get_rect(center=(x, cy + kh + 10)))

    # ── State overlays ────────────────────────────────────────────
    def _draw_idle_overlay(self) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + CANVAS // 2 - 90
        cy = self._draw_animated_title("NEON SNAKE", ACCENT_COL, cy)
        cy = self._draw_text_line("Eat apples to grow. Use Arrow keys or WASD.", UI_COL, cy, self.font_med)
        cy = self._draw_text_line("Drag the mouse to steer. ENTER to play.", UI_COL, cy, self.font_med)
        self._draw_controls_hint(cy + 24)

    def _draw_paused_overlay(self) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + CANVAS // 2 - 40
        cy = self._draw_animated_title("Paused", ACCENT_COL, cy)
        self._draw_text_line("Game paused - press P or Space to continue", UI_COL, cy, self.font_med)

    def _draw_game_over_overlay(self) -> None:
        self._draw_overlay_base()
        score, highscore = self.final
        cy = OFFSET_Y + CANVAS // 2 - 60
        cy = self._draw_animated_title("Game Over", APPLE_COL, cy)
        cy = self._draw_text_line(f"Score: {score} - Highscore: {highscore}", UI_COL, cy, self.font_med)
        self._draw_text_line("R to reset, ENTER to play again", UI_COL, cy + 8, self.font_small)

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_title", "courier", 42, True),
            ("font_big",   "courier", 26, True),
            ("font_med",   "courier", 17, False),
            ("font_small", "courier", 13, True),
            ("font_tiny",  "courier", 11, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except (pygame.error, OSError):
                setattr(self, attr, pygame.font.Font(None, size))
