"""Pygame front end: window, input mapping, frame pacing and flat drawing."""

from __future__ import annotations

import logging
import sys

import pygame

from .config import (
    BIRD_LEFT,
    BIRD_SIZE,
    COL_BIRD,
    COL_BIRD_HIT,
    COL_BUILDING,
    COL_SKY_BOTTOM,
    COL_SKY_TOP,
    COL_TEXT,
    COL_TEXT_DIM,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    FPS,
    MAX_WINDOW_HEIGHT,
    MAX_WINDOW_WIDTH,
)
from .engine import EngineEvent, GameEngine, Phase, Snapshot
from .entities import default_rng
from .logger import setup_logging
from .utils import scale_color, vertical_gradient

log = logging.getLogger(__name__)

HIT_FLASH_SECONDS = 0.4
BUILDING_EDGE_SHADE = 0.6

JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)
START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


class Game:
    """Drives a GameEngine from the pygame clock and renders its snapshot."""

    def __init__(self, seed: int | None = None) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((DEFAULT_WIDTH, DEFAULT_HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption("Skyline Bird")
        self.clock = pygame.time.Clock()
        self.font_big = pygame.font.SysFont(None, 64)
        self.font_small = pygame.font.SysFont(None, 28)

        self.engine = GameEngine(
            DEFAULT_WIDTH,
            DEFAULT_HEIGHT,
            rng=default_rng(seed),
            clock=pygame.time.get_ticks,
        )
        self.building_edge = scale_color(COL_BUILDING, BUILDING_EDGE_SHADE)
        self.hit_flash = 0.0
        self.engine.events.subscribe(EngineEvent.COLLISION, self._on_collision)
        self.background = self._make_background()

    def _on_collision(self) -> None:
        self.hit_flash = HIT_FLASH_SECONDS

    def _make_background(self) -> pygame.Surface:
        w, h = int(self.engine.width), int(self.engine.height)
        return pygame.surfarray.make_surface(vertical_gradient(w, h, COL_SKY_TOP, COL_SKY_BOTTOM))

    def resize(self, width: int, height: int) -> None:
        self.engine.resize(min(width, MAX_WINDOW_WIDTH), min(height, MAX_WINDOW_HEIGHT))
        self.background = self._make_background()

    def handle_input(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key in JUMP_KEYS:
                self.engine.jump()
            elif event.key in START_KEYS:
                self.engine.start()
            elif event.key == pygame.K_r:
                self.engine.restart()
            elif event.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.QUIT))
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1:
                self.engine.jump()
        elif event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)

    def update(self, dt: float) -> None:
        self.hit_flash = max(0.0, self.hit_flash - dt)
        self.engine.scheduler.pump()

    def draw(self) -> None:
        snap = self.engine.snapshot()
        self.screen.blit(self.background, (0, 0))
        for obs in snap.obstacles:
            top = pygame.Rect(int(obs.x + obs.top_offset), 0, int(obs.top_width), int(obs.gap_top))
            bottom = pygame.Rect(
                int(obs.x + obs.bottom_offset),
                int(obs.gap_bottom),
                int(obs.bottom_width),
                int(snap.height - obs.gap_bottom),
            )
            for rect in (top, bottom):
                pygame.draw.rect(self.screen, COL_BUILDING, rect)
                pygame.draw.rect(self.screen, self.building_edge, rect, 2)

        bird_color = COL_BIRD_HIT if self.hit_flash > 0.0 else COL_BIRD
        bird = pygame.Rect(BIRD_LEFT, int(snap.position), BIRD_SIZE, BIRD_SIZE)
        pygame.draw.ellipse(self.screen, bird_color, bird)
        self._draw_ui(self.screen, snap)
        pygame.display.flip()

    def _draw_ui(self, surf: pygame.Surface, snap: Snapshot) -> None:
        cx, cy = int(snap.width) // 2, int(snap.height) // 2
        score_text = self.font_big.render(str(snap.score), True, COL_TEXT)
        surf.blit(score_text, score_text.get_rect(midtop=(cx, 20)))
        lives_text = self.font_small.render(f"Lives: {snap.lives}", True, COL_TEXT)
        surf.blit(lives_text, lives_text.get_rect(topright=(int(snap.width) - 12, 12)))

        if snap.phase is Phase.IDLE:
            prompt = self.font_small.render("Space/Click to fly • Enter to start", True, COL_TEXT_DIM)
            surf.blit(prompt, prompt.get_rect(center=(cx, cy + 80)))
        elif snap.phase is Phase.GAME_OVER:
            title = self.font_big.render("Game Over", True, COL_TEXT)
            retry = self.font_small.render("Press R to play again", True, COL_TEXT_DIM)
            surf.blit(title, title.get_rect(center=(cx, cy - 30)))
            surf.blit(retry, retry.get_rect(center=(cx, cy + 20)))

    def run(self) -> None:
        while True:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    pygame.quit()
                    sys.exit(0)
                self.handle_input(event)

            self.update(dt)
            self.draw()


def main() -> None:
    setup_logging()
    log.info("starting Skyline Bird")
    Game().run()
