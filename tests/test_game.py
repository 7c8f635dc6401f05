import os

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from skyline_bird.config import COL_BUILDING, JUMP_STRENGTH, MAX_WINDOW_HEIGHT, MAX_WINDOW_WIDTH
from skyline_bird.engine import Phase
from skyline_bird.game import BUILDING_EDGE_SHADE, HIT_FLASH_SECONDS, Game
from skyline_bird.utils import scale_color


@pytest.fixture
def game() -> Game:
    g = Game(seed=5)
    yield g
    pygame.quit()


def key(k: int) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def test_game_init(game: Game) -> None:
    """Game builds a window, an idle engine and a background sized to the playfield."""
    assert game.engine.phase is Phase.IDLE
    assert game.background.get_size() == (int(game.engine.width), int(game.engine.height))


def test_space_starts_with_flap(game: Game) -> None:
    game.handle_input(key(pygame.K_SPACE))
    assert game.engine.phase is Phase.PLAYING
    assert game.engine.bird.velocity == JUMP_STRENGTH


def test_enter_starts_without_flap(game: Game) -> None:
    game.handle_input(key(pygame.K_RETURN))
    assert game.engine.phase is Phase.PLAYING
    assert game.engine.bird.velocity == 0.0


def test_click_starts_and_r_only_restarts_after_game_over(game: Game) -> None:
    game.handle_input(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10)))
    assert game.engine.phase is Phase.PLAYING
    game.handle_input(key(pygame.K_r))
    assert game.engine.phase is Phase.PLAYING
    game.engine.lives = 1
    game.engine.bird.position = game.engine.height - 50
    game.engine.step(0.0, now=50_000)
    assert game.engine.phase is Phase.GAME_OVER
    game.draw()
    game.handle_input(key(pygame.K_r))
    assert game.engine.phase is Phase.IDLE


def test_update_pumps_engine_and_draw(game: Game) -> None:
    game.handle_input(key(pygame.K_RETURN))
    pygame.time.wait(20)
    game.update(0.016)
    assert len(game.engine.obstacles) == 1
    game.draw()


def test_collision_flash_decays(game: Game) -> None:
    game.handle_input(key(pygame.K_RETURN))
    game.engine.bird.position = game.engine.height - 50
    game.engine.step(0.0, now=50_000)
    assert game.hit_flash == HIT_FLASH_SECONDS
    game.update(1.0)
    assert game.hit_flash == 0.0
    game.draw()


def test_resize_caps_playfield(game: Game) -> None:
    game.handle_input(pygame.event.Event(pygame.VIDEORESIZE, w=1920, h=1080, size=(1920, 1080)))
    assert (game.engine.width, game.engine.height) == (MAX_WINDOW_WIDTH, MAX_WINDOW_HEIGHT)
    assert game.background.get_size() == (MAX_WINDOW_WIDTH, MAX_WINDOW_HEIGHT)


def test_building_edge_is_darker_than_fill(game: Game) -> None:
    assert game.building_edge == scale_color(COL_BUILDING, BUILDING_EDGE_SHADE)
    assert all(e < f for e, f in zip(game.building_edge, COL_BUILDING))
