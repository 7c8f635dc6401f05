"""Game entities: the player-controlled bird and the scrolling building pairs."""

from __future__ import annotations

import itertools
import logging
from typing import Iterator, Protocol

import numpy as np

from .config import (
    BIRD_LEFT,
    BIRD_SIZE,
    GAP_SIZE,
    GRAVITY,
    JUMP_STRENGTH,
    MIN_GAP_TOP,
    OBSTACLE_SPEED,
    OBSTACLE_WIDTH,
    OFFSCREEN_MARGIN,
    OFFSET_RANGE,
    SPAWN_THRESHOLD,
    WIDTH_VARIANCE,
)
from .utils import clamp, finite_or

log = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that can draw a uniform float in [lo, hi)."""

    def uniform(self, lo: float, hi: float) -> float: ...


def default_rng(seed: int | None = None) -> RandomSource:
    return np.random.default_rng(seed)


class Bird:
    """Vertical physics body. Horizontal position is fixed at BIRD_LEFT."""

    def __init__(self, playfield_height: float) -> None:
        self.position = playfield_height / 2
        self.velocity = 0.0

    def reset(self, playfield_height: float) -> None:
        self.position = playfield_height / 2
        self.velocity = 0.0

    @property
    def left(self) -> float:
        return float(BIRD_LEFT)

    @property
    def right(self) -> float:
        return float(BIRD_LEFT + BIRD_SIZE)

    @property
    def top(self) -> float:
        return self.position

    @property
    def bottom(self) -> float:
        return self.position + BIRD_SIZE

    def apply_impulse(self) -> None:
        # Overwrite so every flap reaches the same height regardless of fall speed.
        self.velocity = JUMP_STRENGTH

    def integrate(self, dt: float, playfield_height: float) -> None:
        """Advance one tick; only position is clamped, velocity keeps accumulating."""
        self.velocity += GRAVITY * dt
        self.position += self.velocity * dt
        self.position = clamp(self.position, 0.0, playfield_height - BIRD_SIZE)


class Obstacle:
    """A top/bottom building pair sharing one gap.

    The two pieces have independent widths and horizontal offsets; the gap is
    the only thing coupling them. Omitted or unusable widths fall back to
    OBSTACLE_WIDTH and omitted offsets to 0, once, at construction.
    """

    def __init__(
        self,
        x: float,
        gap_top: float,
        obstacle_id: int,
        top_width: float | None = None,
        bottom_width: float | None = None,
        top_offset: float | None = None,
        bottom_offset: float | None = None,
    ) -> None:
        self.x = float(x)
        self.gap_top = float(gap_top)
        self.gap_bottom = self.gap_top + GAP_SIZE
        self.top_width = self._width_or_default(top_width)
        self.bottom_width = self._width_or_default(bottom_width)
        self.top_offset = finite_or(top_offset, 0.0)
        self.bottom_offset = finite_or(bottom_offset, 0.0)
        self.id = obstacle_id
        self.scored = False
        self.collided = False

    @staticmethod
    def _width_or_default(width: float | None) -> float:
        w = finite_or(width, OBSTACLE_WIDTH)
        return w if w > 0 else float(OBSTACLE_WIDTH)

    @property
    def top_span(self) -> tuple[float, float]:
        left = self.x + self.top_offset
        return left, left + self.top_width

    @property
    def bottom_span(self) -> tuple[float, float]:
        left = self.x + self.bottom_offset
        return left, left + self.bottom_width

    @property
    def trailing_edge(self) -> float:
        return max(self.top_span[1], self.bottom_span[1])

    def update(self, dt: float) -> None:
        self.x -= OBSTACLE_SPEED * dt

    def offscreen(self) -> bool:
        return self.x <= -(OBSTACLE_WIDTH + OFFSCREEN_MARGIN)

    def __repr__(self) -> str:
        return f"Obstacle(id={self.id}, x={self.x:.1f}, gap_top={self.gap_top:.1f})"


class ObstacleTrack:
    """Ordered obstacle sequence, oldest first."""

    def __init__(self) -> None:
        self.obstacles: list[Obstacle] = []
        self._ids = itertools.count(1)

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(self.obstacles)

    def __len__(self) -> int:
        return len(self.obstacles)

    @property
    def latest(self) -> Obstacle | None:
        return self.obstacles[-1] if self.obstacles else None

    def clear(self) -> None:
        self.obstacles.clear()

    def advance(self, dt: float) -> None:
        for obs in self.obstacles:
            obs.update(dt)
        self.obstacles = [o for o in self.obstacles if not o.offscreen()]

    def should_spawn(self, playfield_width: float) -> bool:
        latest = self.latest
        return latest is None or latest.x < playfield_width - SPAWN_THRESHOLD

    def maybe_spawn(
        self, playfield_width: float, playfield_height: float, rng: RandomSource
    ) -> Obstacle | None:
        """Append a new pair at the leading edge if the spawn condition holds."""
        if not self.should_spawn(playfield_width):
            return None
        max_gap_top = playfield_height - GAP_SIZE - MIN_GAP_TOP
        gap_top = float(rng.uniform(MIN_GAP_TOP, max_gap_top))
        # Every piece gets its own draw; never share width or offset between halves.
        top_width = OBSTACLE_WIDTH + float(rng.uniform(-WIDTH_VARIANCE, WIDTH_VARIANCE))
        bottom_width = OBSTACLE_WIDTH + float(rng.uniform(-WIDTH_VARIANCE, WIDTH_VARIANCE))
        top_offset = float(rng.uniform(-OFFSET_RANGE, OFFSET_RANGE))
        bottom_offset = float(rng.uniform(-OFFSET_RANGE, OFFSET_RANGE))
        obs = Obstacle(
            playfield_width,
            clamp(gap_top, MIN_GAP_TOP, max_gap_top),
            next(self._ids),
            top_width=top_width,
            bottom_width=bottom_width,
            top_offset=top_offset,
            bottom_offset=bottom_offset,
        )
        self.obstacles.append(obs)
        log.debug("spawned %r", obs)
        return obs
