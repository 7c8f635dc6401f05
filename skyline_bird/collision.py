"""Hit detection with a shared cooldown, and pass scoring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Container, Iterable

from .config import COOLDOWN_MS
from .entities import Bird, Obstacle
from .utils import spans_overlap

log = logging.getLogger(__name__)

SOURCE_OBSTACLE = "obstacle"
SOURCE_BOUNDS = "bounds"


@dataclass(frozen=True)
class Hit:
    source: str
    time: float
    obstacle_id: int | None = None


def hits_obstacle(bird: Bird, obs: Obstacle) -> bool:
    """Half-plane test: each piece is treated as spanning from its screen edge to the gap line."""
    top_lo, top_hi = obs.top_span
    if spans_overlap(bird.left, bird.right, top_lo, top_hi) and bird.top < obs.gap_top:
        return True
    bottom_lo, bottom_hi = obs.bottom_span
    return spans_overlap(bird.left, bird.right, bottom_lo, bottom_hi) and bird.bottom > obs.gap_bottom


def hits_bounds(bird: Bird, playfield_height: float) -> bool:
    return bird.bottom >= playfield_height or bird.top <= 0


class CollisionDetector:
    """Decides which hits count against the player's lives.

    A hit counts only once the cooldown since the last counted hit has fully
    elapsed. Obstacle hits are additionally gated by the obstacle's own
    ``collided`` flag so one pair cannot cost more than one life while the
    bird is still inside it. The cooldown timer is shared by every source, so
    at most one hit is counted per evaluation.
    """

    def __init__(self, cooldown_ms: float = COOLDOWN_MS) -> None:
        self.cooldown_ms = cooldown_ms
        self.last_collision_time = 0.0
        # ids of obstacles overlapping the bird on the latest evaluation
        self.touching: set[int] = set()

    def reset(self) -> None:
        self.last_collision_time = 0.0
        self.touching.clear()

    def cooled_down(self, now: float) -> bool:
        return now - self.last_collision_time > self.cooldown_ms

    def evaluate(
        self,
        bird: Bird,
        obstacles: Iterable[Obstacle],
        playfield_height: float,
        now: float,
    ) -> list[Hit]:
        counted: list[Hit] = []
        self.touching = set()
        for obs in obstacles:
            if not hits_obstacle(bird, obs):
                continue
            self.touching.add(obs.id)
            if self.cooled_down(now) and not obs.collided:
                obs.collided = True
                self.last_collision_time = now
                counted.append(Hit(SOURCE_OBSTACLE, now, obs.id))
        if hits_bounds(bird, playfield_height) and self.cooled_down(now):
            self.last_collision_time = now
            counted.append(Hit(SOURCE_BOUNDS, now))
        for hit in counted:
            log.info("collision with %s at %.0fms", hit.source, hit.time)
        return counted


class ScoreKeeper:
    def __init__(self) -> None:
        self.score = 0

    def reset(self) -> None:
        self.score = 0

    def update(
        self, bird: Bird, obstacles: Iterable[Obstacle], touching: Container[int] = ()
    ) -> int:
        """Score every pair the bird has fully passed. Returns points gained.

        Pairs listed in ``touching`` overlapped the bird on this tick and are
        skipped; an earlier hit does not stop a pair from scoring later.
        """
        gained = 0
        for obs in obstacles:
            if obs.scored or obs.id in touching:
                continue
            if bird.left > obs.trailing_edge:
                obs.scored = True
                gained += 1
        self.score += gained
        return gained
