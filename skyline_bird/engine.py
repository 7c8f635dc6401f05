"""Simulation engine: phase state machine, tick sequencing and event hooks.

The engine is frontend-agnostic. A collaborator drives it by pumping a
``FrameScheduler`` once per display frame and forwarding input as
``jump()``, ``start()`` and ``restart()``. Everything it exposes for drawing
is available through ``snapshot()``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .collision import CollisionDetector, ScoreKeeper
from .config import DEFAULT_HEIGHT, DEFAULT_WIDTH, MAX_LIVES, NOMINAL_FRAME_MS
from .entities import Bird, Obstacle, ObstacleTrack, RandomSource, default_rng
from .utils import finite_or, normalize_dt, sanitize_viewport

log = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class EngineEvent(str, Enum):
    START = "start"
    COLLISION = "collision"
    SCORE = "score"
    GAME_OVER = "game_over"
    RESTART = "restart"


class EventHooks:
    """Synchronous, in-order callbacks keyed by EngineEvent."""

    def __init__(self) -> None:
        self._subscribers: dict[EngineEvent, list[Callable[[], None]]] = {e: [] for e in EngineEvent}

    def subscribe(self, event: EngineEvent, callback: Callable[[], None]) -> None:
        self._subscribers[event].append(callback)

    def emit(self, event: EngineEvent) -> None:
        for callback in list(self._subscribers[event]):
            callback()


class LoopHandle:
    """Cancellation token returned by FrameScheduler.start()."""

    def __init__(self) -> None:
        self.active = True

    def cancel(self) -> None:
        self.active = False


class FrameScheduler:
    """Runs one registered callback per pump() until its handle is cancelled."""

    def __init__(self) -> None:
        self._callback: Callable[[], None] | None = None
        self._handle: LoopHandle | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None and self._handle.active

    def start(self, callback: Callable[[], None]) -> LoopHandle:
        if self._handle is not None:
            self._handle.cancel()
        self._callback = callback
        self._handle = LoopHandle()
        return self._handle

    def pump(self) -> bool:
        """Invoke the callback once if the loop is live. Returns whether it ran."""
        if not self.running or self._callback is None:
            return False
        self._callback()
        return True


@dataclass(frozen=True)
class ObstacleView:
    id: int
    x: float
    gap_top: float
    gap_bottom: float
    top_width: float
    bottom_width: float
    top_offset: float
    bottom_offset: float


@dataclass(frozen=True)
class Snapshot:
    position: float
    velocity: float
    obstacles: tuple[ObstacleView, ...]
    score: int
    lives: int
    phase: Phase
    width: float
    height: float


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameEngine:
    """Owns the bird, the obstacle track and the session, and sequences each tick."""

    def __init__(
        self,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        rng: RandomSource | None = None,
        clock: Callable[[], float] | None = None,
        scheduler: FrameScheduler | None = None,
    ) -> None:
        self.width, self.height = sanitize_viewport(width, height)
        self.rng = rng if rng is not None else default_rng()
        self.clock = clock or monotonic_ms
        self.scheduler = scheduler or FrameScheduler()
        self.events = EventHooks()

        self.bird = Bird(self.height)
        self.track = ObstacleTrack()
        self.detector = CollisionDetector()
        self.scorer = ScoreKeeper()
        self.lives = MAX_LIVES
        self.phase = Phase.IDLE

        self._loop: LoopHandle | None = None
        self._last_tick = 0.0

    # Session views

    @property
    def score(self) -> int:
        return self.scorer.score

    @property
    def last_collision_time(self) -> float:
        return self.detector.last_collision_time

    @property
    def obstacles(self) -> list[Obstacle]:
        return self.track.obstacles

    def snapshot(self) -> Snapshot:
        views = tuple(
            ObstacleView(
                o.id, o.x, o.gap_top, o.gap_bottom,
                o.top_width, o.bottom_width, o.top_offset, o.bottom_offset,
            )
            for o in self.track
        )
        return Snapshot(
            self.bird.position,
            self.bird.velocity,
            views,
            self.score,
            self.lives,
            self.phase,
            self.width,
            self.height,
        )

    def resize(self, width: float, height: float) -> None:
        self.width, self.height = sanitize_viewport(width, height)

    # Input

    def start(self) -> None:
        if self.phase is not Phase.IDLE:
            log.debug("start ignored in %s", self.phase.value)
            return
        self._start_from_button()

    def jump(self) -> None:
        if self.phase is Phase.GAME_OVER:
            log.debug("jump ignored after game over")
            return
        if self.phase is Phase.IDLE:
            self._start_from_jump()
        self.bird.apply_impulse()

    def restart(self) -> None:
        if self.phase is not Phase.GAME_OVER:
            log.debug("restart ignored in %s", self.phase.value)
            return
        # All resets land before anything else can be scheduled.
        self._stop_loop()
        self.lives = MAX_LIVES
        self.scorer.reset()
        self.track.clear()
        self.bird.reset(self.height)
        self.detector.reset()
        self._set_phase(Phase.IDLE)
        self.events.emit(EngineEvent.RESTART)

    # Transitions

    def _start_from_button(self) -> None:
        self._begin_playing()

    def _start_from_jump(self) -> None:
        # Caller applies the impulse right after, so the first tick already rises.
        self._begin_playing()

    def _begin_playing(self) -> None:
        self._set_phase(Phase.PLAYING)
        self._last_tick = self.clock()
        self._loop = self.scheduler.start(self.tick)
        self.events.emit(EngineEvent.START)

    def _end_game(self) -> None:
        self._stop_loop()
        self._set_phase(Phase.GAME_OVER)
        self.events.emit(EngineEvent.GAME_OVER)

    def _stop_loop(self) -> None:
        if self._loop is not None:
            self._loop.cancel()
            self._loop = None

    def _set_phase(self, phase: Phase) -> None:
        if phase is not self.phase:
            log.info("phase %s -> %s (score=%d, lives=%d)", self.phase.value, phase.value, self.score, self.lives)
        self.phase = phase

    # Tick

    def tick(self) -> None:
        """Scheduler callback: derive dt from the clock and advance one step."""
        if self.phase is not Phase.PLAYING:
            return
        now = self.clock()
        dt = normalize_dt(now - self._last_tick, NOMINAL_FRAME_MS)
        self._last_tick = now
        self.step(dt, now)

    def step(self, dt: float, now: float | None = None) -> None:
        """Advance the simulation by dt frame units.

        Order is fixed: physics, obstacle advance and spawn, collision,
        scoring, then the terminal check.
        """
        if self.phase is not Phase.PLAYING:
            return
        if now is None:
            now = self.clock()
        dt = max(0.0, finite_or(dt, 0.0))
        width, height = self.width, self.height

        self.bird.integrate(dt, height)

        self.track.advance(dt)
        self.track.maybe_spawn(width, height, self.rng)

        for _hit in self.detector.evaluate(self.bird, self.track, height, now):
            self.lives = max(0, self.lives - 1)
            self.events.emit(EngineEvent.COLLISION)

        for _ in range(self.scorer.update(self.bird, self.track, self.detector.touching)):
            self.events.emit(EngineEvent.SCORE)

        if self.lives == 0:
            self._end_game()
