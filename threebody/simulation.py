#!/usr/bin/env python3
"""
Simulation loop: the single owner of all mutable simulation state.

One external scheduler (the renderer's frame clock) calls step() once per
tick. Other threads never touch bodies, satellite, camera or config directly;
they post messages which step() drains before doing any work:

    UI thread --post()--> SimpleQueue --step()--> state

Order inside a tick
1) drain messages (config replacement, viewport resize, reset, pause/resume)
2) sync slot colours and the satellite's existence with the config
3) pairwise gravity on the bodies
4) integrate bodies, then the satellite
5) escape check: reset the epoch, or ease the camera toward the centroid
6) build and return a RenderSnapshot
"""
import dataclasses
import logging
import queue
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .camera import Camera2D
from .config import SimulationConfig
from .constants import VIEW_HEIGHT, VIEW_WIDTH
from .data_models import Body, BodyView, RenderSnapshot, SatelliteView
from .escape import EscapeDetector, bounding_box
from .physics import GravitySolver, integrate_bodies, spawn_bodies
from .satellite import Satellite, spawn_satellite, spawn_satellite_near
from .stats import StatsStore, format_stats_text
from .vector_utils import Vector2

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UpdateConfig:
    changes: dict


@dataclass(frozen=True)
class ReplaceConfig:
    config: SimulationConfig


@dataclass(frozen=True)
class ResizeViewport:
    width: float
    height: float


@dataclass(frozen=True)
class RequestReset:
    pass


@dataclass(frozen=True)
class SetPaused:
    paused: bool


@dataclass(frozen=True)
class TogglePause:
    pass


class SimulationLoop:
    """
    Orchestrates one discrete step of the three body toy.

    Args:
        config: initial configuration (classic profile by default)
        viewport: (width, height) in pixels
        stats_store: persisted aggregate collaborator; in-memory by default
        rng: random source for spawning; seed it for reproducible runs
        clock: monotonic seconds, injectable for tests
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 viewport: Tuple[float, float] = (VIEW_WIDTH, VIEW_HEIGHT),
                 stats_store: Optional[StatsStore] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.config = config or SimulationConfig()
        self.viewport = _check_viewport(*viewport)
        self.stats = stats_store or StatsStore()
        self.aggregate = self.stats.load()
        self.rng = rng or random.Random()
        self.clock = clock

        self.solver = GravitySolver()
        self.detector = EscapeDetector()
        self.camera = Camera2D(zoom=self.config.camera_zoom)
        self.camera.set_viewport_size(*self.viewport)

        self.bodies: List[Body] = []
        self.satellite: Optional[Satellite] = None
        self.epoch_start = clock()
        self.paused_at: Optional[float] = None
        self.tick = 0
        self._inbox = queue.SimpleQueue()
        self.last_snapshot: Optional[RenderSnapshot] = None

        self.reset_bodies()
        self.camera.recenter(self.centroid())
        logger.info("Simulation started (%d finished so far, longest %.1fs)",
                    self.aggregate.total_simulations, self.aggregate.longest_runtime_seconds)

    # -- message API (safe from any thread) ---------------------------------

    def post(self, message) -> None:
        self._inbox.put(message)

    def update_config(self, **changes) -> None:
        self.post(UpdateConfig(changes))

    def replace_config(self, config: SimulationConfig) -> None:
        self.post(ReplaceConfig(config))

    def resize(self, width: float, height: float) -> None:
        self.post(ResizeViewport(width, height))

    def request_reset(self) -> None:
        self.post(RequestReset())

    def pause(self) -> None:
        self.post(SetPaused(True))

    def resume(self) -> None:
        self.post(SetPaused(False))

    def toggle_pause(self) -> None:
        self.post(TogglePause())

    # -- queries --------------------------------------------------------------

    @property
    def paused(self) -> bool:
        return self.paused_at is not None

    def elapsed(self) -> float:
        now = self.paused_at if self.paused_at is not None else self.clock()
        return max(0.0, now - self.epoch_start)

    def stats_text(self) -> str:
        return format_stats_text(self.elapsed(), self.aggregate)

    def centroid(self) -> Vector2:
        return bounding_box(b.position for b in self.bodies).center

    # -- tick -----------------------------------------------------------------

    def step(self) -> RenderSnapshot:
        self._drain_inbox()
        if self.paused:
            return self._snapshot(reset=False)

        config = self.config
        for body, color in zip(self.bodies, config.colors):
            body.color = color
        self._sync_satellite()

        self.solver.apply(self.bodies, config)
        integrate_bodies(self.bodies, config.trail_capacity)
        if self.satellite is not None:
            self.satellite.update(self.bodies, config)
        self.tick += 1

        if self.detector.should_reset(self.bodies, self.viewport, config):
            self._reset_epoch()
            return self._snapshot(reset=True)

        self.camera.track(self.centroid(), config.easing)
        return self._snapshot(reset=False)

    def reset_bodies(self) -> None:
        """Replace the bodies wholesale and start a new epoch timer."""
        w, h = self.viewport
        self.bodies = spawn_bodies(w, h, self.config, self.rng)
        self.epoch_start = self.clock()
        if self.paused_at is not None:
            self.paused_at = self.epoch_start

    def shutdown(self) -> None:
        """Persist the aggregate on host teardown."""
        self.aggregate = self.stats.checkpoint(self.elapsed())
        logger.info("Simulation stopped; stats saved")

    # -- internals ------------------------------------------------------------

    def _reset_epoch(self) -> None:
        # The runtime must be taken before reset_bodies() restarts the timer.
        runtime = self.elapsed()
        self.aggregate = self.stats.record_reset(runtime)
        logger.info("Reset after %.1fs (total simulations %d, longest %.1fs)",
                    runtime, self.aggregate.total_simulations, self.aggregate.longest_runtime_seconds)
        self.reset_bodies()
        center = self.centroid()
        self.camera.recenter(center)
        if self.satellite is not None:
            self.satellite = spawn_satellite_near(center, self.rng, self.config.satellite_trail_capacity)

    def _sync_satellite(self) -> None:
        if self.config.satellite_enabled and self.satellite is None:
            w, h = self.viewport
            self.satellite = spawn_satellite(w, h, self.rng, self.config.satellite_trail_capacity)
            logger.debug("Satellite enabled at %s", self.satellite.position)
        elif not self.config.satellite_enabled and self.satellite is not None:
            self.satellite = None
            logger.debug("Satellite disabled")

    def _drain_inbox(self) -> None:
        while True:
            try:
                message = self._inbox.get_nowait()
            except queue.Empty:
                return
            self._handle(message)

    def _handle(self, message) -> None:
        if isinstance(message, UpdateConfig):
            try:
                self.config = dataclasses.replace(self.config, **message.changes)
            except (TypeError, ValueError) as exc:
                logger.warning("Rejected config update %r: %s", message.changes, exc)
        elif isinstance(message, ReplaceConfig):
            self.config = message.config
        elif isinstance(message, ResizeViewport):
            try:
                self.viewport = _check_viewport(message.width, message.height)
            except ValueError as exc:
                logger.warning("Ignoring resize: %s", exc)
                return
            self.camera.set_viewport_size(*self.viewport)
        elif isinstance(message, RequestReset):
            self._reset_epoch()
        elif isinstance(message, SetPaused):
            self._set_paused(message.paused)
        elif isinstance(message, TogglePause):
            self._set_paused(not self.paused)
        else:
            logger.warning("Unknown message %r", message)

    def _set_paused(self, paused: bool) -> None:
        if paused and self.paused_at is None:
            self.paused_at = self.clock()
            self.aggregate = self.stats.checkpoint(self.elapsed())
        elif not paused and self.paused_at is not None:
            self.epoch_start += self.clock() - self.paused_at
            self.paused_at = None

    def _snapshot(self, reset: bool) -> RenderSnapshot:
        sat_view = None
        if self.satellite is not None:
            sat = self.satellite
            sat_view = SatelliteView(
                position=sat.position,
                radius=sat.radius,
                color=sat.current_color,
                trail=tuple(sat.trail),
                light_direction=sat.light_direction(self.bodies),
            )
        snapshot = RenderSnapshot(
            bodies=tuple(
                BodyView(position=b.position, radius_basis=b.radius_basis, color=b.color, trail=tuple(b.trail))
                for b in self.bodies
            ),
            satellite=sat_view,
            camera=self.camera.view(),
            stats_text=self.stats_text(),
            reset=reset,
            tick=self.tick,
        )
        self.last_snapshot = snapshot
        return snapshot


def _check_viewport(width: float, height: float) -> Tuple[float, float]:
    if width <= 0 or height <= 0:
        raise ValueError(f"Viewport must be positive, got {width}x{height}")
    return (width, height)
