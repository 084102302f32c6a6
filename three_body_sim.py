#!/usr/bin/env python3
"""
Three Body Simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- The SimulationLoop from threebody.simulation owns all simulation state. The renderer
  thread is its only driver: it calls step() once per frame and draws the returned
  RenderSnapshot.
- The UI owns the SimulationConfig. Every control change builds a new config value and
  posts it to the loop; nothing here mutates bodies directly.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the
  viewport), stepping the simulation, and drawing.
- The UI class runs in the main thread via Dear PyGui. It posts messages to the loop and
  refreshes the stats readout from the latest snapshot on a periodic frame callback.

Units and conventions
- World units are pixels of the initial viewport; one tick is one frame at 60 FPS.
- Colors are RGB tuples in 0..255.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python three_body_sim.py [--profile web] [--seed 42]`

Controls
- Viewport: Space pauses/resumes, R resets the current simulation.
- Controls window: star colours, gravity strength/range, reflective planet, reset.
"""

import argparse
import dataclasses
import logging
import math
import random
import threading
from typing import Optional

import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from threebody.config import (
    SimulationConfig,
    format_hex_color,
    get_profile,
    gravity_range_from_slider,
    gravity_strength_from_slider,
    load_config,
    next_cycle_color,
    slider_from_gravity_range,
    slider_from_gravity_strength,
    PROFILES,
)
from threebody.camera import Camera2D
from threebody.constants import (
    BACKGROUND_COLOR,
    BODY_MIN_SCREEN_RADIUS,
    BODY_RADIUS_FACTOR,
    DEFAULT_STATS_FILE,
    HUD_TEXT_COLOR,
    SAFE_COORD_LIMIT,
    SATELLITE_TRAIL_ALPHA,
    TARGET_FPS,
    TRAIL_ALPHA,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from threebody.data_models import RenderSnapshot
from threebody.satellite import interpolate_color
from threebody.simulation import SimulationLoop
from threebody.stats import JsonStatsStore

logger = logging.getLogger("three_body_sim")

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: steps the simulation and draws bodies, trails, the satellite
    and the stats HUD. Handles resize, pause and reset keys.
    """
    def __init__(self, sim: SimulationLoop):
        super().__init__(daemon=True)
        self.sim = sim
        self.camera = Camera2D()
        self.surface = None
        self.overlay = None
        self.clock = None
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Three Body Simulator - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self._make_overlay(VIEW_WIDTH, VIEW_HEIGHT)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()

        try:
            while self.running:
                self.handle_events()
                snapshot = self.sim.step()
                self.draw(snapshot)
                self.clock.tick(TARGET_FPS)
        finally:
            # shutdown() must run on the thread that steps the loop
            self.sim.shutdown()
            pygame.quit()

    def _make_overlay(self, w, h):
        self.overlay = pygame.Surface((w, h), pygame.SRCALPHA)

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self._make_overlay(event.w, event.h)
                self.camera.set_viewport_size(event.w, event.h)
                self.sim.resize(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    self.sim.toggle_pause()
                elif event.key == pygame.K_r:
                    self.sim.request_reset()

    def draw(self, snapshot: RenderSnapshot):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        self.overlay.fill((0, 0, 0, 0))

        self.camera.position = snapshot.camera.position
        self.camera.zoom = snapshot.camera.zoom
        zoom = snapshot.camera.zoom

        # Trails go on the alpha overlay so they stay translucent
        for b in snapshot.bodies:
            pts = [p for p in (_safe_point(self.camera.world_to_screen(t)) for t in b.trail) if p]
            if len(pts) > 1:
                pygame.draw.lines(self.overlay, (*b.color, TRAIL_ALPHA), False, pts, 3)

        sat = snapshot.satellite
        if sat is not None:
            pts = [p for p in (_safe_point(self.camera.world_to_screen(t)) for t in sat.trail) if p]
            for i in range(len(pts) - 1):
                progress = i / len(pts)
                color = interpolate_color(sat.color, (0, 0, 0), progress)
                alpha = int(SATELLITE_TRAIL_ALPHA * (1 - progress))
                pygame.draw.line(self.overlay, (*color, alpha), pts[i], pts[i + 1], 2)

        surf.blit(self.overlay, (0, 0))

        for b in snapshot.bodies:
            center = _safe_point(self.camera.world_to_screen(b.position))
            if center is None:
                continue
            radius = max(b.radius_basis * BODY_RADIUS_FACTOR, BODY_MIN_SCREEN_RADIUS / zoom) * zoom
            draw_glow(surf, center, radius * 2.5, b.color, 255)
            _filled_circle(surf, center, radius, b.color)

        if sat is not None:
            center = _safe_point(self.camera.world_to_screen(sat.position))
            if center is not None and sat.light_direction is not None:
                offset = sat.light_direction * (sat.radius * 0.5 * zoom)
                glow_center = (int(center[0] + offset.x), int(center[1] + offset.y))
                draw_glow(surf, glow_center, sat.radius * 2.5 * zoom, sat.color, 140)
                _filled_circle(surf, center, sat.radius * zoom, (255, 255, 255, 180))

        y = 10
        for line in snapshot.stats_text.splitlines():
            draw_text(surf, line, 10, y, HUD_TEXT_COLOR)
            y += 20
        if self.sim.paused:
            draw_text(surf, "[Paused]  Space: resume | R: reset", 10, y, HUD_TEXT_COLOR)

        pygame.display.flip()

_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 16)
        except Exception:
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))

def draw_glow(surface, center, outer_radius, color, alpha, steps=12):
    """Approximate a radial gradient from color at the centre to transparent at outer_radius."""
    if outer_radius < 1:
        return
    for k in range(steps, 0, -1):
        r = outer_radius * k / steps
        a = int(alpha * (1 - k / steps) / steps * 2)
        if a <= 0:
            continue
        _filled_circle(surface, center, r, (*color, min(a, 255)))

def _filled_circle(surface, center, radius, color):
    r = int(math.ceil(radius))
    if r < 1:
        return
    gfxdraw.filled_circle(surface, center[0], center[1], r, color)
    gfxdraw.aacircle(surface, center[0], center[1], r, color)

def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: star colours, gravity sliders, reflective planet toggle,
    reset and pause, stats readout.
    """
    def __init__(self, sim: SimulationLoop, config: SimulationConfig):
        self.sim = sim
        self.config = config
        self.color_ids = [None, None, None]
        self.color_cycle = [0, 0, 0]
        self.stats_id = None
        self.strength_label_id = None
        self.range_label_id = None
        self.status_msg_id = None

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    def _publish(self, config: SimulationConfig):
        self.config = config
        self.sim.replace_config(config)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Three Body Simulator - Controls', width=420, height=460)

        with dpg.window(label="Controls", width=400, height=440, pos=(10, 10), tag="main_window"):
            dpg.add_text("Star colours")
            for i in range(3):
                with dpg.group(horizontal=True):
                    self.color_ids[i] = dpg.add_color_edit(
                        default_value=(*self.config.colors[i], 255), label=f"Star {i + 1}",
                        no_alpha=True, width=220, user_data=i,
                        callback=lambda s, a, u: self._on_color(u, dpg.get_value(s)))
                    dpg.add_button(label="Cycle", user_data=i,
                                   callback=lambda s, a, u: self._on_cycle_color(u))

            dpg.add_separator()

            dpg.add_text("Gravity")
            self.strength_label_id = dpg.add_text("")
            dpg.add_slider_float(min_value=0.0, max_value=100.0, width=300, format="%.0f",
                                 default_value=slider_from_gravity_strength(self.config.gravity_strength),
                                 callback=lambda s, a, u: self._on_strength(a))
            self.range_label_id = dpg.add_text("")
            dpg.add_slider_float(min_value=0.0, max_value=100.0, width=300, format="%.0f",
                                 default_value=slider_from_gravity_range(self.config.min_distance),
                                 callback=lambda s, a, u: self._on_range(a))
            self._update_gravity_labels()

            dpg.add_separator()

            dpg.add_checkbox(label="Reflective planet", default_value=self.config.satellite_enabled,
                             callback=lambda s, a, u: self._on_satellite(a))
            with dpg.group(horizontal=True):
                dpg.add_button(label="Reset", callback=self._on_reset)
                dpg.add_button(label="Play/Pause", callback=lambda: self.sim.toggle_pause())

            dpg.add_separator()
            self.stats_id = dpg.add_text("")
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _on_color(self, slot: int, rgba):
        # RGBA 0-255
        color = (int(rgba[0]), int(rgba[1]), int(rgba[2]))
        self._publish(self.config.with_color(slot, color))
        self._set_status(f"Star {slot + 1} colour {format_hex_color(color)}.")

    def _on_cycle_color(self, slot: int):
        self.color_cycle[slot], color = next_cycle_color(slot, self.color_cycle[slot])
        dpg.set_value(self.color_ids[slot], (*color, 255))
        self._publish(self.config.with_color(slot, color))

    def _on_strength(self, progress):
        self._publish(dataclasses.replace(self.config, gravity_strength=gravity_strength_from_slider(progress)))
        self._update_gravity_labels()

    def _on_range(self, progress):
        self._publish(dataclasses.replace(self.config, min_distance=gravity_range_from_slider(progress)))
        self._update_gravity_labels()

    def _update_gravity_labels(self):
        dpg.set_value(self.strength_label_id, f"Strength (G): {self.config.gravity_strength:.2f}")
        dpg.set_value(self.range_label_id, f"Range (min distance): {self.config.min_distance:.1f}")

    def _on_satellite(self, enabled):
        self._publish(dataclasses.replace(self.config, satellite_enabled=bool(enabled)))
        self._set_status(f"Reflective planet {'ON' if enabled else 'OFF'}.")

    def _on_reset(self):
        self.sim.request_reset()
        self._set_status("Simulation reset.")

    def _sync_ui_with_sim(self):
        snapshot = self.sim.last_snapshot
        if snapshot is not None:
            dpg.set_value(self.stats_id, snapshot.stats_text)
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Three body gravity toy.")
    parser.add_argument("--profile", default="classic", choices=sorted(PROFILES),
                        help="named parameter profile")
    parser.add_argument("--config", help="JSON file with config overrides")
    parser.add_argument("--stats-file", default=DEFAULT_STATS_FILE,
                        help="where run statistics are persisted")
    parser.add_argument("--seed", type=int, help="random seed for reproducible spawns")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)

def build_config(args) -> SimulationConfig:
    config = get_profile(args.profile)
    if args.config:
        config = load_config(args.config, base=config)
    return config

def main(argv: Optional[list] = None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Starting with profile %s", args.profile)

    config = build_config(args)
    sim = SimulationLoop(
        config=config,
        viewport=(VIEW_WIDTH, VIEW_HEIGHT),
        stats_store=JsonStatsStore(args.stats_file),
        rng=random.Random(args.seed),
    )

    renderer = PygameRenderer(sim)

    # Start Pygame renderer thread
    renderer.start()

    ui = UI(sim, config)

    # Keyboard shortcut in UI window to toggle play/pause (Space)
    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui.sim.toggle_pause()
        dpg.add_key_press_handler(callback=key_down)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        renderer.running = False
        renderer.join(timeout=2.0)
        if renderer.is_alive():
            logger.warning("Renderer did not stop within 2s; stats may not be saved")
        dpg.destroy_context()

if __name__ == "__main__":
    main()
