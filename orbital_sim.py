#!/usr/bin/env python3
"""
Orbital simulator application entry point.

What this module does
- Opens the pygame viewport and the Dear PyGui control panel.
- Runs one cooperative loop on the main thread: drain input events into the
  interaction state machine, advance the simulation one frame, draw the
  viewport, then render one control-panel frame (which also runs queued UI
  callbacks). There are no background threads and no locks.

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python orbital_sim.py [--scenario NAME] [--log-level LEVEL]`

Controls
- VIEW mode: drag to pan, click a body to select it, wheel or pinch to zoom.
- CREATE mode (press C or use the panel): drag from a point to launch a new
  body; a tap drops one at rest.
- Space: play/pause, arrows: pan, +/-: zoom, F: fit all bodies, R: reset.
"""

import argparse
import logging
import sys

import pygame

from orbital.camera import Viewport
from orbital.constants import FRAME_RATE, VIEW_HEIGHT, VIEW_WIDTH
from orbital.input_adapter import PygameInputAdapter
from orbital.interaction import InteractionController
from orbital.logging_config import setup_logging
from orbital.renderer import Renderer
from orbital.scenarios import random_scenario, scenario_by_name, scenario_names
from orbital.simulation import SimulationController
from orbital.ui import UI
from orbital.utils import window_size_from_env

logger = logging.getLogger("orbital.app")

PAN_SPEED_KEYS = 600  # pixels per second


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Interactive N-body gravity simulator")
    parser.add_argument("--scenario", choices=scenario_names(), help="scenario to load at startup")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--paused", action="store_true", help="start paused")
    return parser.parse_args(argv)


def handle_keys(event, sim, viewport, ui):
    if event.key == pygame.K_SPACE:
        sim.toggle_running()
    elif event.key == pygame.K_c:
        ui.toggle_mode()
    elif event.key == pygame.K_r:
        sim.reset()
    elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
        viewport.zoom_in()
    elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
        viewport.zoom_out()
    elif event.key == pygame.K_f:
        viewport.frame_bodies(sim.bodies)


def pan_with_arrows(viewport, real_dt):
    keys = pygame.key.get_pressed()
    step = PAN_SPEED_KEYS * real_dt
    if keys[pygame.K_LEFT]:
        viewport.pan((step, 0))
    if keys[pygame.K_RIGHT]:
        viewport.pan((-step, 0))
    if keys[pygame.K_UP]:
        viewport.pan((0, step))
    if keys[pygame.K_DOWN]:
        viewport.pan((0, -step))


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    size = window_size_from_env((VIEW_WIDTH, VIEW_HEIGHT))
    sim = SimulationController()
    viewport = Viewport(viewport_size=size)
    interaction = InteractionController(viewport)
    adapter = PygameInputAdapter(interaction, lambda: sim.bodies)

    pygame.init()
    pygame.display.set_caption("Orbital - Viewport")
    surface = pygame.display.set_mode(size, pygame.RESIZABLE)
    renderer = Renderer(surface)
    clock = pygame.time.Clock()

    ui = UI(sim, viewport, interaction)
    scenario = scenario_by_name(args.scenario) if args.scenario else random_scenario()
    ui.load_scenario(scenario.name)
    if not args.paused:
        sim.play()

    running = True
    try:
        while running and ui.is_running():
            real_dt = clock.tick(FRAME_RATE) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                    renderer.set_surface(surface)
                    viewport.set_viewport_size(event.w, event.h)
                elif event.type == pygame.KEYDOWN:
                    handle_keys(event, sim, viewport, ui)
                else:
                    sim.handle_interaction(adapter.handle_event(event))

            pan_with_arrows(viewport, real_dt)
            sim.tick()
            renderer.draw(sim, viewport, interaction)
            pygame.display.flip()
            ui.render_frame()
    finally:
        logger.info("Shutting down after %d frames", sim.frame_count)
        ui.shutdown()
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
