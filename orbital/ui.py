#!/usr/bin/env python3
"""
Dear PyGui control panel.

Scenario selection, run controls, configuration sliders and the selected-body
editor. The panel never touches bodies directly: every change goes through
SimulationController methods. Callbacks are queued by Dear PyGui and drained
by the main loop (manual callback management), so they run on the same
thread as the frame loop and need no locking.
"""
import logging

import dearpygui.dearpygui as dpg

from .constants import MAX_DENSITY, MAX_MASS, MAX_TRAIL_LENGTH, MIN_DENSITY
from .interaction import InteractionMode
from .scenarios import random_scenario, scenario_by_name, scenario_names
from .utils import try_float

logger = logging.getLogger(__name__)


class UI:
    """
    Dear PyGui interface: presets, simulation controls, selected body editor.
    """

    def __init__(self, sim, viewport, interaction):
        self.sim = sim
        self.viewport = viewport
        self.interaction = interaction
        self._last_selected_id = None
        self._build_ui()

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.configure_app(manual_callback_management=True)
        dpg.create_viewport(title="Orbital - Controls", width=440, height=760)

        config = self.sim.config
        with dpg.window(label="Controls", tag="main_window"):
            dpg.add_text("Scenario")
            with dpg.group(horizontal=True):
                names = scenario_names()
                dpg.add_combo(names, default_value=names[0], width=220, tag="scenario_combo")
                dpg.add_button(label="Load", callback=self._on_load_scenario)
                dpg.add_button(label="Shuffle", callback=self._on_shuffle)

            dpg.add_separator()
            dpg.add_text("Simulation Controls")
            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=self._toggle_play, tag="play_button")
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_button(label="Reset", callback=self._on_reset)
                dpg.add_button(label="Mode: VIEW", callback=self._toggle_mode, tag="mode_button")
            dpg.add_slider_float(label="Gravity (G)", min_value=0.1, max_value=5.0,
                                 default_value=config.G, tag="g_slider",
                                 callback=lambda s, a, u: self._set_option("G", float(a)))
            dpg.add_slider_float(label="Time scale", min_value=0.0, max_value=20.0,
                                 default_value=config.time_scale, tag="time_scale_slider",
                                 callback=lambda s, a, u: self._set_option("time_scale", float(a)))
            dpg.add_slider_float(label="Softening", min_value=0.0, max_value=50.0,
                                 default_value=config.softening, tag="softening_slider",
                                 callback=lambda s, a, u: self._set_option("softening", float(a)))
            dpg.add_slider_int(label="Trail length", min_value=0, max_value=MAX_TRAIL_LENGTH,
                               default_value=config.trail_length, tag="trail_length_slider",
                               callback=lambda s, a, u: self._set_option("trail_length", int(a)))
            with dpg.group(horizontal=True):
                dpg.add_checkbox(label="Trails", default_value=config.show_trails, tag="trails_check",
                                 callback=lambda s, a, u: self._set_option("show_trails", bool(a)))
                dpg.add_checkbox(label="Fade", default_value=config.trail_fade, tag="fade_check",
                                 callback=lambda s, a, u: self._set_option("trail_fade", bool(a)))
                dpg.add_checkbox(label="Collisions", default_value=config.collision_enabled, tag="collision_check",
                                 callback=lambda s, a, u: self._set_option("collision_enabled", bool(a)))
                dpg.add_checkbox(label="Grid", default_value=config.show_grid, tag="grid_check",
                                 callback=lambda s, a, u: self._set_option("show_grid", bool(a)))

            dpg.add_separator()
            dpg.add_text("View")
            with dpg.group(horizontal=True):
                dpg.add_button(label="Zoom In", callback=lambda: self.viewport.zoom_in())
                dpg.add_button(label="Reset View", callback=lambda: self.viewport.reset())
                dpg.add_button(label="Zoom Out", callback=lambda: self.viewport.zoom_out())
                dpg.add_button(label="Fit", callback=lambda: self.viewport.frame_bodies(self.sim.bodies))
            dpg.add_slider_float(label="New body mass", min_value=1.0, max_value=5000.0,
                                 default_value=self.sim.creation_mass, tag="creation_mass_slider",
                                 callback=lambda s, a, u: setattr(self.sim, "creation_mass", float(a)))

            dpg.add_separator()
            dpg.add_text("Selected Body")
            dpg.add_text("None", tag="selected_label")
            with dpg.group(horizontal=True):
                dpg.add_input_text(label="Mass", default_value="", width=140, tag="edit_mass_input",
                                   on_enter=True, callback=self._apply_mass)
                dpg.add_button(label="Apply", callback=self._apply_mass)
            dpg.add_slider_float(label="Density", min_value=MIN_DENSITY, max_value=MAX_DENSITY,
                                 default_value=1.0, tag="edit_density_slider",
                                 callback=lambda s, a, u: self.sim.edit_selected(density=float(a)))
            dpg.add_checkbox(label="Fixed in place", default_value=False, tag="edit_fixed_check",
                             callback=lambda s, a, u: self.sim.edit_selected(is_fixed=bool(a)))

            dpg.add_separator()
            dpg.add_text("", tag="status_text")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value("status_text", msg)
        dpg.configure_item("status_text", color=color)

    def _set_error(self, msg: str):
        self._set_status(msg, color=(255, 120, 120))

    def _set_option(self, name, value):
        self.sim.update_config(**{name: value})

    def _sync_config_widgets(self):
        config = self.sim.config
        dpg.set_value("g_slider", config.G)
        dpg.set_value("time_scale_slider", config.time_scale)
        dpg.set_value("softening_slider", config.softening)
        dpg.set_value("trail_length_slider", config.trail_length)
        dpg.set_value("trails_check", config.show_trails)
        dpg.set_value("fade_check", config.trail_fade)
        dpg.set_value("collision_check", config.collision_enabled)
        dpg.set_value("grid_check", config.show_grid)

    def load_scenario(self, name: str):
        try:
            scenario = scenario_by_name(name)
        except KeyError:
            self._set_error(f"Unknown scenario: {name}")
            return
        self.sim.load_scenario(scenario)
        self.viewport.reset()
        self._sync_config_widgets()
        self._set_status(f"Loaded scenario: {name}")

    def _on_load_scenario(self):
        self.load_scenario(dpg.get_value("scenario_combo"))

    def _on_shuffle(self):
        scenario = random_scenario()
        dpg.set_value("scenario_combo", scenario.name)
        self.load_scenario(scenario.name)

    def _toggle_play(self):
        running = self.sim.toggle_running()
        self._set_status(f"Simulation {'Playing' if running else 'Paused'}.")

    def _step_once(self):
        self.sim.pause()
        self.sim.step_once()
        self._set_status("Stepped one frame.")

    def _on_reset(self):
        self.sim.reset()
        self._set_status("Reset to initial state.")

    def toggle_mode(self):
        mode = InteractionMode.CREATE if self.interaction.mode is InteractionMode.VIEW else InteractionMode.VIEW
        for event in self.interaction.set_mode(mode):
            self.sim.select(event.body_id)
        dpg.configure_item("mode_button", label=f"Mode: {mode.value.upper()}")

    def _toggle_mode(self):
        self.toggle_mode()

    def _apply_mass(self, *args):
        mass = try_float(dpg.get_value("edit_mass_input"))
        if mass is None:
            self._set_error("Invalid mass.")
            return
        if self.sim.get_selected_body() is None:
            self._set_error("No body selected to edit.")
            return
        if mass > MAX_MASS:
            self._set_status(f"Mass clamped to {MAX_MASS:.0f}.")
        self.sim.edit_selected(mass=mass)

    def sync(self):
        """Per-frame refresh of labels that mirror simulation state."""
        body = self.sim.get_selected_body()
        if body is None:
            dpg.set_value("selected_label", "None")
            self._last_selected_id = None
        else:
            dpg.set_value("selected_label",
                          f"{body.id}  r={body.radius:.1f}  v=({body.velocity.x:.2f}, {body.velocity.y:.2f})")
            # Only repopulate edit fields when selection changes to avoid clobbering user edits
            if body.id != self._last_selected_id:
                dpg.set_value("edit_mass_input", f"{body.mass:g}")
                dpg.set_value("edit_density_slider", body.density)
                dpg.set_value("edit_fixed_check", body.is_fixed)
                self._last_selected_id = body.id
        msg = self.sim.last_collision_msg
        if msg:
            self.sim.last_collision_msg = None
            self._set_status(msg)

    # -----------------------
    # Frame loop hooks
    # -----------------------

    def is_running(self) -> bool:
        return dpg.is_dearpygui_running()

    def render_frame(self):
        dpg.run_callbacks(dpg.get_callback_queue())
        self.sync()
        dpg.render_dearpygui_frame()

    def shutdown(self):
        dpg.destroy_context()
