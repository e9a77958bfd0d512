"""
Per-frame orchestration of the flock.

The Simulation owns all mutable run state in a SimulationContext, which
is rebuilt from scratch by ``setup``. Each tick runs, in order:
oscillators, macro playback, the held "center" action, blob movement
and finally the render pass.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set, Tuple

import numpy as np

from blobflock.core.blob import Blob, create_blobs
from blobflock.core.flock import dispatch_click
from blobflock.core.oscillator import Oscillator
from blobflock.keymap import KeyMap
from blobflock.macros.catalog import MacroCatalog
from blobflock.macros.events import MacroEvent
from blobflock.macros.player import Macro
from blobflock.macros.recorder import MacroRecording
from blobflock.renderer import DrawSurface, draw_frame
from blobflock.settings import Settings, SettingsStore

logger = logging.getLogger(__name__)

DIALOG_HELP = "help"
DIALOG_SETTINGS = "settings"


@dataclass
class SimulationContext:
    """All state for one simulation run, replaced wholesale on setup."""
    blobs: List[Blob] = field(default_factory=list)
    # Updated in list order every tick
    oscillators: List[Tuple[str, Oscillator]] = field(default_factory=list)
    macro: Optional[Macro] = None
    recording: Optional[MacroRecording] = None
    pressed: Set[int] = field(default_factory=set)
    dialog: Optional[str] = None
    needs_background: bool = True


class Simulation:
    """
    The flock simulation and its input handling.

    Live input should arrive through the ``on_live_*`` methods, which also
    record into the current macro recording. Macro playback goes through
    ``key_down``/``key_up``/``click`` directly, the same entry points the
    live handlers use.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        catalog: Optional[MacroCatalog] = None,
        macro_name: Optional[str] = None,
        keymap: Optional[KeyMap] = None,
        seed: Optional[int] = None,
        store: Optional[SettingsStore] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or Settings()
        self.catalog = catalog or MacroCatalog()
        self.keymap = keymap or KeyMap()
        self.store = store
        self.rng = np.random.default_rng(seed)
        self._clock = clock

        names = self.catalog.names()
        self.macro_name = macro_name if macro_name is not None else (names[0] if names else None)

        self.ctx = SimulationContext()
        self.setup()

    # --- Lifecycle ---

    def setup(self):
        """Create the blobs, oscillators, current macro and a fresh recording."""
        cfg = self.settings
        ctx = SimulationContext()

        ctx.blobs = create_blobs(
            cfg.blob.count,
            cfg.canvas.width,
            cfg.canvas.height,
            max_extra_speed=cfg.blob.max_extra_speed,
            rng=self.rng,
        )
        ctx.oscillators = [
            ("bearing_shift", Oscillator(-math.pi / 4, math.pi / 4, 1.0, self._apply_bearing_shift)),
            ("hue", Oscillator(0.0, 360.0, cfg.hue_change_per_second, self._apply_hue, wrap=True)),
        ]
        if self.macro_name is not None:
            ctx.macro = self.catalog.get(self.macro_name)
        ctx.recording = MacroRecording(clock=self._clock)

        self.ctx = ctx
        logger.debug("Setup %d blobs on %dx%d", len(ctx.blobs), cfg.canvas.width, cfg.canvas.height)

    def apply_settings(self, settings: Settings):
        """Replace the settings, persist them if a store is set, and restart."""
        self.settings = settings
        if self.store is not None:
            self.store.save(settings)
        self.setup()

    def reload_settings(self):
        """Re-read settings from the store (if any) and restart."""
        if self.store is not None:
            self.settings = self.store.load()
        self.setup()

    def commit_settings(self):
        """
        Leave the settings dialog.

        The running settings are kept and persisted, unless the settings
        file was edited on disk while the dialog was open, in which case
        the edited file wins.
        """
        if self.store is not None and self.store.changed():
            logger.info("Settings file %s changed - reloading", self.store.path)
            self.reload_settings()
        else:
            self.apply_settings(self.settings)

    def reset_settings(self):
        """Discard stored settings and restart with the defaults."""
        self.settings = self.store.reset() if self.store is not None else Settings()
        self.setup()

    def select_macro(self, name: str):
        """Make the named catalog macro current (stopped)."""
        self.ctx.macro = self.catalog.get(name)
        self.macro_name = name

    def next_macro(self):
        names = self.catalog.names()
        if not names:
            return
        if self.macro_name in names:
            name = names[(names.index(self.macro_name) + 1) % len(names)]
        else:
            name = names[0]
        self.select_macro(name)
        logger.info("Current macro is now %r", name)

    # --- Queries ---

    @property
    def blobs(self) -> List[Blob]:
        return self.ctx.blobs

    @property
    def size(self) -> Tuple[int, int]:
        return (self.settings.canvas.width, self.settings.canvas.height)

    @property
    def suspended(self) -> bool:
        return self.ctx.dialog is not None

    @property
    def recording(self) -> Optional[MacroRecording]:
        return self.ctx.recording

    @property
    def macro(self) -> Optional[Macro]:
        return self.ctx.macro

    def is_held(self, action: str) -> bool:
        return any(code in self.ctx.pressed for code in self.keymap.codes(action))

    # --- Oscillator targets ---

    def _apply_bearing_shift(self, value: float):
        for blob in self.ctx.blobs:
            blob.bearing_shift = value

    def _apply_hue(self, value: float):
        for blob in self.ctx.blobs:
            blob.colour.set_hue(value)

    # --- Frame ---

    def update(self, dt: float) -> bool:
        """
        Advance the simulation by ``dt`` seconds.

        Returns:
            False if the simulation is suspended and nothing happened.
        """
        if self.suspended:
            return False

        ctx = self.ctx
        for name, oscillator in ctx.oscillators:
            if name == "bearing_shift" and not self.is_held("wavy"):
                continue
            oscillator.update(dt)

        if ctx.macro is not None and ctx.macro.running:
            ctx.macro.update(dt, self.fire_macro_event)

        # Re-applied every tick so holding the key keeps steering the flock
        if self.is_held("center"):
            width, height = self.size
            self.click(width / 2, height / 2)

        blob_cfg = self.settings.blob
        speed = blob_cfg.slow_speed if self.is_held("slow") else blob_cfg.speed
        paused = self.is_held("pause")
        randomise_speed = self.is_held("randomise_speed")
        for blob in self.ctx.blobs:
            blob.update(dt, speed, paused=paused, randomise_speed=randomise_speed)

        return True

    def draw(self, surface: DrawSurface):
        draw_frame(surface, self.ctx.blobs, self.settings, force_clear=self.ctx.needs_background)
        self.ctx.needs_background = False

    def tick(self, dt: float, surface: DrawSurface) -> bool:
        """Update then render one frame. Inert while suspended."""
        if not self.update(dt):
            return False
        self.draw(surface)
        return True

    # --- Input entry points (shared by live input and macro playback) ---

    def key_down(self, code: int):
        """Handle a key press; repeats of an already held key are ignored."""
        if code in self.ctx.pressed:
            return
        self.handle_keypress(code)
        self.ctx.pressed.add(code)

    def key_up(self, code: int):
        self.ctx.pressed.discard(code)

        if self.keymap.action(code) == "wavy":
            for blob in self.ctx.blobs:
                blob.bearing_shift = 0.0

    def click(self, x: float, y: float):
        dispatch_click(self.ctx.blobs, x, y, paused=self.is_held("pause"))

    def handle_keypress(self, code: int):
        """Run the one-shot effect of an action key."""
        action = self.keymap.action(code)
        if action is None:
            logger.debug("Ignoring unbound key %s", code)
            return

        ctx = self.ctx
        if action == "randomise":
            for blob in ctx.blobs:
                blob.bearing = self.rng.random() * 2 * math.pi
        elif action == "reverse":
            for blob in ctx.blobs:
                blob.bearing += math.pi
        elif action == "toggle_clear":
            self.settings.clear_canvas = not self.settings.clear_canvas
        elif action == "toggle_symmetry":
            self.settings.symmetry = not self.settings.symmetry
        elif action == "start_macro":
            if ctx.macro is not None:
                ctx.macro.start()
        elif action == "next_macro":
            self.next_macro()
        elif action == "help":
            if ctx.dialog is None:
                ctx.dialog = DIALOG_HELP
            elif ctx.dialog == DIALOG_HELP:
                ctx.dialog = None
        elif action == "settings":
            if ctx.dialog is None:
                ctx.dialog = DIALOG_SETTINGS
        elif action == "reset_settings":
            if ctx.dialog == DIALOG_SETTINGS:
                self.reset_settings()
        elif action == "escape":
            if ctx.dialog == DIALOG_SETTINGS:
                self.commit_settings()
            else:
                ctx.dialog = None

    def fire_macro_event(self, event: MacroEvent):
        """Dispatch a macro event as if it were live input."""
        if event.is_click:
            width, height = self.size
            x_pct, y_pct = event.coords
            self.click(x_pct * width / 100, y_pct * height / 100)
            return

        code = self.keymap.code(event.key)
        if code is None:
            logger.debug("Ignoring macro event for unknown key %r", event.key)
            return

        if event.type == "keydown":
            self.key_down(code)
        else:
            self.key_up(code)

    # --- Live input ---

    def on_live_key_down(self, code: int):
        if code in self.ctx.pressed:
            return
        action = self.keymap.action(code)
        if action is not None and self.ctx.recording is not None:
            self.ctx.recording.add_key_event(action, "keydown")
        self.key_down(code)

    def on_live_key_up(self, code: int):
        action = self.keymap.action(code)
        if action is not None and self.ctx.recording is not None:
            self.ctx.recording.add_key_event(action, "keyup")
        self.key_up(code)

    def on_live_click(self, x: float, y: float):
        self.click(x, y)
        if self.ctx.recording is not None:
            width, height = self.size
            self.ctx.recording.add_click(x, y, width, height)
