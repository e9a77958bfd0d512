"""
Interactive pygame window around a Simulation.

The window surface is persistent, so with canvas clearing turned off
blobs leave trails. Dialogs are drawn on a copy of the frame and
suspend the simulation while shown.
"""

import logging
from pathlib import Path
from typing import Optional

import pygame

from blobflock.renderer import PygameSurface
from blobflock.simulation import DIALOG_HELP, DIALOG_SETTINGS, Simulation

logger = logging.getLogger(__name__)

PANEL_BG = (16, 16, 24)
PANEL_BORDER = (90, 90, 120)
TEXT_COLOUR = (230, 230, 230)
KEY_COLOUR = (245, 158, 11)


class App:
    def __init__(self, simulation: Simulation, fps: int = 60, record_out: Optional[Path] = None):
        self.sim = simulation
        self.fps = fps
        self.record_out = record_out
        self.running = False

        pygame.init()
        self.screen = pygame.display.set_mode(simulation.size)
        pygame.display.set_caption(f"Blobflock - macro: {simulation.macro_name}")
        self.clock = pygame.time.Clock()
        self.canvas = pygame.Surface(simulation.size)
        self.font = pygame.font.Font(None, 22)
        self._caption_macro = simulation.macro_name

    # --- Events ---

    def _handle_events(self):
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                self.running = False
            elif ev.type == pygame.KEYDOWN:
                self.sim.on_live_key_down(ev.key)
            elif ev.type == pygame.KEYUP:
                self.sim.on_live_key_up(ev.key)
            elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                if not self.sim.suspended:
                    self.sim.on_live_click(*ev.pos)

    # --- Dialogs ---

    def _draw_panel(self, rows: list[tuple[str, str]], title: str):
        line_h = self.font.get_linesize() + 2
        w, h = self.screen.get_size()
        panel_w = min(w - 40, 900)
        panel_h = min(h - 40, line_h * (len(rows) + 2) + 20)
        rect = pygame.Rect((w - panel_w) // 2, (h - panel_h) // 2, panel_w, panel_h)

        pygame.draw.rect(self.screen, PANEL_BG, rect)
        pygame.draw.rect(self.screen, PANEL_BORDER, rect, 1)

        x, y = rect.x + 14, rect.y + 10
        self.screen.blit(self.font.render(title, True, KEY_COLOUR), (x, y))
        y += line_h * 2
        for key, text in rows:
            if y > rect.bottom - line_h:
                break
            self.screen.blit(self.font.render(key, True, KEY_COLOUR), (x, y))
            self.screen.blit(self.font.render(text, True, TEXT_COLOUR), (x + 180, y))
            y += line_h

    def _draw_dialog(self):
        dialog = self.sim.ctx.dialog
        if dialog == DIALOG_HELP:
            self._draw_panel(self.sim.keymap.help_rows(), "Keys")
        elif dialog == DIALOG_SETTINGS:
            location = str(self.sim.store.path) if self.sim.store else "(not persisted)"
            rows = [("", line) for line in self.sim.settings.to_json().splitlines()]
            self._draw_panel(rows, f"Settings: {location}  -  Esc to apply, Backspace for defaults")

    # --- Main loop ---

    def run(self):
        self.running = True
        while self.running:
            dt = self.clock.tick(self.fps) / 1000.0
            self._handle_events()
            self._sync_window()

            self.sim.tick(dt, PygameSurface(self.canvas))

            self.screen.blit(self.canvas, (0, 0))
            self._draw_dialog()
            pygame.display.flip()

        self._save_recording()
        pygame.quit()

    def _sync_window(self):
        # Settings reloads may change the surface dimensions; macro switches the title
        if self.canvas.get_size() != self.sim.size:
            self.screen = pygame.display.set_mode(self.sim.size)
            self.canvas = pygame.Surface(self.sim.size)
        if self._caption_macro != self.sim.macro_name:
            self._caption_macro = self.sim.macro_name
            pygame.display.set_caption(f"Blobflock - macro: {self._caption_macro}")

    def _save_recording(self):
        recording = self.sim.recording
        if self.record_out is None or recording is None or not len(recording):
            return
        self.record_out.parent.mkdir(parents=True, exist_ok=True)
        self.record_out.write_text(recording.to_json())
        logger.info("Wrote %d recorded events to %s", len(recording), self.record_out)
