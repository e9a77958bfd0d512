"""
Keyboard bindings: symbolic action names to pygame key codes.
"""

from typing import Dict, Optional, Sequence, Tuple, Union

import pygame

# Held conditions (pause, slow, wavy, randomise_speed, center) are read
# every frame; the rest fire once per key press. The first code of each
# binding is the one macro playback presses.
KEY_NAMES: Dict[str, Tuple[int, ...]] = {
    "pause": (pygame.K_LSHIFT, pygame.K_RSHIFT),
    "randomise": (pygame.K_r,),
    "center": (pygame.K_c,),
    "slow": (pygame.K_s,),
    "wavy": (pygame.K_w,),
    "settings": (pygame.K_o,),
    "toggle_clear": (pygame.K_k,),
    "help": (pygame.K_h,),
    "toggle_symmetry": (pygame.K_y,),
    "reverse": (pygame.K_v,),
    "randomise_speed": (pygame.K_q,),
    "start_macro": (pygame.K_m,),
    "next_macro": (pygame.K_n,),
    "reset_settings": (pygame.K_BACKSPACE,),
    "escape": (pygame.K_ESCAPE,),
}

KEY_HELP_TEXT: Dict[str, str] = {
    "pause": "Hold to pause all blob movement. Hold and click to move all blobs to the clicked position",
    "randomise": "Randomise the direction of each blob",
    "center": "Make all blobs head towards the center of the screen",
    "reverse": "Reverse the direction of all blobs",
    "slow": "Hold to make all blobs travel at a slower speed (defined in the settings)",
    "wavy": "Hold to make all blobs travel in a wavy line",
    "randomise_speed": "Hold to increase/decrease each blob's speed by a random amount",
    "start_macro": "Start the current macro",
    "next_macro": "Switch to the next macro",
    "settings": "Bring up the settings dialog",
    "reset_settings": "In the settings dialog: restore the default settings",
    "toggle_clear": "Toggle clearing of the screen at the beginning of each frame",
    "toggle_symmetry": "Toggle symmetry",
    "help": "Toggle this help",
    "escape": "Apply settings/Close dialog",
}


class KeyMap:
    """Two-way lookup between action names and key codes."""

    def __init__(self, bindings: Optional[Dict[str, Union[int, Sequence[int]]]] = None):
        self.bindings: Dict[str, Tuple[int, ...]] = {}
        for name, codes in (bindings or KEY_NAMES).items():
            self.bindings[name] = (codes,) if isinstance(codes, int) else tuple(codes)
        self._by_code = {code: name for name, codes in self.bindings.items() for code in codes}

    def code(self, action: str) -> Optional[int]:
        """Primary key code for ``action``."""
        codes = self.bindings.get(action)
        return codes[0] if codes else None

    def codes(self, action: str) -> Tuple[int, ...]:
        return self.bindings.get(action, ())

    def action(self, code: int) -> Optional[str]:
        """Return the action bound to ``code``, or None for unbound keys."""
        return self._by_code.get(code)

    def key_label(self, action: str) -> str:
        codes = self.bindings.get(action)
        if not codes:
            return "?"
        return "/".join(pygame.key.name(code).title() for code in codes)

    def help_rows(self) -> list[tuple[str, str]]:
        """(key label, help text) pairs in help display order."""
        return [(self.key_label(name), text) for name, text in KEY_HELP_TEXT.items()]
