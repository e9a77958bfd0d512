"""Recording and playback of timestamped input macros."""

from blobflock.macros.catalog import BUILTIN_MACROS, MacroCatalog
from blobflock.macros.events import MacroEvent, MacroValidationError, parse_macro
from blobflock.macros.player import Macro
from blobflock.macros.recorder import MacroRecording

__all__ = [
    "BUILTIN_MACROS",
    "Macro",
    "MacroCatalog",
    "MacroEvent",
    "MacroRecording",
    "MacroValidationError",
    "parse_macro",
]
