"""
Named macro collection: built-in demos plus user-authored macros.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from blobflock.macros.events import MacroEvent, MacroValidationError, parse_macro
from blobflock.macros.player import Macro

logger = logging.getLogger(__name__)


BUILTIN_MACROS: Dict[str, List[Dict[str, Any]]] = {
    "test": [
        {"time": 0, "type": "keydown", "key": "pause"},
        {"time": 0, "type": "keydown", "key": "center"},
        {"time": 0.1, "type": "keyup", "key": "center"},
        {"time": 0.1, "type": "keyup", "key": "pause"},
        {"time": 1, "type": "keydown", "key": "randomise"},
        {"time": 1.1, "type": "keyup", "key": "randomise"},
        {"time": 3, "type": "click", "coords": [0, 0]},
        {"time": 4, "type": "keydown", "key": "toggle_clear"},
        {"time": 4, "type": "keydown", "key": "center"},
        {"time": 4.1, "type": "keyup", "key": "center"},
        {"time": 4.1, "type": "keyup", "key": "toggle_clear"},
    ],
    "test2": [
        {"time": 0, "type": "keydown", "key": "pause"},
        {"time": 0.179, "type": "keydown", "key": "center"},
        {"time": 0.299, "type": "keyup", "key": "center"},
        {"time": 0.558, "type": "keyup", "key": "pause"},
        {"time": 0.64, "type": "keydown", "key": "randomise_speed"},
        {"time": 2.413, "type": "click", "coords": [29.57894736842105, 28.125]},
        {"time": 7.306, "type": "keyup", "key": "randomise_speed"},
    ],
}


class MacroCatalog:
    """
    Mapping of macro name to validated event list.

    New macros are validated before they are stored; a rejected macro
    leaves the catalog untouched.
    """

    def __init__(self, include_builtins: bool = True):
        self._macros: Dict[str, List[MacroEvent]] = {}
        if include_builtins:
            for name, events in BUILTIN_MACROS.items():
                self._macros[name] = parse_macro(events)

    def add(self, name: str, source: Union[str, List[Any]]) -> List[MacroEvent]:
        """
        Validate and store a macro, replacing any macro of the same name.

        Args:
            name: Macro name (surrounding whitespace is stripped).
            source: JSON text or decoded list of event dicts.

        Returns:
            The stored events.

        Raises:
            MacroValidationError: If the name is empty or the source invalid.
        """
        name = name.strip()
        if not name:
            raise MacroValidationError("Macro name must not be empty")

        try:
            events = parse_macro(source.strip() if isinstance(source, str) else source)
        except MacroValidationError as e:
            logger.warning("Rejected macro %r: %s", name, e)
            raise

        self._macros[name] = events
        return events

    def get(self, name: str) -> Macro:
        """Return a fresh (stopped) player for the named macro."""
        return Macro(self._macros[name], name=name)

    def events(self, name: str) -> List[MacroEvent]:
        return list(self._macros[name])

    def names(self) -> List[str]:
        return list(self._macros)

    def export(self, name: str) -> str:
        """Return the named macro as JSON text."""
        return json.dumps([e.to_dict() for e in self._macros[name]])

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {name: [e.to_dict() for e in events] for name, events in self._macros.items()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def load_file(self, path: Union[str, Path]):
        """
        Merge macros from a JSON file mapping names to event lists.

        The whole file is validated before anything is stored.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as e:
            raise MacroValidationError(f"{path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MacroValidationError(f"{path} must map macro names to event lists")

        staged = {}
        for name, source in data.items():
            if not str(name).strip():
                raise MacroValidationError("Macro name must not be empty")
            try:
                staged[str(name).strip()] = parse_macro(source)
            except MacroValidationError as e:
                raise MacroValidationError(f"Macro {name!r} in {path}: {e}") from e

        self._macros.update(staged)
        logger.info("Loaded %d macros from %s", len(staged), path)

    def save_file(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json())
        return path

    def __contains__(self, name: str) -> bool:
        return name in self._macros

    def __len__(self) -> int:
        return len(self._macros)
