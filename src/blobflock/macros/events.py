"""Macro event model and validation of user-authored macro source.

A macro is stored as a JSON array of events, each an object with a
``time`` (seconds from macro start), a ``type`` (``keydown``, ``keyup`` or
``click``) and either a ``key`` (symbolic action name) or ``coords``
(percentages of surface width and height).

Example:
    [
        {"time": 0, "type": "keydown", "key": "pause"},
        {"time": 0.5, "type": "click", "coords": [50, 50]},
        {"time": 0.6, "type": "keyup", "key": "pause"}
    ]
"""

import json
from typing import Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field, ValidationError, model_validator


class MacroValidationError(ValueError):
    """Raised when macro source is rejected before reaching the player."""


class MacroEvent(BaseModel):
    """A single timestamped input event.

    Attributes:
        time: Seconds from macro start (non-negative).
        type: Event kind, one of "keydown", "keyup" or "click".
        key: Symbolic action name for key events.
        coords: (x, y) as percentages of surface width/height for clicks.
    """

    time: float = Field(..., ge=0, description="Seconds from macro start")
    type: Literal["keydown", "keyup", "click"]
    key: Optional[str] = Field(None, description="Action name for key events")
    coords: Optional[Tuple[float, float]] = Field(
        None, description="Click position as percentages of width/height"
    )

    @model_validator(mode="after")
    def _check_payload(self) -> "MacroEvent":
        if self.type == "click":
            if self.coords is None:
                raise ValueError("click events need coords")
            if not all(0 <= c <= 100 for c in self.coords):
                raise ValueError("click coords must be percentages in [0, 100]")
        elif not self.key:
            raise ValueError(f"{self.type} events need a key")
        return self

    @property
    def is_click(self) -> bool:
        return self.type == "click"

    def to_dict(self) -> dict[str, Any]:
        """Return the event in macro catalog format."""
        data = self.model_dump(exclude_none=True)
        if "coords" in data:
            data["coords"] = list(data["coords"])
        return data


def parse_macro(source: Union[str, List[Any]]) -> List[MacroEvent]:
    """
    Validate macro source and return its events.

    Args:
        source: JSON text or an already decoded list of event dicts.

    Returns:
        Events in their stored order.

    Raises:
        MacroValidationError: If the source is not valid JSON, not a list,
            contains a malformed event, or is not in non-decreasing time order.
    """
    if isinstance(source, str):
        try:
            source = json.loads(source)
        except json.JSONDecodeError as e:
            raise MacroValidationError(f"Macro is not valid JSON: {e}") from e

    if not isinstance(source, list):
        raise MacroValidationError("Macro must be a list of events")

    events = []
    for i, raw in enumerate(source):
        if isinstance(raw, MacroEvent):
            events.append(raw)
            continue
        try:
            events.append(MacroEvent.model_validate(raw))
        except ValidationError as e:
            raise MacroValidationError(f"Invalid event at index {i}: {e}") from e

    for prev, cur in zip(events, events[1:]):
        if cur.time < prev.time:
            raise MacroValidationError(
                f"Events must be in time order ({cur.time} follows {prev.time})"
            )

    return events
