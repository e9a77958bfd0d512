"""
User customisable settings and their best-effort persistence.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# Version of the settings structure.
# Increment this whenever fields are added, removed or renamed so that
# stored settings from an older layout are discarded.
SETTINGS_VERSION = "1.2"


class CanvasSettings(BaseModel):
    """Drawing surface configuration."""

    model_config = ConfigDict(extra="forbid")

    width: int = Field(1280, ge=1, description="Surface width in pixels")
    height: int = Field(720, ge=1, description="Surface height in pixels")
    background_colour: str = "black"
    border_colour: str = "black"


class BlobSettings(BaseModel):
    """Blob appearance and motion."""

    model_config = ConfigDict(extra="forbid")

    radius: int = Field(3, ge=1)
    count: int = Field(1300, ge=0)
    speed: float = Field(100.0, description="Pixels per second")
    slow_speed: float = 50.0
    max_extra_speed: float = Field(100.0, ge=0, description="Range of the per-blob random speed bias")


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    canvas: CanvasSettings = Field(default_factory=CanvasSettings)
    blob: BlobSettings = Field(default_factory=BlobSettings)
    clear_canvas: bool = True
    symmetry: bool = True
    hue_change_per_second: float = 30.0
    version: str = SETTINGS_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=4)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """
        Build settings from their nested dict form.

        Raises:
            ValidationError: If keys are unknown or values have the wrong type.
        """
        return cls.model_validate(data)


class SettingsStore:
    """
    Key/value persistence for Settings backed by a single JSON file.

    Loading never raises: anything unreadable, malformed or written for a
    different settings version falls back to the defaults.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else self._default_path()
        # mtime of the file as last loaded or saved through this store
        self._seen_mtime: Optional[int] = None

    def _default_path(self) -> Path:
        # ~/.config/blobflock/settings.json
        return Path.home() / ".config" / "blobflock" / "settings.json"

    def _mtime(self) -> Optional[int]:
        try:
            return self.path.stat().st_mtime_ns
        except OSError:
            return None

    def changed(self) -> bool:
        """True if the file was written by someone else since the last load/save."""
        return self._mtime() != self._seen_mtime

    def load(self) -> Settings:
        self._seen_mtime = self._mtime()
        if self._seen_mtime is None:
            return Settings()

        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Saved settings were not valid JSON (%s) - using defaults", e)
            return Settings()

        if not isinstance(data, dict) or data.get("version") != SETTINGS_VERSION:
            logger.info("Saved settings were for an old version - using defaults")
            return Settings()

        try:
            return Settings.from_dict(data)
        except ValidationError as e:
            logger.warning(
                "Saved settings had an unexpected layout (%d errors) - using defaults",
                e.error_count(),
            )
            return Settings()

    def save(self, settings: Settings):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(settings.to_json())
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self.path, e)
            return
        self._seen_mtime = self._mtime()

    def reset(self) -> Settings:
        """Remove stored settings and return the defaults."""
        if self.path.exists():
            self.path.unlink()
        self._seen_mtime = None
        return Settings()
