"""Key-value settings persistence.

Settings are stored as a flat JSON object. Loading overlays stored
values on top of the defaults, so a partial or older settings file
still yields a complete TimelineSettings.
"""

import json
import logging
from pathlib import Path

from doc_timeline.config import TimelineSettings

logger = logging.getLogger(__name__)


class JsonSettingsStore:
    """Settings store backed by a JSON file on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> dict:
        """Load stored values. Missing or unreadable files yield an empty dict."""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring invalid settings file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self.path}: expected a JSON object")
            return {}
        return data

    def save(self, values: dict) -> None:
        """Persist values to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(values, indent=2), encoding="utf-8")
        logger.debug(f"Saved settings to {self.path}")


class MemorySettingsStore:
    """In-process settings store, for embedding and tests."""

    def __init__(self, values: dict | None = None):
        self.values: dict = dict(values or {})

    def load(self) -> dict:
        return dict(self.values)

    def save(self, values: dict) -> None:
        self.values = dict(values)


def load_settings(store) -> TimelineSettings:
    """Load settings from a store, filling gaps with defaults.

    Unknown keys are ignored. Invalid values raise pydantic.ValidationError.
    """
    stored = store.load()
    known = {k: v for k, v in stored.items() if k in TimelineSettings.model_fields}
    dropped = sorted(set(stored) - set(known))
    if dropped:
        logger.debug(f"Ignoring unknown settings keys: {dropped}")
    settings = TimelineSettings(**known)
    logger.info(f"Settings loaded: {settings.model_dump(mode='json')}")
    return settings


def save_settings(store, settings: TimelineSettings) -> None:
    store.save(settings.model_dump(mode="json"))
    logger.info(f"Settings saved: {settings.model_dump(mode='json')}")
