"""Central configuration for the Document Timeline system."""

import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load .env file from project root
load_dotenv()


class SearchMode(str, Enum):
    METADATA = "metadata"
    INLINE = "inline"
    BOTH = "both"


class SortOrder(str, Enum):
    DESCENDING = "descending"  # most recent at the top (0%)
    ASCENDING = "ascending"


# Date property used by each settings profile
DATE_PROPERTY_PROFILES = {
    "default": "creation_date",
    "simple": "date",
}


class TimelineSettings(BaseModel):
    """User-facing timeline settings.

    Persisted through a settings store and passed explicitly into every
    selection and layout call.
    """

    tag: str = "#timeline"
    date_property: str = DATE_PROPERTY_PROFILES["default"]
    search_in: SearchMode = SearchMode.BOTH
    threshold: float = Field(default=2.0, gt=0)
    order: SortOrder = SortOrder.DESCENDING
    snippet_length: int = Field(default=100, gt=0)

    @field_validator("search_in", mode="before")
    @classmethod
    def _accept_frontmatter_alias(cls, value):
        # Older settings files call metadata search "frontmatter"
        if isinstance(value, str) and value.strip().lower() == "frontmatter":
            return SearchMode.METADATA
        return value

    @classmethod
    def for_profile(cls, profile: str, **overrides) -> "TimelineSettings":
        """Build settings for a named profile ("default" or "simple")."""
        if profile not in DATE_PROPERTY_PROFILES:
            raise ValueError(f"Unknown settings profile: {profile!r}")
        values = {"date_property": DATE_PROPERTY_PROFILES[profile]}
        values.update(overrides)
        return cls(**values)


class Config(BaseModel):
    """Runtime configuration for the Document Timeline system.

    Paths are relative to the working directory unless absolute.
    Every field can be overridden via environment or .env file.
    """

    # Paths
    notes_dir: Path = Field(default=Path(os.getenv("TIMELINE_NOTES_DIR", ".")))
    settings_path: Path = Field(
        default=Path(os.getenv("TIMELINE_SETTINGS_PATH", "data/timeline_settings.json"))
    )
    output_path: Path = Field(
        default=Path(os.getenv("TIMELINE_OUTPUT_PATH", "data/timeline.html"))
    )

    # Corpus
    note_pattern: str = "*.md"

    # Processing
    num_workers: int = Field(default=int(os.getenv("TIMELINE_WORKERS", "8")), gt=0)
