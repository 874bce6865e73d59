"""Tests for timeline settings and their persistence."""

import json

import pytest
from pydantic import ValidationError

from doc_timeline.config import Config, SearchMode, SortOrder, TimelineSettings
from doc_timeline.settings import (
    JsonSettingsStore,
    MemorySettingsStore,
    load_settings,
    save_settings,
)


class TestTimelineSettings:
    """Tests for the TimelineSettings model."""

    def test_defaults(self):
        settings = TimelineSettings()
        assert settings.tag == "#timeline"
        assert settings.date_property == "creation_date"
        assert settings.search_in == SearchMode.BOTH
        assert settings.threshold == 2.0
        assert settings.order == SortOrder.DESCENDING
        assert settings.snippet_length == 100

    def test_frontmatter_alias(self):
        assert TimelineSettings(search_in="frontmatter").search_in == SearchMode.METADATA

    def test_rejects_bad_values(self):
        with pytest.raises(ValidationError):
            TimelineSettings(threshold=0)
        with pytest.raises(ValidationError):
            TimelineSettings(search_in="everywhere")

    def test_simple_profile_uses_date(self):
        assert TimelineSettings.for_profile("simple").date_property == "date"
        assert TimelineSettings.for_profile("default").date_property == "creation_date"

    def test_profile_overrides(self):
        settings = TimelineSettings.for_profile("simple", tag="#journal")
        assert settings.tag == "#journal"
        assert settings.date_property == "date"

    def test_unknown_profile(self):
        with pytest.raises(ValueError):
            TimelineSettings.for_profile("exotic")


def test_config_defaults():
    """Runtime config has usable paths and a positive worker count."""
    config = Config()
    assert config.note_pattern == "*.md"
    assert config.num_workers > 0
    assert config.settings_path.suffix == ".json"


class TestLoadSettings:
    """Tests for load_settings() / save_settings()."""

    def test_empty_store_gives_defaults(self):
        assert load_settings(MemorySettingsStore()) == TimelineSettings()

    def test_partial_values_overlay_defaults(self):
        settings = load_settings(MemorySettingsStore({"tag": "#journal"}))
        assert settings.tag == "#journal"
        assert settings.search_in == SearchMode.BOTH

    def test_unknown_keys_ignored(self):
        settings = load_settings(MemorySettingsStore({"tag": "x", "colour": "blue"}))
        assert settings.tag == "x"

    def test_invalid_value_raises(self):
        with pytest.raises(ValidationError):
            load_settings(MemorySettingsStore({"threshold": -5}))

    def test_save_then_load(self):
        store = MemorySettingsStore()
        save_settings(store, TimelineSettings(tag="#x", search_in=SearchMode.INLINE))
        assert store.values["search_in"] == "inline"
        assert load_settings(store).search_in == SearchMode.INLINE


class TestJsonSettingsStore:
    """Tests for the JSON file store."""

    def test_missing_file(self, tmp_path):
        assert JsonSettingsStore(tmp_path / "none.json").load() == {}

    def test_round_trip_creates_parent(self, tmp_path):
        store = JsonSettingsStore(tmp_path / "nested" / "settings.json")
        save_settings(store, TimelineSettings(tag="#trip", threshold=3.5))
        assert store.path.exists()
        loaded = load_settings(store)
        assert loaded.tag == "#trip"
        assert loaded.threshold == 3.5

    def test_invalid_json_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        assert JsonSettingsStore(path).load() == {}

    def test_non_object_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps(["tag"]))
        assert JsonSettingsStore(path).load() == {}
