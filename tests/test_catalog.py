"""
Tests for event catalog loading and validation.
"""

import json

import pytest

from starfest.errors import ConfigError
from starfest.events.catalog import load_catalog


class TestLoadCatalog:
    """Tests for load_catalog with valid definitions."""

    def test_finds_active_event(self, catalog):
        event = catalog.active_event()
        assert event.id == "E1"
        assert event.name == "Star Fest"
        assert set(event.teams) == {"T1", "T2"}

    def test_keeps_all_events(self, catalog):
        assert [e.id for e in catalog.events] == ["E0", "E1"]
        assert catalog.get("E0").active is False

    def test_accepts_plain_list(self):
        catalog = load_catalog([{"id": "A", "name": "A Fest", "active": True}])
        assert catalog.active_event().id == "A"

    def test_accepts_team_list(self):
        catalog = load_catalog([
            {"id": "A", "name": "A Fest", "teams": [{"id": "x", "name": "Ex"}, {"id": 7}]},
        ])
        event = catalog.get("A")
        assert event.team_name("x") == "Ex"
        # Numeric ids are normalized to strings, name defaults to the id
        assert event.team_name("7") == "7"

    def test_no_active_event(self):
        catalog = load_catalog([{"id": "A", "name": "A Fest"}])
        assert catalog.active_event() is None

    def test_loads_from_file(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text(json.dumps([{"id": "A", "name": "A Fest", "active": True}]), encoding="utf-8")
        assert load_catalog(path).active_event().id == "A"

    def test_event_info_is_plain_dict(self, event):
        info = event.to_dict()
        assert info == {
            "id": "E1",
            "name": "Star Fest",
            "teams": {"T1": {"name": "Team One"}, "T2": {"name": "Team Two"}},
            "active": True,
        }
        json.dumps(info)


class TestCatalogValidation:
    """Tests for ConfigError on malformed definitions."""

    def test_more_than_one_active(self):
        with pytest.raises(ConfigError, match="More than one active event"):
            load_catalog([
                {"id": "A", "name": "A", "active": True},
                {"id": "B", "name": "B", "active": True},
            ])

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_catalog(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Malformed"):
            load_catalog(path)

    def test_duplicate_event_ids(self):
        with pytest.raises(ConfigError, match="Duplicate event id"):
            load_catalog([{"id": "A", "name": "A"}, {"id": "A", "name": "B"}])

    def test_duplicate_team_ids(self):
        with pytest.raises(ConfigError, match="duplicate team id"):
            load_catalog([{"id": "A", "name": "A", "teams": [{"id": "x"}, {"id": "x"}]}])

    def test_missing_name(self):
        with pytest.raises(ConfigError, match="name"):
            load_catalog([{"id": "A"}])

    def test_non_boolean_active(self):
        with pytest.raises(ConfigError, match="active"):
            load_catalog([{"id": "A", "name": "A", "active": "yes"}])

    def test_wrong_top_level_type(self):
        with pytest.raises(ConfigError):
            load_catalog({"something": "else"})

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_bytes(b'[{"id": "A", "name": "\xff\xfe"}]')
        with pytest.raises(ConfigError, match="Malformed"):
            load_catalog(path)


class TestCatalogImmutability:
    """Tests for nested team info staying isolated from callers."""

    SOURCE = [{
        "id": "A",
        "name": "A Fest",
        "active": True,
        "teams": {"T1": {"name": "Team One", "tags": ["red"]}},
    }]

    def test_event_info_nested_values_are_copies(self):
        event = load_catalog(self.SOURCE).active_event()
        info = event.to_dict()
        info["teams"]["T1"]["tags"].append("blue")
        assert event.to_dict()["teams"]["T1"]["tags"] == ["red"]

    def test_source_changes_after_load_are_ignored(self):
        source = json.loads(json.dumps(self.SOURCE))
        event = load_catalog(source).active_event()
        source[0]["teams"]["T1"]["tags"].append("blue")
        assert event.teams["T1"]["tags"] == ["red"]
