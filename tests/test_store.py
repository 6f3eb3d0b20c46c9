"""Tests for loading capture exports and overrides."""

import json
import logging

import pytest

from ui_inventory.store import load_captures, load_overrides, parse_captures, parse_overrides


class TestLoadCaptures:
    """Tests for load_captures."""

    def test_object_layout(self, captures_file):
        """Test the {captures, overrides} export layout."""
        captures, overrides = load_captures(captures_file)
        assert [c.id for c in captures] == ["cap_1", "cap_2"]
        assert overrides == {}

    def test_bare_list(self, tmp_path, capture_data):
        """Test a bare list of captures is accepted."""
        path = tmp_path / "captures.json"
        path.write_text(json.dumps([capture_data]))
        captures, overrides = load_captures(path)
        assert len(captures) == 1
        assert overrides == {}

    def test_overrides_in_export(self, tmp_path, capture_data):
        """Test overrides embedded in the export are parsed."""
        path = tmp_path / "captures.json"
        path.write_text(json.dumps({
            "captures": [capture_data],
            "overrides": {"comp_abc": {"displayName": "Primary", "categoryOverride": "Actions"}},
        }))
        _, overrides = load_captures(path)
        assert overrides["comp_abc"].display_name == "Primary"
        assert overrides["comp_abc"].category_override == "Actions"

    def test_malformed_capture_skipped_with_warning(self, captures_file, caplog):
        """Test a malformed capture is skipped and logged."""
        with caplog.at_level(logging.WARNING):
            captures, _ = load_captures(captures_file)
        assert len(captures) == 2
        assert "Skipping malformed capture at index 2" in caplog.text

    def test_missing_file(self, tmp_path):
        """Test a missing export raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_captures(tmp_path / "missing.json")

    def test_unexpected_layout(self, tmp_path):
        """Test a JSON scalar yields nothing."""
        path = tmp_path / "captures.json"
        path.write_text(json.dumps("not captures"))
        assert load_captures(path) == ([], {})


class TestOverrides:
    """Tests for override parsing and loading."""

    def test_parse_overrides(self):
        """Test malformed override entries are dropped."""
        overrides = parse_overrides({"comp_a": {"statusOverride": "Canonical"}, "comp_b": "bad"})
        assert list(overrides) == ["comp_a"]
        assert overrides["comp_a"].status_override == "Canonical"

    def test_load_overrides(self, tmp_path):
        """Test a standalone overrides file is loaded."""
        path = tmp_path / "overrides.json"
        path.write_text(json.dumps({"comp_a": {"typeOverride": "primary-button"}}))
        assert load_overrides(path)["comp_a"].type_override == "primary-button"

    def test_load_overrides_not_an_object(self, tmp_path):
        """Test a non-object overrides file is ignored."""
        path = tmp_path / "overrides.json"
        path.write_text(json.dumps(["comp_a"]))
        assert load_overrides(path) == {}

    def test_parse_captures_keeps_order(self):
        """Test valid captures keep their input order."""
        items = [{"id": "b"}, {"id": "a"}, {"url": "x"}]
        assert [c.id for c in parse_captures(items)] == ["b", "a"]
