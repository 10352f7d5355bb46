"""
Unit tests for the UID registry.
"""

import json

import pytest

from comparator.models import UIDList
from comparator.registry import JSONFileRegistry, RegistryError


@pytest.fixture
def registry(tmp_path):
    return JSONFileRegistry(tmp_path / "nested" / "uids.json")


class TestJSONFileRegistry:
    """Tests for JSONFileRegistry."""

    def test_missing_file_loads_empty(self, registry):
        """Test that a missing file reads as an empty registry."""
        assert registry.load() == UIDList()

    def test_set_my_uid_strips_and_persists(self, registry):
        """Test that the reference UID is stripped and written to disk."""
        registry.set_my_uid("  me  ")

        stored = json.loads(registry.path.read_text(encoding="utf-8"))
        assert stored == {"myUid": "me", "othersUids": []}
        assert registry.load().my_uid == "me"

    @pytest.mark.parametrize("uid", ["", "   ", None, 42])
    def test_set_my_uid_rejects_invalid(self, registry, uid):
        """Test that blank or non-string UIDs are rejected."""
        with pytest.raises(RegistryError, match="Invalid UID"):
            registry.set_my_uid(uid)

    def test_set_others_cleans_entries(self, registry):
        """Test that blank and non-string entries are dropped."""
        uids = registry.set_others_uids([" a ", "", "  ", 7, None, "b"])
        assert uids.others_uids == ["a", "b"]
        assert registry.load().others_uids == ["a", "b"]

    def test_set_others_requires_list(self, registry):
        """Test that a non-list argument is rejected."""
        with pytest.raises(RegistryError, match="list"):
            registry.set_others_uids("a,b")

    def test_add_other_uid_skips_duplicates(self, registry):
        """Test that adding an existing UID is a no-op."""
        registry.add_other_uid("a")
        registry.add_other_uid(" a ")
        uids = registry.add_other_uid("b")
        assert uids.others_uids == ["a", "b"]

    def test_add_other_uid_rejects_blank(self, registry):
        """Test that adding a blank UID fails."""
        with pytest.raises(RegistryError):
            registry.add_other_uid("  ")

    def test_remove_other_uid(self, registry):
        """Test removing a registered UID."""
        registry.set_others_uids(["a", "b", "c"])
        uids = registry.remove_other_uid("b")
        assert uids.others_uids == ["a", "c"]

    def test_remove_unknown_uid_is_ignored(self, registry):
        """Test that removing an unknown UID does not fail."""
        registry.set_others_uids(["a"])
        assert registry.remove_other_uid("zzz").others_uids == ["a"]

    def test_keeps_reference_when_editing_others(self, registry):
        """Test that editing targets leaves the reference UID alone."""
        registry.set_my_uid("me")
        registry.add_other_uid("a")
        assert registry.load() == UIDList(my_uid="me", others_uids=["a"])

    def test_malformed_json_raises(self, tmp_path):
        """Test that an unreadable file raises RegistryError."""
        path = tmp_path / "uids.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(RegistryError, match="Failed to read"):
            JSONFileRegistry(path).load()

    def test_non_object_json_raises(self, tmp_path):
        """Test that a JSON document that is not an object is rejected."""
        path = tmp_path / "uids.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(RegistryError, match="Malformed"):
            JSONFileRegistry(path).load()
