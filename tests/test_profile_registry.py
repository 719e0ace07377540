"""Tests for the profile registry."""

import json
import os

import pytest

from config import BASE_DIR
from core.profile_registry import ProfileRegistry, UnknownProfileError


def _write(tmp_path, payload) -> str:
    path = tmp_path / "profiles.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return str(path)


def test_shipped_profiles_include_example() -> None:
    """The bundled file defines the email-only example profile."""
    registry = ProfileRegistry()
    loaded = registry.load_file(os.path.join(BASE_DIR, "profiles.json"))
    assert loaded >= 1
    assert registry.get("example").required == ["email"]


def test_register_and_lookup() -> None:
    """Registered profiles can be looked up by name."""
    registry = ProfileRegistry()
    registry.register("signup", ["email", "password"], "New accounts")
    assert registry.has("signup")
    profile = registry.get("signup")
    assert profile.required == ["email", "password"]
    assert profile.description == "New accounts"


def test_names_are_sorted() -> None:
    """names() is stable regardless of registration order."""
    registry = ProfileRegistry()
    registry.register("b", [])
    registry.register("a", ["x"])
    assert registry.names() == ["a", "b"]


def test_unknown_profile_raises() -> None:
    """Looking up an unregistered name raises UnknownProfileError."""
    registry = ProfileRegistry()
    with pytest.raises(UnknownProfileError):
        registry.get("nope")
    assert not registry.has("nope")


def test_missing_file_leaves_registry_empty(tmp_path) -> None:
    """A missing profiles file is tolerated."""
    registry = ProfileRegistry()
    assert registry.load_file(str(tmp_path / "absent.json")) == 0
    assert registry.names() == []


def test_load_file_registers_all_profiles(tmp_path) -> None:
    """Every profile in the file is registered, description optional."""
    path = _write(tmp_path, {"profiles": {"a": {"required": ["x", "y"]}, "b": {"required": [], "description": "d"}}})
    registry = ProfileRegistry()
    assert registry.load_file(path) == 2
    assert registry.get("a").required == ["x", "y"]
    assert registry.get("b").description == "d"


def test_invalid_json_file_raises(tmp_path) -> None:
    """A corrupt profiles file is a configuration error."""
    path = _write(tmp_path, "{not json")
    with pytest.raises(ValueError, match="Invalid profiles file"):
        ProfileRegistry().load_file(path)


def test_missing_profiles_key_raises(tmp_path) -> None:
    """The file must wrap profiles in a 'profiles' object."""
    path = _write(tmp_path, {"example": {"required": ["email"]}})
    with pytest.raises(ValueError, match="'profiles'"):
        ProfileRegistry().load_file(path)


def test_bad_required_entry_raises(tmp_path) -> None:
    """Non-string field names in a profile are rejected at load time."""
    path = _write(tmp_path, {"profiles": {"a": {"required": ["x", 3]}}})
    with pytest.raises(ValueError, match="Invalid profile 'a'"):
        ProfileRegistry().load_file(path)


def test_blank_field_name_rejected() -> None:
    """Empty field names are not allowed in a profile."""
    with pytest.raises(ValueError):
        ProfileRegistry().register("a", ["email", ""])
