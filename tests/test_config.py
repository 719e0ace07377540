"""Tests for settings loading."""

import pytest

from config import load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in (
        "APP_ENV",
        "LOG_LEVEL",
        "VALIDATOR_NULL_IS_MISSING",
        "VALIDATOR_EMPTY_STRING_IS_MISSING",
        "VALIDATOR_PROFILES_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_file(tmp_path) -> None:
    """No config file means built-in defaults."""
    settings = load_settings(str(tmp_path / "absent.yaml"))
    assert settings.validation.null_is_missing is True
    assert settings.validation.empty_string_is_missing is False
    assert settings.validation.profiles_path.endswith("profiles.json")
    assert settings.logging.level == "INFO"


def test_yaml_values_are_applied(tmp_path) -> None:
    """Values from the YAML file override defaults."""
    path = tmp_path / "app.yaml"
    path.write_text(
        "logging:\n  level: debug\nvalidation:\n  empty_string_is_missing: true\n",
        encoding="utf-8",
    )
    settings = load_settings(str(path))
    assert settings.logging.level == "DEBUG"
    assert settings.validation.empty_string_is_missing is True


def test_env_overrides_file(tmp_path, monkeypatch) -> None:
    """Environment variables win over the config file."""
    path = tmp_path / "app.yaml"
    path.write_text("validation:\n  null_is_missing: true\n", encoding="utf-8")
    monkeypatch.setenv("VALIDATOR_NULL_IS_MISSING", "false")
    monkeypatch.setenv("VALIDATOR_PROFILES_PATH", "/tmp/custom.json")
    monkeypatch.setenv("APP_ENV", "prod")
    settings = load_settings(str(path))
    assert settings.validation.null_is_missing is False
    assert settings.validation.profiles_path == "/tmp/custom.json"
    assert settings.meta.environment == "prod"


def test_non_mapping_yaml_rejected(tmp_path) -> None:
    """A config file that isn't a mapping is an error."""
    path = tmp_path / "app.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(str(path))
