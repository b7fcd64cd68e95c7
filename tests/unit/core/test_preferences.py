"""Tests for the in-memory and TOML-backed preference stores."""

from pathlib import Path

import pytest

from plugin_index.core.preferences import InMemoryPreferences, Preferences, TomlPreferences


@pytest.fixture(params=["memory", "toml"])
def preferences(request: pytest.FixtureRequest, tmp_path: Path) -> Preferences:
    if request.param == "memory":
        return InMemoryPreferences()
    return TomlPreferences(tmp_path / "prefs" / "preferences.toml")


def test_getters_return_defaults_for_missing_keys(preferences: Preferences) -> None:
    assert preferences.get_string("missing", "fallback") == "fallback"
    assert preferences.get_int("missing", 7) == 7
    assert preferences.get_bool("missing", True) is True
    assert preferences.get_float("missing", 1.5) == 1.5
    assert preferences.has_key("missing") is False


def test_set_then_get_each_type(preferences: Preferences) -> None:
    preferences.set_string("plugin_index.name", "value")
    preferences.set_int("plugin_index.count", 3)
    preferences.set_bool("plugin_index.flag", False)
    preferences.set_float("plugin_index.ratio", 0.25)

    assert preferences.get_string("plugin_index.name") == "value"
    assert preferences.get_int("plugin_index.count") == 3
    assert preferences.get_bool("plugin_index.flag", True) is False
    assert preferences.get_float("plugin_index.ratio") == 0.25
    assert preferences.has_key("plugin_index.flag")


def test_mismatched_type_falls_back_to_default(preferences: Preferences) -> None:
    preferences.set_string("plugin_index.name", "not a number")

    assert preferences.get_int("plugin_index.name", 5) == 5
    assert preferences.get_bool("plugin_index.name", True) is True


def test_string_values_are_coerced(preferences: Preferences) -> None:
    preferences.set_string("plugin_index.count", "12")
    preferences.set_string("plugin_index.flag", "False")

    assert preferences.get_int("plugin_index.count") == 12
    assert preferences.get_bool("plugin_index.flag", True) is False


def test_delete_key_and_delete_all(preferences: Preferences) -> None:
    preferences.set_string("plugin_index.a", "1")
    preferences.set_string("plugin_index.b", "2")

    preferences.delete_key("plugin_index.a")
    preferences.delete_key("plugin_index.never-set")

    assert not preferences.has_key("plugin_index.a")
    assert preferences.has_key("plugin_index.b")

    preferences.delete_all()

    assert not preferences.has_key("plugin_index.b")


def test_toml_preferences_persist_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "preferences.toml"
    TomlPreferences(path).set_string("plugin_index.registries", '["https://example.com/r.xml"]')

    reopened = TomlPreferences(path)

    assert reopened.get_string("plugin_index.registries") == '["https://example.com/r.xml"]'


def test_toml_preferences_keep_comments(tmp_path: Path) -> None:
    path = tmp_path / "preferences.toml"
    path.write_text('# managed by hand\n"plugin_index.verbose_logging" = true\n', encoding="utf-8")

    prefs = TomlPreferences(path)
    prefs.set_bool("plugin_index.show_install_files", False)

    content = path.read_text(encoding="utf-8")
    assert "# managed by hand" in content
    assert prefs.get_bool("plugin_index.verbose_logging") is True
    assert prefs.get_bool("plugin_index.show_install_files", True) is False


def test_toml_preferences_missing_file_reads_as_empty(tmp_path: Path) -> None:
    prefs = TomlPreferences(tmp_path / "absent" / "preferences.toml")

    assert prefs.has_key("plugin_index.registries") is False
    prefs.delete_all()
    assert not (tmp_path / "absent").exists()


def test_in_memory_preferences_copy_initial_values() -> None:
    initial = {"plugin_index.a": "1"}
    prefs = InMemoryPreferences(initial)

    prefs.set_string("plugin_index.b", "2")

    assert initial == {"plugin_index.a": "1"}
    assert prefs.values == {"plugin_index.a": "1", "plugin_index.b": "2"}


@pytest.mark.parametrize("stored", ["--1", "²", "1²", ""])
def test_non_integer_strings_read_as_default_int(preferences: Preferences, stored: str) -> None:
    preferences.set_string("plugin_index.count", stored)

    assert preferences.get_int("plugin_index.count", 9) == 9
