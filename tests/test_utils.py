# tests/test_utils.py
"""Unit tests for utility functions in the `tedit.utils` module."""

import toml

from tedit.utils import utils


def test_deep_merge() -> None:
    """Verify that `deep_merge` correctly merges nested dictionaries.

    This test ensures:
    - Existing values are preserved if not overridden.
    - Nested dictionaries are merged recursively.
    - Conflicting keys are overridden by values from the second dictionary.
    """
    base = {"a": 1, "b": {"x": 10, "y": 20}}
    override = {"b": {"y": 99, "z": 100}, "c": 3}
    result = utils.deep_merge(base, override)
    expected = {"a": 1, "b": {"x": 10, "y": 99, "z": 100}, "c": 3}
    assert result == expected


def test_deep_merge_does_not_mutate_base() -> None:
    base = {"editor": {"tab_width": 4}}
    utils.deep_merge(base, {"editor": {"tab_width": 8}})
    assert base == {"editor": {"tab_width": 4}}


def test_hex_to_xterm_valid_color() -> None:
    """White (`#ffffff`) maps to 231, black (`000000`) to 16."""
    assert utils.hex_to_xterm("#ffffff") == 231
    assert utils.hex_to_xterm("000000") == 16


def test_hex_to_xterm_palette_entries() -> None:
    """The comment color of the default palette is xterm 230."""
    assert utils.hex_to_xterm(utils.DEFAULT_CONFIG["colors"]["comment"]) == 230


def test_hex_to_xterm_invalid_color() -> None:
    """Invalid hex strings fall back to 255."""
    assert utils.hex_to_xterm("#zzz") == 255
    assert utils.hex_to_xterm("12") == 255
    assert utils.hex_to_xterm("#gggggg") == 255


def test_load_config_creates_template_and_returns_defaults(tmp_path) -> None:
    config_path = tmp_path / "tedit" / "config.toml"
    config = utils.load_config(config_path)

    assert config_path.is_file()
    assert config == utils.DEFAULT_CONFIG
    assert toml.load(config_path)["editor"]["tab_width"] == 4


def test_load_config_merges_user_values(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[editor]\ntab_width = 2\ncolor_mode = "plain"\n', encoding="utf-8")

    config = utils.load_config(config_path)
    assert config["editor"]["tab_width"] == 2
    assert config["editor"]["color_mode"] == "plain"
    assert config["editor"]["gutter_width"] == 5
    assert config["clipboard"]["enabled"] is True


def test_load_config_survives_broken_toml(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("[editor\ntab_width = ", encoding="utf-8")
    assert utils.load_config(config_path) == utils.DEFAULT_CONFIG


def test_user_config_path_lives_under_dot_config(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    assert utils.get_user_config_path() == tmp_path / ".config" / "tedit" / "config.toml"
