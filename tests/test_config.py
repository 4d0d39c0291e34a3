## comp — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from pathlib import Path

import pytest

from comp.config import Config, load_config, parse_config, default_config_path
from comp.errors import CompConfigError


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "missing.toml") == Config()
    assert Config().show_stack_level is False


def test_values_are_read_from_file(tmp_path):
    path = tmp_path / "comp.toml"
    path.write_text("show_stack_level = true\nconversion_constant = 2\nunknown = 'ignored'\n")
    config = load_config(path)
    assert config.show_stack_level is True
    assert config.conversion_constant == 2.0
    assert config.monochrome is False
    assert config.show_warnings is True


def test_wrong_types_are_rejected():
    with pytest.raises(CompConfigError, match="monochrome"):
        parse_config('monochrome = "yes"')
    with pytest.raises(CompConfigError):
        parse_config('conversion_constant = true')


def test_corrupt_file_is_rejected(tmp_path):
    path = tmp_path / "comp.toml"
    path.write_text("show_stack_level = \n")
    with pytest.raises(CompConfigError) as e:
        load_config(path)
    assert e.value.filename == str(path)


def test_environment_selects_config_file(tmp_path, monkeypatch):
    path = tmp_path / "other.toml"
    path.write_text("monochrome = true\n")
    monkeypatch.setenv("COMP_CONFIG", str(path))
    assert default_config_path() == path
    assert load_config().monochrome is True


def test_default_path_is_in_home_folder(monkeypatch):
    monkeypatch.delenv("COMP_CONFIG", raising=False)
    assert default_config_path() == Path.home() / "comp.toml"
