## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
import tomllib
from pathlib import Path
from dataclasses import dataclass, fields

from .errors import CompConfigError


CONFIG_FILENAME = 'comp.toml'


@dataclass(frozen=True)
class Config:
    show_stack_level: bool = False
    conversion_constant: float = 1.0
    monochrome: bool = False
    show_warnings: bool = True


def default_config_path() -> Path:
    if (env := os.environ.get('COMP_CONFIG')):
        return Path(os.path.expanduser(env))
    return Path.home() / CONFIG_FILENAME


def parse_config(text: str, filename: str | None = None) -> Config:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise CompConfigError(f"Configuration is corrupt or incorrectly constructed: {exc}", filename=filename) from None

    values = {}
    for f in fields(Config):
        if f.name not in data: continue
        value = data[f.name]
        # TOML integers are accepted where a float is expected.
        if f.type is float and isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        if type(value) is not f.type:
            raise CompConfigError(f"Configuration key `{f.name}` expects {f.type.__name__}, got {type(value).__name__}.", filename=filename)
        values[f.name] = value
    return Config(**values)


def load_config(path: str | Path | None = None) -> Config:
    """Read configuration from `path`, or the default location; a missing file means defaults."""
    path = Path(path) if path is not None else default_config_path()
    try:
        text = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        return Config()
    except OSError as exc:
        raise CompConfigError(f"Configuration could not be read: {exc.strerror}", filename=str(path)) from None
    return parse_config(text, filename=str(path))
