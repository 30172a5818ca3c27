"""config.py - where the run's settings come from.

four layers, later ones win:

    defaults   built into gostub
    global     <home>/config.json, also where `template use` writes
    project    .gostub.json in the working directory
    env        GOSTUB_TEMPLATE, GOSTUB_COMMENT, GOSTUB_NORMALIZER, GOSTUB_LOG_LEVEL

the home directory is always passed in. nothing here reads ~/.gostub
on its own.

in the world: the tool belt. same tools, adjusted per job site.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from gostub.io import read_json, write_json
from gostub.paths import PROJECT_CONFIG_NAME, config_file

DEFAULTS = {
    "template": "default",
    "comment": "TODO: add test cases",
    "normalizer": "goimports",
    "log_level": "warn",
}

ENV_KEYS = {
    "GOSTUB_TEMPLATE": "template",
    "GOSTUB_COMMENT": "comment",
    "GOSTUB_NORMALIZER": "normalizer",
    "GOSTUB_LOG_LEVEL": "log_level",
}


@dataclass
class Config:
    """settings after all layers are applied."""
    values: dict = field(default_factory=dict)
    source: str = "defaults"  # highest layer that set anything

    def get(self, key: str, default=None):
        if key in self.values:
            return self.values[key]
        return DEFAULTS.get(key, default)

    def set(self, key: str, value):
        self.values[key] = value

    def __getitem__(self, key: str):
        return self.get(key)

    def __contains__(self, key: str):
        return key in self.values or key in DEFAULTS

    def to_dict(self) -> dict:
        return {**DEFAULTS, **self.values}


# ============================================================
# LAYERS
# ============================================================

def _read_layer(path: Path) -> dict:
    data = read_json(path, default={})
    return data if isinstance(data, dict) else {}


def load_global(home: Path) -> dict:
    return _read_layer(config_file(home))


def save_global(config: dict, home: Path):
    write_json(config_file(home), config)


def load_project(root: str = ".") -> dict:
    return _read_layer(Path(root) / PROJECT_CONFIG_NAME)


def load_env() -> dict:
    """GOSTUB_* variables that are set, under their config key."""
    return {key: os.environ[var] for var, key in ENV_KEYS.items() if var in os.environ}


def load_config(home: Path, root: str = ".") -> Config:
    layers = [
        ("global", load_global(home)),
        ("project", load_project(root)),
        ("env", load_env()),
    ]
    config = Config(values=dict(DEFAULTS))
    for name, values in layers:
        if values:
            config.values.update(values)
            config.source = name
    return config


def set_global_value(key: str, value, home: Path):
    """update one key of the global layer, keeping the rest."""
    values = load_global(home)
    values[key] = value
    save_global(values, home)
