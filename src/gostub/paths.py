"""paths.py - one place for all gostub paths.

every file that touches ~/.gostub/ gets its location from here.
callers pass the result down explicitly, nothing reads it at import time.
"""

import os
from pathlib import Path


def gostub_home() -> Path:
    """~/.gostub/ - the root of all gostub state. GOSTUB_HOME overrides."""
    override = os.environ.get("GOSTUB_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".gostub"


def ensure_dir(path: Path) -> Path:
    """mkdir -p. returns the path for chaining."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def templates_dir(home: Path) -> Path:
    """where installed templates live."""
    return home / "templates"


def config_file(home: Path) -> Path:
    """global config, also holds the selected template."""
    return home / "config.json"


PROJECT_CONFIG_NAME = ".gostub.json"
