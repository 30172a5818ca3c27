"""io.py - JSON and text utilities.

read_json, write_json, read_text, write_text.
used by config, the template store, and the file layer of codegen.
"""

import json
from pathlib import Path

from gostub.paths import ensure_dir


def read_json(path: Path, default=None):
    """read a JSON file. returns default if missing or corrupt."""
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return default


def write_json(path: Path, data, indent: int = 2):
    """write data as JSON. creates parent dirs."""
    ensure_dir(path.parent)
    path.write_text(json.dumps(data, indent=indent, ensure_ascii=False) + "\n")


def read_text(path: Path) -> str | None:
    """read a whole file into memory. None if it doesn't exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def write_text(path: Path, text: str):
    """replace the file contents. creates parent dirs."""
    ensure_dir(path.parent)
    path.write_text(text, encoding="utf-8")
