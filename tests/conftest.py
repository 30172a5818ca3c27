"""Shared test fixtures."""

from pathlib import Path

import pytest

from gostub import log
from gostub.gen.parser import parse_source

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture(autouse=True)
def reset_log_level():
    yield
    log.set_level("warn")
    log.set_sink(None)


@pytest.fixture
def home(tmp_path, monkeypatch):
    """an isolated ~/.gostub for the test."""
    path = tmp_path / "home"
    monkeypatch.setenv("GOSTUB_HOME", str(path))
    for key in ("GOSTUB_TEMPLATE", "GOSTUB_COMMENT", "GOSTUB_NORMALIZER", "GOSTUB_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    return path


@pytest.fixture
def calc_source():
    return (TESTDATA / "calc.go").read_text()


@pytest.fixture
def calc_tree(calc_source):
    return parse_source(calc_source, "calc.go")


@pytest.fixture
def decl(calc_tree):
    """look up a declaration in calc.go by name."""
    by_name = {d.name: d for d in calc_tree.declarations}
    return by_name.__getitem__
