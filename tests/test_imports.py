"""tests for the import normalizer wrapper."""

import subprocess
from unittest.mock import patch

import pytest

from gostub.errors import NormalizeError
from gostub.gen.imports import normalize_imports, normalizer


def _done(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestNormalizeImports:

    @patch("gostub.gen.imports.subprocess.run")
    def test_returns_stdout(self, mock_run):
        mock_run.return_value = _done(stdout="package calc\n")
        assert normalize_imports("/tmp/x/calc_test.go", "package  calc\n") == "package calc\n"
        args = mock_run.call_args[0][0]
        assert args == ["goimports", "-srcdir", "/tmp/x"]
        assert mock_run.call_args[1]["input"] == "package  calc\n"

    @patch("gostub.gen.imports.subprocess.run")
    def test_other_command_gets_no_srcdir(self, mock_run):
        mock_run.return_value = _done(stdout="ok")
        normalize_imports("calc_test.go", "x", command="gofmt")
        assert mock_run.call_args[0][0] == ["gofmt"]

    @patch("gostub.gen.imports.subprocess.run")
    def test_failure_carries_stderr(self, mock_run):
        mock_run.return_value = _done(returncode=2, stderr="calc_test.go:3:1: expected declaration\n")
        with pytest.raises(NormalizeError) as exc:
            normalize_imports("calc_test.go", "x")
        assert str(exc.value) == "failed to fix imports: calc_test.go:3:1: expected declaration"
        assert exc.value.code == 17

    @patch("gostub.gen.imports.subprocess.run")
    def test_failure_without_stderr(self, mock_run):
        mock_run.return_value = _done(returncode=1)
        with pytest.raises(NormalizeError, match="exited with 1"):
            normalize_imports("calc_test.go", "x")

    @patch("gostub.gen.imports.subprocess.run", side_effect=FileNotFoundError)
    def test_missing_command(self, mock_run):
        with pytest.raises(NormalizeError, match="not found on PATH"):
            normalize_imports("calc_test.go", "x", command="no-such-formatter")

    @patch("gostub.gen.imports.subprocess.run")
    def test_normalizer_binds_command(self, mock_run):
        mock_run.return_value = _done(stdout="done")
        fix = normalizer("gofmt")
        assert fix("calc_test.go", "x") == "done"
        assert mock_run.call_args[0][0] == ["gofmt"]
