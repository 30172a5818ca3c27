"""imports.py - hand the generated buffer to goimports.

the renderer never reconciles imports: the header lists everything the
source imports plus "testing" and "reflect", and the normalizer drops
what's unused and adds what's missing. any formatter that reads stdin
and writes stdout works; goimports also gets -srcdir so it can resolve
packages next to the output file.
"""

import os
import subprocess

from gostub.errors import NormalizeError
from gostub.log import debug, span

DEFAULT_COMMAND = "goimports"


def normalize_imports(filename: str, text: str, command: str = DEFAULT_COMMAND) -> str:
    """run the normalizer over text. errors come back verbatim."""
    args = [command]
    if os.path.basename(command) == "goimports":
        args += ["-srcdir", os.path.dirname(os.path.abspath(filename))]

    with span("normalize", subsystem="imports", command=command, filename=filename):
        try:
            result = subprocess.run(
                args, input=text, capture_output=True, text=True, check=False,
            )
        except FileNotFoundError as e:
            raise NormalizeError(f"{command} not found on PATH") from e

        if result.returncode != 0:
            raise NormalizeError(result.stderr.strip() or f"{command} exited with {result.returncode}")

        debug("imports", f"normalized {filename} with {command}")
        return result.stdout


def normalizer(command: str = DEFAULT_COMMAND):
    """a normalize(filename, text) callable bound to one command."""
    def _normalize(filename: str, text: str) -> str:
        return normalize_imports(filename, text, command)
    return _normalize
