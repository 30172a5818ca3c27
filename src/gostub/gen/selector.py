"""selector.py - pick the declarations to generate tests for.

a declaration qualifies when "all" is set, or its line is one of the
requested lines, or its name is one of the requested names. order
follows the source file, and nothing is returned twice.
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable

from gostub.errors import UsageError
from gostub.gen.parser import DeclarationTree, FunctionDeclaration

_IDENT_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*|\*)$")


@dataclass(frozen=True)
class SelectionCriteria:
    lines: frozenset[int] = frozenset()
    names: frozenset[str] = frozenset()
    all: bool = False

    @classmethod
    def build(cls, lines: Iterable[int] = (), names: Iterable[str] = (),
              all: bool | None = None) -> "SelectionCriteria":
        """criteria from raw lists. "all" defaults to "nothing else asked for".

        a "*" among the names selects everything.
        """
        lines = frozenset(lines)
        names = frozenset(names)
        if all is None:
            all = not lines and not names
        if "*" in names:
            all = True
        return cls(lines=lines, names=names - {"*"}, all=all)

    @property
    def is_empty(self) -> bool:
        return not (self.all or self.lines or self.names)

    def matches(self, decl: FunctionDeclaration) -> bool:
        return self.all or decl.line in self.lines or decl.name in self.names


def match_all(tree: DeclarationTree,
              predicate: Callable[[FunctionDeclaration], bool]) -> list[FunctionDeclaration]:
    """every declaration in the tree the predicate accepts, in source order."""
    return [d for d in tree.declarations if predicate(d)]


def select(tree: DeclarationTree, criteria: SelectionCriteria) -> list[FunctionDeclaration]:
    """declarations matching the criteria. empty criteria match nothing."""
    return match_all(tree, criteria.matches)


# ============================================================
# PARSING SELECTION INPUT
# ============================================================

def parse_lines(value: str) -> list[int]:
    """"10,12" -> [10, 12]."""
    lines = []
    for chunk in value.split(","):
        chunk = chunk.strip()
        if not chunk.isdigit():
            raise UsageError(f"expected unsigned int, got: {chunk}")
        lines.append(int(chunk))
    return lines


def check_function_name(name) -> str:
    """an identifier or "*", else UsageError."""
    if not isinstance(name, str) or not _IDENT_RE.match(name):
        raise UsageError(f"bad function name: {name}")
    return name


def parse_functions(value: str) -> list[str]:
    """"Add, Sum" -> ["Add", "Sum"]."""
    return [check_function_name(chunk.strip()) for chunk in value.split(",")]
