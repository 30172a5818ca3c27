"""missing.py - drop candidates that already have a test.

a candidate is covered when any test file declares a free function
named after its test name. methods never count, test functions are
always free functions. because the file being appended to is one of
the test trees, running generation twice adds nothing the second time.
"""

from typing import Iterable

from gostub.gen.parser import DeclarationTree
from gostub.gen.signature import SignatureView


def build_test_index(test_trees: Iterable[DeclarationTree]) -> frozenset[str]:
    """names of every free function across the given test trees."""
    return frozenset(
        decl.name
        for tree in test_trees
        for decl in tree.declarations
        if decl.receiver is None
    )


def filter_missing(candidates: Iterable[SignatureView],
                   test_index: frozenset[str]) -> list[SignatureView]:
    """candidates whose test isn't in the index, order kept."""
    return [c for c in candidates if c.test_name not in test_index]


def is_test_source(filename: str, tree_package: str, source_package: str) -> bool:
    """test files are *_test.go, or anything in the external <pkg>_test package."""
    return filename.endswith("_test.go") or tree_package == f"{source_package}_test"
