"""gostub: generates table-driven test stubs for Go functions and methods."""

from gostub.errors import GostubError
from gostub.gen import (
    SelectionCriteria, SignatureView, build_signature_view, build_test_index,
    filter_missing, generate, parse_source, render_header, render_test, select,
)

__all__ = [
    "GostubError",
    "SelectionCriteria", "SignatureView", "build_signature_view", "build_test_index",
    "filter_missing", "generate", "parse_source", "render_header", "render_test", "select",
]
