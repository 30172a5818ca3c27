"""gen: the test generation pipeline.

parse -> select -> signature views -> missing-test filter -> render.
"""

from gostub.gen.codegen import GeneratedCode, Options, generate, generate_file, run
from gostub.gen.missing import build_test_index, filter_missing
from gostub.gen.parser import DeclarationTree, Field, FunctionDeclaration, ImportSpec, parse_source
from gostub.gen.selector import SelectionCriteria, select
from gostub.gen.signature import SignatureView, build_signature_view
from gostub.gen.templates import render_header, render_test

__all__ = [
    "GeneratedCode", "Options", "generate", "generate_file", "run",
    "build_test_index", "filter_missing",
    "DeclarationTree", "Field", "FunctionDeclaration", "ImportSpec", "parse_source",
    "SelectionCriteria", "select",
    "SignatureView", "build_signature_view",
    "render_header", "render_test",
]
