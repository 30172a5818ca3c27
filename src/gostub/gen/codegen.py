"""codegen.py - generate Go test stubs.

parse the source, select the functions, drop the ones that already
have tests, render a header (only into an empty buffer) and one test
per remaining function. the output still needs an import pass; that's
the normalizer's job, applied by generate_file.

"nothing selected" is an error. "everything already tested" is an
empty success: that's what re-running generation looks like.

in the world: the blueprint. you sketch the shape, the details fill in.
"""

import io
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, TextIO

from gostub.errors import (
    FuncNotFoundError, InputFileError, InputNotFoundError,
    OutputError, ParseError, SourceParseError, TestParseError,
)
from gostub.gen.missing import build_test_index, filter_missing, is_test_source
from gostub.gen.parser import DeclarationTree, package_name, parse_source
from gostub.gen.selector import SelectionCriteria, select
from gostub.gen.signature import build_signature_view
from gostub.gen.templates import Renderer
from gostub.io import read_text, write_text
from gostub.log import debug, info, span


@dataclass
class GeneratedCode:
    """result of a code generation run."""
    code: str = ""
    filepath: str = ""
    package: str = ""
    tests: list[str] = field(default_factory=list)
    written: bool = False


# ============================================================
# PIPELINE
# ============================================================

def run(criteria: SelectionCriteria, source: str, existing: str | None = None, *,
        filename: str = "source.go", test_filename: str = "source_test.go",
        siblings: Iterable[tuple[str, str]] = (), comment: str = "",
        test_template: str | None = None) -> GeneratedCode:
    """the whole pipeline over in-memory text.

    existing is the current content of the test file, if any. generated
    tests are appended to it. siblings are (filename, text) pairs of
    other files next to the test file; the test ones are consulted too.
    """
    if existing is not None and not existing.strip():
        existing = None

    with span("generate", subsystem="gen", filename=filename):
        with span("parse", subsystem="gen", filename=filename):
            try:
                tree = parse_source(source, filename)
            except ParseError as e:
                raise SourceParseError.wrap(e) from e

        with span("select", subsystem="gen"):
            decls = select(tree, criteria)
            if not decls:
                raise FuncNotFoundError()
            candidates = [build_signature_view(d) for d in decls]
            debug("gen", f"selected {len(candidates)} function(s) in {filename}")

        renderer = Renderer.create(test_template)
        buf = io.StringIO()
        package = tree.package

        with span("filter", subsystem="gen"):
            test_trees = []
            if existing is not None:
                existing_tree = _parse_test(existing, test_filename)
                package = existing_tree.package
                test_trees.append(existing_tree)
                buf.write(existing)

            for sibling, text in siblings:
                if is_test_source(sibling, package_name(text), tree.package):
                    test_trees.append(_parse_test(text, sibling))

            if test_trees:
                before = len(candidates)
                candidates = filter_missing(candidates, build_test_index(test_trees))
                debug("gen", f"{before - len(candidates)} function(s) already tested")

        if not candidates:
            info("gen", f"nothing to generate for {filename}")
            return GeneratedCode(package=package)

        with span("render", subsystem="gen", count=len(candidates)):
            if buf.tell() == 0:
                buf.write(renderer.header(package, tree.imports))
            for view in candidates:
                buf.write(renderer.test(view, comment))

        info("gen", f"generated {len(candidates)} test(s) for {filename}")
        return GeneratedCode(
            code=buf.getvalue(),
            package=package,
            tests=[c.test_name for c in candidates],
        )


def generate(criteria: SelectionCriteria, source: str, existing: str | None = None,
             **kwargs) -> str:
    """generated text, unformatted. empty when everything is already tested."""
    return run(criteria, source, existing, **kwargs).code


def _parse_test(text: str, filename: str) -> DeclarationTree:
    try:
        return parse_source(text, filename)
    except ParseError as e:
        raise TestParseError.wrap(e) from e


# ============================================================
# FILES
# ============================================================

@dataclass
class Options:
    input_file: str = ""
    output_file: str = ""
    lines: list[int] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)
    all: bool | None = None
    comment: str = ""
    template: str | None = None  # template text, None for the built-in
    use_stdin: bool = False
    use_stdout: bool = False

    @property
    def criteria(self) -> SelectionCriteria:
        return SelectionCriteria.build(self.lines, self.functions, self.all)

    @property
    def destination(self) -> str:
        return self.output_file or default_output(self.input_file)


def default_output(input_file: str) -> str:
    """foo.go -> foo_test.go, anything else gets _test.go appended."""
    if input_file.endswith(".go"):
        return input_file[:-3] + "_test.go"
    return input_file + "_test.go"


def read_sibling_tests(output_file: str) -> list[tuple[str, str]]:
    """every other .go file next to the output file, read whole."""
    out = Path(output_file)
    folder = out.parent
    if not folder.is_dir():
        return []

    siblings = []
    for path in sorted(folder.glob("*.go")):
        if path.name == out.name:
            continue
        try:
            siblings.append((str(path), path.read_text(encoding="utf-8")))
        except OSError as e:
            raise InputFileError(f"failed to open {path}: {e}") from e
    return siblings


def generate_file(options: Options, stdin: TextIO | None = None,
                  normalize: Callable[[str, str], str] | None = None) -> GeneratedCode:
    """read input and output files, generate, normalize, write back.

    the output file is read completely before anything is written to it.
    with use_stdout nothing is written, the caller prints result.code.
    """
    if not options.input_file:
        raise InputNotFoundError("missing input file")
    destination = options.destination

    if options.use_stdin:
        source = (stdin or sys.stdin).read()
    else:
        try:
            source = read_text(Path(options.input_file))
        except OSError as e:
            raise InputFileError(f"failed to open input file: {e}") from e
        if source is None:
            raise InputNotFoundError()

    try:
        existing = read_text(Path(destination))
    except OSError as e:
        raise InputFileError(f"failed to open output file: {e}") from e

    result = run(
        options.criteria, source, existing,
        filename=options.input_file,
        test_filename=destination,
        siblings=read_sibling_tests(destination),
        comment=options.comment,
        test_template=options.template,
    )
    result.filepath = destination

    if not result.code:
        return result

    if normalize is not None:
        result.code = normalize(destination, result.code)

    if not options.use_stdout:
        try:
            write_text(Path(destination), result.code)
        except OSError as e:
            raise OutputError(f"failed to write generated test: {e}") from e
        result.written = True
        info("gen", f"wrote {destination}")

    return result
