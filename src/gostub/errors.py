"""errors.py - everything that can go wrong, with an exit code attached.

every failure in the pipeline is structural: bad syntax, no match,
bad template, a formatter that rejects the output. none of them are
worth retrying, so each carries the exit status the cli should use
and a category for grouping.

in the world: the error names the step that broke, and where.
"""

EXIT_GENERIC = 1


class GostubError(Exception):
    """base for every error gostub raises on purpose."""
    code = EXIT_GENERIC
    category = "input"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


# ============================================================
# INPUT
# ============================================================

class UsageError(GostubError):
    """bad command line or request fields."""
    code = 2
    category = "usage"


class FuncNotFoundError(GostubError):
    """selection matched zero declarations."""
    code = 6

    def __init__(self, message: str = "unable to find a function declaration"):
        super().__init__(message)


class ParseError(GostubError):
    """source text didn't parse. message is position-qualified."""
    code = 9

    def __init__(self, message: str, filename: str = "", line: int = 0, column: int = 0):
        super().__init__(message)
        self.filename = filename
        self.line = line
        self.column = column

    @property
    def location(self) -> str:
        """file:line:col shorthand."""
        if self.line:
            return f"{self.filename}:{self.line}:{self.column}"
        return self.filename


class SourceParseError(ParseError):
    """the file under test didn't parse."""
    code = 9

    @classmethod
    def wrap(cls, err: ParseError) -> "SourceParseError":
        return cls(f"failed to parse input file: {err}", err.filename, err.line, err.column)


class TestParseError(ParseError):
    """an existing test file didn't parse. fatal, we can't index it."""
    __test__ = False
    code = 10

    @classmethod
    def wrap(cls, err: ParseError) -> "TestParseError":
        return cls(f"failed to parse output file: {err}", err.filename, err.line, err.column)


class InputFileError(GostubError):
    """the input file exists but couldn't be read."""
    code = 11
    category = "io"


class InputNotFoundError(GostubError):
    code = 14
    category = "io"

    def __init__(self, message: str = "input file does not exist"):
        super().__init__(message)


class OutputError(GostubError):
    code = 18
    category = "io"


# ============================================================
# TEMPLATES
# ============================================================

class TemplateError(GostubError):
    """a template blew up while executing."""
    code = 4
    category = "template"

    def __init__(self, message: str, stage: str = "test"):
        prefix = "failed to write header" if stage == "header" else "failed to write test"
        super().__init__(f"{prefix}: {message}")
        self.stage = stage
        if stage == "header":
            self.code = 3


class InvalidTemplateError(GostubError):
    """a template failed to compile or produced invalid code."""
    code = 19
    category = "template"

    def __init__(self, message: str):
        super().__init__(f"invalid test template: {message}")


class TemplateNotFoundError(GostubError):
    code = 20
    category = "template"

    def __init__(self, name: str):
        super().__init__(f"template not found: {name}")
        self.name = name


# ============================================================
# NORMALIZE
# ============================================================

class NormalizeError(GostubError):
    """the import normalizer rejected the generated buffer."""
    code = 17
    category = "normalize"

    def __init__(self, message: str):
        super().__init__(f"failed to fix imports: {message}")
