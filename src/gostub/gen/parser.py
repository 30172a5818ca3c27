"""parser.py - turn Go source text into a declaration tree.

built on tree-sitter with the Go grammar. we only keep what test
generation needs: the package name, the imports, and every function
and method declaration with its parameters, results and receiver.
types are kept as their source text.

in the world: the surveyor. it doesn't judge the land, it just maps it.
"""

from dataclasses import dataclass, field

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from gostub.errors import ParseError

GO = Language(tree_sitter_go.language())

_PARAM_KINDS = ("parameter_declaration", "variadic_parameter_declaration")


@dataclass(frozen=True)
class Field:
    """one entry of a parameter, result or receiver list.

    several names can share one type. no names means anonymous.
    a variadic field keeps the element type in `type`.
    """
    names: tuple[str, ...] = ()
    type: str = ""
    variadic: bool = False

    @property
    def source_type(self) -> str:
        """the type as written, with the ... marker for variadics."""
        return f"...{self.type}" if self.variadic else self.type

    @property
    def width(self) -> int:
        """how many slots this field declares. anonymous fields count as one."""
        return max(len(self.names), 1)


@dataclass(frozen=True)
class ImportSpec:
    path: str          # quoted literal as written, e.g. '"net/http"'
    name: str = ""     # alias, "." or "_" when present


@dataclass(frozen=True)
class FunctionDeclaration:
    """a func or method declaration."""
    name: str
    params: tuple[Field, ...] = ()
    results: tuple[Field, ...] = ()
    receivers: tuple[Field, ...] = ()
    line: int = 0

    @property
    def receiver(self) -> Field | None:
        """the receiver, only when exactly one is declared."""
        if len(self.receivers) == 1:
            return self.receivers[0]
        return None


@dataclass(frozen=True)
class DeclarationTree:
    """one parsed source file. declarations holds functions and methods, in order."""
    package: str
    declarations: tuple[FunctionDeclaration, ...] = ()
    imports: tuple[ImportSpec, ...] = ()
    filename: str = ""


# ============================================================
# PARSING
# ============================================================

def parse_source(text: str, filename: str = "source.go") -> DeclarationTree:
    """parse Go source. raises ParseError on any syntax error."""
    src = text.encode("utf-8")
    root = Parser(GO).parse(src).root_node

    if root.has_error:
        raise _syntax_error(root, filename)

    package = _package(root, src)
    if not package:
        raise ParseError(f"{filename}: expected 'package' clause", filename)

    declarations = []
    imports = []
    for node in root.named_children:
        if node.type in ("function_declaration", "method_declaration"):
            declarations.append(_declaration(node, src))
        elif node.type == "import_declaration":
            imports.extend(_imports(node, src))

    return DeclarationTree(
        package=package,
        declarations=tuple(declarations),
        imports=tuple(imports),
        filename=filename,
    )


def package_name(text: str) -> str:
    """read just the package clause. syntax errors elsewhere are ignored."""
    src = text.encode("utf-8")
    root = Parser(GO).parse(src).root_node
    return _package(root, src)


# ============================================================
# HELPERS
# ============================================================

def _text(node: Node, src: bytes) -> str:
    return src[node.start_byte:node.end_byte].decode("utf-8")


def _package(root: Node, src: bytes) -> str:
    for node in root.named_children:
        if node.type == "package_clause":
            for child in node.named_children:
                if child.type == "package_identifier":
                    return _text(child, src)
    return ""


def _syntax_error(root: Node, filename: str) -> ParseError:
    """locate the first error or missing node and describe it."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing or node.type == "ERROR":
            line, column = node.start_point[0] + 1, node.start_point[1] + 1
            detail = f"missing {node.type}" if node.is_missing else "syntax error"
            return ParseError(f"{filename}:{line}:{column}: {detail}", filename, line, column)
        stack.extend(reversed(node.children))
    return ParseError(f"{filename}: syntax error", filename)


def _declaration(node: Node, src: bytes) -> FunctionDeclaration:
    receiver = node.child_by_field_name("receiver")
    result = node.child_by_field_name("result")

    if result is None:
        results = ()
    elif result.type == "parameter_list":
        results = _fields(result, src)
    else:
        results = (Field(type=_text(result, src)),)

    return FunctionDeclaration(
        name=_text(node.child_by_field_name("name"), src),
        params=_fields(node.child_by_field_name("parameters"), src),
        results=results,
        receivers=_fields(receiver, src) if receiver is not None else (),
        line=node.start_point[0] + 1,
    )


def _fields(plist: Node, src: bytes) -> tuple[Field, ...]:
    fields = []
    for child in plist.named_children:
        if child.type not in _PARAM_KINDS:
            continue
        fields.append(Field(
            names=tuple(_text(n, src) for n in child.children_by_field_name("name")),
            type=_text(child.child_by_field_name("type"), src),
            variadic=child.type == "variadic_parameter_declaration",
        ))
    return tuple(fields)


def _imports(node: Node, src: bytes) -> list[ImportSpec]:
    specs = []
    stack = list(reversed(node.named_children))
    while stack:
        child = stack.pop()
        if child.type == "import_spec_list":
            stack.extend(reversed(child.named_children))
        elif child.type == "import_spec":
            name = child.child_by_field_name("name")
            specs.append(ImportSpec(
                path=_text(child.child_by_field_name("path"), src),
                name=_text(name, src) if name is not None else "",
            ))
    return specs
