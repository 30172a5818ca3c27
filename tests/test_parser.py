"""tests for the Go source parser."""

import pytest

from gostub.errors import ParseError
from gostub.gen.parser import Field, ImportSpec, package_name, parse_source


class TestParseSource:

    def test_package_and_imports(self, calc_tree):
        assert calc_tree.package == "calc"
        assert calc_tree.imports == (
            ImportSpec(path='"io"'),
            ImportSpec(path='"strings"', name="str"),
        )
        assert calc_tree.filename == "calc.go"

    def test_declarations_in_order(self, calc_tree):
        names = [d.name for d in calc_tree.declarations]
        assert names == ["Add", "Sum", "Read", "parse", "ignore", "reset"]

    def test_lines_point_at_func_keyword(self, calc_tree):
        lines = {d.name: d.line for d in calc_tree.declarations}
        assert lines["Add"] == 9
        assert lines["Sum"] == 13
        assert lines["Read"] == 23
        assert lines["reset"] == 33

    def test_grouped_params(self, decl):
        assert decl("Add").params == (Field(names=("a", "b"), type="int"),)
        assert decl("Add").results == (Field(type="int"),)

    def test_variadic_param(self, decl):
        assert decl("Sum").params == (Field(names=("nums",), type="int", variadic=True),)

    def test_method_receiver(self, decl):
        read = decl("Read")
        assert read.receiver == Field(names=("r",), type="*Reader")
        assert read.results == (
            Field(names=("n",), type="int"),
            Field(names=("err",), type="error"),
        )

    def test_anonymous_params(self, decl):
        assert decl("ignore").params == (Field(type="int"), Field(type="string"))

    def test_free_function_has_no_receiver(self, decl):
        assert decl("parse").receiver is None

    def test_single_import(self):
        tree = parse_source('package x\n\nimport "fmt"\n')
        assert tree.imports == (ImportSpec(path='"fmt"'),)
        assert tree.declarations == ()

    def test_syntax_error_is_position_qualified(self):
        with pytest.raises(ParseError) as exc:
            parse_source("package x\n\nfunc Broken(a int {\n}\n", "broken.go")
        assert exc.value.filename == "broken.go"
        assert exc.value.line >= 3
        assert str(exc.value).startswith("broken.go:")

    def test_missing_package_clause(self):
        with pytest.raises(ParseError, match="package"):
            parse_source("func Add() {}\n", "nopkg.go")

    def test_empty_text(self):
        with pytest.raises(ParseError):
            parse_source("", "empty.go")


class TestPackageName:

    def test_reads_clause(self):
        assert package_name("package calc_test\n\nfunc TestX(t *testing.T) {}\n") == "calc_test"

    def test_ignores_errors_elsewhere(self):
        assert package_name("package calc\n\nfunc (((\n") == "calc"

    def test_no_clause(self):
        assert package_name("") == ""


class TestField:

    def test_source_type(self):
        assert Field(names=("xs",), type="int", variadic=True).source_type == "...int"
        assert Field(type="int").source_type == "int"

    def test_width(self):
        assert Field(names=("a", "b"), type="int").width == 2
        assert Field(type="int").width == 1
