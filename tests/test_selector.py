"""tests for function selection."""

import pytest

from gostub.errors import UsageError
from gostub.gen.selector import (
    SelectionCriteria, check_function_name, match_all, parse_functions, parse_lines, select,
)


def _names(decls):
    return [d.name for d in decls]


class TestSelect:

    def test_all(self, calc_tree):
        found = select(calc_tree, SelectionCriteria(all=True))
        assert _names(found) == ["Add", "Sum", "Read", "parse", "ignore", "reset"]

    def test_by_name(self, calc_tree):
        assert _names(select(calc_tree, SelectionCriteria(names=frozenset({"Add"})))) == ["Add"]

    def test_by_line(self, calc_tree):
        assert _names(select(calc_tree, SelectionCriteria(lines=frozenset({23})))) == ["Read"]

    def test_line_inside_body_does_not_match(self, calc_tree):
        assert select(calc_tree, SelectionCriteria(lines=frozenset({10}))) == []

    def test_union_keeps_source_order(self, calc_tree):
        criteria = SelectionCriteria(lines=frozenset({27}), names=frozenset({"Add"}))
        assert _names(select(calc_tree, criteria)) == ["Add", "parse"]

    def test_union_no_duplicates(self, calc_tree):
        criteria = SelectionCriteria(lines=frozenset({9}), names=frozenset({"Add"}))
        assert _names(select(calc_tree, criteria)) == ["Add"]

    def test_empty_criteria_match_nothing(self, calc_tree):
        assert SelectionCriteria().is_empty
        assert select(calc_tree, SelectionCriteria()) == []

    def test_unknown_name(self, calc_tree):
        assert select(calc_tree, SelectionCriteria(names=frozenset({"Nope"}))) == []

    def test_deterministic(self, calc_tree):
        criteria = SelectionCriteria(all=True)
        assert select(calc_tree, criteria) == select(calc_tree, criteria)


class TestMatchAll:

    def test_predicate(self, calc_tree):
        methods = match_all(calc_tree, lambda d: d.receiver is not None)
        assert _names(methods) == ["Read", "reset"]

    def test_first_match(self, calc_tree):
        assert match_all(calc_tree, lambda d: d.name.islower())[0].name == "parse"


class TestBuild:

    def test_all_defaults_to_nothing_else_asked(self):
        assert SelectionCriteria.build().all
        assert not SelectionCriteria.build(lines=[3]).all
        assert not SelectionCriteria.build(names=["Add"]).all

    def test_explicit_all(self):
        assert SelectionCriteria.build(names=["Add"], all=True).all
        assert not SelectionCriteria.build(all=False).all

    def test_star_selects_all(self):
        criteria = SelectionCriteria.build(names=["*", "Add"])
        assert criteria.all
        assert criteria.names == frozenset({"Add"})


class TestParseInput:

    def test_lines(self):
        assert parse_lines("10,12") == [10, 12]
        assert parse_lines(" 3 ") == [3]

    def test_bad_line(self):
        with pytest.raises(UsageError, match="expected unsigned int, got: -1"):
            parse_lines("3,-1")

    def test_functions(self):
        assert parse_functions("Add, Sum,_private") == ["Add", "Sum", "_private"]

    def test_check_function_name(self):
        assert check_function_name("Add") == "Add"
        assert check_function_name("*") == "*"
        with pytest.raises(UsageError, match="bad function name"):
            check_function_name(["Add"])

    def test_bad_function(self):
        with pytest.raises(UsageError, match="bad function name: 1abc"):
            parse_functions("Add,1abc")
