"""Tests for term and result schemas."""

import pytest

from logic_query import (
    TermKind,
    RuleVariable,
    QueryVariable,
    rule_var,
    query_var,
    term_kind,
    FactAssertion,
    FactDeclarationError,
    LogicQueryError,
    QueryResult,
)
from logic_query.schemas.terms import format_term


class TestRuleVariable:
    """Tests for RuleVariable."""

    def test_create(self):
        X = rule_var("X")
        assert isinstance(X, RuleVariable)
        assert X.name == "X"
        assert repr(X) == "X"

    def test_identity_not_name(self):
        first = rule_var("X")
        second = rule_var("X")
        assert first == first
        assert first != second
        assert len({first, second}) == 2


class TestQueryVariable:
    """Tests for QueryVariable."""

    def test_starts_empty(self):
        assert query_var().values == []

    def test_fresh_values_list(self):
        first = query_var()
        second = query_var()
        first.values.append("Lucy")
        assert second.values == []

    def test_hashable_by_identity(self):
        first = query_var()
        second = query_var()
        captured = {first: 1, second: 2}
        assert captured[first] == 1
        assert captured[second] == 2

    def test_repr(self):
        variable = QueryVariable(values=["Lucy"])
        assert repr(variable) == "QueryVariable(values=['Lucy'])"


class TestTermKind:
    """Tests for argument classification."""

    def test_literals(self):
        assert term_kind("Lucy") is TermKind.LITERAL
        assert term_kind(42) is TermKind.LITERAL
        assert term_kind(None) is TermKind.LITERAL
        assert term_kind(("a", "b")) is TermKind.LITERAL

    def test_variables(self):
        assert term_kind(rule_var("X")) is TermKind.RULE_VARIABLE
        assert term_kind(query_var()) is TermKind.QUERY_VARIABLE

    def test_string_values(self):
        assert TermKind.LITERAL.value == "literal"
        assert TermKind("query_variable") is TermKind.QUERY_VARIABLE

    def test_format_term(self):
        assert format_term("Lucy") == '"Lucy"'
        assert format_term(3) == "3"
        assert format_term(rule_var("Y")) == "Y"


class TestFactAssertion:
    """Tests for FactAssertion."""

    def test_success(self):
        outcome = FactAssertion(success=True, fact=("Lucy", "Lucas"))
        assert outcome.unwrap() == ("Lucy", "Lucas")
        assert outcome.to_dict() == {
            "success": True,
            "fact": ["Lucy", "Lucas"],
            "error": None,
        }

    def test_failure_unwrap_raises(self):
        error = FactDeclarationError("contains variable(s): X")
        outcome = FactAssertion(success=False, error=error)
        with pytest.raises(FactDeclarationError):
            outcome.unwrap()
        assert outcome.to_dict()["error"] == "contains variable(s): X"

    def test_error_hierarchy(self):
        assert issubclass(FactDeclarationError, LogicQueryError)
        assert issubclass(LogicQueryError, Exception)


class TestQueryResult:
    """Tests for QueryResult."""

    def test_empty_result(self):
        result = QueryResult()
        assert result == []
        assert not result.success

    def test_rows(self):
        result = QueryResult([("Lucy", "Tommy")])
        assert result.success
        assert list(result) == [("Lucy", "Tommy")]
        assert result == [("Lucy", "Tommy")]

    def test_success_follows_contents(self):
        result = QueryResult()
        result.append(("a",))
        assert result.success

    def test_to_dict(self):
        result = QueryResult([("Lucy", "Tommy")])
        assert result.to_dict() == {"success": True, "rows": [["Lucy", "Tommy"]]}
