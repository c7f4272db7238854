"""Term schemas: the values that can occupy an argument position."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TermKind(str, Enum):
    """Kind of value held by a single argument position."""
    LITERAL = "literal"                # Caller-supplied ground value
    RULE_VARIABLE = "rule_variable"    # Placeholder shared by a rule head and body
    QUERY_VARIABLE = "query_variable"  # Output collector supplied to a query


@dataclass(eq=False)
class RuleVariable:
    """
    A placeholder used in rule heads and goals.

    Two rule variables are the same variable only if they are the same
    object. The name is kept for display purposes.

    Attributes:
        name: Display name, e.g. "X"
    """
    name: str

    def __repr__(self) -> str:
        return self.name


@dataclass(eq=False)
class QueryVariable:
    """
    Output collector for a query.

    Every successful result tuple appends the value found at this
    variable's position to `values`.

    Attributes:
        values: Values bound to this variable so far
    """
    values: list[Any] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"QueryVariable(values={self.values!r})"


def rule_var(name: str) -> RuleVariable:
    """Create a rule variable."""
    return RuleVariable(name)


def query_var() -> QueryVariable:
    """Create an empty query variable."""
    return QueryVariable()


def term_kind(arg: Any) -> TermKind:
    """Classify an argument position."""
    if isinstance(arg, RuleVariable):
        return TermKind.RULE_VARIABLE
    if isinstance(arg, QueryVariable):
        return TermKind.QUERY_VARIABLE
    return TermKind.LITERAL


def format_term(arg: Any) -> str:
    """Render an argument for diagnostics; string literals are quoted."""
    if isinstance(arg, str):
        return f'"{arg}"'
    return repr(arg)
