"""Term, result and error schemas."""

from .terms import (
    TermKind,
    RuleVariable,
    QueryVariable,
    rule_var,
    query_var,
    term_kind,
    format_term,
)
from .result import (
    LogicQueryError,
    FactDeclarationError,
    ArityError,
    ResolutionDepthError,
    FactAssertion,
    QueryResult,
)

__all__ = [
    # Terms
    "TermKind",
    "RuleVariable",
    "QueryVariable",
    "rule_var",
    "query_var",
    "term_kind",
    "format_term",
    # Results
    "FactAssertion",
    "QueryResult",
    # Errors
    "LogicQueryError",
    "FactDeclarationError",
    "ArityError",
    "ResolutionDepthError",
]
