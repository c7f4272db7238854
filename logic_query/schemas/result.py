"""Result and error schemas."""

from dataclasses import dataclass
from typing import Any, Iterable, Optional


class LogicQueryError(Exception):
    """Base class for errors reported by the knowledge base."""


class FactDeclarationError(LogicQueryError):
    """A fact was declared with a variable in one of its arguments."""


class ArityError(LogicQueryError):
    """A predicate was applied to the wrong number of arguments."""


class ResolutionDepthError(LogicQueryError):
    """A search nested deeper than the configured maximum depth."""


@dataclass
class FactAssertion:
    """
    Outcome of asserting a fact.

    Attributes:
        success: Whether the fact was stored
        fact: The stored argument tuple (None on failure)
        error: The reason the fact was rejected (None on success)
    """
    success: bool
    fact: Optional[tuple[Any, ...]] = None
    error: Optional[FactDeclarationError] = None

    def unwrap(self) -> tuple[Any, ...]:
        """Return the stored fact, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.fact

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "fact": list(self.fact) if self.fact is not None else None,
            "error": str(self.error) if self.error is not None else None,
        }


class QueryResult(list):
    """
    Result tuples of a query.

    Behaves as a plain list of tuples. `success` is True when at least
    one tuple satisfied the query.
    """

    def __init__(self, rows: Iterable[tuple[Any, ...]] = ()):
        super().__init__(rows)

    @property
    def success(self) -> bool:
        """Check if the query produced any result."""
        return len(self) > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "rows": [list(row) for row in self],
        }

    def __repr__(self) -> str:
        return f"QueryResult({list(self)!r}, success={self.success})"
