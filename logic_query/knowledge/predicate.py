"""Predicate handles, predicate applications and rule entries."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from ..schemas.result import FactAssertion, QueryResult
from ..schemas.terms import format_term

if TYPE_CHECKING:
    from .knowledge_base import KnowledgeBase


class Predicate:
    """
    Caller-facing handle for a relation of a knowledge base.

    Predicates compare by identity: two predicates with the same name are
    still different relations. Calling a predicate applies it to arguments
    and yields a Relation, which can be asserted as a fact, used as a rule
    head or used as a goal in a rule body.

    Usage:
        parent_child = kb.create_predicate("parentChild")
        parent_child("Lucy", "Lucas").fact()

        children = query_var()
        parent_child.query("Lucy", children)
    """

    def __init__(
        self,
        kb: "KnowledgeBase",
        index: int,
        name: Optional[str] = None,
        arity: Optional[int] = None,
    ):
        """
        Initialize a predicate. Use KnowledgeBase.create_predicate instead.

        Args:
            kb: The owning knowledge base
            index: Creation order within the knowledge base
            name: Display name for diagnostics
            arity: Declared number of arguments (informational unless
                strict_arity is configured)
        """
        self.kb = kb
        self.index = index
        self.name = name
        self.arity = arity

    @property
    def display_name(self) -> str:
        return self.name or f"_p{self.index}"

    def __call__(self, *args: Any) -> "Relation":
        self.kb.check_arity(self, args)
        return Relation(self, args)

    def query(self, *args: Any) -> QueryResult:
        """Query this predicate, keeping every derivation."""
        return self.kb.query(self)(*args)

    def query_unique(self, *args: Any) -> QueryResult:
        """Query this predicate, dropping duplicate tuples and values."""
        return self.kb.query_unique(self)(*args)

    def __repr__(self) -> str:
        return self.display_name


@dataclass(eq=False)
class Relation:
    """
    A predicate applied to arguments, e.g. mother(X, "Tommy").

    Attributes:
        predicate: The applied predicate
        args: One literal or RuleVariable per argument position
    """
    predicate: Predicate
    args: tuple[Any, ...]

    def fact(self, strict: Optional[bool] = None) -> FactAssertion:
        """
        Assert this relation as a fact.

        Args:
            strict: Raise FactDeclarationError on rejection instead of
                returning a failed FactAssertion (defaults to the
                knowledge base's raise_on_invalid_fact setting)

        Returns:
            FactAssertion describing the outcome
        """
        return self.predicate.kb.assert_fact(self.predicate, *self.args, strict=strict)

    def if_(self, goal: "Relation", *goals: "Relation") -> "RuleEntry":
        """
        Declare a rule with this relation as head.

        Each call adds one alternative body; a head with several bodies
        holds when any of them holds.
        """
        return self.predicate.kb.add_rule(self, goal, *goals)

    def __repr__(self) -> str:
        rendered = ", ".join(format_term(arg) for arg in self.args)
        return f"{self.predicate.display_name}({rendered})"


@dataclass
class RuleEntry:
    """
    A rule-table entry.

    Attributes:
        head: The head pattern
        bodies: Alternative bodies, each a conjunction of goals
    """
    head: Relation
    bodies: list[tuple[Relation, ...]] = field(default_factory=list)

    @property
    def predicate(self) -> Predicate:
        return self.head.predicate

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "head": repr(self.head),
            "bodies": [[repr(goal) for goal in body] for body in self.bodies],
        }

    def __repr__(self) -> str:
        clauses = [
            f"{self.head!r} :- {', '.join(repr(goal) for goal in body)}."
            for body in self.bodies
        ]
        return "\n".join(clauses)
