"""In-memory knowledge base holding facts and rules."""

import logging
import operator
from typing import Any, Callable, Optional

from ..engine.resolution import EngineConfig, ResolutionEngine
from ..schemas.result import ArityError, FactAssertion, FactDeclarationError, QueryResult
from ..schemas.terms import TermKind, term_kind
from .predicate import Predicate, Relation, RuleEntry

EqualityPolicy = Callable[[Any, Any], bool]


class KnowledgeBase:
    """
    Deductive database of facts and Horn-clause rules.

    Owns the fact table (predicate -> asserted argument tuples), the rule
    table (rule entries in declaration order) and the equality policy used
    for every comparison between literals.

    Usage:
        kb = KnowledgeBase()
        X, Y = rule_var("X"), rule_var("Y")

        parent_child = kb.create_predicate("parentChild")
        female = kb.create_predicate("female")
        mother = kb.create_predicate("mother")

        parent_child("Lucy", "Tommy").fact()
        female("Lucy").fact()
        mother(X, Y).if_(parent_child(X, Y), female(X))

        mothers = query_var()
        result = mother.query(mothers, "Tommy")
        print(mothers.values)  # ["Lucy"]
    """

    def __init__(
        self,
        equal: Optional[EqualityPolicy] = None,
        config: EngineConfig | None = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize an empty knowledge base.

        Args:
            equal: Equality policy for literals (defaults to ==)
            config: Engine configuration (uses defaults if not provided)
            logger: Logger instance
        """
        self.equal: EqualityPolicy = equal or operator.eq
        self.config = config or EngineConfig()
        self.logger = logger or logging.getLogger(__name__)

        self.facts: dict[Predicate, list[tuple[Any, ...]]] = {}
        self.rules: list[RuleEntry] = []
        self._predicates: list[Predicate] = []

        self.engine = ResolutionEngine(self, config=self.config, logger=logger)

    @property
    def predicates(self) -> list[Predicate]:
        """Get all predicates in creation order."""
        return list(self._predicates)

    def create_predicate(self, name: Optional[str] = None, arity: Optional[int] = None) -> Predicate:
        """
        Declare a new predicate.

        Args:
            name: Display name for diagnostics
            arity: Declared number of arguments

        Returns:
            A fresh Predicate handle bound to this knowledge base
        """
        predicate = Predicate(self, len(self._predicates), name=name, arity=arity)
        self._predicates.append(predicate)
        self.logger.debug(f"Created predicate {predicate!r}")
        return predicate

    def check_arity(self, predicate: Predicate, args: tuple[Any, ...]) -> None:
        """Raise ArityError if strict_arity is on and the argument count is wrong."""
        if not self.config.strict_arity or predicate.arity is None:
            return
        if len(args) != predicate.arity:
            raise ArityError(
                f"{predicate!r} expects {predicate.arity} argument(s), got {len(args)}"
            )

    def assert_fact(self, predicate: Predicate, *args: Any, strict: Optional[bool] = None) -> FactAssertion:
        """
        Add a ground fact for a predicate.

        Args:
            predicate: The predicate the fact belongs to
            *args: Literal arguments
            strict: Raise instead of returning a failed FactAssertion
                (defaults to config.raise_on_invalid_fact)

        Returns:
            FactAssertion with the stored tuple, or with a
            FactDeclarationError if any argument is a variable
        """
        self.check_arity(predicate, args)
        if strict is None:
            strict = self.config.raise_on_invalid_fact

        variables = [arg for arg in args if term_kind(arg) is not TermKind.LITERAL]
        if variables:
            error = FactDeclarationError(
                f"Fact {Relation(predicate, args)!r} contains variable(s): "
                f"{', '.join(repr(v) for v in variables)}"
            )
            self.logger.warning(str(error))
            if strict:
                raise error
            return FactAssertion(success=False, error=error)

        fact = tuple(args)
        self.facts.setdefault(predicate, []).append(fact)
        self.logger.debug(f"Asserted fact {Relation(predicate, fact)!r}")
        return FactAssertion(success=True, fact=fact)

    def add_rule(self, head: Relation, goal: Relation, *goals: Relation) -> RuleEntry:
        """
        Declare a rule body for a head pattern.

        Args:
            head: The head pattern
            goal: First goal of the body
            *goals: Remaining goals of the body

        Returns:
            The created rule entry
        """
        entry = RuleEntry(head=head, bodies=[(goal, *goals)])
        self.rules.append(entry)
        self.logger.debug(f"Declared rule {entry!r}")
        return entry

    def facts_for(self, predicate: Predicate) -> list[tuple[Any, ...]]:
        """Get the facts asserted for a predicate, in insertion order."""
        return list(self.facts.get(predicate, []))

    def rules_for(self, predicate: Predicate) -> list[RuleEntry]:
        """Get the rule entries whose head uses a predicate."""
        return [entry for entry in self.rules if entry.predicate is predicate]

    def search(self, predicate: Predicate, args: tuple[Any, ...], unique: bool = False) -> QueryResult:
        """
        Run a query.

        Args:
            predicate: The predicate to query
            args: One literal or QueryVariable per argument position
            unique: Drop duplicate tuples and duplicate variable values

        Returns:
            QueryResult of matching tuples
        """
        self.check_arity(predicate, args)
        return self.engine.search(predicate, tuple(args), unique=unique)

    def query(self, predicate: Predicate) -> Callable[..., QueryResult]:
        """Get a query function for a predicate, keeping every derivation."""
        def run(*args: Any) -> QueryResult:
            return self.search(predicate, args)
        return run

    def query_unique(self, predicate: Predicate) -> Callable[..., QueryResult]:
        """Get a query function for a predicate, dropping duplicates."""
        def run(*args: Any) -> QueryResult:
            return self.search(predicate, args, unique=True)
        return run
