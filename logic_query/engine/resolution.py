"""Resolution engine: answers queries from facts and rules."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from ..schemas.result import QueryResult, ResolutionDepthError
from ..schemas.terms import QueryVariable, RuleVariable, TermKind, format_term, term_kind

if TYPE_CHECKING:
    from ..knowledge.knowledge_base import KnowledgeBase
    from ..knowledge.predicate import Predicate, Relation

Binding = dict[RuleVariable, Any]

_MISSING = object()


@dataclass
class EngineConfig:
    """Configuration for a knowledge base and its resolution engine."""

    # Maximum nesting of goal searches (None = unbounded)
    max_depth: Optional[int] = None

    # Reject applications whose argument count differs from the declared arity?
    strict_arity: bool = False

    # Raise FactDeclarationError instead of returning a failed FactAssertion?
    raise_on_invalid_fact: bool = False

    # Log a summary for every top-level query?
    log_queries: bool = False


class ResolutionEngine:
    """
    Backward-chaining search over a knowledge base.

    A query is answered by matching its arguments against the stored facts
    of the predicate, then against the head of every rule declared for the
    predicate. Rule bodies are resolved goal by goal and the per-goal
    bindings are joined by depth-first backtracking.

    Usage:
        engine = ResolutionEngine(kb)
        rows = engine.search(mother, (query_var(), "Tommy"))
    """

    def __init__(
        self,
        kb: "KnowledgeBase",
        config: EngineConfig | None = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the engine.

        Args:
            kb: Knowledge base whose fact and rule tables are searched
            config: Engine configuration (uses defaults if not provided)
            logger: Logger instance
        """
        self.kb = kb
        self.config = config or EngineConfig()
        self.logger = logger or logging.getLogger(__name__)

    def search(
        self,
        predicate: "Predicate",
        query_args: tuple[Any, ...],
        unique: bool = False,
        depth: int = 0,
    ) -> QueryResult:
        """
        Find every argument tuple of `predicate` matching `query_args`.

        Args:
            predicate: The predicate to query
            query_args: One literal or QueryVariable per argument position
            unique: Drop duplicate tuples and duplicate variable values
            depth: Nesting level of this search (0 for a caller's query)

        Returns:
            QueryResult with fact matches first, then rule matches
        """
        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            message = f"Search for {predicate!r} exceeded maximum depth {max_depth}"
            self.logger.error(message)
            raise ResolutionDepthError(message)

        results = QueryResult()
        for row in self.search_facts(predicate, query_args, unique):
            self._collect(row, results, unique)
        for row in self.search_rules(predicate, query_args, unique, depth):
            self._collect(row, results, unique)

        if depth == 0 and self.config.log_queries:
            rendered = ", ".join(format_term(a) for a in query_args)
            self.logger.debug(f"Query {predicate!r}({rendered}): {len(results)} result(s)")
        return results

    def search_facts(
        self,
        predicate: "Predicate",
        query_args: tuple[Any, ...],
        unique: bool = False,
    ) -> list[tuple[Any, ...]]:
        """Match the query against the stored facts of the predicate."""
        rows = []
        for fact in self.kb.facts.get(predicate, ()):
            captured: dict[QueryVariable, Any] = {}
            matched = True
            for value, arg in zip(fact, query_args):
                if term_kind(arg) is TermKind.QUERY_VARIABLE:
                    captured[arg] = value
                elif not self.kb.equal(value, arg):
                    matched = False
                    break

            if matched:
                self._deliver(captured, unique)
                rows.append(fact)
        return rows

    def search_rules(
        self,
        predicate: "Predicate",
        query_args: tuple[Any, ...],
        unique: bool = False,
        depth: int = 0,
    ) -> list[tuple[Any, ...]]:
        """Match the query against every rule declared for the predicate."""
        rows = []
        for entry in self.kb.rules:
            if entry.head.predicate is not predicate:
                continue

            head_bindings = self.match_head(entry.head, query_args)
            if head_bindings is None:
                continue

            for body in entry.bodies:
                for binding in self.process_body(body, head_bindings, depth):
                    row = self._substitute_head(entry.head, binding, head_bindings)
                    if row is None:
                        self.logger.debug(f"Skipping non-ground derivation of {entry.head!r}")
                        continue
                    captured = {
                        arg: value
                        for arg, value in zip(query_args, row)
                        if term_kind(arg) is TermKind.QUERY_VARIABLE
                    }
                    self._deliver(captured, unique)
                    rows.append(row)
        return rows

    def match_head(self, head: "Relation", query_args: tuple[Any, ...]) -> Binding | None:
        """
        Bind head rule variables to the query arguments.

        Args:
            head: The rule head
            query_args: The query arguments

        Returns:
            Mapping of head variables to a literal or the query's
            QueryVariable, or None if a literal head argument rejects the query
        """
        bindings: Binding = {}
        for head_arg, arg in zip(head.args, query_args):
            arg_is_open = term_kind(arg) is TermKind.QUERY_VARIABLE

            if term_kind(head_arg) is TermKind.RULE_VARIABLE:
                if head_arg not in bindings:
                    bindings[head_arg] = arg
                elif arg_is_open:
                    continue
                elif term_kind(bindings[head_arg]) is TermKind.QUERY_VARIABLE:
                    bindings[head_arg] = arg
                elif not self.kb.equal(bindings[head_arg], arg):
                    return None
            elif not arg_is_open and not self.kb.equal(head_arg, arg):
                return None
        return bindings

    def process_body(
        self,
        body: tuple["Relation", ...],
        head_bindings: Binding,
        depth: int = 0,
    ) -> list[Binding]:
        """
        Resolve a conjunction of goals.

        Args:
            body: The goals of one rule body
            head_bindings: Variables bound by matching the head
            depth: Nesting level of the search owning this body

        Returns:
            Complete, mutually consistent bindings of the body's variables
        """
        goal_bindings = []
        for goal in body:
            partials = self.resolve_goal(goal, head_bindings, depth)
            if not partials:
                return []
            goal_bindings.append(partials)

        complete: list[Binding] = []
        self._join(goal_bindings, 0, {}, complete)
        return complete

    def resolve_goal(
        self,
        goal: "Relation",
        head_bindings: Binding,
        depth: int = 0,
    ) -> list[Binding]:
        """Search a single goal and return one partial binding per result."""
        goal_args = []
        variable_positions: list[tuple[int, RuleVariable]] = []
        for index, arg in enumerate(goal.args):
            if term_kind(arg) is not TermKind.RULE_VARIABLE:
                goal_args.append(arg)
                continue

            bound = head_bindings.get(arg, _MISSING)
            if bound is _MISSING or term_kind(bound) is TermKind.QUERY_VARIABLE:
                goal_args.append(QueryVariable())
            else:
                goal_args.append(bound)
            variable_positions.append((index, arg))

        partials = []
        for row in self.search(goal.predicate, tuple(goal_args), depth=depth + 1):
            partial: Binding = {}
            for index, variable in variable_positions:
                value = row[index]
                if variable not in partial:
                    partial[variable] = value
                elif not self.kb.equal(partial[variable], value):
                    break
            else:
                partials.append(partial)
        return partials

    def _join(
        self,
        goal_bindings: list[list[Binding]],
        index: int,
        candidate: Binding,
        out: list[Binding],
    ) -> None:
        """Extend `candidate` with each compatible binding of goal `index`."""
        if index >= len(goal_bindings):
            out.append(candidate)
            return

        for partial in goal_bindings[index]:
            extended = dict(candidate)
            compatible = True
            for variable, value in partial.items():
                if variable not in extended:
                    extended[variable] = value
                elif not self.kb.equal(extended[variable], value):
                    compatible = False
                    break

            if compatible:
                self._join(goal_bindings, index + 1, extended, out)

    def _substitute_head(
        self,
        head: "Relation",
        binding: Binding,
        head_bindings: Binding,
    ) -> tuple[Any, ...] | None:
        """Build the result tuple for a head; None if a variable stays unbound."""
        row = []
        for head_arg in head.args:
            if term_kind(head_arg) is not TermKind.RULE_VARIABLE:
                row.append(head_arg)
            elif head_arg in binding:
                row.append(binding[head_arg])
            else:
                # Variable absent from the body: only a query literal can ground it
                bound = head_bindings.get(head_arg, _MISSING)
                if bound is _MISSING or term_kind(bound) is TermKind.QUERY_VARIABLE:
                    return None
                row.append(bound)
        return tuple(row)

    def _deliver(self, captured: dict[QueryVariable, Any], unique: bool) -> None:
        """Append captured values to their query variables."""
        for variable, value in captured.items():
            if unique:
                self._add_unique(value, variable.values)
            else:
                variable.values.append(value)

    def _collect(self, row: tuple[Any, ...], results: list, unique: bool) -> None:
        if not unique or not any(self._rows_equal(existing, row) for existing in results):
            results.append(row)

    def _add_unique(self, value: Any, values: list[Any]) -> None:
        if not any(self.kb.equal(existing, value) for existing in values):
            values.append(value)

    def _rows_equal(self, left: tuple[Any, ...], right: tuple[Any, ...]) -> bool:
        return len(left) == len(right) and all(
            self.kb.equal(a, b) for a, b in zip(left, right)
        )
