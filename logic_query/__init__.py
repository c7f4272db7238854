"""
Logic Query - an embeddable, in-memory deductive database.

Predicates, facts and Horn-clause rules are declared through Python calls;
queries pattern-match against facts and resolve rules by backward chaining.

Quick Start:
    from logic_query import KnowledgeBase, rule_var, query_var

    kb = KnowledgeBase()
    X, Y = rule_var("X"), rule_var("Y")

    parent_child = kb.create_predicate("parentChild")
    female = kb.create_predicate("female")
    mother = kb.create_predicate("mother")

    parent_child("Lucy", "Tommy").fact()
    parent_child("Thomas", "Tommy").fact()
    female("Lucy").fact()

    mother(X, Y).if_(parent_child(X, Y), female(X))

    mothers = query_var()
    result = mother.query(mothers, "Tommy")
    print(mothers.values)  # ["Lucy"]
    print(result.success)  # True

Custom equality:
    kb = KnowledgeBase(equal=lambda a, b: a.name == b.name and a.age == b.age)
"""

__version__ = "0.1.0"

# Schemas
from .schemas.terms import TermKind, RuleVariable, QueryVariable, rule_var, query_var, term_kind
from .schemas.result import (
    LogicQueryError,
    FactDeclarationError,
    ArityError,
    ResolutionDepthError,
    FactAssertion,
    QueryResult,
)

# Knowledge base
from .knowledge.knowledge_base import KnowledgeBase, EqualityPolicy
from .knowledge.predicate import Predicate, Relation, RuleEntry

# Engine
from .engine.resolution import ResolutionEngine, EngineConfig

__all__ = [
    # Schemas
    "TermKind",
    "RuleVariable",
    "QueryVariable",
    "rule_var",
    "query_var",
    "term_kind",
    "FactAssertion",
    "QueryResult",
    # Errors
    "LogicQueryError",
    "FactDeclarationError",
    "ArityError",
    "ResolutionDepthError",
    # Knowledge base
    "KnowledgeBase",
    "EqualityPolicy",
    "Predicate",
    "Relation",
    "RuleEntry",
    # Engine
    "ResolutionEngine",
    "EngineConfig",
]
