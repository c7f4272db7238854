"""Knowledge base storage and predicate handles."""

from .knowledge_base import KnowledgeBase, EqualityPolicy
from .predicate import Predicate, Relation, RuleEntry

__all__ = [
    "KnowledgeBase",
    "EqualityPolicy",
    "Predicate",
    "Relation",
    "RuleEntry",
]
