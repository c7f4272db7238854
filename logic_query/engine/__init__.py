"""Query resolution engine."""

from .resolution import ResolutionEngine, EngineConfig

__all__ = [
    "ResolutionEngine",
    "EngineConfig",
]
