"""
Sandbox Playground

Run-code service for JavaScript, TypeScript, Python, C, C++ and Java,
with a flat-file item store and a GitHub content-push integration.
"""

__version__ = "0.1.0"

from .domain.value_objects import (
    ExecutionRequest,
    ExecutionResult,
    JudgeOutcome,
    Language,
    LanguageCatalogEntry,
)

__all__ = [
    "ExecutionRequest",
    "ExecutionResult",
    "JudgeOutcome",
    "Language",
    "LanguageCatalogEntry",
]
