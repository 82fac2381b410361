"""
Transpile Infrastructure
"""

from .typescript import TypeScriptTranspiler

__all__ = ["TypeScriptTranspiler"]
