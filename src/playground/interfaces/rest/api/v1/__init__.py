"""
REST API routes.
"""

from . import compile, github, health, items

__all__ = ["compile", "github", "health", "items"]
