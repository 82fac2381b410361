"""
Persistence Infrastructure
"""

from .item_store import JsonItemStore

__all__ = ["JsonItemStore"]
