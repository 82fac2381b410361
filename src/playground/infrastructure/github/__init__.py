"""
GitHub Infrastructure
"""

from .client import GitHubClient

__all__ = ["GitHubClient"]
