"""
GitHub Port Interface

Defines the contract for pushing a single file to a repository branch.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IGitHubPort(ABC):
    """Port interface for GitHub content pushes."""

    @abstractmethod
    async def push_file(
        self,
        token: str,
        owner: str,
        repo: str,
        path: str,
        message: str,
        content: str,
        branch: str = "main",
    ) -> Dict[str, Any]:
        """
        Create or overwrite a file on a branch.

        Args:
            token: Caller supplied bearer token, passed through untouched
            owner: Repository owner
            repo: Repository name
            path: File path inside the repository
            message: Commit message
            content: Raw text content
            branch: Target branch

        Returns:
            Dict with content path/sha, commit sha and the branch head
            the write was based on

        Raises:
            GitHubAPIError: Any non-success response except the file lookup
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        pass
