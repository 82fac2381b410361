"""
Judge Port Interface

Defines the contract for the remote compile-and-run service.
"""

from abc import ABC, abstractmethod
from typing import Optional

from playground.domain.value_objects import JudgeOutcome


class IJudgePort(ABC):
    """Port interface for the remote judge."""

    @abstractmethod
    async def submit(self, language_alias: str, source: str, stdin: Optional[str] = None) -> JudgeOutcome:
        """
        Submit source synchronously and wait for the outcome.

        Args:
            language_alias: c, cpp / c++ or java
            source: Program text
            stdin: Optional standard input

        Returns:
            Decoded JudgeOutcome

        Raises:
            UnsupportedLanguageAliasError: Alias not present in the catalog
            RemoteServiceError: Non-success status or unreachable service
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        pass
