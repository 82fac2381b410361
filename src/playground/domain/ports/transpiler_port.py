"""
Transpiler Port Interface

Defines the contract for lowering TypeScript to plain JavaScript.
"""

from abc import ABC, abstractmethod


class ITranspilerPort(ABC):
    """Port interface for single-file TypeScript transpilation."""

    @abstractmethod
    async def transpile(self, source: str) -> str:
        """
        Lower TypeScript source to JavaScript.

        Args:
            source: TypeScript source text

        Returns:
            JavaScript source text

        Raises:
            TranspileError: With the compiler diagnostic text
        """
        pass
