"""
Python Runtime Port Interface

Defines the contract for the lazily loaded WebAssembly Python interpreter.
"""

from abc import ABC, abstractmethod

from playground.domain.value_objects import PythonRun


class IPythonRuntimePort(ABC):
    """Port interface for Python execution."""

    @abstractmethod
    async def run(self, source: str) -> PythonRun:
        """
        Run Python source and return the string form of its last expression.

        Raises:
            ScriptRuntimeError: Python raised
            ExecutionTimeoutError: Runtime did not answer in time
            RuntimeUnavailableError: Interpreter could not be loaded
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the interpreter."""
        pass
