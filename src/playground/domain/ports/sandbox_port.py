"""
Sandbox Port Interface

Defines the contract for evaluating JavaScript in an isolated context.
This is an output port - implemented by infrastructure layer.
"""

from abc import ABC, abstractmethod

from playground.domain.value_objects import SandboxRun


class ISandboxPort(ABC):
    """
    Port interface for the script sandbox.

    The evaluation context exposes only a logging function and timer
    scheduling primitives.
    """

    @abstractmethod
    async def run(self, source: str, timeout_ms: int, outer_timeout_ms: int) -> SandboxRun:
        """
        Evaluate source and return its serialized completion value.

        Args:
            source: JavaScript source text
            timeout_ms: Budget enforced by the engine itself
            outer_timeout_ms: Wall-clock budget for the whole evaluation

        Returns:
            SandboxRun with the serialized value and captured log lines

        Raises:
            ScriptTimeoutError: Engine aborted evaluation (inner budget)
            ExecutionTimeoutError: Outer wall-clock budget expired
            ScriptRuntimeError: User code threw
            RuntimeUnavailableError: Engine could not be started
        """
        pass
