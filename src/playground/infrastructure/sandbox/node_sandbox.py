"""
Node.js script sandbox.

Implements ISandboxPort. Every run starts a fresh ``node`` process that
evaluates the program in a new ``node:vm`` context whose globals are limited
to ``console`` and the timer functions. The engine enforces the inner
budget; the host script races the completion value against the outer budget;
this process kills the subprocess if neither answers in time.
"""

from pathlib import Path
from typing import Optional, Sequence

from playground.domain.errors import (
    ExecutionTimeoutError,
    ScriptRuntimeError,
    ScriptTimeoutError,
)
from playground.domain.ports import ISandboxPort
from playground.domain.value_objects import SandboxRun
from playground.infrastructure.logging import get_logger
from playground.infrastructure.node import READY_MARKER, parse_envelope, run_node_script

logger = get_logger(__name__)

VM_HOST = Path(__file__).parent / "js" / "vm_host.js"


class NodeSandboxExecutor(ISandboxPort):
    """
    Evaluates JavaScript in an isolated node:vm context.

    No filesystem, network or process objects are placed in the context,
    the subprocess gets a scrubbed environment, and string code generation
    is disabled for the host realm.
    """

    def __init__(
        self,
        node_binary: str = "node",
        node_flags: Optional[Sequence[str]] = None,
        process_grace_ms: int = 250,
        startup_timeout_seconds: float = 5.0,
    ):
        """
        Args:
            node_binary: Node.js executable
            node_flags: Extra CLI flags for the host process
            process_grace_ms: Allowance past the outer budget before the host is killed
            startup_timeout_seconds: Time node may take to start and read the program
        """
        self._node_binary = node_binary
        self._node_flags = list(node_flags) if node_flags is not None else ["--disallow-code-generation-from-strings"]
        self._process_grace_ms = process_grace_ms
        self._startup_timeout_seconds = startup_timeout_seconds

    async def run(self, source: str, timeout_ms: int, outer_timeout_ms: int) -> SandboxRun:
        """
        Implementation of ISandboxPort.run().

        Both budgets start when the host has read the program. Evaluation
        is aborted after ``timeout_ms``; the whole run, a returned promise
        included, must settle within ``outer_timeout_ms``. A host whose event
        loop is stalled past that is killed, which reports the same outer
        timeout.
        """
        hard_limit = (max(timeout_ms, outer_timeout_ms) + self._process_grace_ms) / 1000

        completed = await run_node_script(
            self._node_binary,
            VM_HOST,
            args=[str(timeout_ms), str(outer_timeout_ms)],
            stdin=source,
            timeout=hard_limit,
            flags=self._node_flags,
            ready_marker=READY_MARKER,
            startup_timeout=self._startup_timeout_seconds,
        )

        envelope = parse_envelope(completed.stdout)
        if envelope is None:
            logger.warning(
                "Sandbox produced no result envelope",
                returncode=completed.returncode,
                stderr_preview=completed.stderr[:200],
            )
            message = completed.stderr.strip() or f"Sandbox exited with code {completed.returncode}"
            raise ScriptRuntimeError(message)

        logs = [str(line) for line in envelope.get("logs") or []]
        kind = envelope.get("kind")

        if kind == "ok":
            value = envelope.get("value")
            return SandboxRun(value="undefined" if value is None else str(value), logs=logs)
        if kind == "timeout":
            raise ScriptTimeoutError(envelope.get("error") or f"Script execution timed out after {timeout_ms}ms", logs=logs)
        if kind == "outer_timeout":
            raise ExecutionTimeoutError(details={"logs": logs})
        raise ScriptRuntimeError(str(envelope.get("error", "Unknown error")), logs=logs)
