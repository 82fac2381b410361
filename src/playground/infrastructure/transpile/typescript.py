"""
TypeScript transpile adapter.

Implements ITranspilerPort by compiling the source as a one-file TypeScript
program in a Node.js subprocess: type-checked against the ES2020 library
and the sandbox globals, no module resolution, target ES2020.
"""

from pathlib import Path

from playground.domain.errors import (
    ExecutionTimeoutError,
    RuntimeUnavailableError,
    TranspileError,
)
from playground.domain.ports import ITranspilerPort
from playground.infrastructure.logging import get_logger
from playground.infrastructure.node import parse_envelope, run_node_script

logger = get_logger(__name__)

TRANSPILE_HOST = Path(__file__).parent / "js" / "transpile.js"


class TypeScriptTranspiler(ITranspilerPort):
    """Type-checked lowering from TypeScript to JavaScript."""

    def __init__(
        self,
        node_binary: str = "node",
        typescript_module: str = "typescript",
        timeout_seconds: float = 10.0,
    ):
        self._node_binary = node_binary
        self._typescript_module = typescript_module
        self._timeout_seconds = timeout_seconds

    async def transpile(self, source: str) -> str:
        """
        Implementation of ITranspilerPort.transpile().

        Raises:
            TranspileError: Compiler reported diagnostics or did not finish
            RuntimeUnavailableError: node or the compiler module is missing
        """
        try:
            completed = await run_node_script(
                self._node_binary,
                TRANSPILE_HOST,
                args=[self._typescript_module],
                stdin=source,
                timeout=self._timeout_seconds,
            )
        except ExecutionTimeoutError:
            raise TranspileError(f"compiler did not finish within {self._timeout_seconds}s")

        envelope = parse_envelope(completed.stdout)
        if envelope is None:
            raise TranspileError(completed.stderr.strip() or f"compiler exited with code {completed.returncode}")

        kind = envelope.get("kind")
        if kind == "ok":
            output = str(envelope.get("value", ""))
            logger.debug("TypeScript transpiled", source_length=len(source), output_length=len(output))
            return output
        if kind == "unavailable":
            raise RuntimeUnavailableError(str(envelope.get("error")))

        logger.info("TypeScript diagnostics reported", source_length=len(source))
        raise TranspileError(str(envelope.get("error", "unknown diagnostic")))
