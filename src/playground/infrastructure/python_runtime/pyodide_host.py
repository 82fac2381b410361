"""
Pyodide runtime adapter.

Implements IPythonRuntimePort with one long-lived Node.js process hosting
Pyodide. The interpreter is started on first use; every caller that arrives
while it is loading awaits the same future. Requests are written one JSON
object per line and answered in order. The host runs each request in a
fresh ``__main__`` namespace and restores builtins afterwards.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from playground.domain.errors import (
    ExecutionTimeoutError,
    RuntimeUnavailableError,
    ScriptRuntimeError,
)
from playground.domain.ports import IPythonRuntimePort
from playground.domain.value_objects import PythonRun
from playground.infrastructure.logging import get_logger
from playground.infrastructure.node import node_environment

logger = get_logger(__name__)

PYODIDE_HOST = Path(__file__).parent / "js" / "pyodide_host.js"

# Upper bound for a single protocol line (captured output included)
_STREAM_LIMIT = 16 * 1024 * 1024


class PyodideRuntime(IPythonRuntimePort):
    """
    Lazily loaded Pyodide interpreter.

    A failed load is reported to every caller waiting on it and is not
    cached: the next call starts a fresh load. A request that exceeds its
    budget kills the host, since Pyodide cannot be interrupted from outside;
    the next call loads a new interpreter.
    """

    def __init__(
        self,
        node_binary: str = "node",
        pyodide_module: str = "pyodide",
        index_url: Optional[str] = None,
        load_timeout_seconds: float = 60.0,
        timeout_seconds: float = 10.0,
        node_flags: Sequence[str] = (),
    ):
        self._node_binary = node_binary
        self._pyodide_module = pyodide_module
        self._index_url = index_url
        self._load_timeout_seconds = load_timeout_seconds
        self._timeout_seconds = timeout_seconds
        self._node_flags = list(node_flags)

        self._process: Optional[asyncio.subprocess.Process] = None
        self._loading: Optional[asyncio.Future] = None
        self._stderr_task: Optional[asyncio.Task] = None
        self._stderr_tail: List[str] = []
        self._request_lock = asyncio.Lock()
        self._next_id = 0

    @property
    def is_loaded(self) -> bool:
        return self._process is not None and self._process.returncode is None

    async def run(self, source: str) -> PythonRun:
        """
        Implementation of IPythonRuntimePort.run().
        """
        await self._ensure_loaded()

        async with self._request_lock:
            # The host may have been replaced while this request was queued
            process = await self._ensure_loaded()
            self._next_id += 1
            request_id = self._next_id

            line = json.dumps({"id": request_id, "code": source}) + "\n"
            process.stdin.write(line.encode("utf-8"))
            await process.stdin.drain()

            try:
                response = await asyncio.wait_for(
                    self._read_response(process, request_id),
                    timeout=self._timeout_seconds,
                )
            except asyncio.TimeoutError:
                logger.warning("Python run exceeded budget, restarting host", timeout_seconds=self._timeout_seconds)
                await self._terminate()
                raise ExecutionTimeoutError(details={"timeout_seconds": self._timeout_seconds})

        stdout = [str(s) for s in response.get("stdout") or []]
        stderr = [str(s) for s in response.get("stderr") or []]
        if not response.get("ok"):
            logs = stdout + stderr
            raise ScriptRuntimeError(str(response.get("error", "Python error")), logs=logs)

        return PythonRun(value=str(response.get("value", "")), stdout=stdout, stderr=stderr)

    async def close(self) -> None:
        """Implementation of IPythonRuntimePort.close()."""
        await self._terminate()

    async def _ensure_loaded(self) -> asyncio.subprocess.Process:
        if self.is_loaded:
            return self._process

        # A finished future here is either a failed load or a host that died
        if self._loading is None or self._loading.done():
            self._loading = asyncio.ensure_future(self._start())

        return await asyncio.shield(self._loading)

    async def _start(self) -> asyncio.subprocess.Process:
        args = [str(PYODIDE_HOST), self._pyodide_module]
        if self._index_url:
            args.append(self._index_url)

        logger.info("Loading Pyodide", module=self._pyodide_module)
        loop = asyncio.get_running_loop()
        started = loop.time()

        try:
            process = await asyncio.create_subprocess_exec(
                self._node_binary,
                *self._node_flags,
                *args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=node_environment(),
                limit=_STREAM_LIMIT,
            )
        except FileNotFoundError as e:
            raise RuntimeUnavailableError(f"Node.js binary not found: {self._node_binary}") from e

        self._stderr_tail = []
        self._stderr_task = asyncio.create_task(self._drain_stderr(process))

        try:
            message = await asyncio.wait_for(self._read_startup(process), timeout=self._load_timeout_seconds)
        except asyncio.TimeoutError:
            await self._kill(process)
            raise RuntimeUnavailableError(f"Pyodide did not load within {self._load_timeout_seconds}s")

        if message.get("type") != "ready":
            await self._kill(process)
            error = message.get("error") or "\n".join(self._stderr_tail) or "host exited during start-up"
            logger.error("Pyodide load failed", error=error)
            raise RuntimeUnavailableError(f"Failed to load Pyodide: {error}")

        self._process = process
        logger.info("Pyodide ready", load_seconds=round(loop.time() - started, 2))
        return process

    async def _read_startup(self, process: asyncio.subprocess.Process) -> Dict[str, Any]:
        while True:
            message = await self._read_message(process)
            if message is None:
                return {"type": "exited"}
            if message.get("type") in ("ready", "load_error"):
                return message

    async def _read_response(self, process: asyncio.subprocess.Process, request_id: int) -> Dict[str, Any]:
        while True:
            message = await self._read_message(process)
            if message is None:
                self._process = None
                raise RuntimeUnavailableError("Python runtime exited unexpectedly")
            if message.get("type") == "result" and message.get("id") == request_id:
                return message

    @staticmethod
    async def _read_message(process: asyncio.subprocess.Process) -> Optional[Dict[str, Any]]:
        """Next JSON line from the host; None at end of stream."""
        while True:
            raw = await process.stdout.readline()
            if not raw:
                return None
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                # Package loading chatter printed by Pyodide itself
                logger.debug("Ignoring non-protocol line from Pyodide host", line=raw[:200])
                continue
            if isinstance(message, dict):
                return message

    async def _drain_stderr(self, process: asyncio.subprocess.Process) -> None:
        while True:
            raw = await process.stderr.readline()
            if not raw:
                return
            text = raw.decode("utf-8", errors="replace").rstrip()
            self._stderr_tail = (self._stderr_tail + [text])[-20:]
            logger.debug("Pyodide host stderr", line=text)

    async def _terminate(self) -> None:
        process, self._process = self._process, None
        if process is not None:
            await self._kill(process)

    async def _kill(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()

        task, self._stderr_task = self._stderr_task, None
        if task is not None:
            # stderr reaches EOF once the process is gone
            done, _ = await asyncio.wait({task}, timeout=1.0)
            if not done:
                task.cancel()
