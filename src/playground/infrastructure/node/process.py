"""
One-shot Node.js subprocess runner.

Each call starts a fresh ``node`` process, writes the payload to its stdin
and collects stdout/stderr. The process is killed when the hard limit
expires.
"""

import asyncio
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence

from playground.domain.errors import ExecutionTimeoutError, RuntimeUnavailableError
from playground.infrastructure.logging import get_logger

logger = get_logger(__name__)

# Only these variables reach user-facing engines
_PASSTHROUGH_ENV = ("PATH", "NODE_PATH", "LANG", "LC_ALL", "TMPDIR", "SYSTEMROOT")


@dataclass(frozen=True)
class NodeProcessResult:
    returncode: int
    stdout: str
    stderr: str
    duration_ms: float


def node_environment(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Scrubbed environment for engine subprocesses."""
    env = {key: os.environ[key] for key in _PASSTHROUGH_ENV if key in os.environ}
    env.setdefault("PATH", "/usr/local/bin:/usr/bin:/bin")
    env["NODE_NO_WARNINGS"] = "1"
    if extra:
        env.update(extra)
    return env


async def run_node_script(
    node_binary: str,
    script: Path,
    args: Sequence[str] = (),
    stdin: str = "",
    timeout: float = 10.0,
    flags: Sequence[str] = (),
    env: Optional[Dict[str, str]] = None,
    ready_marker: Optional[str] = None,
    startup_timeout: float = 5.0,
) -> NodeProcessResult:
    """
    Run a host script with Node.js.

    Without ``ready_marker`` the hard limit counts from spawn. With it, the
    host gets ``startup_timeout`` to print the marker line on stderr and the
    hard limit counts from that line, so interpreter start-up does not eat
    into the program's budget.

    Args:
        node_binary: Executable name or path
        script: Host script to run
        args: Arguments passed after the script path
        stdin: Text written to the process stdin
        timeout: Hard wall-clock limit in seconds
        flags: Node.js CLI flags placed before the script path
        env: Environment, defaults to node_environment()
        ready_marker: stderr line announcing that the budget starts
        startup_timeout: Seconds allowed before the ready marker

    Returns:
        NodeProcessResult

    Raises:
        RuntimeUnavailableError: node binary not found
        ExecutionTimeoutError: hard limit expired, process killed
    """
    cmd = [node_binary, *flags, str(script), *args]
    start = time.perf_counter()

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env if env is not None else node_environment(),
        )
    except FileNotFoundError as e:
        raise RuntimeUnavailableError(f"Node.js binary not found: {node_binary}") from e

    ready = asyncio.Event()
    if ready_marker is None:
        ready.set()

    stdout_task = asyncio.ensure_future(process.stdout.read())
    stderr_task = asyncio.ensure_future(_collect_stderr(process.stderr, ready_marker, ready))
    exit_task = asyncio.ensure_future(process.wait())
    feed_task = asyncio.ensure_future(_feed_stdin(process, stdin))

    try:
        if not ready.is_set():
            ready_task = asyncio.ensure_future(ready.wait())
            done, _ = await asyncio.wait(
                {ready_task, exit_task},
                timeout=startup_timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
            ready_task.cancel()
            if not done:
                raise asyncio.TimeoutError()
        await asyncio.wait_for(asyncio.shield(exit_task), timeout=timeout)
    except asyncio.TimeoutError:
        if process.returncode is None:
            process.kill()
        await exit_task
        await asyncio.gather(stdout_task, stderr_task, feed_task)
        logger.warning(
            "Node process killed after hard limit",
            script=script.name,
            timeout_seconds=timeout,
            started=ready.is_set(),
        )
        raise ExecutionTimeoutError(details={"timeout_seconds": timeout})

    stdout, stderr, _ = await asyncio.gather(stdout_task, stderr_task, feed_task)

    duration_ms = (time.perf_counter() - start) * 1000
    logger.debug(
        "Node process exited",
        script=script.name,
        returncode=process.returncode,
        duration_ms=round(duration_ms, 2),
    )
    return NodeProcessResult(
        returncode=process.returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr,
        duration_ms=duration_ms,
    )


async def _feed_stdin(process: asyncio.subprocess.Process, payload: str) -> None:
    try:
        process.stdin.write(payload.encode("utf-8"))
        await process.stdin.drain()
    except (BrokenPipeError, ConnectionResetError):
        # Host exited before reading its input; the exit code tells the rest
        logger.debug("Node process closed stdin early", pid=process.pid)
    finally:
        process.stdin.close()


async def _collect_stderr(
    stream: asyncio.StreamReader,
    ready_marker: Optional[str],
    ready: asyncio.Event,
) -> str:
    lines = []
    while True:
        raw = await stream.readline()
        if not raw:
            break
        text = raw.decode("utf-8", errors="replace")
        if ready_marker is not None and not ready.is_set() and text.strip() == ready_marker:
            ready.set()
            continue
        lines.append(text)
    return "".join(lines)
