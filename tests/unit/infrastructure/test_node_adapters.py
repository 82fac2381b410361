"""
Unit tests for the Node.js backed adapters with the subprocess runner
patched out.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from playground.domain.errors import (
    ExecutionTimeoutError,
    RuntimeUnavailableError,
    ScriptRuntimeError,
    ScriptTimeoutError,
    TranspileError,
)
from playground.infrastructure.node import END_MARKER, READY_MARKER, START_MARKER, NodeProcessResult
from playground.infrastructure.node.process import node_environment
from playground.infrastructure.sandbox import NodeSandboxExecutor
from playground.infrastructure.sandbox.node_sandbox import VM_HOST
from playground.infrastructure.transpile import TypeScriptTranspiler
from playground.infrastructure.transpile.typescript import TRANSPILE_HOST


def envelope(**fields) -> NodeProcessResult:
    stdout = START_MARKER + json.dumps(fields) + END_MARKER + "\n"
    return NodeProcessResult(returncode=0, stdout=stdout, stderr="", duration_ms=5.0)


class TestNodeEnvironment:

    def test_scrubs_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "secret")
        monkeypatch.setenv("PATH", "/usr/bin")

        env = node_environment()

        assert "GITHUB_TOKEN" not in env
        assert env["PATH"] == "/usr/bin"
        assert env["NODE_NO_WARNINGS"] == "1"

    def test_extra_values(self):
        assert node_environment({"NODE_PATH": "/opt/node_modules"})["NODE_PATH"] == "/opt/node_modules"


class TestNodeSandboxExecutor:

    @pytest.fixture
    def runner(self):
        with patch("playground.infrastructure.sandbox.node_sandbox.run_node_script", new_callable=AsyncMock) as mock:
            yield mock

    @pytest.mark.asyncio
    async def test_invocation(self, runner):
        runner.return_value = envelope(kind="ok", value="3", logs=[])
        sandbox = NodeSandboxExecutor(node_binary="/usr/bin/node", process_grace_ms=500)

        await sandbox.run("1 + 2", 1000, 1200)

        runner.assert_awaited_once_with(
            "/usr/bin/node",
            VM_HOST,
            args=["1000", "1200"],
            stdin="1 + 2",
            timeout=1.7,
            flags=["--disallow-code-generation-from-strings"],
            ready_marker=READY_MARKER,
            startup_timeout=5.0,
        )

    @pytest.mark.asyncio
    async def test_ok(self, runner):
        runner.return_value = envelope(kind="ok", value='{"a":1}', logs=["x 1"])

        run = await NodeSandboxExecutor().run("({a: 1})", 1000, 1200)

        assert run.value == '{"a":1}'
        assert run.logs == ["x 1"]

    @pytest.mark.asyncio
    async def test_inner_timeout(self, runner):
        runner.return_value = envelope(kind="timeout", error="Script execution timed out after 1000ms", logs=["a"])

        with pytest.raises(ScriptTimeoutError) as exc_info:
            await NodeSandboxExecutor().run("while(true){}", 1000, 1200)

        assert exc_info.value.message == "Script execution timed out after 1000ms"
        assert exc_info.value.logs == ["a"]

    @pytest.mark.asyncio
    async def test_outer_timeout(self, runner):
        runner.return_value = envelope(kind="outer_timeout", error="Execution timed out", logs=["b"])

        with pytest.raises(ExecutionTimeoutError) as exc_info:
            await NodeSandboxExecutor().run("new Promise(() => {})", 1000, 1200)

        assert exc_info.value.message == "Execution timed out"
        assert exc_info.value.details["logs"] == ["b"]

    @pytest.mark.asyncio
    async def test_runtime_error(self, runner):
        runner.return_value = envelope(kind="error", error="boom", logs=[])

        with pytest.raises(ScriptRuntimeError, match="boom"):
            await NodeSandboxExecutor().run("throw new Error('boom')", 1000, 1200)

    @pytest.mark.asyncio
    async def test_missing_envelope(self, runner):
        runner.return_value = NodeProcessResult(returncode=137, stdout="", stderr="", duration_ms=1.0)

        with pytest.raises(ScriptRuntimeError, match="Sandbox exited with code 137"):
            await NodeSandboxExecutor().run("1", 1000, 1200)

    @pytest.mark.asyncio
    async def test_hard_kill_propagates(self, runner):
        runner.side_effect = ExecutionTimeoutError()

        with pytest.raises(ExecutionTimeoutError):
            await NodeSandboxExecutor().run("1", 1000, 1200)


class TestTypeScriptTranspiler:

    @pytest.fixture
    def runner(self):
        with patch("playground.infrastructure.transpile.typescript.run_node_script", new_callable=AsyncMock) as mock:
            yield mock

    @pytest.mark.asyncio
    async def test_ok(self, runner):
        runner.return_value = envelope(kind="ok", value="let x = 1;\n")
        transpiler = TypeScriptTranspiler(typescript_module="/opt/ts/typescript.js", timeout_seconds=5)

        assert await transpiler.transpile("let x: number = 1") == "let x = 1;\n"
        runner.assert_awaited_once_with(
            "node",
            TRANSPILE_HOST,
            args=["/opt/ts/typescript.js"],
            stdin="let x: number = 1",
            timeout=5,
        )

    @pytest.mark.asyncio
    async def test_diagnostics(self, runner):
        runner.return_value = envelope(kind="error", error="(1,9): TS1109: Expression expected.")

        with pytest.raises(TranspileError, match="TS1109"):
            await TypeScriptTranspiler().transpile("let x = ;")

    @pytest.mark.asyncio
    async def test_compiler_missing(self, runner):
        runner.return_value = envelope(kind="unavailable", error="Cannot load TypeScript compiler 'typescript'")

        with pytest.raises(RuntimeUnavailableError):
            await TypeScriptTranspiler().transpile("let x = 1")

    @pytest.mark.asyncio
    async def test_timeout_becomes_transpile_error(self, runner):
        runner.side_effect = ExecutionTimeoutError()

        with pytest.raises(TranspileError, match="did not finish"):
            await TypeScriptTranspiler(timeout_seconds=1).transpile("let x = 1")
