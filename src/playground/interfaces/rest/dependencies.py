"""
Service wiring.

Builds the adapters and services from settings, keeps them on
``app.state`` and exposes FastAPI dependencies that read them back.
"""
from fastapi import FastAPI, Request

from playground.application.services import ExecutionRouter, ItemService, PushService
from playground.domain.ports import IJudgePort
from playground.infrastructure.config.settings import Settings
from playground.infrastructure.github import GitHubClient
from playground.infrastructure.judge import JudgeClient
from playground.infrastructure.logging import get_logger
from playground.infrastructure.persistence import JsonItemStore
from playground.infrastructure.python_runtime import PyodideRuntime
from playground.infrastructure.sandbox import NodeSandboxExecutor
from playground.infrastructure.transpile import TypeScriptTranspiler

logger = get_logger(__name__)


def initialize_dependencies(app: FastAPI, settings: Settings) -> None:
    """Create every adapter and service and attach them to app.state."""
    sandbox = NodeSandboxExecutor(
        node_binary=settings.node_binary,
        node_flags=settings.node_flags,
        process_grace_ms=settings.process_grace_ms,
        startup_timeout_seconds=settings.process_startup_timeout_seconds,
    )
    transpiler = TypeScriptTranspiler(
        node_binary=settings.node_binary,
        typescript_module=settings.typescript_module,
        timeout_seconds=settings.transpile_timeout_seconds,
    )
    python_runtime = PyodideRuntime(
        node_binary=settings.node_binary,
        pyodide_module=settings.pyodide_module,
        index_url=settings.pyodide_index_url,
        load_timeout_seconds=settings.python_load_timeout_seconds,
        timeout_seconds=settings.python_timeout_seconds,
    )
    judge = JudgeClient(
        base_url=settings.judge_base_url,
        api_key=settings.judge_api_key,
        api_host=settings.judge_api_host,
        timeout=settings.judge_timeout_seconds,
        connect_timeout=settings.judge_connect_timeout_seconds,
        catalog_ttl_seconds=settings.judge_catalog_ttl_seconds,
    )
    github = GitHubClient(api_url=settings.github_api_url, timeout=settings.github_timeout_seconds)

    router = ExecutionRouter(
        sandbox=sandbox,
        transpiler=transpiler,
        python_runtime=python_runtime,
        judge=judge,
        script_timeout_ms=settings.script_timeout_ms,
        script_outer_timeout_ms=settings.script_outer_timeout_ms,
        python_capture_output=settings.python_capture_output,
    )

    app.state.python_runtime = python_runtime
    app.state.judge = judge
    app.state.github = github
    app.state.execution_router = router
    app.state.item_service = ItemService(JsonItemStore(settings.items_file))
    app.state.push_service = PushService(github=github, router=router)

    logger.info("Dependencies initialized", items_file=str(settings.items_file), judge_base_url=settings.judge_base_url)


async def cleanup_dependencies(app: FastAPI) -> None:
    """Stop the Python host and close HTTP clients."""
    for name in ("python_runtime", "judge", "github"):
        component = getattr(app.state, name, None)
        if component is not None:
            await component.close()


def get_execution_router(request: Request) -> ExecutionRouter:
    return request.app.state.execution_router


def get_judge(request: Request) -> IJudgePort:
    return request.app.state.judge


def get_item_service(request: Request) -> ItemService:
    return request.app.state.item_service


def get_push_service(request: Request) -> PushService:
    return request.app.state.push_service
