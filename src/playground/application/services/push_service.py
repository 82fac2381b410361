"""
Push Service

Pushes source files to GitHub, optionally together with a log of running
them.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from playground.application.services.execution_router import ExecutionRouter
from playground.domain.errors import InputError
from playground.domain.ports import IGitHubPort
from playground.domain.value_objects import ExecutionRequest, ExecutionResult, Language
from playground.infrastructure.logging import get_logger

logger = get_logger(__name__)

_DEFAULT_SOURCE_PATHS = {
    Language.JAVASCRIPT: "src/index.js",
    Language.TYPESCRIPT: "src/index.ts",
    Language.PYTHON: "main.py",
    Language.C: "main.c",
    Language.CPP: "main.cpp",
    Language.JAVA: "Main.java",
}


def default_source_path(language: str) -> str:
    """Repository path used when the caller gives none."""
    return _DEFAULT_SOURCE_PATHS.get(Language.from_tag(language), "src/index.js")


def run_log_path(now: datetime) -> str:
    """``runs/your-program-<timestamp>.txt`` with ``:`` and ``.`` replaced by ``-``."""
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"runs/your-program-{re.sub(r'[:.]', '-', stamp)}.txt"


def render_run_log(language: str, source_path: str, code: str, result: ExecutionResult) -> str:
    output = result.output if result.ok else f"Error: {result.error}"
    return "\n".join(
        [
            f"Language: {language}",
            f"Source file: {source_path}",
            "",
            "===== Code =====",
            code,
            "",
            "===== Output =====",
            output,
        ]
    )


@dataclass
class RunAndPushResult:
    execution: ExecutionResult
    source: Dict[str, Any]
    run_log: Dict[str, Any]
    run_log_path: str


class PushService:
    """
    GitHub push use cases.

    The token is required and forwarded untouched; nothing is cached
    between calls.
    """

    def __init__(
        self,
        github: IGitHubPort,
        router: Optional[ExecutionRouter] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._github = github
        self._router = router
        self._clock = clock

    async def push(
        self,
        token: str,
        owner: str,
        repo: str,
        path: str,
        message: str,
        content: str,
        branch: str = "main",
    ) -> Dict[str, Any]:
        """
        Create or overwrite one file.

        Raises:
            InputError: A required field is empty
            GitHubAPIError: GitHub rejected one of the calls
        """
        if not owner or not repo or not path or not message or not isinstance(content, str):
            raise InputError("owner, repo, path, message, content are required")

        result = await self._github.push_file(
            token=token,
            owner=owner,
            repo=repo,
            path=path,
            message=message,
            content=content,
            branch=branch or "main",
        )
        return {"ok": True, **result}

    async def run_and_push(
        self,
        token: str,
        owner: str,
        repo: str,
        language: str,
        code: str,
        message: str,
        path: Optional[str] = None,
        branch: str = "main",
    ) -> RunAndPushResult:
        """
        Run the code, push it, then push a text log of the run.

        The run outcome is recorded in the log whether or not it succeeded;
        only GitHub failures abort the operation.
        """
        if self._router is None:
            raise RuntimeError("PushService was created without an execution router")
        if not owner or not repo or not message:
            raise InputError("owner, repo, message are required")
        if not isinstance(code, str) or not code.strip():
            raise InputError("Code is required")

        source_path = path or default_source_path(language)
        execution = await self._router.execute(ExecutionRequest(language=language, source=code))

        source = await self.push(token, owner, repo, source_path, message, code, branch)

        log_path = run_log_path(self._clock())
        run_log = await self.push(
            token,
            owner,
            repo,
            log_path,
            f"{message} (save run output)",
            render_run_log(language, source_path, code, execution),
            branch,
        )
        logger.info("Pushed code and run log", owner=owner, repo=repo, run_log_path=log_path, run_ok=execution.ok)

        return RunAndPushResult(execution=execution, source=source, run_log=run_log, run_log_path=log_path)
