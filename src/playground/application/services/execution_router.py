"""
Execution Router

Routes a run-code request to the strategy for its language and normalizes
every outcome to an ExecutionResult.
"""

from playground.domain.errors import (
    DomainError,
    ExecutionTimeoutError,
    RemoteServiceError,
    ScriptRuntimeError,
    ScriptTimeoutError,
)
from playground.domain.ports import IJudgePort, IPythonRuntimePort, ISandboxPort, ITranspilerPort
from playground.domain.value_objects import (
    ExecutionRequest,
    ExecutionResult,
    JudgeJob,
    PythonJob,
    ScriptJob,
    TypedScriptJob,
)
from playground.infrastructure.logging import get_logger

logger = get_logger(__name__)

CODE_REQUIRED = "Code is required"
UNSUPPORTED_LANGUAGE = "unsupported language"
TRANSPILE_ERROR_PREFIX = "TypeScript transpile error: "


class ExecutionRouter:
    """
    Dispatches jobs to the sandbox, the Python runtime or the remote judge.

    Dispatch is a visitor over the job variants: each ``visit_*`` method
    owns one strategy. ``execute`` never raises; every failure becomes an
    ``ok=False`` result and leaves no state behind that could affect the
    next request.
    """

    def __init__(
        self,
        sandbox: ISandboxPort,
        transpiler: ITranspilerPort,
        python_runtime: IPythonRuntimePort,
        judge: IJudgePort,
        script_timeout_ms: int = 1000,
        script_outer_timeout_ms: int = 1200,
        python_capture_output: bool = True,
    ):
        """
        Args:
            sandbox: Script sandbox
            transpiler: TypeScript to JavaScript lowering
            python_runtime: WebAssembly Python interpreter
            judge: Remote compile-and-run service for c, cpp and java
            script_timeout_ms: Budget enforced inside the script engine
            script_outer_timeout_ms: Wall-clock budget for settling the result
            python_capture_output: Return Python stdout/stderr as logs
        """
        self._sandbox = sandbox
        self._transpiler = transpiler
        self._python_runtime = python_runtime
        self._judge = judge
        self._script_timeout_ms = script_timeout_ms
        self._script_outer_timeout_ms = script_outer_timeout_ms
        self._python_capture_output = python_capture_output

    async def execute(self, request: ExecutionRequest) -> ExecutionResult:
        """
        Run a request and return its normalized result.

        Args:
            request: Language tag plus source text

        Returns:
            ExecutionResult, ``ok=False`` for every failure
        """
        if not request.has_source():
            return ExecutionResult.failure(CODE_REQUIRED)

        job = request.to_job()
        if job is None:
            logger.info("Rejected unsupported language", language=request.language)
            return ExecutionResult.failure(UNSUPPORTED_LANGUAGE)

        logger.info(
            "Dispatching execution",
            job=type(job).__name__,
            language=request.language,
            source_length=len(request.source),
        )

        try:
            result = await job.accept(self)
        except Exception as e:
            logger.exception("Execution strategy raised unexpectedly", job=type(job).__name__)
            return ExecutionResult.failure(str(e) or type(e).__name__)

        logger.info("Execution finished", job=type(job).__name__, ok=result.ok, log_lines=len(result.logs))
        return result

    async def visit_script(self, job: ScriptJob) -> ExecutionResult:
        return await self._run_script(job.source)

    async def visit_typed_script(self, job: TypedScriptJob) -> ExecutionResult:
        try:
            javascript = await self._transpiler.transpile(job.source)
        except DomainError as e:
            return ExecutionResult.failure(TRANSPILE_ERROR_PREFIX + e.message)
        return await self._run_script(javascript)

    async def visit_python(self, job: PythonJob) -> ExecutionResult:
        try:
            run = await self._python_runtime.run(job.source)
        except ScriptRuntimeError as e:
            return ExecutionResult.failure(e.message, logs=self._python_logs(e.logs))
        except DomainError as e:
            return ExecutionResult.failure(e.message)

        return ExecutionResult.success(run.value, logs=self._python_logs(run.stdout + run.stderr))

    async def visit_judge(self, job: JudgeJob) -> ExecutionResult:
        try:
            outcome = await self._judge.submit(job.language.value, job.source, job.stdin)
        except RemoteServiceError as e:
            return ExecutionResult.failure(e.message)
        return ExecutionResult.success(outcome.combined_output())

    async def _run_script(self, source: str) -> ExecutionResult:
        try:
            run = await self._sandbox.run(source, self._script_timeout_ms, self._script_outer_timeout_ms)
        except (ScriptTimeoutError, ScriptRuntimeError) as e:
            return ExecutionResult.failure(e.message, logs=e.logs)
        except ExecutionTimeoutError as e:
            return ExecutionResult.failure(e.message, logs=e.details.get("logs", []))
        except DomainError as e:
            return ExecutionResult.failure(e.message)
        return ExecutionResult.success(run.value, logs=run.logs)

    def _python_logs(self, lines):
        return list(lines) if self._python_capture_output else []
