"""
Execution Value Objects

Immutable value objects for the run-code pipeline: requests, normalized
results, judge submissions and the job variants the router dispatches on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, TypeVar

T = TypeVar("T")


class Language(str, Enum):
    """Language tags accepted by the execution router."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    PYTHON = "python"
    C = "c"
    CPP = "cpp"
    JAVA = "java"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> Optional["Language"]:
        """Normalize a caller supplied tag, returning None when unknown."""
        if not isinstance(tag, str):
            return None
        return _LANGUAGE_ALIASES.get(tag.strip().lower())

    @property
    def is_judge_language(self) -> bool:
        return self in (Language.C, Language.CPP, Language.JAVA)


_LANGUAGE_ALIASES: Dict[str, Language] = {
    "javascript": Language.JAVASCRIPT,
    "js": Language.JAVASCRIPT,
    "script": Language.JAVASCRIPT,
    "typescript": Language.TYPESCRIPT,
    "ts": Language.TYPESCRIPT,
    "typed-script": Language.TYPESCRIPT,
    "python": Language.PYTHON,
    "py": Language.PYTHON,
    "c": Language.C,
    "cpp": Language.CPP,
    "c++": Language.CPP,
    "java": Language.JAVA,
}


class JobVisitor(Protocol[T]):
    """One method per job variant."""

    async def visit_script(self, job: "ScriptJob") -> T: ...

    async def visit_typed_script(self, job: "TypedScriptJob") -> T: ...

    async def visit_python(self, job: "PythonJob") -> T: ...

    async def visit_judge(self, job: "JudgeJob") -> T: ...


@dataclass(frozen=True)
class ScriptJob:
    source: str

    async def accept(self, visitor: JobVisitor[T]) -> T:
        return await visitor.visit_script(self)


@dataclass(frozen=True)
class TypedScriptJob:
    source: str

    async def accept(self, visitor: JobVisitor[T]) -> T:
        return await visitor.visit_typed_script(self)


@dataclass(frozen=True)
class PythonJob:
    source: str

    async def accept(self, visitor: JobVisitor[T]) -> T:
        return await visitor.visit_python(self)


@dataclass(frozen=True)
class JudgeJob:
    language: Language
    source: str
    stdin: Optional[str] = None

    async def accept(self, visitor: JobVisitor[T]) -> T:
        return await visitor.visit_judge(self)


@dataclass(frozen=True)
class ExecutionRequest:
    """
    A single run-code request. Created per call and never persisted.

    Attributes:
        language: Raw language tag as sent by the caller
        source: Program text
        stdin: Optional standard input (judge languages only)
    """

    language: str
    source: str
    stdin: Optional[str] = None

    def has_source(self) -> bool:
        return isinstance(self.source, str) and bool(self.source.strip())

    def to_job(self):
        """
        Build the job variant for this request.

        Returns:
            ScriptJob, TypedScriptJob, PythonJob or JudgeJob, or None when
            the language tag is unknown
        """
        language = Language.from_tag(self.language)
        if language is None:
            return None
        if language is Language.JAVASCRIPT:
            return ScriptJob(self.source)
        if language is Language.TYPESCRIPT:
            return TypedScriptJob(self.source)
        if language is Language.PYTHON:
            return PythonJob(self.source)
        return JudgeJob(language=language, source=self.source, stdin=self.stdin)


@dataclass(frozen=True)
class ExecutionResult:
    """
    Normalized outcome of any execution strategy.

    Exactly one of ``output`` / ``error`` is set, depending on ``ok``.
    """

    ok: bool
    output: Optional[str] = None
    error: Optional[str] = None
    logs: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.ok and (self.output is None or self.error is not None):
            raise ValueError("successful result must carry output and no error")
        if not self.ok and (self.error is None or self.output is not None):
            raise ValueError("failed result must carry error and no output")

    @classmethod
    def success(cls, output: str, logs: Optional[List[str]] = None) -> "ExecutionResult":
        return cls(ok=True, output=output, logs=list(logs or []))

    @classmethod
    def failure(cls, error: str, logs: Optional[List[str]] = None) -> "ExecutionResult":
        return cls(ok=False, error=error, logs=list(logs or []))

    def to_dict(self) -> Dict[str, Any]:
        """HTTP shape used by the script family: ``result`` carries the output."""
        if self.ok:
            return {"ok": True, "result": self.output, "logs": list(self.logs)}
        return {"ok": False, "error": self.error, "logs": list(self.logs)}


@dataclass(frozen=True)
class SandboxRun:
    """Value returned by the sandbox executor."""

    value: str
    logs: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PythonRun:
    """Value returned by the Python runtime."""

    value: str
    stdout: List[str] = field(default_factory=list)
    stderr: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class LanguageCatalogEntry:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LanguageCatalogEntry":
        return cls(id=int(data["id"]), name=str(data.get("name", "")))


@dataclass(frozen=True)
class JudgeSubmission:
    """Payload posted to the remote judge."""

    language_id: int
    source_base64: str
    stdin_base64: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "language_id": self.language_id,
            "source_code": self.source_base64,
        }
        if self.stdin_base64 is not None:
            payload["stdin"] = self.stdin_base64
        return payload


@dataclass(frozen=True)
class JudgeOutcome:
    """
    Decoded judge response.

    Attributes:
        status: Status object as reported by the service ({id, description})
        stdout: Decoded standard output
        stderr: Decoded standard error
        compile_output: Decoded compiler output
        time: CPU time reported by the service (seconds, as text)
        memory: Memory reported by the service (KB)
        language_id: Catalog id the alias resolved to
    """

    status: Any
    stdout: str
    stderr: str
    compile_output: str
    time: Optional[str]
    memory: Optional[int]
    language_id: int

    def combined_output(self) -> str:
        """Non-empty stdout, compile_output and stderr joined by newlines."""
        return "\n".join(s for s in (self.stdout, self.compile_output, self.stderr) if s)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": True,
            "status": self.status,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "compile_output": self.compile_output,
            "time": self.time,
            "memory": self.memory,
            "language_id": self.language_id,
        }
