"""
Domain Errors

Error taxonomy shared by the execution pipeline, the item store and the
GitHub integration. Every error carries a human readable message that is
surfaced to callers verbatim.
"""

from typing import Any, Optional


class DomainError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InputError(DomainError):
    """Missing or empty source, unknown language tag, malformed request."""
    pass


class NotFoundError(DomainError):
    """Requested resource does not exist."""
    pass


class TranspileError(DomainError):
    """TypeScript source could not be lowered to JavaScript."""
    pass


class ExecutionTimeoutError(DomainError):
    """Outer wall-clock budget expired before the engine reported back."""

    def __init__(self, message: str = "Execution timed out", details: Optional[dict[str, Any]] = None):
        super().__init__(message, details)


class ScriptTimeoutError(DomainError):
    """The engine aborted evaluation because the inner budget was exceeded."""

    def __init__(self, message: str, logs: Optional[list[str]] = None):
        super().__init__(message)
        self.logs = list(logs or [])


class ScriptRuntimeError(DomainError):
    """User code threw while being evaluated."""

    def __init__(self, message: str, logs: Optional[list[str]] = None):
        super().__init__(message)
        self.logs = list(logs or [])


class RuntimeUnavailableError(DomainError):
    """An execution engine could not be started (missing binary or module)."""
    pass


class RemoteServiceError(DomainError):
    """A remote service answered with a failure or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[dict[str, Any]] = None):
        super().__init__(message, details)
        self.status_code = status_code


class UnsupportedLanguageAliasError(RemoteServiceError):
    """The judge catalog has no entry for the requested alias."""

    def __init__(self, alias: str):
        super().__init__(f"Unsupported language alias: {alias}", status_code=400)
        self.alias = alias


class GitHubAPIError(RemoteServiceError):
    """GitHub REST API returned a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"GitHub API error {status_code}: {body}", status_code=status_code)
        self.body = body
