"""
GitHub push routes.

The caller's token travels in the ``x-github-token`` header and is passed
through to GitHub unchanged.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse

from playground.application.services import PushService
from playground.interfaces.rest.dependencies import get_push_service
from playground.interfaces.rest.schemas.request import GitHubPushRequest, GitHubPushRunRequest
from playground.interfaces.rest.schemas.response import (
    ErrorResponse,
    GitHubPushResponse,
    GitHubPushRunResponse,
)

router = APIRouter(prefix="/github", tags=["github"])


def _missing_token() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"ok": False, "error": "Missing x-github-token header"},
    )


@router.post("/push", response_model=GitHubPushResponse, responses={401: {"model": ErrorResponse}})
async def push_file(
    request: GitHubPushRequest,
    x_github_token: Optional[str] = Header(None),
    service: PushService = Depends(get_push_service),
):
    """Create or overwrite one file and return the new content and commit sha."""
    if not x_github_token:
        return _missing_token()

    result = await service.push(
        token=x_github_token,
        owner=request.owner,
        repo=request.repo,
        path=request.path,
        message=request.message,
        content=request.content,
        branch=request.branch,
    )
    return GitHubPushResponse(**result)


@router.post("/push-run", response_model=GitHubPushRunResponse, responses={401: {"model": ErrorResponse}})
async def push_code_and_run_log(
    request: GitHubPushRunRequest,
    x_github_token: Optional[str] = Header(None),
    service: PushService = Depends(get_push_service),
):
    """
    Run the code, push it, then push ``runs/your-program-<timestamp>.txt``
    holding the code and its output.
    """
    if not x_github_token:
        return _missing_token()

    outcome = await service.run_and_push(
        token=x_github_token,
        owner=request.owner,
        repo=request.repo,
        language=request.language or "",
        code=request.code,
        message=request.message,
        path=request.path,
        branch=request.branch,
    )
    return GitHubPushRunResponse(
        execution=outcome.execution.to_dict(),
        source=GitHubPushResponse(**outcome.source),
        run_log=GitHubPushResponse(**outcome.run_log),
        run_log_path=outcome.run_log_path,
    )
