"""
Compile routes.

``POST /compile`` runs code through the execution router for every
language; ``POST /compile/judge0`` exposes the raw judge outcome for the
compiled languages.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from playground.application.services import ExecutionRouter
from playground.domain.errors import InputError
from playground.domain.ports import IJudgePort
from playground.domain.value_objects import ExecutionRequest
from playground.interfaces.rest.dependencies import get_execution_router, get_judge
from playground.interfaces.rest.schemas.request import CompileRequest, JudgeCompileRequest
from playground.interfaces.rest.schemas.response import ErrorResponse

router = APIRouter(prefix="/compile", tags=["compile"])


@router.post("", responses={400: {"model": ErrorResponse}})
async def compile_and_run(
    request: CompileRequest,
    execution_router: ExecutionRouter = Depends(get_execution_router),
) -> JSONResponse:
    """
    Run code and return ``{ok, result, logs}`` or ``{ok: false, error, logs}``.

    Failed runs are answered with 400.
    """
    result = await execution_router.execute(
        ExecutionRequest(language=request.language or "", source=request.code or "")
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if result.ok else status.HTTP_400_BAD_REQUEST,
        content=result.to_dict(),
    )


@router.post("/judge0", responses={400: {"model": ErrorResponse}})
async def compile_with_judge(
    request: JudgeCompileRequest,
    judge: IJudgePort = Depends(get_judge),
) -> dict:
    """
    Submit to the remote judge and return the decoded outcome.

    Upstream failures keep the upstream status and body.
    """
    if not isinstance(request.code, str) or not request.code.strip():
        raise InputError("Code is required")
    if not isinstance(request.language, str):
        raise InputError("language is required")

    outcome = await judge.submit(request.language, request.code, request.stdin)
    return outcome.to_dict()
