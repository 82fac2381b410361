"""
REST API request schemas.

Fields the handlers validate themselves are optional here so that a
missing value produces the same ``{ok: false, error}`` body as an empty
one.
"""
from typing import Optional

from pydantic import BaseModel, Field


class CompileRequest(BaseModel):
    """Run code through the execution router."""

    language: Optional[str] = Field(None, description="javascript, typescript, python, c, cpp or java", examples=["javascript"])
    code: Optional[str] = Field(None, description="Program source", examples=["console.log('hi'); 1 + 1"])


class JudgeCompileRequest(BaseModel):
    """Submit code directly to the remote judge."""

    language: Optional[str] = Field(None, description="c, cpp / c++ or java", examples=["cpp"])
    code: Optional[str] = Field(None, description="Program source")
    stdin: Optional[str] = Field(None, description="Standard input")


class ItemCreateRequest(BaseModel):
    title: Optional[str] = Field(None, description="Item title, required")
    description: Optional[str] = None


class ItemUpdateRequest(BaseModel):
    """Partial update; empty or missing fields keep their current value."""

    title: Optional[str] = None
    description: Optional[str] = None


class GitHubPushRequest(BaseModel):
    """Create or overwrite one file on a branch."""

    owner: Optional[str] = None
    repo: Optional[str] = None
    branch: str = Field("main", description="Target branch")
    path: Optional[str] = Field(None, description="File path inside the repository")
    message: Optional[str] = Field(None, description="Commit message")
    content: Optional[str] = Field(None, description="Raw text content")


class GitHubPushRunRequest(BaseModel):
    """Run code, push it, then push a log of the run."""

    owner: Optional[str] = None
    repo: Optional[str] = None
    branch: str = "main"
    path: Optional[str] = Field(None, description="Source path, defaults per language")
    message: Optional[str] = None
    language: Optional[str] = None
    code: Optional[str] = None
