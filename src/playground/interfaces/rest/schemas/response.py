"""
REST API response schemas.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from playground.domain.entities import Item


class PingResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime: float


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str


class ItemResponse(BaseModel):
    """Item as stored, camelCase timestamps."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: Optional[str] = None
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    @classmethod
    def from_entity(cls, item: Item) -> "ItemResponse":
        return cls(
            id=item.id,
            title=item.title,
            description=item.description,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class ItemEnvelope(BaseModel):
    item: ItemResponse


class ItemListResponse(BaseModel):
    items: List[ItemResponse]


class PushedContent(BaseModel):
    path: Optional[str] = None
    sha: Optional[str] = None


class GitHubPushResponse(BaseModel):
    ok: bool = True
    content: PushedContent
    commit: Optional[str] = None
    base_commit: Optional[str] = None


class GitHubPushRunResponse(BaseModel):
    ok: bool = True
    execution: Dict[str, Any] = Field(..., description="{ok, result|error, logs} of the run")
    source: GitHubPushResponse
    run_log: GitHubPushResponse
    run_log_path: str
