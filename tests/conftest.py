"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import List
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from playground.application.services import ExecutionRouter, ItemService, PushService
from playground.domain.entities import Item
from playground.domain.ports import IItemRepository
from playground.infrastructure.config.settings import Settings
from playground.interfaces.rest import dependencies
from playground.interfaces.rest.main import create_app


class InMemoryItemRepository(IItemRepository):
    """Item repository backed by a list."""

    def __init__(self, items: List[Item] = None):
        self.items = list(items or [])

    async def load(self) -> List[Item]:
        return list(self.items)

    async def save(self, items: List[Item]) -> None:
        self.items = list(items)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isolated from the developer's environment."""
    return Settings(
        _env_file=None,
        environment="test",
        data_dir=tmp_path / "data",
        ping_message="pong",
        log_level="WARNING",
    )


@pytest.fixture
def mock_sandbox():
    return AsyncMock()


@pytest.fixture
def mock_transpiler():
    return AsyncMock()


@pytest.fixture
def mock_python_runtime():
    return AsyncMock()


@pytest.fixture
def mock_judge():
    return AsyncMock()


@pytest.fixture
def mock_github():
    return AsyncMock()


@pytest.fixture
def execution_router(mock_sandbox, mock_transpiler, mock_python_runtime, mock_judge) -> ExecutionRouter:
    return ExecutionRouter(
        sandbox=mock_sandbox,
        transpiler=mock_transpiler,
        python_runtime=mock_python_runtime,
        judge=mock_judge,
    )


@pytest.fixture
def item_repository() -> InMemoryItemRepository:
    return InMemoryItemRepository()


@pytest.fixture
def app(settings, execution_router, mock_judge, mock_github, item_repository):
    """Application with every service replaced through dependency overrides."""
    application = create_app(settings)
    push_service = PushService(github=mock_github, router=execution_router)
    item_service = ItemService(item_repository)

    application.dependency_overrides[dependencies.get_execution_router] = lambda: execution_router
    application.dependency_overrides[dependencies.get_judge] = lambda: mock_judge
    application.dependency_overrides[dependencies.get_item_service] = lambda: item_service
    application.dependency_overrides[dependencies.get_push_service] = lambda: push_service
    return application


@pytest.fixture
async def client(app) -> AsyncClient:
    """HTTP client bound to the app without running its lifespan."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
