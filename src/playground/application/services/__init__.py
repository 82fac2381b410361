"""
Application Services

Service classes for handling use cases.
"""

from .execution_router import ExecutionRouter
from .item_service import ItemService
from .push_service import PushService, run_log_path

__all__ = [
    "ExecutionRouter",
    "ItemService",
    "PushService",
    "run_log_path",
]
