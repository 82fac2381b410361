"""
Domain Ports

Port interfaces defining contracts between layers.
All dependencies on external systems are abstracted through ports.
"""

from .sandbox_port import ISandboxPort
from .transpiler_port import ITranspilerPort
from .python_runtime_port import IPythonRuntimePort
from .judge_port import IJudgePort
from .item_repository_port import IItemRepository
from .github_port import IGitHubPort

__all__ = [
    "ISandboxPort",
    "ITranspilerPort",
    "IPythonRuntimePort",
    "IJudgePort",
    "IItemRepository",
    "IGitHubPort",
]
