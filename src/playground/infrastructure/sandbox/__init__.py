"""
Script Sandbox Infrastructure

JavaScript evaluation in a node:vm context hosted by a Node.js subprocess.
"""

from .node_sandbox import NodeSandboxExecutor

__all__ = ["NodeSandboxExecutor"]
