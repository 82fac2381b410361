"""
Node.js process helpers shared by the script sandbox, the TypeScript
transpiler and the Pyodide host.
"""

from .process import NodeProcessResult, node_environment, run_node_script
from .result_parser import END_MARKER, READY_MARKER, START_MARKER, parse_envelope

__all__ = [
    "NodeProcessResult",
    "node_environment",
    "run_node_script",
    "parse_envelope",
    "START_MARKER",
    "END_MARKER",
    "READY_MARKER",
]
