"""
Python Runtime Infrastructure
"""

from .pyodide_host import PyodideRuntime

__all__ = ["PyodideRuntime"]
