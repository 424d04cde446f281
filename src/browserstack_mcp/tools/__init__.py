"""
BrowserStack product tools.

Tools are grouped by product category. Each product module exposes a
registration function that, given the shared BrowserStackClient, returns
that product's tool instances in order. Tools start disabled; the intent
toggler enables the ones relevant to the current user query.
"""

from .base import ToolBase, ToolMetadata, ToolInput, ToolOutput, ToggleableTool
from .executor import ToolExecutor

__all__ = [
    "ToolBase",
    "ToolMetadata",
    "ToolInput",
    "ToolOutput",
    "ToggleableTool",
    "ToolExecutor",
]
