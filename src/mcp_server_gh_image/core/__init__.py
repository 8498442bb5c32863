"""MCP GitHub Image Server core components"""

from .tools import ImageTools, ToolRegistry, ToolRouter
from .handlers import CallToolHandler

__all__ = [
    "ImageTools",
    "ToolRegistry",
    "ToolRouter",
    "CallToolHandler",
]
