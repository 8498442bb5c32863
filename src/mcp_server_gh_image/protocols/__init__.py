"""Protocol definitions for MCP GitHub Image Server"""

from .repository_protocol import VersionControl

__all__ = [
    "VersionControl",
]
