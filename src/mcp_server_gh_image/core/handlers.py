"""Tool call handlers for MCP GitHub Image Server"""

import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from mcp.types import CallToolResult

from ..git.models import CommitAndUploadImageInput, CommitAndUploadResult
from ..git.operations import GitCLI, commit_and_upload_image
from ..protocols import VersionControl
from .tools import ImageTools, ToolRegistry, ToolRouter

logger = logging.getLogger(__name__)

VersionControlFactory = Callable[[], VersionControl]


class CallToolHandler:
    """Centralized tool call handler using the router system

    A fresh VersionControl is built for every call so nothing about the
    repository is cached between requests.
    """

    def __init__(
        self,
        repository: Optional[Path] = None,
        vcs_factory: Optional[VersionControlFactory] = None,
    ):
        self.repository = repository
        self.vcs_factory = vcs_factory or (lambda: GitCLI(self.repository))
        self.registry = ToolRegistry()
        self.router = ToolRouter(self.registry)
        self._setup_handlers()

    def _setup_handlers(self):
        """Set up all tool handlers"""
        self.registry.initialize_default_tools()
        self.router.set_handlers(self._get_handlers())

    def _get_handlers(self) -> Dict[str, Callable[[Any], CommitAndUploadResult]]:
        return {
            ImageTools.COMMIT_AND_UPLOAD_IMAGE.value: self._commit_and_upload_image,
        }

    def _commit_and_upload_image(self, params: CommitAndUploadImageInput) -> CommitAndUploadResult:
        return commit_and_upload_image(
            self.vcs_factory(), params.commit_and_upload_image_path
        )

    async def call_tool(self, name: str, arguments: Optional[dict]) -> CallToolResult:
        """Main tool call entry point with request logging"""
        request_id = os.urandom(4).hex()
        logger.info(f"[{request_id}] Tool call: {name}", extra={"request_id": request_id, "tool": name})
        logger.debug(f"[{request_id}] Arguments: {arguments}")

        start_time = time.time()
        result = await self.router.route_tool_call(name, arguments)
        duration = time.time() - start_time

        status = "failed" if result.isError else "completed"
        logger.info(
            f"[{request_id}] Tool '{name}' {status} in {duration:.2f}s",
            extra={
                "request_id": request_id,
                "tool": name,
                "duration_ms": round(duration * 1000, 1),
            },
        )
        return result
