"""Tool registry and routing system for MCP GitHub Image Server"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type

from mcp.types import CallToolResult, TextContent, Tool, ToolAnnotations
from pydantic import BaseModel, ValidationError

from ..git.models import (
    CommitAndUploadImageInput,
    CommitAndUploadResult,
    ErrorResponse,
    StructuredResult,
    to_json_text,
    to_structured,
)

logger = logging.getLogger(__name__)


class ImageTools(str, Enum):
    """Enumeration of all available tools"""
    COMMIT_AND_UPLOAD_IMAGE = "commit-and-upload-image"


COMMIT_AND_UPLOAD_IMAGE_DESCRIPTION = """
- Normally, you cannot create comments with image previews on GitHub PRs or Issues via AI
- This is because the gh command and GitHub's official MCP tools do not support comments with image previews
- Even if AI forcefully creates a PR with image preview, when a human opens the GitHub PR URL via browser, the image won't be displayed
- This MCP tool commits images to a specific folder and generates image URLs on GitHub, enabling normal image preview viewing when humans browse PR comments
- When AI specifies a screenshot for PR, please place the screenshot image in 'commitAndUploadImagePath'
- AI should confirm beforehand that the gh command-line tool required for this MCP tool execution is available
"""


@dataclass
class ToolDefinition:
    """Complete tool definition with metadata"""
    name: str
    title: str
    description: str
    schema: Type[BaseModel]
    output_schema: Type[BaseModel]
    handler: Callable[[Any], CommitAndUploadResult]
    annotations: Optional[ToolAnnotations] = None


def _unset_handler(arguments: Any) -> CommitAndUploadResult:
    raise RuntimeError("Handler not set")


class ToolRegistry:
    """Central registry for all MCP GitHub Image Server tools"""

    def __init__(self):
        self.tools: Dict[str, ToolDefinition] = {}
        self._initialized = False

    def register(self, tool_def: ToolDefinition):
        """Register a tool in the registry"""
        self.tools[tool_def.name] = tool_def
        logger.debug(f"Registered tool: {tool_def.name}")

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """Get tool definition by name"""
        return self.tools.get(name)

    def list_tools(self) -> List[Tool]:
        """Get all tools as MCP Tool objects"""
        return [
            Tool(
                name=tool_def.name,
                title=tool_def.title,
                description=tool_def.description,
                inputSchema=tool_def.schema.model_json_schema(),
                outputSchema=tool_def.output_schema.model_json_schema(),
                annotations=tool_def.annotations,
            )
            for tool_def in self.tools.values()
        ]

    def initialize_default_tools(self):
        """Initialize registry with the default tools"""
        if self._initialized:
            return

        self.register(
            ToolDefinition(
                name=ImageTools.COMMIT_AND_UPLOAD_IMAGE.value,
                title="Commit and Upload Image for preparing Github comment with image",
                description=COMMIT_AND_UPLOAD_IMAGE_DESCRIPTION,
                schema=CommitAndUploadImageInput,
                output_schema=StructuredResult,
                handler=_unset_handler,
                annotations=ToolAnnotations(
                    readOnlyHint=False,
                    destructiveHint=True,
                    idempotentHint=False,
                    openWorldHint=True,
                ),
            )
        )

        self._initialized = True
        logger.info(f"Initialized tool registry with {len(self.tools)} tools")


def build_call_result(result: CommitAndUploadResult) -> CallToolResult:
    """Wrap a rich result and its structured projection for the transport"""
    structured = to_structured(result)
    return CallToolResult(
        content=[TextContent(type="text", text=to_json_text(result))],
        structuredContent=structured.model_dump(by_alias=True),
        isError=structured.is_error,
    )


class ToolRouter:
    """Router for dispatching tool calls to registered handlers"""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry
        self._handlers_initialized = False

    def set_handlers(self, handlers: Dict[str, Callable[[Any], CommitAndUploadResult]]):
        """Set up actual tool handlers"""
        for tool_name, handler in handlers.items():
            if tool_name in self.registry.tools:
                self.registry.tools[tool_name].handler = handler

        self._handlers_initialized = True
        logger.info("Tool handlers initialized")

    async def route_tool_call(self, name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        """Validate arguments and route a tool call to its handler"""

        if not self._handlers_initialized:
            return build_call_result(ErrorResponse(error="Tool handlers not initialized"))

        tool_def = self.registry.get_tool(name)
        if not tool_def:
            return build_call_result(ErrorResponse(error=f"Unknown tool: {name}"))

        try:
            params = tool_def.schema.model_validate(arguments or {})
        except ValidationError as e:
            logger.warning(f"Invalid arguments for {name}: {e}")
            return build_call_result(
                ErrorResponse(error="Invalid arguments", details=str(e))
            )

        return build_call_result(tool_def.handler(params))
