"""Git operations for MCP GitHub Image Server"""

from .models import *
from .operations import *
from .remote import *

__all__ = [
    # Operations
    "GitCLI",
    "COMMIT_MESSAGE",
    "commit_and_upload_image",
    # Remote parsing
    "RemoteUrlError",
    "parse_remote_identity",
    "build_image_url",
    # Models
    "CommitAndUploadImageInput",
    "CommitAndUploadResult",
    "ErrorResponse",
    "RemoteIdentity",
    "StructuredResult",
    "SuccessResponse",
    "to_json_text",
    "to_structured",
]
