"""Pydantic models for the commit-and-upload-image tool"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


SUCCESS_MESSAGE = "Image committed and uploaded successfully."

__all__ = [
    "CommitAndUploadImageInput",
    "CommitAndUploadResult",
    "ErrorResponse",
    "RemoteIdentity",
    "StructuredResult",
    "SuccessResponse",
    "to_json_text",
    "to_structured",
]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CommitAndUploadImageInput(_CamelModel):
    commit_and_upload_image_path: str = Field(
        min_length=1,
        description=(
            "Path to the directory containing images to commit and upload. "
            "(This should be a path relative to the root of the repository, "
            "e.g., 'images/pr/[PR_NUMBER]')"
        ),
    )


class RemoteIdentity(BaseModel):
    """Owner and repository name parsed from the origin remote URL"""

    owner: str
    name: str


class SuccessResponse(_CamelModel):
    is_success: Literal[True] = True
    message: str = SUCCESS_MESSAGE
    image_url: str
    markdown_preview: str

    @classmethod
    def for_image_url(cls, image_url: str) -> "SuccessResponse":
        return cls(image_url=image_url, markdown_preview=f"![img]({image_url})")


class ErrorResponse(_CamelModel):
    is_success: Literal[False] = False
    error: str
    details: Optional[str] = None
    stack: Optional[str] = None


CommitAndUploadResult = Union[SuccessResponse, ErrorResponse]


class StructuredResult(_CamelModel):
    """Narrow result shape declared as the tool's output schema"""

    is_error: bool
    message: str = Field(description="Message about the operation result")
    preview_url: Optional[str] = Field(
        description="URL of the uploaded image for preview on GitHub PR"
    )


def to_structured(result: CommitAndUploadResult) -> StructuredResult:
    """Project a rich result onto the declared output schema.

    ``preview_url`` is set exactly when the result is a success.
    """
    if isinstance(result, SuccessResponse):
        return StructuredResult(
            is_error=False,
            message=result.message,
            preview_url=result.markdown_preview,
        )
    return StructuredResult(
        is_error=True,
        message=f"Error executing command: {result.error}",
        preview_url=None,
    )


def to_json_text(result: CommitAndUploadResult) -> str:
    """Serialize the rich result as the textual body of the tool response"""
    return result.model_dump_json(by_alias=True, exclude_none=True)
