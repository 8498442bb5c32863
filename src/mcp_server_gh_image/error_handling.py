"""Error classification for MCP GitHub Image Server."""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .git.models import ErrorResponse

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Closed set of failure categories surfaced to callers."""

    NOT_A_REPOSITORY = "not_a_repository"  # Environment error
    PERMISSION_DENIED = "permission_denied"
    GIT_COMMAND = "git_command"  # Any other git diagnostic
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CategoryInfo:
    """User-facing message and optional remediation hint for a category."""

    error: str
    hint: Optional[str] = None
    include_raw_message: bool = False


CATEGORY_INFO = {
    ErrorCategory.NOT_A_REPOSITORY: CategoryInfo(
        error="Not a valid git repository",
        hint=(
            "Run the server from inside a git working tree, or start it with "
            "--repository pointing at one."
        ),
    ),
    ErrorCategory.PERMISSION_DENIED: CategoryInfo(
        error="Permission denied while running git",
        hint=(
            "Check file permissions on the repository and its .git directory, "
            "and that git credentials are configured for this user."
        ),
    ),
    ErrorCategory.GIT_COMMAND: CategoryInfo(
        error="Git command failed",
        include_raw_message=True,
    ),
    ErrorCategory.UNKNOWN: CategoryInfo(error="An unknown error occurred"),
}

# Evaluated in order, first match wins.
CLASSIFICATION_RULES: List[Tuple[Callable[[str], bool], ErrorCategory]] = [
    (lambda message: "not a git repository" in message, ErrorCategory.NOT_A_REPOSITORY),
    (lambda message: "Permission denied" in message, ErrorCategory.PERMISSION_DENIED),
    (lambda message: "git" in message, ErrorCategory.GIT_COMMAND),
    (lambda message: True, ErrorCategory.UNKNOWN),
]


def categorize_message(message: str) -> ErrorCategory:
    """Return the first category whose predicate matches the message."""
    for predicate, category in CLASSIFICATION_RULES:
        if predicate(message):
            return category
    return ErrorCategory.UNKNOWN


def classify_error(error: BaseException, operation: str = "") -> "ErrorResponse":
    """
    Convert an exception into a structured error response.

    Args:
        error: The exception raised by one of the git steps
        operation: The operation during which the error occurred

    Returns:
        ErrorResponse with the classified message, category details and
        the formatted traceback when one is available
    """
    # Imported locally to avoid circular imports
    from .git.models import ErrorResponse

    message = str(error)
    category = categorize_message(message)
    info = CATEGORY_INFO[category]

    details = message if info.include_raw_message else info.hint
    stack = None
    if error.__traceback__ is not None:
        stack = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )

    logger.warning(
        f"{category.value} error in {operation or 'operation'}: {message}"
    )
    if stack:
        logger.debug(stack)

    return ErrorResponse(error=info.error, details=details, stack=stack)
