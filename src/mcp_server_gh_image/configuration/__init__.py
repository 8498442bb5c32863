"""Configuration module for MCP GitHub Image Server.

Configuration is assembled from CLI options and environment variables into a
validated Pydantic model. ``.env`` files are loaded first so that their values
are visible to the environment lookup, but they never override variables that
are already set in the process environment.

Environment variables:
    ```bash
    export LOG_LEVEL=DEBUG            # Root log level
    export MCP_GH_IMAGE_GIT=/usr/bin/git   # git executable to drive
    ```

Usage examples:
    >>> from mcp_server_gh_image.configuration import load_config
    >>> config = load_config(repository=Path("/path/to/repo"))
    >>> config.log_level
    'INFO'
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ServerConfig(BaseModel):
    """Runtime configuration for the server process."""

    repository: Optional[Path] = Field(
        default=None,
        description="Directory the working tree root is resolved from",
    )
    log_level: str = Field(default="INFO")
    git_executable: str = Field(default="git", min_length=1)
    enable_file_logging: bool = False
    test_mode: bool = False

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level == "WARN":
            level = "WARNING"
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


def load_environment_variables(repository_path: Path | None = None) -> List[str]:
    """Load environment variables from .env files.

    Order of precedence:
    1. System environment variables (never overridden)
    2. Project-specific .env file (current working directory)
    3. Repository-specific .env file (if repository path provided)

    Args:
        repository_path: Optional path to the repository being used

    Returns:
        Paths of the .env files that were loaded
    """
    loaded_files: List[str] = []
    candidates = [Path.cwd() / ".env"]
    if repository_path:
        candidates.append(repository_path / ".env")

    for env_file in candidates:
        if not env_file.exists() or str(env_file) in loaded_files:
            continue
        try:
            load_dotenv(env_file, override=False)
        except OSError as e:
            logger.warning(f"Failed to load .env file {env_file}: {e}")
            continue
        loaded_files.append(str(env_file))
        logger.info(f"Loaded environment variables from {env_file}")

    return loaded_files


def load_config(
    repository: Path | None = None,
    verbose: int = 0,
    enable_file_logging: bool = False,
    test_mode: bool = False,
) -> ServerConfig:
    """Build the server configuration from CLI options and the environment.

    A ``-v`` count on the command line takes precedence over ``LOG_LEVEL``.
    """
    load_environment_variables(repository)

    log_level = os.environ.get("LOG_LEVEL", "INFO")
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"

    return ServerConfig(
        repository=repository,
        log_level=log_level,
        git_executable=os.environ.get("MCP_GH_IMAGE_GIT", "git"),
        enable_file_logging=enable_file_logging,
        test_mode=test_mode,
    )


__all__ = [
    "ServerConfig",
    "load_config",
    "load_environment_variables",
]
