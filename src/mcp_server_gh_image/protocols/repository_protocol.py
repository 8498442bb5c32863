"""
Repository protocol definitions for version-control operations.

This module defines the narrow capability interface the commit-and-upload
sequence depends on, so the sequencing and error classification can be
exercised against canned implementations as well as the real git CLI.
"""

from abc import abstractmethod
from pathlib import Path
from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from ..git.models import RemoteIdentity
else:
    RemoteIdentity = "RemoteIdentity"


class VersionControl(Protocol):
    """Protocol for the version-control steps behind an image upload."""

    @abstractmethod
    def resolve_root(self) -> Path:
        """
        Resolve the top-level directory of the enclosing working tree.

        Returns:
            Absolute path of the working tree root

        Raises:
            Exception: When the start directory is not inside a repository;
                the message carries the tool's diagnostic output
        """
        ...

    @abstractmethod
    def stage(self, path: str) -> None:
        """
        Stage a repository-relative path.

        Args:
            path: File or directory relative to the working tree root
        """
        ...

    @abstractmethod
    def commit(self, path: str, message: str) -> None:
        """
        Commit only the given path with the given message.

        Other staged or modified files in the tree are left untouched.

        Args:
            path: File or directory relative to the working tree root
            message: Commit message
        """
        ...

    @abstractmethod
    def head_commit(self) -> str:
        """Return the full hash of the current HEAD commit."""
        ...

    @abstractmethod
    def remote_identity(self) -> RemoteIdentity:
        """
        Return the (owner, name) pair of the ``origin`` remote.

        Example:
            >>> identity = vcs.remote_identity()
            >>> print(f"{identity.owner}/{identity.name}")
        """
        ...
