"""Git operations for MCP GitHub Image Server"""

import logging
from pathlib import Path
from typing import Optional, Union

from git import Git

from ..error_handling import classify_error
from ..protocols import VersionControl
from .models import CommitAndUploadResult, RemoteIdentity, SuccessResponse
from .remote import build_image_url, parse_remote_identity

__all__ = ["COMMIT_MESSAGE", "GitCLI", "commit_and_upload_image"]

logger = logging.getLogger(__name__)

COMMIT_MESSAGE = "Add image for PR comment"


class GitCLI:
    """VersionControl implementation that shells out to the git executable.

    The working tree root is resolved from ``start_dir`` (the process working
    directory when omitted); every later step runs with the root as its
    working directory so paths are interpreted relative to the repository.
    """

    def __init__(self, start_dir: Optional[Union[str, Path]] = None):
        self.start_dir = Path(start_dir) if start_dir is not None else None
        self._root: Optional[Path] = None

    def _git(self) -> Git:
        if self._root is None:
            self.resolve_root()
        return Git(self._root)

    def resolve_root(self) -> Path:
        output = Git(self.start_dir).rev_parse("--show-toplevel")
        self._root = Path(output.strip())
        logger.debug(f"Resolved working tree root: {self._root}")
        return self._root

    def stage(self, path: str) -> None:
        self._git().add("--", path)
        logger.debug(f"Staged {path}")

    def commit(self, path: str, message: str) -> None:
        self._git().commit("-m", message, "--", path)
        logger.debug(f"Committed {path}")

    def head_commit(self) -> str:
        commit_hash = self._git().rev_parse("HEAD").strip()
        logger.debug(f"HEAD is {commit_hash}")
        return commit_hash

    def remote_identity(self) -> RemoteIdentity:
        url = self._git().config("--get", "remote.origin.url")
        logger.debug(f"Origin remote URL: {url.strip()}")
        return parse_remote_identity(url)


def commit_and_upload_image(vcs: VersionControl, path: str) -> CommitAndUploadResult:
    """Commit an image path and build its GitHub preview URL.

    Steps run in order and the first failure aborts the rest. A path that
    was staged before a later step failed stays staged.

    Args:
        vcs: Version-control capability to drive
        path: Repository-relative file or directory to commit

    Returns:
        SuccessResponse with the raw image URL and markdown preview, or an
        ErrorResponse describing the classified failure
    """
    staged = False
    try:
        vcs.resolve_root()
        vcs.stage(path)
        staged = True
        vcs.commit(path, COMMIT_MESSAGE)
        staged = False
        commit_hash = vcs.head_commit()
        identity = vcs.remote_identity()
    except Exception as e:
        if staged:
            logger.warning(f"Commit failed after staging; {path} is left staged")
        return classify_error(e, operation="commit_and_upload_image")

    image_url = build_image_url(identity, commit_hash, path)
    logger.info(f"Committed {path} as {commit_hash[:8]} for {identity.owner}/{identity.name}")
    return SuccessResponse.for_image_url(image_url)
