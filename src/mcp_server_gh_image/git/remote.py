"""Remote URL parsing for GitHub-hosted repositories"""

import re

from .models import RemoteIdentity

# Applied independently to the same URL, one capture group each.
OWNER_PATTERN = re.compile(r"github\.com[:/]([^/]+)/[^/]+?(?:\.git)?/?$")
NAME_PATTERN = re.compile(r"github\.com[:/][^/]+/([^/]+?)(?:\.git)?/?$")

HOSTING_BASE_URL = "https://github.com"

__all__ = ["RemoteUrlError", "build_image_url", "parse_remote_identity"]


class RemoteUrlError(ValueError):
    """Raised when the origin URL does not name a GitHub repository"""


def _extract(pattern: re.Pattern, url: str) -> str:
    match = pattern.search(url.strip())
    if match is None:
        raise RemoteUrlError(
            f"Unrecognized git remote URL for origin: {url.strip()!r}"
        )
    return match.group(1)


def parse_remote_identity(url: str) -> RemoteIdentity:
    """Parse owner and repository name from an origin remote URL.

    Accepts SSH (``git@github.com:owner/repo.git``, ``ssh://git@github.com/owner/repo``)
    and HTTPS (``https://github.com/owner/repo.git``) forms.
    """
    return RemoteIdentity(
        owner=_extract(OWNER_PATTERN, url),
        name=_extract(NAME_PATTERN, url),
    )


def build_image_url(identity: RemoteIdentity, commit_hash: str, path: str) -> str:
    return (
        f"{HOSTING_BASE_URL}/{identity.owner}/{identity.name}"
        f"/blob/{commit_hash}/{path}?raw=true"
    )
