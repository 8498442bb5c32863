"""
Global pytest configuration and fixtures.

This file provides:
1. Shared temporary directory and environment fixtures
2. A canned VersionControl implementation for sequencing tests
3. Real git repository fixtures with an origin remote
"""

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Generator, List, Optional, Tuple

import pytest

from mcp_server_gh_image.git.models import RemoteIdentity

FAKE_ROOT = Path("/work/widgets")
FAKE_HASH = "0123456789abcdef0123456789abcdef01234567"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep user configuration out of the tests."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("MCP_GH_IMAGE_GIT", raising=False)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")


class FakeVersionControl:
    """VersionControl returning canned values and recording every call.

    ``fail_at`` names the step that raises ``error`` instead of succeeding.
    """

    def __init__(
        self,
        commit_hash: str = FAKE_HASH,
        identity: RemoteIdentity = RemoteIdentity(owner="acme", name="widgets"),
        fail_at: Optional[str] = None,
        error: Optional[Exception] = None,
    ):
        self.commit_hash = commit_hash
        self.identity = identity
        self.fail_at = fail_at
        self.error = error or RuntimeError("boom")
        self.calls: List[Tuple] = []

    def _step(self, name: str, *args):
        self.calls.append((name, *args))
        if self.fail_at == name:
            raise self.error

    def resolve_root(self) -> Path:
        self._step("resolve_root")
        return FAKE_ROOT

    def stage(self, path: str) -> None:
        self._step("stage", path)

    def commit(self, path: str, message: str) -> None:
        self._step("commit", path, message)

    def head_commit(self) -> str:
        self._step("head_commit")
        return self.commit_hash

    def remote_identity(self) -> RemoteIdentity:
        self._step("remote_identity")
        return self.identity

    @property
    def step_names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_vcs() -> FakeVersionControl:
    return FakeVersionControl()


@pytest.fixture
def fake_vcs_class():
    return FakeVersionControl


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "requires_git: Tests that drive the git executable")


def pytest_collection_modifyitems(config, items):
    """Mark tests that use real git repository fixtures."""
    git_fixtures = {"clean_git_repo", "image_repo", "not_a_repo", "git_repo_factory"}
    for item in items:
        if git_fixtures & set(item.fixturenames):
            item.add_marker(pytest.mark.requires_git)
        else:
            item.add_marker(pytest.mark.unit)


# Git repository fixtures

# Minimal PNG header; content only needs to be a distinct binary blob.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def _git(path: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=path, check=True, capture_output=True, text=True
    )
    return result.stdout.strip()


class GitRepositoryFactory:
    """Factory for creating test git repositories."""

    @staticmethod
    def create_clean_repo(path: Path, origin_url: str = "git@github.com:acme/widgets.git") -> Path:
        """Create a clean git repository with an initial commit and origin remote."""
        path.mkdir(parents=True, exist_ok=True)

        _git(path, "init")
        _git(path, "config", "user.name", "Test User")
        _git(path, "config", "user.email", "test@example.com")
        _git(path, "config", "commit.gpgsign", "false")
        if origin_url:
            _git(path, "remote", "add", "origin", origin_url)

        (path / "README.md").write_text("# Test Repository")
        _git(path, "add", "README.md")
        _git(path, "commit", "-m", "Initial commit")

        return path

    @staticmethod
    def add_images(path: Path, image_paths: List[str]) -> List[str]:
        """Write image files at the given repository-relative paths."""
        for index, image_path in enumerate(image_paths):
            target = path / image_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(PNG_BYTES + bytes([index]))
        return image_paths

    @staticmethod
    def head(path: Path) -> str:
        return _git(path, "rev-parse", "HEAD")

    @staticmethod
    def staged_files(path: Path) -> List[str]:
        output = _git(path, "diff", "--cached", "--name-only")
        return [line for line in output.splitlines() if line]

    @staticmethod
    def files_in_commit(path: Path, revision: str = "HEAD") -> List[str]:
        output = _git(path, "show", "--name-only", "--pretty=format:", revision)
        return [line for line in output.splitlines() if line]


@pytest.fixture
def git_repo_factory():
    """Provide access to GitRepositoryFactory."""
    return GitRepositoryFactory


@pytest.fixture
def clean_git_repo(temp_dir: Path) -> Path:
    """Create a clean git repository for testing."""
    return GitRepositoryFactory.create_clean_repo(temp_dir / "clean_repo")


@pytest.fixture
def image_repo(clean_git_repo: Path) -> Path:
    """Create a repository with two uncommitted screenshots."""
    GitRepositoryFactory.add_images(
        clean_git_repo, ["images/pr/1/before.png", "images/pr/1/after.png"]
    )
    return clean_git_repo


@pytest.fixture
def not_a_repo(temp_dir: Path, monkeypatch) -> Path:
    """A plain directory that git cannot walk up from into a repository."""
    path = temp_dir / "plain"
    path.mkdir()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(temp_dir))
    return path
