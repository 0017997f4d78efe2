"""
Pytest configuration and shared fixtures.

Provides a temporary project with a committed ``system`` data link, a
recording fake command runner that imitates wasm-pack, aws and git, and
helpers for building publishers around it.
"""

import io
import os
from pathlib import Path

import pytest
from rich.console import Console

from webdeploy.core.config import clear_cache
from webdeploy.core.config.models import DeployConfig
from webdeploy.core.release.collaborators import BuildTool, ObjectStoreSync, VersionControl
from webdeploy.core.release.service import ReleasePublisher
from webdeploy.utils.process import CommandRunner

# Target of the system link as committed in the repository
COMMITTED_LINK = "../../data/system"


class FakeRunner(CommandRunner):
    """
    Command runner that records calls and imitates the release tools.

    - ``git checkout -- <name>`` puts the committed symlink back
    - ``aws s3 sync`` records what the data link looked like at upload time
    - anything else just returns its configured exit code
    """

    def __init__(self, returncodes: dict[str, int] | None = None) -> None:
        super().__init__(console=Console(file=io.StringIO()))
        self.returncodes = returncodes or {}
        self.calls: list[tuple[list[str], Path | None]] = []
        self.link_at_upload: str | None = None

    def tools(self) -> list[str]:
        return [args[0] for args, _ in self.calls]

    def run(self, args: list[str], *, cwd: Path | None = None) -> int:
        self.calls.append((list(args), cwd))
        tool = args[0]
        returncode = self.returncodes.get(tool, 0)

        if tool == "aws" and cwd is not None:
            link = cwd / "system"
            self.link_at_upload = os.readlink(link) if link.is_symlink() else None

        if tool == "git" and returncode == 0 and cwd is not None:
            link = cwd / args[-1]
            if link.is_symlink():
                link.unlink()
            link.symlink_to(COMMITTED_LINK)

        return returncode


def link_state(project: Path) -> str | None:
    """Current target of the project's data link, or None if it is missing."""
    link = project / "game" / "pkg" / "system"
    return os.readlink(link) if link.is_symlink() else None


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config, .env files and WEBDEPLOY_* variables out of tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in list(os.environ):
        if name.startswith("WEBDEPLOY_"):
            monkeypatch.delenv(name)
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def project_dir(tmp_path):
    """
    Provide a temporary project laid out like the game repository.

    Creates:
    - .git/ directory
    - game/pkg/index.html (previous build output)
    - game/pkg/system -> ../../data/system (committed data link)
    - data/system/ and data/tmp_import/ data directories
    """
    project = tmp_path / "project"
    (project / ".git").mkdir(parents=True)

    pkg = project / "game" / "pkg"
    pkg.mkdir(parents=True)
    (pkg / "index.html").write_text("<html></html>")

    (project / "data" / "system").mkdir(parents=True)
    (project / "data" / "tmp_import").mkdir()
    (pkg / "system").symlink_to(COMMITTED_LINK)

    return project


@pytest.fixture
def deploy_config():
    """Provide the default deploy configuration."""
    return DeployConfig()


@pytest.fixture
def runner():
    """Provide a fake runner where every tool succeeds."""
    return FakeRunner()


@pytest.fixture
def make_publisher(project_dir, deploy_config):
    """Build a ReleasePublisher whose collaborators share the given runner."""

    def _make(runner: CommandRunner, *, dry_run: bool = False) -> ReleasePublisher:
        return ReleasePublisher(
            BuildTool(deploy_config.build, project_dir, runner),
            ObjectStoreSync(deploy_config.upload, runner),
            VersionControl(deploy_config.vcs, runner),
            dry_run=dry_run,
        )

    return _make


@pytest.fixture
def make_runner():
    """Build a fake runner with per-tool exit codes, e.g. ``{"aws": 1}``."""

    def _make(returncodes: dict[str, int] | None = None) -> FakeRunner:
        return FakeRunner(returncodes)

    return _make


@pytest.fixture
def current_link(project_dir):
    """Return a callable reading the project's data link target."""
    return lambda: link_state(project_dir)
