"""Tests for data link handling."""

import logging
import os
from pathlib import Path

import pytest

from webdeploy.core.release.errors import CreationError, RemovalError, RestoreError
from webdeploy.core.release.links import create_data_link, remove_data_link, swapped_data_link


@pytest.fixture
def link(tmp_path):
    """Provide a committed-looking data link inside an artifact directory."""
    pkg = tmp_path / "pkg"
    pkg.mkdir()
    (tmp_path / "data").mkdir()
    link = pkg / "system"
    link.symlink_to("../data")
    return link


def restorer(calls: list[Path]):
    def _restore(path: Path) -> None:
        calls.append(path)
        if path.is_symlink():
            path.unlink()
        path.symlink_to("../data")

    return _restore


class TestRemoveDataLink:
    """Tests for remove_data_link."""

    def test_removes_symlink(self, link) -> None:
        assert remove_data_link(link) is True
        assert not link.is_symlink()
        # Only the link goes, not what it points at
        assert (link.parent.parent / "data").is_dir()

    def test_missing_is_fine(self, tmp_path) -> None:
        assert remove_data_link(tmp_path / "system") is False

    def test_directory_cannot_be_removed(self, tmp_path) -> None:
        (tmp_path / "system").mkdir()

        with pytest.raises(RemovalError, match="Could not remove"):
            remove_data_link(tmp_path / "system")

        assert (tmp_path / "system").is_dir()


class TestCreateDataLink:
    """Tests for create_data_link."""

    def test_creates_relative_link(self, tmp_path) -> None:
        create_data_link(tmp_path / "system", Path("../elsewhere"))
        assert os.readlink(tmp_path / "system") == "../elsewhere"

    def test_existing_entry_fails(self, link) -> None:
        with pytest.raises(CreationError, match="Could not link"):
            create_data_link(link, Path("/tmp/other"))


class TestSwappedDataLink:
    """Tests for the swapped_data_link context manager."""

    def test_replaces_and_restores(self, link, tmp_path) -> None:
        calls: list[Path] = []

        with swapped_data_link(link, tmp_path / "import", restorer(calls)):
            assert os.readlink(link) == str(tmp_path / "import")

        assert calls == [link]
        assert os.readlink(link) == "../data"

    def test_drops_and_restores(self, link) -> None:
        calls: list[Path] = []

        with swapped_data_link(link, None, restorer(calls)):
            assert not link.is_symlink()

        assert calls == [link]
        assert os.readlink(link) == "../data"

    def test_restores_after_error(self, link) -> None:
        calls: list[Path] = []

        with pytest.raises(RuntimeError, match="upload broke"):
            with swapped_data_link(link, None, restorer(calls)):
                raise RuntimeError("upload broke")

        assert calls == [link]
        assert os.readlink(link) == "../data"

    def test_restores_after_interrupt(self, link) -> None:
        calls: list[Path] = []

        with pytest.raises(KeyboardInterrupt):
            with swapped_data_link(link, None, restorer(calls)):
                raise KeyboardInterrupt

        assert calls == [link]

    def test_no_restore_when_removal_fails(self, tmp_path) -> None:
        (tmp_path / "system").mkdir()
        calls: list[Path] = []

        with pytest.raises(RemovalError):
            with swapped_data_link(tmp_path / "system", None, restorer(calls)):
                pytest.fail("block should not run")

        assert calls == []

    def test_restore_failure_on_success_raises(self, link) -> None:
        def broken(path: Path) -> None:
            raise RestoreError("git checkout failed", returncode=1)

        with pytest.raises(RestoreError):
            with swapped_data_link(link, None, broken):
                pass

    def test_restore_failure_keeps_original_error(self, link, caplog) -> None:
        def broken(path: Path) -> None:
            raise RestoreError("git checkout failed", returncode=1)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(ValueError, match="original"):
                with swapped_data_link(link, None, broken):
                    raise ValueError("original")

        assert "git checkout failed" in caplog.text

    def test_dry_run_touches_nothing(self, link, tmp_path) -> None:
        calls: list[Path] = []

        with swapped_data_link(link, tmp_path / "import", restorer(calls), dry_run=True):
            assert os.readlink(link) == "../data"

        assert calls == [link]
