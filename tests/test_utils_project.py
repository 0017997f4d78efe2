"""Tests for project root discovery."""

from webdeploy.utils.project import find_project_root


class TestFindProjectRoot:
    """Tests for find_project_root."""

    def test_finds_git_root(self, project_dir) -> None:
        assert find_project_root(project_dir / "game" / "pkg") == project_dir.resolve()

    def test_config_file_marks_root(self, tmp_path) -> None:
        (tmp_path / "web").mkdir()
        (tmp_path / "web" / ".webdeploy.json").write_text("{}")
        (tmp_path / "web" / "src").mkdir()

        assert find_project_root(tmp_path / "web" / "src") == (tmp_path / "web").resolve()

    def test_defaults_to_cwd(self, project_dir, monkeypatch) -> None:
        monkeypatch.chdir(project_dir / "game")
        assert find_project_root() == project_dir.resolve()
