"""Tests for fetching the backup repository."""
import io
import subprocess
import tarfile
import pytest
from unittest.mock import Mock
import requests

from claude_config.core.config import RepositoryConfig
from claude_config.core.repository import (
    GitHubArchiveFetcher,
    GitRepository,
    RepositoryError,
    fetch_repository,
)

API = "https://api.github.com"


def _create_tarball() -> bytes:
    """Create a GitHub-style tarball with a single root directory."""
    tar_buffer = io.BytesIO()
    with tarfile.open(fileobj=tar_buffer, mode="w:gz") as tar:
        root_dir = "kcenon-claude-config-abc123"

        dir_info = tarfile.TarInfo(name=root_dir + "/")
        dir_info.type = tarfile.DIRTYPE
        dir_info.mode = 0o755
        tar.addfile(dir_info)

        global_info = tarfile.TarInfo(name=f"{root_dir}/global/")
        global_info.type = tarfile.DIRTYPE
        global_info.mode = 0o755
        tar.addfile(global_info)

        content = b"# Global settings\n"
        file_info = tarfile.TarInfo(name=f"{root_dir}/global/CLAUDE.md")
        file_info.size = len(content)
        file_info.mode = 0o644
        tar.addfile(file_info, io.BytesIO(content))

    return tar_buffer.getvalue()


def _completed(returncode: int = 0, stderr: str = ""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)


class TestGitRepository:
    """Test GitRepository with a fake runner."""

    def test_clone_command(self, tmp_path):
        """Test the git clone invocation."""
        # Given: a runner that records calls
        runner = Mock(return_value=_completed())
        repo = GitRepository(tmp_path / "checkout", runner=runner)

        # When: we clone
        repo.clone("https://github.com/u/r.git", "main")

        # Then: git clone is called with branch and target
        args = runner.call_args[0][0]
        assert args == [
            "git", "clone", "--branch", "main",
            "https://github.com/u/r.git", str(tmp_path / "checkout"),
        ]
        assert runner.call_args[1]["capture_output"] is True

    def test_pull_runs_in_install_dir(self, tmp_path):
        runner = Mock(return_value=_completed())
        repo = GitRepository(tmp_path, runner=runner)

        repo.pull("develop")

        assert runner.call_args[0][0] == ["git", "pull", "origin", "develop"]
        assert runner.call_args[1]["cwd"] == str(tmp_path)

    def test_failure_raises(self, tmp_path):
        runner = Mock(return_value=_completed(128, "fatal: repository not found"))
        repo = GitRepository(tmp_path, runner=runner)

        with pytest.raises(RepositoryError, match="repository not found"):
            repo.clone("https://github.com/u/missing.git")


class TestGitHubArchiveFetcher:
    """Test GitHubArchiveFetcher."""

    def test_resolve_given_branch(self):
        assert GitHubArchiveFetcher().resolve_ref("u", "r", "develop") == "develop"

    def test_resolve_default_branch(self, requests_mock):
        """Test resolving the repository default branch."""
        requests_mock.get(f"{API}/repos/u/r", json={"default_branch": "trunk"})

        assert GitHubArchiveFetcher().resolve_ref("u", "r") == "trunk"

    def test_token_header(self, requests_mock):
        requests_mock.get(f"{API}/repos/u/r", json={"default_branch": "main"})

        GitHubArchiveFetcher(token="secret").resolve_ref("u", "r")

        assert requests_mock.last_request.headers["Authorization"] == "token secret"
        assert requests_mock.last_request.headers["User-Agent"] == "claude-config"

    @pytest.mark.parametrize("status,error,match", [
        (404, FileNotFoundError, "Repository not found"),
        (401, PermissionError, "authentication failed"),
        (500, ConnectionError, "GitHub API error: 500"),
    ])
    def test_api_errors(self, requests_mock, status, error, match):
        requests_mock.get(f"{API}/repos/u/r", status_code=status, json={})

        with pytest.raises(error, match=match):
            GitHubArchiveFetcher().resolve_ref("u", "r")

    def test_rate_limit(self, requests_mock):
        requests_mock.get(
            f"{API}/repos/u/r",
            status_code=403,
            json={"message": "API rate limit exceeded for 1.2.3.4"}
        )

        with pytest.raises(PermissionError, match="rate limit"):
            GitHubArchiveFetcher().resolve_ref("u", "r")

    def test_network_error(self, requests_mock):
        requests_mock.get(f"{API}/repos/u/r", exc=requests.exceptions.ConnectTimeout)

        with pytest.raises(ConnectionError, match="Failed to connect"):
            GitHubArchiveFetcher().resolve_ref("u", "r")

    def test_download_strips_root_directory(self, tmp_path, requests_mock):
        """Test that the tarball root directory is removed on extraction."""
        # Given: a mocked tarball download
        requests_mock.get(f"{API}/repos/u/r/tarball/main", content=_create_tarball())
        destination = tmp_path / "checkout"

        # When: we download
        result = GitHubArchiveFetcher().download("u", "r", "main", destination)

        # Then: repository contents land directly in the destination
        assert result == destination
        assert (destination / "global" / "CLAUDE.md").read_text() == "# Global settings\n"

    def test_download_invalid_tarball(self, tmp_path, requests_mock):
        requests_mock.get(f"{API}/repos/u/r/tarball/main", content=b"not a valid tarball")

        with pytest.raises(ValueError, match="Failed to extract"):
            GitHubArchiveFetcher().download("u", "r", "main", tmp_path / "checkout")

        assert not (tmp_path / "checkout").exists()

    def test_download_http_error(self, tmp_path, requests_mock):
        requests_mock.get(f"{API}/repos/u/r/tarball/main", status_code=404)

        with pytest.raises(ConnectionError, match="Failed to download"):
            GitHubArchiveFetcher().download("u", "r", "main", tmp_path / "checkout")


class TestFetchRepository:
    """Test fetch_repository()."""

    def test_clone_when_missing(self, tmp_path):
        """Test that a missing install dir is cloned with git."""
        # Given: config pointing to a new directory and a fake git
        config = RepositoryConfig(install_dir=tmp_path / "checkout")
        git = Mock(spec=GitRepository)

        # When: we fetch with git available
        action = fetch_repository(config, git=git, use_git=True)

        # Then: the repository is cloned
        assert action == "cloned"
        git.clone.assert_called_once_with(config.clone_url, "main")

    def test_pull_when_present(self, tmp_path):
        config = RepositoryConfig(install_dir=tmp_path)
        git = Mock(spec=GitRepository)

        action = fetch_repository(config, git=git, use_git=True)

        assert action == "pulled"
        git.pull.assert_called_once_with("main")

    def test_overwrite_removes_existing(self, tmp_path):
        install_dir = tmp_path / "checkout"
        install_dir.mkdir()
        (install_dir / "stale.txt").write_text("x")
        config = RepositoryConfig(install_dir=install_dir)
        git = Mock(spec=GitRepository)

        action = fetch_repository(config, overwrite=True, git=git, use_git=True)

        assert action == "cloned"
        assert not (install_dir / "stale.txt").exists()

    def test_archive_fallback_without_git(self, tmp_path):
        """Test that the tarball API is used when git is unavailable."""
        # Given: no git and a fake fetcher
        config = RepositoryConfig(install_dir=tmp_path / "checkout", github_branch="main")
        fetcher = Mock(spec=GitHubArchiveFetcher)
        fetcher.resolve_ref.return_value = "main"

        # When: we fetch
        action = fetch_repository(config, fetcher=fetcher, use_git=False)

        # Then: the archive is downloaded
        assert action == "downloaded"
        fetcher.download.assert_called_once_with(
            "kcenon", "claude-config", "main", tmp_path / "checkout"
        )

    def test_existing_dir_without_git(self, tmp_path):
        config = RepositoryConfig(install_dir=tmp_path)

        with pytest.raises(RuntimeError, match="git is not available"):
            fetch_repository(config, use_git=False)
