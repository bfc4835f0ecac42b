"""Fetch a backup tree from GitHub, via git or the tarball API."""
from pathlib import Path
from typing import Any, Callable, List, Optional
import logging
import shutil
import subprocess
import tarfile
import tempfile

import requests

from claude_config.core.config import RepositoryConfig

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """A git operation on the backup repository failed."""


class GitRepository:
    """Thin wrapper around the git command line for one checkout."""

    def __init__(
        self,
        install_dir: Path,
        runner: Callable[..., Any] = subprocess.run
    ):
        """
        Initialize git wrapper.

        Args:
            install_dir: Checkout directory
            runner: subprocess.run compatible callable
        """
        self.install_dir = install_dir
        self.runner = runner

    @staticmethod
    def is_available() -> bool:
        """Whether a git executable is on PATH."""
        return shutil.which("git") is not None

    def _run(self, args: List[str], cwd: Optional[Path] = None) -> str:
        logger.debug("Running %s", " ".join(args))
        result = self.runner(
            args,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            raise RepositoryError(
                f"{' '.join(args[:2])} failed: {(result.stderr or '').strip()}"
            )
        return result.stdout or ""

    def clone(self, url: str, branch: Optional[str] = None) -> None:
        """
        Clone url into the install directory.

        Raises:
            RepositoryError: If git exits non-zero
        """
        args = ["git", "clone"]
        if branch:
            args += ["--branch", branch]
        args += [url, str(self.install_dir)]
        self._run(args)

    def pull(self, branch: str) -> None:
        """
        Pull the branch from origin inside the install directory.

        Raises:
            RepositoryError: If git exits non-zero
        """
        self._run(["git", "pull", "origin", branch], cwd=self.install_dir)


class GitHubArchiveFetcher:
    """Download a repository snapshot through the GitHub tarball API."""

    API_BASE = "https://api.github.com"

    def __init__(
        self,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize archive fetcher.

        Args:
            token: GitHub API token for private repositories
            session: requests session (default: module-level requests)
        """
        self.token = token
        self.http = session or requests

    def _get_headers(self) -> dict:
        """Get headers for GitHub API requests."""
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "claude-config"
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def _api_request(self, endpoint: str) -> dict:
        """
        Make a GitHub API request.

        Args:
            endpoint: API endpoint (e.g., "/repos/owner/repo")

        Returns:
            JSON response as dict

        Raises:
            FileNotFoundError: If resource not found (404)
            PermissionError: If authentication fails or rate limited
            ConnectionError: If network error occurs
        """
        url = f"{self.API_BASE}{endpoint}"
        try:
            response = self.http.get(url, headers=self._get_headers(), timeout=30)
        except requests.exceptions.RequestException as e:
            raise ConnectionError(f"Failed to connect to GitHub API: {e}")

        if response.status_code == 404:
            raise FileNotFoundError(f"Repository not found: {endpoint}")
        elif response.status_code == 401:
            raise PermissionError("GitHub authentication failed: invalid token")
        elif response.status_code == 403:
            message = response.json().get("message", "")
            if "rate limit" in message.lower():
                raise PermissionError(f"GitHub API rate limit exceeded: {message}")
            raise PermissionError(f"GitHub access denied: {message}")
        elif response.status_code != 200:
            raise ConnectionError(f"GitHub API error: {response.status_code}")

        return response.json()

    def resolve_ref(self, user: str, repo: str, branch: Optional[str] = None) -> str:
        """Branch to download: the given one, or the repository default."""
        if branch:
            return branch
        data = self._api_request(f"/repos/{user}/{repo}")
        return data["default_branch"]

    def download(self, user: str, repo: str, ref: str, destination: Path) -> Path:
        """
        Download and extract a tarball into destination.

        GitHub tarballs have a single root directory like "repo-sha/";
        its contents are moved into destination.

        Args:
            user: Repository owner
            repo: Repository name
            ref: Branch, tag or commit
            destination: Directory to create; must not exist

        Returns:
            destination

        Raises:
            ConnectionError: If download fails
            ValueError: If tarball is invalid
        """
        url = f"{self.API_BASE}/repos/{user}/{repo}/tarball/{ref}"
        try:
            response = self.http.get(
                url,
                headers=self._get_headers(),
                stream=True,
                timeout=60
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ConnectionError(f"Failed to download from GitHub: {e}")

        with tempfile.TemporaryDirectory() as tmp:
            extract_dir = Path(tmp)
            try:
                with tarfile.open(fileobj=response.raw, mode="r|gz") as tar:
                    tar.extractall(path=extract_dir, filter="data")
            except tarfile.TarError as e:
                raise ValueError(f"Failed to extract tarball: {e}")

            contents = list(extract_dir.iterdir())
            if len(contents) == 1 and contents[0].is_dir():
                root_dir = contents[0]
            else:
                root_dir = extract_dir

            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(root_dir, destination)

        logger.info("Extracted %s/%s@%s into %s", user, repo, ref, destination)
        return destination


def fetch_repository(
    config: RepositoryConfig,
    overwrite: bool = False,
    git: Optional[GitRepository] = None,
    fetcher: Optional[GitHubArchiveFetcher] = None,
    use_git: Optional[bool] = None
) -> str:
    """
    Make config.install_dir hold an up-to-date copy of the repository.

    Args:
        config: Repository settings
        overwrite: Replace an existing install directory instead of pulling
        git: Git wrapper (default: GitRepository(config.install_dir))
        fetcher: Tarball fetcher used when git is unavailable
        use_git: Force git on or off (default: auto-detect)

    Returns:
        "pulled", "cloned" or "downloaded"

    Raises:
        RepositoryError: If a git command fails
        RuntimeError: If the directory exists, git is unavailable and
            overwrite is False
    """
    git = git or GitRepository(config.install_dir)
    if use_git is None:
        use_git = git.is_available()

    install_dir = config.install_dir

    if install_dir.exists():
        if not overwrite:
            if not use_git:
                raise RuntimeError(
                    f"{install_dir} exists and git is not available to update it"
                )
            git.pull(config.github_branch)
            return "pulled"
        shutil.rmtree(install_dir)

    if use_git:
        git.clone(config.clone_url, config.github_branch)
        return "cloned"

    fetcher = fetcher or GitHubArchiveFetcher()
    ref = fetcher.resolve_ref(config.github_user, config.github_repo, config.github_branch)
    fetcher.download(config.github_user, config.github_repo, ref, install_dir)
    return "downloaded"
