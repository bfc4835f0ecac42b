"""GitHub connectivity preflight for gh/GitHub shell commands."""
from typing import Callable, Optional
import logging
import re
import shutil
import subprocess

import requests

from claude_config.hooks.guards import HookResponse

logger = logging.getLogger(__name__)

GITHUB_COMMAND = re.compile(r'(gh |github\.com|api\.github\.com)')
ZEN_URL = "https://api.github.com/zen"

UNREACHABLE_MESSAGE = (
    "GitHub API may be unreachable (sandbox/TLS issue detected). "
    "Suggestions: Use local git operations if possible, check network/certificate "
    "settings, consider /sandbox to manage restrictions."
)
UNAUTHENTICATED_MESSAGE = (
    "GitHub CLI not authenticated. Run 'gh auth login' or 'gh auth status' to check."
)


def gh_authenticated() -> bool:
    """Whether `gh auth status` succeeds."""
    if shutil.which("gh") is None:
        return False
    result = subprocess.run(["gh", "auth", "status"], capture_output=True)
    return result.returncode == 0


def github_reachable(session: Optional[requests.Session] = None, timeout: float = 3) -> bool:
    """Whether the GitHub API answers at all within the timeout."""
    http = session or requests
    try:
        http.get(ZEN_URL, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.debug("GitHub API unreachable: %s", e)
        return False
    return True


def github_preflight(
    command: str,
    session: Optional[requests.Session] = None,
    auth_check: Callable[[], bool] = gh_authenticated
) -> HookResponse:
    """
    Check GitHub connectivity before a GitHub-related command runs.

    Always allows; problems are reported as a message.

    Args:
        command: Shell command about to run
        session: requests session for the connectivity check
        auth_check: Callable reporting gh CLI authentication

    Returns:
        HookResponse with decision "allow"
    """
    if not GITHUB_COMMAND.search(command):
        return HookResponse()

    if not github_reachable(session):
        return HookResponse(message=UNREACHABLE_MESSAGE)

    if command.startswith("gh ") and not auth_check():
        return HookResponse(message=UNAUTHENTICATED_MESSAGE)

    return HookResponse()
