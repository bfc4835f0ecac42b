"""Git pre-commit hook that validates staged SKILL.md files."""
from pathlib import Path
from typing import List
import stat

PRE_COMMIT_TEMPLATE = """#!/bin/sh
# Installed by 'claude-config install-git-hooks'.
# Validates staged SKILL.md files before each commit.

STAGED=$(git diff --cached --name-only --diff-filter=ACM | grep 'SKILL\\.md$')

if [ -z "$STAGED" ]; then
    exit 0
fi

if ! command -v claude-config >/dev/null 2>&1; then
    echo "claude-config not found on PATH; skipping SKILL.md validation" >&2
    exit 0
fi

# shellcheck disable=SC2086
claude-config validate-skills $STAGED || {
    echo "SKILL.md validation failed; commit aborted." >&2
    exit 1
}
"""


def install_pre_commit(repo_root: Path, force: bool = False) -> Path:
    """
    Write the pre-commit hook into a repository.

    Args:
        repo_root: Repository root (must contain .git)
        force: Overwrite an existing pre-commit hook

    Returns:
        Path of the installed hook

    Raises:
        FileNotFoundError: If repo_root is not a git repository
        FileExistsError: If a hook exists and force is False
    """
    git_dir = repo_root / ".git"
    if not git_dir.is_dir():
        raise FileNotFoundError(f"Not a git repository: {repo_root}")

    hooks_dir = git_dir / "hooks"
    hooks_dir.mkdir(parents=True, exist_ok=True)

    hook = hooks_dir / "pre-commit"
    if hook.exists() and not force:
        raise FileExistsError(f"pre-commit hook already exists: {hook}")

    hook.write_text(PRE_COMMIT_TEMPLATE)
    mode = hook.stat().st_mode
    hook.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return hook


def list_hooks(repo_root: Path) -> List[str]:
    """Installed hook names, ignoring git's *.sample files."""
    hooks_dir = repo_root / ".git" / "hooks"
    if not hooks_dir.is_dir():
        return []
    return sorted(p.name for p in hooks_dir.iterdir() if not p.name.endswith(".sample"))
