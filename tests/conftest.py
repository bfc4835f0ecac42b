"""Pytest configuration and shared fixtures."""
import json
import pytest
from datetime import datetime
from pathlib import Path


@pytest.fixture
def sample_skill_md() -> str:
    """Return a valid SKILL.md content."""
    return """---
name: test-skill
description: A test skill for validation
---

# Test Skill

## Instructions
This is a test skill for testing purposes.
"""


@pytest.fixture
def invalid_skill_md_no_frontmatter() -> str:
    """Return SKILL.md without frontmatter."""
    return """# Test Skill

Just a heading, no frontmatter.
"""


@pytest.fixture
def invalid_skill_md_missing_name() -> str:
    """Return SKILL.md with missing name field."""
    return """---
description: A test skill
---

# Test Skill
"""


@pytest.fixture
def invalid_skill_md_bad_name_format() -> str:
    """Return SKILL.md with invalid name format."""
    return """---
name: Invalid_Name_With_Underscores
description: A test skill
---

# Test Skill
"""


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed timestamp (2025-01-02 03:04:05)."""
    return lambda: datetime(2025, 1, 2, 3, 4, 5)


def _write(path: Path, content: str, executable: bool = False) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    if executable:
        path.chmod(0o755)


@pytest.fixture
def backup_tree(tmp_path: Path, sample_skill_md: str) -> Path:
    """
    Build a complete backup tree that passes verification.

    Layout:
        global/   CLAUDE.md, *.md, settings.json, hooks/, scripts/
        project/  CLAUDE.md, claude-guidelines/, .claude/{settings.json,rules,skills}
        README.md, QUICKSTART.md, HOOKS.md
    """
    root = tmp_path / "backup"

    _write(root / "global/CLAUDE.md", "# Global\n\n@conversation-language.md\n")
    _write(root / "global/conversation-language.md", "English\n")
    _write(root / "global/git-identity.md", "name: Test User\nemail: test@example.com\n")
    _write(root / "global/token-management.md", "# Tokens\n")
    _write(root / "global/settings.json", json.dumps({"hooks": {}}))
    _write(root / "global/hooks/sensitive-file-guard.sh", "#!/bin/sh\nexit 0\n", executable=True)
    _write(root / "global/scripts/statusline.sh", "#!/bin/sh\necho ok\n", executable=True)

    _write(root / "project/CLAUDE.md", "# Project\n")
    for name in ("coding-standards", "operations", "project-management"):
        _write(root / f"project/claude-guidelines/{name}/README.md", f"# {name}\n")
    _write(root / "project/.claude/settings.json", json.dumps({"hooks": {}}))
    _write(root / "project/.claude/rules/style.md", "# Style\n")
    _write(root / "project/.claude/skills/test-skill/SKILL.md", sample_skill_md)
    _write(root / "project/.claude/skills/test-skill/reference/guide.md", "# Guide\n")

    for doc in ("README.md", "QUICKSTART.md", "HOOKS.md"):
        _write(root / doc, f"# {doc}\n")

    return root


@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch) -> Path:
    """Redirect Path.home() to a temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    return home
