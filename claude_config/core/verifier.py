"""Backup tree verifier: checks completeness and integrity of a backup."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Literal, Optional
import json
import logging
import os
import re

from claude_config.core.fs_ops import count_files

logger = logging.getLogger(__name__)

# Lines such as "@docs/style.md" or "@~/.claude/git-identity.md"
IMPORT_PATTERN = re.compile(r'^\s*@([~\w./-]+)\s*$', re.MULTILINE)

GLOBAL_FILES = [
    ("global/CLAUDE.md", "CLAUDE.md"),
    ("global/conversation-language.md", "conversation-language.md"),
    ("global/git-identity.md", "git-identity.md"),
    ("global/token-management.md", "token-management.md"),
    ("global/settings.json", "settings.json (hook settings)"),
]

PROJECT_FILES = [
    ("project/CLAUDE.md", "project CLAUDE.md", False),
    ("project/claude-guidelines", "claude-guidelines directory", True),
    ("project/.claude", ".claude directory", True),
    ("project/.claude/settings.json", "project settings.json (hook settings)", False),
]

GUIDELINE_DIRS = ["coding-standards", "operations", "project-management"]

DOCUMENTS = [
    ("README.md", "README.md"),
    ("QUICKSTART.md", "QUICKSTART.md"),
    ("HOOKS.md", "HOOKS.md (hook guide)"),
]

SCRIPT_DIRS = ["global/hooks", "global/scripts"]


@dataclass
class CheckResult:
    """Outcome of one verification check."""

    section: str
    description: str
    status: Literal["pass", "fail", "warn"]
    detail: Optional[str] = None


@dataclass
class BackupStats:
    """Size statistics of the backup tree."""

    total_files: int = 0
    total_bytes: int = 0
    markdown_files: int = 0
    shell_scripts: int = 0


@dataclass
class VerifyReport:
    """All check results plus statistics."""

    checks: List[CheckResult] = field(default_factory=list)
    stats: BackupStats = field(default_factory=BackupStats)

    @property
    def total(self) -> int:
        return sum(1 for c in self.checks if c.status != "warn")

    @property
    def passed(self) -> int:
        return sum(1 for c in self.checks if c.status == "pass")

    @property
    def failed(self) -> int:
        return sum(1 for c in self.checks if c.status == "fail")

    @property
    def warnings(self) -> int:
        return sum(1 for c in self.checks if c.status == "warn")

    @property
    def success_rate(self) -> int:
        if self.total == 0:
            return 100
        return self.passed * 100 // self.total

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def by_section(self) -> Dict[str, List[CheckResult]]:
        """Group checks by section, keeping check order."""
        sections: Dict[str, List[CheckResult]] = {}
        for check in self.checks:
            sections.setdefault(check.section, []).append(check)
        return sections


class BackupVerifier:
    """Run the fixed verification checklist against a backup tree."""

    def __init__(self, backup_root: Path):
        self.backup_root = backup_root
        self._report = VerifyReport()
        self._section = ""

    def verify(self) -> VerifyReport:
        """
        Verify the backup tree.

        Returns:
            VerifyReport; report.ok is True when no check failed
        """
        self._report = VerifyReport()

        self._section = "structure"
        self._check_dir("global", "global settings directory")
        self._check_dir("project", "project settings directory")

        self._section = "global"
        for relative, description in GLOBAL_FILES:
            self._check_file(relative, description)
        self._check_json("global/settings.json", "settings.json")
        self._check_imports("global/CLAUDE.md")

        self._section = "project"
        for relative, description, is_dir in PROJECT_FILES:
            if is_dir:
                self._check_dir(relative, description)
            else:
                self._check_file(relative, description)
        self._check_json("project/.claude/settings.json", "project settings.json")
        self._check_imports("project/CLAUDE.md")

        self._section = "skills"
        self._check_skills("project/.claude/skills")

        guidelines = self.backup_root / "project/claude-guidelines"
        if guidelines.is_dir():
            self._section = "guidelines"
            for name in GUIDELINE_DIRS:
                self._check_dir(f"project/claude-guidelines/{name}", name)

        self._section = "scripts"
        self._check_scripts()

        self._section = "documents"
        for relative, description in DOCUMENTS:
            self._check_file(relative, description)

        self._report.stats = self._collect_stats()
        return self._report

    def _record(self, status: Literal["pass", "fail", "warn"], description: str,
                detail: Optional[str] = None) -> bool:
        self._report.checks.append(
            CheckResult(section=self._section, description=description,
                        status=status, detail=detail)
        )
        return status == "pass"

    def _check_file(self, relative: str, description: str) -> bool:
        path = self.backup_root / relative
        if path.is_file():
            return self._record("pass", description, f"{path.stat().st_size} bytes")
        return self._record("fail", description, "missing")

    def _check_dir(self, relative: str, description: str) -> bool:
        path = self.backup_root / relative
        if path.is_dir():
            return self._record("pass", description, f"{count_files(path)} files")
        return self._record("fail", description, "missing")

    def _check_json(self, relative: str, description: str) -> None:
        path = self.backup_root / relative
        if not path.is_file():
            return

        try:
            with open(path, encoding="utf-8") as f:
                json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.debug("Invalid JSON in %s: %s", path, e)
            self._record("fail", f"{description} JSON validation", str(e))
            return

        self._record("pass", f"{description} JSON validation")

    def _check_imports(self, relative: str) -> None:
        """Warn about @imports in a CLAUDE.md that point nowhere."""
        path = self.backup_root / relative
        if not path.is_file():
            return

        content = path.read_text(encoding="utf-8", errors="replace")
        for reference in IMPORT_PATTERN.findall(content):
            if reference.startswith("~"):
                # Refers to the live system, not the backup tree
                continue
            target = path.parent / reference
            if target.exists():
                self._record("pass", f"@{reference}", f"imported by {relative}")
            else:
                self._record("warn", f"@{reference}", f"unresolved import in {relative}")

    def _check_skills(self, relative: str) -> None:
        if not self._check_dir(relative, "skills directory"):
            return

        for skill_dir in sorted(p for p in (self.backup_root / relative).iterdir() if p.is_dir()):
            if (skill_dir / "SKILL.md").is_file():
                self._record("pass", f"{skill_dir.name}/SKILL.md")
            else:
                self._record("fail", f"{skill_dir.name}/SKILL.md", "missing")

    def _check_scripts(self) -> None:
        for relative in SCRIPT_DIRS:
            directory = self.backup_root / relative
            if not directory.is_dir():
                continue
            for script in sorted(directory.glob("*.sh")):
                name = f"{relative}/{script.name}"
                if os.access(script, os.X_OK):
                    self._record("pass", name, "executable")
                else:
                    self._record("fail", name, "not executable")

    def _collect_stats(self) -> BackupStats:
        stats = BackupStats()
        for path in self.backup_root.rglob("*"):
            if not path.is_file() or ".git" in path.relative_to(self.backup_root).parts:
                continue
            stats.total_files += 1
            stats.total_bytes += path.stat().st_size
            if path.suffix == ".md":
                stats.markdown_files += 1
            elif path.suffix == ".sh":
                stats.shell_scripts += 1
        return stats
