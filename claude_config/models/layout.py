"""Data models for the backup tree and the files it manages."""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional
import sys


class ConfigScope(str, Enum):
    """Scope of a configuration set. The value names its backup subtree."""

    GLOBAL = "global"
    PROJECT = "project"
    ENTERPRISE = "enterprise"


class EntryKind(str, Enum):
    """Kind of filesystem entry managed in a scope."""

    FILE = "file"
    DIRECTORY = "directory"


# SKILL.md frontmatter constraints
SKILL_NAME_PATTERN = r'[a-z0-9-]+'
MAX_SKILL_NAME_LENGTH = 64
MAX_SKILL_DESCRIPTION_LENGTH = 1024
RECOMMENDED_SKILL_LINES = 500


@dataclass(frozen=True)
class ManagedEntry:
    """A file or directory copied between the backup tree and the system."""

    path: str
    kind: EntryKind = EntryKind.FILE
    required: bool = False
    description: str = ""

    def __post_init__(self) -> None:
        """Validate entry path after initialization."""
        pure = PurePosixPath(self.path)
        if not self.path or pure.is_absolute() or ".." in pure.parts:
            raise ValueError(
                f"Invalid entry path: '{self.path}'. "
                "Path must be relative and must not contain '..'."
            )

    @property
    def name(self) -> str:
        """Display name, with a trailing slash for directories."""
        if self.kind == EntryKind.DIRECTORY:
            return f"{self.path}/"
        return self.path

    @property
    def is_directory(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    def source_in(self, backup_root: Path, scope: "ConfigScope") -> Path:
        """Location of this entry inside the backup tree."""
        return backup_root / scope.value / self.path

    def target_in(self, target_root: Path) -> Path:
        """Location of this entry on the live system."""
        return target_root / self.path


GLOBAL_ENTRIES: List[ManagedEntry] = [
    ManagedEntry("CLAUDE.md", required=True, description="global instructions"),
    ManagedEntry("conversation-language.md", description="conversation language"),
    ManagedEntry("git-identity.md", description="git identity"),
    ManagedEntry("token-management.md", description="token management"),
    ManagedEntry("settings.json", description="hook settings"),
    ManagedEntry("hooks", EntryKind.DIRECTORY, description="hook scripts"),
    ManagedEntry("scripts", EntryKind.DIRECTORY, description="helper scripts"),
]

PROJECT_ENTRIES: List[ManagedEntry] = [
    ManagedEntry("CLAUDE.md", required=True, description="project instructions"),
    ManagedEntry("claude-guidelines", EntryKind.DIRECTORY, description="guidelines"),
    ManagedEntry(".claude/settings.json", description="project hook settings"),
    ManagedEntry(".claude/rules", EntryKind.DIRECTORY, description="rules"),
    ManagedEntry(".claude/skills", EntryKind.DIRECTORY, description="skills"),
    ManagedEntry(".claude/commands", EntryKind.DIRECTORY, description="commands"),
    ManagedEntry(".claude/agents", EntryKind.DIRECTORY, description="agents"),
]

ENTERPRISE_ENTRIES: List[ManagedEntry] = [
    ManagedEntry("CLAUDE.md", required=True, description="managed policy"),
    ManagedEntry("settings.json", description="managed settings"),
]

_ENTRIES: Dict[ConfigScope, List[ManagedEntry]] = {
    ConfigScope.GLOBAL: GLOBAL_ENTRIES,
    ConfigScope.PROJECT: PROJECT_ENTRIES,
    ConfigScope.ENTERPRISE: ENTERPRISE_ENTRIES,
}


def entries_for(scope: ConfigScope) -> List[ManagedEntry]:
    """Get the managed entries of a scope, in copy order."""
    return list(_ENTRIES[scope])


def default_enterprise_dir() -> Path:
    """Platform location of managed (enterprise) configuration."""
    if sys.platform == "darwin":
        return Path("/Library/Application Support/ClaudeCode")
    return Path("/etc/claude-code")


def default_target_root(
    scope: ConfigScope,
    project_dir: Optional[Path] = None,
    enterprise_dir: Optional[Path] = None
) -> Path:
    """
    Resolve where a scope lives on the system.

    Args:
        scope: Configuration scope
        project_dir: Project directory override (default: cwd)
        enterprise_dir: Enterprise directory override

    Returns:
        Target root directory for the scope
    """
    if scope == ConfigScope.GLOBAL:
        return Path.home() / ".claude"
    if scope == ConfigScope.PROJECT:
        return project_dir or Path.cwd()
    return enterprise_dir or default_enterprise_dir()
