"""Configuration parser for claude-config.yaml."""
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
import logging
import os
import yaml

from claude_config.models.layout import RECOMMENDED_SKILL_LINES

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "claude-config.yaml"

CONFIG_TEMPLATE = """# claude-config configuration
# Lives at the root of the backup tree (next to global/ and project/).

config:
  # Keep a timestamped copy (*.backup_YYYYMMDD_HHMMSS) before overwriting
  backup_existing: true
  # Default project directory offered by install/backup/sync prompts
  project_dir: null
  # Target for the enterprise scope (default: /etc/claude-code)
  enterprise_dir: null
  # SKILL.md length above which validate-skills warns
  max_skill_lines: 500
  # Directories scanned by validate-skills, relative to the backup tree
  skill_dirs:
    - project/.claude/skills
    - plugin/skills

# Repository used by 'claude-config bootstrap'
# (GITHUB_USER, GITHUB_REPO, GITHUB_BRANCH and INSTALL_DIR override these)
repository:
  github_user: kcenon
  github_repo: claude-config
  github_branch: main
  install_dir: ~/claude_config_backup
"""


def _to_path(value: Any) -> Optional[Path]:
    if value is None or isinstance(value, Path):
        return value
    return Path(str(value)).expanduser()


@dataclass
class ToolConfig:
    """Tool behaviour from the config: section."""

    backup_existing: bool = True
    project_dir: Optional[Path] = None
    enterprise_dir: Optional[Path] = None
    max_skill_lines: int = RECOMMENDED_SKILL_LINES
    skill_dirs: List[str] = field(
        default_factory=lambda: ["project/.claude/skills", "plugin/skills"]
    )

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.max_skill_lines, int) or self.max_skill_lines < 1:
            raise ValueError("max_skill_lines must be a positive integer")

        if not isinstance(self.skill_dirs, list):
            raise ValueError("skill_dirs must be a list of directories")

        self.project_dir = _to_path(self.project_dir)
        self.enterprise_dir = _to_path(self.enterprise_dir)


@dataclass
class RepositoryConfig:
    """Remote repository used to bootstrap a backup tree."""

    github_user: str = "kcenon"
    github_repo: str = "claude-config"
    github_branch: str = "main"
    install_dir: Path = field(
        default_factory=lambda: Path.home() / "claude_config_backup"
    )

    def __post_init__(self) -> None:
        """Validate repository settings after initialization."""
        for name in ("github_user", "github_repo"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value or "/" in value:
                raise ValueError(f"Invalid {name}: {value!r}")

        if not isinstance(self.github_branch, str) or not self.github_branch:
            raise ValueError(f"Invalid github_branch: {self.github_branch!r}")

        self.install_dir = _to_path(self.install_dir)

    @property
    def clone_url(self) -> str:
        return f"https://github.com/{self.github_user}/{self.github_repo}.git"

    def with_env(self, environ: Optional[Mapping[str, str]] = None) -> "RepositoryConfig":
        """
        Apply GITHUB_USER, GITHUB_REPO, GITHUB_BRANCH and INSTALL_DIR overrides.

        Args:
            environ: Environment mapping (default: os.environ)

        Returns:
            New RepositoryConfig with overrides applied
        """
        env = os.environ if environ is None else environ
        return RepositoryConfig(
            github_user=env.get("GITHUB_USER") or self.github_user,
            github_repo=env.get("GITHUB_REPO") or self.github_repo,
            github_branch=env.get("GITHUB_BRANCH") or self.github_branch,
            install_dir=env.get("INSTALL_DIR") or self.install_dir,
        )


@dataclass
class ClaudeConfig:
    """Complete claude-config.yaml representation."""

    config: ToolConfig = field(default_factory=ToolConfig)
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)


def _build(cls: Any, data: Any, section_name: str) -> Any:
    """
    Build a section dataclass from YAML data.

    Raises:
        ValueError: If the section is not a mapping or has unknown keys
    """
    if data is None:
        return cls()

    if not isinstance(data, dict):
        raise ValueError(
            f"Invalid format in '{section_name}' section: "
            f"expected a mapping, got {type(data).__name__}"
        )

    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(
            f"Unknown key(s) in '{section_name}' section: {', '.join(unknown)}"
        )

    return cls(**data)


def load_config(path: Path) -> ClaudeConfig:
    """
    Load and parse claude-config.yaml.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to claude-config.yaml

    Returns:
        Parsed ClaudeConfig object

    Raises:
        yaml.YAMLError: If YAML syntax is invalid
        ValueError: If a section or value is invalid
    """
    if not path.exists():
        logger.debug("No config at %s, using defaults", path)
        return ClaudeConfig()

    with open(path) as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Invalid config file {path}: expected a mapping")

    unknown = sorted(set(data) - {"config", "repository"})
    if unknown:
        raise ValueError(f"Unknown section(s) in {path.name}: {', '.join(unknown)}")

    return ClaudeConfig(
        config=_build(ToolConfig, data.get("config"), "config"),
        repository=_build(RepositoryConfig, data.get("repository"), "repository"),
    )
