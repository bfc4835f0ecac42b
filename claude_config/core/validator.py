"""SKILL.md validator for skill structure and frontmatter metadata."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional
import logging
import re
import yaml

from claude_config.models.layout import (
    MAX_SKILL_DESCRIPTION_LENGTH,
    MAX_SKILL_NAME_LENGTH,
    RECOMMENDED_SKILL_LINES,
    SKILL_NAME_PATTERN,
)

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"
FRONTMATTER_DELIMITER = "---"


@dataclass
class SkillCheck:
    """Outcome of one validation step."""

    status: Literal["pass", "fail", "warn"]
    message: str


@dataclass
class SkillReport:
    """Validation report for one SKILL.md file."""

    path: Path
    checks: List[SkillCheck] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add(self, status: Literal["pass", "fail", "warn"], message: str) -> None:
        self.checks.append(SkillCheck(status=status, message=message))

    @property
    def errors(self) -> List[str]:
        return [c.message for c in self.checks if c.status == "fail"]

    @property
    def warnings(self) -> List[str]:
        return [c.message for c in self.checks if c.status == "warn"]

    @property
    def passed(self) -> int:
        return sum(1 for c in self.checks if c.status == "pass")

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass
class ValidationSummary:
    """Totals across all validated files."""

    reports: List[SkillReport] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(r.passed for r in self.reports)

    @property
    def failed(self) -> int:
        return sum(len(r.errors) for r in self.reports)

    @property
    def warnings(self) -> int:
        return sum(len(r.warnings) for r in self.reports)

    @property
    def total(self) -> int:
        """Pass/fail checks; warnings are counted separately."""
        return self.passed + self.failed

    @property
    def valid(self) -> bool:
        return self.failed == 0


def _find_closing_delimiter(lines: List[str]) -> Optional[int]:
    """0-based index of the closing '---', searching after the first line."""
    for index, line in enumerate(lines[1:], 1):
        if line.rstrip("\r") == FRONTMATTER_DELIMITER:
            return index
    return None


def _scan_fields(frontmatter: str) -> Dict[str, str]:
    """Line-based 'key: value' scan of the raw frontmatter text."""
    fields: Dict[str, str] = {}
    for line in frontmatter.splitlines():
        match = re.match(r'^([A-Za-z_][\w-]*):\s*(.*)$', line)
        if match and match.group(1) not in fields:
            fields[match.group(1)] = match.group(2).rstrip()
    return fields


def _field_text(parsed: Dict[str, Any], raw: Dict[str, str], key: str) -> Any:
    """
    Value of a frontmatter field as written.

    YAML types bare scalars such as `name: 2048` or `name: yes`; those are
    read back as their raw text. Lists and mappings are returned unchanged.
    """
    value = parsed.get(key)
    if value is None or isinstance(value, (str, list, dict)):
        return value
    return raw.get(key, str(value))


class SkillValidator:
    """Validator for SKILL.md files."""

    def __init__(self, max_lines: int = RECOMMENDED_SKILL_LINES):
        """
        Initialize validator.

        Args:
            max_lines: File length above which a warning is recorded
        """
        self.max_lines = max_lines

    @staticmethod
    def discover(backup_root: Path, skill_dirs: Iterable[str]) -> List[Path]:
        """
        Find SKILL.md files under the configured skill directories.

        Args:
            backup_root: Root of the backup tree
            skill_dirs: Directories relative to backup_root

        Returns:
            Sorted list of SKILL.md paths
        """
        found = set()
        for relative in skill_dirs:
            directory = backup_root / relative
            if not directory.is_dir():
                continue
            logger.debug("Scanning %s for %s", directory, SKILL_FILENAME)
            found.update(directory.rglob(SKILL_FILENAME))
        return sorted(found)

    @staticmethod
    def collect(paths: Iterable[Path]) -> List[Path]:
        """Expand explicit paths (SKILL.md files or directories) into SKILL.md files."""
        found = set()
        for path in paths:
            if path.is_dir():
                found.update(path.rglob(SKILL_FILENAME))
            elif path.is_file():
                found.add(path)
        return sorted(found)

    def validate_file(self, skill_md: Path) -> SkillReport:
        """
        Validate a single SKILL.md file.

        Args:
            skill_md: Path to SKILL.md

        Returns:
            SkillReport with every check recorded
        """
        report = SkillReport(path=skill_md)

        try:
            content = skill_md.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            report.add("fail", f"Cannot read {SKILL_FILENAME}: {e}")
            return report

        lines = content.split("\n")

        # Frontmatter delimiters
        if lines[0].rstrip("\r") != FRONTMATTER_DELIMITER:
            report.add("fail", "YAML frontmatter missing (first line is not '---')")
        else:
            report.add("pass", "YAML frontmatter start found")

        closing = _find_closing_delimiter(lines)
        if closing is None:
            report.add("fail", "YAML frontmatter closing marker missing")
            frontmatter = ""
        else:
            report.add("pass", f"YAML frontmatter end found (line {closing + 1})")
            frontmatter = "\n".join(lines[1:closing])

        # Parse frontmatter
        parsed: Any = None
        yaml_error: Optional[str] = None
        try:
            parsed = yaml.safe_load(frontmatter) if frontmatter else None
        except yaml.YAMLError as e:
            yaml_error = str(e).splitlines()[0]

        raw_fields = _scan_fields(frontmatter)
        if isinstance(parsed, dict):
            fields: Dict[str, Any] = parsed
        else:
            fields = raw_fields
        report.metadata = dict(fields)

        self._check_name(report, _field_text(fields, raw_fields, "name"))
        self._check_description(report, _field_text(fields, raw_fields, "description"))

        # File length
        line_count = len(content.splitlines())
        if line_count > self.max_lines:
            report.add(
                "warn",
                f"File is long: {line_count} lines (recommended: {self.max_lines} or fewer)"
            )
        else:
            report.add("pass", f"File length ok: {line_count} lines")

        # Reference directory
        reference_dir = skill_md.parent / "reference"
        if reference_dir.is_dir():
            ref_count = sum(1 for _ in reference_dir.rglob("*.md"))
            report.add("pass", f"reference directory present: {ref_count} document(s)")
        else:
            report.add("warn", "reference directory missing")

        # YAML syntax
        if closing is None or lines[0].rstrip("\r") != FRONTMATTER_DELIMITER:
            report.add("fail", "YAML syntax could not be checked (no frontmatter)")
        elif yaml_error:
            report.add("fail", f"YAML syntax error: {yaml_error}")
        elif parsed is not None and not isinstance(parsed, dict):
            report.add("fail", "YAML frontmatter is not a mapping")
        else:
            report.add("pass", "YAML syntax valid")

        return report

    def _check_name(self, report: SkillReport, name: Any) -> None:
        if name is None or (isinstance(name, str) and not name.strip()):
            report.add("fail", "name field missing")
            return

        if not isinstance(name, str):
            report.add("fail", "name field must be a string")
            return

        if re.fullmatch(SKILL_NAME_PATTERN, name):
            report.add("pass", f"name format valid: '{name}'")
        else:
            report.add(
                "fail",
                f"Invalid name format: '{name}' "
                "(lowercase letters, numbers, and hyphens only)"
            )

        if len(name) > MAX_SKILL_NAME_LENGTH:
            report.add(
                "fail",
                f"name too long: {len(name)} characters (max {MAX_SKILL_NAME_LENGTH})"
            )
        else:
            report.add("pass", f"name length ok: {len(name)} characters")

    def _check_description(self, report: SkillReport, description: Any) -> None:
        if description is None or not str(description).strip():
            report.add("fail", "description field missing or empty")
            return

        if not isinstance(description, str):
            report.add("fail", "description field must be a string")
            return

        if len(description) > MAX_SKILL_DESCRIPTION_LENGTH:
            report.add(
                "fail",
                f"description too long: {len(description)} characters "
                f"(max {MAX_SKILL_DESCRIPTION_LENGTH})"
            )
        else:
            report.add("pass", f"description valid: {len(description)} characters")

    def validate_all(self, skill_files: Iterable[Path]) -> ValidationSummary:
        """Validate every file and aggregate the results."""
        return ValidationSummary(reports=[self.validate_file(p) for p in skill_files])
