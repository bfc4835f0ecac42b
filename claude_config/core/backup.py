"""Configuration backup: copies system configuration into the backup tree."""
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Literal, Optional
import logging
import shutil

from claude_config.core.fs_ops import clear_directory, copy_entry, is_empty_dir
from claude_config.models.layout import ConfigScope, ManagedEntry, entries_for

logger = logging.getLogger(__name__)

STAGING_PREFIX = "backup_"


@dataclass
class BackupResult:
    """Result of backing up one managed entry."""

    entry: ManagedEntry
    status: Literal["copied", "skipped", "missing", "failed"]
    source: Path
    error: Optional[str] = None


class ConfigBackup:
    """Back up live configuration into a staging directory, then promote it."""

    def __init__(
        self,
        backup_root: Path,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.backup_root = backup_root
        self.clock = clock

    def create_staging(self) -> Path:
        """
        Create a timestamped staging directory inside the backup tree.

        Returns:
            Path like <backup_root>/backup_20250101_120000
        """
        stamp = self.clock().strftime("%Y%m%d_%H%M%S")
        staging = self.backup_root / f"{STAGING_PREFIX}{stamp}"
        for scope in (ConfigScope.GLOBAL, ConfigScope.PROJECT):
            (staging / scope.value).mkdir(parents=True, exist_ok=True)
        logger.debug("Created staging directory %s", staging)
        return staging

    def snapshot(
        self,
        scope: ConfigScope,
        source_root: Path,
        staging: Path
    ) -> List[BackupResult]:
        """
        Copy every present entry of a scope from the system into staging.

        Args:
            scope: Scope to back up
            source_root: Root directory on the system (e.g. ~/.claude)
            staging: Staging directory from create_staging()

        Returns:
            One BackupResult per managed entry
        """
        results: List[BackupResult] = []

        for entry in entries_for(scope):
            source = entry.target_in(source_root)

            if not source.exists():
                status = "missing" if entry.required else "skipped"
                results.append(BackupResult(entry=entry, status=status, source=source))
                continue

            try:
                copy_entry(source, staging / scope.value / entry.path)
                results.append(BackupResult(entry=entry, status="copied", source=source))
            except OSError as e:
                results.append(
                    BackupResult(entry=entry, status="failed", source=source, error=str(e))
                )

        return results

    def promote(self, staging: Path) -> List[ConfigScope]:
        """
        Replace the backup tree's scopes with the staged copies.

        Only scopes with staged content are replaced; the staging
        directory is removed afterwards.

        Args:
            staging: Staging directory filled by snapshot()

        Returns:
            Scopes that were replaced
        """
        replaced: List[ConfigScope] = []

        for scope in ConfigScope:
            staged = staging / scope.value
            if not staged.is_dir() or is_empty_dir(staged):
                continue

            target = self.backup_root / scope.value
            target.mkdir(parents=True, exist_ok=True)
            clear_directory(target)
            shutil.copytree(staged, target, dirs_exist_ok=True)
            replaced.append(scope)
            logger.info("Replaced %s backup from %s", scope.value, staging)

        shutil.rmtree(staging)
        return replaced

    def list_backed_up(self, scope: ConfigScope) -> List[str]:
        """Top-level names in a scope of the backup tree, sorted."""
        root = self.backup_root / scope.value
        if not root.is_dir():
            return []
        return sorted(p.name + ("/" if p.is_dir() else "") for p in root.iterdir())
