"""Configuration installer: copies the backup tree onto the system."""
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Literal, Optional
import logging

from claude_config.core.fs_ops import copy_entry, create_timestamped_backup, ensure_dir
from claude_config.models.layout import ConfigScope, ManagedEntry, entries_for

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of installing one managed entry."""

    entry: ManagedEntry
    status: Literal["installed", "skipped", "missing", "failed"]
    destination: Path
    backup_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status in ("installed", "skipped")


class ConfigInstaller:
    """Installer for configuration files held in a backup tree."""

    def __init__(
        self,
        backup_root: Path,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize installer.

        Args:
            backup_root: Root of the backup tree (holds global/, project/, ...)
            clock: Time source for backup file names
        """
        self.backup_root = backup_root
        self.clock = clock

    def has_source(self, scope: ConfigScope) -> bool:
        """Whether the backup tree contains the scope's subtree."""
        return (self.backup_root / scope.value).is_dir()

    def install_entry(
        self,
        entry: ManagedEntry,
        scope: ConfigScope,
        target_root: Path,
        backup_existing: bool = True,
        now: Optional[datetime] = None
    ) -> InstallResult:
        """
        Install a single entry.

        Args:
            entry: Entry to install
            scope: Scope the entry belongs to
            target_root: Root directory on the system
            backup_existing: Keep a timestamped copy of what gets overwritten
            now: Timestamp for backup names

        Returns:
            InstallResult with installation details
        """
        source = entry.source_in(self.backup_root, scope)
        destination = entry.target_in(target_root)

        if not source.exists():
            if entry.required:
                return InstallResult(
                    entry=entry,
                    status="missing",
                    destination=destination,
                    error=f"Required file missing from backup: {source}"
                )
            return InstallResult(entry=entry, status="skipped", destination=destination)

        try:
            backup_path = None
            if backup_existing:
                backup_path = create_timestamped_backup(destination, now or self.clock())

            copy_entry(source, destination)

            return InstallResult(
                entry=entry,
                status="installed",
                destination=destination,
                backup_path=backup_path
            )

        except OSError as e:
            logger.debug("Install of %s failed", entry.path, exc_info=True)
            return InstallResult(
                entry=entry,
                status="failed",
                destination=destination,
                error=str(e)
            )

    def install_scope(
        self,
        scope: ConfigScope,
        target_root: Path,
        backup_existing: bool = True
    ) -> List[InstallResult]:
        """
        Install every managed entry of a scope.

        All backups made by one call share the same timestamp.

        Args:
            scope: Scope to install
            target_root: Root directory on the system (e.g. ~/.claude)
            backup_existing: Keep a timestamped copy of what gets overwritten

        Returns:
            One InstallResult per managed entry
        """
        ensure_dir(target_root)
        now = self.clock()

        results = [
            self.install_entry(entry, scope, target_root, backup_existing, now)
            for entry in entries_for(scope)
        ]

        installed = sum(1 for r in results if r.status == "installed")
        logger.info("Installed %d %s entries into %s", installed, scope.value, target_root)
        return results
