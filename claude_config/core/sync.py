"""Compare the backup tree with the system and copy differences one way."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple
import filecmp
import logging

from claude_config.core.fs_ops import copy_entry, create_timestamped_backup
from claude_config.models.layout import ConfigScope, ManagedEntry, entries_for

logger = logging.getLogger(__name__)


class CompareStatus(str, Enum):
    """How an entry differs between backup and system."""

    BOTH_MISSING = "both_missing"
    BACKUP_ONLY = "backup_only"
    SYSTEM_ONLY = "system_only"
    IDENTICAL = "identical"
    DIFFERENT = "different"


class SyncDirection(str, Enum):
    """Direction chosen in the sync menu."""

    BACKUP_TO_SYSTEM = "backup_to_system"
    SYSTEM_TO_BACKUP = "system_to_backup"
    COMPARE_ONLY = "compare_only"


@dataclass
class EntryComparison:
    """Comparison of one managed entry."""

    entry: ManagedEntry
    status: CompareStatus
    backup_path: Path
    system_path: Path
    differences: List[str] = field(default_factory=list)

    @property
    def in_sync(self) -> bool:
        return self.status in (CompareStatus.IDENTICAL, CompareStatus.BOTH_MISSING)


@dataclass
class SyncResult:
    """Result of copying one entry during sync."""

    entry: ManagedEntry
    source: Path
    destination: Path
    backup_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


def diff_directories(left: Path, right: Path) -> List[str]:
    """
    Recursively compare two directories by content (like diff -rq).

    Args:
        left: Backup side
        right: System side

    Returns:
        Sorted descriptions of every difference, empty if identical
    """
    differences: List[str] = []

    def walk(cmp: filecmp.dircmp, prefix: str) -> None:
        for name in cmp.left_only:
            differences.append(f"Only in backup: {prefix}{name}")
        for name in cmp.right_only:
            differences.append(f"Only in system: {prefix}{name}")
        for name in cmp.common_files:
            if not filecmp.cmp(Path(cmp.left) / name, Path(cmp.right) / name, shallow=False):
                differences.append(f"Differs: {prefix}{name}")
        for name in cmp.common_funny + cmp.funny_files:
            differences.append(f"Differs: {prefix}{name}")
        for name, sub in cmp.subdirs.items():
            walk(sub, f"{prefix}{name}/")

    walk(filecmp.dircmp(left, right), "")
    return sorted(differences)


def classify(backup_path: Path, system_path: Path) -> Tuple[CompareStatus, List[str]]:
    """
    Classify a backup/system path pair.

    Files are compared byte for byte; directories recursively.

    Args:
        backup_path: Path inside the backup tree
        system_path: Path on the system

    Returns:
        Tuple of (CompareStatus, differences)
    """
    in_backup = backup_path.exists()
    on_system = system_path.exists()

    if not in_backup and not on_system:
        return CompareStatus.BOTH_MISSING, []
    if not on_system:
        return CompareStatus.BACKUP_ONLY, []
    if not in_backup:
        return CompareStatus.SYSTEM_ONLY, []

    if backup_path.is_dir() and system_path.is_dir():
        differences = diff_directories(backup_path, system_path)
        status = CompareStatus.DIFFERENT if differences else CompareStatus.IDENTICAL
        return status, differences

    if backup_path.is_dir() or system_path.is_dir():
        return CompareStatus.DIFFERENT, ["File type differs"]

    if filecmp.cmp(backup_path, system_path, shallow=False):
        return CompareStatus.IDENTICAL, []
    return CompareStatus.DIFFERENT, []


class ConfigSyncer:
    """Synchronize managed entries between the backup tree and the system."""

    def __init__(
        self,
        backup_root: Path,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.backup_root = backup_root
        self.clock = clock

    def compare(self, scope: ConfigScope, target_root: Path) -> List[EntryComparison]:
        """
        Compare every managed entry of a scope. Never modifies either side.

        Args:
            scope: Scope to compare
            target_root: Root directory on the system

        Returns:
            One EntryComparison per managed entry
        """
        comparisons = []
        for entry in entries_for(scope):
            backup_path = entry.source_in(self.backup_root, scope)
            system_path = entry.target_in(target_root)
            status, differences = classify(backup_path, system_path)
            comparisons.append(
                EntryComparison(
                    entry=entry,
                    status=status,
                    backup_path=backup_path,
                    system_path=system_path,
                    differences=differences,
                )
            )
        return comparisons

    def apply(
        self,
        direction: SyncDirection,
        scope: ConfigScope,
        target_root: Path,
        comparisons: Optional[List[EntryComparison]] = None
    ) -> List[SyncResult]:
        """
        Copy out-of-sync entries in the given direction.

        Backup to system keeps a timestamped copy of each overwritten
        system entry. System to backup overwrites the backup copy.

        Args:
            direction: Sync direction
            scope: Scope to sync
            target_root: Root directory on the system
            comparisons: Result of compare(), recomputed when omitted

        Returns:
            One SyncResult per copied entry
        """
        if direction == SyncDirection.COMPARE_ONLY:
            return []

        if comparisons is None:
            comparisons = self.compare(scope, target_root)

        now = self.clock()
        results: List[SyncResult] = []

        for comparison in comparisons:
            if comparison.in_sync:
                continue

            if direction == SyncDirection.BACKUP_TO_SYSTEM:
                source, destination = comparison.backup_path, comparison.system_path
            else:
                source, destination = comparison.system_path, comparison.backup_path

            if not source.exists():
                continue

            result = SyncResult(entry=comparison.entry, source=source, destination=destination)
            try:
                if direction == SyncDirection.BACKUP_TO_SYSTEM:
                    result.backup_path = create_timestamped_backup(destination, now)
                copy_entry(source, destination)
            except OSError as e:
                result.error = str(e)

            logger.debug("Synced %s (%s)", comparison.entry.path, direction.value)
            results.append(result)

        return results


def has_differences(comparisons: List[EntryComparison]) -> bool:
    return any(not c.in_sync for c in comparisons)
