"""Filesystem helpers shared by install, backup and sync."""
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging
import shutil

logger = logging.getLogger(__name__)


def backup_suffix(now: datetime) -> str:
    """Suffix appended to a path before it is overwritten."""
    return f".backup_{now.strftime('%Y%m%d_%H%M%S')}"


def create_timestamped_backup(target: Path, now: Optional[datetime] = None) -> Optional[Path]:
    """
    Copy an existing file or directory aside before it is overwritten.

    Args:
        target: File or directory about to be replaced
        now: Timestamp for the backup name (default: current time)

    Returns:
        Path of the copy, or None if target does not exist
    """
    if not target.exists() and not target.is_symlink():
        return None

    backup_path = target.with_name(target.name + backup_suffix(now or datetime.now()))

    if target.is_dir() and not target.is_symlink():
        shutil.copytree(target, backup_path, symlinks=True)
    else:
        shutil.copy2(target, backup_path, follow_symlinks=False)

    logger.debug("Backed up %s to %s", target, backup_path)
    return backup_path


def copy_entry(source: Path, destination: Path) -> None:
    """
    Copy a file, or merge a directory into destination (like cp -r).

    Args:
        source: Existing file or directory
        destination: Path the copy should end up at

    Raises:
        FileNotFoundError: If source doesn't exist
    """
    if not source.exists():
        raise FileNotFoundError(f"Source not found: {source}")

    destination.parent.mkdir(parents=True, exist_ok=True)

    if source.is_dir():
        shutil.copytree(source, destination, dirs_exist_ok=True)
    else:
        shutil.copy2(source, destination)

    logger.debug("Copied %s -> %s", source, destination)


def ensure_dir(path: Path) -> bool:
    """Create a directory if needed. Returns True if it was created."""
    if path.is_dir():
        return False
    path.mkdir(parents=True, exist_ok=True)
    return True


def clear_directory(path: Path) -> None:
    """Remove everything inside a directory, keeping the directory."""
    if not path.is_dir():
        return

    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def count_files(path: Path) -> int:
    """Count regular files below a directory."""
    return sum(1 for p in path.rglob("*") if p.is_file())


def is_empty_dir(path: Path) -> bool:
    return path.is_dir() and not any(path.iterdir())
