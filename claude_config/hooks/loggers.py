"""Session, subagent and tool-failure log hooks, plus temp cleanup."""
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, List, Optional
import logging
import os

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

SESSION_MESSAGES = {
    "start": "[Session] Claude Code session started: {ts}",
    "end": "[Session] Claude Code session ended: {ts}",
    "stop": "[Stop] Claude Code task stopped: {ts}",
}
DEFAULT_SESSION_MESSAGE = "[Session] Claude Code event: {ts}"


def default_log_dir() -> Path:
    return Path.home() / ".claude"


def _append(log_file: Path, text: str) -> None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    with open(log_file, "a", encoding="utf-8") as f:
        f.write(text)


def log_session_event(
    event: str,
    log_file: Optional[Path] = None,
    now: Optional[datetime] = None
) -> str:
    """
    Append a session lifecycle line to ~/.claude/session.log.

    Args:
        event: "start", "end" or "stop"; anything else logs a generic event
        log_file: Log file override
        now: Timestamp override

    Returns:
        The line written
    """
    log_file = log_file or default_log_dir() / "session.log"
    ts = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    line = SESSION_MESSAGES.get(event, DEFAULT_SESSION_MESSAGE).format(ts=ts)
    _append(log_file, line + "\n")
    return line


def log_subagent_event(
    action: str,
    subagent_type: str = "unknown",
    session_id: str = "unknown",
    log_file: Optional[Path] = None,
    now: Optional[datetime] = None
) -> str:
    """Append a subagent start/stop line to ~/.claude/logs/subagents.log."""
    log_file = log_file or default_log_dir() / "logs" / "subagents.log"
    ts = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    line = f"[{ts}] Session {session_id}: Subagent {action} - {subagent_type}"
    _append(log_file, line + "\n")
    return line


def log_tool_failure(
    tool_name: str = "unknown",
    session_id: str = "unknown",
    error: Optional[str] = None,
    log_file: Optional[Path] = None,
    now: Optional[datetime] = None
) -> str:
    """Append a tool failure record to ~/.claude/logs/tool-failures.log."""
    log_file = log_file or default_log_dir() / "logs" / "tool-failures.log"
    ts = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)

    lines = [
        f"=== Tool Failure at {ts} ===",
        f"Session: {session_id}",
        f"Tool: {tool_name}",
    ]
    if error:
        lines.append(f"Error: {error}")
    lines.append("---")

    record = "\n".join(lines) + "\n"
    _append(log_file, record)
    return record


def _owned_by_current_user(path: Path) -> bool:
    if not hasattr(os, "getuid"):
        return True
    return path.lstat().st_uid == os.getuid()


def cleanup_temp_files(
    tmp_dir: Path = Path("/tmp"),
    max_age_minutes: int = 60,
    now: Optional[datetime] = None,
    patterns: Iterable[str] = ("claude_*", "tmp.*")
) -> List[Path]:
    """
    Remove stale temporary files left behind by a session.

    Only top-level files and empty directories are removed; a non-empty
    directory is left in place. "tmp.*" entries must also be
    owned by the current user.

    Args:
        tmp_dir: Directory to clean
        max_age_minutes: Minimum age (by mtime) of removed entries
        now: Current time override
        patterns: Glob patterns of removable entries

    Returns:
        Paths that were removed
    """
    cutoff = (now or datetime.now()) - timedelta(minutes=max_age_minutes)
    removed: List[Path] = []

    for pattern in patterns:
        for path in sorted(tmp_dir.glob(pattern)):
            try:
                if datetime.fromtimestamp(path.lstat().st_mtime) >= cutoff:
                    continue
                if pattern != "claude_*" and not _owned_by_current_user(path):
                    continue
                if path.is_dir() and not path.is_symlink():
                    path.rmdir()
                else:
                    path.unlink()
                removed.append(path)
            except OSError as e:
                logger.debug("Could not remove %s: %s", path, e)

    return removed
