"""Lifecycle hooks invoked by the assistant runtime through settings.json."""
from claude_config.hooks.guards import (
    HookResponse,
    check_command,
    check_file_path,
    check_prompt,
)
from claude_config.hooks.loggers import (
    cleanup_temp_files,
    log_session_event,
    log_subagent_event,
    log_tool_failure,
)
from claude_config.hooks.preflight import github_preflight

__all__ = [
    "HookResponse",
    "check_command",
    "check_file_path",
    "check_prompt",
    "cleanup_temp_files",
    "github_preflight",
    "log_session_event",
    "log_subagent_event",
    "log_tool_failure",
]
