"""PreToolUse and UserPromptSubmit guards."""
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple
import json
import re

ALLOW_EXIT_CODE = 0
DENY_EXIT_CODE = 2

DANGEROUS_COMMANDS: List[Tuple[str, str]] = [
    (r'rm\s+(-rf|--recursive)\s+/($|[^a-zA-Z])',
     "Dangerous recursive delete at root directory blocked for safety"),
    (r'chmod\s+(777|a\+rwx)',
     "Dangerous permission change (777/a+rwx) blocked for security"),
    (r'(curl|wget).*\|.*sh',
     "Remote script execution via pipe blocked for security"),
]

SENSITIVE_EXTENSIONS = re.compile(r'\.(env|pem|key|p12|pfx)$')
SENSITIVE_DIRECTORIES = re.compile(r'(secrets|credentials|passwords|private)[/\\]', re.IGNORECASE)

DANGEROUS_PROMPT = re.compile(
    r'(delete|remove|drop)\s+(all|entire|whole|database|table|production)',
    re.IGNORECASE,
)
DANGEROUS_PROMPT_WARNING = (
    "Warning: Dangerous operation request detected. "
    "Proceed with caution and verify the scope of changes."
)


@dataclass
class HookResponse:
    """Decision printed by a hook as JSON on stdout."""

    decision: Literal["allow", "deny"] = "allow"
    reason: Optional[str] = None
    message: Optional[str] = None
    system_message: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return DENY_EXIT_CODE if self.decision == "deny" else ALLOW_EXIT_CODE

    def to_dict(self) -> Dict[str, Any]:
        output: Dict[str, Any] = {"permissionDecision": self.decision}
        if self.reason:
            output["permissionDecisionReason"] = self.reason
        if self.message:
            output["message"] = self.message

        data: Dict[str, Any] = {"hookSpecificOutput": output}
        if self.system_message:
            data["systemMessage"] = self.system_message
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def check_command(command: str) -> HookResponse:
    """Deny shell commands matching a dangerous pattern."""
    for pattern, reason in DANGEROUS_COMMANDS:
        if re.search(pattern, command):
            return HookResponse(decision="deny", reason=reason)
    return HookResponse()


def check_file_path(file_path: str) -> HookResponse:
    """Deny access to secrets by extension or parent directory name."""
    if not file_path:
        return HookResponse()

    if SENSITIVE_EXTENSIONS.search(file_path):
        return HookResponse(
            decision="deny",
            reason=f"Access to sensitive file blocked: {file_path} (protected extension)"
        )

    if SENSITIVE_DIRECTORIES.search(file_path):
        return HookResponse(
            decision="deny",
            reason=f"Access to sensitive directory blocked: {file_path} (protected path)"
        )

    return HookResponse()


def check_prompt(prompt: str) -> HookResponse:
    """Allow every prompt, attaching a warning to destructive requests."""
    if prompt and DANGEROUS_PROMPT.search(prompt):
        return HookResponse(system_message=DANGEROUS_PROMPT_WARNING)
    return HookResponse()
