"""Translate assistant hook payloads into activation events."""

from dataclasses import dataclass
from typing import Any, Optional

from skill_activation.constants import POST_TOOL_USE_EVENT, PROMPT_SUBMIT_EVENT
from skill_activation.models import Event, FileEvent, PromptEvent
from skill_activation.utils import relativize_path


class HookPayloadError(ValueError):
    pass


@dataclass(frozen=True)
class HookRequest:
    event_name: str
    event: Event


def parse_hook_payload(payload: Any) -> Optional[HookRequest]:
    """Return None when the payload carries nothing to match against."""
    if not isinstance(payload, dict):
        raise HookPayloadError("hook payload must be a JSON object")

    cwd = payload.get("cwd") if isinstance(payload.get("cwd"), str) else None
    prompt = payload.get("prompt")
    if isinstance(prompt, str):
        return HookRequest(
            event_name=str(payload.get("hook_event_name") or PROMPT_SUBMIT_EVENT),
            event=PromptEvent(text=prompt),
        )

    tool_input = payload.get("tool_input")
    if not isinstance(tool_input, dict):
        return None
    file_path = tool_input.get("file_path") or tool_input.get("path")
    if not isinstance(file_path, str) or not file_path:
        return None

    content = tool_input.get("content")
    if not isinstance(content, str):
        content = tool_input.get("new_string")
    return HookRequest(
        event_name=str(payload.get("hook_event_name") or POST_TOOL_USE_EVENT),
        event=FileEvent(
            path=relativize_path(file_path, cwd),
            content=content if isinstance(content, str) else None,
        ),
    )
