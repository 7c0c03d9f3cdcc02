"""Machine-consumable payloads for activation results."""

from typing import Any

from skill_activation.models import ActivationResult, Enforcement


def format_result(result: ActivationResult, verbose: bool = False) -> dict[str, Any]:
    activated: list[dict[str, Any]] = []
    for activation in result.activations:
        item: dict[str, Any] = {
            "id": activation.rule_id,
            "priority": activation.priority.value,
        }
        if verbose:
            item["enforcement"] = activation.enforcement.value
            item["reasons"] = list(activation.reasons)
        activated.append(item)

    payload: dict[str, Any] = {"activated": activated, "truncated": result.truncated}
    if verbose:
        payload["warnings"] = [warning.describe() for warning in result.warnings]
    return payload


def format_context(result: ActivationResult) -> str:
    if result.is_empty():
        return ""
    lines = ["SKILL ACTIVATION", "", "The following skills apply to this task:"]
    for activation in result.activations:
        marker = " (required)" if activation.enforcement == Enforcement.BLOCK else ""
        lines.append(f"- {activation.rule_id} [{activation.priority.value}]{marker}")
    if result.truncated:
        lines.append("")
        lines.append("Skill limit exceeded; some suggestions may be omitted.")
    return "\n".join(lines)


def format_hook_output(result: ActivationResult, event_name: str) -> dict[str, Any]:
    """Wrap a result for an assistant hook; no activations yield an empty object."""
    context = format_context(result)
    if not context:
        return {}
    return {
        "hookSpecificOutput": {
            "hookEventName": event_name,
            "additionalContext": context,
        }
    }
