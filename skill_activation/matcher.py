"""Decide whether a single rule fires for a normalized event."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from skill_activation.models import NormalizedEvent, NormalizedFile, NormalizedPrompt
from skill_activation.rules.models import FileTrigger, PromptTrigger, Rule


logger = logging.getLogger(__name__)

# Failures a compiled pattern can still raise while being evaluated.
EVALUATION_ERRORS = (re.error, RecursionError, ValueError, TypeError)


@dataclass(frozen=True)
class MatchOutcome:
    matched: bool
    reasons: tuple[str, ...] = ()
    skipped: str | None = None


NO_MATCH = MatchOutcome(matched=False)


def match_rule(rule: Rule, event: NormalizedEvent) -> MatchOutcome:
    try:
        if isinstance(event, NormalizedPrompt):
            reasons = _prompt_reasons(rule, event)
        elif isinstance(event, NormalizedFile):
            reasons = _file_reasons(rule.file_triggers, event)
        else:
            return NO_MATCH
    except EVALUATION_ERRORS as exc:
        logger.debug("Rule %s failed to evaluate: %s", rule.id, exc)
        return MatchOutcome(matched=False, skipped=f"{type(exc).__name__}: {exc}")

    if not reasons:
        return NO_MATCH
    return MatchOutcome(matched=True, reasons=tuple(reasons))


def _prompt_reasons(rule: Rule, event: NormalizedPrompt) -> list[str]:
    reasons = match_prompt(rule.prompt_triggers, event)
    if event.path_hint and rule.file_triggers is not None:
        reasons.extend(match_paths(rule.file_triggers, event.path_hint))
    return reasons


def match_prompt(trigger: PromptTrigger | None, event: NormalizedPrompt) -> list[str]:
    if trigger is None:
        return []
    reasons: list[str] = []
    for keyword in trigger.keywords:
        if keyword in event.tokens or keyword in event.text:
            reasons.append(f"keyword:{keyword}")
    for pattern in trigger.intent_patterns:
        if pattern.search(event.text):
            reasons.append(f"intent:{pattern.pattern}")
    return reasons


def match_paths(trigger: FileTrigger, path: str) -> list[str]:
    if not path:
        return []
    for exclusion in trigger.path_exclusions:
        if exclusion.matches(path):
            return []
    return [f"path:{glob.source}" for glob in trigger.path_patterns if glob.matches(path)]


def _file_reasons(trigger: FileTrigger | None, event: NormalizedFile) -> list[str]:
    if trigger is None:
        return []
    reasons = match_paths(trigger, event.path)
    if event.content:
        reasons.extend(
            f"content:{pattern.source}"
            for pattern in trigger.content_patterns
            if pattern.found_in(event.content)
        )
    return reasons
