"""Activation rule data models."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping

from skill_activation.models import Enforcement, Priority
from skill_activation.rules.globs import PathGlob


class ContentPatternKind(str, Enum):
    LITERAL = "literal"
    REGEX = "regex"


@dataclass(frozen=True)
class ContentPattern:
    kind: ContentPatternKind
    source: str
    regex: re.Pattern[str] | None = None

    def __post_init__(self) -> None:
        if self.kind == ContentPatternKind.REGEX and self.regex is None:
            raise ValueError(f"regex content pattern {self.source!r} is not compiled")

    def found_in(self, content: str) -> bool:
        if self.regex is None:
            return self.source in content
        return self.regex.search(content) is not None


@dataclass(frozen=True)
class PromptTrigger:
    keywords: tuple[str, ...] = ()
    intent_patterns: tuple[re.Pattern[str], ...] = ()

    def is_empty(self) -> bool:
        return not self.keywords and not self.intent_patterns


@dataclass(frozen=True)
class FileTrigger:
    path_patterns: tuple[PathGlob, ...] = ()
    path_exclusions: tuple[PathGlob, ...] = ()
    content_patterns: tuple[ContentPattern, ...] = ()

    def is_empty(self) -> bool:
        return not self.path_patterns and not self.content_patterns


@dataclass(frozen=True)
class Rule:
    id: str
    priority: Priority = Priority.MEDIUM
    enforcement: Enforcement = Enforcement.SUGGEST
    prompt_triggers: PromptTrigger | None = None
    file_triggers: FileTrigger | None = None
    description: str = ""


@dataclass(frozen=True)
class RuleSet:
    """Immutable snapshot of loaded rules, iterated in id order."""

    rules: Mapping[str, Rule] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ordered = {key: self.rules[key] for key in sorted(self.rules)}
        object.__setattr__(self, "rules", MappingProxyType(ordered))

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules.values())

    def __len__(self) -> int:
        return len(self.rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self.rules

    def get(self, rule_id: str) -> Rule | None:
        return self.rules.get(rule_id)

    @property
    def ids(self) -> list[str]:
        return list(self.rules)
