from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from skill_activation.constants import DEFAULT_CONTENT_LIMIT
from skill_activation.errors import ActivationWarning


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class Enforcement(str, Enum):
    SUGGEST = "suggest"
    BLOCK = "block"


class OutputFormat(str, Enum):
    JSON = "json"
    TABLE = "table"


@dataclass(frozen=True)
class PromptEvent:
    text: str
    path_hint: Optional[str] = None


@dataclass(frozen=True)
class FileEvent:
    path: str
    content: Optional[str] = None


Event = Union[PromptEvent, FileEvent]


@dataclass(frozen=True)
class NormalizedPrompt:
    text: str
    tokens: frozenset[str]
    path_hint: Optional[str] = None


@dataclass(frozen=True)
class NormalizedFile:
    path: str
    content: Optional[str] = None


NormalizedEvent = Union[NormalizedPrompt, NormalizedFile]


@dataclass(frozen=True)
class Activation:
    rule_id: str
    priority: Priority
    enforcement: Enforcement
    reasons: tuple[str, ...] = ()
    matched: bool = True

    @property
    def sort_key(self) -> tuple[int, str]:
        return self.priority.rank, self.rule_id


@dataclass(frozen=True)
class ActivationResult:
    activations: tuple[Activation, ...] = ()
    truncated: bool = False
    warnings: tuple[ActivationWarning, ...] = ()

    @property
    def rule_ids(self) -> list[str]:
        return [item.rule_id for item in self.activations]

    def is_empty(self) -> bool:
        return not self.activations


@dataclass(frozen=True)
class EngineConfig:
    max_results: Optional[int] = None
    content_limit: int = DEFAULT_CONTENT_LIMIT
    verbose: bool = False
