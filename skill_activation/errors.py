from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


class SkillActivationError(Exception):
    """Base user-facing application error."""


class RulesFileError(SkillActivationError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingRulesFileError(RulesFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing rules file")


class InvalidRulesFormatError(RulesFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid rules format ({detail})")


class UnreadableRulesFileError(RulesFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Cannot read rules file ({detail})")


class ConfigError(RulesFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config ({detail})")


class SchemaError(SkillActivationError):
    """A rule definition is structurally invalid; the whole load is rejected."""

    def __init__(self, rule_id: str | None, field: str, detail: str) -> None:
        self.rule_id = rule_id
        self.field = field
        self.detail = detail
        if rule_id is None:
            message = f"Invalid rule set at {field or '<root>'}: {detail}"
        else:
            message = f"Invalid rule '{rule_id}' at {field or '<rule>'}: {detail}"
        super().__init__(message)


class RulesNotLoadedError(SkillActivationError):
    def __init__(self) -> None:
        super().__init__("No rule set loaded")


@dataclass(frozen=True)
class ActivationWarning(ABC):
    """Non-fatal diagnostic attached to an activation result."""

    @abstractmethod
    def describe(self) -> str:
        ...


@dataclass(frozen=True)
class MatchSkippedWarning(ActivationWarning):
    rule_id: str
    detail: str

    def describe(self) -> str:
        return f"rule '{self.rule_id}' skipped: {self.detail}"


@dataclass(frozen=True)
class BudgetExceededWarning(ActivationWarning):
    limit: int
    matched: int
    dropped: tuple[str, ...]

    def describe(self) -> str:
        return (
            f"{self.matched} rules matched, limit is {self.limit}; "
            f"dropped: {', '.join(self.dropped) or 'none'}"
        )
