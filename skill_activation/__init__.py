from skill_activation.engine import ActivationEngine
from skill_activation.errors import (
    BudgetExceededWarning,
    MatchSkippedWarning,
    SchemaError,
    SkillActivationError,
)
from skill_activation.models import (
    Activation,
    ActivationResult,
    EngineConfig,
    Enforcement,
    FileEvent,
    Priority,
    PromptEvent,
)
from skill_activation.reporter import format_result
from skill_activation.rules import RuleSet, RuleStore, load_rules

__all__ = [
    "Activation",
    "ActivationEngine",
    "ActivationResult",
    "BudgetExceededWarning",
    "EngineConfig",
    "Enforcement",
    "FileEvent",
    "MatchSkippedWarning",
    "Priority",
    "PromptEvent",
    "RuleSet",
    "RuleStore",
    "SchemaError",
    "SkillActivationError",
    "format_result",
    "load_rules",
]
