from skill_activation.rules.models import (
    ContentPattern,
    ContentPatternKind,
    FileTrigger,
    PromptTrigger,
    Rule,
    RuleSet,
)
from skill_activation.rules.parser import load_rules, parse_rules
from skill_activation.rules.store import RuleStore, StoreState

__all__ = [
    "ContentPattern",
    "ContentPatternKind",
    "FileTrigger",
    "PromptTrigger",
    "Rule",
    "RuleSet",
    "RuleStore",
    "StoreState",
    "load_rules",
    "parse_rules",
]
