"""In-memory holder for the active rule set snapshot."""

from __future__ import annotations

import logging
import threading
from enum import Enum

from skill_activation.errors import RulesNotLoadedError, SkillActivationError
from skill_activation.rules.models import RuleSet
from skill_activation.rules.parser import RuleSource, load_rules


logger = logging.getLogger(__name__)


class StoreState(str, Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"


class RuleStore:
    """
    Owns the active RuleSet for the process lifetime.

    A new set is fully parsed and compiled before it replaces the current one,
    so callers holding the previous snapshot keep matching against it and a
    rejected reload leaves the store untouched.

    Usage:
        >>> store = RuleStore()
        >>> store.load(Path("skill-rules.json"))
        >>> engine.activate(store.snapshot, PromptEvent("add an api route"))
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot: RuleSet | None = None

    @property
    def state(self) -> StoreState:
        return StoreState.UNLOADED if self._snapshot is None else StoreState.LOADED

    @property
    def snapshot(self) -> RuleSet:
        snapshot = self._snapshot
        if snapshot is None:
            raise RulesNotLoadedError()
        return snapshot

    def load(self, source: RuleSource) -> RuleSet:
        return self._install(source, action="load")

    def reload(self, source: RuleSource) -> RuleSet:
        return self._install(source, action="reload")

    def _install(self, source: RuleSource, action: str) -> RuleSet:
        try:
            rule_set = load_rules(source)
        except SkillActivationError as exc:
            logger.error("Rule %s rejected: %s", action, exc)
            raise
        with self._lock:
            self._snapshot = rule_set
        logger.debug("Rule %s installed %d rules", action, len(rule_set))
        return rule_set
