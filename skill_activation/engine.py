import logging

from skill_activation.errors import (
    ActivationWarning,
    BudgetExceededWarning,
    MatchSkippedWarning,
)
from skill_activation.matcher import match_rule
from skill_activation.models import (
    Activation,
    ActivationResult,
    EngineConfig,
    Enforcement,
    Event,
)
from skill_activation.normalizer import normalize
from skill_activation.rules.models import RuleSet


logger = logging.getLogger(__name__)


class ActivationEngine:
    """Stateless matcher of one event against a rule set snapshot."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def activate(self, rule_set: RuleSet, event: Event) -> ActivationResult:
        normalized = normalize(event, content_limit=self.config.content_limit)

        matched: list[Activation] = []
        warnings: list[ActivationWarning] = []
        for rule in rule_set:
            outcome = match_rule(rule, normalized)
            if outcome.skipped is not None:
                warning = MatchSkippedWarning(rule_id=rule.id, detail=outcome.skipped)
                logger.warning("Match skipped: %s", warning.describe())
                warnings.append(warning)
                continue
            if outcome.matched:
                matched.append(
                    Activation(
                        rule_id=rule.id,
                        priority=rule.priority,
                        enforcement=rule.enforcement,
                        reasons=outcome.reasons,
                    )
                )

        ranked = sorted(matched, key=lambda item: item.sort_key)
        limit = self.config.max_results
        kept, dropped = apply_budget(ranked, limit)
        truncated = False
        if limit is not None and len(ranked) > limit:
            truncated = True
            warning = BudgetExceededWarning(
                limit=limit,
                matched=len(ranked),
                dropped=tuple(item.rule_id for item in dropped),
            )
            logger.warning("Activation budget exceeded: %s", warning.describe())
            warnings.append(warning)

        return ActivationResult(
            activations=tuple(kept),
            truncated=truncated,
            warnings=tuple(warnings),
        )


def apply_budget(
    ranked: list[Activation], max_results: int | None
) -> tuple[list[Activation], list[Activation]]:
    """Keep every block rule, then fill remaining slots with suggest rules in rank order."""
    if max_results is None or len(ranked) <= max_results:
        return list(ranked), []

    blocking = [item for item in ranked if item.enforcement == Enforcement.BLOCK]
    suggest = [item for item in ranked if item.enforcement != Enforcement.BLOCK]
    slots = max(max_results - len(blocking), 0)
    kept_ids = {item.rule_id for item in blocking + suggest[:slots]}

    kept = [item for item in ranked if item.rule_id in kept_ids]
    dropped = [item for item in ranked if item.rule_id not in kept_ids]
    return kept, dropped
