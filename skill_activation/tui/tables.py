from rich.table import Column, Table

from skill_activation.models import Activation, ActivationResult, Enforcement, Priority
from skill_activation.rules.models import Rule, RuleSet
from skill_activation.tui.enums import ENFORCEMENT_STYLE, PRIORITY_STYLE, UIStyle


def _styled(value: str, style: str) -> str:
    return f"[{style}]{value}[/{style}]"


def _priority_text(priority: Priority) -> str:
    return _styled(priority.value, PRIORITY_STYLE.get(priority, UIStyle.WHITE.value))


def _enforcement_text(enforcement: Enforcement) -> str:
    return _styled(
        enforcement.value, ENFORCEMENT_STYLE.get(enforcement, UIStyle.WHITE.value)
    )


class ActivationTable:
    @staticmethod
    def summary_block(result: ActivationResult, event: str) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Event", event)
        table.add_row("Activated", str(len(result.activations)))
        table.add_row("Truncated", "yes" if result.truncated else "no")
        return table

    @staticmethod
    def activations_table(activations: tuple[Activation, ...], verbose: bool = False) -> Table:
        columns = [
            Column(header="Skill", no_wrap=True),
            Column(header="Priority", width=8),
            Column(header="Enforcement", width=11),
        ]
        if verbose:
            columns.append(Column(header="Reasons", overflow="fold"))
        table = Table(*columns, expand=True, header_style="bold")

        for activation in activations:
            row = [
                activation.rule_id,
                _priority_text(activation.priority),
                _enforcement_text(activation.enforcement),
            ]
            if verbose:
                row.append("\n".join(activation.reasons))
            table.add_row(*row)
        return table


class RulesTable:
    @staticmethod
    def _triggers(rule: Rule) -> str:
        parts: list[str] = []
        if rule.prompt_triggers is not None:
            trigger = rule.prompt_triggers
            if trigger.keywords:
                parts.append(f"keywords={len(trigger.keywords)}")
            if trigger.intent_patterns:
                parts.append(f"intents={len(trigger.intent_patterns)}")
        if rule.file_triggers is not None:
            trigger = rule.file_triggers
            if trigger.path_patterns:
                parts.append(f"paths={len(trigger.path_patterns)}")
            if trigger.content_patterns:
                parts.append(f"content={len(trigger.content_patterns)}")
        return "  ".join(parts)

    @staticmethod
    def rules_table(rule_set: RuleSet) -> Table:
        table = Table(
            Column(header="Skill", no_wrap=True),
            Column(header="Priority", width=8),
            Column(header="Enforcement", width=11),
            Column(header="Triggers", overflow="ellipsis"),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for rule in rule_set:
            table.add_row(
                rule.id,
                _priority_text(rule.priority),
                _enforcement_text(rule.enforcement),
                RulesTable._triggers(rule),
                rule.description,
            )
        return table
