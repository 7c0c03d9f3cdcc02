from pathlib import Path

from rich.console import Console

from skill_activation.models import ActivationResult
from skill_activation.rules.models import RuleSet
from skill_activation.tui.enums import UIStyle
from skill_activation.tui.sections import UISection
from skill_activation.tui.tables import ActivationTable, RulesTable
from skill_activation.utils import compact_home_path


class ActivationConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_result(
        self, result: ActivationResult, event: str, verbose: bool = False
    ) -> None:
        self.console.print(
            UISection.wrap(
                "activation",
                ActivationTable.summary_block(result, event=event),
                style=UIStyle.BLUE.value,
            )
        )

        if result.activations:
            self.console.print(
                UISection.wrap(
                    "skills",
                    ActivationTable.activations_table(
                        result.activations, verbose=verbose
                    ),
                    style=UIStyle.CYAN.value,
                )
            )
        else:
            self.console.print(
                UISection.note("skills", "No skills activated.", style=UIStyle.DIM.value)
            )

        if result.warnings and verbose:
            self.console.print(
                UISection.bullets(
                    "warnings",
                    [warning.describe() for warning in result.warnings],
                    style=UIStyle.YELLOW.value,
                )
            )

    def render_rules(self, rule_set: RuleSet, source: Path) -> None:
        if not len(rule_set):
            self.console.print(
                UISection.note(
                    "rules",
                    f"No rules defined in {compact_home_path(source)}.",
                    style=UIStyle.YELLOW.value,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "rules",
                RulesTable.rules_table(rule_set),
                style=UIStyle.BLUE.value,
                subtitle=compact_home_path(source),
            )
        )

    def render_validation(self, rule_set: RuleSet, source: Path) -> None:
        self.console.print(
            UISection.note(
                "rules",
                f"Valid: [bold]{len(rule_set)}[/bold] rules in {compact_home_path(source)}",
                style=UIStyle.GREEN.value,
            )
        )
