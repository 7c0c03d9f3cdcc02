import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from skill_activation.config import ConfigRepository
from skill_activation.engine import ActivationEngine
from skill_activation.errors import SkillActivationError
from skill_activation.hook import parse_hook_payload
from skill_activation.models import (
    ActivationResult,
    EngineConfig,
    Event,
    FileEvent,
    OutputFormat,
    PromptEvent,
)
from skill_activation.reporter import format_hook_output, format_result
from skill_activation.rules.models import RuleSet
from skill_activation.rules.store import RuleStore
from skill_activation.tui import ActivationConsoleUI
from skill_activation.utils import relativize_path


logger = logging.getLogger("skill_activation.cli")

FORMAT_VALUES = [item.value for item in OutputFormat]


class RuleLoadException(click.ClickException):
    """Rule file could not be loaded; reported as a plain failure."""

    exit_code = 1


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("skill_activation")
    package_logger.handlers.clear()
    package_logger.addHandler(
        RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    )
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _config_repo(_obj: Dict[str, Any]) -> ConfigRepository:
    return ConfigRepository()


def _engine_config(obj: Dict[str, Any]) -> EngineConfig:
    try:
        return _config_repo(obj).load_engine_config(
            max_results=obj.get("max_results"),
            content_limit=obj.get("content_limit"),
            verbose=obj.get("verbose"),
        )
    except SkillActivationError as exc:
        raise RuleLoadException(str(exc))


def _load_rule_set(obj: Dict[str, Any]) -> tuple[RuleSet, Path]:
    try:
        rules_path = _config_repo(obj).resolve_rules_path(obj.get("rules_path"))
        return RuleStore().load(rules_path), rules_path
    except SkillActivationError as exc:
        raise RuleLoadException(str(exc))


def _emit(
    obj: Dict[str, Any], config: EngineConfig, result: ActivationResult, event: str
) -> None:
    if obj.get("output_format") == OutputFormat.TABLE.value:
        ActivationConsoleUI(Console()).render_result(
            result, event=event, verbose=config.verbose
        )
        return
    click.echo(json.dumps(format_result(result, verbose=config.verbose)))


def _run(obj: Dict[str, Any], event: Event, label: str) -> None:
    config = _engine_config(obj)
    rule_set, _ = _load_rule_set(obj)
    result = ActivationEngine(config).activate(rule_set, event)
    _emit(obj, config, result, event=label)


def _read_stdin() -> str:
    with click.open_file("-") as stream:
        return stream.read()


def _read_bounded(path: Path, limit: int) -> Optional[str]:
    try:
        with path.open("r", encoding="utf-8", errors="replace") as handle:
            return handle.read(limit)
    except OSError as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return None


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--rules",
    "rules_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Rule file (JSON or YAML).",
)
@click.option("--max-results", type=click.IntRange(min=1), default=None)
@click.option("--content-limit", type=click.IntRange(min=1), default=None)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(FORMAT_VALUES, case_sensitive=False),
    default=OutputFormat.JSON.value,
)
@click.option("-v", "--verbose", is_flag=True, default=False)
@click.pass_context
def cli(
    ctx: click.Context,
    rules_path: Optional[Path],
    max_results: Optional[int],
    content_limit: Optional[int],
    output_format: str,
    verbose: bool,
) -> None:
    """Decide which skills apply to a prompt or an edited file."""
    _configure_logging(verbose)
    ctx.obj = {
        "rules_path": rules_path,
        "max_results": max_results,
        "content_limit": content_limit,
        "output_format": output_format.lower(),
        "verbose": verbose,
    }


@cli.command(help="Match a prompt against the rules (reads stdin when TEXT is omitted).")
@click.argument("text", required=False)
@click.option(
    "--file-hint",
    type=str,
    default=None,
    help="Path of the file currently in focus, checked against path patterns.",
)
@click.pass_obj
def prompt(obj: Dict[str, Any], text: Optional[str], file_hint: Optional[str]) -> None:
    if text is None:
        text = _read_stdin().strip()
    hint = relativize_path(file_hint, Path.cwd()) if file_hint else None
    _run(obj, PromptEvent(text=text, path_hint=hint), label="prompt")


@cli.command("file", help="Match an edited file path (and optional content) against the rules.")
@click.argument("path", type=str)
@click.option(
    "--content-file",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    help="Read content for content patterns from this file.",
)
@click.option(
    "--read-content",
    is_flag=True,
    default=False,
    help="Read content for content patterns from PATH itself.",
)
@click.option(
    "--root",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Repository root used to relativize absolute paths (default: cwd).",
)
@click.pass_obj
def file_command(
    obj: Dict[str, Any],
    path: str,
    content_file: Optional[Path],
    read_content: bool,
    root: Optional[Path],
) -> None:
    config = _engine_config(obj)
    content: Optional[str] = None
    if content_file is not None:
        content = _read_bounded(content_file, config.content_limit)
    elif read_content:
        content = _read_bounded(Path(path), config.content_limit)

    relative = relativize_path(path, root or Path.cwd())
    rule_set, _ = _load_rule_set(obj)
    result = ActivationEngine(config).activate(
        rule_set, FileEvent(path=relative, content=content)
    )
    _emit(obj, config, result, event=f"file:{relative}")


@cli.command(help="Read an assistant hook payload on stdin and print hook JSON.")
@click.pass_obj
def hook(obj: Dict[str, Any]) -> None:
    raw = _read_stdin()
    try:
        request = parse_hook_payload(json.loads(raw) if raw.strip() else {})
    except ValueError as exc:
        logger.warning("Ignoring hook payload: %s", exc)
        request = None

    if request is None:
        click.echo(json.dumps({}))
        return

    config = _engine_config(obj)
    rule_set, _ = _load_rule_set(obj)
    result = ActivationEngine(config).activate(rule_set, request.event)
    click.echo(json.dumps(format_hook_output(result, request.event_name)))


@cli.group(help="Inspect activation rules.")
def rules() -> None:
    pass


@rules.command("validate", help="Load the rule file and report schema errors.")
@click.pass_obj
def rules_validate(obj: Dict[str, Any]) -> None:
    rule_set, source = _load_rule_set(obj)
    ActivationConsoleUI(Console()).render_validation(rule_set, source)


@rules.command("list", help="List loaded rules.")
@click.pass_obj
def rules_list(obj: Dict[str, Any]) -> None:
    rule_set, source = _load_rule_set(obj)
    ActivationConsoleUI(Console()).render_rules(rule_set, source)


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except RuleLoadException as exc:
        exc.show()
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
