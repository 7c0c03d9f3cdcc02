"""Parse rule definitions into compiled, immutable rule sets."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from skill_activation.constants import YAML_SUFFIXES
from skill_activation.errors import (
    InvalidRulesFormatError,
    MissingRulesFileError,
    SchemaError,
    UnreadableRulesFileError,
)
from skill_activation.models import Enforcement, Priority
from skill_activation.rules.globs import GlobError, PathGlob, compile_glob
from skill_activation.rules.models import (
    ContentPattern,
    ContentPatternKind,
    FileTrigger,
    PromptTrigger,
    Rule,
    RuleSet,
)
from skill_activation.rules.schema import rule_error_at, validate_rules_document
from skill_activation.utils import DuplicateKeyError, KeyPath, read_json

RuleSource = Union[Path, Mapping[str, Any]]

_YAML_MERGE_TAG = "tag:yaml.org,2002:merge"


def read_rules_file(path: Path) -> Any:
    if not path.exists():
        raise MissingRulesFileError(path)
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return _load_yaml(path.read_text(encoding="utf-8"))
        return read_json(path)
    except DuplicateKeyError as exc:
        if exc.path == ("skills",):
            raise SchemaError(exc.key, "", "duplicate rule id") from exc
        raise rule_error_at(exc.path + (exc.key,), "duplicate key") from exc
    except (ValueError, yaml.YAMLError) as exc:
        raise InvalidRulesFormatError(path, str(exc)) from exc
    except OSError as exc:
        raise UnreadableRulesFileError(path, exc.strerror or str(exc)) from exc


def _load_yaml(text: str) -> Any:
    loader = yaml.SafeLoader(text)
    try:
        node = loader.get_single_node()
        if node is None:
            return {}
        _check_yaml_keys(node, (), set())
        return loader.construct_document(node) or {}
    finally:
        loader.dispose()


def _check_yaml_keys(node: yaml.Node, path: KeyPath, visited: set[int]) -> None:
    """Raise DuplicateKeyError for the first mapping that repeats a key."""
    if id(node) in visited:
        return
    visited.add(id(node))
    if isinstance(node, yaml.MappingNode):
        seen: set[str] = set()
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode) or key_node.tag == _YAML_MERGE_TAG:
                _check_yaml_keys(value_node, path, visited)
                continue
            if key_node.value in seen:
                raise DuplicateKeyError(key_node.value, path)
            seen.add(key_node.value)
            _check_yaml_keys(value_node, path + (key_node.value,), visited)
    elif isinstance(node, yaml.SequenceNode):
        for index, item in enumerate(node.value):
            _check_yaml_keys(item, path + (index,), visited)


def load_rules(source: RuleSource) -> RuleSet:
    payload = read_rules_file(source) if isinstance(source, Path) else source
    return parse_rules(payload)


def parse_rules(payload: Any) -> RuleSet:
    validate_rules_document(payload)
    return RuleSet(
        {
            str(rule_id): parse_rule(str(rule_id), raw)
            for rule_id, raw in payload["skills"].items()
        }
    )


def parse_rule(rule_id: str, raw: Mapping[str, Any]) -> Rule:
    prompt_raw = raw.get("promptTriggers")
    file_raw = raw.get("fileTriggers")

    prompt_triggers = (
        _parse_prompt_trigger(rule_id, prompt_raw) if prompt_raw is not None else None
    )
    file_triggers = (
        _parse_file_trigger(rule_id, file_raw) if file_raw is not None else None
    )

    has_prompt = prompt_triggers is not None and not prompt_triggers.is_empty()
    has_file = file_triggers is not None and not file_triggers.is_empty()
    if not has_prompt and not has_file:
        raise SchemaError(
            rule_id,
            "promptTriggers|fileTriggers",
            "rule defines no trigger patterns",
        )

    return Rule(
        id=rule_id,
        priority=Priority(raw.get("priority", Priority.MEDIUM.value)),
        enforcement=Enforcement(raw.get("enforcement", Enforcement.SUGGEST.value)),
        prompt_triggers=prompt_triggers,
        file_triggers=file_triggers,
        description=str(raw.get("description", "")),
    )


def _parse_prompt_trigger(rule_id: str, raw: Mapping[str, Any]) -> PromptTrigger:
    keywords = tuple(
        dict.fromkeys(keyword.strip().lower() for keyword in raw.get("keywords", []))
    )
    if "" in keywords:
        raise SchemaError(rule_id, "promptTriggers.keywords", "blank keyword")

    intent_patterns = tuple(
        _compile_regex(
            rule_id, f"promptTriggers.intentPatterns[{index}]", pattern, re.IGNORECASE
        )
        for index, pattern in enumerate(raw.get("intentPatterns", []))
    )
    return PromptTrigger(keywords=keywords, intent_patterns=intent_patterns)


def _parse_file_trigger(rule_id: str, raw: Mapping[str, Any]) -> FileTrigger:
    path_patterns = tuple(
        _compile_glob(rule_id, f"fileTriggers.pathPatterns[{index}]", pattern)
        for index, pattern in enumerate(raw.get("pathPatterns", []))
    )
    path_exclusions = tuple(
        _compile_glob(rule_id, f"fileTriggers.pathExclusions[{index}]", pattern)
        for index, pattern in enumerate(raw.get("pathExclusions", []))
    )
    content_patterns = tuple(
        _parse_content_pattern(rule_id, f"fileTriggers.contentPatterns[{index}]", item)
        for index, item in enumerate(raw.get("contentPatterns", []))
    )
    return FileTrigger(
        path_patterns=path_patterns,
        path_exclusions=path_exclusions,
        content_patterns=content_patterns,
    )


def _parse_content_pattern(rule_id: str, field: str, raw: Any) -> ContentPattern:
    if isinstance(raw, Mapping) and "literal" in raw:
        return ContentPattern(kind=ContentPatternKind.LITERAL, source=raw["literal"])
    source = raw["regex"] if isinstance(raw, Mapping) else raw
    return ContentPattern(
        kind=ContentPatternKind.REGEX,
        source=source,
        regex=_compile_regex(rule_id, field, source),
    )


def _compile_regex(
    rule_id: str, field: str, pattern: str, flags: int = 0
) -> re.Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise SchemaError(rule_id, field, f"invalid regex {pattern!r} ({exc})") from exc


def _compile_glob(rule_id: str, field: str, pattern: str) -> PathGlob:
    try:
        return compile_glob(pattern)
    except GlobError as exc:
        raise SchemaError(rule_id, field, f"invalid glob {pattern!r} ({exc})") from exc
