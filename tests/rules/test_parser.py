"""Tests for rule parsing and load-time validation."""

import re
from pathlib import Path

import pytest

from skill_activation.errors import (
    InvalidRulesFormatError,
    MissingRulesFileError,
    SchemaError,
    UnreadableRulesFileError,
)
from skill_activation.models import Enforcement, Priority
from skill_activation.rules.models import ContentPatternKind
from skill_activation.rules.parser import load_rules, parse_rules


def test_load_from_file(rules_file: Path) -> None:
    rule_set = load_rules(rules_file)

    assert rule_set.ids == [
        "backend-dev-guidelines",
        "database-verification",
        "frontend-dev-guidelines",
    ]
    backend = rule_set.get("backend-dev-guidelines")
    assert backend is not None
    assert backend.priority == Priority.HIGH
    assert backend.enforcement == Enforcement.SUGGEST
    assert backend.description == "Backend conventions"
    assert backend.prompt_triggers is not None
    assert backend.prompt_triggers.keywords == ("api", "endpoint")
    assert backend.file_triggers is not None
    assert [glob.source for glob in backend.file_triggers.path_patterns] == [
        "src/app/api/**/*.ts"
    ]


def test_defaults_for_optional_fields() -> None:
    rule_set = parse_rules({"skills": {"docs": {"promptTriggers": {"keywords": ["Docs"]}}}})
    rule = rule_set.get("docs")

    assert rule is not None
    assert rule.priority == Priority.MEDIUM
    assert rule.enforcement == Enforcement.SUGGEST
    assert rule.file_triggers is None
    assert rule.prompt_triggers is not None
    assert rule.prompt_triggers.keywords == ("docs",)
    assert rule.prompt_triggers.intent_patterns == ()


def test_intent_patterns_are_case_insensitive() -> None:
    rule_set = parse_rules(
        {"skills": {"x": {"promptTriggers": {"intentPatterns": ["Create.*API"]}}}}
    )
    rule = rule_set.get("x")
    assert rule is not None and rule.prompt_triggers is not None
    assert rule.prompt_triggers.intent_patterns[0].flags & re.IGNORECASE


def test_content_pattern_forms() -> None:
    rule_set = parse_rules(
        {
            "skills": {
                "x": {
                    "fileTriggers": {
                        "contentPatterns": [
                            "import .* from",
                            {"literal": "a.b("},
                            {"regex": "^def "},
                        ]
                    }
                }
            }
        }
    )
    rule = rule_set.get("x")
    assert rule is not None and rule.file_triggers is not None
    kinds = [item.kind for item in rule.file_triggers.content_patterns]
    assert kinds == [
        ContentPatternKind.REGEX,
        ContentPatternKind.LITERAL,
        ContentPatternKind.REGEX,
    ]


def test_unknown_fields_are_ignored() -> None:
    rule_set = parse_rules(
        {
            "version": "1.0",
            "notes": "anything",
            "skills": {
                "x": {"type": "domain", "promptTriggers": {"keywords": ["a"], "extra": 1}}
            },
        }
    )
    assert rule_set.ids == ["x"]


def test_empty_skills_mapping_is_valid() -> None:
    assert len(parse_rules({"skills": {}})) == 0


def test_missing_skills_key_is_rejected() -> None:
    with pytest.raises(SchemaError) as info:
        parse_rules({"version": "1.0"})
    assert info.value.rule_id is None


def test_rule_without_triggers_fails_whole_load() -> None:
    payload = {
        "skills": {
            "good": {"promptTriggers": {"keywords": ["api"]}},
            "bad": {"priority": "high"},
        }
    }
    with pytest.raises(SchemaError) as info:
        parse_rules(payload)

    assert info.value.rule_id == "bad"
    assert "promptTriggers" in info.value.field
    assert "'bad'" in str(info.value)


def test_rule_with_only_empty_triggers_is_rejected() -> None:
    with pytest.raises(SchemaError) as info:
        parse_rules({"skills": {"hollow": {"promptTriggers": {}, "fileTriggers": {"pathExclusions": ["a/**"]}}}})
    assert info.value.rule_id == "hollow"


def test_invalid_regex_names_rule_and_field() -> None:
    payload = {"skills": {"x": {"promptTriggers": {"intentPatterns": ["ok", "(unclosed"]}}}}
    with pytest.raises(SchemaError) as info:
        parse_rules(payload)

    assert info.value.rule_id == "x"
    assert info.value.field == "promptTriggers.intentPatterns[1]"


def test_invalid_glob_names_rule_and_field() -> None:
    payload = {"skills": {"x": {"fileTriggers": {"pathPatterns": ["src/[ab.ts"]}}}}
    with pytest.raises(SchemaError) as info:
        parse_rules(payload)

    assert info.value.rule_id == "x"
    assert info.value.field == "fileTriggers.pathPatterns[0]"


def test_invalid_content_regex_is_rejected() -> None:
    payload = {"skills": {"x": {"fileTriggers": {"contentPatterns": [{"regex": "*bad"}]}}}}
    with pytest.raises(SchemaError) as info:
        parse_rules(payload)
    assert info.value.field == "fileTriggers.contentPatterns[0]"


def test_invalid_priority_names_rule_and_field() -> None:
    payload = {"skills": {"x": {"priority": "urgent", "promptTriggers": {"keywords": ["a"]}}}}
    with pytest.raises(SchemaError) as info:
        parse_rules(payload)

    assert info.value.rule_id == "x"
    assert info.value.field == "priority"


def test_wrong_keyword_type_is_rejected() -> None:
    payload = {"skills": {"x": {"promptTriggers": {"keywords": ["a", 3]}}}}
    with pytest.raises(SchemaError) as info:
        parse_rules(payload)
    assert info.value.rule_id == "x"
    assert info.value.field == "promptTriggers.keywords[1]"


def test_blank_keyword_is_rejected() -> None:
    with pytest.raises(SchemaError):
        parse_rules({"skills": {"x": {"promptTriggers": {"keywords": ["   "]}}}})


def test_duplicate_rule_id_in_json_file(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(
        '{"skills": {"a": {"promptTriggers": {"keywords": ["x"]}},'
        ' "a": {"promptTriggers": {"keywords": ["y"]}}}}',
        encoding="utf-8",
    )
    with pytest.raises(SchemaError) as info:
        load_rules(path)
    assert info.value.rule_id == "a"


def test_load_yaml_file(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text(
        "skills:\n"
        "  testing:\n"
        "    priority: low\n"
        "    promptTriggers:\n"
        "      keywords:\n"
        "        - pytest\n",
        encoding="utf-8",
    )
    rule_set = load_rules(path)
    rule = rule_set.get("testing")
    assert rule is not None
    assert rule.priority == Priority.LOW


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(MissingRulesFileError):
        load_rules(tmp_path / "nope.json")


def test_malformed_json(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text("{bad json", encoding="utf-8")
    with pytest.raises(InvalidRulesFormatError):
        load_rules(path)


def test_duplicate_key_inside_rule_names_rule_and_field(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(
        '{"skills": {"real-rule": {"priority": "high", "priority": "low",'
        ' "promptTriggers": {"keywords": ["x"]}}}}',
        encoding="utf-8",
    )
    with pytest.raises(SchemaError) as info:
        load_rules(path)
    assert info.value.rule_id == "real-rule"
    assert info.value.field == "priority"
    assert info.value.detail == "duplicate key"


def test_duplicate_top_level_key_is_not_a_rule_id(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text('{"skills": {}, "skills": {}}', encoding="utf-8")
    with pytest.raises(SchemaError) as info:
        load_rules(path)
    assert info.value.rule_id is None
    assert info.value.field == "skills"


def test_duplicate_rule_id_in_yaml_file(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text(
        "skills:\n"
        "  a:\n"
        "    promptTriggers:\n"
        "      keywords: [x]\n"
        "  a:\n"
        "    promptTriggers:\n"
        "      keywords: [y]\n",
        encoding="utf-8",
    )
    with pytest.raises(SchemaError) as info:
        load_rules(path)
    assert info.value.rule_id == "a"
    assert info.value.detail == "duplicate rule id"


def test_duplicate_nested_key_in_yaml_file(tmp_path: Path) -> None:
    path = tmp_path / "rules.yml"
    path.write_text(
        "skills:\n"
        "  a:\n"
        "    fileTriggers:\n"
        "      pathPatterns: ['src/**']\n"
        "      pathPatterns: ['lib/**']\n",
        encoding="utf-8",
    )
    with pytest.raises(SchemaError) as info:
        load_rules(path)
    assert info.value.rule_id == "a"
    assert info.value.field == "fileTriggers.pathPatterns"


def test_yaml_anchors_are_not_duplicates(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text(
        "skills:\n"
        "  a: &base\n"
        "    promptTriggers:\n"
        "      keywords: [x]\n"
        "  b:\n"
        "    <<: *base\n"
        "    priority: high\n",
        encoding="utf-8",
    )
    rule_set = load_rules(path)
    assert rule_set.ids == ["a", "b"]


def test_empty_yaml_file_has_no_skills(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(SchemaError) as info:
        load_rules(path)
    assert info.value.rule_id is None


def test_unreadable_rules_path(tmp_path: Path) -> None:
    directory = tmp_path / "rules.json"
    directory.mkdir()
    with pytest.raises(UnreadableRulesFileError) as info:
        load_rules(directory)
    assert info.value.path == directory
    assert str(directory) in str(info.value)
