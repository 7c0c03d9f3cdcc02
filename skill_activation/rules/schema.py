from typing import Any, Sequence

from jsonschema import Draft202012Validator

from skill_activation.errors import SchemaError

_STRING_LIST = {
    "type": "array",
    "items": {"type": "string", "minLength": 1},
}

_CONTENT_PATTERN = {
    "oneOf": [
        {"type": "string", "minLength": 1},
        {
            "type": "object",
            "properties": {"literal": {"type": "string", "minLength": 1}},
            "required": ["literal"],
            "additionalProperties": False,
        },
        {
            "type": "object",
            "properties": {"regex": {"type": "string", "minLength": 1}},
            "required": ["regex"],
            "additionalProperties": False,
        },
    ]
}

RULE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "priority": {"enum": ["high", "medium", "low"]},
        "enforcement": {"enum": ["suggest", "block"]},
        "description": {"type": "string"},
        "promptTriggers": {
            "type": "object",
            "properties": {
                "keywords": _STRING_LIST,
                "intentPatterns": _STRING_LIST,
            },
        },
        "fileTriggers": {
            "type": "object",
            "properties": {
                "pathPatterns": _STRING_LIST,
                "pathExclusions": _STRING_LIST,
                "contentPatterns": {"type": "array", "items": _CONTENT_PATTERN},
            },
        },
    },
}

RULES_DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "skills": {
            "type": "object",
            "propertyNames": {"minLength": 1},
            "additionalProperties": RULE_SCHEMA,
        }
    },
    "required": ["skills"],
}

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "rulesPath": {"type": "string", "minLength": 1},
        "maxResults": {"type": ["integer", "null"], "minimum": 1},
        "contentLimit": {"type": "integer", "minimum": 1},
        "verbose": {"type": "boolean"},
    },
}

_RULES_VALIDATOR = Draft202012Validator(RULES_DOCUMENT_SCHEMA)


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


def format_field(parts: list[Any]) -> str:
    text = ""
    for part in parts:
        if isinstance(part, int):
            text += f"[{part}]"
        else:
            text += f".{part}" if text else str(part)
    return text


def validate_rules_document(payload: Any) -> None:
    error = next(iter(_RULES_VALIDATOR.iter_errors(payload)), None)
    if error is None:
        return

    path = list(error.absolute_path)
    raise rule_error_at(path, _short_message(error))


def rule_error_at(path: Sequence[Any], detail: str) -> SchemaError:
    """Attribute an error at a document path to the rule that contains it."""
    if len(path) >= 2 and path[0] == "skills":
        return SchemaError(str(path[1]), format_field(list(path[2:])), detail)
    return SchemaError(None, format_field(list(path)), detail)


def _short_message(error: Any) -> str:
    if error.validator == "oneOf":
        return "expected a pattern string or an object with 'literal' or 'regex'"
    return str(error.message)
