from typing import Final


APP_NAME: Final[str] = "skill-activation"
CONFIG_FILENAME: Final[str] = "config.json"
RULES_FILENAME: Final[str] = "skill-rules.json"

DEFAULT_CONTENT_LIMIT: Final[int] = 64 * 1024

YAML_SUFFIXES: Final[tuple[str, ...]] = (".yaml", ".yml")

PROMPT_SUBMIT_EVENT: Final[str] = "UserPromptSubmit"
POST_TOOL_USE_EVENT: Final[str] = "PostToolUse"
