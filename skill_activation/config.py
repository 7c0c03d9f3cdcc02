from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft202012Validator

from skill_activation.constants import (
    APP_NAME,
    CONFIG_FILENAME,
    DEFAULT_CONTENT_LIMIT,
    RULES_FILENAME,
)
from skill_activation.errors import ConfigError
from skill_activation.models import EngineConfig
from skill_activation.rules.schema import CONFIG_SCHEMA, format_schema_error
from skill_activation.utils import read_json_safe


class ConfigRepository:
    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root or (Path.home() / ".config" / APP_NAME)
        self._validator = Draft202012Validator(CONFIG_SCHEMA)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    @property
    def default_rules_path(self) -> Path:
        return self.root / RULES_FILENAME

    def load_raw(self) -> dict[str, Any]:
        payload, error = read_json_safe(self.config_path)
        if error is not None:
            raise ConfigError(self.config_path, error)
        if payload is None:
            return {}
        validation_error = next(iter(self._validator.iter_errors(payload)), None)
        if validation_error is not None:
            raise ConfigError(self.config_path, format_schema_error(validation_error))
        return payload

    def load_engine_config(
        self,
        max_results: Optional[int] = None,
        content_limit: Optional[int] = None,
        verbose: Optional[bool] = None,
    ) -> EngineConfig:
        """Merge config file values with explicit overrides; overrides win."""
        raw = self.load_raw()
        return EngineConfig(
            max_results=max_results if max_results is not None else raw.get("maxResults"),
            content_limit=content_limit
            if content_limit is not None
            else raw.get("contentLimit", DEFAULT_CONTENT_LIMIT),
            verbose=verbose if verbose else bool(raw.get("verbose", False)),
        )

    def resolve_rules_path(self, override: Optional[Path] = None) -> Path:
        if override is not None:
            return override.expanduser()
        configured = self.load_raw().get("rulesPath")
        if configured:
            path = Path(configured).expanduser()
            return path if path.is_absolute() else self.root / path
        return self.default_rules_path
