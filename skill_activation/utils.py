import json
import re
from pathlib import Path
from typing import Any, Union

_DUPLICATE_SLASH_RE = re.compile(r"/{2,}")

KeyPath = tuple[Union[str, int], ...]


class DuplicateKeyError(ValueError):
    """A mapping repeats a key; ``path`` locates the mapping in the document."""

    def __init__(self, key: str, path: KeyPath = ()) -> None:
        self.key = key
        self.path = path
        super().__init__(f"duplicate key '{key}'")


class _PairList(list):
    pass


def _build_mapping(value: Any, path: KeyPath = ()) -> Any:
    if isinstance(value, _PairList):
        result: dict[str, Any] = {}
        for key, item in value:
            if key in result:
                raise DuplicateKeyError(key, path)
            result[key] = _build_mapping(item, path + (key,))
        return result
    if isinstance(value, list):
        return [_build_mapping(item, path + (index,)) for index, item in enumerate(value)]
    return value


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return _build_mapping(json.load(handle, object_pairs_hook=_PairList))


def read_json_safe(path: Path) -> tuple[Any | None, str | None]:
    if not path.exists():
        return None, None
    if path.stat().st_size == 0:
        return None, None
    try:
        return read_json(path), None
    except (OSError, ValueError) as exc:
        return None, str(exc)


def normalize_path(path: str) -> str:
    text = path.replace("\\", "/")
    text = _DUPLICATE_SLASH_RE.sub("/", text)
    while text.startswith("./"):
        text = text[2:]
    return text


def relativize_path(path: str, root: str | Path | None) -> str:
    if root is None:
        return path
    candidate = Path(path)
    if not candidate.is_absolute():
        return path
    try:
        return candidate.relative_to(Path(root)).as_posix()
    except ValueError:
        return path


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text
