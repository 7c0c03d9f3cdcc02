"""Shell-style glob to regex compilation for repo-relative paths."""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

from skill_activation.utils import normalize_path


class GlobError(ValueError):
    pass


def translate_glob(pattern: str) -> str:
    """Translate a glob into a regex source anchored at both ends.

    ``*`` stays inside one path segment, ``**`` crosses segments and ``**/``
    may also match no directory at all. ``?`` matches one non-slash character.
    """
    if not pattern:
        raise GlobError("empty glob pattern")

    parts: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        char = pattern[i]
        if char == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            if j - i == 1:
                parts.append("[^/]*")
                i = j
                continue
            at_segment_start = i == 0 or pattern[i - 1] == "/"
            if at_segment_start and j < n and pattern[j] == "/":
                parts.append("(?:.*/)?")
                i = j + 1
                continue
            parts.append(".*")
            i = j
        elif char == "?":
            parts.append("[^/]")
            i += 1
        elif char == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise GlobError(f"unterminated character class at position {i}")
            body = pattern[i + 1 : j]
            negate = body[:1] in ("!", "^")
            if negate:
                body = body[1:]
            body = body.replace("\\", "\\\\").replace("[", "\\[")
            parts.append(f"[^/{body}]" if negate else f"[{body}]")
            i = j + 1
        else:
            parts.append(re.escape(char))
            i += 1
    return "(?s:" + "".join(parts) + r")\Z"


@dataclass(frozen=True)
class PathGlob:
    source: str
    regex: re.Pattern[str]

    def matches(self, path: str) -> bool:
        return self.regex.match(path) is not None


@functools.lru_cache(maxsize=1024)
def compile_glob(pattern: str) -> PathGlob:
    normalized = normalize_path(pattern.strip())
    try:
        regex = re.compile(translate_glob(normalized))
    except re.error as exc:
        raise GlobError(str(exc)) from exc
    return PathGlob(source=pattern, regex=regex)
