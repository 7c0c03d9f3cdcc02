import re

from skill_activation.constants import DEFAULT_CONTENT_LIMIT
from skill_activation.models import (
    Event,
    FileEvent,
    NormalizedEvent,
    NormalizedFile,
    NormalizedPrompt,
    PromptEvent,
)
from skill_activation.utils import normalize_path

_TOKEN_SPLIT_RE = re.compile(r"[\W_]+")


def tokenize(text: str) -> frozenset[str]:
    return frozenset(token for token in _TOKEN_SPLIT_RE.split(text) if token)


def normalize(event: Event, content_limit: int = DEFAULT_CONTENT_LIMIT) -> NormalizedEvent:
    """Build the canonical matching form of an event. Pure, performs no I/O."""
    if isinstance(event, PromptEvent):
        text = (event.text or "").lower()
        hint = normalize_path(event.path_hint) if event.path_hint else None
        return NormalizedPrompt(text=text, tokens=tokenize(text), path_hint=hint)

    if isinstance(event, FileEvent):
        content = event.content
        if content is not None and content_limit >= 0:
            content = content[:content_limit]
        return NormalizedFile(path=normalize_path(event.path or ""), content=content)

    raise TypeError(f"Unsupported event type: {type(event).__name__}")
