"""Best-effort structured decode of free-form model output.

Models wrap JSON in prose or markdown fences. Every structured endpoint
shares this one policy: find the first balanced `{...}` or `[...]` span and
parse it. Decoding never raises; callers get either `Decoded` or
`NO_STRUCTURED_DATA`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final


class JsonKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"

    @property
    def opener(self) -> str:
        return "{" if self is JsonKind.OBJECT else "["


@dataclass(frozen=True)
class Decoded:
    value: Any


class _NoStructuredData:
    _instance: "_NoStructuredData | None" = None

    def __new__(cls) -> "_NoStructuredData":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_STRUCTURED_DATA"


NO_STRUCTURED_DATA: Final = _NoStructuredData()

DecodeResult = Decoded | _NoStructuredData

_CLOSERS = {"{": "}", "[": "]"}


def find_balanced_span(text: str, openers: str = "{[") -> str | None:
    """
    Return the first balanced bracket span starting at one of `openers`.

    Brackets inside JSON string literals (including escaped quotes) are
    ignored. Returns None if no opener exists or the span never closes.
    """
    start = next((i for i, ch in enumerate(text) if ch in openers), None)
    if start is None:
        return None

    stack: list[str] = []
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        ch = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in ("}", "]"):
            if not stack or stack.pop() != ch:
                return None
            if not stack:
                return text[start : index + 1]

    return None


def decode_structured(text: Any, kind: JsonKind | None = None) -> DecodeResult:
    """
    Decode the first balanced JSON value in `text`.

    Args:
        text: Raw model output (non-strings yield NO_STRUCTURED_DATA)
        kind: Restrict the search to objects or arrays

    Returns:
        Decoded(value) on success, NO_STRUCTURED_DATA otherwise
    """
    if not isinstance(text, str) or not text.strip():
        return NO_STRUCTURED_DATA

    span = find_balanced_span(text, kind.opener if kind else "{[")
    if span is None:
        return NO_STRUCTURED_DATA

    try:
        return Decoded(json.loads(span))
    except (ValueError, RecursionError):
        return NO_STRUCTURED_DATA
