# -*- coding: utf-8 -*-
"""Analysis — parse the model's structured reply."""

from __future__ import annotations

import json
import re
from typing import Any, Dict

from .errors import ResponseParseError

_FENCE_START_RE = re.compile(r"^```(?:json)?\s*", flags=re.IGNORECASE)
_FENCE_END_RE = re.compile(r"\s*```$")


def _strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    cleaned = _FENCE_START_RE.sub("", cleaned)
    cleaned = _FENCE_END_RE.sub("", cleaned)
    return cleaned


def _reject_constant(token: str) -> Any:
    raise ResponseParseError(f"Model output contains non-JSON constant {token}")


def parse_nutrition_reply(text: str) -> Dict[str, Any]:
    """Parse ``text`` as a JSON object.

    Only well-formedness is checked; missing or oddly typed keys are returned
    unchanged for the caller to handle.
    """
    cleaned = _strip_code_fence(text or "")
    try:
        parsed = json.loads(cleaned, parse_constant=_reject_constant)
    except ValueError as exc:
        snippet = cleaned.replace("\n", " ")[:200]
        raise ResponseParseError(f"Model output is not valid JSON: {exc}; got {snippet!r}") from exc
    if not isinstance(parsed, dict):
        raise ResponseParseError(f"Model output is not a JSON object: {type(parsed).__name__}")
    return parsed
