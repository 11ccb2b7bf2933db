# -*- coding: utf-8 -*-
"""Ledger — records as seen by the calling side."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..analysis.models import DEFAULT_DIET_GOAL, DEFAULT_MEAL_TYPE

HISTORY_PLACEHOLDER_NAME = "history_image.jpg"


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def _as_str_tuple(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        s = value.strip()
        return (s,) if s else ()
    if isinstance(value, (list, tuple)):
        out = []
        for x in value:
            if x is None:
                continue
            s = x.strip() if isinstance(x, str) else str(x).strip()
            if s:
                out.append(s)
        return tuple(out)
    s = str(value).strip()
    return (s,) if s else ()


@dataclass(frozen=True)
class NutritionRecord:
    """Immutable view over one analysis reply.

    The server does not enforce a schema, so every field may be missing.
    ``raw`` keeps the reply exactly as received.
    """

    food_name: Optional[str] = None
    calories: Optional[str] = None
    proteins: Optional[str] = None
    carbs: Optional[str] = None
    fats: Optional[str] = None
    description: Optional[str] = None
    warnings: Tuple[str, ...] = ()
    healthier_alternatives: Tuple[str, ...] = ()
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_reply(cls, data: Any) -> "NutritionRecord":
        if not isinstance(data, dict):
            return cls()
        return cls(
            food_name=_as_text(data.get("foodName")),
            calories=_as_text(data.get("calories")),
            proteins=_as_text(data.get("proteins")),
            carbs=_as_text(data.get("carbs")),
            fats=_as_text(data.get("fats")),
            description=_as_text(data.get("description")),
            warnings=_as_str_tuple(data.get("warnings")),
            healthier_alternatives=_as_str_tuple(data.get("healthierAlternatives")),
            raw=dict(data),
        )


@dataclass(frozen=True)
class ScanLogEntry:
    id: int
    record: NutritionRecord
    image_ref: Optional[str]
    meal_context: str = DEFAULT_MEAL_TYPE
    goal_context: str = DEFAULT_DIET_GOAL


@dataclass(frozen=True)
class SelectedFile:
    """The image chosen for the next analysis."""

    name: str
    data: bytes
    mime_type: str = "application/octet-stream"

    @property
    def is_placeholder(self) -> bool:
        return self.name == HISTORY_PLACEHOLDER_NAME and not self.data

    @classmethod
    def placeholder(cls) -> "SelectedFile":
        return cls(name=HISTORY_PLACEHOLDER_NAME, data=b"")
