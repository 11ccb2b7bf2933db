# -*- coding: utf-8 -*-
"""Ledger — in-memory, capped scan log (no persistence)."""

from __future__ import annotations

import time
from collections import deque
from typing import Deque, Dict, Iterable, Iterator, List, Optional

from ..analysis.models import AnalysisContext
from ..nutrients import leading_int
from .models import NutritionRecord, ScanLogEntry

SCAN_LOG_CAPACITY = 10


def compute_daily_total(entries: Iterable[ScanLogEntry]) -> int:
    """Sum of the integer calories of each entry; unparsable values count as 0."""
    return sum(leading_int(entry.record.calories, default=0) for entry in entries)


def macro_breakdown(record: NutritionRecord) -> Dict[str, int]:
    return {
        "proteins": leading_int(record.proteins, default=0),
        "carbs": leading_int(record.carbs, default=0),
        "fats": leading_int(record.fats, default=0),
    }


class ScanLedger:
    """Newest-first log holding at most ``capacity`` entries."""

    def __init__(self, capacity: int = SCAN_LOG_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        # appendleft on a bounded deque drops the oldest entry from the right.
        self._entries: Deque[ScanLogEntry] = deque(maxlen=capacity)
        self._last_id = 0

    def _next_id(self) -> int:
        now_ms = int(time.time() * 1000)
        self._last_id = max(now_ms, self._last_id + 1)
        return self._last_id

    def append_scan(
        self,
        record: NutritionRecord,
        context: AnalysisContext,
        image_ref: Optional[str] = None,
    ) -> ScanLogEntry:
        entry = ScanLogEntry(
            id=self._next_id(),
            record=record,
            image_ref=image_ref,
            meal_context=context.meal_type,
            goal_context=context.diet_goal,
        )
        self._entries.appendleft(entry)
        return entry

    @property
    def entries(self) -> List[ScanLogEntry]:
        return list(self._entries)

    def daily_total(self) -> int:
        return compute_daily_total(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ScanLogEntry]:
        return iter(list(self._entries))
