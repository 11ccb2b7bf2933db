# -*- coding: utf-8 -*-
"""Session-scoped scan log kept by the calling side."""

from .models import NutritionRecord, ScanLogEntry, SelectedFile
from .session import ScanSession
from .storage import ScanLedger, compute_daily_total

__all__ = [
    "NutritionRecord",
    "ScanLedger",
    "ScanLogEntry",
    "ScanSession",
    "SelectedFile",
    "compute_daily_total",
]
