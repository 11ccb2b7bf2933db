# -*- coding: utf-8 -*-
"""Ledger — interactive session state and the analyze round trip."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Optional

import httpx

from ..analysis.models import DEFAULT_DIET_GOAL, DEFAULT_MEAL_TYPE, AnalysisContext
from ..config import settings
from .models import NutritionRecord, ScanLogEntry, SelectedFile
from .storage import ScanLedger

logger = logging.getLogger(__name__)

ANALYZE_ERROR_MESSAGE = (
    "Failed to analyze image. Make sure the backend limit is not exceeded and the API key is valid."
)
RESTORED_ERROR_MESSAGE = "A restored scan cannot be analyzed again. Choose a new image."


class ScanSession:
    """Active view plus the scan log for one interactive session.

    Not thread-safe; all calls are expected from one thread of control.
    """

    def __init__(
        self,
        *,
        api_url: Optional[str] = None,
        ledger: Optional[ScanLedger] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.api_url = api_url or settings.api_url
        self.ledger = ledger if ledger is not None else ScanLedger()
        self._transport = transport
        self._timeout = timeout
        self.file: Optional[SelectedFile] = None
        self.preview: Optional[str] = None
        self.result: Optional[NutritionRecord] = None
        self.error: Optional[str] = None
        self.loading = False
        self.meal_type = DEFAULT_MEAL_TYPE
        self.diet_goal = DEFAULT_DIET_GOAL

    @property
    def context(self) -> AnalysisContext:
        return AnalysisContext(meal_type=self.meal_type, diet_goal=self.diet_goal)

    def select_file(self, file: SelectedFile, preview: Optional[str] = None) -> None:
        self.file = file
        self.preview = preview if preview is not None else file.name
        self.result = None
        self.error = None

    def select_path(self, path: Path) -> None:
        mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        self.select_file(
            SelectedFile(name=path.name, data=path.read_bytes(), mime_type=mime_type),
            preview=str(path),
        )

    def clear(self) -> None:
        """Reset the active view; the scan log is kept."""
        self.file = None
        self.preview = None
        self.result = None
        self.error = None
        self.meal_type = DEFAULT_MEAL_TYPE
        self.diet_goal = DEFAULT_DIET_GOAL

    def restore_from_history(self, entry: ScanLogEntry) -> None:
        """Show ``entry`` as the active result.

        A zero-byte placeholder takes the file slot so "file present" checks
        stay consistent; the uploaded image bytes are not recovered.
        """
        self.result = entry.record
        self.preview = entry.image_ref
        self.meal_type = entry.meal_context or DEFAULT_MEAL_TYPE
        if entry.goal_context:
            self.diet_goal = entry.goal_context
        self.file = SelectedFile.placeholder()

    def analyze(self) -> Optional[ScanLogEntry]:
        """Submit the active file; on success the result is logged and returned."""
        if self.file is None:
            return None
        if self.file.is_placeholder:
            self.error = RESTORED_ERROR_MESSAGE
            return None

        self.loading = True
        self.error = None
        context = self.context
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.post(
                    self.api_url,
                    files={"image": (self.file.name, self.file.data, self.file.mime_type)},
                    data={"mealType": context.meal_type, "dietGoal": context.diet_goal},
                )
            if resp.status_code >= 400:
                raise RuntimeError(f"analyze request failed with HTTP {resp.status_code}")
            data = resp.json()
        except Exception as exc:
            logger.warning("analysis request failed: %s", exc)
            self.error = ANALYZE_ERROR_MESSAGE
            return None
        finally:
            self.loading = False

        record = NutritionRecord.from_reply(data)
        self.result = record
        return self.ledger.append_scan(record, context, image_ref=self.preview)
