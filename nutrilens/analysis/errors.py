# -*- coding: utf-8 -*-
"""Analysis — error taxonomy.

Only two kinds reach the HTTP boundary: a missing upload (client error) and
everything else (:class:`AnalysisFailure`, reported generically).
"""

from __future__ import annotations

NO_IMAGE_MESSAGE = "No image uploaded"
ANALYSIS_FAILED_MESSAGE = "Failed to analyze image"


class UploadValidationError(Exception):
    def __init__(self, message: str = NO_IMAGE_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class AnalysisFailure(Exception):
    """Internal failure; the cause is logged, never returned to the caller."""


class InferenceUnavailableError(AnalysisFailure):
    pass


class InferenceError(AnalysisFailure):
    pass


class ResponseParseError(AnalysisFailure):
    pass
