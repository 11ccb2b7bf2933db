# -*- coding: utf-8 -*-
"""Analysis — validate an image submission and persist it to transient storage."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Tuple
from uuid import uuid4

from starlette.datastructures import UploadFile

from .errors import AnalysisFailure, UploadValidationError
from .lifecycle import TransientImage
from .models import AnalysisContext

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 256


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def ingest_upload(
    *,
    upload: Any,
    meal_type: Optional[str],
    diet_goal: Optional[str],
    upload_dir: Path,
    part_count: int = 1,
) -> Tuple[TransientImage, AnalysisContext]:
    """Write the uploaded image under ``upload_dir`` and return it with its context.

    Raises :class:`UploadValidationError` before touching storage when no
    image part was sent (a text field named "image" counts as none). More
    than one image part is an internal failure; nothing is stored.
    """
    if not isinstance(upload, UploadFile) or not upload.filename:
        raise UploadValidationError()
    if part_count > 1:
        raise AnalysisFailure(f"expected exactly one image part, got {part_count}")

    context = AnalysisContext.from_form(meal_type, diet_goal)
    mime_type = upload.content_type or "application/octet-stream"

    _ensure_dir(upload_dir)
    path = upload_dir / uuid4().hex

    size = 0
    try:
        with path.open("wb") as f:
            while True:
                chunk = upload.file.read(_CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                f.write(chunk)
    except Exception:
        path.unlink(missing_ok=True)
        raise
    finally:
        try:
            upload.file.close()
        except Exception:
            pass

    logger.info(
        "ingested upload %s (%s, %d bytes) meal=%r goal=%r",
        path.name,
        mime_type,
        size,
        context.meal_type,
        context.diet_goal,
    )
    return TransientImage(path=path, mime_type=mime_type, size_bytes=size), context
