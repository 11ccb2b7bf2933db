# -*- coding: utf-8 -*-
"""Analysis — transient image storage with release-once semantics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class TransientImage:
    """An uploaded image persisted to request-scoped storage.

    The pipeline owns the file once ingest returns it. ``release`` is called
    on the success path, ``release_quietly`` from the failure handler; either
    one deletes the file at most once.
    """

    path: Path
    mime_type: str
    size_bytes: int
    _released: bool = field(default=False, init=False, repr=False)

    @property
    def released(self) -> bool:
        return self._released

    def read_bytes(self) -> bytes:
        if self._released:
            raise RuntimeError(f"transient image already released: {self.path.name}")
        return self.path.read_bytes()

    def release(self) -> None:
        """Delete the file; errors propagate to the caller."""
        if self._released:
            return
        self.path.unlink()
        self._released = True

    def release_quietly(self) -> None:
        """Best-effort delete for failure paths; never raises."""
        if self._released or not self.path.exists():
            self._released = True
            return
        try:
            self.path.unlink()
        except OSError as exc:
            logger.warning("failed to remove transient upload %s: %s", self.path, exc)
            return
        self._released = True
