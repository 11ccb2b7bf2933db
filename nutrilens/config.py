from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

# Placeholder value shipped in example env files; treated the same as "no key".
_SENTINEL_API_KEYS = {"", "DUMMY"}


def _normalize_api_key(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    value = raw.strip()
    if value in _SENTINEL_API_KEYS:
        return None
    return value


class Settings:
    """Centralized configuration for the NutriLens backend and client."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent

        self.gemini_api_key: Optional[str] = _normalize_api_key(os.environ.get("GEMINI_API_KEY"))
        self.model: str = (os.environ.get("NUTRILENS_MODEL") or "").strip() or "gemini-2.5-flash"
        self.base_url: str = (
            os.environ.get("NUTRILENS_BASE_URL") or "https://generativelanguage.googleapis.com/v1beta"
        ).rstrip("/")
        timeout_raw = (os.environ.get("NUTRILENS_TIMEOUT") or "").strip()
        # No timeout unless explicitly configured.
        self.timeout: Optional[float] = float(timeout_raw) if timeout_raw else None

        self.upload_dir: Path = Path(
            os.environ.get("NUTRILENS_UPLOAD_DIR") or (repo_root / "uploads")
        ).expanduser()

        self.host: str = os.environ.get("NUTRILENS_HOST") or os.environ.get("HOST") or "127.0.0.1"
        port_raw = os.environ.get("NUTRILENS_PORT") or os.environ.get("PORT") or "5000"
        try:
            self.port: int = int(port_raw)
        except ValueError:
            self.port = 5000

        self.api_url: str = os.environ.get("NUTRILENS_API_URL") or "http://localhost:5000/api/analyze"

        cors = os.environ.get("NUTRILENS_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
