# -*- coding: utf-8 -*-
"""Analysis — vision model call via the Gemini generateContent API."""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional

import httpx

from ..config import Settings
from .errors import InferenceError, InferenceUnavailableError

logger = logging.getLogger(__name__)


class InferenceClient:
    """Sends a prompt plus one image to a vision backend and returns its raw text."""

    variant = "abstract"

    def generate(self, *, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        raise NotImplementedError


class UnavailableInferenceClient(InferenceClient):
    """Selected when no usable credential is configured; every call fails."""

    variant = "unavailable"

    def generate(self, *, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        raise InferenceUnavailableError("no valid GEMINI_API_KEY configured")


def _extract_text(data: object) -> str:
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    if not isinstance(first, dict):
        return ""
    content = first.get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    out: list[str] = []
    for part in parts:
        if isinstance(part, dict):
            text = part.get("text")
            if isinstance(text, str):
                out.append(text)
    return "".join(out)


class LiveInferenceClient(InferenceClient):
    variant = "live"

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, *, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        payload: Dict[str, Any] = {
            "contents": [
                {
                    "parts": [
                        {"text": prompt},
                        {
                            "inline_data": {
                                "mime_type": mime_type,
                                "data": base64.b64encode(image_bytes).decode("ascii"),
                            }
                        },
                    ]
                }
            ],
            "generationConfig": {"responseMimeType": "application/json"},
        }
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.post(self.url, headers=headers, json=payload)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as exc:
            snippet = (exc.response.text or "").replace("\n", " ").strip()[:200]
            raise InferenceError(f"Gemini API error {exc.response.status_code}: {snippet}") from exc
        except httpx.HTTPError as exc:
            raise InferenceError(f"Gemini API unreachable: {exc}") from exc
        except ValueError as exc:
            raise InferenceError(f"Gemini returned non-JSON response: {exc}") from exc

        text = _extract_text(data)
        if not text:
            raise InferenceError("Gemini response contained no text part")
        return text


def build_inference_client(
    settings: Settings,
    transport: Optional[httpx.BaseTransport] = None,
) -> InferenceClient:
    """Pick the client variant once, from the configured credential."""
    if settings.gemini_api_key is None:
        logger.warning(
            "No valid GEMINI_API_KEY found. Analysis requests will fail until a key is configured."
        )
        return UnavailableInferenceClient()
    return LiveInferenceClient(
        api_key=settings.gemini_api_key,
        model=settings.model,
        base_url=settings.base_url,
        timeout=settings.timeout,
        transport=transport,
    )
