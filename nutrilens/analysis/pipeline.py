# -*- coding: utf-8 -*-
"""Analysis — orchestration from a stored upload to a parsed reply."""

from __future__ import annotations

import logging
from typing import Any, Dict

from .inference import InferenceClient
from .lifecycle import TransientImage
from .models import AnalysisContext
from .parser import parse_nutrition_reply
from .prompt import build_prompt

logger = logging.getLogger(__name__)


def run_analysis(
    *,
    image: TransientImage,
    context: AnalysisContext,
    client: InferenceClient,
) -> Dict[str, Any]:
    """Prompt the model with ``image`` and return its parsed reply.

    The transient file is released right after the model answers; if any
    step fails it is released from the failure handler instead. Errors
    propagate unchanged.
    """
    try:
        image_bytes = image.read_bytes()
        prompt = build_prompt(context.meal_type, context.diet_goal)
        logger.debug("prompt built (%d chars) for %s", len(prompt), image.path.name)
        raw_text = client.generate(prompt=prompt, image_bytes=image_bytes, mime_type=image.mime_type)
        image.release()
        return parse_nutrition_reply(raw_text)
    except Exception:
        image.release_quietly()
        raise
