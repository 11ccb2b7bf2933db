# -*- coding: utf-8 -*-
"""Analysis — API endpoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from .errors import ANALYSIS_FAILED_MESSAGE, UploadValidationError
from .inference import InferenceClient
from .ingest import ingest_upload
from .models import ErrorResponse, NutritionRecord
from .pipeline import run_analysis

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Analysis"])


def get_inference_client(request: Request) -> InferenceClient:
    return request.app.state.inference_client


def get_upload_dir(request: Request) -> Path:
    return request.app.state.upload_dir


async def count_image_parts(request: Request) -> int:
    # The form is already parsed and cached on the request by this point.
    form = await request.form()
    return len(form.getlist("image"))


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post(
    "/analyze",
    summary="Estimate nutrition from a food photo",
    responses={
        200: {"model": NutritionRecord},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def analyze(
    # Text parts named "image" are accepted here and rejected as "no image" by ingest.
    image: Union[UploadFile, str, None] = File(default=None),
    meal_type: Optional[str] = Form(default=None, alias="mealType"),
    diet_goal: Optional[str] = Form(default=None, alias="dietGoal"),
    image_parts: int = Depends(count_image_parts),
    client: InferenceClient = Depends(get_inference_client),
    upload_dir: Path = Depends(get_upload_dir),
):
    try:
        transient, context = ingest_upload(
            upload=image,
            meal_type=meal_type,
            diet_goal=diet_goal,
            upload_dir=upload_dir,
            part_count=image_parts,
        )
    except UploadValidationError as exc:
        return _error(400, exc.message)
    except Exception:
        logger.exception("Error storing uploaded image")
        return _error(500, ANALYSIS_FAILED_MESSAGE)

    try:
        record = run_analysis(image=transient, context=context, client=client)
        return JSONResponse(content=record)
    except Exception:
        logger.exception("Error analyzing image")
        return _error(500, ANALYSIS_FAILED_MESSAGE)
