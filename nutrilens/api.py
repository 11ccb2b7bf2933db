# -*- coding: utf-8 -*-
"""
NutriLens API

Food photo nutrition analysis backed by a vision language model.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .analysis.api import router as analysis_router
from .analysis.inference import build_inference_client
from .config import settings

app = FastAPI(
    title="NutriLens",
    description="Snap a photo of your food and get a nutrition estimate.",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Selected once for the process lifetime.
app.state.inference_client = build_inference_client(settings)
app.state.upload_dir = settings.upload_dir

app.include_router(analysis_router)


@app.get("/api/health")
def health(request: Request) -> dict:
    return {"ok": True, "inference": request.app.state.inference_client.variant}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Backend server running on port %d", settings.port)
    uvicorn.run("nutrilens.api:app", host=settings.host, port=settings.port, reload=False)
