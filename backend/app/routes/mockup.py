"""App mockup image.

Endpoint:
  POST /mockup — generate a single flat mobile UI screen for an idea
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..agents.idea_analyzer import pipeline
from ..database import get_db
from ..schemas.analysis_schema import ErrorResponse, MockupRequest, MockupResponse

router = APIRouter(
    tags=["Mockup"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.post("/mockup", response_model=MockupResponse, summary="Generate an app mockup image")
async def create_mockup(payload: MockupRequest, db: Session = Depends(get_db)) -> dict:
    return await pipeline.run_mockup(
        db,
        payload.key,
        payload.idea,
        startup_name=payload.startup_name,
        app_description=payload.app_description,
    )
