"""Idea analysis.

Endpoint:
  POST /analyze — run the grounded analysis for one idea and save it
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..agents.idea_analyzer import pipeline
from ..agents.idea_analyzer.schema import AnalysisData
from ..database import get_db
from ..schemas.analysis_schema import AnalyzeRequest, ErrorResponse

router = APIRouter(
    tags=["Analysis"],
    responses={
        400: {"model": ErrorResponse, "description": "Missing key or idea too short"},
        401: {"model": ErrorResponse, "description": "Invalid key"},
        500: {"model": ErrorResponse, "description": "Generation, parsing or storage failed"},
    },
)


@router.post(
    "/analyze",
    response_model=AnalysisData,
    status_code=status.HTTP_200_OK,
    summary="Analyze a startup idea",
    response_description="Display-ready analysis (identity, validation, sources, ...)",
)
async def analyze_idea(payload: AnalyzeRequest, db: Session = Depends(get_db)) -> AnalysisData:
    """Analyze an idea with search-grounded Gemini and store it under the key.

    Typical response time is 20-60 seconds.
    """
    return await pipeline.run_analysis(db, payload.key, payload.idea)
