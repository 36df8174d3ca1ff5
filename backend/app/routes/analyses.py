"""Analysis history.

Endpoints:
  GET    /analyses?key=        — latest analyses for a key (newest first)
  DELETE /analyses?key=&id=    — delete one analysis owned by the key
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..agents.idea_analyzer import pipeline
from ..database import get_db
from ..schemas.analysis_schema import AnalysisRecordResponse, DeleteResponse, ErrorResponse

router = APIRouter(
    prefix="/analyses",
    tags=["Analysis"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=List[AnalysisRecordResponse],
    summary="List recent analyses for a key",
)
def list_analyses(
    key: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
) -> List[dict]:
    """Return up to 20 analyses for the key, sorted by createdAt DESC."""
    return pipeline.list_history(db, key)


@router.delete(
    "",
    response_model=DeleteResponse,
    summary="Delete an analysis",
    responses={
        403: {"model": ErrorResponse, "description": "Analysis belongs to another key"},
        404: {"model": ErrorResponse, "description": "Analysis not found"},
    },
)
def delete_analysis(
    key: Optional[str] = Query(default=None),
    record_id: Optional[str] = Query(default=None, alias="id"),
    db: Session = Depends(get_db),
) -> dict:
    return pipeline.remove_analysis(db, key, record_id)
