"""Persistence for analysis records in the ``analyses`` table.

Records are created once, listed per key newest-first, and deleted only by
the key that created them. They are never updated in place.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import AnalysisNotFoundError, OwnershipError, StoreError
from ..models.analysis import Analysis

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20


def create_analysis(db: Session, key_id: UUID, idea: str, data: Dict[str, Any]) -> Analysis:
    """Insert a new record; ``created_at`` is assigned by the store."""
    record = Analysis(
        key_id=key_id,
        idea=idea,
        data_json=json.dumps(data),
    )
    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to persist analysis for key %s: %s", key_id, exc)
        raise StoreError("Failed to save analysis") from exc
    return record


def list_recent(db: Session, key_id: UUID, limit: int = DEFAULT_HISTORY_LIMIT) -> List[Analysis]:
    """Return up to ``limit`` records for ``key_id``, newest first."""
    try:
        return (
            db.query(Analysis)
            .filter(Analysis.key_id == key_id)
            .order_by(Analysis.created_at.desc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        logger.error("Failed to list analyses for key %s: %s", key_id, exc)
        raise StoreError("Server error") from exc


def delete_analysis(db: Session, record_id: str, requester_key_id: UUID) -> None:
    """Delete a record after checking that ``requester_key_id`` owns it.

    The ownership decision is made against the same row that is deleted.
    Two concurrent deletes of one record by its owner may both succeed.
    """
    try:
        record = db.query(Analysis).filter(Analysis.id == record_id).first()
        if record is None:
            raise AnalysisNotFoundError()
        if record.key_id != requester_key_id:
            raise OwnershipError()
        db.delete(record)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to delete analysis %s: %s", record_id, exc)
        raise StoreError("Failed to delete analysis") from exc


def _utc_iso(value: datetime) -> str:
    """ISO-8601 with a ``Z`` suffix; stored timestamps are naive UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def record_to_dict(record: Analysis) -> Dict[str, Any]:
    """Serialize a record the way the history endpoint returns it."""
    created_at = record.created_at or datetime.utcnow()
    return {
        "id": str(record.id),
        "keyId": str(record.key_id),
        "idea": record.idea,
        "data": json.loads(record.data_json) if record.data_json else {},
        "createdAt": _utc_iso(created_at),
    }
