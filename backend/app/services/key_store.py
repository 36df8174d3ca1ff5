"""Access-key lookup against the ``keys`` table."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import InvalidKeyError, StoreError
from ..models.access_key import AccessKey

logger = logging.getLogger(__name__)


def resolve_key(db: Session, code: str) -> AccessKey:
    """Return the key whose ``code`` matches exactly after trimming.

    Matching is case-sensitive. Codes are not unique-constrained; when
    several rows match, the oldest one is returned so the result is
    stable across calls.

    Raises InvalidKeyError if nothing matches and StoreError if the
    database cannot be queried. An empty code is the caller's problem
    and is simply reported as invalid here.
    """
    normalized = (code or "").strip()

    try:
        key = (
            db.query(AccessKey)
            .filter(AccessKey.code == normalized)
            .order_by(AccessKey.created_at.asc(), AccessKey.id.asc())
            .first()
        )
    except SQLAlchemyError as exc:
        logger.error("Key lookup failed: %s", exc)
        raise StoreError("Server error") from exc

    if key is None:
        raise InvalidKeyError()
    return key
