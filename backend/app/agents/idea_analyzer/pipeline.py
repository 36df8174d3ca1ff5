"""Idea analysis pipeline — key gate → grounded generation → normalize → persist.

Entry point: run_analysis(db, key, idea) -> AnalysisData

Flow (one terminal state per request, nothing retried):
  1. Validate input          → RequestValidationError (400)
  2. Resolve access key      → InvalidKeyError (401)
  3. Grounded generation     → UpstreamError (500)
  4. Normalize model output  → ParseError (500)
  5. Persist the record      → StoreError (500)
  6. Return the display-ready AnalysisData

A record is written only after step 4 succeeds. If step 5 fails the
parsed analysis is not returned.

The sibling operations (login, history, delete, mockup) share the same
input checks and key gate.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ...config import settings
from ...errors import ParseError, RequestValidationError
from ...models.access_key import AccessKey
from ...services.analysis_store import (
    create_analysis,
    delete_analysis,
    list_recent,
    record_to_dict,
)
from ...services.gemini_client import generate_grounded_analysis, generate_mockup_image
from ...services.key_store import resolve_key
from .normalizer import normalize
from .prompts import build_analysis_prompt, build_mockup_prompt
from .schema import AnalysisData

logger = logging.getLogger(__name__)

MIN_IDEA_LENGTH = 3


# ── Input checks ─────────────────────────────────────────────────────────

def require_key(key: Any) -> str:
    if not isinstance(key, str) or not key.strip():
        raise RequestValidationError("Key is required")
    return key


def require_idea(idea: Any) -> str:
    if not isinstance(idea, str) or len(idea.strip()) < MIN_IDEA_LENGTH:
        raise RequestValidationError(
            f"Idea description is required (min {MIN_IDEA_LENGTH} characters)"
        )
    return idea.strip()


def require_record_id(record_id: Any) -> str:
    if not isinstance(record_id, str) or not record_id.strip():
        raise RequestValidationError("Analysis id is required")
    return record_id.strip()


def authenticate(db: Session, key: Any) -> AccessKey:
    """Validate presence, then resolve the key (401 if unknown)."""
    return resolve_key(db, require_key(key))


# ── Operations ───────────────────────────────────────────────────────────

def login(db: Session, key: Any) -> Dict[str, Any]:
    access_key = authenticate(db, key)
    return {"valid": True, "keyId": str(access_key.id)}


async def run_analysis(db: Session, key: Any, idea: Any) -> AnalysisData:
    """Analyze one idea for one key and persist the result."""
    start_time = time.perf_counter()

    # 1. Input, checked before touching the store or the network
    key = require_key(key)
    idea_text = require_idea(idea)

    # 2. Key gate
    access_key = resolve_key(db, key)
    print(f"➡️  [ANALYZE] START key={access_key.id} idea_len={len(idea_text)}")

    # 3. Grounded generation (the idea is embedded exactly as submitted)
    gen_start = time.perf_counter()
    result = await generate_grounded_analysis(build_analysis_prompt(idea))
    print(f"[TIMING] generation: COMPLETE — duration={(time.perf_counter() - gen_start) * 1000:.0f}ms")

    # 4. Normalize
    try:
        analysis = normalize(result.raw_text, result.sources, result.queries)
    except ParseError as exc:
        logger.error("Failed to parse Gemini response (%s): %s", exc.reason, exc.raw_text[:500])
        raise

    # 5. Persist
    record = create_analysis(db, access_key.id, idea_text, analysis.to_wire())

    total_ms = (time.perf_counter() - start_time) * 1000
    print(f"✅ [ANALYZE] Saved analysis {record.id} — duration={total_ms:.0f}ms")
    return analysis


def list_history(db: Session, key: Any, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Recent analyses for the key, newest first."""
    access_key = authenticate(db, key)
    records = list_recent(db, access_key.id, limit or settings.history_limit)
    return [record_to_dict(record) for record in records]


def remove_analysis(db: Session, key: Any, record_id: Any) -> Dict[str, bool]:
    """Delete one analysis owned by the key."""
    record_id = require_record_id(record_id)
    access_key = authenticate(db, key)
    delete_analysis(db, record_id, access_key.id)
    logger.info("Deleted analysis %s for key %s", record_id, access_key.id)
    return {"success": True}


async def run_mockup(
    db: Session,
    key: Any,
    idea: Any,
    startup_name: Optional[str] = None,
    app_description: Optional[str] = None,
) -> Dict[str, str]:
    """Generate a single-screen UI mockup image. Nothing is persisted."""
    key = require_key(key)
    if not isinstance(idea, str) or not idea.strip():
        raise RequestValidationError("Idea is required")

    authenticate(db, key)

    image = await generate_mockup_image(build_mockup_prompt(idea, startup_name, app_description))
    return {"image": image.data, "mimeType": image.mime_type}
