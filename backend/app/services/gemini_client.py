"""Gemini REST client — grounded text generation and mockup images.

All Gemini traffic goes through this module:
  - `generate_grounded_analysis()` for the idea analyzer (Google Search
    grounding enabled, bounded output length).
  - `generate_mockup_image()` for the app mockup (image modality).

Behaviour:
  - Model, timeout, temperature and token limits come from `app.config.settings`.
  - Exactly ONE request per call, no retries.
  - Every request has an explicit timeout (GEMINI_REQUEST_TIMEOUT).
  - Non-2xx, transport errors and timeouts raise UpstreamError.
  - The response text is NOT interpreted here; JSON handling lives in the
    idea analyzer's normalizer.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from ..errors import UpstreamEmptyResponse, UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Text and grounding metadata from one grounded generation call."""

    raw_text: str
    sources: List[Dict[str, str]] = field(default_factory=list)  # [{uri, title}]
    queries: List[str] = field(default_factory=list)


@dataclass
class MockupImage:
    data: str  # base64, as returned by the API
    mime_type: str = "image/png"


def _get_api_key(api_key: Optional[str]) -> str:
    key = (api_key if api_key is not None else settings.gemini_api_key).strip()
    if not key:
        print("⚠️  [GEMINI] API key missing (GEMINI_API_KEY)")
        raise UpstreamError("GEMINI_API_KEY is not configured")
    return key


def _endpoint(model: str) -> str:
    return f"{settings.gemini_base_url}/{model}:generateContent"


def build_grounded_payload(
    prompt: str,
    *,
    max_output_tokens: int,
    temperature: float,
) -> Dict[str, Any]:
    """Build a generateContent body with Google Search grounding enabled."""
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "tools": [{"google_search": {}}],
        "generationConfig": {
            "temperature": temperature,
            "topP": 0.9,
            "maxOutputTokens": max_output_tokens,
        },
    }


def _parts(candidate: Dict[str, Any]) -> List[Dict[str, Any]]:
    content = candidate.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return []
    return [part for part in parts if isinstance(part, dict)]


def extract_text(candidate: Dict[str, Any]) -> str:
    """Concatenate the text parts of a candidate (grounded replies may be split)."""
    return "".join(part["text"] for part in _parts(candidate) if isinstance(part.get("text"), str))


def extract_grounding(candidate: Dict[str, Any]) -> tuple[List[Dict[str, str]], List[str]]:
    """Return ([{uri, title}], [query]) from a candidate's groundingMetadata."""
    metadata = candidate.get("groundingMetadata")
    if not isinstance(metadata, dict):
        return [], []

    queries = [q for q in metadata.get("webSearchQueries") or [] if isinstance(q, str)]

    sources: List[Dict[str, str]] = []
    for chunk in metadata.get("groundingChunks") or []:
        web = chunk.get("web") if isinstance(chunk, dict) else None
        if not isinstance(web, dict):
            continue
        sources.append({"uri": web.get("uri") or "", "title": web.get("title") or ""})

    return sources, queries


def _first_candidate(data: Dict[str, Any], label: str) -> Dict[str, Any]:
    candidates = data.get("candidates") or []
    if not isinstance(candidates, list):
        logger.error("Gemini %s response has malformed candidates", label)
        raise UpstreamError()
    if not candidates:
        print(f"⚠️  [GEMINI] No candidates in {label} response")
        raise UpstreamEmptyResponse()

    candidate = candidates[0]
    if not isinstance(candidate, dict):
        logger.error("Gemini %s candidate is not an object", label)
        raise UpstreamError()
    return candidate


async def _post(
    url: str,
    payload: Dict[str, Any],
    *,
    api_key: str,
    timeout: float,
    client: Optional[httpx.AsyncClient],
    label: str,
) -> Dict[str, Any]:
    headers = {"Content-Type": "application/json", "x-goog-api-key": api_key}
    t0 = time.perf_counter()

    try:
        if client is not None:
            response = await client.post(url, headers=headers, json=payload, timeout=timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.post(url, headers=headers, json=payload)
    except httpx.TimeoutException as exc:
        duration = time.perf_counter() - t0
        print(f"❌ [GEMINI] {label} timed out after {duration:.1f}s")
        raise UpstreamError("AI model timed out, please try again") from exc
    except httpx.HTTPError as exc:
        print(f"❌ [GEMINI] {label} request failed: {exc}")
        raise UpstreamError() from exc

    duration = time.perf_counter() - t0
    print(f"📦 [GEMINI] {label} HTTP {response.status_code} ({duration:.1f}s)")

    if not response.is_success:
        logger.error("Gemini %s error response: %s", label, response.text[:400])
        raise UpstreamError()

    try:
        data = response.json()
    except ValueError as exc:
        logger.error("Gemini %s returned non-JSON body", label)
        raise UpstreamError() from exc

    if not isinstance(data, dict):
        logger.error("Gemini %s returned a non-object body", label)
        raise UpstreamError()
    return data


async def generate_grounded_analysis(
    prompt: str,
    *,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> GenerationResult:
    """Run one search-grounded generation and return text + citations.

    Raises
    ------
    UpstreamError
        Missing API key, transport failure, timeout, or non-2xx status.
    UpstreamEmptyResponse
        The endpoint answered without any candidate.
    """
    api_key = _get_api_key(api_key)
    model = model or settings.gemini_model

    payload = build_grounded_payload(
        prompt,
        max_output_tokens=settings.gemini_max_output_tokens,
        temperature=settings.gemini_temperature,
    )

    print(f"🧠 [GEMINI] Calling {model} with search grounding")
    data = await _post(
        _endpoint(model),
        payload,
        api_key=api_key,
        timeout=settings.gemini_timeout,
        client=client,
        label="analysis",
    )

    candidate = _first_candidate(data, "analysis")
    text = extract_text(candidate)
    sources, queries = extract_grounding(candidate)

    usage = data.get("usageMetadata")
    if isinstance(usage, dict):
        print(
            f"🧠 [GEMINI] Tokens used: prompt={usage.get('promptTokenCount', '?')}, "
            f"output={usage.get('candidatesTokenCount', '?')}"
        )
    print(f"🧠 [GEMINI] Output {len(text)} chars, {len(sources)} citations, {len(queries)} queries")

    return GenerationResult(raw_text=text, sources=sources, queries=queries)


async def generate_mockup_image(
    prompt: str,
    *,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> MockupImage:
    """Generate one mockup image and return the first inline image part."""
    api_key = _get_api_key(api_key)
    model = model or settings.gemini_image_model

    payload = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {"responseModalities": ["IMAGE"]},
    }

    print(f"🎨 [GEMINI] Calling {model} for mockup image")
    data = await _post(
        _endpoint(model),
        payload,
        api_key=api_key,
        timeout=settings.gemini_timeout,
        client=client,
        label="mockup",
    )

    for part in _parts(_first_candidate(data, "mockup")):
        inline = part.get("inlineData")
        if isinstance(inline, dict) and inline.get("data"):
            return MockupImage(data=inline["data"], mime_type=inline.get("mimeType") or "image/png")

    logger.error("Gemini mockup response contained no image part")
    raise UpstreamError("No image generated")
