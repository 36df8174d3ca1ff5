"""Response normalizer — raw model text → display-ready AnalysisData.

Pure: no I/O, no clock, no randomness. Given the same
``(raw_text, sources, queries)`` it always returns the same result.

Policy:
  - Surrounding code fences are stripped before parsing.
  - Text that is not a complete JSON object raises ParseError. Sparse but
    valid JSON never does: every missing field gets a safe default.
  - Scores and perceptual-map coordinates are clamped to 0-100 and rounded.
  - Grounding citations are split into "market" and "competitor" buckets
    by position (first half / second half). This is a positional heuristic,
    not a classification of what each page is about.
"""

from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Optional, Sequence

from ...errors import ParseError
from .schema import (
    AnalysisData,
    Axis,
    Blueprint,
    Citation,
    Competitor,
    CustomerSegment,
    DistributionChannel,
    Identity,
    MarketGap,
    MarketSize,
    MonetizationModel,
    Position,
    PromptStep,
    Risk,
    Scores,
    Screen,
    SearchVolumePoint,
    SearchVolumeSeries,
    SourceLink,
    Sources,
    Validation,
    Visuals,
)

DEFAULT_COLORS: List[str] = ["#FF1F1F", "#0A0A0A"]

DEFAULT_TIMELINE = "2 Weekends"

PLACEHOLDER_SCREENS: List[Dict[str, str]] = [
    {"type": "map", "title": "Home"},
    {"type": "feed", "title": "Feed"},
    {"type": "profile", "title": "Profile"},
]


# ── Parsing ──────────────────────────────────────────────────────────────

def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json / ``` fence, if any."""
    cleaned = text.strip().lstrip("\ufeff")
    if not cleaned.startswith("```"):
        return cleaned

    body = cleaned[3:]
    if body[:4].lower() == "json":
        body = body[4:]

    body = body.rstrip()
    if body.endswith("```"):
        body = body[:-3]
    return body.strip()


def _object_span(text: str) -> Optional[str]:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def parse_model_json(raw_text: str) -> Dict[str, Any]:
    """Parse the model's text into a dict or raise ParseError.

    Grounded responses sometimes put a sentence before or after the JSON;
    when the whole text does not parse, the span from the first '{' to the
    last '}' is tried instead. Nothing else is repaired.
    """
    text = strip_code_fences(raw_text or "")
    if not text:
        raise ParseError("AI response was empty", raw_text=raw_text or "")

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        candidate = _object_span(text)
        if candidate is None:
            raise ParseError("AI response did not contain a JSON object", raw_text=raw_text) from exc
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as span_exc:
            raise ParseError(f"AI response is not valid JSON: {span_exc.msg}", raw_text=raw_text) from span_exc

    if not isinstance(parsed, dict):
        raise ParseError("AI response JSON is not an object", raw_text=raw_text)
    return parsed


# ── Field coercion helpers ───────────────────────────────────────────────

def _text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _dicts(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _strings(value: Any) -> List[str]:
    """List of non-empty strings; a bare string becomes a one-item list."""
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if not isinstance(value, list):
        return []
    return [s for s in (_text(v) for v in value) if s]


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def clamp_score(value: Any) -> int:
    """Coerce to an integer in 0..100. Anything non-numeric becomes 0."""
    number = _number(value)
    if number is None:
        return 0
    return int(round(min(100.0, max(0.0, number))))


def _count(value: Any) -> int:
    number = _number(value)
    if number is None or number < 0:
        return 0
    return int(round(number))


def complexity_label(score: float) -> str:
    """High above 70, Medium above 40, Low otherwise (70 → Medium, 40 → Low)."""
    if score > 70:
        return "High"
    if score > 40:
        return "Medium"
    return "Low"


# ── Sources ──────────────────────────────────────────────────────────────

def _usable_citations(sources: Sequence[Dict[str, Any]]) -> List[Citation]:
    citations: List[Citation] = []
    for source in sources or []:
        if not isinstance(source, dict):
            continue
        uri = _text(source.get("uri"))
        if not uri:
            continue
        citations.append(Citation(uri=uri, title=_text(source.get("title"))))
    return citations


def split_citations(citations: Sequence[Citation]) -> tuple[List[SourceLink], List[SourceLink]]:
    """First ceil(n/2) citations → market, the rest → competitors, order kept."""
    links = [SourceLink(name=c.title or c.uri, url=c.uri) for c in citations]
    midpoint = math.ceil(len(links) / 2)
    return links[:midpoint], links[midpoint:]


def _inline_links(value: Any) -> List[SourceLink]:
    links = []
    for item in _dicts(value):
        url = _text(item.get("url"))
        name = _text(item.get("name")) or url
        if name or url:
            links.append(SourceLink(name=name, url=url))
    return links


def build_sources(
    raw: Dict[str, Any],
    sources: Sequence[Dict[str, Any]],
    queries: Sequence[str],
) -> Sources:
    citations = _usable_citations(sources)
    if citations:
        market, competitors = split_citations(citations)
    else:
        # No grounding at all: fall back to whatever the model wrote inline
        inline = _dict(raw.get("sources"))
        market = _inline_links(inline.get("market"))
        competitors = _inline_links(inline.get("competitors"))

    return Sources(
        citations=citations,
        queries=_strings(list(queries or [])),
        market=market,
        competitors=competitors,
    )


# ── Section builders ─────────────────────────────────────────────────────

def _identity(raw: Dict[str, Any]) -> Identity:
    colors = _strings(raw.get("colors"))
    return Identity(
        name=_text(raw.get("name")),
        tagline=_text(raw.get("tagline")),
        colors=colors or list(DEFAULT_COLORS),
        domain=_strings(raw.get("domain")),
        available=True,
    )


def _monetization(raw: Dict[str, Any]) -> List[MonetizationModel]:
    models = []
    for item in _dicts(raw.get("monetization")):
        examples = item.get("examples")
        if isinstance(examples, list):
            examples = ", ".join(_strings(examples))
        models.append(
            MonetizationModel(
                model=_text(item.get("model")),
                pricing=_text(item.get("pricing")),
                strategies=_strings(item.get("strategies")),
                examples=_text(examples),
            )
        )
    return models


def _market_size(value: Any) -> MarketSize:
    data = _dict(value)
    return MarketSize(
        value=_text(data.get("value")) or "N/A",
        label=_text(data.get("label")),
    )


def _axis(value: Any) -> Axis:
    data = _dict(value)
    return Axis(label=_text(data.get("label")), low=_text(data.get("low")), high=_text(data.get("high")))


def _validation(raw: Dict[str, Any], scores: Scores) -> Validation:
    market = _dict(raw.get("market"))

    competitors = [
        Competitor(
            name=_text(c.get("name")),
            usp=_text(c.get("usp")),
            weakness=_text(c.get("weakness")),
            x=clamp_score(c.get("x")),
            y=clamp_score(c.get("y")),
        )
        for c in _dicts(raw.get("competitors"))
    ]

    risks = [
        Risk(
            risk=_text(r.get("risk")),
            mitigation=_text(r.get("mitigation")),
            product_feature=_text(r.get("productFeature")),
        )
        for r in _dicts(raw.get("riskAnalysis"))
    ]

    search_volume = [
        SearchVolumeSeries(
            keyword=_text(series.get("keyword")),
            data=[
                SearchVolumePoint(name=_text(point.get("name")), users=_count(point.get("users")))
                for point in _dicts(series.get("data"))
            ],
        )
        for series in _dicts(raw.get("searchVolume"))
    ]

    gap = _dict(raw.get("marketGap"))
    position = _dict(gap.get("yourPosition"))
    market_gap = MarketGap(
        x_axis=_axis(gap.get("xAxis")),
        y_axis=_axis(gap.get("yAxis")),
        your_position=Position(x=clamp_score(position.get("x")), y=clamp_score(position.get("y"))),
        your_gap=_text(gap.get("yourGap")),
    )

    return Validation(
        tam=_market_size(market.get("tam")),
        sam=_market_size(market.get("sam")),
        som=_market_size(market.get("som")),
        ai_insight=_text(market.get("aiInsight")),
        competitors=len(competitors),
        competitor_list=competitors,
        risk_analysis=risks,
        search_volume=search_volume,
        market_gap=market_gap,
        scores=scores,
    )


def _prompt_chain(raw: Dict[str, Any]) -> List[PromptStep]:
    steps = []
    for position, item in enumerate(_dicts(raw.get("promptChain")), start=1):
        step = _number(item.get("step"))
        steps.append(
            PromptStep(
                step=int(step) if step is not None else position,
                title=_text(item.get("title")),
                prompt=_text(item.get("prompt")),
            )
        )
    return steps


# ── Public entry points ──────────────────────────────────────────────────

def reshape(
    raw: Dict[str, Any],
    sources: Sequence[Dict[str, Any]] = (),
    queries: Sequence[str] = (),
) -> AnalysisData:
    """Map the model's flat JSON onto the nested display schema."""
    scores = Scores(
        viability=clamp_score(raw.get("viability")),
        scalability=clamp_score(raw.get("scalability")),
        complexity=clamp_score(raw.get("complexity")),
    )

    return AnalysisData(
        identity=_identity(raw),
        monetization=_monetization(raw),
        visuals=Visuals(
            logo_style="Minimalist",
            app_interface=_text(raw.get("interface")),
            screens=[Screen(**screen) for screen in PLACEHOLDER_SCREENS],
        ),
        blueprint=Blueprint(
            stack=_strings(raw.get("stack")),
            complexity=complexity_label(scores.complexity),
            timeline=DEFAULT_TIMELINE,
        ),
        distribution_channels=[
            DistributionChannel(
                name=_text(c.get("name")),
                type=_text(c.get("type")),
                members=_text(c.get("members")),
            )
            for c in _dicts(raw.get("distributionChannels"))
        ],
        validation=_validation(raw, scores),
        sources=build_sources(raw, sources, queries),
        customer_segments=[
            CustomerSegment(
                segment=_text(s.get("segment")),
                age=_text(s.get("age")),
                income=_text(s.get("income")),
                interest=_text(s.get("interest")),
            )
            for s in _dicts(raw.get("customerSegments"))
        ],
        prompt_chain=_prompt_chain(raw),
    )


def normalize(
    raw_text: str,
    sources: Sequence[Dict[str, Any]] = (),
    queries: Sequence[str] = (),
) -> AnalysisData:
    """Parse and reshape one model completion. Raises ParseError if unparsable."""
    return reshape(parse_model_json(raw_text), sources, queries)
