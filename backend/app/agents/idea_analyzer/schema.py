"""Pydantic schemas for the idea analyzer's display-ready output.

Field names are snake_case in Python and camelCase on the wire
(``model_dump(by_alias=True)``), matching what the Launchpad UI reads.
Every list defaults to empty so the UI can render without null checks.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ComplexityLabel = Literal["Low", "Medium", "High"]


class _DisplayModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── identity / monetization / visuals / blueprint ────────────────────────

class Identity(_DisplayModel):
    name: str = ""
    tagline: str = ""
    colors: List[str] = Field(default_factory=list, description="Brand colors as hex strings")
    domain: List[str] = Field(default_factory=list, description="Candidate domains")
    available: bool = True


class MonetizationModel(_DisplayModel):
    model: str = ""
    pricing: str = ""
    strategies: List[str] = Field(default_factory=list)
    examples: str = Field(default="", description="Comparable companies using this model")


class Screen(_DisplayModel):
    type: str
    title: str


class Visuals(_DisplayModel):
    logo_style: str = "Minimalist"
    app_interface: str = ""
    screens: List[Screen] = Field(default_factory=list)


class Blueprint(_DisplayModel):
    stack: List[str] = Field(default_factory=list)
    complexity: ComplexityLabel = "Low"
    timeline: str = "2 Weekends"


class DistributionChannel(_DisplayModel):
    name: str = ""
    type: str = ""
    members: str = ""


# ── validation block ─────────────────────────────────────────────────────

class MarketSize(_DisplayModel):
    value: str = "N/A"
    label: str = ""


class Competitor(_DisplayModel):
    name: str = ""
    usp: str = ""
    weakness: str = ""
    x: int = Field(default=0, ge=0, le=100, description="Perceptual map x (0-100)")
    y: int = Field(default=0, ge=0, le=100, description="Perceptual map y (0-100)")


class Risk(_DisplayModel):
    risk: str = ""
    mitigation: str = ""
    product_feature: str = ""


class SearchVolumePoint(_DisplayModel):
    name: str = ""
    users: int = 0


class SearchVolumeSeries(_DisplayModel):
    keyword: str = ""
    data: List[SearchVolumePoint] = Field(default_factory=list)


class Axis(_DisplayModel):
    label: str = ""
    low: str = ""
    high: str = ""


class Position(_DisplayModel):
    x: int = Field(default=0, ge=0, le=100)
    y: int = Field(default=0, ge=0, le=100)


class MarketGap(_DisplayModel):
    x_axis: Axis = Field(default_factory=Axis)
    y_axis: Axis = Field(default_factory=Axis)
    your_position: Position = Field(default_factory=Position)
    your_gap: str = ""


class Scores(_DisplayModel):
    viability: int = Field(default=0, ge=0, le=100)
    scalability: int = Field(default=0, ge=0, le=100)
    complexity: int = Field(default=0, ge=0, le=100)


class Validation(_DisplayModel):
    tam: MarketSize = Field(default_factory=MarketSize)
    sam: MarketSize = Field(default_factory=MarketSize)
    som: MarketSize = Field(default_factory=MarketSize)
    ai_insight: str = ""
    competitors: int = Field(default=0, description="Number of entries in competitor_list")
    competitor_list: List[Competitor] = Field(default_factory=list)
    risk_analysis: List[Risk] = Field(default_factory=list)
    search_volume: List[SearchVolumeSeries] = Field(default_factory=list)
    market_gap: MarketGap = Field(default_factory=MarketGap)
    scores: Scores = Field(default_factory=Scores)


# ── sources ──────────────────────────────────────────────────────────────

class Citation(_DisplayModel):
    """A raw grounding citation from the search-grounded model call."""

    uri: str
    title: str = ""


class SourceLink(_DisplayModel):
    name: str = ""
    url: str = ""


class Sources(_DisplayModel):
    citations: List[Citation] = Field(default_factory=list)
    queries: List[str] = Field(default_factory=list)
    market: List[SourceLink] = Field(default_factory=list)
    competitors: List[SourceLink] = Field(default_factory=list)


# ── remaining sections ───────────────────────────────────────────────────

class CustomerSegment(_DisplayModel):
    segment: str = ""
    age: str = ""
    income: str = ""
    interest: str = ""


class PromptStep(_DisplayModel):
    step: int = 1
    title: str = ""
    prompt: str = ""


class AnalysisData(_DisplayModel):
    """Complete display-ready analysis, stored as the ``data`` of a record."""

    identity: Identity = Field(default_factory=Identity)
    monetization: List[MonetizationModel] = Field(default_factory=list)
    visuals: Visuals = Field(default_factory=Visuals)
    blueprint: Blueprint = Field(default_factory=Blueprint)
    distribution_channels: List[DistributionChannel] = Field(default_factory=list)
    validation: Validation = Field(default_factory=Validation)
    sources: Sources = Field(default_factory=Sources)
    customer_segments: List[CustomerSegment] = Field(default_factory=list)
    prompt_chain: List[PromptStep] = Field(default_factory=list)

    def to_wire(self) -> dict:
        """camelCase dict as returned to the UI and persisted."""
        return self.model_dump(by_alias=True)
