"""Normalizer tests — fence stripping, defaults, scores, source bucketing."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import copy
import json

import pytest

from app.agents.idea_analyzer.normalizer import (
    DEFAULT_COLORS,
    PLACEHOLDER_SCREENS,
    clamp_score,
    complexity_label,
    normalize,
    parse_model_json,
    strip_code_fences,
)
from app.errors import ParseError

from sample_output import GROUNDING_QUERIES, GROUNDING_SOURCES, SAMPLE_MODEL_OUTPUT, fenced


def _citations(n):
    return [{"uri": f"https://example.com/{i}", "title": f"Source {i}"} for i in range(n)]


# ===================================================================== #
#  Parsing                                                               #
# ===================================================================== #

class TestParsing:
    def test_strips_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_strips_bare_fence(self):
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_unfenced_text_untouched(self):
        assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'

    def test_fenced_and_plain_give_same_result(self):
        plain = normalize(json.dumps(SAMPLE_MODEL_OUTPUT))
        wrapped = normalize(fenced())
        assert plain == wrapped

    def test_prose_around_json_is_ignored(self):
        parsed = parse_model_json('Here is the analysis:\n{"name": "X"}\nHope this helps.')
        assert parsed == {"name": "X"}

    def test_trailing_prose_after_json_is_ignored(self):
        parsed = parse_model_json('{"name": "X", "tags": {"a": 1}}\nHope this helps.')
        assert parsed == {"name": "X", "tags": {"a": 1}}

    def test_fenced_json_with_trailing_prose(self):
        data = normalize(fenced() + "\nLet me know if you need more detail.")
        assert data.identity.name == "PlateWise"

    def test_invalid_json_raises_parse_error_with_text(self):
        bad = '```json\n{"name": "X", "tagline": \n```'
        with pytest.raises(ParseError) as info:
            normalize(bad)
        assert info.value.raw_text == bad
        assert info.value.status_code == 500
        assert info.value.message == "Failed to parse AI response"
        assert info.value.reason.startswith("AI response is not valid JSON")

    def test_trailing_comma_is_not_repaired(self):
        with pytest.raises(ParseError):
            parse_model_json('{"name": "X",}')

    def test_empty_text_raises(self):
        with pytest.raises(ParseError):
            normalize("")

    def test_non_object_json_raises(self):
        with pytest.raises(ParseError):
            normalize("[1, 2, 3]")


# ===================================================================== #
#  Shape + defaults                                                      #
# ===================================================================== #

class TestReshape:
    def test_full_output_maps_to_display_schema(self):
        data = normalize(fenced(), GROUNDING_SOURCES, GROUNDING_QUERIES).to_wire()

        assert data["identity"]["name"] == "PlateWise"
        assert data["identity"]["domain"] == ["platewise.app", "platewise.io"]
        assert data["identity"]["available"] is True
        assert data["monetization"][0]["examples"] == "Mealime, Eat This Much"
        assert data["visuals"]["appInterface"] == "Weekly planner with swipeable recipe cards"
        assert data["blueprint"]["stack"][0] == "Next.js"
        assert data["blueprint"]["timeline"] == "2 Weekends"
        assert data["validation"]["tam"] == {"value": "$14.2B", "label": "Global meal-kit and planning market"}
        assert data["validation"]["competitors"] == 2
        assert data["validation"]["competitorList"][1]["name"] == "Eat This Much"
        assert data["validation"]["riskAnalysis"][0]["productFeature"] == "Weekly goals"
        assert data["validation"]["searchVolume"][0]["data"][1] == {"name": "Y2", "users": 250}
        assert data["validation"]["marketGap"]["yourPosition"] == {"x": 20, "y": 90}
        assert data["validation"]["scores"] == {"viability": 72, "scalability": 65, "complexity": 45}
        assert data["distributionChannels"][0]["name"] == "r/MealPrepSunday"
        assert data["customerSegments"][0]["segment"] == "Students"
        assert [s["step"] for s in data["promptChain"]] == [1, 2]
        assert data["sources"]["queries"] == GROUNDING_QUERIES

    def test_screens_are_fixed_placeholder(self):
        payload = dict(SAMPLE_MODEL_OUTPUT, screens=[{"type": "chat", "title": "Chat"}])
        data = normalize(json.dumps(payload)).to_wire()
        assert data["visuals"]["screens"] == PLACEHOLDER_SCREENS

    def test_sparse_json_gets_defaults(self):
        data = normalize('{"name": "Tiny"}').to_wire()

        assert data["identity"]["name"] == "Tiny"
        assert data["identity"]["colors"] == DEFAULT_COLORS
        assert data["identity"]["domain"] == []
        assert data["monetization"] == []
        assert data["distributionChannels"] == []
        assert data["customerSegments"] == []
        assert data["promptChain"] == []
        assert data["validation"]["competitorList"] == []
        assert data["validation"]["riskAnalysis"] == []
        assert data["validation"]["searchVolume"] == []
        assert data["validation"]["tam"]["value"] == "N/A"
        assert data["validation"]["aiInsight"] == ""
        assert data["validation"]["scores"] == {"viability": 0, "scalability": 0, "complexity": 0}
        assert data["blueprint"]["complexity"] == "Low"
        assert data["sources"] == {"citations": [], "queries": [], "market": [], "competitors": []}

    def test_missing_market_block_does_not_crash(self):
        payload = copy.deepcopy(SAMPLE_MODEL_OUTPUT)
        del payload["market"]
        data = normalize(json.dumps(payload)).to_wire()
        assert data["validation"]["sam"] == {"value": "N/A", "label": ""}

    def test_wrong_types_fall_back_to_defaults(self):
        payload = {
            "domain": "solo.app",
            "stack": "Django",
            "competitors": "none",
            "monetization": [{"model": "Ads", "examples": ["A", "B"]}, "junk"],
            "promptChain": [{"title": "First"}, {"title": "Second"}],
        }
        data = normalize(json.dumps(payload)).to_wire()
        assert data["identity"]["domain"] == ["solo.app"]
        assert data["blueprint"]["stack"] == ["Django"]
        assert data["validation"]["competitorList"] == []
        assert len(data["monetization"]) == 1
        assert data["monetization"][0]["examples"] == "A, B"
        assert [s["step"] for s in data["promptChain"]] == [1, 2]

    def test_normalize_is_deterministic(self):
        first = normalize(fenced(), GROUNDING_SOURCES, GROUNDING_QUERIES)
        second = normalize(fenced(), GROUNDING_SOURCES, GROUNDING_QUERIES)
        assert first == second
        assert first.to_wire() == second.to_wire()


# ===================================================================== #
#  Scores                                                                #
# ===================================================================== #

class TestScores:
    @pytest.mark.parametrize(
        "score, label",
        [(70, "Medium"), (71, "High"), (40, "Low"), (41, "Medium"), (0, "Low"), (100, "High")],
    )
    def test_complexity_label_boundaries(self, score, label):
        assert complexity_label(score) == label

    def test_complexity_label_follows_output_score(self):
        payload = dict(SAMPLE_MODEL_OUTPUT, complexity=71)
        assert normalize(json.dumps(payload)).blueprint.complexity == "High"
        payload = dict(SAMPLE_MODEL_OUTPUT, complexity=70)
        assert normalize(json.dumps(payload)).blueprint.complexity == "Medium"

    def test_scores_are_clamped(self):
        assert clamp_score(150) == 100
        assert clamp_score(-20) == 0
        assert clamp_score("85") == 85
        assert clamp_score("62%") == 62
        assert clamp_score("high") == 0
        assert clamp_score(None) == 0
        assert clamp_score(True) == 0

    def test_coordinates_are_clamped(self):
        payload = dict(
            SAMPLE_MODEL_OUTPUT,
            competitors=[{"name": "Wild", "x": 140, "y": -5}],
            marketGap={"yourPosition": {"x": "300", "y": 50.4}},
        )
        data = normalize(json.dumps(payload)).to_wire()
        assert data["validation"]["competitorList"][0]["x"] == 100
        assert data["validation"]["competitorList"][0]["y"] == 0
        assert data["validation"]["marketGap"]["yourPosition"] == {"x": 100, "y": 50}


# ===================================================================== #
#  Source bucketing (positional heuristic)                               #
# ===================================================================== #

class TestSourceBucketing:
    @pytest.mark.parametrize("n, market, competitors", [(1, 1, 0), (2, 1, 1), (4, 2, 2), (5, 3, 2), (7, 4, 3)])
    def test_split_at_ceil_midpoint(self, n, market, competitors):
        sources = normalize(fenced(), _citations(n)).sources
        assert len(sources.market) == market
        assert len(sources.competitors) == competitors

    def test_order_is_preserved(self):
        sources = normalize(fenced(), _citations(5)).sources
        assert [link.url for link in sources.market] == [f"https://example.com/{i}" for i in range(3)]
        assert [link.url for link in sources.competitors] == ["https://example.com/3", "https://example.com/4"]

    def test_citation_title_becomes_name(self):
        sources = normalize(fenced(), GROUNDING_SOURCES).sources
        assert sources.market[0].name == "Meal Kit Market Report"
        assert sources.market[0].url == "https://example.com/market-report"

    def test_untitled_citation_uses_uri_as_name(self):
        sources = normalize(fenced(), [{"uri": "https://a.example", "title": ""}]).sources
        assert sources.market[0].name == "https://a.example"

    def test_citations_without_uri_are_dropped(self):
        raw = [{"uri": "", "title": "Empty"}, {"title": "No uri"}] + _citations(2)
        sources = normalize(fenced(), raw).sources
        assert len(sources.citations) == 2
        assert len(sources.market) == 1
        assert len(sources.competitors) == 1

    def test_no_citations_falls_back_to_inline_sources(self):
        sources = normalize(fenced(), []).sources
        assert sources.citations == []
        assert [link.name for link in sources.market] == ["Statista"]
        assert [link.url for link in sources.competitors] == ["https://crunchbase.com/mealime"]

    def test_no_citations_and_no_inline_sources(self):
        payload = copy.deepcopy(SAMPLE_MODEL_OUTPUT)
        del payload["sources"]
        sources = normalize(json.dumps(payload), []).sources
        assert sources.market == []
        assert sources.competitors == []
