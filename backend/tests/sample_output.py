"""Literal Gemini outputs used across the analyzer tests."""

import json

SAMPLE_MODEL_OUTPUT = {
    "name": "PlateWise",
    "tagline": "Dinner, decided.",
    "colors": ["#2A9D8F", "#0A0A0A", "#FFFFFF", "#E9C46A"],
    "domain": ["platewise.app", "platewise.io"],
    "stack": ["Next.js", "Supabase", "OpenAI", "Stripe"],
    "interface": "Weekly planner with swipeable recipe cards",
    "monetization": [
        {
            "model": "Freemium",
            "pricing": "$7.99/mo",
            "strategies": ["Free 3-day plans", "Paid grocery sync"],
            "examples": "Mealime, Eat This Much",
        }
    ],
    "market": {
        "tam": {"value": "$14.2B", "label": "Global meal-kit and planning market"},
        "sam": {"value": "$1.1B", "label": "Digital meal planning apps"},
        "som": {"value": "$5M", "label": "UK students and young professionals"},
        "aiInsight": "Meal planning is crowded but retention is poor.",
    },
    "sources": {
        "market": [{"name": "Statista", "url": "https://statista.com/meal-kits"}],
        "competitors": [{"name": "Crunchbase", "url": "https://crunchbase.com/mealime"}],
    },
    "customerSegments": [
        {"segment": "Students", "age": "18-24", "income": "Low", "interest": "Budget cooking"}
    ],
    "riskAnalysis": [
        {"risk": "Low retention", "mitigation": "Streaks", "productFeature": "Weekly goals"}
    ],
    "competitors": [
        {"name": "Mealime", "usp": "Simple UI", "weakness": "No budget mode", "x": 30, "y": 70},
        {"name": "Eat This Much", "usp": "Macros", "weakness": "Complex", "x": 80, "y": 40},
    ],
    "marketGap": {
        "xAxis": {"label": "Price", "low": "Free", "high": "Premium"},
        "yAxis": {"label": "Personalization", "low": "Generic", "high": "Tailored"},
        "yourPosition": {"x": 20, "y": 90},
        "yourGap": "Cheap and personal",
    },
    "searchVolume": [
        {"keyword": "meal planner", "data": [{"name": "Y1", "users": 100}, {"name": "Y2", "users": 250}]}
    ],
    "promptChain": [
        {"step": 1, "title": "Planner", "prompt": "Build a weekly planner"},
        {"step": 2, "title": "Recipes", "prompt": "Add recipe cards"},
    ],
    "distributionChannels": [
        {"name": "r/MealPrepSunday", "type": "Reddit", "members": "3M+"}
    ],
    "viability": 72,
    "scalability": 65,
    "complexity": 45,
}

GROUNDING_SOURCES = [
    {"uri": "https://example.com/market-report", "title": "Meal Kit Market Report"},
    {"uri": "https://example.com/trends", "title": "Food App Trends"},
    {"uri": "https://example.com/mealime", "title": "Mealime Review"},
    {"uri": "https://example.com/eatthismuch", "title": "Eat This Much"},
]

GROUNDING_QUERIES = ["meal planning app market size", "meal planning app competitors"]


def fenced(payload=None):
    """The model reply wrapped in a ```json fence, as Gemini often returns it."""
    return "```json\n" + json.dumps(payload if payload is not None else SAMPLE_MODEL_OUTPUT) + "\n```"


def gemini_response(text, sources=None, queries=None):
    """A generateContent response body with optional grounding metadata."""
    candidate = {"content": {"role": "model", "parts": [{"text": text}]}}
    if sources is not None or queries is not None:
        candidate["groundingMetadata"] = {
            "webSearchQueries": queries or [],
            "groundingChunks": [{"web": s} for s in (sources or [])],
        }
    return {"candidates": [candidate], "usageMetadata": {"promptTokenCount": 900, "candidatesTokenCount": 2100}}
