"""Prompt templates for the idea analyzer and the app mockup generator."""

from __future__ import annotations

from typing import Optional

# ── Output schema the model must follow ──────────────────────────────────
# Flat on purpose: the normalizer reshapes it into the nested display schema.

ANALYSIS_OUTPUT_SCHEMA = """\
{
  "name": "string - catchy startup name",
  "tagline": "string - short memorable tagline",
  "colors": ["primary hex", "secondary hex", "accent hex", "neutral hex"],
  "domain": ["domain1.com", "domain2.io", "domain3.app"],
  "stack": ["Tech1", "Tech2", "Tech3", "Tech4"],
  "interface": "string - brief description of main interface",
  "monetization": [
    {
      "model": "string - e.g. Freemium, Subscription, Marketplace",
      "pricing": "string - e.g. $29/mo, Free tier available",
      "strategies": ["Strategy1", "Strategy2", "Strategy3"],
      "examples": "string - similar companies using this model"
    }
  ],
  "market": {
    "tam": { "value": "$XXB", "label": "Market description" },
    "sam": { "value": "$XXM", "label": "Serviceable market" },
    "som": { "value": "$XXK", "label": "Initial target segment" },
    "aiInsight": "string - 2-3 sentence market analysis"
  },
  "sources": {
    "market": [{ "name": "Source Name", "url": "https://..." }],
    "competitors": [{ "name": "Source Name", "url": "https://..." }]
  },
  "customerSegments": [
    { "segment": "Segment Name", "age": "Age range", "income": "Income level", "interest": "Key interest" }
  ],
  "riskAnalysis": [
    { "risk": "Risk description", "mitigation": "How to mitigate", "productFeature": "Feature that addresses this" }
  ],
  "competitors": [
    { "name": "Competitor Name", "usp": "Their unique selling point", "weakness": "Their weakness you can exploit", "x": 0-100, "y": 0-100 }
  ],
  "marketGap": {
    "xAxis": { "label": "Axis label", "low": "Low end", "high": "High end" },
    "yAxis": { "label": "Axis label", "low": "Low end", "high": "High end" },
    "yourPosition": { "x": 0-100, "y": 0-100 },
    "yourGap": "Description of your unique position"
  },
  "searchVolume": [
    {
      "keyword": "Relevant keyword",
      "data": [
        { "name": "Y1", "users": 0 },
        { "name": "Y2", "users": 100 },
        { "name": "Y3", "users": 250 },
        { "name": "Y4", "users": 500 },
        { "name": "Y5", "users": 800 }
      ]
    }
  ],
  "promptChain": [
    { "step": 1, "title": "Step title", "prompt": "Full prompt for AI coding assistant" }
  ],
  "distributionChannels": [
    { "name": "Channel name", "type": "Reddit/Discord/Forum/Social", "members": "Size indicator" }
  ],
  "viability": 0-100,
  "scalability": 0-100,
  "complexity": 0-100
}"""


def build_analysis_prompt(idea: str) -> str:
    """Build the single analyst prompt sent to the grounded model.

    The idea text is embedded verbatim.
    """
    return f"""You are a startup analyst and market researcher. Analyze this startup idea and provide comprehensive data.

STARTUP IDEA: "{idea}"

IMPORTANT INSTRUCTIONS:
1. Use real-time web search to ground your answer in CURRENT, REAL market data
2. For TAM/SAM/SOM, use actual market research figures from the reports you find
3. For competitors, include REAL companies that operate in this space
4. For distribution channels, include REAL communities (actual subreddits, Discord servers, forums)
5. Search volume data should represent realistic 5-year Google Trends growth patterns
6. Viability score (0-100): How likely is this to succeed? Consider market fit, timing, competition
7. Scalability score (0-100): How easily can this scale? Consider tech, ops, market size
8. Complexity score (0-100): How hard is this to build? Higher = more complex

For the perceptual map (competitors and marketGap):
- X-axis goes from LOW (left, value 0) to HIGH (right, value 100)
- Y-axis goes from LOW (bottom, value 0) to HIGH (top, value 100)
- Position competitors and "yourPosition" based on where they fall on these spectrums

Generate 3 monetization strategies, 3 customer segments, 3 risks, 3-5 competitors, 3 search keywords, 3 prompt chain steps, and 5 distribution channels.

Respond with ONLY valid JSON matching this exact schema (no markdown fences, no commentary):
{ANALYSIS_OUTPUT_SCHEMA}"""


# ── Mockup image prompt ──────────────────────────────────────────────────

def build_mockup_prompt(
    idea: str,
    startup_name: Optional[str] = None,
    app_description: Optional[str] = None,
) -> str:
    """Build the prompt for a single flat mobile UI screen."""
    return f"""Generate a high-fidelity mobile app UI screen design for a startup app.

APP DETAILS:
- Name: "{startup_name or 'Startup App'}"
- Concept: "{idea}"
- Main Interface: "{app_description or 'A modern mobile app interface'}"

CRITICAL REQUIREMENTS (STRICT):
1. Generate ONLY the raw screen UI content.
2. ABSOLUTELY NO phone hardware, NO bezels, NO notch, NO device frame, NO rounded corners on the image itself.
3. The output must be a perfectly rectangular, flat image.
4. Aspect Ratio: 9:21 (matches modern tall smartphones).
5. Include a modern status bar at the top (time, battery, signal) integrated into the design.
6. Use a clean, modern, and premium design aesthetic.
7. Show the app in a "live" state with realistic content.

DO NOT INCLUDE:
- Any part of a phone body or case.
- Perspective tilts or 3D effects (must be flat 2D).
- Shadows around the device.
- Backgrounds behind the phone (the image should fill the entire canvas).

Style: Modern, minimal, professional iOS/Android app screen design. Dark or light theme based on what suits the concept best."""
