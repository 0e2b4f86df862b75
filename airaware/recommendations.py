"""Prompt construction for the external health-recommendation generator.

The generator itself is an opaque chat-completion service owned by the
caller. This module only turns a profile plus the computed numbers into
system/user messages, and tidies the generator's reply for display.
"""

from __future__ import annotations

from airaware.aqi_categories import classify
from airaware.domain import RecommendationProfile


SYSTEM_PROMPT = (
    "You are an air quality health advisor. Provide concise, actionable recommendations based on "
    "the user's role and current air quality conditions. Be specific and practical."
)


def _strip_markdown_fences(text: str) -> str:
    """Remove surrounding Markdown code fences from text."""
    if not text:
        return text
    t = text.strip()
    if not t.startswith("```"):
        return t
    lines = t.splitlines()
    if lines and lines[0].strip().startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].strip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()


def build_user_prompt(
    profile: RecommendationProfile,
    aqi: int,
    temperature_c: float,
    humidity_percent: float,
) -> str:
    """Render the per-request prompt; the category comes from the shared classifier."""
    category = classify(aqi)
    conditions = ", ".join(profile.health_conditions) if profile.health_conditions else "None"
    return "\n".join([
        f"Role: {profile.role.replace('_', ' ')}",
        f"Location: {profile.location_name or 'User location'}",
        f"Current AQI: {aqi} ({category.label})",
        f"Temperature: {temperature_c}°C",
        f"Humidity: {humidity_percent}%",
        f"Health considerations: {conditions}",
        "",
        "Provide 2-3 specific, actionable recommendations for this person based on their role and the "
        "current air quality. Keep it concise and practical.",
    ])


def build_recommendation_messages(
    profile: RecommendationProfile,
    aqi: int,
    temperature_c: float,
    humidity_percent: float,
) -> list[dict]:
    """Prepare system+user chat messages for the recommendation generator."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(profile, aqi, temperature_c, humidity_percent)},
    ]


def clean_recommendation_text(raw_text: str) -> str:
    """Strip code fences and whitespace the generator adds despite instructions."""
    return _strip_markdown_fences(raw_text or "").strip()
