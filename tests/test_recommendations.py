import pytest

from airaware.aqi_categories import classify
from airaware.domain import RecommendationProfile
from airaware.recommendations import (
    SYSTEM_PROMPT,
    build_recommendation_messages,
    build_user_prompt,
    clean_recommendation_text,
)


def _profile(**overrides):
    data = {"role": "outdoor_worker", "health_conditions": ["asthma", "allergies"], "location_name": "Austin"}
    data.update(overrides)
    return RecommendationProfile(**data)


def test_build_messages_has_system_and_user():
    msgs = build_recommendation_messages(_profile(), 120, 31, 70)
    assert [m["role"] for m in msgs] == ["system", "user"]
    assert msgs[0]["content"] == SYSTEM_PROMPT
    content = msgs[1]["content"]
    assert "Role: outdoor worker" in content
    assert "Location: Austin" in content
    assert "Current AQI: 120 (Unhealthy for Sensitive Groups)" in content
    assert "Temperature: 31°C" in content
    assert "Humidity: 70%" in content
    assert "Health considerations: asthma, allergies" in content


def test_role_underscores_all_become_spaces():
    content = build_user_prompt(_profile(role="night_shift_worker"), 40, 20, 50)
    assert "Role: night shift worker" in content


def test_defaults_for_missing_profile_fields():
    content = build_user_prompt(_profile(health_conditions=[], location_name=None), 40, 20, 50)
    assert "Location: User location" in content
    assert "Health considerations: None" in content


@pytest.mark.parametrize("aqi", [0, 50, 51, 100, 101, 150, 151, 200, 201, 300, 301, 450])
def test_prompt_category_matches_dashboard_classifier(aqi):
    content = build_user_prompt(_profile(), aqi, 20, 50)
    assert f"Current AQI: {aqi} ({classify(aqi).label})" in content


def test_clean_recommendation_text_strips_fences():
    raw = "```markdown\n- Wear an N95 mask\n- Limit exertion\n```"
    assert clean_recommendation_text(raw) == "- Wear an N95 mask\n- Limit exertion"
    assert clean_recommendation_text("  plain text  ") == "plain text"
    assert clean_recommendation_text(None) == ""
