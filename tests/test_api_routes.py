"""
Tests for the HTTP API routes.
"""

import pytest
from fastapi.testclient import TestClient

from evidence_coach.server.main import app, healthz

client = TestClient(app)


def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["ok"] is True


def test_list_templates():
    """Test that the compiled catalogue is listed in snapshot order."""
    response = client.get("/api/v1/templates")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["total"] == 7
    first = data["items"][0]
    assert first["id"] == "upper-lower-4-evidence-v2"
    assert first["confidence"] == "solid"
    assert first["day_names"] == ["Lower A", "Upper A", "Lower B", "Upper B"]


def test_get_template_and_missing_template():
    response = client.get("/api/v1/templates/ppl-3-evidence-v1")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Evidence Push/Pull/Legs (3 days)"
    assert data["evidence"]["label"] == "Evidence-informed"

    assert client.get("/api/v1/templates/unknown").status_code == 404


def test_recommend_accepts_camel_case_answers():
    """Test that the web client's camelCase payload is ranked."""
    response = client.post(
        "/api/v1/program/recommend", json={"daysPerWeek": 4, "focus": "upper_focus"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["best_id"] == "upper-lower-4-evidence-upper-focus-v1"
    assert len(data["ranking"]) == 7
    assert data["ranking"][0]["score"] == 142


def test_recommend_rejects_out_of_range_days():
    response = client.post("/api/v1/program/recommend", json={"daysPerWeek": 9})
    assert response.status_code == 422


def test_design_with_deprecated_equipment():
    """Test that legacy equipment values design a dumbbell-only program."""
    response = client.post(
        "/api/v1/program/design",
        json={"daysPerWeek": 4, "equipment": "minimal", "sessionLength": "short"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["base_template"]["id"] == "upper-lower-4-evidence-v2"
    guided = data["guided_template"]
    assert guided["name"] == "Evidence Upper/Lower (4 days) · Guided"
    assert "dumbbell-and-bodyweight substitutions" in guided["description"]
    names = [e["name"] for d in guided["days"] for e in d["exercises"]]
    assert not any("Barbell" in n for n in names)
    assert data["message"].startswith("**Evidence Upper/Lower (4 days) · Guided**")


def test_design_with_explicit_template():
    response = client.post(
        "/api/v1/program/design",
        json={"days_per_week": 3, "template_id": "full-body-3-evidence-v1"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["base_template"]["id"] == "full-body-3-evidence-v1"
    assert data["score"] is None

    response = client.post(
        "/api/v1/program/design", json={"daysPerWeek": 3, "templateId": "nope"}
    )
    assert response.status_code == 404


def test_program_volume():
    response = client.post(
        "/api/v1/program/volume",
        json={
            "templateId": "ppl-3-evidence-v1",
            "landmarks": {"chest": {"mev": 1, "mav_low": 2, "mav_high": 3, "mrv": 4}},
        },
    )
    assert response.status_code == 200
    muscles = {m["muscle_group"]: m for m in response.json()["muscles"]}
    assert muscles["chest"]["landmark"]["mrv"] == 4
    assert muscles["chest"]["status"] == "above_mrv"
    assert muscles["quads"]["status"] == "below_mev"

    response = client.post("/api/v1/program/volume", json={"templateId": "nope"})
    assert response.status_code == 404


def test_exercise_profile_lookup():
    response = client.get("/api/v1/exercises/profile", params={"q": "Pull-Up"})
    assert response.status_code == 200
    data = response.json()
    assert data["normalized"] == "pullup"
    assert data["tier"] == "bodyweight"
    assert data["profile"]["primary_muscle"] == "back"

    data = client.get("/api/v1/exercises/profile", params={"q": "Mystery"}).json()
    assert data["profile"] is None
    assert data["tier"] == "unknown"


def test_exercise_substitute():
    response = client.get(
        "/api/v1/exercises/substitute", params={"q": "Barbell Back Squat"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Goblet Squat"
    assert data["substituted"] is True
    assert data["compatible"] is True

    data = client.get(
        "/api/v1/exercises/substitute", params={"q": "Leg Press", "equipment": "full_gym"}
    ).json()
    assert data["name"] == "Leg Press"
    assert data["substituted"] is False


@pytest.mark.asyncio
async def test_healthz_reports_catalogue():
    """Test health check payload."""
    result = await healthz()
    assert result["status"] in ("healthy", "degraded")
    assert result["catalogue"]["templates"] == 7
    assert result["catalogue"]["rules"] == 39
    assert result["process"]["rss_mb"] > 0
