"""End-to-end tests of the HTTP API against an in-memory store.

The AI client is replaced by an unconfigured one, so every AI route takes
its fallback path.
"""
import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database.deps import get_db
from main import app
from services import date_utils
from services.ai_client import GeminiClient, get_ai_client


@pytest.fixture
def client(engine):
    Session = sessionmaker(bind=engine)

    def override_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_ai_client] = lambda: GeminiClient(api_key="")
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_meal_roundtrip_uses_camel_case(client):
    meal = {"name": "Greek yogurt", "macros": {"calories": 150, "protein": 15}}
    resp = client.post("/api/logs/2024-03-01/meals", json=meal)
    assert resp.status_code == 201
    body = resp.json()
    assert body["waterIntake"] == 0
    assert body["meals"][0]["macros"]["calories"] == 150

    totals = client.get("/api/logs/2024-03-01/totals").json()
    assert totals["protein"] == 15

    meal_id = body["meals"][0]["id"]
    resp = client.delete(f"/api/logs/2024-03-01/meals/{meal_id}")
    assert resp.json()["meals"] == []


def test_water_clamps_at_zero(client):
    client.post("/api/logs/2024-03-01/water", json={"amount": 250})
    resp = client.post("/api/logs/2024-03-01/water", json={"amount": -1000})
    assert resp.json()["waterIntake"] == 0


def test_bad_date_is_400(client):
    resp = client.get("/api/logs/2024-13-01")
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_request_validation_uses_error_envelope(client):
    resp = client.post("/api/logs/2024-03-01/water", json={"amount": "lots"})
    assert resp.status_code == 422
    error = resp.json()["error"]
    assert error["message"] == "Validation error"
    assert error["details"]["validation_errors"]


def test_estimate_falls_back_to_zero_macros(client):
    resp = client.post("/api/nutrition/estimate", json={"text": "mystery stew"})
    assert resp.status_code == 200
    assert resp.json() == {
        "name": "mystery stew",
        "macros": {"calories": 0, "protein": 0, "carbs": 0, "fat": 0, "fiber": 0, "potassium": 0, "sodium": 0},
    }


def test_estimate_and_log_stores_fallback_meal(client):
    resp = client.post("/api/nutrition/meals/2024-03-01", json={"text": "mystery stew"})
    assert resp.status_code == 201
    assert resp.json()["meals"][0]["name"] == "mystery stew"


def test_plan_apply_without_plan(client):
    assert client.get("/api/nutrition/plan").json() is None
    assert client.post("/api/nutrition/plan/apply").json() == {"applied": False, "dates": []}


def test_plan_apply_fills_current_week(client):
    client.put("/api/nutrition/plan", json={"meals": [{"name": "Oats", "macros": {"calories": 300}}]})
    resp = client.post("/api/nutrition/plan/apply").json()
    assert resp["applied"] is True
    assert resp["dates"] == date_utils.week_dates(date_utils.today())


def test_generate_workout_falls_back_to_empty_session(client):
    resp = client.post("/api/workouts/2024-03-01/generate", json={"prompt": "easy run", "type": "cardio"})
    assert resp.status_code == 201
    session = resp.json()["workouts"][0]
    assert session["name"] == "Custom Cardio"
    assert session["exercises"] == []
    assert session["type"] == "cardio"
    assert session["completed"] is False


def test_session_editing_flow(client):
    log = client.post("/api/workouts/2024-03-01", json={"type": "strength"}).json()
    session_id = log["workouts"][0]["id"]

    client.post(f"/api/workouts/2024-03-01/{session_id}/exercises", json={})
    resp = client.post(
        f"/api/workouts/2024-03-01/{session_id}/exercises/move",
        json={"fromIndex": 1, "toIndex": 0},
    )
    names = [e["name"] for e in resp.json()["workouts"][0]["exercises"]]
    assert names == ["New Exercise", "Bench Press"]

    resp = client.post(f"/api/workouts/2024-03-01/{session_id}/toggle", json={"durationMinutes": 40})
    session = resp.json()["workouts"][0]
    assert session["completed"] is True
    assert session["durationMinutes"] == 40

    stats = client.get("/api/stats").json()
    assert stats["workoutScore"] == 100


def test_toggle_unknown_session_is_404(client):
    resp = client.post("/api/workouts/2024-03-01/nope/toggle")
    assert resp.status_code == 404
    assert resp.json()["error"]["details"]["resource"] == "WorkoutSession"


def test_cycle_settings_standard_resets_lengths(client):
    resp = client.put("/api/cycle/settings", json={
        "cycleLength": 35, "periodLength": 7, "notificationsEnabled": True, "predictionMode": "standard",
    })
    body = resp.json()
    assert (body["cycleLength"], body["periodLength"]) == (28, 5)


def test_cycle_log_and_calendar(client):
    resp = client.post("/api/cycle/periods", json={"date": "2024-03-01", "note": "cramps"})
    assert resp.status_code == 201
    assert resp.json()["history"] == [{"startDate": "2024-03-01", "note": "cramps"}]

    client.put("/api/cycle/periods/2024-03-01/note", json={"note": ""})
    assert client.get("/api/cycle").json()["history"][0]["note"] == ""

    days = client.get("/api/cycle/calendar/2024/3").json()
    assert len(days) == 31
    assert days[0] == {"date": "2024-03-01", "classification": "history"}


def test_cycle_status_unknown_when_empty(client):
    body = client.get("/api/cycle/status").json()
    assert body["status"] == "unknown"
    assert body["daysUntilNext"] == 0


def test_stats_empty(client):
    assert client.get("/api/stats").json() == {
        "nutritionScore": 0, "cardioScore": 0, "workoutScore": 0, "generalAverage": 0,
    }


def test_profile_weight_and_summary(client):
    assert client.get("/api/profile").json()["name"] == "User"
    resp = client.post("/api/profile/weight", json={"weight": 70})
    assert resp.status_code == 201
    assert resp.json()["currentWeight"] == 70

    client.put("/api/profile", json={"dailyCalorieGoal": 2000})
    assert client.get("/api/profile").json()["dailyCalorieGoal"] == 2000

    summary = client.get("/api/profile/summary").json()
    assert summary["bmiCategory"] == "normal"


def test_garbled_ai_reply_still_falls_back(client):
    garbled = GeminiClient(
        api_key="test-key",
        max_retries=0,
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>proxy</html>")),
    )
    app.dependency_overrides[get_ai_client] = lambda: garbled

    resp = client.post("/api/nutrition/estimate", json={"text": "mystery stew"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "mystery stew"

    resp = client.post("/api/workouts/2024-03-01/generate", json={"prompt": "legs", "type": "strength"})
    assert resp.status_code == 201
    assert resp.json()["workouts"][0]["name"] == "Custom Workout"
