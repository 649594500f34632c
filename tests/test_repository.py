"""Tests for the key-value document store and its typed loaders."""
import pytest

from core.exceptions import StorageError
from core.repository import (
    CYCLE_DATA_KEY,
    DAILY_LOGS_KEY,
    load_cycle_data,
    load_daily_logs,
    load_nutrition_plan,
    load_user_profile,
    save_cycle_data,
    save_daily_logs,
    save_user_profile,
)
from database.models import StoredDocument
from schemas.cycle_schema import CycleData, PeriodRecord
from schemas.profile_schema import UserProfile, WeightRecord
from schemas.tracking_schema import DailyLog, Macros, MealItem


def test_get_missing_key_returns_none(repo):
    assert repo.get("nothing") is None
    assert repo.keys() == []


def test_set_overwrites_and_delete(repo):
    repo.set("k", {"a": 1})
    repo.set("k", {"a": 2})
    assert repo.get("k") == {"a": 2}
    assert repo.keys() == ["k"]
    assert repo.delete("k") is True
    assert repo.delete("k") is False


def test_documents_are_stored_with_camel_case_keys(repo):
    log = DailyLog(date="2024-03-01", water_intake=250,
                   meals=[MealItem(name="Toast", macros=Macros(calories=120))])
    save_daily_logs(repo, {"2024-03-01": log})
    raw = repo.get(DAILY_LOGS_KEY)["2024-03-01"]
    assert raw["waterIntake"] == 250
    assert "water_intake" not in raw
    assert load_daily_logs(repo)["2024-03-01"] == log


def test_missing_documents_load_as_defaults(repo):
    assert load_daily_logs(repo) == {}
    assert load_nutrition_plan(repo) is None
    cycle = load_cycle_data(repo)
    assert cycle.last_period_start is None
    assert cycle.history == []
    assert cycle.cycle_length == 28


def test_legacy_cycle_history_of_bare_dates(repo):
    repo.set(CYCLE_DATA_KEY, {
        "lastPeriodStart": "2024-03-01",
        "cycleLength": 30,
        "periodLength": 5,
        "history": ["2024-03-01", "2024-01-31"],
    })
    data = load_cycle_data(repo)
    assert [(r.start_date, r.note) for r in data.history] == [("2024-03-01", ""), ("2024-01-31", "")]
    assert data.notifications_enabled is True
    assert data.prediction_mode == "custom"


def test_legacy_cycle_with_standard_lengths_is_standard(repo):
    repo.set(CYCLE_DATA_KEY, {"lastPeriodStart": None, "cycleLength": 28, "periodLength": 5, "history": []})
    assert load_cycle_data(repo).prediction_mode == "standard"


def test_explicit_mode_is_not_overridden(repo):
    repo.set(CYCLE_DATA_KEY, {
        "cycleLength": 28, "periodLength": 5, "history": [],
        "predictionMode": "custom", "notificationsEnabled": False,
    })
    data = load_cycle_data(repo)
    assert data.prediction_mode == "custom"
    assert data.notifications_enabled is False


def test_corrupt_json_raises_storage_error(repo, session):
    session.add(StoredDocument(key=DAILY_LOGS_KEY, value="{not json"))
    session.commit()
    with pytest.raises(StorageError) as exc_info:
        load_daily_logs(repo)
    assert exc_info.value.status_code == 500


def test_invalid_document_raises_storage_error(repo):
    repo.set(DAILY_LOGS_KEY, {"2024-03-01": {"date": "March 1st"}})
    with pytest.raises(StorageError):
        load_daily_logs(repo)


def test_cycle_data_round_trip(repo):
    data = CycleData(
        last_period_start="2024-03-01",
        cycle_length=31,
        period_length=6,
        history=[
            PeriodRecord(start_date="2024-03-01", note="cramps"),
            PeriodRecord(start_date="2024-01-30", note=""),
        ],
        notifications_enabled=False,
        prediction_mode="custom",
    )
    save_cycle_data(repo, data)
    assert load_cycle_data(repo) == data
    raw = repo.get(CYCLE_DATA_KEY)
    assert raw["notificationsEnabled"] is False
    assert raw["history"][0] == {"startDate": "2024-03-01", "note": "cramps"}


def test_user_profile_round_trip(repo):
    profile = UserProfile(
        name="Sam",
        height=168,
        start_weight=92,
        current_weight=88.4,
        target_weight=75,
        daily_calorie_goal=1800,
        daily_water_goal=3000,
        weight_history=[
            WeightRecord(date="2024-03-01", weight=92),
            WeightRecord(date="2024-03-08", weight=88.4),
        ],
    )
    save_user_profile(repo, profile)
    assert load_user_profile(repo) == profile
    assert repo.get("userProfile")["dailyCalorieGoal"] == 1800
