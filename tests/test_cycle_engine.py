"""Tests for the cycle engine: history upkeep, status and calendar overlay."""
from datetime import date

import pytest

from core.exceptions import ValidationError
from core.repository import save_cycle_data
from schemas.cycle_schema import CycleData, DayClassification, PeriodRecord
from services.cycle_engine import classify_day, compute_status, cycle_engine


def march_first() -> CycleData:
    return CycleData(
        last_period_start="2024-03-01",
        cycle_length=28,
        period_length=5,
        history=[PeriodRecord(start_date="2024-03-01")],
    )


def test_logging_same_date_twice_keeps_one_record(repo):
    cycle_engine.log_period_start(repo, "2024-03-01", "")
    data = cycle_engine.log_period_start(repo, "2024-03-01", "cramps")
    assert len(data.history) == 1
    assert data.history[0].start_date == "2024-03-01"
    assert data.history[0].note == "cramps"


def test_relogging_with_empty_note_keeps_existing_note(repo):
    cycle_engine.log_period_start(repo, "2024-03-01", "cramps")
    data = cycle_engine.log_period_start(repo, "2024-03-01", "")
    assert data.history[0].note == "cramps"


def test_backdated_log_keeps_most_recent_as_last_start(repo):
    cycle_engine.log_period_start(repo, "2024-03-01")
    data = cycle_engine.log_period_start(repo, "2024-01-15", "late entry")
    assert data.last_period_start == "2024-03-01"
    assert [r.start_date for r in data.history] == ["2024-03-01", "2024-01-15"]

    data = cycle_engine.log_period_start(repo, "2024-03-29")
    assert data.last_period_start == "2024-03-29"
    assert [r.start_date for r in data.history] == ["2024-03-29", "2024-03-01", "2024-01-15"]


def test_log_defaults_to_today(repo):
    data = cycle_engine.log_period_start(repo, today="2024-05-02")
    assert data.last_period_start == "2024-05-02"


def test_log_persists(repo):
    cycle_engine.log_period_start(repo, "2024-03-01", "x")
    assert cycle_engine.get_cycle_data(repo).history[0].note == "x"


def test_update_period_note_overwrites_and_clears(repo):
    cycle_engine.log_period_start(repo, "2024-03-01", "cramps")
    data = cycle_engine.update_period_note(repo, "2024-03-01", "")
    assert data.history[0].note == ""


def test_update_period_note_unknown_date_is_noop(repo):
    cycle_engine.log_period_start(repo, "2024-03-01", "cramps")
    data = cycle_engine.update_period_note(repo, "2024-02-01", "nothing")
    assert len(data.history) == 1
    assert data.history[0].note == "cramps"


def test_status_unknown_without_history(repo):
    status = cycle_engine.calculate_cycle_status(repo, today="2024-03-03")
    assert status.status == "unknown"
    assert status.days_until_next == 0
    assert status.next_date is None
    assert status.is_period_now is False


def test_status_active_during_period(repo):
    save_cycle_data(repo, march_first())
    status = cycle_engine.calculate_cycle_status(repo, today="2024-03-03")
    assert status.is_period_now is True
    assert status.status == "active"


def test_status_approaching_within_five_days():
    status = compute_status(march_first(), date(2024, 3, 25))
    assert status.next_date == "2024-03-29"
    assert status.days_until_next == 4
    assert status.status == "approaching"


def test_status_overdue_still_approaching():
    status = compute_status(march_first(), date(2024, 4, 5))
    assert status.days_until_next == -7
    assert status.status == "approaching"
    assert status.is_period_now is False


def test_status_safe_mid_cycle():
    status = compute_status(march_first(), date(2024, 3, 10))
    assert status.days_until_next == 19
    assert status.status == "safe"


def test_period_window_end_is_exclusive():
    assert compute_status(march_first(), date(2024, 3, 5)).is_period_now is True
    last_day_after = compute_status(march_first(), date(2024, 3, 6))
    assert last_day_after.is_period_now is False
    assert last_day_after.status == "safe"


def test_day_before_start_is_not_period():
    assert compute_status(march_first(), date(2024, 2, 29)).is_period_now is False


def test_classify_prediction_one_cycle_ahead():
    data = march_first()
    today = date(2024, 3, 10)
    assert classify_day(data, date(2024, 3, 29), today) == DayClassification.PREDICTED
    assert classify_day(data, date(2024, 4, 2), today) == DayClassification.PREDICTED
    assert classify_day(data, date(2024, 4, 3), today) == DayClassification.NEUTRAL


def test_classify_predictions_repeat_every_cycle():
    data = march_first()
    assert classify_day(data, date(2024, 4, 26), date(2024, 3, 10)) == DayClassification.PREDICTED


def test_classify_history_window_and_today():
    data = march_first()
    today = date(2024, 3, 10)
    assert classify_day(data, date(2024, 3, 1), today) == DayClassification.HISTORY
    assert classify_day(data, date(2024, 3, 5), today) == DayClassification.HISTORY
    assert classify_day(data, date(2024, 3, 6), today) == DayClassification.NEUTRAL
    assert classify_day(data, date(2024, 3, 10), today) == DayClassification.TODAY


def test_classify_no_predictions_before_last_start():
    data = march_first()
    # 28 days before the last start would be "in cycle" but is never predicted
    assert classify_day(data, date(2024, 2, 2), date(2024, 3, 10)) == DayClassification.NEUTRAL


def test_classify_older_history_is_history():
    data = march_first()
    data.history.append(PeriodRecord(start_date="2024-01-30"))
    assert classify_day(data, date(2024, 2, 1), date(2024, 3, 10)) == DayClassification.HISTORY


def test_classify_calendar_day_uses_stored_data(repo):
    save_cycle_data(repo, march_first())
    assert cycle_engine.classify_calendar_day(repo, "2024-03-30", today="2024-03-10") == DayClassification.PREDICTED


def test_month_calendar_covers_every_day(repo):
    save_cycle_data(repo, march_first())
    days = cycle_engine.month_calendar(repo, 2024, 3, today="2024-03-10")
    assert len(days) == 31
    by_kind = {}
    for day in days:
        by_kind.setdefault(day.classification, []).append(day.date)
    assert by_kind[DayClassification.HISTORY] == [f"2024-03-0{i}" for i in range(1, 6)]
    assert by_kind[DayClassification.PREDICTED] == ["2024-03-29", "2024-03-30", "2024-03-31"]
    assert by_kind[DayClassification.TODAY] == ["2024-03-10"]


def test_month_calendar_rejects_bad_month(repo):
    with pytest.raises(ValidationError):
        cycle_engine.month_calendar(repo, 2024, 13)


def test_standard_mode_resets_lengths(repo):
    data = cycle_engine.update_settings(repo, 35, 7, False, "standard")
    assert data.cycle_length == 28
    assert data.period_length == 5
    assert data.notifications_enabled is False
    assert data.prediction_mode == "standard"


def test_custom_mode_keeps_lengths(repo):
    cycle_engine.log_period_start(repo, "2024-03-01")
    data = cycle_engine.update_settings(repo, 32, 6, True, "custom")
    assert (data.cycle_length, data.period_length, data.prediction_mode) == (32, 6, "custom")
    assert data.history[0].start_date == "2024-03-01"
    status = cycle_engine.calculate_cycle_status(repo, today="2024-03-10")
    assert status.next_date == "2024-04-02"
