"""Menstrual cycle engine.

Keeps the period history and derives three things from it:

- the current status (in period, approaching, safe) and the next expected
  start date,
- a per-day classification used to paint history and prediction overlays on
  a month calendar,
- the settings that drive both (cycle and period length, prediction mode).

Predictions always extrapolate from the most recent logged start using the
configured cycle length; older history only contributes its own period
windows to the calendar. An overdue period is reported as ``approaching``
with a negative ``days_until_next``.
"""

import calendar
from datetime import date, timedelta
from typing import List, Optional

from core.exceptions import ValidationError
from core.logger import get_logger
from core.repository import KeyValueRepository, load_cycle_data, save_cycle_data
from schemas.cycle_schema import (
    STANDARD_CYCLE_LENGTH,
    STANDARD_PERIOD_LENGTH,
    CalendarDay,
    CycleData,
    CycleStatus,
    DayClassification,
    PeriodRecord,
)
from services import date_utils

logger = get_logger("services.cycle_engine")

APPROACHING_WINDOW_DAYS = 5


def compute_status(data: CycleData, today: date) -> CycleStatus:
    """Derive the cycle status of `data` as seen on `today`."""
    if not data.last_period_start:
        return CycleStatus(status="unknown", days_until_next=0, next_date=None, is_period_now=False)

    last_start = date_utils.parse_date(data.last_period_start)
    next_period = last_start + timedelta(days=data.cycle_length)
    days_until_next = (next_period - today).days
    period_end = last_start + timedelta(days=data.period_length)
    is_period_now = last_start <= today < period_end

    if is_period_now:
        status = "active"
    elif 0 <= days_until_next <= APPROACHING_WINDOW_DAYS:
        status = "approaching"
    elif days_until_next < 0:
        # overdue
        status = "approaching"
    else:
        status = "safe"

    return CycleStatus(
        status=status,
        days_until_next=days_until_next,
        next_date=date_utils.format_date(next_period),
        is_period_now=is_period_now,
    )


def classify_day(data: CycleData, day: date, today: date) -> DayClassification:
    """Classify one calendar day against logged history and predictions."""
    window = timedelta(days=data.period_length - 1)
    for record in data.history:
        start = date_utils.parse_date(record.start_date)
        if start <= day <= start + window:
            return DayClassification.HISTORY

    if data.last_period_start:
        last_start = date_utils.parse_date(data.last_period_start)
        if day > last_start:
            day_in_cycle = (day - last_start).days % data.cycle_length
            if day_in_cycle < data.period_length:
                return DayClassification.PREDICTED

    if day == today:
        return DayClassification.TODAY
    return DayClassification.NEUTRAL


class CycleEngine:
    """Repository-backed operations on the singleton cycle document."""

    def get_cycle_data(self, repo: KeyValueRepository) -> CycleData:
        return load_cycle_data(repo)

    def log_period_start(
        self,
        repo: KeyValueRepository,
        start_date: Optional[str] = None,
        note: str = "",
        today: Optional[str] = None,
    ) -> CycleData:
        """Record a period start, or annotate an already logged one.

        Logging a date twice never duplicates it; the second call only
        replaces the note when a non-empty note is given.

        Args:
            repo: Document repository.
            start_date: First day of the period (defaults to today).
            note: Optional free-text note.
            today: Override for the current date.

        Returns:
            The updated and persisted CycleData.
        """
        start_date = start_date or today or date_utils.today()
        date_utils.parse_date(start_date)
        data = load_cycle_data(repo)

        existing = next((r for r in data.history if r.start_date == start_date), None)
        if existing is None:
            data.history.append(PeriodRecord(start_date=start_date, note=note))
            data.history.sort(key=lambda r: r.start_date, reverse=True)
            logger.info("Logged period start %s", start_date)
        elif note:
            existing.note = note
            logger.info("Updated note on existing period start %s", start_date)

        data.last_period_start = data.history[0].start_date
        save_cycle_data(repo, data)
        return data

    def update_period_note(self, repo: KeyValueRepository, start_date: str, note: str) -> CycleData:
        """Overwrite (or clear) the note of a logged period; unknown dates are ignored."""
        data = load_cycle_data(repo)
        record = next((r for r in data.history if r.start_date == start_date), None)
        if record is not None:
            record.note = note
        else:
            logger.debug("No period logged on %s; note left unchanged", start_date)
        save_cycle_data(repo, data)
        return data

    def update_settings(
        self,
        repo: KeyValueRepository,
        cycle_length: int,
        period_length: int,
        notifications_enabled: bool,
        prediction_mode: str,
    ) -> CycleData:
        """Replace the cycle settings; standard mode pins the 28/5 defaults."""
        if prediction_mode == "standard":
            cycle_length = STANDARD_CYCLE_LENGTH
            period_length = STANDARD_PERIOD_LENGTH
        if cycle_length <= 0 or period_length <= 0:
            raise ValidationError("Cycle and period length must be positive", field="cycleLength")

        data = load_cycle_data(repo)
        data.cycle_length = cycle_length
        data.period_length = period_length
        data.notifications_enabled = notifications_enabled
        data.prediction_mode = prediction_mode
        save_cycle_data(repo, data)
        logger.info(
            "Cycle settings updated: mode=%s cycle=%s period=%s notifications=%s",
            prediction_mode, cycle_length, period_length, notifications_enabled,
        )
        return data

    def calculate_cycle_status(self, repo: KeyValueRepository, today: Optional[str] = None) -> CycleStatus:
        data = load_cycle_data(repo)
        status = compute_status(data, date_utils.parse_date(today or date_utils.today()))
        logger.debug("Cycle status: %s (%s days)", status.status, status.days_until_next)
        return status

    def classify_calendar_day(
        self, repo: KeyValueRepository, day: str, today: Optional[str] = None
    ) -> DayClassification:
        data = load_cycle_data(repo)
        return classify_day(
            data,
            date_utils.parse_date(day),
            date_utils.parse_date(today or date_utils.today()),
        )

    def month_calendar(
        self, repo: KeyValueRepository, year: int, month: int, today: Optional[str] = None
    ) -> List[CalendarDay]:
        """Classify every day of the given month for the calendar overlay."""
        if not 1 <= month <= 12:
            raise ValidationError(f"Invalid month {month}", field="month")
        if not 1 <= year <= 9999:
            raise ValidationError(f"Invalid year {year}", field="year")

        data = load_cycle_data(repo)
        current = date_utils.parse_date(today or date_utils.today())
        _, days_in_month = calendar.monthrange(year, month)
        days = []
        for day_number in range(1, days_in_month + 1):
            day = date(year, month, day_number)
            days.append(CalendarDay(
                date=date_utils.format_date(day),
                classification=classify_day(data, day, current),
            ))
        return days


cycle_engine = CycleEngine()
__all__ = ["CycleEngine", "cycle_engine", "compute_status", "classify_day"]
