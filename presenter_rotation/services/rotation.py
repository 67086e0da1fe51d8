# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Rotation logic — pure computation, no side effects.

Week ``w`` is the 7-day span starting ``EPOCH + 7 * w`` days. Weekdays use
the Sunday-based numbering of the web client: 0 = Sunday ... 6 = Saturday.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Sequence

from presenter_rotation.core.errors import EmptyListError, ValidationError
from presenter_rotation.models.domain import Member, WeeklyPresenter

EPOCH = date(1970, 1, 1)

DAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def _check_day(presentation_day: int) -> int:
    if (
        isinstance(presentation_day, bool)
        or not isinstance(presentation_day, int)
        or not 0 <= presentation_day <= 6
    ):
        raise ValidationError(
            f"presentation_day must be an integer in 0-6, got {presentation_day!r}"
        )
    return presentation_day


def weekday_of(day: date) -> int:
    """Sunday-based weekday (0-6) of a calendar date."""
    return (day.weekday() + 1) % 7


def day_name(presentation_day: int) -> str:
    return DAY_NAMES[_check_day(presentation_day)]


def week_number_for(day: date) -> int:
    """Number of whole 7-day spans between EPOCH and ``day`` (floored)."""
    return (day - EPOCH).days // 7


def get_current_week_number(today: Optional[date] = None) -> int:
    """Week number of ``today`` (defaults to the current UTC date)."""
    if today is None:
        today = datetime.now(timezone.utc).date()
    return week_number_for(today)


def get_week_start_date(week: int, presentation_day: int) -> date:
    """
    Date of ``presentation_day`` inside the span identified by ``week``.
    Always satisfies ``week_number_for(result) == week``.
    """
    _check_day(presentation_day)
    try:
        span_start = EPOCH + timedelta(days=7 * week)
        offset = (presentation_day - weekday_of(span_start)) % 7
        return span_start + timedelta(days=offset)
    except OverflowError as exc:
        raise ValidationError(
            f"week {week} is outside the supported date range"
        ) from exc


def get_presenter_for_week(members: Sequence[Member], week: int) -> Member:
    """
    Return ``members[week mod N]``. Python's modulo is non-negative for a
    positive divisor, so past (negative) weeks index validly too.
    """
    if not members:
        raise EmptyListError("Cannot pick a presenter from an empty member list")
    return members[week % len(members)]


def build_schedule(
    members: Sequence[Member],
    presentation_day: int,
    start_week: int,
    weeks: int,
) -> list[WeeklyPresenter]:
    """Presenter and presentation date for ``weeks`` consecutive weeks."""
    if weeks < 0:
        raise ValidationError(f"weeks must be non-negative, got {weeks}")
    name = day_name(presentation_day)
    return [
        WeeklyPresenter(
            week=week,
            date=get_week_start_date(week, presentation_day),
            day_name=name,
            presenter=get_presenter_for_week(members, week),
        )
        for week in range(start_week, start_week + weeks)
    ]
