from datetime import date, timedelta
from typing import Literal

from crashreport.reporting.models import ReportingWindow

FirstDayOfWeek = Literal["sunday", "monday"]

_WEEKDAY_INDEX: dict[str, int] = {"monday": 0, "sunday": 6}


def week_start(day: date, first_day_of_week: FirstDayOfWeek = "sunday") -> date:
    """First day of the calendar week containing ``day``."""
    offset = (day.weekday() - _WEEKDAY_INDEX[first_day_of_week]) % 7
    return day - timedelta(days=offset)


def reporting_window(
    reference_date: date,
    first_day_of_week: FirstDayOfWeek = "sunday",
) -> ReportingWindow:
    """Seven days of the week before the one containing ``reference_date``.

    The in-progress week is never reported: it would be undercounted.
    """
    current_week_start = week_start(reference_date, first_day_of_week)
    return ReportingWindow(
        start=current_week_start - timedelta(days=7),
        end=current_week_start - timedelta(days=1),
    )
