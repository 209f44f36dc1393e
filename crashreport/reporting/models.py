from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ReportingWindow:
    """The prior full calendar week; both ends inclusive."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def display(self) -> str:
        """Render as ``DD/MM-DD/MM``."""
        return f"{self.start:%d/%m}-{self.end:%d/%m}"


@dataclass(frozen=True)
class AggregateStats:
    """Weekly and year-to-date totals.

    A single crash can add to both fatalities and injuries.
    """

    weekly_crash_count: int = 0
    weekly_fatalities: int = 0
    weekly_injuries: int = 0
    year_to_date_crash_count: int = 0
    year_to_date_fatalities: int = 0
    year_to_date_injuries: int = 0
