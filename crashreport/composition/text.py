from crashreport.composition.exceptions import ContentTooLongError
from crashreport.reporting.models import AggregateStats

MESSAGE_TEMPLATE = (
    "{city} traffic crashes, week of {window}\n"
    "Crashes: {weekly_crash_count}\n"
    "Fatalities: {weekly_fatalities}\n"
    "Injuries: {weekly_injuries}\n"
    "\n"
    "Year to date\n"
    "Crashes: {year_to_date_crash_count}\n"
    "Fatalities: {year_to_date_fatalities}\n"
    "Injuries: {year_to_date_injuries}"
)


class TextComposer:
    """Fills the fixed message template and enforces the length ceiling."""

    def __init__(self, *, city: str, max_length: int = 280) -> None:
        self._city = city
        self._max_length = max_length

    def compose(self, stats: AggregateStats, window_display: str) -> str:
        """Render the message.

        Raises:
            ContentTooLongError: if the message is longer than ``max_length``.
                The message is never truncated: a cut could drop a statistic.
        """
        text = MESSAGE_TEMPLATE.format(
            city=self._city,
            window=window_display,
            weekly_crash_count=stats.weekly_crash_count,
            weekly_fatalities=stats.weekly_fatalities,
            weekly_injuries=stats.weekly_injuries,
            year_to_date_crash_count=stats.year_to_date_crash_count,
            year_to_date_fatalities=stats.year_to_date_fatalities,
            year_to_date_injuries=stats.year_to_date_injuries,
        )
        if len(text) > self._max_length:
            raise ContentTooLongError(
                f"Message is {len(text)} characters, limit is {self._max_length}"
            )
        return text
