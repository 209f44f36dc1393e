from collections.abc import Iterable
from datetime import date

from crashreport.logging.logger import Log
from crashreport.normalization.models import NormalizedIncidentRecord
from crashreport.reporting.models import AggregateStats, ReportingWindow


def aggregate(
    records: Iterable[NormalizedIncidentRecord],
    window: ReportingWindow,
    reference_date: date,
    year_start: date | None = None,
) -> AggregateStats:
    """Sum crashes, fatalities and injuries for the window and year to date.

    Year to date runs from ``year_start`` (1 January of the reference year
    unless given) through ``reference_date``, both inclusive. Every record is
    one crash, including those with no fatalities or injuries.
    """
    ytd_start = year_start if year_start is not None else date(reference_date.year, 1, 1)

    weekly = [0, 0, 0]
    ytd = [0, 0, 0]
    for record in records:
        if window.contains(record.date):
            _add(weekly, record)
        if ytd_start <= record.date <= reference_date:
            _add(ytd, record)

    stats = AggregateStats(
        weekly_crash_count=weekly[0],
        weekly_fatalities=weekly[1],
        weekly_injuries=weekly[2],
        year_to_date_crash_count=ytd[0],
        year_to_date_fatalities=ytd[1],
        year_to_date_injuries=ytd[2],
    )
    Log.info(
        f"Week {window.display()}: {stats.weekly_crash_count} crashes, "
        f"{stats.weekly_fatalities} fatalities, {stats.weekly_injuries} injuries"
    )
    return stats


def _add(totals: list[int], record: NormalizedIncidentRecord) -> None:
    totals[0] += 1
    totals[1] += record.fatality_count
    totals[2] += record.injury_count
