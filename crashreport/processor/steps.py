from collections.abc import Sequence
from datetime import date

from crashreport.composition.composer import Composer
from crashreport.exceptions import ConfigurationError
from crashreport.feed.base import BaseFeedClient
from crashreport.feed.models import QueryScope
from crashreport.logging.logger import Log
from crashreport.normalization.normalizer import RecordNormalizer
from crashreport.processor.pipeline import PipelineContext, PipelineStep
from crashreport.publishing.base import BasePublisher
from crashreport.reporting.aggregator import aggregate
from crashreport.reporting.window import FirstDayOfWeek, reporting_window


class FetchFeedStep(PipelineStep):
    """Fetches the feed from the earliest year the run needs.

    The query starts at ``start_year`` when configured, otherwise at the
    earlier of the reference date's year and the window's first year, so a
    window that spans New Year is fully covered.
    """

    def __init__(
        self,
        feed_client: BaseFeedClient,
        *,
        region: str,
        severity_classes: Sequence[str],
        start_year: int | None = None,
    ) -> None:
        self._feed_client = feed_client
        self._region = region
        self._severity_classes = tuple(severity_classes)
        self._start_year = start_year

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.window is None:
            raise ValueError("PipelineContext.window must be set before fetching")
        needed_year = min(context.reference_date.year, context.window.start.year)
        if self._start_year is not None and self._start_year > needed_year:
            raise ConfigurationError(
                f"feed_start_year {self._start_year} is after {needed_year}, the first "
                f"year needed for reference date {context.reference_date}"
            )
        scope = QueryScope(
            region=self._region,
            year_start=needed_year if self._start_year is None else self._start_year,
            severity_classes=self._severity_classes,
        )
        Log.info(f"Fetching {scope.region} crashes from {scope.year_start}")
        context.raw_feed = self._feed_client.fetch(scope)
        return context


class NormalizeRecordsStep(PipelineStep):
    def __init__(self, normalizer: RecordNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.raw_feed is None:
            raise ValueError("PipelineContext.raw_feed must be set before normalization")
        context.records = self._normalizer.normalize(
            context.raw_feed.geo_records,
            context.raw_feed.flat_records,
        )
        return context


class ComputeWindowStep(PipelineStep):
    def __init__(self, first_day_of_week: FirstDayOfWeek) -> None:
        self._first_day_of_week = first_day_of_week

    def run(self, context: PipelineContext) -> PipelineContext:
        context.window = reporting_window(context.reference_date, self._first_day_of_week)
        Log.info(
            f"Reporting window {context.window.start} to {context.window.end} "
            f"for reference date {context.reference_date}"
        )
        return context


class AggregateStep(PipelineStep):
    def __init__(self, year_start: date | None = None) -> None:
        self._year_start = year_start

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.window is None:
            raise ValueError("PipelineContext.window must be set before aggregation")
        context.stats = aggregate(
            context.records,
            context.window,
            context.reference_date,
            year_start=self._year_start,
        )
        return context


class ComposeStep(PipelineStep):
    def __init__(self, composer: Composer) -> None:
        self._composer = composer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.stats is None or context.window is None:
            raise ValueError("PipelineContext.stats and window must be set before composing")
        context.artifact = self._composer.compose(context.stats, context.window.display())
        Log.debug(f"Composed message:\n{context.artifact.text}")
        return context


class PublishStep(PipelineStep):
    def __init__(self, publisher: BasePublisher) -> None:
        self._publisher = publisher

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.artifact is None:
            raise ValueError("PipelineContext.artifact must be set before publishing")
        context.receipt = self._publisher.publish(context.artifact.text, context.artifact.image)
        Log.info(
            f"Published via {context.receipt.publisher}: {context.receipt.reference}"
        )
        return context
