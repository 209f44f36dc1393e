from datetime import date

from crashreport.composition.composer import build_composer
from crashreport.config.settings import Settings
from crashreport.feed.base import BaseFeedClient
from crashreport.feed.factory import FeedClientFactory
from crashreport.logging.logger import Log
from crashreport.normalization.normalizer import RecordNormalizer
from crashreport.processor.pipeline import PipelineContext, PipelineStep
from crashreport.processor.steps import (
    AggregateStep,
    ComposeStep,
    ComputeWindowStep,
    FetchFeedStep,
    NormalizeRecordsStep,
    PublishStep,
)
from crashreport.publishing.base import BasePublisher
from crashreport.publishing.factory import PublisherFactory


class Processor:
    """Runs the report pipeline once for a reference date.

    Pipeline: window -> fetch -> normalize -> aggregate -> compose -> publish.
    Every step fails fast; the first error is logged and re-raised unchanged.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(self, reference_date: date) -> PipelineContext:
        Log.info(f"Starting crash report run for {reference_date}")
        context = PipelineContext(reference_date=reference_date)
        for step in self._steps:
            step_name = type(step).__name__
            try:
                context = step.run(context)
            except Exception as exc:
                Log.error(f"Step {step_name} failed: {exc}")
                raise
        Log.info(f"Crash report run for {reference_date} finished")
        return context


def build_processor(
    settings: Settings,
    feed_client: BaseFeedClient | None = None,
    publisher: BasePublisher | None = None,
) -> Processor:
    """Build a Processor with all required adapters.

    With ``dry_run`` set the artifact is composed but not published.
    """
    steps: list[PipelineStep] = [
        ComputeWindowStep(settings.first_day_of_week),
        FetchFeedStep(
            feed_client or FeedClientFactory.create(settings),
            region=settings.feed_county,
            severity_classes=settings.feed_severity_classes,
            start_year=settings.feed_start_year,
        ),
        NormalizeRecordsStep(
            RecordNormalizer(
                municipality=settings.municipality,
                date_format=settings.feed_date_format,
            )
        ),
        AggregateStep(),
        ComposeStep(build_composer(settings)),
    ]
    if settings.dry_run:
        Log.warning("Dry run: the report will not be published")
    else:
        steps.append(PublishStep(publisher or PublisherFactory.create(settings)))
    return Processor(steps)
