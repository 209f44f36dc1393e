from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date

from crashreport.composition.models import ComposedArtifact
from crashreport.feed.models import RawFeed
from crashreport.normalization.models import NormalizedIncidentRecord
from crashreport.publishing.models import PublishReceipt
from crashreport.reporting.models import AggregateStats, ReportingWindow


@dataclass(slots=True)
class PipelineContext:
    reference_date: date
    raw_feed: RawFeed | None = None
    records: list[NormalizedIncidentRecord] = field(default_factory=list)
    window: ReportingWindow | None = None
    stats: AggregateStats | None = None
    artifact: ComposedArtifact | None = None
    receipt: PublishReceipt | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
