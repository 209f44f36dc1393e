import json
import re
from datetime import date
from pathlib import Path

import httpx
import pytest

from crashreport.config.settings import Settings
from crashreport.feed.http_client_adapter import HttpFeedClient
from crashreport.processor.processor import build_processor
from crashreport.publishing.webhook_adapter import WebhookPublisher
from crashreport.reporting.models import AggregateStats
from crashreport.runner.report_runner import EXIT_FAILED, EXIT_OK, ReportRunner
from factories import feature, feature_collection

REFERENCE_DATE = date(2022, 2, 14)
_VALUE_RE = re.compile(r"^(?:Crashes|Fatalities|Injuries): (\d+)$", re.MULTILINE)

EXPECTED_STATS = AggregateStats(
    weekly_crash_count=5,
    weekly_fatalities=3,
    weekly_injuries=2,
    year_to_date_crash_count=7,
    year_to_date_fatalities=4,
    year_to_date_injuries=9,
)


@pytest.fixture()
def integration_settings(tmp_path: Path, template_path: Path, feed_body: bytes) -> Settings:
    """Settings for an offline run: saved feed in, files out."""
    feed_path = tmp_path / "crashes.json"
    feed_path.write_bytes(feed_body)
    return Settings(
        feed_source="file",
        feed_file_path=feed_path,
        municipality="MADISON",
        municipality_display_name="Madison",
        first_day_of_week="sunday",
        image_template_path=template_path,
        image_font_size=24,
        publisher="filesystem",
        publish_output_dir=tmp_path / "published",
    )


class TestOfflineRun:
    def test_publishes_report_files(self, integration_settings: Settings) -> None:
        context = build_processor(integration_settings).process(REFERENCE_DATE)

        assert context.stats == EXPECTED_STATS
        assert context.receipt is not None
        output_dir = integration_settings.publish_output_dir
        text = next(output_dir.glob("*.txt")).read_text(encoding="utf-8")
        assert "06/02-12/02" in text
        assert [int(v) for v in _VALUE_RE.findall(text)] == [5, 3, 2, 7, 4, 9]
        assert next(output_dir.glob("*.png")).read_bytes().startswith(b"\x89PNG")

    def test_same_input_same_artifact(self, integration_settings: Settings) -> None:
        settings = integration_settings.model_copy(update={"dry_run": True})
        first = build_processor(settings).process(REFERENCE_DATE).artifact
        second = build_processor(settings).process(REFERENCE_DATE).artifact
        assert first is not None
        assert first == second

    def test_dry_run_publishes_nothing(self, integration_settings: Settings) -> None:
        settings = integration_settings.model_copy(update={"dry_run": True})
        context = build_processor(settings).process(REFERENCE_DATE)
        assert context.artifact is not None
        assert context.receipt is None
        assert not settings.publish_output_dir.exists()


class TestFailedRun:
    def test_missing_template_fails_without_publishing(
        self, integration_settings: Settings, tmp_path: Path
    ) -> None:
        settings = integration_settings.model_copy(
            update={"image_template_path": tmp_path / "missing.png"}
        )
        status = ReportRunner(build_processor(settings)).run(REFERENCE_DATE)
        assert status == EXIT_FAILED
        assert not settings.publish_output_dir.exists()

    def test_text_ceiling_fails_without_publishing(self, integration_settings: Settings) -> None:
        settings = integration_settings.model_copy(update={"text_max_length": 40})
        status = ReportRunner(build_processor(settings)).run(REFERENCE_DATE)
        assert status == EXIT_FAILED
        assert not settings.publish_output_dir.exists()

    def test_runner_succeeds_end_to_end(self, integration_settings: Settings) -> None:
        status = ReportRunner(build_processor(integration_settings)).run(REFERENCE_DATE)
        assert status == EXIT_OK


class TestHttpRun:
    def test_feed_and_webhook_over_http(
        self, integration_settings: Settings, feed_body: bytes
    ) -> None:
        posted: list[httpx.Request] = []

        def feed_handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=feed_body)

        def webhook_handler(request: httpx.Request) -> httpx.Response:
            posted.append(request)
            return httpx.Response(201, json={"id": "post-7"})

        feed_client = HttpFeedClient(
            url="https://feed.example.test/crashes",
            timeout_seconds=5,
            transport=httpx.MockTransport(feed_handler),
        )
        publisher = WebhookPublisher(
            url="https://publisher.example.test/hook",
            timeout_seconds=5,
            transport=httpx.MockTransport(webhook_handler),
        )

        context = build_processor(
            integration_settings, feed_client=feed_client, publisher=publisher
        ).process(REFERENCE_DATE)

        assert context.stats == EXPECTED_STATS
        assert context.receipt is not None
        assert context.receipt.reference == "post-7"
        assert len(posted) == 1


class TestYearBoundaries:
    def test_backfill_counts_year_of_reference_date(self, integration_settings: Settings) -> None:
        settings = integration_settings.model_copy(update={"dry_run": True})
        assert settings.feed_start_year is None

        context = build_processor(settings).process(REFERENCE_DATE)

        assert context.stats is not None
        assert context.stats.year_to_date_crash_count >= context.stats.weekly_crash_count
        assert context.stats == EXPECTED_STATS

    def test_first_week_of_january(self, integration_settings: Settings) -> None:
        requests: list[httpx.Request] = []
        body = json.dumps(
            feature_collection(
                [
                    feature("27/12/2022", "1", "0"),
                    feature("31/12/2022", "0", "2"),
                    feature("01/01/2023", "0", "1"),
                    feature("02/01/2023", "0", "0"),
                ]
            )
        ).encode("utf-8")

        def feed_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, content=body)

        feed_client = HttpFeedClient(
            url="https://feed.example.test/crashes",
            timeout_seconds=5,
            transport=httpx.MockTransport(feed_handler),
        )
        settings = integration_settings.model_copy(update={"dry_run": True})

        context = build_processor(settings, feed_client=feed_client).process(date(2023, 1, 3))

        assert requests[0].url.params["startyear"] == "2022"
        assert context.artifact is not None
        assert "25/12-31/12" in context.artifact.text
        assert context.stats == AggregateStats(
            weekly_crash_count=2,
            weekly_fatalities=1,
            weekly_injuries=2,
            year_to_date_crash_count=2,
            year_to_date_fatalities=0,
            year_to_date_injuries=1,
        )

    def test_start_year_after_window_fails_the_run(self, integration_settings: Settings) -> None:
        settings = integration_settings.model_copy(update={"feed_start_year": 2023})
        status = ReportRunner(build_processor(settings)).run(date(2023, 1, 3))
        assert status == EXIT_FAILED
        assert not settings.publish_output_dir.exists()
