from crashreport.config.settings import Settings
from crashreport.feed.base import BaseFeedClient
from crashreport.feed.file_client_adapter import FileFeedClient
from crashreport.feed.http_client_adapter import HttpFeedClient


class FeedClientFactory:
    """Creates the configured feed adapter."""

    SOURCES = ("http", "file")

    @classmethod
    def create(cls, settings: Settings) -> BaseFeedClient:
        source = settings.feed_source.lower()
        if source == "http":
            return HttpFeedClient(
                url=settings.feed_url,
                timeout_seconds=settings.feed_timeout_seconds,
            )
        if source == "file":
            return FileFeedClient(settings.feed_file_path)
        raise ValueError(f"Unknown feed source '{source}'. Choose from: {list(cls.SOURCES)}")
