from crashreport.config.settings import Settings
from crashreport.publishing.base import BasePublisher
from crashreport.publishing.filesystem_adapter import FilesystemPublisher
from crashreport.publishing.webhook_adapter import WebhookPublisher


class PublisherFactory:
    """Creates the configured publishing adapter."""

    PUBLISHERS = (FilesystemPublisher.NAME, WebhookPublisher.NAME)

    @classmethod
    def create(cls, settings: Settings) -> BasePublisher:
        publisher = settings.publisher.lower()
        if publisher == FilesystemPublisher.NAME:
            return FilesystemPublisher(settings.publish_output_dir)
        if publisher == WebhookPublisher.NAME:
            url = settings.publish_webhook_url.strip()
            if not url:
                raise ValueError("publish_webhook_url is required for publisher=webhook")
            return WebhookPublisher(
                url=url,
                timeout_seconds=settings.publish_webhook_timeout_seconds,
            )
        raise ValueError(
            f"Unknown publisher '{publisher}'. Choose from: {list(cls.PUBLISHERS)}"
        )
