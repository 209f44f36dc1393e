from abc import ABC, abstractmethod

from crashreport.publishing.models import PublishReceipt


class BasePublisher(ABC):
    """Contract for all publishing adapters."""

    @abstractmethod
    def publish(self, text: str, image: bytes) -> PublishReceipt:
        """Hand the composed report to the publishing service.

        Args:
            text: Message body, already within the platform's length limit.
            image: PNG-encoded report image.

        Returns:
            PublishReceipt identifying the publication.

        Raises:
            PublishError: on any failure. Callers do not retry.
        """
