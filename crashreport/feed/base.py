from abc import ABC, abstractmethod

from crashreport.feed.models import QueryScope, RawFeed


class BaseFeedClient(ABC):
    """Contract for all incident feed adapters."""

    @abstractmethod
    def fetch(self, scope: QueryScope) -> RawFeed:
        """Retrieve the raw incident records for a query scope.

        Args:
            scope: Region, first year and severity classes to request.

        Returns:
            RawFeed with the geometry-bearing and flat-properties encodings.

        Raises:
            FetchError: on network/HTTP failure or a malformed payload.
        """
