import httpx

from crashreport.feed.base import BaseFeedClient
from crashreport.feed.exceptions import FetchError
from crashreport.feed.models import QueryScope, RawFeed
from crashreport.feed.payload import parse_feature_collection
from crashreport.logging.logger import Log


class HttpFeedClient(BaseFeedClient):
    """Fetches the crash feed with a single HTTP GET."""

    FILETYPE = "json"

    def __init__(
        self,
        *,
        url: str,
        timeout_seconds: int,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def fetch(self, scope: QueryScope) -> RawFeed:
        params = self.build_params(scope)
        Log.debug(f"Requesting feed {self._url} with params {params}")
        try:
            with httpx.Client(
                timeout=self._timeout_seconds,
                transport=self._transport,
            ) as client:
                response = client.get(self._url, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"Feed returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Feed network error: {exc}") from exc

        feed = parse_feature_collection(response.content)
        Log.info(
            f"Fetched {len(feed.geo_records)} incidents for {scope.region} "
            f"since {scope.year_start}"
        )
        return feed

    def build_params(self, scope: QueryScope) -> list[tuple[str, str | int]]:
        """Query parameters in request order; ``injsvr`` repeats once per class."""
        params: list[tuple[str, str | int]] = [
            ("filetype", self.FILETYPE),
            ("startyear", scope.year_start),
        ]
        params.extend(("injsvr", code) for code in scope.severity_classes)
        params.append(("county", scope.region))
        return params
