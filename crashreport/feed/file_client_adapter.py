from pathlib import Path

from crashreport.feed.base import BaseFeedClient
from crashreport.feed.exceptions import FetchError
from crashreport.feed.models import QueryScope, RawFeed
from crashreport.feed.payload import parse_feature_collection
from crashreport.logging.logger import Log


class FileFeedClient(BaseFeedClient):
    """Replays a feature collection previously saved from the feed.

    The scope is not applied: the file is expected to hold exactly the
    response the live feed returned for it.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def fetch(self, scope: QueryScope) -> RawFeed:
        try:
            body = self._path.read_bytes()
        except OSError as exc:
            raise FetchError(f"Failed to read feed file {self._path}: {exc}") from exc
        feed = parse_feature_collection(body)
        Log.info(
            f"Loaded {len(feed.geo_records)} incidents from {self._path} "
            f"(scope {scope.region}/{scope.year_start})"
        )
        return feed
