from crashreport.feed.base import BaseFeedClient
from crashreport.feed.factory import FeedClientFactory
from crashreport.feed.models import QueryScope, RawFeed

__all__ = ["BaseFeedClient", "FeedClientFactory", "QueryScope", "RawFeed"]
