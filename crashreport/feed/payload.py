"""Splits a feature collection into the two record encodings."""

import json
from typing import Any

from crashreport.feed.exceptions import FetchError
from crashreport.feed.models import RawFeed


def parse_feature_collection(body: str | bytes) -> RawFeed:
    """Decode a GeoJSON feature collection and build both encodings.

    Raises:
        FetchError: if the body is not a JSON feature collection.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise FetchError(f"Feed payload is not valid JSON: {exc}") from exc

    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise FetchError("Feed payload must be a GeoJSON FeatureCollection")
    features = data.get("features")
    if not isinstance(features, list):
        raise FetchError("Feed payload 'features' must be a list")

    geo_records: list[dict[str, Any]] = []
    flat_records: list[dict[str, Any]] = []
    for index, feature in enumerate(features):
        properties = _feature_properties(feature, index)
        geo_records.append(_geo_record(feature, properties))
        flat_records.append(dict(properties))
    return RawFeed(geo_records=geo_records, flat_records=flat_records)


def _feature_properties(feature: Any, index: int) -> dict[str, Any]:
    if not isinstance(feature, dict):
        raise FetchError(f"Feature at index {index} must be an object")
    properties = feature.get("properties")
    if not isinstance(properties, dict):
        raise FetchError(f"Feature at index {index}: 'properties' must be an object")
    return properties


def _geo_record(feature: dict[str, Any], properties: dict[str, Any]) -> dict[str, Any]:
    # The geometry export is columnar: list/object valued properties do not survive it.
    record = {
        key: value
        for key, value in properties.items()
        if not isinstance(value, (list, dict))
    }
    record["geometry"] = feature.get("geometry")
    return record
