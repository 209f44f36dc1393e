import json

import pytest

from factories import feature, feature_collection
from crashreport.feed.exceptions import FetchError
from crashreport.feed.payload import parse_feature_collection


class TestParseFeatureCollection:
    def test_builds_both_encodings_in_order(self) -> None:
        body = json.dumps(feature_collection([
            feature("07/02/2022", flags=["IMPAIRED"]),
            feature("08/02/2022"),
        ]))
        feed = parse_feature_collection(body)
        assert len(feed.geo_records) == len(feed.flat_records) == 2
        assert [r["date"] for r in feed.geo_records] == ["07/02/2022", "08/02/2022"]
        assert [r["date"] for r in feed.flat_records] == ["07/02/2022", "08/02/2022"]

    def test_geo_records_carry_geometry(self) -> None:
        feed = parse_feature_collection(json.dumps(feature_collection([feature()])))
        assert feed.geo_records[0]["geometry"]["type"] == "Point"
        assert "geometry" not in feed.flat_records[0]

    def test_structured_flags_only_in_flat_encoding(self) -> None:
        body = json.dumps(feature_collection([feature(flags=["SPEEDING"])]))
        feed = parse_feature_collection(body)
        assert "flags" not in feed.geo_records[0]
        assert feed.flat_records[0]["flags"] == ["SPEEDING"]

    def test_accepts_bytes(self) -> None:
        body = json.dumps(feature_collection([])).encode("utf-8")
        feed = parse_feature_collection(body)
        assert feed.geo_records == []
        assert feed.flat_records == []


class TestMalformedPayload:
    def test_invalid_json(self) -> None:
        with pytest.raises(FetchError, match="not valid JSON"):
            parse_feature_collection("<html>maintenance</html>")

    def test_not_a_feature_collection(self) -> None:
        with pytest.raises(FetchError, match="FeatureCollection"):
            parse_feature_collection(json.dumps({"type": "Feature"}))

    def test_json_array(self) -> None:
        with pytest.raises(FetchError, match="FeatureCollection"):
            parse_feature_collection("[]")

    def test_features_not_list(self) -> None:
        body = json.dumps({"type": "FeatureCollection", "features": {}})
        with pytest.raises(FetchError, match="'features' must be a list"):
            parse_feature_collection(body)

    def test_feature_without_properties(self) -> None:
        body = json.dumps(feature_collection([feature(), {"type": "Feature"}]))
        with pytest.raises(FetchError, match="index 1"):
            parse_feature_collection(body)
