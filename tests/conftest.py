import json
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from factories import feature, feature_collection


@pytest.fixture()
def madison_features() -> list[dict[str, Any]]:
    """Five crashes in the week of 06/02-12/02/2022 plus three outside it."""
    return [
        feature("06/02/2022", "1", "0", flags=["IMPAIRED"]),
        feature("08/02/2022", "0", "1", flags=["SPEEDING", "PEDESTRIAN"]),
        feature("09/02/2022", "0", "1"),
        feature("11/02/2022", "0", "0", flags=["ANIMAL"]),
        feature("12/02/2022", "2", "0"),
        feature("13/02/2022", "0", "3"),
        feature("20/01/2022", "1", "4"),
        feature("10/02/2022", "5", "5", municipality="MIDDLETON"),
    ]


@pytest.fixture()
def feed_body(madison_features: list[dict[str, Any]]) -> bytes:
    return json.dumps(feature_collection(madison_features)).encode("utf-8")


@pytest.fixture()
def template_path(tmp_path: Path) -> Path:
    """A small solid background standing in for the report template."""
    path = tmp_path / "background.png"
    Image.new("RGB", (400, 300), color=(20, 40, 80)).save(path, format="PNG")
    return path
