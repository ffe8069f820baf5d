from __future__ import annotations

import json
import random
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from topicdrill.config import AppConfig  # noqa: E402
from topicdrill.service import PracticeSession  # noqa: E402
from topicdrill.web import create_app  # noqa: E402


@pytest.fixture
def sample_catalog() -> dict[str, Any]:
    """Catalog with mixed counters, used across loader/exporter/web tests."""
    return {
        "subjects": [
            {
                "name": "Math",
                "subtopics": [
                    {"name": "Algebra", "counter": 1},
                    {"name": "Geometry", "counter": 0},
                ],
            },
            {
                "name": "Bio",
                "subtopics": [{"name": "Cells", "counter": 2}],
            },
        ]
    }


@pytest.fixture
def catalog_file(tmp_path: Path, sample_catalog: dict[str, Any]) -> Path:
    path = tmp_path / "data.json"
    path.write_text(json.dumps(sample_catalog), encoding="utf-8")
    return path


@pytest.fixture
def client(catalog_file: Path) -> Iterator[Any]:
    session = PracticeSession(rng=random.Random(7))
    session.load(catalog_file)
    app = create_app(AppConfig(catalog_path=catalog_file), session=session)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
