import json
import logging
import random
from pathlib import Path
from typing import Any

import pytest

from topicdrill.models import FormatError, PracticeItem
from topicdrill.sampler import DrawRangeError
from topicdrill.service import PracticeSession


def test_load_from_file(catalog_file: Path) -> None:
    session = PracticeSession()
    assert session.load(catalog_file) is True
    assert [item.qualified_name for item in session.items] == ["Math: Algebra", "Math: Geometry", "Bio: Cells"]


def test_load_bundled_catalog_by_default() -> None:
    session = PracticeSession()
    assert session.load() is True
    assert session.items


def test_malformed_catalog_leaves_empty_model_and_logs(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"subjects": [{"name": "Ok", "subtopics": [{"name": "a"}]}, {"subtopics": []}]}))
    session = PracticeSession([PracticeItem("Old: item", 1)])
    with caplog.at_level(logging.ERROR, logger="topicdrill.service"):
        assert session.load(path) is False
    assert session.items == []
    assert "Error loading data" in caplog.text


def test_unreadable_catalog_leaves_empty_model(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    session = PracticeSession()
    with caplog.at_level(logging.ERROR, logger="topicdrill.service"):
        assert session.load(tmp_path / "missing.json") is False
    assert session.items == []
    assert "Could not read catalog" in caplog.text


def test_draw_sets_current_draw(catalog_file: Path) -> None:
    session = PracticeSession(rng=random.Random(5))
    session.load(catalog_file)
    drawn = session.draw(2)
    assert len(set(drawn)) == 2
    assert drawn == sorted(drawn)
    assert [item.index for item in session.presented()] == drawn


def test_draw_too_many_raises_and_keeps_previous_draw(catalog_file: Path) -> None:
    session = PracticeSession()
    session.load(catalog_file)
    previous = session.draw(1)
    with pytest.raises(DrawRangeError):
        session.draw(4)
    assert session.current_draw == previous


def test_draw_nothing_from_empty_session() -> None:
    assert PracticeSession().draw(0) == []


def test_marking_same_item_twice_adds_two_and_touches_nothing_else(catalog_file: Path) -> None:
    session = PracticeSession()
    session.load(catalog_file)
    before = [item.counter for item in session.items]
    session.mark_practiced(1)
    session.mark_practiced(1)
    after = [item.counter for item in session.items]
    assert after[1] == before[1] + 2
    assert after[0] == before[0]
    assert after[2] == before[2]


def test_mark_practiced_unknown_index_raises(catalog_file: Path) -> None:
    session = PracticeSession()
    session.load(catalog_file)
    for index in (-1, 3):
        with pytest.raises(IndexError):
            session.mark_practiced(index)


def test_practice_updates_snapshot(catalog_file: Path) -> None:
    session = PracticeSession()
    session.load(catalog_file)
    assert session.snapshot().remaining == 1
    session.mark_practiced(1)
    snapshot = session.snapshot()
    assert snapshot.completed == {"Math": 2, "Bio": 1}
    assert snapshot.remaining == 0


def test_presented_label(catalog_file: Path) -> None:
    session = PracticeSession()
    session.load(catalog_file)
    assert session.describe(2).label == "Bio: Cells (Repeated 2 times)"


def test_replace_from_document_commits_only_valid_catalogs(sample_catalog: dict[str, Any]) -> None:
    session = PracticeSession([PracticeItem("Old: item", 1)])
    with pytest.raises(FormatError):
        session.replace_from_document({"subjects": [{"name": "X", "subtopics": "nope"}]})
    assert session.items == [PracticeItem("Old: item", 1)]

    assert session.replace_from_document(sample_catalog) == 3
    assert session.items[0].qualified_name == "Math: Algebra"
    assert session.current_draw == []


def test_save_and_export_reflect_increments(tmp_path: Path, catalog_file: Path) -> None:
    session = PracticeSession()
    session.load(catalog_file)
    session.mark_practiced(1)
    saved = json.loads(session.save(tmp_path / "saved.json").read_text(encoding="utf-8"))
    assert saved["subjects"][0]["subtopics"][1] == {"name": "Geometry", "counter": 1}
    assert json.loads(session.export_json()) == saved
    assert session.to_catalog()[1].name == "Bio"
