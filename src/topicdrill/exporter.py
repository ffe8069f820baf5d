"""Rebuild and serialize the nested catalog from the working model."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from .models import CatalogEntry, PracticeItem, Subtopic, split_qualified_name

DEFAULT_EXPORT_FILENAME = "data.json"
EXPORT_INDENT = 4


def to_catalog(items: Iterable[PracticeItem]) -> list[CatalogEntry]:
    """Group flat items back into subjects, keeping first-seen order."""
    catalog: list[CatalogEntry] = []
    by_subject: dict[str, CatalogEntry] = {}
    for item in items:
        subject, subtopic = split_qualified_name(item.qualified_name)
        entry = by_subject.get(subject)
        if entry is None:
            entry = CatalogEntry(name=subject)
            by_subject[subject] = entry
            catalog.append(entry)
        entry.subtopics.append(Subtopic(name=subtopic, counter=item.counter))
    return catalog


def catalog_to_dict(catalog: Iterable[CatalogEntry]) -> dict[str, object]:
    """Return the catalog in its interchange shape."""
    return {
        "subjects": [
            {
                "name": entry.name,
                "subtopics": [{"name": subtopic.name, "counter": subtopic.counter} for subtopic in entry.subtopics],
            }
            for entry in catalog
        ]
    }


def dumps_catalog(items: Iterable[PracticeItem], indent: int = EXPORT_INDENT) -> str:
    """Serialize the working model as human-readable catalog JSON."""
    payload = catalog_to_dict(to_catalog(items))
    return json.dumps(payload, indent=indent, ensure_ascii=False) + "\n"


def save_catalog(items: Iterable[PracticeItem], path: Path | str) -> Path:
    """Write the catalog JSON to ``path`` and return the written path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(dumps_catalog(items), encoding="utf-8")
    return target
