"""Load subject catalogs from JSON and flatten them into practice items."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import cast

from .models import QUALIFIED_NAME_DELIMITER, FormatError, PracticeItem, qualify

CONTENT_PACKAGE = "topicdrill.content"
BUNDLED_CATALOG = "data.json"

logger = logging.getLogger(__name__)


def _usable_name(raw: dict[str, object], what: str) -> str:
    """Return the ``name`` field as written, or raise when it is blank."""
    name: object = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise FormatError(f"{what} is missing a usable name.")
    return name


def _counter_from_raw(value: object, qualified_name: str) -> int:
    """Coerce a raw counter value; missing counters start at zero."""
    if value is None:
        return 0
    counter: int | None = None
    if isinstance(value, bool):
        counter = None
    elif isinstance(value, int):
        counter = value
    elif isinstance(value, float) and value.is_integer():
        counter = int(value)
    elif isinstance(value, str):
        try:
            counter = int(value.strip())
        except ValueError:
            counter = None
    if counter is None or counter < 0:
        raise FormatError(f"Subtopic '{qualified_name}' has invalid counter {value!r}.")
    return counter


def _items_from_subject(index: int, raw_obj: object, seen_subjects: set[str]) -> list[PracticeItem]:
    """Flatten one subject entry into its practice items."""
    if not isinstance(raw_obj, dict):
        raise FormatError(f"Subject #{index} must be a JSON object.")
    raw = cast(dict[str, object], raw_obj)
    subject = _usable_name(raw, f"Subject #{index}")
    if QUALIFIED_NAME_DELIMITER in subject:
        raise FormatError(f"Subject name '{subject}' must not contain '{QUALIFIED_NAME_DELIMITER}'.")
    if subject in seen_subjects:
        raise FormatError(f"Duplicate subject name: {subject}")
    seen_subjects.add(subject)

    subtopics: object = raw.get("subtopics")
    if not isinstance(subtopics, list):
        raise FormatError(f"Subject '{subject}' has no subtopics list.")
    if not subtopics:
        logger.warning("Subject '%s' has no subtopics and contributes no practice items.", subject)

    items: list[PracticeItem] = []
    seen_subtopics: set[str] = set()
    for position, subtopic_obj in enumerate(cast(list[object], subtopics)):
        if not isinstance(subtopic_obj, dict):
            raise FormatError(f"Subtopic #{position} of '{subject}' must be a JSON object.")
        subtopic_raw = cast(dict[str, object], subtopic_obj)
        subtopic = _usable_name(subtopic_raw, f"Subtopic #{position} of '{subject}'")
        if subtopic in seen_subtopics:
            raise FormatError(f"Duplicate subtopic '{subtopic}' in subject '{subject}'.")
        seen_subtopics.add(subtopic)
        qualified_name = qualify(subject, subtopic)
        counter = _counter_from_raw(subtopic_raw.get("counter"), qualified_name)
        items.append(PracticeItem(qualified_name=qualified_name, counter=counter))
    return items


def flatten(raw: object) -> list[PracticeItem]:
    """Flatten a decoded catalog document in subject-then-subtopic order.

    Any malformed entry aborts the whole call, so callers never see a partial
    working model.
    """
    if not isinstance(raw, dict):
        raise FormatError("Catalog root must be a JSON object.")
    subjects: object = cast(dict[str, object], raw).get("subjects")
    if not isinstance(subjects, list):
        raise FormatError("Catalog must contain a 'subjects' list.")

    items: list[PracticeItem] = []
    seen_subjects: set[str] = set()
    for index, subject in enumerate(cast(list[object], subjects)):
        items.extend(_items_from_subject(index, subject, seen_subjects))
    return items


def parse_catalog_text(text: str) -> list[PracticeItem]:
    """Decode catalog JSON text and flatten it."""
    try:
        raw: object = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Catalog is not valid JSON: {exc}") from exc
    return flatten(raw)


def load_catalog(path: Path | str) -> list[PracticeItem]:
    """Load and flatten a catalog file."""
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_catalog_text(text)


def load_bundled_catalog() -> list[PracticeItem]:
    """Load the sample catalog shipped with the package."""
    entry = resources.files(CONTENT_PACKAGE).joinpath(BUNDLED_CATALOG)
    return parse_catalog_text(entry.read_text(encoding="utf-8-sig"))
