"""Core data models for subject/subtopic practice tracking."""

from __future__ import annotations

from dataclasses import dataclass, field

QUALIFIED_NAME_DELIMITER = ": "


class FormatError(ValueError):
    """Raised when a catalog document or qualified name is malformed."""


@dataclass(frozen=True)
class Subtopic:
    """One subtopic with its practice counter, as stored in a catalog."""

    name: str
    counter: int = 0


@dataclass(frozen=True)
class CatalogEntry:
    """One subject and its ordered subtopics."""

    name: str
    subtopics: list[Subtopic] = field(default_factory=list)


@dataclass
class PracticeItem:
    """One flattened practice item of the working model.

    ``counter`` is the only field that changes during a session.
    """

    qualified_name: str
    counter: int = 0

    @property
    def subject(self) -> str:
        return split_qualified_name(self.qualified_name)[0]

    @property
    def subtopic(self) -> str:
        return split_qualified_name(self.qualified_name)[1]


def qualify(subject: str, subtopic: str) -> str:
    """Build the ``"<subject>: <subtopic>"`` name of a practice item."""
    return f"{subject}{QUALIFIED_NAME_DELIMITER}{subtopic}"


def split_qualified_name(qualified_name: str) -> tuple[str, str]:
    """Split a qualified name into ``(subject, subtopic)``.

    The split happens on the first delimiter only, so subtopic names may contain
    it while subject names may not.
    """
    subject, delimiter, subtopic = qualified_name.partition(QUALIFIED_NAME_DELIMITER)
    if not delimiter:
        raise FormatError(f"Practice item name '{qualified_name}' has no subject delimiter.")
    return subject, subtopic
