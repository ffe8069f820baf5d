"""Completion statistics for the progress chart."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .models import PracticeItem

REMAINING_LABEL = "TO_DO"
CHART_MODES = ("count", "percent")


@dataclass(frozen=True)
class ProgressSnapshot:
    """Per-subject completion derived from the working model at one moment."""

    completed: dict[str, int] = field(default_factory=dict)
    totals: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.totals.values())

    @property
    def completed_total(self) -> int:
        return sum(self.completed.values())

    @property
    def remaining(self) -> int:
        return self.total - self.completed_total

    def counts(self) -> list[tuple[str, int]]:
        """Completed items per subject, then the remaining bucket as the last entry.

        Entries are pairs so a subject sharing the bucket label keeps its own slot.
        """
        entries = list(self.completed.items())
        entries.append((REMAINING_LABEL, self.remaining))
        return entries

    def percentages(self) -> list[tuple[str, float]]:
        """Completion percentage per subject, then the share of items not yet done."""
        entries = [(subject, _percent(done, self.totals[subject])) for subject, done in self.completed.items()]
        entries.append((REMAINING_LABEL, _percent(self.remaining, self.total)))
        return entries

    def chart_data(self, mode: str = "count") -> dict[str, list[object]]:
        """Return labels and values for the doughnut chart."""
        if mode == "count":
            entries: list[tuple[str, int]] | list[tuple[str, float]] = self.counts()
        elif mode == "percent":
            entries = self.percentages()
        else:
            raise ValueError(f"Unknown chart mode '{mode}'. Expected one of: {', '.join(CHART_MODES)}.")
        return {"labels": [label for label, _ in entries], "values": [value for _, value in entries]}


def summarize(items: Iterable[PracticeItem]) -> ProgressSnapshot:
    """Group items by their own subject and count the completed ones."""
    completed: dict[str, int] = {}
    totals: dict[str, int] = {}
    for item in items:
        subject = item.subject
        totals[subject] = totals.get(subject, 0) + 1
        completed.setdefault(subject, 0)
        if item.counter > 0:
            completed[subject] += 1
    return ProgressSnapshot(completed=completed, totals=totals)


def _percent(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return part / whole * 100
