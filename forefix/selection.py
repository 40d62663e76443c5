"""Symptom selection state and the dashboard session that drives analysis."""

from __future__ import annotations

import time
from typing import Callable, Dict, Iterator, Optional

from .catalog import Category
from .diagnostics import DiagnosticReport, evaluate
from .history import Marker, record
from .logging_config import get_logger
from .storage import Repository

logger = get_logger(__name__)

SEVERITY_LEVELS = ("low", "medium", "high")


class MarkerCycle:
    """Decides which marker a symptom moves to on each toggle."""

    def next(self, current: Optional[Marker]) -> Optional[Marker]:
        raise NotImplementedError


class SeverityCycle(MarkerCycle):
    """unset -> low -> medium -> high -> unset"""

    def next(self, current: Optional[Marker]) -> Optional[Marker]:
        if current is None:
            return SEVERITY_LEVELS[0]
        position = SEVERITY_LEVELS.index(current)
        if position + 1 < len(SEVERITY_LEVELS):
            return SEVERITY_LEVELS[position + 1]
        return None


class PresenceCycle(MarkerCycle):
    """unset -> selected -> unset"""

    def next(self, current: Optional[Marker]) -> Optional[Marker]:
        return None if current else True


_CYCLES: Dict[Category, MarkerCycle] = {
    Category.MOBILE: SeverityCycle(),
    Category.LAPTOP: PresenceCycle(),
    Category.WEBAPP: PresenceCycle(),
}


def cycle_for(category: Category) -> MarkerCycle:
    return _CYCLES[category]


class SelectionSet:
    """Selected symptom ids in toggle order, each with its marker."""

    def __init__(self, category: Category):
        self.category = category
        self._markers: Dict[str, Marker] = {}

    def toggle(self, symptom_id: str) -> Optional[Marker]:
        marker = cycle_for(self.category).next(self._markers.get(symptom_id))
        if marker is None:
            self._markers.pop(symptom_id, None)
        else:
            self._markers[symptom_id] = marker
        return marker

    def marker(self, symptom_id: str) -> Optional[Marker]:
        return self._markers.get(symptom_id)

    def clear(self) -> None:
        self._markers.clear()

    def as_dict(self) -> Dict[str, Marker]:
        return dict(self._markers)

    def __len__(self) -> int:
        return len(self._markers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._markers)

    def __contains__(self, symptom_id: object) -> bool:
        return symptom_id in self._markers


class DiagnosisSession:
    """Dashboard state: active category, selection and the last report."""

    def __init__(
        self,
        repository: Repository,
        category: Category = Category.MOBILE,
        delay: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.repository = repository
        self.delay = delay
        self._sleep = sleep
        self.selection = SelectionSet(category)
        self.last_report: Optional[DiagnosticReport] = None

    @property
    def category(self) -> Category:
        return self.selection.category

    def switch_category(self, category: Category) -> None:
        self.selection = SelectionSet(category)
        self.last_report = None

    def toggle(self, symptom_id: str) -> Optional[Marker]:
        return self.selection.toggle(symptom_id)

    def reset(self) -> None:
        self.selection.clear()
        self.last_report = None

    def analyze(self) -> Optional[DiagnosticReport]:
        """Evaluate the current selection and append it to history.

        Returns None without touching history when nothing is selected.
        """
        if not self.selection:
            logger.info("Analyze requested with no symptoms selected")
            return None

        self.last_report = None
        if self.delay > 0:
            self._sleep(self.delay)

        report = evaluate(self.category, self.selection)
        record(self.repository, self.category, self.selection.as_dict(), report)
        logger.info("Analyzed %d symptom(s) for %s: %s", len(self.selection), self.category.value, report.risk.value)
        self.last_report = report
        return report
