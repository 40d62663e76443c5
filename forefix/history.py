"""Diagnostic history, stored most recent first."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .catalog import Category
from .diagnostics import DiagnosticReport
from .storage import Repository

Marker = Union[str, bool]


@dataclass
class HistoryEntry:
    timestamp: datetime
    category: Category
    report: DiagnosticReport
    input_selection: List[Tuple[str, Marker]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "category": self.category.value,
            "inputSelection": [[symptom_id, marker] for symptom_id, marker in self.input_selection],
            "report": self.report.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            category=Category(data["category"]),
            report=DiagnosticReport.from_dict(data["report"]),
            input_selection=[(symptom_id, marker) for symptom_id, marker in data.get("inputSelection", [])],
        )


def record(
    repository: Repository,
    category: Category,
    selection: Mapping[str, Marker],
    report: DiagnosticReport,
    timestamp: Optional[datetime] = None,
) -> HistoryEntry:
    """Prepend a new entry to the stored history and return it."""
    entry = HistoryEntry(
        timestamp=timestamp or datetime.now(),
        category=category,
        report=report,
        input_selection=list(selection.items()),
    )
    entries = repository.history()
    entries.insert(0, entry.to_dict())
    repository.save_history(entries)
    return entry


def load(repository: Repository) -> List[HistoryEntry]:
    return [HistoryEntry.from_dict(raw) for raw in repository.history()]


def clear(repository: Repository) -> None:
    repository.save_history([])
