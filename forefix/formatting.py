"""Console-friendly formatting utilities."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from .catalog import SymptomDefinition
from .diagnostics import DiagnosticReport
from .history import HistoryEntry, Marker


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))
    lines = []
    lines.append(_format_row(headers, widths))
    lines.append(_format_row(["-" * w for w in widths], widths))
    for row in rows:
        lines.append(_format_row(row, widths))
    return "\n".join(lines)


def marker_label(marker: Optional[Marker]) -> str:
    if marker is None:
        return "Select"
    if marker is True:
        return "Selected"
    return str(marker).capitalize()


def format_symptoms(symptoms: Iterable[SymptomDefinition], selection: Optional[Mapping[str, Marker]] = None) -> str:
    selection = selection or {}
    rows = [
        [str(index), symptom.icon, symptom.id, symptom.label, marker_label(selection.get(symptom.id))]
        for index, symptom in enumerate(symptoms, start=1)
    ]
    return render_table(["#", "", "ID", "Symptom", "Status"], rows) if rows else "No symptoms defined"


def format_report(report: DiagnosticReport) -> str:
    lines = [
        report.title,
        f"Reason: {report.reason or '-'}",
        f"Risk: {report.risk.value}",
        f"Health score: {report.score}/100",
        "Recommended actions:",
    ]
    lines.extend(f"  - {action}" for action in report.actions)
    return "\n".join(lines)


def format_history(entries: Sequence[HistoryEntry]) -> str:
    if not entries:
        return "No history found."
    rows = [
        [
            f"{entry.timestamp:%Y-%m-%d %H:%M:%S}",
            entry.category.value,
            entry.report.title,
            entry.report.risk.value,
            str(entry.report.score),
        ]
        for entry in entries
    ]
    return render_table(["Date", "Category", "Title", "Risk", "Score"], rows)


def _format_row(row: Sequence[str], widths: Sequence[int]) -> str:
    padded = [cell.ljust(width) for cell, width in zip(row, widths)]
    return " | ".join(padded)
