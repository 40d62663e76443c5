"""Turn a symptom selection into a health report."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple

from .catalog import Category, rules_for

REPORT_TITLE = "Device Health Report"
MIN_SCORE = 10


class Risk(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class DiagnosticReport:
    title: str
    reason: str
    risk: Risk
    score: int
    actions: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "reason": self.reason,
            "risk": self.risk.value,
            "score": self.score,
            "actions": list(self.actions),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiagnosticReport":
        return cls(
            title=data["title"],
            reason=data["reason"],
            risk=Risk(data["risk"]),
            score=int(data["score"]),
            actions=tuple(data.get("actions", [])),
        )


def evaluate(category: Category, selected_ids: Iterable[str]) -> DiagnosticReport:
    """Score the selected symptoms against the category's rule table.

    Ids missing from the table are skipped. Callers are expected to reject an
    empty selection before getting here.
    """
    rules = rules_for(category)
    problems: List[str] = []
    actions: List[str] = []
    total = 0

    for symptom_id in selected_ids:
        rule = rules.get(symptom_id)
        if rule is None:
            continue
        problems.append(rule.problem)
        actions.extend(rule.actions)
        total += rule.severity_weight

    return DiagnosticReport(
        title=REPORT_TITLE,
        reason=", ".join(problems),
        risk=risk_for(total),
        score=score_for(total),
        actions=_dedupe(actions),
    )


def risk_for(total_weight: int) -> Risk:
    if total_weight >= 10:
        return Risk.HIGH
    if total_weight >= 5:
        return Risk.MEDIUM
    return Risk.LOW


def score_for(total_weight: int) -> int:
    return max(MIN_SCORE, 100 - 10 * total_weight)


def _dedupe(items: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(items))
