"""Probe the local machine to pre-fill laptop symptoms."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import List, Tuple

import psutil

from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class HostSnapshot:
    cpu_percent: float
    load_avg: Tuple[float, float, float]
    cpu_count: int
    interfaces_up: List[str] = field(default_factory=list)


def gather_snapshot() -> HostSnapshot:
    """Collect the host metrics the laptop suggestions rely on."""
    return HostSnapshot(
        cpu_percent=psutil.cpu_percent(interval=0.3),
        load_avg=os.getloadavg() if hasattr(os, "getloadavg") else (0.0, 0.0, 0.0),
        cpu_count=psutil.cpu_count() or 0,
        interfaces_up=_interfaces_up(),
    )


def suggest_laptop_symptoms(snapshot: HostSnapshot) -> List[str]:
    """Map live host metrics onto laptop symptom ids."""
    suggestions: List[str] = []
    load_1m = snapshot.load_avg[0]
    if snapshot.cpu_percent >= 85 or (snapshot.cpu_count and load_1m >= snapshot.cpu_count * 1.5):
        suggestions.append("fan")
    if not snapshot.interfaces_up:
        suggestions.append("wifi")
    logger.debug("Host metrics suggested %s", suggestions or "nothing")
    return suggestions


def _interfaces_up() -> List[str]:
    try:
        stats = psutil.net_if_stats()
    except (PermissionError, psutil.AccessDenied):
        # Some sandboxes refuse interface queries
        return []
    return sorted(name for name, stat in stats.items() if stat.isup and not _is_loopback(name))


def _is_loopback(name: str) -> bool:
    return name == "lo" or name.startswith("lo0") or "loopback" in name.lower()
