"""Static symptom catalog and rule tables for every device category."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class Category(str, Enum):
    MOBILE = "mobile"
    LAPTOP = "laptop"
    WEBAPP = "webapp"


@dataclass(frozen=True)
class SymptomDefinition:
    id: str
    label: str
    icon: str


@dataclass(frozen=True)
class SymptomRule:
    problem: str
    severity_weight: int
    actions: Tuple[str, ...]


SYMPTOMS: Dict[Category, List[SymptomDefinition]] = {
    Category.MOBILE: [
        SymptomDefinition("heating", "Phone Heating", "🔥"),
        SymptomDefinition("battery", "Battery Drain", "🔋"),
        SymptomDefinition("storage", "Storage Full", "💾"),
        SymptomDefinition("slow", "Slow Performance", "🐢"),
        SymptomDefinition("ram", "High RAM Usage", "🧠"),
        SymptomDefinition("notifications", "Frequent Notifications", "🔔"),
        SymptomDefinition("network", "Weak Signal", "📶"),
        SymptomDefinition("restart", "Random Restarts", "🔄"),
    ],
    Category.LAPTOP: [
        SymptomDefinition("fan", "Loud Fan Noise", "🔊"),
        SymptomDefinition("blue_screen", "Blue Screen errors", "💻"),
        SymptomDefinition("slow_boot", "Slow Boot Time", "⏳"),
        SymptomDefinition("wifi", "WiFi Disconnects", "📡"),
    ],
    Category.WEBAPP: [
        SymptomDefinition("api_slow", "Slow API Response", "🐌"),
        SymptomDefinition("js_error", "Console Errors", "⚠️"),
        SymptomDefinition("layout", "Broken Layout", "🧩"),
        SymptomDefinition("login_fail", "Login Failures", "🔒"),
        SymptomDefinition("data_loss", "Missing Data", "🗂️"),
    ],
}


RULES: Dict[Category, Dict[str, SymptomRule]] = {
    Category.MOBILE: {
        "heating": SymptomRule(
            problem="Device overheating",
            severity_weight=3,
            actions=("Close heavy apps", "Remove phone case", "Avoid charging while using"),
        ),
        "battery": SymptomRule(
            problem="Battery degradation",
            severity_weight=2,
            actions=("Lower brightness", "Limit background apps", "Check battery health"),
        ),
        "storage": SymptomRule(
            problem="Low storage space",
            severity_weight=2,
            actions=("Clear cache", "Delete unused files", "Move media to cloud storage"),
        ),
        "slow": SymptomRule(
            problem="Performance slowdown",
            severity_weight=2,
            actions=("Clear cache", "Restart device", "Uninstall unused apps"),
        ),
        "ram": SymptomRule(
            problem="Memory pressure",
            severity_weight=2,
            actions=("Limit background apps", "Restart device"),
        ),
        "notifications": SymptomRule(
            problem="Notification overload",
            severity_weight=1,
            actions=("Disable non-essential notifications",),
        ),
        "network": SymptomRule(
            problem="Weak network reception",
            severity_weight=1,
            actions=("Toggle airplane mode", "Reset network settings"),
        ),
        "restart": SymptomRule(
            problem="System instability",
            severity_weight=3,
            actions=("Backup important data", "Update system software", "Visit service center"),
        ),
    },
    Category.LAPTOP: {
        "fan": SymptomRule(
            problem="Thermal throttling",
            severity_weight=2,
            actions=("Clean air vents", "Use on a hard flat surface", "Check for runaway processes"),
        ),
        "blue_screen": SymptomRule(
            problem="Critical system failure",
            severity_weight=3,
            actions=("Backup important data", "Update drivers", "Run memory diagnostics"),
        ),
        "slow_boot": SymptomRule(
            problem="Startup overload",
            severity_weight=1,
            actions=("Disable startup programs", "Check disk health"),
        ),
        "wifi": SymptomRule(
            problem="Network adapter instability",
            severity_weight=2,
            actions=("Update network drivers", "Restart router", "Forget and rejoin network"),
        ),
    },
    Category.WEBAPP: {
        "api_slow": SymptomRule(
            problem="Backend latency",
            severity_weight=2,
            actions=("Profile slow endpoints", "Add response caching"),
        ),
        "js_error": SymptomRule(
            problem="Client-side script failures",
            severity_weight=2,
            actions=("Inspect browser console", "Fix failing scripts"),
        ),
        "layout": SymptomRule(
            problem="Rendering defects",
            severity_weight=1,
            actions=("Check CSS breakpoints", "Test across browsers"),
        ),
        "login_fail": SymptomRule(
            problem="Authentication failure",
            severity_weight=3,
            actions=("Verify auth service status", "Reset user credentials"),
        ),
        "data_loss": SymptomRule(
            problem="Data integrity issue",
            severity_weight=3,
            actions=("Restore from backup", "Audit database writes"),
        ),
    },
}


def parse_category(value: str) -> Category:
    """Resolve a category name, raising ValueError for unknown names."""
    return Category(value.strip().lower())


def symptoms_for(category: Category) -> List[SymptomDefinition]:
    return SYMPTOMS.get(category, [])


def rules_for(category: Category) -> Dict[str, SymptomRule]:
    return RULES.get(category, {})


def find_symptom(category: Category, symptom_id: str) -> SymptomDefinition | None:
    for symptom in symptoms_for(category):
        if symptom.id == symptom_id:
            return symptom
    return None
