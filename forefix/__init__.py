"""
Local self-diagnosis tool that turns observed device symptoms into a health report.
"""

__all__ = ["auth", "catalog", "cli", "diagnostics", "history", "selection", "storage", "system_state", "theme"]
__version__ = "0.1.0"
