# textshred/reporting/json_reporter.py
"""
JSON reporting utilities (optional).
"""

from __future__ import annotations

import json
from typing import Any, Dict

from textshred.observability import to_dict
from textshred.runner import RunReport


def to_json_dict(report: RunReport) -> Dict[str, Any]:
    """Convert a RunReport to a JSON-serializable dict."""
    data = to_dict(report)
    data["ok"] = report.ok
    return data


def write_json(report: RunReport, path: str) -> None:
    """Write report to a file as pretty JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_json_dict(report), f, indent=2)
