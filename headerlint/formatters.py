"""Render file reports for the terminal or for machines."""

from __future__ import annotations

import json
from typing import List, Sequence

from .models import FileReport


def format_text(reports: Sequence[FileReport]) -> str:
    lines: List[str] = []
    errors = warnings = 0
    for report in reports:
        for diagnostic in report.diagnostics:
            suffix = " (fixable)" if diagnostic.fixable else ""
            lines.append(
                f"{report.path}:{diagnostic.line}:{diagnostic.column}: "
                f"{diagnostic.severity.value.upper()} {diagnostic.message} "
                f"[{diagnostic.code}]{suffix}"
            )
        errors += len(report.errors)
        warnings += len(report.warnings)
    if errors or warnings:
        lines.append(f"Found {errors} error(s) and {warnings} warning(s)")
    else:
        lines.append("No problems found")
    return "\n".join(lines) + "\n"


def format_json(reports: Sequence[FileReport]) -> str:
    return json.dumps([report.to_dict() for report in reports], indent=2) + "\n"


FORMATTERS = {
    "text": format_text,
    "json": format_json,
}


__all__ = ["FORMATTERS", "format_json", "format_text"]
