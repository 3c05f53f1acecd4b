"""One-line console report of an analysis, written to the server log."""

from __future__ import annotations

from typing import Optional

from .core.models import BulletAnalysis, Grade

_RESET = "\033[0m"
_GRADE_COLORS = {
    Grade.A: "\033[32m",
    Grade.B: "\033[32m",
    Grade.C: "\033[33m",
    Grade.D: "\033[31m",
    Grade.F: "\033[31m",
}


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def format_report(analysis: BulletAnalysis, title: Optional[str] = None, color: bool = False) -> str:
    """Render e.g. ``Release notes: 86/100 (B) - 0 errors, 2 warnings, 1 suggestion``."""
    grade = analysis.grade.value
    if color:
        grade = f"{_GRADE_COLORS[analysis.grade]}{grade}{_RESET}"

    label = title or ("Sectioned document" if analysis.section_scores else "Bullet list")
    line = (
        f"{label}: {analysis.overall_score}/100 ({grade}) - "
        f"{_plural(len(analysis.errors), 'error')}, "
        f"{_plural(len(analysis.warnings), 'warning')}, "
        f"{_plural(len(analysis.suggestions), 'suggestion')}"
    )
    if analysis.section_scores:
        line += f" across {_plural(len(analysis.section_scores), 'section')}"
    return line
