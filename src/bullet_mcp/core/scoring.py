"""Score aggregation and grading.

Combines per-rule scores into an overall 0-100 score and letter grade, applies
the validation toggles, buckets issues by severity and ranks the improvements
worth making first.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from .context import assess_context
from .models import (
    BulletAnalysis,
    BulletItem,
    Context,
    Grade,
    RuleScore,
    Severity,
    ValidationConfig,
    ValidationIssue,
)
from .rules import DEFAULT_ADVICE, MAX_POINTS, evaluate_rules, line_length, list_depth

logger = logging.getLogger(__name__)

GRADE_THRESHOLDS: tuple[tuple[int, Grade], ...] = (
    (90, Grade.A),
    (80, Grade.B),
    (70, Grade.C),
    (60, Grade.D),
)

SEVERITY_RANK = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.SUGGESTION: 2}

MAX_IMPROVEMENTS = 3

_GRADE_LEADS = {
    Grade.A: "Excellent bullet list that follows research-backed readability guidelines.",
    Grade.B: "Good bullet list with minor room for improvement.",
    Grade.C: "Fair bullet list; several readability guidelines are not met.",
    Grade.D: "Weak bullet list with significant readability problems.",
    Grade.F: "Poor bullet list; major restructuring is recommended.",
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def grade_for(score: int) -> Grade:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return Grade.F


def compute_score(scores: Sequence[RuleScore]) -> int:
    """Earned points as a percentage of available points."""
    available = sum(s.max_points for s in scores)
    if available <= 0:
        return 100
    earned = sum(s.earned_points for s in scores)
    return max(0, min(100, round_half_up(earned / available * 100)))


def apply_validation_config(scores: Sequence[RuleScore], validation: ValidationConfig) -> list[RuleScore]:
    """Promote warnings in strict mode and strip citations when disabled.

    Points are left untouched: a promoted warning lands in a different bucket
    but costs no more than it did before.
    """
    if not validation.strict_mode and validation.enable_research_citations:
        return list(scores)

    def adjust(issue: ValidationIssue) -> ValidationIssue:
        update = {}
        if validation.strict_mode and issue.severity is Severity.WARNING:
            update["severity"] = Severity.ERROR
        if not validation.enable_research_citations and issue.research_basis is not None:
            update["research_basis"] = None
        return issue.model_copy(update=update) if update else issue

    return [s.model_copy(update={"issues": tuple(adjust(i) for i in s.issues)}) for s in scores]


def evaluate_list(items: Sequence[BulletItem], context: Context, validation: ValidationConfig) -> list[RuleScore]:
    """Run every rule over one list and apply the validation toggles."""
    return apply_validation_config(evaluate_rules(items, context), validation)


def collect_issues(scores: Iterable[RuleScore]) -> list[ValidationIssue]:
    return [issue for s in scores for issue in s.issues]


def partition_issues(
    issues: Iterable[ValidationIssue],
) -> tuple[tuple[ValidationIssue, ...], tuple[ValidationIssue, ...], tuple[ValidationIssue, ...]]:
    """Split issues into (errors, warnings, suggestions), keeping their order."""
    buckets: dict[Severity, list[ValidationIssue]] = {s: [] for s in Severity}
    for issue in issues:
        buckets[issue.severity].append(issue)
    return (
        tuple(buckets[Severity.ERROR]),
        tuple(buckets[Severity.WARNING]),
        tuple(buckets[Severity.SUGGESTION]),
    )


def rank_improvements(issues: Sequence[ValidationIssue], limit: int = MAX_IMPROVEMENTS) -> tuple[str, ...]:
    """Pick the most impactful fixes: severity first, then the rule's point value."""
    ranked = sorted(issues, key=lambda i: (SEVERITY_RANK[i.severity], -MAX_POINTS.get(i.rule, 0)))
    improvements: list[str] = []
    for issue in ranked:
        advice = issue.suggestion or DEFAULT_ADVICE[issue.rule]
        if advice not in improvements:
            improvements.append(advice)
        if len(improvements) >= limit:
            break
    return tuple(improvements)


def average_line_length(items: Sequence[BulletItem]) -> float:
    if not items:
        return 0.0
    return round(sum(line_length(item) for item in items) / len(items), 1)


def summarize(score: int, grade: Grade, item_count: int, error_count: int) -> str:
    summary = f"{_GRADE_LEADS[grade]} Scored {score}/100 ({grade.value}) across {item_count} item{'s' if item_count != 1 else ''}."
    if error_count:
        summary += f" {error_count} error{'s' if error_count != 1 else ''} must be fixed."
    return summary


def analyze_items(items: Sequence[BulletItem], context: Context, validation: ValidationConfig) -> BulletAnalysis:
    """Single-list pipeline: rules, aggregation, grading and context fit."""
    scores = evaluate_list(items, context, validation)
    overall = compute_score(scores)
    grade = grade_for(overall)
    issues = collect_issues(scores)
    errors, warnings, suggestions = partition_issues(issues)

    depth = list_depth(items)
    avg_length = average_line_length(items)
    fit = assess_context(context, len(items), depth, avg_length)

    logger.debug("Scored %d items: %d/100 (%s), %d issues", len(items), overall, grade.value, len(issues))

    return BulletAnalysis(
        overall_score=overall,
        grade=grade,
        scores=tuple(scores),
        errors=errors,
        warnings=warnings,
        suggestions=suggestions,
        summary=summarize(overall, grade, len(items), len(errors)),
        top_improvements=rank_improvements(issues),
        item_count=len(items),
        max_depth=depth,
        avg_line_length=avg_length,
        context_fit=fit.fit,
        context_feedback=fit.feedback,
    )
