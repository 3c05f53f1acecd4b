"""Sectioned analysis for long, multi-chapter documents.

Each section is scored on its own with the single-list pipeline, so the 3-7
item guideline applies per section rather than to the document as a whole.
The document score is the plain mean of section scores: a short section
counts as much as a long one.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .context import assess_context
from .models import (
    BulletAnalysis,
    BulletItem,
    BulletSection,
    Context,
    RuleScore,
    SectionScore,
    ValidationConfig,
)
from .rules import list_depth
from .scoring import (
    average_line_length,
    collect_issues,
    compute_score,
    evaluate_list,
    grade_for,
    partition_issues,
    rank_improvements,
    round_half_up,
)

logger = logging.getLogger(__name__)


def _prefix_issues(score: RuleScore, title: str) -> RuleScore:
    issues = tuple(i.model_copy(update={"message": f"[{title}] {i.message}"}) for i in score.issues)
    return score.model_copy(update={"issues": issues})


def _pool_scores(per_section: Sequence[Sequence[RuleScore]]) -> tuple[RuleScore, ...]:
    """Combine each rule's points and issues across sections, in rule order."""
    pooled = []
    for rule_scores in zip(*per_section):
        pooled.append(RuleScore(
            rule=rule_scores[0].rule,
            max_points=sum(s.max_points for s in rule_scores),
            earned_points=sum(s.earned_points for s in rule_scores),
            issues=tuple(i for s in rule_scores for i in s.issues),
        ))
    return tuple(pooled)


def summarize_sections(score: int, section_scores: Sequence[SectionScore], error_count: int) -> str:
    grade = grade_for(score)
    item_count = sum(s.item_count for s in section_scores)
    weakest = min(section_scores, key=lambda s: s.score)
    summary = (
        f"Document scored {score}/100 ({grade.value}), averaged across sections: "
        f"{len(section_scores)} analyzed with {item_count} items in total."
    )
    if len(section_scores) > 1 and weakest.score < score:
        summary += f" Weakest section: '{weakest.title}' at {weakest.score}/100."
    if error_count:
        summary += f" {error_count} error{'s' if error_count != 1 else ''} must be fixed."
    return summary


def analyze_sections(sections: Sequence[BulletSection], context: Context, validation: ValidationConfig) -> BulletAnalysis:
    """Score every section independently, then combine into a document result."""
    section_scores: list[SectionScore] = []
    per_section: list[list[RuleScore]] = []
    all_items: list[BulletItem] = []

    for section in sections:
        section_context = section.context or context
        scores = [
            _prefix_issues(s, section.title)
            for s in evaluate_list(section.items, section_context, validation)
        ]
        score = compute_score(scores)
        per_section.append(scores)
        all_items.extend(section.items)
        section_scores.append(SectionScore(
            title=section.title,
            score=score,
            grade=grade_for(score),
            item_count=len(section.items),
            issues=tuple(collect_issues(scores)),
            context=section_context,
        ))
        logger.debug("Section %r scored %d/100 (%s context)", section.title, score, section_context.value)

    overall = round_half_up(sum(s.score for s in section_scores) / len(section_scores))
    grade = grade_for(overall)
    issues = [i for s in section_scores for i in s.issues]
    errors, warnings, suggestions = partition_issues(issues)

    depth = max(list_depth(section.items) for section in sections)
    avg_length = average_line_length(all_items)
    largest = max(len(section.items) for section in sections)
    fit = assess_context(context, largest, depth, avg_length)

    return BulletAnalysis(
        overall_score=overall,
        grade=grade,
        scores=_pool_scores(per_section),
        errors=errors,
        warnings=warnings,
        suggestions=suggestions,
        summary=summarize_sections(overall, section_scores, len(errors)),
        top_improvements=rank_improvements(issues),
        item_count=len(all_items),
        max_depth=depth,
        avg_line_length=avg_length,
        context_fit=fit.fit,
        context_feedback=fit.feedback,
        section_scores=tuple(section_scores),
    )
