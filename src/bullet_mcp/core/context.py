"""Context-fit assessment.

Advisory only: judges how well a list's shape suits its declared usage and
never changes the numeric score.
"""

from __future__ import annotations

from .models import Context, ContextAssessment, ContextFit
from .rules import IDEAL_LINE_MAX, MAX_ITEMS, MAX_RECOMMENDED_DEPTH, MIN_ITEMS

PRESENTATION_FEEDBACK = (
    "Bullet lists on slides are often less effective than visuals; research suggests "
    "visual presentations can be up to 43% more persuasive. Consider a diagram or image, "
    "or keep to 5 or fewer short bullets per slide."
)


def assess_context(context: Context, item_count: int, max_depth: int, avg_line_length: float) -> ContextAssessment:
    """Judge how well the list shape matches its usage context."""
    if context is Context.PRESENTATION:
        return ContextAssessment(fit=ContextFit.POOR, feedback=PRESENTATION_FEEDBACK)

    if context is Context.REFERENCE:
        if avg_line_length > IDEAL_LINE_MAX:
            return ContextAssessment(
                fit=ContextFit.GOOD,
                feedback=f"Reference lists are scanned for lookup; entries averaging {avg_line_length:.0f} "
                "characters slow that down. Lead each entry with its key term.",
            )
        return ContextAssessment(fit=ContextFit.GOOD)

    problems = []
    if item_count < MIN_ITEMS:
        problems.append(f"only {item_count} item{'s' if item_count != 1 else ''}")
    elif item_count > MAX_ITEMS:
        problems.append(f"{item_count} items (more than {MAX_ITEMS})")
    if max_depth > MAX_RECOMMENDED_DEPTH:
        problems.append(f"{max_depth} levels of nesting")

    if not problems:
        return ContextAssessment(fit=ContextFit.EXCELLENT)
    return ContextAssessment(
        fit=ContextFit.GOOD,
        feedback=f"Documents scan best with {MIN_ITEMS}-{MAX_ITEMS} items and at most "
        f"{MAX_RECOMMENDED_DEPTH} levels; this list has {' and '.join(problems)}.",
    )
