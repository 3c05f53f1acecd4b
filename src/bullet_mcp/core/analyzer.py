"""Public entry point of the analysis engine."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .models import DEFAULT_CONFIG, AnalysisError, BulletAnalysis, BulletConfig
from .scoring import analyze_items
from .sections import analyze_sections
from .validation import InputValidationError, validate_input

logger = logging.getLogger(__name__)


def analyze(raw_input: Any, config: Optional[BulletConfig] = None) -> BulletAnalysis | AnalysisError:
    """Validate and score a bullet list or a sectioned document.

    Input problems come back as an ``AnalysisError`` instead of being raised,
    so callers only ever branch on the result type.

    Args:
        raw_input: Untyped input with either ``items`` or ``sections``, plus an
            optional ``context``.
        config: Validation and display toggles. Defaults to ``DEFAULT_CONFIG``.
    """
    config = config or DEFAULT_CONFIG
    try:
        bullet_input = validate_input(raw_input)
    except InputValidationError as exc:
        logger.debug("Rejected bullet input: %s", exc)
        return AnalysisError(error=str(exc))

    if bullet_input.sections is not None:
        logger.debug("Analyzing %d sections", len(bullet_input.sections))
        return analyze_sections(bullet_input.sections, bullet_input.context, config.validation)
    return analyze_items(bullet_input.items, bullet_input.context, config.validation)
