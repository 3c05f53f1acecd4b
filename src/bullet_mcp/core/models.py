"""Pydantic data models shared across the analysis engine.

Every model is frozen: inputs are read-only during analysis and results are
built fresh for each call. The MCP server serializes these with
``model_dump(mode="json", exclude_none=True)``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Importance(str, Enum):
    """Priority hint used for serial position checks."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Context(str, Enum):
    """Declared usage scenario for a list."""

    DOCUMENT = "document"
    PRESENTATION = "presentation"
    REFERENCE = "reference"


class Severity(str, Enum):
    """Issue severity, in decreasing order of required attention."""

    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"


class Grade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class ContextFit(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    POOR = "poor"


class RuleId(str, Enum):
    """Identifiers of the seven readability rules."""

    LIST_LENGTH = "LIST_LENGTH"
    HIERARCHY = "HIERARCHY"
    LINE_LENGTH = "LINE_LENGTH"
    SERIAL_POSITION = "SERIAL_POSITION"
    STRUCTURE = "STRUCTURE"
    FIRST_WORDS = "FIRST_WORDS"
    FORMATTING = "FORMATTING"


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ─── Input ───────────────────────────────────────────────────────────────────


class BulletItem(FrozenModel):
    """A single bullet point with optional nested sub-bullets."""

    text: str = Field(description="The bullet point text")
    children: tuple[BulletItem, ...] = Field(default=(), description="Nested sub-bullets")
    importance: Optional[Importance] = Field(None, description="Priority hint for serial position")


class BulletSection(FrozenModel):
    """A titled group of bullets, scored independently of its siblings."""

    title: str
    items: tuple[BulletItem, ...]
    context: Optional[Context] = Field(None, description="Overrides the document context for this section")


class BulletInput(FrozenModel):
    """Validated tool input. Exactly one of ``items`` and ``sections`` is set."""

    items: Optional[tuple[BulletItem, ...]] = None
    sections: Optional[tuple[BulletSection, ...]] = None
    context: Context = Context.DOCUMENT


# ─── Results ─────────────────────────────────────────────────────────────────


class ValidationIssue(FrozenModel):
    """A single finding produced by a rule evaluator."""

    rule: RuleId
    severity: Severity
    message: str
    item_index: Optional[int] = Field(None, description="0-based index of the offending item")
    suggestion: Optional[str] = Field(None, description="Actionable fix for the issue")
    research_basis: Optional[str] = Field(None, description="Citation supporting the rule")


class RuleScore(FrozenModel):
    """Points earned for one rule over one list or section."""

    rule: RuleId
    max_points: int = Field(ge=0)
    earned_points: int = Field(ge=0)
    issues: tuple[ValidationIssue, ...] = ()


class ContextAssessment(FrozenModel):
    fit: ContextFit
    feedback: Optional[str] = None


class SectionScore(FrozenModel):
    """Score breakdown for one section in sectioned mode."""

    title: str
    score: int = Field(ge=0, le=100)
    grade: Grade
    item_count: int
    issues: tuple[ValidationIssue, ...] = ()
    context: Context


class BulletAnalysis(FrozenModel):
    """Complete analysis result for a flat list or a sectioned document."""

    overall_score: int = Field(ge=0, le=100)
    grade: Grade
    scores: tuple[RuleScore, ...]
    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()
    suggestions: tuple[ValidationIssue, ...] = ()
    summary: str
    top_improvements: tuple[str, ...] = Field(default=(), max_length=3)
    item_count: int
    max_depth: int
    avg_line_length: float
    context_fit: ContextFit
    context_feedback: Optional[str] = None
    section_scores: Optional[tuple[SectionScore, ...]] = None


class AnalysisError(FrozenModel):
    """Terminal input error; no partial result accompanies it."""

    error: str


# ─── Configuration ───────────────────────────────────────────────────────────


class ValidationConfig(FrozenModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    strict_mode: bool = Field(default=False, alias="strictMode", description="Promote warnings to errors")
    enable_research_citations: bool = Field(
        default=True, alias="enableResearchCitations", description="Attach research citations to issues"
    )


class DisplayConfig(FrozenModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    color_output: bool = Field(default=True, alias="colorOutput", description="Colour the console report")


class BulletConfig(FrozenModel):
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)


DEFAULT_CONFIG = BulletConfig()
