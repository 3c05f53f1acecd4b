from bullet_mcp.core import DEFAULT_CONFIG, AnalysisError, BulletAnalysis, BulletConfig, analyze
from bullet_mcp.core.models import ContextFit, Grade, RuleId, Severity, ValidationConfig, ValidationIssue
from bullet_mcp.core.scoring import grade_for, rank_improvements

STRICT = BulletConfig(validation=ValidationConfig(strict_mode=True, enable_research_citations=True))
NO_CITATIONS = BulletConfig(validation=ValidationConfig(strict_mode=False, enable_research_citations=False))

WELL_FORMED = [
    {"text": "Use consistent grammar throughout the list items"},
    {"text": "Create parallel structure for better scanning"},
    {"text": "Maintain good readability with similar forms"},
    {"text": "Follow research-based formatting guidelines"},
    {"text": "Apply evidence-based design principles here"},
]

MESSY = [
    {"text": "Short one"},
    {"text": "short two"},
    {"text": "Using three"},
    {"text": "Short four"},
    {"text": "The fifth item here"},
    {"text": "short six"},
    {"text": "Short seven"},
    {"text": "short eight"},
    {"text": "Short nine"},
    {"text": "short ten"},
    {"text": "Short eleven"},
    {"text": "short twelve"},
]


def create_items(count):
    return [{"text": f"Item {i + 1} with enough text to be valid length"} for i in range(count)]


def rule_score(analysis, rule):
    return next(s for s in analysis.scores if s.rule is rule)


def all_issues(analysis):
    return [*analysis.errors, *analysis.warnings, *analysis.suggestions]


class TestAnalyze:
    def test_invalid_input_returns_error_result(self):
        for raw in (None, {}, {"items": []}, {"items": [{"text": "  "}]}, "text", 42):
            result = analyze(raw)
            assert isinstance(result, AnalysisError)
            assert result.error

    def test_conflicting_input_names_the_conflict(self):
        result = analyze({
            "items": [{"text": "An item here"}],
            "sections": [{"title": "Section 1", "items": [{"text": "An item here"}]}],
        })
        assert isinstance(result, AnalysisError)
        assert "Cannot use both" in result.error

    def test_valid_input_returns_analysis(self):
        result = analyze({"items": [{"text": "Valid bullet point text here"}]})
        assert isinstance(result, BulletAnalysis)
        assert result.section_scores is None

    def test_five_valid_items(self):
        analysis = analyze({"items": create_items(5)})
        assert rule_score(analysis, RuleId.LIST_LENGTH).earned_points == 20
        assert rule_score(analysis, RuleId.HIERARCHY).earned_points == 15
        assert rule_score(analysis, RuleId.LIST_LENGTH).issues == ()
        assert rule_score(analysis, RuleId.HIERARCHY).issues == ()
        assert analysis.item_count == 5
        assert analysis.max_depth == 1
        assert analysis.avg_line_length == 42.0

    def test_well_formed_list_gets_an_a(self):
        analysis = analyze({"items": WELL_FORMED})
        assert analysis.overall_score >= 90
        assert analysis.grade is Grade.A
        assert analysis.top_improvements == ()

    def test_messy_list_scores_low(self):
        analysis = analyze({"items": MESSY})
        assert len(analysis.errors) > 0
        assert analysis.grade is not Grade.A
        assert any(e.rule is RuleId.LIST_LENGTH for e in analysis.errors)
        assert "error" in analysis.summary

    def test_issues_are_partitioned_by_severity(self):
        analysis = analyze({"items": MESSY})
        assert all(i.severity is Severity.ERROR for i in analysis.errors)
        assert all(i.severity is Severity.WARNING for i in analysis.warnings)
        assert all(i.severity is Severity.SUGGESTION for i in analysis.suggestions)
        assert len(all_issues(analysis)) == sum(len(s.issues) for s in analysis.scores)

    def test_score_is_earned_over_available_points(self):
        analysis = analyze({"items": create_items(10)})
        assert rule_score(analysis, RuleId.LIST_LENGTH).earned_points == 0
        assert analysis.overall_score == 80
        assert analysis.grade is Grade.B

    def test_unicode_and_emoji(self):
        result = analyze({"items": [
            {"text": "使用一致的语法贯穿整个列表项目内容"},
            {"text": "Create parallel structure for scanning"},
            {"text": "📝 Emoji at the start of this bullet point"},
        ]})
        assert isinstance(result, BulletAnalysis)

    def test_very_long_text_is_a_warning_not_an_error(self):
        result = analyze({"items": [
            {"text": "A" * 500},
            {"text": "Normal length bullet point for comparison"},
            {"text": "Another normal length bullet point here"},
        ]})
        assert isinstance(result, BulletAnalysis)
        assert any(w.rule is RuleId.LINE_LENGTH for w in result.warnings)

    def test_null_children(self):
        result = analyze({"items": [
            {"text": "Item with null children", "children": None},
            {"text": "Normal item without children property"},
            {"text": "Third item with no children at all"},
        ]})
        assert isinstance(result, BulletAnalysis)
        assert result.max_depth == 1


class TestContextFit:
    def test_document_in_range_is_excellent(self):
        analysis = analyze({"items": create_items(5), "context": "document"})
        assert analysis.context_fit is ContextFit.EXCELLENT
        assert analysis.context_feedback is None

    def test_document_out_of_range_is_good(self):
        analysis = analyze({"items": create_items(9)})
        assert analysis.context_fit is ContextFit.GOOD
        assert "9 items" in analysis.context_feedback

    def test_presentation_is_poor(self):
        analysis = analyze({"items": create_items(5), "context": "presentation"})
        assert analysis.context_fit is ContextFit.POOR
        assert "visuals" in analysis.context_feedback

    def test_reference_is_good(self):
        analysis = analyze({"items": create_items(5), "context": "reference"})
        assert analysis.context_fit is ContextFit.GOOD

    def test_context_does_not_change_score(self):
        scores = {analyze({"items": MESSY, "context": c}).overall_score for c in ("document", "presentation", "reference")}
        assert len(scores) == 1


class TestStrictMode:
    def test_warnings_become_errors(self):
        analysis = analyze({"items": create_items(8)}, STRICT)
        assert analysis.warnings == ()
        assert any(e.rule is RuleId.LIST_LENGTH for e in analysis.errors)
        assert rule_score(analysis, RuleId.LIST_LENGTH).issues[0].severity is Severity.ERROR

    def test_warnings_stay_warnings_by_default(self):
        analysis = analyze({"items": create_items(8)})
        assert any(w.rule is RuleId.LIST_LENGTH for w in analysis.warnings)

    def test_score_is_unchanged(self):
        relaxed = analyze({"items": MESSY})
        strict = analyze({"items": MESSY}, STRICT)
        assert strict.overall_score == relaxed.overall_score
        assert len(strict.errors) == len(relaxed.errors) + len(relaxed.warnings)


class TestResearchCitations:
    def test_included_by_default(self):
        analysis = analyze({"items": create_items(10)}, DEFAULT_CONFIG)
        assert "Miller" in rule_score(analysis, RuleId.LIST_LENGTH).issues[0].research_basis

    def test_stripped_when_disabled(self):
        analysis = analyze({"items": MESSY}, NO_CITATIONS)
        assert all_issues(analysis)
        assert all(i.research_basis is None for i in all_issues(analysis))
        assert all(i.research_basis is None for s in analysis.scores for i in s.issues)
        payload = analysis.model_dump(mode="json", exclude_none=True)
        assert all("research_basis" not in i for i in payload["errors"] + payload["suggestions"])


class TestGrading:
    def test_band_edges(self):
        assert grade_for(100) is Grade.A
        assert grade_for(90) is Grade.A
        assert grade_for(89) is Grade.B
        assert grade_for(80) is Grade.B
        assert grade_for(70) is Grade.C
        assert grade_for(60) is Grade.D
        assert grade_for(59) is Grade.F
        assert grade_for(0) is Grade.F

    def test_improvements_ranked_by_severity_then_rule_points(self):
        issues = [
            ValidationIssue(rule=RuleId.FORMATTING, severity=Severity.SUGGESTION, message="m", suggestion="format"),
            ValidationIssue(rule=RuleId.FIRST_WORDS, severity=Severity.WARNING, message="m", suggestion="openings"),
            ValidationIssue(rule=RuleId.STRUCTURE, severity=Severity.WARNING, message="m", suggestion="structure"),
            ValidationIssue(rule=RuleId.LIST_LENGTH, severity=Severity.ERROR, message="m", suggestion="split"),
        ]
        assert rank_improvements(issues) == ("split", "structure", "openings")

    def test_improvements_fall_back_to_rule_advice_and_deduplicate(self):
        issues = [
            ValidationIssue(rule=RuleId.HIERARCHY, severity=Severity.ERROR, message="a"),
            ValidationIssue(rule=RuleId.HIERARCHY, severity=Severity.ERROR, message="b"),
        ]
        assert rank_improvements(issues) == ("Flatten nesting to at most 2 levels",)

    def test_top_improvements_capped_at_three(self):
        analysis = analyze({"items": MESSY})
        assert len(analysis.top_improvements) == 3
        assert analysis.top_improvements[0] == "Split the list into sections of 3-7 items each"


class TestDeepNesting:
    def test_deeply_nested_list_is_scored(self):
        deep = {"text": "Deepest bullet with a reasonable length here"}
        for level in range(999):
            deep = {"text": f"Level {level} bullet with a reasonable length", "children": [deep]}
        analysis = analyze({"items": [deep, *create_items(2)]})
        assert isinstance(analysis, BulletAnalysis)
        assert analysis.max_depth == 1000
        assert any(e.rule is RuleId.HIERARCHY for e in analysis.errors)
        assert rule_score(analysis, RuleId.HIERARCHY).earned_points == 0
