"""Readability rule evaluators for bullet lists.

Each rule is a pure function ``(items, context) -> RuleScore``. Rules share no
state and do not look at each other's results, so the same fixed set runs
unchanged over a flat list or over each section of a long document.

Points are deducted from a rule's maximum according to the issues it finds,
never below zero. The maxima add up to 100.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence
from enum import Enum
from typing import Callable, Optional

from .models import BulletItem, Context, Importance, RuleId, RuleScore, Severity, ValidationIssue

RuleEvaluator = Callable[[Sequence[BulletItem], Context], RuleScore]

MAX_POINTS: dict[RuleId, int] = {
    RuleId.LIST_LENGTH: 20,
    RuleId.HIERARCHY: 15,
    RuleId.LINE_LENGTH: 15,
    RuleId.SERIAL_POSITION: 10,
    RuleId.STRUCTURE: 20,
    RuleId.FIRST_WORDS: 10,
    RuleId.FORMATTING: 10,
}

RESEARCH: dict[RuleId, str] = {
    RuleId.LIST_LENGTH: (
        "Miller (1956), 'The Magical Number Seven, Plus or Minus Two'; "
        "Cowan (2001) places working memory capacity nearer 4 chunks"
    ),
    RuleId.HIERARCHY: (
        "Larson & Czerwinski (1998): broad, shallow hierarchies are navigated faster "
        "and with fewer errors than deep ones"
    ),
    RuleId.LINE_LENGTH: (
        "Bringhurst, The Elements of Typographic Style: 45-75 characters per line, 66 ideal; "
        "Dyson & Haselgrove (2001) on line length and reading"
    ),
    RuleId.SERIAL_POSITION: (
        "Murdock (1962), serial position effect: first and last items are recalled best "
        "(primacy and recency)"
    ),
    RuleId.STRUCTURE: (
        "Frazier et al. (1984): parallel syntactic structure speeds processing of "
        "coordinated phrases"
    ),
    RuleId.FIRST_WORDS: (
        "Nielsen (2006), F-shaped reading pattern: readers scanning a list fixate on "
        "the first two words of each line"
    ),
    RuleId.FORMATTING: "Nielsen (1994), usability heuristic #4: consistency and standards",
}

DEFAULT_ADVICE: dict[RuleId, str] = {
    RuleId.LIST_LENGTH: "Keep each list to 3-7 items; split longer lists into sections",
    RuleId.HIERARCHY: "Flatten nesting to at most 2 levels",
    RuleId.LINE_LENGTH: "Aim for 45-75 characters per bullet",
    RuleId.SERIAL_POSITION: "Move the most important items to the first or last position",
    RuleId.STRUCTURE: "Start every bullet with the same grammatical form",
    RuleId.FIRST_WORDS: "Make the first two words of each bullet distinctive",
    RuleId.FORMATTING: "Use consistent capitalization and ending punctuation",
}

MIN_ITEMS = 3
MAX_ITEMS = 7
HARD_MAX_ITEMS = 10

MAX_RECOMMENDED_DEPTH = 2
HARD_MAX_DEPTH = 4

SHORT_LINE = 40
IDEAL_LINE_MIN = 45
IDEAL_LINE_MAX = 75
LONG_LINE = 80

SPARSE_LIST_EARNED = 15
LONG_LIST_EARNED = 10
DEEP_HIERARCHY_EARNED = 8
SHORT_LINE_PENALTY = 1
LONG_LINE_PENALTY = 3
BURIED_ITEM_PENALTY = 4
DEVIATING_PATTERN_PENALTY = 5
DUPLICATE_OPENING_PENALTY = 4
FORMATTING_PENALTY = 5

TERMINAL_PUNCTUATION = frozenset(".!?")

_PUNCT_STRIP_RE = re.compile(r"^[^\w]+|[^\w]+$")


class Pattern(str, Enum):
    """Grammatical form of a bullet's opening word."""

    IMPERATIVE = "imperative-verb"
    GERUND = "gerund"
    NOUN_PHRASE = "noun-phrase"
    OTHER = "other"


_PATTERN_HINTS = {
    Pattern.IMPERATIVE: "an imperative verb (e.g. 'Use', 'Create')",
    Pattern.GERUND: "a gerund (e.g. 'Using', 'Creating')",
    Pattern.NOUN_PHRASE: "a noun phrase (e.g. 'The report', 'Our team')",
    Pattern.OTHER: "the same kind of opening word as the other items",
}

IMPERATIVE_VERBS = frozenset({
    "add", "adjust", "allow", "analyze", "apply", "approve", "ask", "assign", "avoid",
    "build", "call", "cancel", "check", "choose", "clarify", "clean", "click", "close",
    "collect", "combine", "compare", "complete", "configure", "confirm", "connect",
    "consider", "contact", "convert", "copy", "create", "cut", "define", "delete",
    "deliver", "deploy", "describe", "design", "determine", "develop", "disable",
    "discuss", "document", "download", "draft", "drop", "edit", "eliminate", "enable",
    "ensure", "enter", "establish", "evaluate", "examine", "explain", "explore",
    "export", "extend", "fill", "find", "fix", "focus", "follow", "gather", "get",
    "give", "group", "highlight", "identify", "implement", "import", "improve",
    "include", "increase", "inspect", "install", "keep", "label", "launch", "learn",
    "let", "limit", "list", "load", "lower", "maintain", "make", "manage", "measure",
    "merge", "migrate", "minimize", "monitor", "move", "note", "open", "optimize",
    "organize", "outline", "place", "plan", "prefer", "prepare", "present", "prevent",
    "prioritize", "protect", "provide", "put", "raise", "read", "record", "reduce",
    "refactor", "register", "release", "remove", "rename", "replace", "report",
    "request", "require", "reset", "resolve", "restart", "restrict", "review",
    "revise", "run", "save", "schedule", "secure", "select", "send", "separate", "set",
    "share", "show", "simplify", "sort", "specify", "split", "start", "stop", "store",
    "submit", "summarize", "support", "switch", "take", "test", "track", "train",
    "try", "turn", "update", "upgrade", "upload", "use", "validate", "verify", "visit",
    "wait", "watch", "write",
})

NOUN_PHRASE_STARTERS = frozenset({
    "a", "an", "the", "this", "that", "these", "those", "my", "our", "your", "their",
    "its", "his", "her", "each", "every", "all", "some", "many", "most", "several",
    "any", "no", "both", "another", "other", "such",
})

NON_GERUNDS = frozenset({
    "anything", "ceiling", "during", "evening", "everything", "morning", "nothing",
    "pudding", "sibling", "something", "spring", "string", "thing", "wedding",
})


# ─── Helpers ─────────────────────────────────────────────────────────────────


def _issue(
    rule: RuleId,
    severity: Severity,
    message: str,
    item_index: Optional[int] = None,
    suggestion: Optional[str] = None,
) -> ValidationIssue:
    return ValidationIssue(
        rule=rule,
        severity=severity,
        message=message,
        item_index=item_index,
        suggestion=suggestion,
        research_basis=RESEARCH[rule],
    )


def _score(rule: RuleId, issues: list[ValidationIssue], deduction: int = 0) -> RuleScore:
    max_points = MAX_POINTS[rule]
    earned = max(0, min(max_points, max_points - deduction))
    return RuleScore(rule=rule, max_points=max_points, earned_points=earned, issues=tuple(issues))


def _words(text: str) -> list[str]:
    """Whitespace tokens with surrounding punctuation removed, lowercased."""
    words = (_PUNCT_STRIP_RE.sub("", token).lower() for token in text.split())
    return [w for w in words if w]


def item_depth(item: BulletItem) -> int:
    """Nesting depth of an item; a leaf counts as 1."""
    depth = 0
    stack = [(item, 1)]
    while stack:
        node, level = stack.pop()
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in node.children)
    return depth


def list_depth(items: Sequence[BulletItem]) -> int:
    return max((item_depth(item) for item in items), default=0)


def line_length(item: BulletItem) -> int:
    return len(item.text.strip())


def classify_pattern(text: str) -> Pattern:
    """Classify the grammatical form of a bullet's first word."""
    words = _words(text)
    if not words:
        return Pattern.OTHER
    first = words[0]
    if first in IMPERATIVE_VERBS:
        return Pattern.IMPERATIVE
    if first.endswith("ing") and len(first) > 4 and first not in NON_GERUNDS:
        return Pattern.GERUND
    if first in NOUN_PHRASE_STARTERS:
        return Pattern.NOUN_PHRASE
    return Pattern.OTHER


# ─── Rules ───────────────────────────────────────────────────────────────────


def check_list_length(items: Sequence[BulletItem], context: Context) -> RuleScore:
    """3-7 items per list; 10 or more is an error."""
    rule = RuleId.LIST_LENGTH
    count = len(items)

    if count < MIN_ITEMS:
        issue = _issue(
            rule, Severity.SUGGESTION,
            f"List has only {count} item{'s' if count != 1 else ''}; {MIN_ITEMS}-{MAX_ITEMS} items scan best",
            suggestion="Fold these points into a sentence, or add supporting items to reach 3-7",
        )
        return _score(rule, [issue], MAX_POINTS[rule] - SPARSE_LIST_EARNED)

    if count <= MAX_ITEMS:
        return _score(rule, [])

    if count < HARD_MAX_ITEMS:
        issue = _issue(
            rule, Severity.WARNING,
            f"List has {count} items, above the recommended maximum of {MAX_ITEMS}",
            suggestion="Trim to 5-7 items, or group related items into sections",
        )
        return _score(rule, [issue], MAX_POINTS[rule] - LONG_LIST_EARNED)

    issue = _issue(
        rule, Severity.ERROR,
        f"List has {count} items; {HARD_MAX_ITEMS} or more items overwhelm working memory",
        suggestion="Split the list into sections of 3-7 items each",
    )
    return _score(rule, [issue], MAX_POINTS[rule])


def check_hierarchy(items: Sequence[BulletItem], context: Context) -> RuleScore:
    """At most two levels of nesting."""
    rule = RuleId.HIERARCHY
    depths = [item_depth(item) for item in items]
    depth = max(depths, default=0)
    if depth <= MAX_RECOMMENDED_DEPTH:
        return _score(rule, [])

    index = depths.index(depth)
    if depth < HARD_MAX_DEPTH:
        issue = _issue(
            rule, Severity.WARNING,
            f"Nesting reaches {depth} levels under item {index + 1}; keep lists to {MAX_RECOMMENDED_DEPTH} levels",
            item_index=index,
            suggestion="Promote third-level bullets to their parent or to a separate list",
        )
        return _score(rule, [issue], MAX_POINTS[rule] - DEEP_HIERARCHY_EARNED)

    issue = _issue(
        rule, Severity.ERROR,
        f"Nesting reaches {depth} levels under item {index + 1}; deep hierarchies hurt comprehension",
        item_index=index,
        suggestion="Restructure into a flat list with at most one level of sub-bullets",
    )
    return _score(rule, [issue], MAX_POINTS[rule])


def check_line_length(items: Sequence[BulletItem], context: Context) -> RuleScore:
    """45-75 characters per bullet; below 40 or above 80 is flagged."""
    rule = RuleId.LINE_LENGTH
    issues = []
    deduction = 0
    for i, item in enumerate(items):
        length = line_length(item)
        if length < SHORT_LINE:
            issues.append(_issue(
                rule, Severity.SUGGESTION,
                f"Item {i + 1} is short ({length} characters); {IDEAL_LINE_MIN}-{IDEAL_LINE_MAX} reads best",
                item_index=i,
                suggestion=f"Add detail to item {i + 1} so it carries a complete idea",
            ))
            deduction += SHORT_LINE_PENALTY
        elif length > LONG_LINE:
            issues.append(_issue(
                rule, Severity.WARNING,
                f"Item {i + 1} is {length} characters long, beyond the {LONG_LINE}-character limit",
                item_index=i,
                suggestion=f"Shorten item {i + 1} or split it into two bullets",
            ))
            deduction += LONG_LINE_PENALTY
    return _score(rule, issues, deduction)


def check_serial_position(items: Sequence[BulletItem], context: Context) -> RuleScore:
    """High-importance items belong first or last, never in the recall valley."""
    rule = RuleId.SERIAL_POSITION
    issues = []
    last = len(items) - 1
    for i, item in enumerate(items):
        if item.importance is Importance.HIGH and 0 < i < last:
            issues.append(_issue(
                rule, Severity.WARNING,
                f"High-importance item {i + 1} sits in the middle of the list (recall valley)",
                item_index=i,
                suggestion=f"Move item {i + 1} to the first or last position",
            ))
    return _score(rule, issues, BURIED_ITEM_PENALTY * len(issues))


def check_parallel_structure(items: Sequence[BulletItem], context: Context) -> RuleScore:
    """All bullets should open with the same grammatical form."""
    rule = RuleId.STRUCTURE
    if len(items) < 2:
        return _score(rule, [])

    patterns = [classify_pattern(item.text) for item in items]
    counts = Counter(patterns)
    # Counter keeps first-seen order, so ties go to the earliest pattern
    dominant = max(counts, key=counts.__getitem__)

    issues = []
    for i, pattern in enumerate(patterns):
        if pattern is dominant:
            continue
        issues.append(_issue(
            rule, Severity.WARNING,
            f"Item {i + 1} opens with a {pattern.value} pattern while most items use {dominant.value}",
            item_index=i,
            suggestion=f"Rewrite item {i + 1} to start with {_PATTERN_HINTS[dominant]}",
        ))
    return _score(rule, issues, DEVIATING_PATTERN_PENALTY * len(issues))


def check_first_words(items: Sequence[BulletItem], context: Context) -> RuleScore:
    """The first two words of every bullet should be unique (case-insensitive)."""
    rule = RuleId.FIRST_WORDS
    seen: dict[str, int] = {}
    issues = []
    for i, item in enumerate(items):
        opening = " ".join(_words(item.text)[:2])
        if not opening:
            continue
        if opening in seen:
            issues.append(_issue(
                rule, Severity.WARNING,
                f"Items {seen[opening] + 1} and {i + 1} both start with '{opening}'",
                item_index=i,
                suggestion=f"Reword the start of item {i + 1} so readers can tell it apart while scanning",
            ))
        else:
            seen[opening] = i
    return _score(rule, issues, DUPLICATE_OPENING_PENALTY * len(issues))


def check_formatting(items: Sequence[BulletItem], context: Context) -> RuleScore:
    """Ending punctuation and leading capitalization should be all-or-none."""
    rule = RuleId.FORMATTING
    texts = [item.text.strip() for item in items]
    issues = []

    punctuated = sum(1 for t in texts if t[-1] in TERMINAL_PUNCTUATION)
    if 0 < punctuated < len(texts):
        issues.append(_issue(
            rule, Severity.SUGGESTION,
            f"Inconsistent ending punctuation: {punctuated} of {len(texts)} items end with '.', '!' or '?'",
            suggestion="End either every bullet or no bullet with punctuation",
        ))

    # Only cased first letters count; digits, emoji and CJK carry no case
    upper = sum(1 for t in texts if t[0].isupper())
    lower = sum(1 for t in texts if t[0].islower())
    if upper and lower:
        issues.append(_issue(
            rule, Severity.SUGGESTION,
            f"Inconsistent capitalization: {upper} items start uppercase and {lower} start lowercase",
            suggestion="Start every bullet with a capital letter",
        ))

    return _score(rule, issues, FORMATTING_PENALTY * len(issues))


RULES: tuple[RuleEvaluator, ...] = (
    check_list_length,
    check_hierarchy,
    check_line_length,
    check_serial_position,
    check_parallel_structure,
    check_first_words,
    check_formatting,
)


def evaluate_rules(items: Sequence[BulletItem], context: Context) -> list[RuleScore]:
    """Run every rule over one list, in report order."""
    return [rule(items, context) for rule in RULES]
