"""
Pattern library models.

Pure data models parsed from patterns.yaml. Everything here is frozen;
the library is built once and shared read-only between requests.
"""

from re import Pattern
from typing import Dict, Optional, Tuple, Iterable

from pydantic import BaseModel, ConfigDict, Field

ALWAYS_REQUIRED = "always"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class TextPattern(_Frozen):
    """A compiled regular expression plus how to report a match."""

    name: str = Field(default="", description="Identifier of the pattern.")
    regex: Pattern = Field(description="Compiled expression.")
    format: str = Field(
        default="{0}", description="Format applied to the first capture group."
    )
    description: str = Field(default="", description="Human readable issue text.")
    suggestion: str = Field(default="", description="Suggested correction.")
    severity: str = Field(default="Low", description="Issue severity.")

    def render(self, match) -> str:
        value = match.group(1) if match.groups() else match.group(0)
        return self.format.format(value.strip())


class KeywordRule(_Frozen):
    """Whole-word keyword alternation mapped to a fixed value."""

    keywords: Tuple[str, ...]
    value: str
    regex: Pattern

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


class SignalRule(_Frozen):
    """Keyword-driven boolean signal."""

    name: str
    description: str = ""
    keywords: Tuple[str, ...] = ()
    regex: Pattern
    structured_flag: Optional[str] = Field(
        default=None,
        description="StructuredFields flag that also sets this signal.",
    )
    category: Optional[int] = Field(
        default=None, description="Category indicated by this signal, if any."
    )
    fallback_note: str = ""
    justification: Tuple[str, ...] = ()
    justification_categories: Tuple[int, ...] = Field(
        default=(),
        description="Categories the justification applies to; empty means all.",
    )

    def justifies(self, category: int) -> bool:
        if not self.justification:
            return False
        return not self.justification_categories or (
            category in self.justification_categories
        )


class CategoryPolicy(_Frozen):
    """Review policy for one category."""

    category: int
    label: str
    name: str
    required: str = Field(
        default=ALWAYS_REQUIRED,
        description="'always' or the signal that makes review mandatory.",
    )
    required_reasons: Tuple[str, ...] = ()
    not_required_caveats: Tuple[str, ...] = ()

    def is_required(self, signals: Dict[str, bool]) -> bool:
        if self.required == ALWAYS_REQUIRED:
            return True
        return bool(signals.get(self.required, False))


class CategoryToken(_Frozen):
    category: int
    regex: Pattern


class FieldTemplates(_Frozen):
    """Ordered extraction rules for one field."""

    sentinel: str
    templates: Tuple[TextPattern, ...] = ()
    keywords: Tuple[KeywordRule, ...] = ()
    qualifiers: Tuple[KeywordRule, ...] = ()


class RiskRule(_Frozen):
    """A risk level with its factor and mitigation text."""

    level: str
    factor: str
    mitigation: str
    labels: Tuple[str, ...] = ()
    flags: Tuple[str, ...] = ()


class SafetyClassificationRules(_Frozen):
    derived: Dict[str, str]
    default: str
    levels: Tuple[RiskRule, ...]
    other: RiskRule

    def rule_for(self, classification: str) -> RiskRule:
        label = classification.strip().upper()
        for rule in self.levels:
            if label in rule.labels:
                return rule
        return self.other


class FallbackText(_Frozen):
    reason_prefix: str
    reason_suffix: str
    suggested_actions: Tuple[str, ...]


class QualityPatterns(_Frozen):
    grammar: Tuple[TextPattern, ...]
    style: Tuple[TextPattern, ...]
    terms: Tuple[KeywordRule, ...] = Field(
        default=(), description="Technical terms, one rule per term, in group order."
    )
    structure_markers: Tuple[KeywordRule, ...] = ()


class DesignatorRule(_Frozen):
    """Approval designator and the condition that adds it."""

    label: str
    signal: Optional[str] = None
    category: Optional[int] = None
    regex: Pattern

    def applies(self, text: str, category: int, signals: Dict[str, bool]) -> bool:
        if self.signal is not None and signals.get(self.signal):
            return True
        if self.category is not None and category == self.category:
            return True
        return self.regex.search(text) is not None


class DesignTypeRule(_Frozen):
    category: int
    problem: Pattern
    solution: Pattern

    def matches(self, problem: str, solution: str) -> bool:
        return bool(self.problem.search(problem) or self.solution.search(solution))


class PatternLibrary(_Frozen):
    """
    Read-only collection of every rule table the engine consumes.

    Consumers iterate these collections generically, so adding a signal,
    template or category policy is a YAML edit.
    """

    risk_priority: Dict[str, int]
    signals: Tuple[SignalRule, ...]
    categories: Dict[int, CategoryPolicy]
    compliance_rationale: str
    local_procedures_caveat: str
    category_tokens: Tuple[CategoryToken, ...]
    confidence_patterns: Tuple[Pattern, ...]
    required_assertions: Tuple[Pattern, ...]
    not_required_assertions: Tuple[Pattern, ...]
    location: FieldTemplates
    systems: FieldTemplates
    equipment: FieldTemplates
    proposed_solution: FieldTemplates
    safety_classification: SafetyClassificationRules
    risk_dimensions: Dict[str, RiskRule]
    category_prototypes: Dict[int, str]
    fallback: FallbackText
    suggested_actions_required: Tuple[str, ...]
    suggested_actions_not_required: Tuple[str, ...]
    approval_designators: Tuple[DesignatorRule, ...]
    default_designator: str
    design_type_rules: Tuple[DesignTypeRule, ...]
    quality: QualityPatterns

    def signal(self, name: str) -> SignalRule:
        for rule in self.signals:
            if rule.name == name:
                return rule
        raise KeyError(name)

    @property
    def category_signals(self) -> Iterable[SignalRule]:
        """Category indicator signals in precedence order."""
        return tuple(rule for rule in self.signals if rule.category is not None)

    def policy(self, category: int) -> CategoryPolicy:
        return self.categories[category]
