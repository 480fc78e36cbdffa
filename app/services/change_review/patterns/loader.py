"""
Pattern library loading utilities.
"""

from typing import Dict, Any, List, Iterable, Optional

from functools import lru_cache
import os
import re
import yaml

from app.core.logging import get_logger
from app.services.change_review.patterns.types import (
    CategoryPolicy,
    CategoryToken,
    DesignatorRule,
    DesignTypeRule,
    FallbackText,
    FieldTemplates,
    KeywordRule,
    PatternLibrary,
    QualityPatterns,
    RiskRule,
    SafetyClassificationRules,
    SignalRule,
    TextPattern,
)

logger = get_logger(__name__)

DEFAULT_PATTERNS_PATH = os.path.join(os.path.dirname(__file__), "patterns.yaml")


@lru_cache(maxsize=4)
def load_patterns(patterns_path: str) -> Dict[str, Any]:
    """
    Load the raw pattern tables from a YAML file.

    Args:
        patterns_path: Path to the patterns YAML file.

    Returns:
        Dictionary containing the raw tables.
    """
    with open(patterns_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def get_risk_priority(raw: Dict[str, Any]) -> Dict[str, int]:
    """
    Get risk priorities from the raw tables.

    Priority is derived from the order of keys under ``risk_levels``.
    Earlier keys = lower priority, later keys = higher priority.
    """
    risk_levels = list(raw.get("risk_levels", {}).keys())
    return {level: i for i, level in enumerate(risk_levels)}


def keyword_regex(keywords: Iterable[str]) -> re.Pattern:
    """Compile a whole-word, case-insensitive alternation of keywords."""
    # Longest first so multi-word phrases win over their prefixes
    ordered = sorted({k.strip() for k in keywords if k.strip()}, key=len, reverse=True)
    if not ordered:
        return re.compile(r"(?!)")
    alternation = "|".join(re.escape(k) for k in ordered)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


def _compile(pattern: str, case_sensitive: bool = False) -> re.Pattern:
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(pattern, flags | re.DOTALL)


def _text_patterns(entries: List[Dict[str, Any]]) -> tuple:
    patterns = []
    for entry in entries or []:
        patterns.append(
            TextPattern(
                name=entry.get("name", ""),
                regex=_compile(entry["pattern"], entry.get("case_sensitive", False)),
                format=entry.get("format", "{0}"),
                description=entry.get("description", ""),
                suggestion=entry.get("suggestion", ""),
                severity=entry.get("severity", "Low"),
            )
        )
    return tuple(patterns)


def _keyword_rules(entries: List[Dict[str, Any]], value_key: str = "value") -> tuple:
    return tuple(
        KeywordRule(
            keywords=tuple(entry["keywords"]),
            value=entry[value_key],
            regex=keyword_regex(entry["keywords"]),
        )
        for entry in entries or []
    )


def _field_templates(raw: Dict[str, Any]) -> FieldTemplates:
    return FieldTemplates(
        sentinel=raw["sentinel"],
        templates=_text_patterns(raw.get("templates")),
        keywords=_keyword_rules(raw.get("keywords") or raw.get("groups")),
        qualifiers=_keyword_rules(raw.get("qualifiers"), value_key="suffix"),
    )


def get_signal_rules(raw: Dict[str, Any]) -> List[SignalRule]:
    """Extract signal rules in declared order."""
    rules = []
    for name, data in (raw.get("signals") or {}).items():
        keywords = tuple(data.get("keywords", []))
        rules.append(
            SignalRule(
                name=name,
                description=data.get("description", ""),
                keywords=keywords,
                regex=keyword_regex(keywords),
                structured_flag=data.get("structured_flag"),
                category=data.get("category"),
                fallback_note=data.get("fallback_note", ""),
                justification=tuple(data.get("justification", [])),
                justification_categories=tuple(
                    data.get("justification_categories", [])
                ),
            )
        )
    return rules


def get_category_policies(raw: Dict[str, Any]) -> Dict[int, CategoryPolicy]:
    policies = {}
    for category, data in (raw.get("categories") or {}).items():
        policies[int(category)] = CategoryPolicy(
            category=int(category),
            label=data["label"],
            name=data["name"],
            required=str(data.get("required", "always")),
            required_reasons=tuple(data.get("required_reasons") or []),
            not_required_caveats=tuple(data.get("not_required_caveats") or []),
        )
    return policies


def _designator_rules(entries: List[Dict[str, Any]]) -> tuple:
    return tuple(
        DesignatorRule(
            label=entry["label"],
            signal=entry.get("signal"),
            category=entry.get("category"),
            regex=keyword_regex(entry.get("keywords", [])),
        )
        for entry in entries or []
    )


def _design_type_rules(entries: List[Dict[str, Any]]) -> tuple:
    return tuple(
        DesignTypeRule(
            category=int(entry["category"]),
            problem=keyword_regex(entry.get("problem_keywords", [])),
            solution=keyword_regex(entry.get("solution_keywords", [])),
        )
        for entry in entries or []
    )


def _quality_terms(terminology: Dict[str, List[str]]) -> tuple:
    return tuple(
        KeywordRule(keywords=(term,), value=term, regex=keyword_regex([term]))
        for terms in (terminology or {}).values()
        for term in terms
    )


def _risk_rule(data: Dict[str, Any]) -> RiskRule:
    return RiskRule(
        level=data["level"],
        factor=data["factor"],
        mitigation=data["mitigation"],
        labels=tuple(label.upper() for label in data.get("labels", [])),
        flags=tuple(data.get("flags", [])),
    )


def build_pattern_library(raw: Dict[str, Any]) -> PatternLibrary:
    """
    Compile raw YAML tables into a frozen PatternLibrary.

    Raises:
        KeyError / ValueError: If a required table is missing or malformed.
    """
    assertions = raw.get("requirement_assertions", {})
    extraction = raw["extraction"]
    safety = raw["safety_classification"]
    derived = dict(safety.get("derived", {}))
    default_classification = derived.pop("default", "GS")
    fallback = raw["fallback"]
    actions = raw.get("suggested_actions", {})
    quality = raw["quality"]
    designators = raw.get("approval_designators") or {}

    library = PatternLibrary(
        risk_priority=get_risk_priority(raw),
        signals=tuple(get_signal_rules(raw)),
        categories=get_category_policies(raw),
        compliance_rationale=raw["compliance_rationale"],
        local_procedures_caveat=raw["local_procedures_caveat"],
        category_tokens=tuple(
            CategoryToken(category=int(t["category"]), regex=_compile(t["pattern"]))
            for t in raw.get("category_tokens", [])
        ),
        confidence_patterns=tuple(
            _compile(p) for p in raw.get("confidence_patterns", [])
        ),
        required_assertions=tuple(
            _compile(rf"\b{p}\b") for p in assertions.get("required", [])
        ),
        not_required_assertions=tuple(
            _compile(rf"\b{p}\b") for p in assertions.get("not_required", [])
        ),
        location=_field_templates(extraction["location"]),
        systems=_field_templates(extraction["systems"]),
        equipment=_field_templates(extraction["equipment"]),
        proposed_solution=_field_templates(extraction["proposed_solution"]),
        safety_classification=SafetyClassificationRules(
            derived=derived,
            default=default_classification,
            levels=tuple(_risk_rule(level) for level in safety.get("levels", [])),
            other=_risk_rule(safety["other"]),
        ),
        risk_dimensions={
            name: _risk_rule(data)
            for name, data in (raw.get("risk_dimensions") or {}).items()
        },
        category_prototypes={
            int(k): str(v) for k, v in (raw.get("category_prototypes") or {}).items()
        },
        fallback=FallbackText(
            reason_prefix=fallback["reason_prefix"],
            reason_suffix=fallback["reason_suffix"],
            suggested_actions=tuple(fallback.get("suggested_actions", [])),
        ),
        suggested_actions_required=tuple(actions.get("required", [])),
        suggested_actions_not_required=tuple(actions.get("not_required", [])),
        approval_designators=_designator_rules(designators.get("rules")),
        default_designator=designators.get("default", "Standard Modification"),
        design_type_rules=_design_type_rules(raw.get("design_type_rules")),
        quality=QualityPatterns(
            grammar=_text_patterns(quality.get("grammar")),
            style=_text_patterns(quality.get("style")),
            terms=_quality_terms(quality.get("terminology")),
            structure_markers=tuple(
                KeywordRule(keywords=(m,), value=m, regex=keyword_regex([m]))
                for m in quality.get("structure_markers", [])
            ),
        ),
    )

    missing = set(range(1, 6)) - set(library.categories)
    if missing:
        raise ValueError(f"Category policies missing for: {sorted(missing)}")
    for policy in library.categories.values():
        if policy.required != "always":
            library.signal(policy.required)
    for rule in library.approval_designators:
        if rule.signal is not None:
            library.signal(rule.signal)

    logger.debug(
        "Pattern library built: %d signals, %d categories",
        len(library.signals),
        len(library.categories),
    )
    return library


@lru_cache(maxsize=4)
def get_pattern_library(patterns_path: Optional[str] = None) -> PatternLibrary:
    """Load and build the pattern library once per path."""
    return build_pattern_library(load_patterns(patterns_path or DEFAULT_PATTERNS_PATH))
