"""
Risk priority utilities.

Pure module: no loader.py or service imports. The priority table itself
comes from the pattern library (order of ``risk_levels`` in the YAML).
"""

from typing import Dict, Iterable

UNSET = "Unset"
LOW = "Low"


def highest_risk_level(levels: Iterable[str], priority: Dict[str, int]) -> str:
    """
    Return the most severe level under ``priority``.

    Unset ranks lowest; when every level is Unset (or none are given) the
    result is Low.
    """
    evaluated = [level for level in levels if level != UNSET]
    if not evaluated:
        return LOW
    return max(evaluated, key=lambda level: priority.get(level, -1))
