"""
Change Review Graph.

Builds the LangGraph StateGraph for the change review workflow.
"""

from langgraph.graph import StateGraph, START, END

from app.services.change_review.state import AgentState
from app.services.change_review.context import Ctx
from app.services.change_review.nodes import (
    extract_fields,
    detect_signals,
    reason_about_change,
    suggest_category,
    classify_change,
    decide_requirement,
    require_manual_review,
    assess_risk,
)

_LEAF_NODES = [
    "extract_fields",
    "detect_signals",
    "suggest_category",
    "reason_about_change",
]


def route_requirement(state: AgentState) -> str:
    """Degraded runs skip the policy table and require manual review."""
    return "require_manual_review" if state.reasoning_degraded else "decide_requirement"


# 1. Initialize Graph with context schema
workflow = StateGraph(AgentState, context_schema=Ctx)

# 2. Add Nodes
workflow.add_node("extract_fields", extract_fields)
workflow.add_node("detect_signals", detect_signals)
workflow.add_node("suggest_category", suggest_category)
workflow.add_node("reason_about_change", reason_about_change)
workflow.add_node("classify_change", classify_change)
workflow.add_node("decide_requirement", decide_requirement)
workflow.add_node("require_manual_review", require_manual_review)
workflow.add_node("assess_risk", assess_risk)

# 3. Add Edges
for node in _LEAF_NODES:
    workflow.add_edge(START, node)
workflow.add_edge(_LEAF_NODES, "classify_change")
workflow.add_conditional_edges(
    "classify_change",
    route_requirement,
    ["decide_requirement", "require_manual_review"],
)
workflow.add_edge("decide_requirement", "assess_risk")
workflow.add_edge("require_manual_review", "assess_risk")
workflow.add_edge("assess_risk", END)

# 4. Compile
change_review_graph = workflow.compile()
