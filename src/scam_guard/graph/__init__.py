"""LangGraph wiring for the analysis pipeline."""

from scam_guard.graph.edges import after_prepare
from scam_guard.graph.graph import build_analysis_graph
from scam_guard.graph.nodes import make_classify_node, prepare_node, prepare_submission
from scam_guard.graph.state import AnalysisState

__all__ = [
    "AnalysisState",
    "after_prepare",
    "build_analysis_graph",
    "make_classify_node",
    "prepare_node",
    "prepare_submission",
]
