"""Build the analysis StateGraph.

``build_analysis_graph()`` wires the ``prepare`` and ``classify`` nodes into
a compiled LangGraph that validates one module submission and asks the
oracle for a verdict.
"""

from typing import Any

from langgraph.graph import END, START, StateGraph

from scam_guard.graph.edges import after_prepare
from scam_guard.graph.nodes import make_classify_node, prepare_node
from scam_guard.graph.state import AnalysisState
from scam_guard.services.oracle import ClassificationOracle


def build_analysis_graph(oracle: ClassificationOracle) -> Any:
    """Build and compile the analysis StateGraph.

    Parameters
    ----------
    oracle:
        Oracle client used by the ``classify`` node.

    Returns
    -------
    CompiledStateGraph
        A compiled graph; run it with ``await graph.ainvoke(inputs)``.
    """
    graph = StateGraph(AnalysisState)

    graph.add_node("prepare", prepare_node)
    graph.add_node("classify", make_classify_node(oracle))

    graph.add_edge(START, "prepare")
    graph.add_conditional_edges(
        "prepare",
        after_prepare,
        {"classify": "classify", "__end__": END},
    )
    graph.add_edge("classify", END)

    return graph.compile()
