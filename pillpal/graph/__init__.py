"""
Graph package for the assistant LangGraph pipeline.
"""

from pillpal.graph.builder import build_assistant_graph, build_assistant_service
from pillpal.graph.nodes import AssistantNodes

__all__ = ["build_assistant_graph", "build_assistant_service", "AssistantNodes"]
