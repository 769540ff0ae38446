"""
Graph builder for the assistant pipeline.
compose -> generate -> parse, compiled once and reused for every turn.
"""

from langgraph.graph import StateGraph, END

from pillpal.config import Settings
from pillpal.graph.nodes import AssistantNodes
from pillpal.models.state import AssistantState
from pillpal.services.assistant_service import AssistantService
from pillpal.services.gateway import ModelGateway
from pillpal.utils.logger import get_logger

logger = get_logger(__name__)


def build_assistant_graph(gateway: ModelGateway):
    """
    Builds and compiles the assistant workflow.

    Args:
        gateway: Model gateway used by the generate node

    Returns:
        Compiled graph; invoke with {"request": AssistantRequest}
    """
    nodes = AssistantNodes(gateway)

    logger.info("graph_workflow_building")
    workflow = StateGraph(AssistantState)

    workflow.add_node("compose", nodes.compose_node)
    workflow.add_node("generate", nodes.generate_node)
    workflow.add_node("parse", nodes.parse_node)

    workflow.set_entry_point("compose")
    workflow.add_edge("compose", "generate")
    workflow.add_edge("generate", "parse")
    workflow.add_edge("parse", END)

    logger.info("graph_compiling")
    return workflow.compile()


def build_assistant_service(settings: Settings) -> AssistantService:
    """
    Wires gateway, graph and service from settings.

    Raises:
        ConfigurationError: If the provider credential is missing
    """
    logger.info("assistant_components_initializing", model=settings.assistant_model)
    gateway = ModelGateway.from_settings(settings)
    return AssistantService(build_assistant_graph(gateway))
