"""
Graph nodes for one assistant turn.
Each node is thin and delegates to the composer, gateway or parser.
"""

from pillpal.models.state import AssistantState
from pillpal.services.gateway import ModelGateway
from pillpal.services.prompt_composer import compose_prompt
from pillpal.services.response_parser import parse_assistant_output
from pillpal.utils.logger import get_logger

logger = get_logger(__name__)


class AssistantNodes:
    """Container for the assistant pipeline nodes."""

    def __init__(self, gateway: ModelGateway):
        self.gateway = gateway

    def compose_node(self, state: AssistantState) -> dict:
        """Builds the page-specific system prompt and the context-rich user prompt."""
        request = state["request"]
        logger.info(
            "node_started",
            node="compose",
            page_context=request.page_context.value,
            medications=len(request.medications),
        )
        prompt = compose_prompt(request)
        return {
            "system_prompt": prompt.system_prompt,
            "user_prompt": prompt.user_prompt,
        }

    async def generate_node(self, state: AssistantState) -> dict:
        """
        Calls the model. Provider errors propagate out of the graph so the
        caller can report them.
        """
        logger.info("node_started", node="generate")
        raw = await self.gateway.generate(state["system_prompt"], state["user_prompt"])
        return {"raw_response": raw}

    def parse_node(self, state: AssistantState) -> dict:
        logger.info("node_started", node="parse")
        output = parse_assistant_output(state["raw_response"])
        return {"output": output}
