"""
Assistant service: the call surface used by presentation layers.
Validates the request, runs the assistant graph and reports provider
failures as an AssistantFailure instead of raising.
"""

from typing import Any, Mapping
from pydantic import ValidationError

from pillpal.models.domain import AssistantFailure, AssistantOutput
from pillpal.models.schemas import AssistantRequest
from pillpal.utils.prompts import load_prompts
from pillpal.utils.logger import get_logger

logger = get_logger(__name__)
PROMPTS = load_prompts()


class InvalidInputError(Exception):
    """Raised when a caller-supplied request does not match the documented shape."""


def validate_request(request: AssistantRequest | Mapping[str, Any]) -> AssistantRequest:
    """
    Accepts an AssistantRequest or a mapping with snake_case or camelCase keys.

    Raises:
        InvalidInputError: If the mapping does not validate
    """
    if isinstance(request, AssistantRequest):
        return request
    try:
        return AssistantRequest.model_validate(request)
    except ValidationError as e:
        logger.error("invalid_assistant_input", errors=e.errors(include_url=False))
        raise InvalidInputError("Invalid input.") from e


class AssistantService:
    """
    Runs one assistant turn per call through the compiled graph.
    """

    def __init__(self, graph):
        """
        Args:
            graph: Compiled assistant graph (see build_assistant_graph)
        """
        self.graph = graph

    async def request_response(
        self, request: AssistantRequest | Mapping[str, Any]
    ) -> AssistantOutput | AssistantFailure:
        """
        Answers one user message.

        Args:
            request: AssistantRequest or equivalent mapping

        Returns:
            AssistantOutput on success (possibly salvaged), AssistantFailure
            when the provider or pipeline failed

        Raises:
            InvalidInputError: Before any dispatch, if the request is malformed
        """
        validated = validate_request(request)

        logger.info(
            "assistant_request_started",
            page_context=validated.page_context.value,
            medications=len(validated.medications),
            today_logs=len(validated.today_logs or []),
        )

        try:
            result = await self.graph.ainvoke({"request": validated})
        except Exception as e:
            logger.error("assistant_request_failed", exc_info=True, error=str(e))
            return AssistantFailure(error=PROMPTS["service_errors"]["assistant"])

        output: AssistantOutput = result["output"]
        logger.info(
            "assistant_request_completed",
            suggestions=len(output.suggestions or []),
        )
        return output
