"""
State flowing through the assistant LangGraph pipeline.
"""

from typing_extensions import TypedDict

from pillpal.models.domain import AssistantOutput
from pillpal.models.schemas import AssistantRequest


class AssistantState(TypedDict, total=False):
    """
    State of one pass through the assistant graph.

    Attributes:
        request: Validated caller request
        system_prompt: Page-specific system prompt
        user_prompt: Serialized context plus the question
        raw_response: Text returned by the model
        output: Validated or salvaged reply
    """

    request: AssistantRequest
    system_prompt: str
    user_prompt: str
    raw_response: str
    output: AssistantOutput
