"""
Services package exports for business logic layer.
"""

from pillpal.services.llm_service import LLMService, create_llm, LLMError, LLMTimeoutError
from pillpal.services.gateway import ModelGateway, EmptyResponseError
from pillpal.services.prompt_composer import ComposedPrompt, compose_prompt
from pillpal.services.response_parser import parse_assistant_output
from pillpal.services.adherence_service import calculate_adherence_stats, get_today_logs
from pillpal.services.assistant_service import AssistantService, InvalidInputError
from pillpal.services.schedule_service import ScheduleService
from pillpal.services.conversation_service import ConversationController

__all__ = [
    "LLMService",
    "create_llm",
    "LLMError",
    "LLMTimeoutError",
    "ModelGateway",
    "EmptyResponseError",
    "ComposedPrompt",
    "compose_prompt",
    "parse_assistant_output",
    "calculate_adherence_stats",
    "get_today_logs",
    "AssistantService",
    "InvalidInputError",
    "ScheduleService",
    "ConversationController",
]
