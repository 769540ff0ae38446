"""
Smart schedule suggestions: proposes an optimal dosing schedule for one
medication from its intake history and the user's stated needs.
"""

from typing import Any, Mapping
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError

from pillpal.config import Settings
from pillpal.models.domain import AssistantFailure
from pillpal.models.schemas import ScheduleSuggestion, ScheduleSuggestionRequest
from pillpal.services.assistant_service import InvalidInputError
from pillpal.services.llm_service import LLMError, LLMService, create_llm
from pillpal.utils.prompts import load_prompts
from pillpal.utils.logger import get_logger

logger = get_logger(__name__)
PROMPTS = load_prompts()


class ScheduleService:
    """
    Service wrapping the structured-output call that produces a
    ScheduleSuggestion.
    """

    def __init__(self, llm_service: LLMService):
        self.llm_service = llm_service

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScheduleService":
        """
        Raises:
            ConfigurationError: If the provider credential is missing
        """
        model = create_llm(
            model_name=settings.schedule_model,
            api_key=settings.provider_api_key(settings.schedule_model),
        )
        return cls(
            LLMService(
                model=model,
                max_retries=settings.llm_max_retries,
                timeout=settings.llm_timeout,
            )
        )

    @staticmethod
    def build_messages(request: ScheduleSuggestionRequest) -> list:
        config = PROMPTS["schedule_suggestion"]

        if request.intake_logs:
            history = "\n".join(f"- {log.date} at {log.time}" for log in request.intake_logs)
        else:
            history = "No intake history recorded."

        prompt = config["prompt_template"].format(
            medication_name=request.medication_name,
            dosage=request.dosage,
            current_schedule=", ".join(request.current_schedule or []) or "not set",
            intake_history=history,
            user_needs=request.user_needs or "none stated",
        )
        return [
            SystemMessage(content=config["system_message"]),
            HumanMessage(content=prompt),
        ]

    async def suggest_optimal_schedule(
        self, request: ScheduleSuggestionRequest | Mapping[str, Any]
    ) -> ScheduleSuggestion | AssistantFailure:
        """
        Args:
            request: ScheduleSuggestionRequest or equivalent mapping

        Returns:
            ScheduleSuggestion, or AssistantFailure if the model call failed

        Raises:
            InvalidInputError: If the request is malformed
        """
        if not isinstance(request, ScheduleSuggestionRequest):
            try:
                request = ScheduleSuggestionRequest.model_validate(request)
            except ValidationError as e:
                logger.error("invalid_schedule_input", errors=e.errors(include_url=False))
                raise InvalidInputError("Invalid input.") from e

        logger.info(
            "schedule_suggestion_started",
            medication=request.medication_name,
            intake_logs=len(request.intake_logs),
        )

        try:
            suggestion = await self.llm_service.invoke_with_structured_output(
                self.build_messages(request), ScheduleSuggestion
            )
        except LLMError as e:
            logger.error("schedule_suggestion_failed", error=str(e))
            return AssistantFailure(error=PROMPTS["service_errors"]["schedule"])

        logger.info(
            "schedule_suggestion_completed",
            medication=request.medication_name,
            suggested_times=suggestion.suggested_times,
        )
        return suggestion
