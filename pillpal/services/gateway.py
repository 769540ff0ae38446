"""
Model gateway: sends a composed prompt pair to the provider in JSON mode
and returns the raw text of the reply.
"""

from langchain_core.messages import HumanMessage, SystemMessage

from pillpal.config import Settings
from pillpal.services.llm_service import LLMError, LLMService, create_llm
from pillpal.utils.logger import get_logger

logger = get_logger(__name__)


class EmptyResponseError(LLMError):
    """Raised when the provider answers with an empty message body."""


class ModelGateway:
    """
    One non-streamed completion per call. Failures propagate; whether to
    retry is decided by the LLM service configuration.
    """

    def __init__(self, llm_service: LLMService):
        self.llm_service = llm_service

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelGateway":
        """
        Builds a JSON-mode gateway for the configured assistant model.

        Raises:
            ConfigurationError: If the provider credential is missing
        """
        api_key = settings.provider_api_key(settings.assistant_model)
        model = create_llm(
            model_name=settings.assistant_model,
            api_key=api_key,
            temperature=settings.assistant_temperature,
            json_mode=True,
        )
        logger.info(
            "gateway_created",
            model=settings.assistant_model,
            temperature=settings.assistant_temperature,
        )
        return cls(
            LLMService(
                model=model,
                max_retries=settings.llm_max_retries,
                timeout=settings.llm_timeout,
            )
        )

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """
        Returns the raw reply text.

        Raises:
            LLMError: Provider failure or empty body
            LLMTimeoutError: Call exceeded the configured timeout
        """
        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ]
        response = await self.llm_service.invoke_with_retry(messages)

        content = response.content if isinstance(response.content, str) else ""
        if not content:
            logger.error("llm_empty_response", model=self.llm_service.model_name)
            raise EmptyResponseError("No response from the language model.")

        return content
