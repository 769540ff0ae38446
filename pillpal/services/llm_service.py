"""
LLM service providing centralized async LLM operations.
Implements timeout, bounded retry, concurrency limiting and usage logging.
"""

import time
import asyncio
from typing import Type, TypeVar
from pydantic import BaseModel, ValidationError
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI
from langchain_google_genai import ChatGoogleGenerativeAI

from pillpal.utils.logger import get_logger

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class LLMError(Exception):
    """Base exception for LLM-related errors."""


class LLMTimeoutError(LLMError):
    """Raised when LLM call exceeds timeout threshold."""


def create_llm(
    model_name: str,
    api_key: str,
    temperature: float = 0,
    json_mode: bool = False,
) -> Runnable:
    """
    Factory function to create chat model instances.

    Args:
        model_name: Model identifier (e.g., "gpt-4o-mini", "gemini-2.5-flash")
        api_key: API key for the provider
        temperature: Sampling temperature
        json_mode: Force the provider to return a JSON object

    Returns:
        Configured chat model (bound to JSON response mode when requested)

    Raises:
        ValueError: If model provider is not supported
    """
    if "gemini" in model_name:
        kwargs = {"response_mime_type": "application/json"} if json_mode else {}
        return ChatGoogleGenerativeAI(
            google_api_key=api_key,
            model=model_name,
            temperature=temperature,
            **kwargs,
        )
    elif "gpt" in model_name:
        model = ChatOpenAI(api_key=api_key, model=model_name, temperature=temperature)
        if json_mode:
            return model.bind(response_format={"type": "json_object"})
        return model
    else:
        raise ValueError(
            f"Unsupported model: {model_name}. "
            "Model name must contain 'gpt' or 'gemini'"
        )


class LLMService:
    """
    Async wrapper around a chat model.
    Every call is bounded by a timeout; attempts beyond the first only happen
    when max_retries > 1.
    """

    def __init__(
        self,
        model: Runnable,
        max_retries: int = 1,
        timeout: int = 30,
        rate_limit: int = 3,
    ):
        """
        Initialize async LLM service.

        Args:
            model: Configured chat model (or a runnable bound from one)
            max_retries: Total attempts per call (1 disables retrying)
            timeout: Timeout in seconds for each LLM call
            rate_limit: Maximum concurrent LLM requests (Semaphore)
        """
        self.model = model
        self.max_retries = max_retries
        self.timeout = timeout
        self.semaphore = asyncio.Semaphore(rate_limit)

    @property
    def model_name(self) -> str:
        bound = getattr(self.model, "bound", self.model)
        return getattr(bound, "model_name", None) or getattr(bound, "model", "unknown")

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type(LLMError),
            reraise=True,
        )

    async def invoke_with_retry(
        self,
        messages: list[BaseMessage] | str,
        timeout: int | None = None,
    ) -> BaseMessage:
        """
        Invokes the model with timeout, rate limiting and bounded retry.

        Args:
            messages: Input messages or single prompt string
            timeout: Override default timeout (seconds)

        Returns:
            LLM response as BaseMessage

        Raises:
            LLMTimeoutError: If call exceeds timeout
            LLMError: If the call fails on every attempt
        """
        timeout = timeout or self.timeout
        start_time = time.time()

        async for attempt in self._retrying():
            with attempt:
                try:
                    logger.info(
                        "llm_call_started",
                        attempt=attempt.retry_state.attempt_number,
                        timeout=timeout,
                        model=self.model_name,
                    )

                    async with self.semaphore:
                        response = await asyncio.wait_for(
                            self.model.ainvoke(messages), timeout=timeout
                        )

                    self._log_usage(response, time.time() - start_time)
                    return response

                except asyncio.TimeoutError as e:
                    logger.error(
                        "llm_call_timeout",
                        elapsed=time.time() - start_time,
                        timeout=timeout,
                        attempt=attempt.retry_state.attempt_number,
                    )
                    raise LLMTimeoutError(
                        f"LLM call exceeded timeout of {timeout}s"
                    ) from e
                except Exception as e:
                    logger.error(
                        "llm_call_failed",
                        exc_info=True,
                        elapsed=time.time() - start_time,
                        attempt=attempt.retry_state.attempt_number,
                        error=str(e),
                    )
                    raise LLMError(f"LLM invocation failed: {e}") from e

    async def invoke_with_structured_output(
        self,
        messages: list[BaseMessage] | str,
        output_schema: Type[SchemaT],
        timeout: int | None = None,
    ) -> SchemaT:
        """
        Invokes the model with a single forced tool whose arguments follow
        `output_schema`, and validates them.

        Args:
            messages: Input messages or prompt
            output_schema: Pydantic model defining expected output structure
            timeout: Override default timeout (seconds)

        Returns:
            Instance of output_schema built from the tool call arguments

        Raises:
            LLMTimeoutError: If call exceeds timeout
            LLMError: If the call fails or arguments do not match the schema
        """
        timeout = timeout or self.timeout
        start_time = time.time()
        schema_name = output_schema.__name__

        if not isinstance(self.model, BaseChatModel):
            raise LLMError(f"Model does not support tool calling for {schema_name}")
        model_with_tool = self.model.bind_tools([output_schema], tool_choice=schema_name)

        async for attempt in self._retrying():
            with attempt:
                try:
                    logger.info(
                        "llm_structured_call_started",
                        schema=schema_name,
                        timeout=timeout,
                        attempt=attempt.retry_state.attempt_number,
                    )

                    async with self.semaphore:
                        response = await asyncio.wait_for(
                            model_with_tool.ainvoke(messages), timeout=timeout
                        )

                    if not response.tool_calls:
                        raise LLMError(
                            f"Model did not return structured output "
                            f"for schema {schema_name}"
                        )

                    result = output_schema.model_validate(response.tool_calls[0]["args"])
                    self._log_usage(response, time.time() - start_time)
                    return result

                except asyncio.TimeoutError as e:
                    logger.error(
                        "llm_structured_call_timeout",
                        elapsed=time.time() - start_time,
                        timeout=timeout,
                        attempt=attempt.retry_state.attempt_number,
                        schema=schema_name,
                    )
                    raise LLMTimeoutError(
                        f"Structured output call exceeded timeout of {timeout}s"
                    ) from e
                except LLMError:
                    raise
                except ValidationError as e:
                    logger.error(
                        "llm_structured_output_invalid",
                        schema=schema_name,
                        error=str(e),
                    )
                    raise LLMError(f"Structured output did not match {schema_name}") from e
                except Exception as e:
                    logger.error(
                        "llm_structured_call_failed",
                        exc_info=True,
                        elapsed=time.time() - start_time,
                        attempt=attempt.retry_state.attempt_number,
                        schema=schema_name,
                        error=str(e),
                    )
                    raise LLMError(f"Structured output invocation failed: {e}") from e

    def _log_usage(self, response: BaseMessage, elapsed: float) -> None:
        usage = getattr(response, "usage_metadata", None)
        if usage:
            logger.info(
                "llm_usage",
                input_tokens=usage.get("input_tokens", 0),
                output_tokens=usage.get("output_tokens", 0),
                total_tokens=usage.get("total_tokens", 0),
                elapsed=elapsed,
            )
        else:
            logger.info("llm_call_completed", elapsed=elapsed)
