"""
Unit tests for ScheduleService.
Tests prompt building, validation and failure reporting.
"""

import pytest
from unittest.mock import AsyncMock, Mock

from pillpal.models.domain import AssistantFailure
from pillpal.models.schemas import ScheduleSuggestion, ScheduleSuggestionRequest
from pillpal.services.assistant_service import InvalidInputError
from pillpal.services.llm_service import LLMError, LLMService
from pillpal.services.schedule_service import ScheduleService


@pytest.fixture
def llm_service():
    """Mock LLM service for testing."""
    service = Mock(spec=LLMService)
    service.invoke_with_structured_output = AsyncMock(
        return_value=ScheduleSuggestion(
            suggested_times=["08:00", "20:00"],
            reasoning="You reliably take doses at these times. Confirm with your doctor.",
        )
    )
    return service


@pytest.fixture
def schedule_service(llm_service):
    return ScheduleService(llm_service)


@pytest.fixture
def schedule_payload() -> dict:
    return {
        "medicationName": "Metformin",
        "dosage": "500mg",
        "currentSchedule": ["07:00", "19:00"],
        "intakeLogs": [
            {"date": "2026-10-16", "time": "08:05"},
            {"date": "2026-10-17", "time": "08:10"},
        ],
        "userNeeds": "I wake up around 7:45 on weekdays",
    }


class TestBuildMessages:
    """Tests for the schedule prompt."""

    def test_prompt_includes_history_and_needs(self, schedule_payload):
        """Should list every intake and the stated needs."""
        # Arrange
        request = ScheduleSuggestionRequest.model_validate(schedule_payload)

        # Act
        system, human = ScheduleService.build_messages(request)

        # Assert
        assert "HH:MM" in system.content
        assert "Metformin (500mg)" in human.content
        assert "Current schedule: 07:00, 19:00" in human.content
        assert "- 2026-10-16 at 08:05" in human.content
        assert "I wake up around 7:45" in human.content

    def test_prompt_without_history(self):
        """Should say so when there is no intake history."""
        request = ScheduleSuggestionRequest(
            medication_name="Lisinopril",
            dosage="10mg",
            intake_logs=[],
            user_needs="",
        )

        _, human = ScheduleService.build_messages(request)

        assert "No intake history recorded." in human.content
        assert "Current schedule: not set" in human.content


class TestSuggestOptimalSchedule:
    """Tests for the suggestion call."""

    @pytest.mark.asyncio
    async def test_returns_structured_suggestion(
        self, schedule_service, llm_service, schedule_payload
    ):
        """Should return the model's suggestion."""
        result = await schedule_service.suggest_optimal_schedule(schedule_payload)

        assert result.suggested_times == ["08:00", "20:00"]
        args = llm_service.invoke_with_structured_output.await_args.args
        assert args[1] is ScheduleSuggestion

    @pytest.mark.asyncio
    async def test_invalid_input_raises(self, schedule_service, llm_service):
        """Should reject a request without intake logs."""
        with pytest.raises(InvalidInputError):
            await schedule_service.suggest_optimal_schedule(
                {"medicationName": "Metformin", "dosage": "500mg", "userNeeds": ""}
            )
        llm_service.invoke_with_structured_output.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_llm_failure_returns_failure(
        self, schedule_service, llm_service, schedule_payload
    ):
        """Should report provider failures instead of raising."""
        llm_service.invoke_with_structured_output.side_effect = LLMError("timeout")

        result = await schedule_service.suggest_optimal_schedule(schedule_payload)

        assert isinstance(result, AssistantFailure)
        assert result.error == "Failed to generate suggestions. Please try again."
