"""
Request schemas validated at the service boundary and structured output
schemas used for tool calling.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pillpal.models.domain import (
    CAMEL_CASE_CONFIG,
    AdherenceStats,
    IntakeLogEntry,
    MedicationSnapshot,
    PageContext,
)


class AssistantRequest(BaseModel):
    """
    Everything the assistant needs for one turn.
    Built by the conversation controller or supplied directly by a caller.
    """

    model_config = ConfigDict(frozen=True, **CAMEL_CASE_CONFIG)

    page_context: PageContext
    user_message: str = Field(min_length=1)
    medications: list[MedicationSnapshot]
    today_logs: Optional[list[IntakeLogEntry]] = None
    adherence_stats: Optional[AdherenceStats] = None

    @field_validator("user_message")
    @classmethod
    def _reject_blank_message(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("user_message must not be blank")
        return value


class IntakeTime(BaseModel):
    """Historical intake used for schedule suggestions."""

    date: str = Field(description="Calendar date of the intake (YYYY-MM-DD)")
    time: str = Field(description="Time of day the dose was taken (HH:MM)")


class ScheduleSuggestionRequest(BaseModel):
    model_config = CAMEL_CASE_CONFIG

    medication_name: str = Field(min_length=1)
    dosage: str
    current_schedule: Optional[list[str]] = None
    intake_logs: list[IntakeTime]
    user_needs: str


class ScheduleSuggestion(BaseModel):
    """
    Optimal dosing schedule proposed by the model.
    Filled by the LLM through tool calling.
    """

    suggested_times: list[str] = Field(
        description="Recommended daily dose times as 24-hour HH:MM strings, chronological"
    )
    reasoning: str = Field(
        description=(
            "Short explanation of why these times fit the user's history and needs, "
            "ending with a reminder to confirm with a healthcare provider"
        )
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "suggested_times": ["08:00", "20:00"],
                "reasoning": "You usually take your doses around 8am and 8pm...",
            }
        }
    )
