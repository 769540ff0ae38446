"""
Domain models for the assistant: page contexts, medication and intake-log
snapshots, adherence statistics and conversation turns.
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Accept both snake_case and the camelCase keys used by the web client
CAMEL_CASE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageContext(str, Enum):
    """UI section the user is viewing. Closed set: adding one means adding its prompts."""

    DASHBOARD = "dashboard"
    MEDICATIONS = "medications"
    REPORTS = "reports"

    @classmethod
    def from_path(cls, path: str) -> "PageContext":
        """Maps a route like '/reports' to its context, defaulting to dashboard."""
        segment = (path or "").strip().rstrip("/").lower()
        for context in cls:
            if segment == f"/{context.value}":
                return context
        return cls.DASHBOARD


class LogStatus(str, Enum):
    TAKEN = "taken"
    MISSED = "missed"
    SKIPPED = "skipped"


class MedicationSchedule(BaseModel):
    frequency: str
    times: list[str] = Field(default_factory=list)


class MedicationSnapshot(BaseModel):
    """Medication as handed to the assistant. Read-only."""

    model_config = ConfigDict(frozen=True, **CAMEL_CASE_CONFIG)

    name: str
    dosage: str
    schedule: MedicationSchedule


class IntakeLogEntry(BaseModel):
    """A single logged dose."""

    model_config = ConfigDict(frozen=True, **CAMEL_CASE_CONFIG)

    medication_name: str
    time: datetime
    status: LogStatus


class AdherenceStats(BaseModel):
    """
    Precomputed adherence summary over the trailing window.

    Attributes:
        total_scheduled: Entries in the window (floored at 1 when derived)
        total_taken: Entries with status taken
        adherence_rate: Integer percentage 0-100
    """

    model_config = CAMEL_CASE_CONFIG

    total_scheduled: int = Field(ge=0)
    total_taken: int = Field(ge=0)
    adherence_rate: int = Field(ge=0, le=100)


class ConversationTurn(BaseModel):
    """One entry of the transcript. Suggestions only on assistant turns."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str
    suggestions: Optional[list[str]] = None


class AssistantOutput(BaseModel):
    """Validated assistant reply."""

    model_config = ConfigDict(strict=True)

    response: str
    suggestions: Optional[list[str]] = None


class AssistantFailure(BaseModel):
    """Provider or runtime failure reported to the caller instead of a reply."""

    error: str

