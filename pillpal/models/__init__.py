"""
Models package exports for domain entities, request schemas and graph state.
"""

from pillpal.models.domain import (
    PageContext,
    LogStatus,
    MedicationSchedule,
    MedicationSnapshot,
    IntakeLogEntry,
    AdherenceStats,
    ConversationTurn,
    AssistantOutput,
    AssistantFailure,
)
from pillpal.models.schemas import (
    AssistantRequest,
    IntakeTime,
    ScheduleSuggestionRequest,
    ScheduleSuggestion,
)
from pillpal.models.state import AssistantState

__all__ = [
    "PageContext",
    "LogStatus",
    "MedicationSchedule",
    "MedicationSnapshot",
    "IntakeLogEntry",
    "AdherenceStats",
    "ConversationTurn",
    "AssistantOutput",
    "AssistantFailure",
    "AssistantRequest",
    "IntakeTime",
    "ScheduleSuggestionRequest",
    "ScheduleSuggestion",
    "AssistantState",
]
