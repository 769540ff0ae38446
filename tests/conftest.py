"""
Shared test fixtures and configuration.
"""

import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, Mock

from pillpal.database.memory import InMemoryMedicationStore
from pillpal.models.domain import (
    AdherenceStats,
    AssistantOutput,
    IntakeLogEntry,
    LogStatus,
    MedicationSchedule,
    MedicationSnapshot,
    PageContext,
)
from pillpal.models.schemas import AssistantRequest
from pillpal.services.assistant_service import AssistantService


@pytest.fixture
def now() -> datetime:
    """Fixed local wall-clock time used as 'now' across tests."""
    return datetime(2026, 10, 18, 12, 0)


@pytest.fixture
def sample_medications() -> list[MedicationSnapshot]:
    return [
        MedicationSnapshot(
            name="Metformin",
            dosage="500mg",
            schedule=MedicationSchedule(frequency="twice daily", times=["08:00", "20:00"]),
        ),
        MedicationSnapshot(
            name="Lisinopril",
            dosage="10mg",
            schedule=MedicationSchedule(frequency="once daily", times=["09:00"]),
        ),
    ]


@pytest.fixture
def sample_logs(now) -> list[IntakeLogEntry]:
    """Two entries today, one yesterday and one outside the 30-day window."""
    return [
        IntakeLogEntry(
            medication_name="Metformin",
            time=now.replace(hour=8, minute=30),
            status=LogStatus.TAKEN,
        ),
        IntakeLogEntry(
            medication_name="Lisinopril",
            time=now.replace(hour=9, minute=15),
            status=LogStatus.SKIPPED,
        ),
        IntakeLogEntry(
            medication_name="Metformin",
            time=now - timedelta(days=1),
            status=LogStatus.MISSED,
        ),
        IntakeLogEntry(
            medication_name="Metformin",
            time=now - timedelta(days=45),
            status=LogStatus.TAKEN,
        ),
    ]


@pytest.fixture
def sample_store(sample_medications, sample_logs) -> InMemoryMedicationStore:
    return InMemoryMedicationStore(medications=sample_medications, logs=sample_logs)


@pytest.fixture
def sample_request(sample_medications, now) -> AssistantRequest:
    return AssistantRequest(
        page_context=PageContext.REPORTS,
        user_message="How am I doing this month?",
        medications=sample_medications,
        today_logs=[
            IntakeLogEntry(
                medication_name="Metformin",
                time=now.replace(hour=8, minute=30),
                status=LogStatus.TAKEN,
            )
        ],
        adherence_stats=AdherenceStats(
            total_scheduled=8, total_taken=6, adherence_rate=75
        ),
    )


@pytest.fixture
def mock_assistant():
    """AssistantService double answering every turn successfully."""
    assistant = Mock(spec=AssistantService)
    assistant.request_response = AsyncMock(
        return_value=AssistantOutput(
            response="Take it with food.",
            suggestions=["When should I take it?", "Any side effects?"],
        )
    )
    return assistant
