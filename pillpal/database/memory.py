"""
In-memory medication store, used by the console chat when Supabase is not
configured and by tests.
"""

from datetime import datetime, timedelta

from pillpal.models.domain import (
    IntakeLogEntry,
    LogStatus,
    MedicationSchedule,
    MedicationSnapshot,
)


class InMemoryMedicationStore:
    """Holds medications and logs in lists. Ready unless told otherwise."""

    def __init__(
        self,
        medications: list[MedicationSnapshot] | None = None,
        logs: list[IntakeLogEntry] | None = None,
        ready: bool = True,
    ):
        self.medications = list(medications or [])
        self.logs = list(logs or [])
        self.ready = ready

    @property
    def is_ready(self) -> bool:
        return self.ready

    async def list_medications(self) -> list[MedicationSnapshot]:
        return list(self.medications)

    async def list_logs(self) -> list[IntakeLogEntry]:
        return list(self.logs)

    def add_log(self, entry: IntakeLogEntry) -> None:
        self.logs.append(entry)


def sample_store(now: datetime | None = None) -> InMemoryMedicationStore:
    """
    Two medications with a week of history, for trying the assistant
    without a database.
    """
    now = now or datetime.now()
    medications = [
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

    logs = []
    for days_ago in range(7, 0, -1):
        day = (now - timedelta(days=days_ago)).replace(second=0, microsecond=0)
        logs.append(
            IntakeLogEntry(
                medication_name="Metformin",
                time=day.replace(hour=8, minute=5),
                status=LogStatus.TAKEN,
            )
        )
        logs.append(
            IntakeLogEntry(
                medication_name="Metformin",
                time=day.replace(hour=20, minute=30),
                status=LogStatus.MISSED if days_ago % 3 == 0 else LogStatus.TAKEN,
            )
        )
        logs.append(
            IntakeLogEntry(
                medication_name="Lisinopril",
                time=day.replace(hour=9, minute=0),
                status=LogStatus.SKIPPED if days_ago == 5 else LogStatus.TAKEN,
            )
        )

    today_morning = now.replace(hour=8, minute=10, second=0, microsecond=0)
    if today_morning <= now:
        logs.append(
            IntakeLogEntry(
                medication_name="Metformin", time=today_morning, status=LogStatus.TAKEN
            )
        )

    return InMemoryMedicationStore(medications=medications, logs=logs)
