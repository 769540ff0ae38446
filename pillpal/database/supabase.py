"""
Supabase-backed medication store with fail-fast error handling.
Reads the `medications` and `intake_logs` tables once per refresh.
"""

import asyncio
from pydantic import ValidationError
from supabase import Client, create_client

from pillpal.config import Settings
from pillpal.database.base import DatabaseError
from pillpal.models.domain import IntakeLogEntry, MedicationSchedule, MedicationSnapshot
from pillpal.utils.logger import get_logger

logger = get_logger(__name__)

MEDICATIONS_TABLE = "medications"
LOGS_TABLE = "intake_logs"


class SupabaseMedicationStore:
    """
    Caches the user's medications and logs after `refresh()`.
    Not ready until the first refresh succeeds.
    """

    def __init__(self, client: Client, user_id: str | None = None):
        """
        Args:
            client: Supabase client instance
            user_id: Restrict rows to this user when set
        """
        self.client = client
        self.user_id = user_id
        self._medications: list[MedicationSnapshot] = []
        self._logs: list[IntakeLogEntry] = []
        self._ready = False

    @classmethod
    def from_settings(cls, settings: Settings, user_id: str | None = None) -> "SupabaseMedicationStore":
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return cls(client, user_id=user_id)

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def list_medications(self) -> list[MedicationSnapshot]:
        return list(self._medications)

    async def list_logs(self) -> list[IntakeLogEntry]:
        return list(self._logs)

    def _select(self, table: str, columns: str, order: str | None = None) -> list[dict]:
        query = self.client.table(table).select(columns)
        if self.user_id:
            query = query.eq("user_id", self.user_id)
        if order:
            query = query.order(order)
        return query.execute().data or []

    async def refresh(self) -> None:
        """
        Reloads both tables.

        Raises:
            DatabaseError: If a query fails or a row is malformed
        """
        self._ready = False
        try:
            logger.info("medication_store_refresh_started", user_id=self.user_id)
            medication_rows = await asyncio.to_thread(
                self._select, MEDICATIONS_TABLE, "name, dosage, frequency, times"
            )
            log_rows = await asyncio.to_thread(
                self._select, LOGS_TABLE, "medication_name, time, status", "time"
            )

            self._medications = [
                MedicationSnapshot(
                    name=row["name"],
                    dosage=row["dosage"],
                    schedule=MedicationSchedule(
                        frequency=row["frequency"], times=row.get("times") or []
                    ),
                )
                for row in medication_rows
            ]
            self._logs = [IntakeLogEntry.model_validate(row) for row in log_rows]

        except (KeyError, ValidationError) as e:
            logger.error("medication_store_rows_invalid", exc_info=True, error=str(e))
            raise DatabaseError(f"Malformed medication data: {e}") from e
        except Exception as e:
            logger.error("medication_store_refresh_failed", exc_info=True, error=str(e))
            raise DatabaseError(f"Could not load medication data: {e}") from e

        self._ready = True
        logger.info(
            "medication_store_refreshed",
            medications=len(self._medications),
            logs=len(self._logs),
        )
