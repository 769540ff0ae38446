"""
Read-only interface the assistant uses to reach medication data.
"""

from typing import Protocol, runtime_checkable

from pillpal.models.domain import IntakeLogEntry, MedicationSnapshot


class DatabaseError(Exception):
    """Raised when database operations fail."""


@runtime_checkable
class MedicationStore(Protocol):
    """
    Source of the user's medications and intake log.
    The assistant must not submit while `is_ready` is False.
    """

    @property
    def is_ready(self) -> bool: ...

    async def list_medications(self) -> list[MedicationSnapshot]: ...

    async def list_logs(self) -> list[IntakeLogEntry]: ...
