"""
Database package exports for medication data stores.
"""

from pillpal.database.base import MedicationStore, DatabaseError
from pillpal.database.memory import InMemoryMedicationStore, sample_store
from pillpal.database.supabase import SupabaseMedicationStore

__all__ = [
    "MedicationStore",
    "DatabaseError",
    "InMemoryMedicationStore",
    "sample_store",
    "SupabaseMedicationStore",
]
