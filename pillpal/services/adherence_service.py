"""
Adherence helpers computed from the raw intake log before each assistant
turn: the trailing-window statistics and today's activity.
"""

import math
from datetime import datetime, timedelta

from pillpal.models.domain import AdherenceStats, IntakeLogEntry, LogStatus

DEFAULT_WINDOW_DAYS = 30


def _local(moment: datetime) -> datetime:
    """Converts to the local timezone; naive values are taken as local already."""
    return moment.astimezone()


def _now(now: datetime | None) -> datetime:
    return _local(now) if now is not None else datetime.now().astimezone()


def calculate_adherence_stats(
    logs: list[IntakeLogEntry],
    now: datetime | None = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> AdherenceStats:
    """
    Adherence over the trailing window ending today.

    The denominator is the number of logged entries in the window, floored
    at 1 so an empty log gives a 0% rate instead of a division error.
    Rates round half up.

    Args:
        logs: Full intake log
        now: Reference time (defaults to the current local time)
        window_days: Window length in days

    Returns:
        AdherenceStats for the window
    """
    current = _now(now)
    cutoff = current - timedelta(days=window_days)

    recent = [
        log
        for log in logs
        if cutoff <= _local(log.time) and _local(log.time).date() <= current.date()
    ]

    total_taken = sum(1 for log in recent if log.status == LogStatus.TAKEN)
    total_scheduled = len(recent) or 1
    adherence_rate = math.floor(total_taken / total_scheduled * 100 + 0.5)

    return AdherenceStats(
        total_scheduled=total_scheduled,
        total_taken=total_taken,
        adherence_rate=adherence_rate,
    )


def get_today_logs(
    logs: list[IntakeLogEntry], now: datetime | None = None
) -> list[IntakeLogEntry]:
    """Entries whose local calendar date is today, in log order."""
    today = _now(now).date()
    return [
        IntakeLogEntry(
            medication_name=log.medication_name,
            time=log.time,
            status=log.status,
        )
        for log in logs
        if _local(log.time).date() == today
    ]
