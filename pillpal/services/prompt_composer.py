"""
Prompt composer: turns an assistant request into a system prompt chosen by
page context and a user prompt carrying the user's live medication data.
Pure functions, no I/O beyond the cached prompt file.
"""

from dataclasses import dataclass
from functools import lru_cache

from pillpal.models.domain import (
    AdherenceStats,
    IntakeLogEntry,
    MedicationSnapshot,
    PageContext,
)
from pillpal.models.schemas import AssistantRequest
from pillpal.utils.prompts import load_prompts

NO_MEDICATIONS_NOTICE = "No medications added yet."


@dataclass(frozen=True)
class ComposedPrompt:
    system_prompt: str
    user_prompt: str


@lru_cache(maxsize=1)
def _system_prompts() -> dict[PageContext, str]:
    """
    Page template plus the shared JSON instruction block, for every context.

    Raises:
        KeyError: If prompts.yaml lacks a template for some PageContext
    """
    prompts = load_prompts()
    templates = prompts["system_prompts"]
    instructions = prompts["json_instructions"].strip()

    missing = [context.value for context in PageContext if context.value not in templates]
    if missing:
        raise KeyError(f"No system prompt configured for page contexts: {missing}")

    return {
        context: f"{templates[context.value].rstrip()}\n\n{instructions}"
        for context in PageContext
    }


def get_system_prompt(page_context: PageContext) -> str:
    return _system_prompts()[PageContext(page_context)]


def format_medications(medications: list[MedicationSnapshot]) -> str:
    if not medications:
        return NO_MEDICATIONS_NOTICE
    return "\n".join(
        f"- {m.name} ({m.dosage}): {', '.join(m.schedule.times)}" for m in medications
    )


def format_log_time(entry: IntakeLogEntry) -> str:
    """Local hour:minute, e.g. '08:30 AM'. Naive times are taken as local."""
    return entry.time.astimezone().strftime("%I:%M %p")


def format_today_logs(logs: list[IntakeLogEntry]) -> str:
    return "\n".join(
        f"- {log.medication_name}: {log.status.value} at {format_log_time(log)}"
        for log in logs
    )


def format_adherence(stats: AdherenceStats) -> str:
    return (
        f"- Total scheduled: {stats.total_scheduled}\n"
        f"- Total taken: {stats.total_taken}\n"
        f"- Adherence rate: {stats.adherence_rate}%"
    )


def build_user_prompt(request: AssistantRequest) -> str:
    """
    Medications, today's activity (if any), adherence stats (if any), then
    the question, in that order.
    """
    sections = [f"Current Medications:\n{format_medications(request.medications)}"]

    if request.today_logs:
        sections.append(f"Today's Activity:\n{format_today_logs(request.today_logs)}")

    if request.adherence_stats is not None:
        sections.append(f"Adherence Stats:\n{format_adherence(request.adherence_stats)}")

    sections.append(f"User Question: {request.user_message}")
    return "\n\n".join(sections)


def compose_prompt(request: AssistantRequest) -> ComposedPrompt:
    return ComposedPrompt(
        system_prompt=get_system_prompt(request.page_context),
        user_prompt=build_user_prompt(request),
    )
