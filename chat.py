"""
Console front end for the PillPal assistant.
Loads medication data from Supabase when configured, otherwise from a
built-in sample, and chats page by page.

Commands:
    /page <dashboard|medications|reports>   switch page (starts a new conversation)
    /1, /2, ...                             send a suggestion chip
    exit | quit                             leave
"""

import asyncio

from pillpal import config
from pillpal.config import ConfigurationError
from pillpal.database import DatabaseError, SupabaseMedicationStore, sample_store
from pillpal.graph.builder import build_assistant_service
from pillpal.models.domain import PageContext
from pillpal.services.conversation_service import ConversationController
from pillpal.utils.logger import configure_logging, get_logger
from pillpal.utils.prompts import load_prompts

logger = get_logger(__name__)


def _current_chips(controller: ConversationController) -> list[str]:
    for turn in reversed(controller.transcript):
        if turn.role == "assistant":
            return list(turn.suggestions or [])
    return controller.default_suggestions()


def _print_page_header(controller: ConversationController) -> None:
    info = controller.page_info
    print("\n" + "=" * 60)
    print(f"PillPal AI - {info['label']}")
    print(info["description"])
    print("=" * 60)


def _print_chips(chips: list[str]) -> None:
    for i, chip in enumerate(chips, start=1):
        print(f"  [/{i}] {chip}")


async def _load_store(settings: config.Settings):
    if settings.supabase_enabled:
        store = SupabaseMedicationStore.from_settings(settings)
        await store.refresh()
        return store
    logger.info("using_sample_store")
    return sample_store()


async def run_console_chat() -> None:
    """Async main loop for console chat interaction."""
    settings = config.get_settings()
    configure_logging(level=settings.log_level, use_structured=settings.structured_logs)

    try:
        config.check_env_vars()
        assistant = build_assistant_service(settings)
    except ConfigurationError as e:
        logger.error("assistant_unavailable", error=str(e))
        print(f"\nThe assistant is unavailable: {e}")
        return

    try:
        store = await _load_store(settings)
    except DatabaseError as e:
        print(f"\nCould not load your medications: {e}")
        return

    controller = ConversationController(
        assistant, store, window_days=settings.adherence_window_days
    )
    disclaimer = load_prompts()["conversation_responses"]["disclaimer"]

    _print_page_header(controller)
    print(disclaimer)

    while True:
        chips = _current_chips(controller)
        if chips:
            print("\nSuggestions:")
            _print_chips(chips)

        try:
            line = input(f"\n[{controller.page_context.value}] You: ").strip()
        except (KeyboardInterrupt, EOFError):
            logger.info("conversation_interrupted_by_user")
            break

        if line.lower() in ["exit", "quit"]:
            break

        if line.startswith("/page"):
            target = line.removeprefix("/page").strip()
            context = PageContext.from_path(f"/{target}")
            if controller.reset_on_context_change(context):
                _print_page_header(controller)
            continue

        if line.startswith("/") and line[1:].isdigit():
            index = int(line[1:]) - 1
            if not 0 <= index < len(chips):
                print("No suggestion with that number.")
                continue
            sent = await controller.select_suggestion(chips[index])
        else:
            sent = await controller.submit(line)

        if sent and controller.transcript:
            print(f"\nPillPal AI:\n{controller.transcript[-1].content}")

    print("\nGoodbye! Take care.")


if __name__ == "__main__":
    asyncio.run(run_console_chat())
