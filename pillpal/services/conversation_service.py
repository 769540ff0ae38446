"""
Conversation controller for the page-aware assistant.
Owns the transcript of the current page, allows a single request in flight,
and turns every dispatched message into exactly one assistant turn.
"""

import uuid
from datetime import datetime
from typing import Callable

from pillpal.database.base import MedicationStore
from pillpal.models.domain import (
    AssistantFailure,
    ConversationTurn,
    PageContext,
)
from pillpal.models.schemas import AssistantRequest
from pillpal.services.adherence_service import (
    DEFAULT_WINDOW_DAYS,
    calculate_adherence_stats,
    get_today_logs,
)
from pillpal.services.assistant_service import AssistantService
from pillpal.utils.prompts import get_page_info, load_prompts
from pillpal.utils.logger import get_logger, set_conversation_id

logger = get_logger(__name__)
PROMPTS = load_prompts()
PROVIDER_ERROR_MESSAGE = PROMPTS["conversation_responses"]["provider_error"]
UNEXPECTED_ERROR_MESSAGE = PROMPTS["conversation_responses"]["unexpected_error"]


class ConversationController:
    """
    Turn-based conversation bound to one page context.

    A generation counter identifies the current conversation. Changing page
    starts a new generation; replies that settle under an older generation
    are dropped.
    """

    def __init__(
        self,
        assistant: AssistantService,
        store: MedicationStore,
        page_context: PageContext = PageContext.DASHBOARD,
        clock: Callable[[], datetime] | None = None,
        window_days: int = DEFAULT_WINDOW_DAYS,
    ):
        """
        Args:
            assistant: Service answering each turn
            store: Read-only source of medications and intake logs
            page_context: Page the conversation starts on
            clock: Returns "now"; defaults to the local wall clock
            window_days: Adherence window handed to the assistant
        """
        self.assistant = assistant
        self.store = store
        self.page_context = PageContext(page_context)
        self.clock = clock or (lambda: datetime.now().astimezone())
        self.window_days = window_days

        self.transcript: list[ConversationTurn] = []
        self.draft = ""
        self.in_flight = False
        self._generation = 0
        self.conversation_id = uuid.uuid4().hex

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def page_info(self) -> dict:
        return get_page_info(self.page_context.value)

    def default_suggestions(self) -> list[str]:
        """Starter chips shown while the transcript is empty."""
        return list(self.page_info["default_suggestions"])

    def reset_on_context_change(self, new_context: PageContext | str) -> bool:
        """
        Starts a fresh conversation when the page context changes.

        Returns:
            True if the conversation was reset
        """
        new_context = PageContext(new_context)
        if new_context == self.page_context:
            return False

        logger.info(
            "conversation_reset",
            previous_context=self.page_context.value,
            new_context=new_context.value,
            abandoned_request=self.in_flight,
            turns_dropped=len(self.transcript),
        )
        self.page_context = new_context
        self.transcript = []
        self.draft = ""
        self.in_flight = False
        self._generation += 1
        self.conversation_id = uuid.uuid4().hex
        return True

    async def _build_request(self, text: str) -> AssistantRequest:
        medications = await self.store.list_medications()
        logs = await self.store.list_logs()
        now = self.clock()

        return AssistantRequest(
            page_context=self.page_context,
            user_message=text,
            medications=medications,
            today_logs=get_today_logs(logs, now=now),
            adherence_stats=calculate_adherence_stats(
                logs, now=now, window_days=self.window_days
            ),
        )

    async def _answer(self, text: str) -> ConversationTurn:
        request = await self._build_request(text)
        result = await self.assistant.request_response(request)

        if isinstance(result, AssistantFailure):
            logger.warning("assistant_turn_failed", error=result.error)
            return ConversationTurn(role="assistant", content=PROVIDER_ERROR_MESSAGE)

        return ConversationTurn(
            role="assistant",
            content=result.response,
            suggestions=result.suggestions,
        )

    async def submit(self, message_text: str | None = None) -> bool:
        """
        Sends a message (or the current draft) to the assistant.

        Ignored when the text is blank, a request is already in flight, or
        the store is not ready. Otherwise the user turn is appended before
        the first await and exactly one assistant turn follows.

        Args:
            message_text: Text to send; the draft is used when omitted

        Returns:
            True if the message was dispatched
        """
        text = (message_text if message_text is not None else self.draft).strip()
        if not text:
            return False
        if self.in_flight:
            logger.info("submit_ignored", reason="request_in_flight")
            return False
        if not self.store.is_ready:
            logger.info("submit_ignored", reason="store_not_ready")
            return False

        generation = self._generation
        self.transcript.append(ConversationTurn(role="user", content=text))
        self.draft = ""
        self.in_flight = True

        set_conversation_id(self.conversation_id)
        logger.info(
            "turn_submitted",
            page_context=self.page_context.value,
            turn=len(self.transcript),
        )

        try:
            turn = await self._answer(text)
        except Exception as e:
            logger.error("assistant_turn_crashed", exc_info=True, error=str(e))
            turn = ConversationTurn(role="assistant", content=UNEXPECTED_ERROR_MESSAGE)
        finally:
            stale = generation != self._generation
            if not stale:
                self.in_flight = False

        if stale:
            logger.info("stale_reply_discarded", generation=generation)
            return True

        self.transcript.append(turn)
        logger.info(
            "turn_completed",
            turn=len(self.transcript),
            suggestions=len(turn.suggestions or []),
        )
        return True

    async def select_suggestion(self, text: str) -> bool:
        """Sends a suggestion chip exactly as if it had been typed."""
        return await self.submit(text)
