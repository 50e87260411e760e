import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from assistant_relay.config import logger
from assistant_relay.integration.assistants import AssistantsClient
from assistant_relay.services.errors import (
    ConfigurationError,
    RelayError,
    ReplyExtractionError,
    RunFailedError,
    RunTimeoutError,
)

FAILED_RUN_STATUSES = frozenset({"failed", "cancelled", "expired"})


def fallback_text(support_email: str) -> str:
    return (
        "I apologize, but I'm experiencing technical difficulties. Please try again later "
        f"or contact our support team at {support_email} for immediate assistance."
    )


def internal_error_text(support_email: str) -> str:
    return (
        "I'm sorry, I'm experiencing technical difficulties. Please try again later "
        f"or contact our support team at {support_email} for immediate assistance."
    )


@dataclass
class RelayResult:
    response: str
    error: Optional[str] = None


class AssistantRelay:
    """Relays one user message to a remote assistant and returns its reply.

    Each call creates its own thread and run; nothing is shared between calls
    except the HTTP client.
    """

    def __init__(
        self,
        client: AssistantsClient,
        assistant_id: str,
        fallback_response: str,
        poll_interval: float = 1.0,
        max_attempts: int = 30,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client
        self.assistant_id = assistant_id
        self.fallback_response = fallback_response
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self._sleep = sleep

    # ---------- workflow steps ----------

    async def create_session(self) -> str:
        thread = await self.client.create_thread()
        return thread.id

    async def post_message(self, session_id: str, text: str) -> None:
        await self.client.add_message(session_id, text)

    async def start_run(self, session_id: str) -> str:
        run = await self.client.create_run(session_id, self.assistant_id)
        return run.id

    async def poll_run(self, session_id: str, run_id: str) -> str:
        for attempt in range(1, self.max_attempts + 1):
            await self._sleep(self.poll_interval)
            run = await self.client.retrieve_run(session_id, run_id)
            status = run.status
            logger.debug(f"Run {run_id} poll #{attempt}: status={status}")
            if status == "completed":
                return status
            if status in FAILED_RUN_STATUSES:
                raise RunFailedError(status)
        raise RunTimeoutError(self.max_attempts)

    async def fetch_reply(self, session_id: str) -> str:
        messages = await self.client.list_messages(session_id)
        assistant_messages = [m for m in messages if m.role == "assistant"]
        if not assistant_messages:
            raise ReplyExtractionError("No assistant response found")

        # newest first
        content = assistant_messages[0].content
        if not content or content[0].type != "text":
            raise ReplyExtractionError("Unexpected message content type")
        return content[0].text.value

    # ---------- public API ----------

    def _check_configured(self) -> None:
        if not self.client.api_key or not self.assistant_id:
            raise ConfigurationError("OpenAI API key or Assistant ID not configured")

    async def relay(self, message: str) -> RelayResult:
        logger.info(f"AssistantRelay.relay message_len={len(message)}")
        try:
            self._check_configured()
            session_id = await self.create_session()
            await self.post_message(session_id, message)
            run_id = await self.start_run(session_id)
            logger.info(f"Run started: thread={session_id} run={run_id}")
            await self.poll_run(session_id, run_id)
            reply = await self.fetch_reply(session_id)
        except RelayError as e:
            logger.warning(f"Relay failed: {e.message}")
            return RelayResult(response=self.fallback_response, error=e.message)
        except Exception as e:
            logger.exception("Relay failed with unexpected error")
            return RelayResult(response=self.fallback_response, error=str(e) or "Unknown error")

        logger.info(f"Relay completed: thread={session_id} reply_len={len(reply)}")
        return RelayResult(response=reply)
