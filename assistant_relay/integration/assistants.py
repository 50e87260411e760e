"""OpenAI Assistants API (v2 beta) client integration."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

import openai
from openai import AsyncOpenAI

from assistant_relay.config import logger, settings
from assistant_relay.services.errors import RemoteServiceError

ASSISTANTS_BETA_HEADER = {"OpenAI-Beta": "assistants=v2"}


class AssistantsClient:
    """Thin async wrapper over threads / messages / runs.

    Every call goes out once (``max_retries=0``); any SDK or transport failure
    is re-raised as ``RemoteServiceError`` with the remote status text.
    """

    def __init__(
        self,
        api_key: str = settings.openai_api_key,
        base_url: Optional[str] = settings.openai_base_url,
        timeout: float = settings.http_timeout,
        http_client: Any = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._http_client = http_client
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        # built on first use so a missing key is reported by the relay, not at startup
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
                default_headers=ASSISTANTS_BETA_HEADER,
                http_client=self._http_client,
            )
        return self._client

    async def _call(self, action: str, request: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return await request()
        except openai.APIStatusError as e:
            status_text = e.response.reason_phrase or str(e.status_code)
            logger.debug(f"{action}: HTTP {e.status_code} {status_text}")
            raise RemoteServiceError(f"{action}: {status_text}", http_status=e.status_code) from e
        except openai.APIError as e:
            logger.debug(f"{action}: {e!r}")
            raise RemoteServiceError(f"{action}: {e}") from e

    async def create_thread(self):
        return await self._call("Failed to create thread", lambda: self.client.beta.threads.create())

    async def add_message(self, thread_id: str, content: str):
        return await self._call(
            "Failed to add message",
            lambda: self.client.beta.threads.messages.create(thread_id, role="user", content=content),
        )

    async def create_run(self, thread_id: str, assistant_id: str):
        return await self._call(
            "Failed to create run",
            lambda: self.client.beta.threads.runs.create(thread_id, assistant_id=assistant_id),
        )

    async def retrieve_run(self, thread_id: str, run_id: str):
        return await self._call(
            "Failed to check run status",
            lambda: self.client.beta.threads.runs.retrieve(run_id, thread_id=thread_id),
        )

    async def list_messages(self, thread_id: str):
        """Messages of a thread, newest first (the API default order)."""
        page = await self._call(
            "Failed to get messages",
            lambda: self.client.beta.threads.messages.list(thread_id),
        )
        return list(page.data)
