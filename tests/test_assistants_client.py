import asyncio

import httpx
import pytest

from assistant_relay.integration.assistants import AssistantsClient
from assistant_relay.services.errors import RemoteServiceError


def make_client(handler):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AssistantsClient(
        api_key="sk-test",
        base_url="https://api.example.test/v1",
        timeout=5.0,
        http_client=http_client,
    )


def test_create_thread_sends_auth_and_beta_header():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json={"id": "thread_abc", "object": "thread", "created_at": 0, "metadata": {}})

    thread = asyncio.run(make_client(handler).create_thread())

    assert thread.id == "thread_abc"
    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/v1/threads"
    assert seen[0].headers["authorization"] == "Bearer sk-test"
    assert seen[0].headers["openai-beta"] == "assistants=v2"


def test_create_run_passes_assistant_id():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(
            200,
            json={"id": "run_1", "object": "thread.run", "thread_id": "thread_abc", "status": "queued"},
        )

    run = asyncio.run(make_client(handler).create_run("thread_abc", "asst_1"))

    assert run.id == "run_1"
    assert seen[0].url.path == "/v1/threads/thread_abc/runs"
    assert b'"assistant_id":"asst_1"' in seen[0].content.replace(b" ", b"")


def test_status_error_is_not_retried_and_carries_status_text():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(401, json={"error": {"message": "bad key", "type": "invalid_request_error"}})

    with pytest.raises(RemoteServiceError) as exc_info:
        asyncio.run(make_client(handler).create_thread())

    assert exc_info.value.message == "Failed to create thread: Unauthorized"
    assert exc_info.value.http_status == 401
    assert len(seen) == 1


def test_transport_error_is_remote_service_error():
    def handler(request: httpx.Request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteServiceError) as exc_info:
        asyncio.run(make_client(handler).retrieve_run("thread_abc", "run_1"))

    assert exc_info.value.message.startswith("Failed to check run status:")
    assert exc_info.value.http_status is None


def test_list_messages_returns_newest_first_page():
    def handler(request: httpx.Request):
        assert request.url.path == "/v1/threads/thread_abc/messages"
        return httpx.Response(
            200,
            json={
                "object": "list",
                "data": [
                    {
                        "id": "msg_2",
                        "object": "thread.message",
                        "thread_id": "thread_abc",
                        "role": "assistant",
                        "content": [{"type": "text", "text": {"value": "Hi!", "annotations": []}}],
                    },
                    {
                        "id": "msg_1",
                        "object": "thread.message",
                        "thread_id": "thread_abc",
                        "role": "user",
                        "content": [{"type": "text", "text": {"value": "hello", "annotations": []}}],
                    },
                ],
                "first_id": "msg_2",
                "last_id": "msg_1",
                "has_more": False,
            },
        )

    messages = asyncio.run(make_client(handler).list_messages("thread_abc"))

    assert [m.id for m in messages] == ["msg_2", "msg_1"]
    assert messages[0].role == "assistant"
    assert messages[0].content[0].text.value == "Hi!"


def test_client_is_built_lazily():
    client = AssistantsClient(api_key="", base_url=None, timeout=1.0)
    assert client._client is None


def test_list_messages_not_found():
    def handler(request: httpx.Request):
        assert request.method == "GET"
        return httpx.Response(404, json={"error": {"message": "No thread found", "type": "invalid_request_error"}})

    with pytest.raises(RemoteServiceError) as exc_info:
        asyncio.run(make_client(handler).list_messages("thread_missing"))

    assert exc_info.value.message == "Failed to get messages: Not Found"
    assert exc_info.value.http_status == 404
