import pytest

from assistant_relay.services.relay import AssistantRelay
from tests.fakes import FALLBACK, FakeAssistantsClient


class SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def make_relay(sleeper):
    def _make(client=None, assistant_id="asst_1", max_attempts=30):
        client = client or FakeAssistantsClient()
        return AssistantRelay(
            client=client,
            assistant_id=assistant_id,
            fallback_response=FALLBACK,
            poll_interval=1.0,
            max_attempts=max_attempts,
            sleep=sleeper,
        )

    return _make
