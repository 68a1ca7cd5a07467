import pytest

from strategy_advisor.agent.models import SessionCredentials
from strategy_advisor.config.settings import AdvisorConfig

RUNTIME_ARN = "arn:aws:bedrock-agentcore:us-east-1:123456789012:runtime/advisor-abc123"


@pytest.fixture
def config():
    return AdvisorConfig(
        region="us-east-1",
        agent_runtime_arn=RUNTIME_ARN,
        user_pool_id="us-east-1_TestPool",
        user_pool_client_id="test-client-id",
        identity_pool_id="us-east-1:00000000-0000-0000-0000-000000000000",
    )


@pytest.fixture
def credentials():
    return SessionCredentials(
        access_key_id="AKIDEXAMPLE",
        secret_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
        session_token="session-token-example",
    )


# using dummy response instead of real network calls
class DummyResponse:
    def __init__(self, status_code=200, chunks=(), text="", raw=object(), error=None):
        self.status_code = status_code
        self.chunks = list(chunks)
        self.text = text
        self.raw = raw
        self.error = error
        self.closed = False

    def iter_content(self, chunk_size=None):
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error

    def close(self):
        self.closed = True


class DummySession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, headers=None, data=None, stream=False, **kwargs):
        self.calls.append({"url": url, "headers": headers, "data": data, "stream": stream})
        if self.error is not None:
            raise self.error
        return self.response
