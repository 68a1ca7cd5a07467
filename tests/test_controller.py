from unittest.mock import MagicMock

import pytest

from strategy_advisor.agent.prompts import LifeStage
from strategy_advisor.agent.runtime_client import AgentRuntimeClient
from strategy_advisor.agent.signer import RequestSigner
from strategy_advisor.controller import (
    CONNECTING_TEXT,
    EMPTY_RESPONSE_TEXT,
    DisplayState,
    Phase,
    ViewController,
)
from strategy_advisor.errors import MissingCredentials
from tests.conftest import DummyResponse, DummySession


@pytest.fixture
def provider(credentials):
    provider = MagicMock()
    provider.get_credentials.return_value = credentials
    return provider


def make_controller(config, provider, response):
    client = AgentRuntimeClient(RequestSigner(config), session=DummySession(response))
    return ViewController(provider, client)


def test_initial_state_is_idle():
    state = DisplayState()
    assert state.phase is Phase.IDLE
    assert state.loading is False
    assert state.response_text == ""


def test_success_displays_unwrapped_content(config, provider):
    controller = make_controller(
        config, provider, DummyResponse(chunks=[b'{"content":"Buy index funds."}'])
    )
    seen = []

    state = controller.invoke(on_update=lambda text: seen.append((controller.state.phase, text)))

    assert state.phase is Phase.RESULT
    assert state.loading is False
    assert state.response_text == "Buy index funds."
    assert seen[0] == (Phase.LOADING, CONNECTING_TEXT)
    assert seen[-1] == (Phase.RESULT, "Buy index funds.")
    provider.get_credentials.assert_called_once_with(force_refresh=True)


def test_partial_updates_shown_while_loading(config, provider):
    controller = make_controller(
        config, provider, DummyResponse(chunks=[b"Start early.", b" Automate savings."])
    )
    seen = []

    controller.invoke(on_update=lambda text: seen.append((controller.state.phase, text)))

    assert (Phase.LOADING, "Start early.") in seen
    assert controller.state.response_text == "Start early. Automate savings."


def test_empty_response_placeholder(config, provider):
    controller = make_controller(config, provider, DummyResponse(chunks=[]))

    state = controller.invoke()

    assert state.phase is Phase.RESULT
    assert state.response_text == EMPTY_RESPONSE_TEXT


def test_http_403_end_to_end(config, provider):
    controller = make_controller(config, provider, DummyResponse(status_code=403, text="Forbidden"))

    state = controller.invoke()

    assert state.phase is Phase.ERROR
    assert state.response_text == "Error: HTTP 403: Forbidden"


def test_credential_failure_is_displayed(config):
    provider = MagicMock()
    provider.get_credentials.side_effect = MissingCredentials()
    session = DummySession(DummyResponse())
    controller = ViewController(provider, AgentRuntimeClient(RequestSigner(config), session=session))

    state = controller.invoke()

    assert state.response_text == "Error: No AWS credentials received from Cognito."
    assert session.calls == []


def test_error_without_message_uses_default(provider):
    client = MagicMock()
    client.invoke.side_effect = RuntimeError()
    controller = ViewController(provider, client)

    assert controller.invoke().response_text == "Error: Failed to reach agent."


def test_reinvoke_after_error(config, provider):
    client = MagicMock()
    client.invoke.side_effect = [RuntimeError("boom"), "Rebalance annually."]
    controller = ViewController(provider, client, life_stage=LifeStage.RETIREMENT)

    assert controller.invoke().phase is Phase.ERROR
    state = controller.invoke()

    assert state.phase is Phase.RESULT
    assert state.response_text == "Rebalance annually."
    assert client.invoke.call_args[0][1] is LifeStage.RETIREMENT
    assert provider.get_credentials.call_count == 2


def test_select_life_stage(provider):
    controller = ViewController(provider, MagicMock())

    state = controller.select_life_stage("older")

    assert state.life_stage is LifeStage.OLDER
    with pytest.raises(ValueError):
        controller.select_life_stage("unknown")
