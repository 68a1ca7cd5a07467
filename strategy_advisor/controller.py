"""
View controller for the advisor page.

Owns the display state and runs the invocation pipeline:
    credentials (forced refresh) -> sign -> send -> stream -> unwrap

Phases:
    IDLE -> LOADING             user triggers an invocation
    LOADING -> RESULT | ERROR   pipeline finishes or fails
    RESULT | ERROR -> LOADING   user triggers again
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

from strategy_advisor.agent.prompts import LifeStage
from strategy_advisor.agent.unwrap import unwrap_response

logger = logging.getLogger(__name__)

CONNECTING_TEXT = "Connecting to your AI advisor..."
EMPTY_RESPONSE_TEXT = "Received empty response."
DEFAULT_ERROR_TEXT = "Failed to reach agent."
ERROR_PREFIX = "Error: "


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULT = "displaying-result"
    ERROR = "displaying-error"


@dataclass(frozen=True)
class DisplayState:
    life_stage: LifeStage = LifeStage.YOUNG
    phase: Phase = Phase.IDLE
    response_text: str = ""

    @property
    def loading(self) -> bool:
        return self.phase is Phase.LOADING


class ViewController:
    """Sequences one invocation per user action and records what to display."""

    def __init__(self, credential_provider, runtime_client, life_stage: LifeStage = LifeStage.YOUNG):
        """
        Args:
            credential_provider: Object with get_credentials(force_refresh) -> SessionCredentials
            runtime_client: AgentRuntimeClient (or anything with the same invoke signature)
            life_stage: Initially selected life stage
        """
        self.credential_provider = credential_provider
        self.runtime_client = runtime_client
        self.state = DisplayState(life_stage=LifeStage(life_stage))

    def select_life_stage(self, life_stage: LifeStage) -> DisplayState:
        if self.state.loading:
            raise RuntimeError("Cannot change life stage while a request is in flight")
        self.state = replace(self.state, life_stage=LifeStage(life_stage))
        return self.state

    def invoke(self, on_update: Optional[Callable[[str], None]] = None) -> DisplayState:
        """
        Run the full pipeline for the selected life stage.

        Never raises: failures become an ERROR state with an 'Error: ...' text.

        Args:
            on_update: Receives every intermediate display text, including the
                connecting placeholder and partial streamed text

        Returns:
            The terminal DisplayState (RESULT or ERROR)
        """
        def show(phase: Phase, text: str) -> None:
            self.state = replace(self.state, phase=phase, response_text=text)
            if on_update is not None:
                on_update(text)

        show(Phase.LOADING, CONNECTING_TEXT)

        try:
            credentials = self.credential_provider.get_credentials(force_refresh=True)
            full_text = self.runtime_client.invoke(
                credentials,
                self.state.life_stage,
                on_update=lambda partial: show(Phase.LOADING, partial),
            )
            content = unwrap_response(full_text)
            show(Phase.RESULT, content or EMPTY_RESPONSE_TEXT)
        except Exception as e:
            logger.exception(f"Invocation failed: {e}")
            show(Phase.ERROR, f"{ERROR_PREFIX}{str(e) or DEFAULT_ERROR_TEXT}")

        return self.state
