"""
HTTP client for invoking a Bedrock AgentCore runtime with a signed request.
"""

import logging
from typing import Callable, Optional

import requests

from strategy_advisor.agent.models import SessionCredentials, SignedRequest
from strategy_advisor.agent.prompts import LifeStage, build_payload
from strategy_advisor.agent.signer import RequestSigner
from strategy_advisor.agent.stream import StreamAssembler
from strategy_advisor.errors import HttpError, NetworkError, StreamReadError

logger = logging.getLogger(__name__)


class AgentRuntimeClient:
    """Signs, sends and streams one invocation at a time."""

    def __init__(self, signer: RequestSigner, session: Optional[requests.Session] = None):
        """
        Args:
            signer: Request signer bound to the target runtime
            session: requests session (a new one is created if omitted)
        """
        self.signer = signer
        self.session = session or requests.Session()

    def invoke(
        self,
        credentials: SessionCredentials,
        life_stage: LifeStage,
        on_update: Optional[Callable[[str], None]] = None,
    ) -> str:
        """
        Ask the agent for strategies for a life stage.

        Args:
            credentials: Fresh temporary credentials
            life_stage: Selected life stage
            on_update: Receives the partial text after every flush

        Returns:
            Full trimmed response text (not yet unwrapped)

        Raises:
            MissingCredentials, NetworkError, HttpError, StreamReadError
        """
        signed = self.signer.sign(credentials, build_payload(life_stage))
        return self.send(signed, on_update=on_update)

    def send(self, signed: SignedRequest, on_update: Optional[Callable[[str], None]] = None) -> str:
        """POST a signed request and assemble the streamed body."""
        logger.info(f"Invoking agent runtime at {signed.request.host}")

        try:
            # No explicit timeout: the transport default applies
            response = self.session.post(
                signed.url,
                headers=dict(signed.headers),
                data=signed.body,
                stream=True,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ Failed to reach agent runtime: {e}")
            raise NetworkError(str(e) or "Failed to reach agent.") from e

        try:
            if not 200 <= response.status_code < 300:
                error_text = response.text
                logger.error(f"❌ Agent runtime returned HTTP {response.status_code}")
                raise HttpError(response.status_code, error_text)

            if response.raw is None:
                raise StreamReadError("No response body")

            assembler = StreamAssembler(on_update=on_update)
            try:
                for chunk in response.iter_content(chunk_size=None):
                    if chunk:
                        assembler.feed(chunk)
            except (requests.exceptions.RequestException, OSError) as e:
                raise StreamReadError(f"Failed to read response body: {e}") from e

            text = assembler.finish()
            logger.info(f"✅ Received {len(text)} characters in {assembler.flush_count} updates")
            return text
        finally:
            response.close()
