"""
SigV4 request signing for the Bedrock AgentCore invocation endpoint.

The signing algorithm itself is botocore's SigV4Auth; this module only builds
the request it signs and copies the resulting headers back out.
"""

import json
import logging
from typing import Any, Dict
from urllib.parse import quote

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from strategy_advisor.agent.models import InvocationRequest, SessionCredentials, SignedRequest
from strategy_advisor.config.settings import AdvisorConfig
from strategy_advisor.errors import MissingCredentials

logger = logging.getLogger(__name__)


def invocation_path(runtime_arn: str) -> str:
    """Path for a runtime ARN, with every reserved character percent-encoded."""
    return f"/runtimes/{quote(runtime_arn, safe='')}/invocations"


class RequestSigner:
    """Builds and signs invocation requests for one configured runtime."""

    def __init__(self, config: AdvisorConfig):
        """
        Args:
            config: Region, service name and runtime ARN to target
        """
        self.config = config
        self.hostname = config.hostname
        self.path = invocation_path(config.agent_runtime_arn)

    def build_request(self, payload: Dict[str, Any]) -> InvocationRequest:
        """Serialize the payload into an unsigned POST."""
        body = json.dumps(payload, separators=(',', ':')).encode('utf-8')
        return InvocationRequest(
            host=self.hostname,
            path=self.path,
            headers={
                'Content-Type': 'application/json',
                'Host': self.hostname,
            },
            body=body,
        )

    def sign(self, credentials: SessionCredentials, payload: Dict[str, Any]) -> SignedRequest:
        """
        Build and sign a request for the payload.

        Args:
            credentials: Temporary credentials for the signed-in user
            payload: JSON-serializable request body

        Returns:
            SignedRequest with Authorization, X-Amz-Date and (when present)
            X-Amz-Security-Token added to the original headers

        Raises:
            MissingCredentials: no access key id to sign with
        """
        if credentials is None or not credentials.access_key_id:
            raise MissingCredentials()

        request = self.build_request(payload)
        return self.sign_request(credentials, request)

    def sign_request(self, credentials: SessionCredentials, request: InvocationRequest) -> SignedRequest:
        if credentials is None or not credentials.access_key_id:
            raise MissingCredentials()

        aws_request = AWSRequest(
            method=request.method,
            url=request.url,
            data=request.body,
            headers=dict(request.headers),
        )
        signer = SigV4Auth(
            Credentials(
                access_key=credentials.access_key_id,
                secret_key=credentials.secret_key,
                token=credentials.session_token,
            ),
            self.config.service,
            self.config.region,
        )
        signer.add_auth(aws_request)

        logger.debug(f"Signed {request.method} {request.path} for {self.config.service}/{self.config.region}")
        return SignedRequest(request=request, headers=dict(aws_request.headers.items()))
