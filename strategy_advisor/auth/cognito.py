"""
Amazon Cognito sign-in and temporary credential vending.

User pool  (cognito-idp)      -> ID / access / refresh tokens for the user
Identity pool (cognito-identity) -> short-lived AWS credentials for those tokens

Usage:
    authenticator = CognitoAuthenticator(config)
    session = authenticator.sign_in("jane", "secret")
    provider = CognitoCredentialProvider(authenticator, session)
    creds = provider.get_credentials(force_refresh=True)
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from strategy_advisor.agent.models import SessionCredentials
from strategy_advisor.config.settings import AdvisorConfig
from strategy_advisor.errors import AuthenticationError, MissingCredentials, NetworkError

logger = logging.getLogger(__name__)

# Refresh tokens this long before they actually expire
EXPIRY_SKEW = timedelta(seconds=60)


@dataclass
class AuthSession:
    """Tokens for a signed-in user pool principal."""
    username: str
    id_token: str = field(repr=False)
    access_token: str = field(repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)
    expires_at: Optional[datetime] = None
    identity_id: Optional[str] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at - EXPIRY_SKEW


def _client_error_message(error: ClientError) -> str:
    err = error.response.get('Error', {})
    return err.get('Message') or err.get('Code') or str(error)


class CognitoAuthenticator:
    """Wrapper for the Cognito user pool and identity pool APIs"""

    def __init__(self, config: AdvisorConfig, idp_client=None, identity_client=None):
        """
        Args:
            config: Advisor configuration with the Cognito identifiers
            idp_client: Optional pre-built cognito-idp client
            identity_client: Optional pre-built cognito-identity client
        """
        config.require_auth_settings()
        self.config = config
        self.idp_client = idp_client or boto3.client('cognito-idp', region_name=config.region)
        self.identity_client = identity_client or boto3.client('cognito-identity', region_name=config.region)

    # ========== User pool ==========

    def sign_in(self, username: str, password: str) -> AuthSession:
        """
        Authenticate with username and password.

        Raises:
            AuthenticationError: rejected credentials or an unsupported challenge
        """
        try:
            response = self.idp_client.initiate_auth(
                AuthFlow='USER_PASSWORD_AUTH',
                ClientId=self.config.user_pool_client_id,
                AuthParameters={'USERNAME': username, 'PASSWORD': password},
            )
        except ClientError as e:
            logger.warning(f"Sign-in rejected for {username}: {e.response.get('Error', {}).get('Code')}")
            raise AuthenticationError(_client_error_message(e)) from e
        except BotoCoreError as e:
            raise AuthenticationError(str(e)) from e

        if 'ChallengeName' in response:
            raise AuthenticationError(
                f"Sign-in requires an unsupported challenge: {response['ChallengeName']}"
            )

        session = self._session_from_result(username, response['AuthenticationResult'])
        logger.info(f"✅ Signed in {username}")
        return session

    def refresh(self, session: AuthSession) -> AuthSession:
        """Exchange the refresh token for new ID and access tokens."""
        if not session.refresh_token:
            raise AuthenticationError("Session expired; please sign in again.")

        try:
            response = self.idp_client.initiate_auth(
                AuthFlow='REFRESH_TOKEN_AUTH',
                ClientId=self.config.user_pool_client_id,
                AuthParameters={'REFRESH_TOKEN': session.refresh_token},
            )
        except ClientError as e:
            raise AuthenticationError(_client_error_message(e)) from e
        except BotoCoreError as e:
            raise AuthenticationError(str(e)) from e

        refreshed = self._session_from_result(session.username, response['AuthenticationResult'])
        # Cognito does not rotate the refresh token on REFRESH_TOKEN_AUTH
        return replace(
            refreshed,
            refresh_token=refreshed.refresh_token or session.refresh_token,
            identity_id=session.identity_id,
        )

    def sign_up(self, username: str, password: str, email: str) -> bool:
        """
        Register a new user.

        Returns:
            True if the account is already confirmed, False if a code was sent
        """
        try:
            response = self.idp_client.sign_up(
                ClientId=self.config.user_pool_client_id,
                Username=username,
                Password=password,
                UserAttributes=[{'Name': 'email', 'Value': email}],
            )
        except ClientError as e:
            raise AuthenticationError(_client_error_message(e)) from e
        except BotoCoreError as e:
            raise AuthenticationError(str(e)) from e

        logger.info(f"Registered {username}")
        return bool(response.get('UserConfirmed'))

    def confirm_sign_up(self, username: str, code: str) -> None:
        try:
            self.idp_client.confirm_sign_up(
                ClientId=self.config.user_pool_client_id,
                Username=username,
                ConfirmationCode=code,
            )
        except ClientError as e:
            raise AuthenticationError(_client_error_message(e)) from e
        except BotoCoreError as e:
            raise AuthenticationError(str(e)) from e

    def sign_out(self, session: AuthSession) -> None:
        """Revoke the user's tokens. The caller drops its session either way."""
        try:
            self.idp_client.global_sign_out(AccessToken=session.access_token)
            logger.info(f"Signed out {session.username}")
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Global sign-out failed for {session.username}: {e}")

    # ========== Identity pool ==========

    def get_identity_id(self, session: AuthSession) -> str:
        response = self.identity_client.get_id(
            IdentityPoolId=self.config.identity_pool_id,
            Logins=self._logins(session),
        )
        return response['IdentityId']

    def get_credentials(self, session: AuthSession) -> SessionCredentials:
        """
        Vend temporary AWS credentials for a signed-in session.

        Raises:
            MissingCredentials: the identity pool returned no access key
            NetworkError: the identity pool could not be reached
        """
        try:
            if not session.identity_id:
                session.identity_id = self.get_identity_id(session)

            response = self.identity_client.get_credentials_for_identity(
                IdentityId=session.identity_id,
                Logins=self._logins(session),
            )
        except ClientError as e:
            raise MissingCredentials(
                f"No AWS credentials received from Cognito: {_client_error_message(e)}"
            ) from e
        except BotoCoreError as e:
            raise NetworkError(f"Failed to reach Cognito identity pool: {e}") from e

        creds = response.get('Credentials') or {}
        if not creds.get('AccessKeyId'):
            raise MissingCredentials()

        return SessionCredentials(
            access_key_id=creds['AccessKeyId'],
            secret_key=creds.get('SecretKey', ''),
            session_token=creds.get('SessionToken'),
            expiration=creds.get('Expiration'),
        )

    # ========== Helpers ==========

    def _logins(self, session: AuthSession):
        return {self.config.user_pool_provider: session.id_token}

    @staticmethod
    def _session_from_result(username: str, result) -> AuthSession:
        expires_in = result.get('ExpiresIn')
        expires_at = None
        if expires_in:
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=int(expires_in))
        return AuthSession(
            username=username,
            id_token=result['IdToken'],
            access_token=result['AccessToken'],
            refresh_token=result.get('RefreshToken'),
            expires_at=expires_at,
        )


class CognitoCredentialProvider:
    """
    Credential provider bound to one signed-in session.

    Credentials are fetched from the identity pool on every call and never
    cached; force_refresh additionally renews the user pool tokens first.
    """

    def __init__(self, authenticator: CognitoAuthenticator, session: Optional[AuthSession]):
        self.authenticator = authenticator
        self.session = session

    def get_credentials(self, force_refresh: bool = False) -> SessionCredentials:
        if self.session is None:
            raise MissingCredentials("Not signed in.")

        if self.session.refresh_token and (force_refresh or self.session.is_expired()):
            self.session = self.authenticator.refresh(self.session)

        return self.authenticator.get_credentials(self.session)
