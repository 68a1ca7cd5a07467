"""
Request and credential models for agent invocation.

Design: frozen dataclasses so a request cannot change once it is built or signed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class SessionCredentials:
    """
    Temporary AWS credentials vended for the signed-in user.

    Only held in memory for one invocation; secret and token stay out of repr.
    """
    access_key_id: str
    secret_key: str = field(repr=False)
    session_token: Optional[str] = field(default=None, repr=False)
    expiration: Optional[datetime] = None


@dataclass(frozen=True)
class InvocationRequest:
    """Unsigned POST to the agent runtime."""
    host: str
    path: str
    headers: Mapping[str, str]
    body: bytes
    method: str = "POST"

    def __post_init__(self):
        object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))

    @property
    def url(self) -> str:
        return f"https://{self.host}{self.path}"


@dataclass(frozen=True)
class SignedRequest:
    """An InvocationRequest plus the headers produced by signing."""
    request: InvocationRequest
    headers: Mapping[str, str]

    def __post_init__(self):
        object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def url(self) -> str:
        return self.request.url

    @property
    def body(self) -> bytes:
        return self.request.body
