"""
Agent invocation: prompt building, request signing, streaming and unwrapping.
"""

from strategy_advisor.agent.models import InvocationRequest, SessionCredentials, SignedRequest
from strategy_advisor.agent.prompts import LifeStage, build_payload, build_prompt
from strategy_advisor.agent.runtime_client import AgentRuntimeClient
from strategy_advisor.agent.signer import RequestSigner
from strategy_advisor.agent.stream import StreamAssembler, assemble_stream
from strategy_advisor.agent.unwrap import unwrap_response

__all__ = [
    'AgentRuntimeClient',
    'InvocationRequest',
    'LifeStage',
    'RequestSigner',
    'SessionCredentials',
    'SignedRequest',
    'StreamAssembler',
    'assemble_stream',
    'build_payload',
    'build_prompt',
    'unwrap_response',
]
