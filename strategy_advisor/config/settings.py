"""
Configuration management for the Investment Strategy Advisor.

Values come from three layers, lowest priority first:
    1. Built-in defaults (service name, domain suffix, log level)
    2. Optional YAML file pointed to by ADVISOR_CONFIG_PATH
    3. Environment variables (a local .env is loaded first)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from strategy_advisor.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_SERVICE = "bedrock-agentcore"
DEFAULT_DOMAIN_SUFFIX = "amazonaws.com"
DEFAULT_LOG_LEVEL = "INFO"

# field name -> (environment variable, yaml section, yaml key)
_SOURCES = {
    'region': ('AWS_REGION', 'aws', 'region'),
    'domain_suffix': ('AWS_DOMAIN_SUFFIX', 'aws', 'domain_suffix'),
    'agent_runtime_arn': ('AGENT_RUNTIME_ARN', 'agent', 'runtime_arn'),
    'service': ('AGENT_SERVICE_NAME', 'agent', 'service'),
    'user_pool_id': ('COGNITO_USER_POOL_ID', 'cognito', 'user_pool_id'),
    'user_pool_client_id': ('COGNITO_USER_POOL_CLIENT_ID', 'cognito', 'user_pool_client_id'),
    'identity_pool_id': ('COGNITO_IDENTITY_POOL_ID', 'cognito', 'identity_pool_id'),
    'log_level': ('LOG_LEVEL', 'logging', 'level'),
}

_REQUIRED = ('region', 'agent_runtime_arn')


@dataclass(frozen=True)
class AdvisorConfig:
    """Immutable settings handed to the signer and the Cognito clients."""
    region: str
    agent_runtime_arn: str
    user_pool_id: Optional[str] = None
    user_pool_client_id: Optional[str] = None
    identity_pool_id: Optional[str] = None
    service: str = DEFAULT_SERVICE
    domain_suffix: str = DEFAULT_DOMAIN_SUFFIX
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def hostname(self) -> str:
        """Agent runtime endpoint host, e.g. bedrock-agentcore.us-east-1.amazonaws.com"""
        return f"{self.service}.{self.region}.{self.domain_suffix}"

    @property
    def user_pool_provider(self) -> str:
        """Login provider key used by the identity pool for this user pool"""
        return f"cognito-idp.{self.region}.{self.domain_suffix}/{self.user_pool_id}"

    def require_auth_settings(self) -> None:
        """Raise ConfigError unless every Cognito identifier is present."""
        for name in ('user_pool_id', 'user_pool_client_id', 'identity_pool_id'):
            if not getattr(self, name):
                raise ConfigError(f"Missing configuration value: {_SOURCES[name][0]}")


def load_yaml_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML file"""
    if config_file and Path(config_file).exists():
        with open(config_file, 'r') as f:
            return yaml.safe_load(f) or {}
    return {}


def load_config(
    config_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    use_dotenv: bool = True,
) -> AdvisorConfig:
    """
    Build an AdvisorConfig from defaults, YAML and the environment.

    Args:
        config_file: YAML path (defaults to $ADVISOR_CONFIG_PATH)
        environ: Mapping to read variables from (defaults to os.environ)
        use_dotenv: Load a .env file into os.environ first

    Returns:
        AdvisorConfig

    Raises:
        ConfigError: region or agent runtime ARN is missing
    """
    if use_dotenv and environ is None:
        load_dotenv()
    env = os.environ if environ is None else environ

    config_file = config_file or env.get('ADVISOR_CONFIG_PATH')
    file_cfg = load_yaml_config(config_file)
    if file_cfg:
        logger.info(f"Loaded settings from {config_file}")

    values: Dict[str, Any] = {}
    for field_name, (env_var, section, key) in _SOURCES.items():
        value = env.get(env_var)
        if not value:
            value = (file_cfg.get(section) or {}).get(key)
        if value:
            values[field_name] = str(value).strip()

    for field_name in _REQUIRED:
        if not values.get(field_name):
            raise ConfigError(f"Missing configuration value: {_SOURCES[field_name][0]}")

    values['log_level'] = values.get('log_level', DEFAULT_LOG_LEVEL).upper()
    return AdvisorConfig(**values)
