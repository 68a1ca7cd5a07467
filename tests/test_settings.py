import pytest

from strategy_advisor.config.settings import load_config
from strategy_advisor.errors import ConfigError

ENV = {
    "AWS_REGION": "us-west-2",
    "AGENT_RUNTIME_ARN": "arn:aws:bedrock-agentcore:us-west-2:123456789012:runtime/x",
}


def test_loads_from_environment():
    config = load_config(environ=ENV)

    assert config.region == "us-west-2"
    assert config.service == "bedrock-agentcore"
    assert config.hostname == "bedrock-agentcore.us-west-2.amazonaws.com"
    assert config.log_level == "INFO"


def test_missing_required_value():
    with pytest.raises(ConfigError, match="AGENT_RUNTIME_ARN"):
        load_config(environ={"AWS_REGION": "us-east-1"})


def test_yaml_defaults_with_env_override(tmp_path):
    config_file = tmp_path / "advisor.yaml"
    config_file.write_text(
        "aws:\n"
        "  region: eu-west-1\n"
        "agent:\n"
        "  runtime_arn: arn:from:yaml\n"
        "cognito:\n"
        "  user_pool_id: eu-west-1_Pool\n"
        "  user_pool_client_id: client\n"
        "  identity_pool_id: eu-west-1:pool\n"
        "logging:\n"
        "  level: debug\n"
    )

    config = load_config(environ={"ADVISOR_CONFIG_PATH": str(config_file), "AWS_REGION": "eu-central-1"})

    assert config.region == "eu-central-1"
    assert config.agent_runtime_arn == "arn:from:yaml"
    assert config.user_pool_provider == "cognito-idp.eu-central-1.amazonaws.com/eu-west-1_Pool"
    assert config.log_level == "DEBUG"
    config.require_auth_settings()


def test_config_is_immutable():
    config = load_config(environ=ENV)
    with pytest.raises(AttributeError):
        config.region = "us-east-1"
