# app.py
import logging

import streamlit as st

from strategy_advisor import APP_TITLE
from strategy_advisor.agent.runtime_client import AgentRuntimeClient
from strategy_advisor.agent.signer import RequestSigner
from strategy_advisor.auth.cognito import CognitoAuthenticator, CognitoCredentialProvider
from strategy_advisor.config.settings import load_config
from strategy_advisor.controller import ViewController
from strategy_advisor.errors import ConfigError
from strategy_advisor.views.advisor import render_advisor
from strategy_advisor.views.auth import render_auth, render_user_bar
from strategy_advisor.utils.styles import inject_global_css

st.set_page_config(
    page_title=APP_TITLE,
    page_icon="📈",
    layout="centered",
)

logger = logging.getLogger(__name__)


@st.cache_resource
def get_config():
    config = load_config()
    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))
    logger.info(f"Advisor configured for region {config.region}")
    return config


@st.cache_resource
def get_authenticator(_config):
    return CognitoAuthenticator(_config)


def get_controller(config, authenticator):
    # One controller per signed-in browser session
    if "controller" not in st.session_state:
        provider = CognitoCredentialProvider(authenticator, st.session_state.auth_session)
        client = AgentRuntimeClient(RequestSigner(config))
        st.session_state.controller = ViewController(provider, client)
    return st.session_state.controller


def main():
    inject_global_css()

    try:
        config = get_config()
        authenticator = get_authenticator(config)
    except ConfigError as exc:
        st.error(f"Configuration error: {exc}")
        st.stop()

    if st.session_state.get("auth_session") is None:
        render_auth(authenticator)
        return

    render_user_bar(authenticator)
    render_advisor(get_controller(config, authenticator))


main()
