# views/advisor.py
import html

import streamlit as st

from strategy_advisor.agent.prompts import LifeStage
from strategy_advisor.agent.stream import clean_chunk
from strategy_advisor.views.auth import latest_session


def clean_display_text(text: str) -> str:
    """Last pass over streaming artifacts before rendering."""
    return clean_chunk(text or "").strip()


def render_response(placeholder, text: str):
    if not text:
        placeholder.empty()
        return

    # One line, newlines encoded: a blank line would end the HTML block
    body = html.escape(clean_display_text(text)).replace("\n", "&#10;")
    placeholder.markdown(
        '<div class="response-panel"><h3>Recommended Strategies</h3>'
        f"<pre>{body}</pre></div>",
        unsafe_allow_html=True,
    )


def _request_strategies():
    st.session_state.invoke_requested = True


def render_advisor(controller):
    st.markdown('<div class="page-title">Investment Strategy Advisor</div>', unsafe_allow_html=True)
    st.markdown('<div class="page-subtitle">Powered by Magic?</div>', unsafe_allow_html=True)

    requested = st.session_state.pop("invoke_requested", False)
    busy = requested or controller.state.loading

    stages = list(LifeStage)
    col_select, col_button = st.columns([3, 1])

    with col_select:
        selected = st.selectbox(
            "Your Life Stage:",
            stages,
            index=stages.index(controller.state.life_stage),
            format_func=lambda stage: stage.label,
            disabled=busy,
        )
        if not busy and selected != controller.state.life_stage:
            controller.select_life_stage(selected)

    with col_button:
        st.write("")
        st.button(
            "Thinking..." if busy else "Get Strategies",
            key="get_strategies",
            disabled=busy,
            on_click=_request_strategies,
        )

    panel = st.empty()

    if requested:
        controller.invoke(on_update=lambda text: render_response(panel, text))
        # Keep the refreshed tokens for sign-out
        st.session_state.auth_session = latest_session(st.session_state)
        st.rerun()
    else:
        render_response(panel, controller.state.response_text)

    st.markdown(
        '<div class="disclaimer"><em>Disclaimer: General educational information only. '
        'Consult a professional advisor.</em></div>',
        unsafe_allow_html=True,
    )
