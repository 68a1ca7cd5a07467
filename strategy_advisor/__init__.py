"""
Investment Strategy Advisor
Streamlit client for life-stage investment advice served by a Bedrock AgentCore runtime.
"""

__version__ = "0.1.0"

APP_TITLE = "Investment Strategy Advisor"

__all__ = ['__version__', 'APP_TITLE']
