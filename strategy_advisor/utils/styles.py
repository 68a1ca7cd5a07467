import streamlit as st


def inject_global_css():
    st.markdown(
        """
        <style>

        .block-container {
            max-width: 800px;
            padding-top: 2.5rem;
        }

        html, body, [class*="css"] {
            font-family: Arial, sans-serif;
        }

        /* ---------------- HEADER ---------------- */
        .page-title {
            text-align: center;
            color: #1a0dab;
            font-size: 2.2rem;
            font-weight: 700;
        }

        .page-subtitle {
            text-align: center;
            color: #555;
            margin-bottom: 1.5rem;
        }

        /* ---------------- RESPONSE PANEL ---------------- */
        .response-panel {
            background-color: #1e1e1e;
            color: #d4d4d4;
            font-family: Consolas, "Courier New", monospace;
            font-size: 15px;
            line-height: 1.45;
            padding: 20px;
            border-radius: 8px;
            margin-top: 24px;
            border: 1px solid #444;
            max-height: 600px;
            overflow-x: auto;
            overflow-y: auto;
        }

        .response-panel h3 {
            margin: 0 0 16px 0;
            color: #9cdcfe;
            font-size: 18px;
            font-weight: 600;
        }

        .response-panel pre {
            margin: 0;
            padding: 0;
            background: transparent;
            border: none;
            color: inherit;
            font-family: inherit;
            font-size: inherit;
            line-height: inherit;
            white-space: pre-wrap;
            word-break: break-word;
        }

        .disclaimer {
            text-align: center;
            margin-top: 50px;
            color: #666;
            font-size: 14px;
        }

        </style>
        """,
        unsafe_allow_html=True,
    )
