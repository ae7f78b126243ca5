"""
Gateway Chat - Streamlit Frontend

A chat interface for the gateway chat backend. Replies are streamed from
/api/chat and rendered as they arrive, with reasoning traces and sources.

Run with: streamlit run streamlit_app.py
"""
import os
import uuid

import requests
import streamlit as st

from src.services.ui_stream import parse_ui_stream

# ============================================================
# Configuration
# ============================================================

API_BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")

MODELS = [
    ("openai/gpt-4o", "GPT 4o"),
    ("openai/gpt-4o-mini", "GPT 4o mini"),
    ("anthropic/claude-sonnet-4", "Claude Sonnet 4"),
    ("google/gemini-2.5-flash", "Gemini 2.5 Flash"),
    ("deepseek/deepseek-r1", "Deepseek R1"),
]

st.set_page_config(
    page_title="Gateway Chat",
    page_icon="💬",
    layout="centered",
    initial_sidebar_state="expanded"
)


# ============================================================
# Session State Initialization
# ============================================================

def init_session_state():
    """Initialize session state variables."""
    if "messages" not in st.session_state:
        st.session_state.messages = []
    if "backend_connected" not in st.session_state:
        st.session_state.backend_connected = False


def check_backend():
    """Check if backend is available."""
    try:
        response = requests.get(f"{API_BASE_URL}/health", timeout=10)
        st.session_state.backend_connected = response.status_code == 200
    except requests.exceptions.RequestException:
        st.session_state.backend_connected = False
    return st.session_state.backend_connected


def ui_message(role: str, text: str, reasoning: str = "", sources: list | None = None) -> dict:
    """Build a UI message with text, reasoning and source parts."""
    parts = []
    if reasoning:
        parts.append({"type": "reasoning", "text": reasoning})
    parts.append({"type": "text", "text": text})
    for source in sources or []:
        parts.append({"type": "source-url", "sourceId": source["sourceId"], "url": source["url"]})
    return {"id": uuid.uuid4().hex, "role": role, "parts": parts}


def text_of(message: dict) -> str:
    return "".join(p.get("text", "") for p in message["parts"] if p["type"] == "text")


# ============================================================
# API Functions
# ============================================================

def stream_reply(model: str, web_search: bool):
    """
    Post the conversation and yield UI message stream events.

    Raises:
        RuntimeError: With a user-facing message if the request fails
    """
    try:
        response = requests.post(
            f"{API_BASE_URL}/api/chat",
            json={
                "messages": st.session_state.messages,
                "model": model,
                "webSearch": web_search,
            },
            stream=True,
            timeout=(10, 120)
        )
    except requests.exceptions.ConnectionError:
        raise RuntimeError("Cannot connect to backend server.")
    except requests.exceptions.Timeout:
        raise RuntimeError("Request timed out.")

    with response:
        if response.status_code != 200:
            try:
                message = response.json().get("message", response.text)
            except ValueError:
                message = response.text
            raise RuntimeError(f"{response.status_code}: {message}")

        yield from parse_ui_stream(response.iter_lines(decode_unicode=True))


# ============================================================
# UI Components
# ============================================================

def render_sidebar() -> tuple:
    """Render the sidebar and return (model, web_search)."""
    with st.sidebar:
        st.title("💬 Gateway Chat")

        if st.session_state.backend_connected:
            st.success("🟢 System Online")
        else:
            st.error("🔴 System Offline")
            if st.button("🔄 Reconnect", use_container_width=True):
                if check_backend():
                    st.rerun()

        st.divider()

        labels = {model_id: label for model_id, label in MODELS}
        model = st.selectbox("Model", list(labels), format_func=labels.get)
        web_search = st.toggle("🌐 Search", value=False, help="Answer with a web search model")

        if st.button("🗑️ Clear", help="Clear messages in current chat", use_container_width=True):
            st.session_state.messages = []
            st.rerun()

    return model, web_search


def render_extras(reasoning: str, sources: list):
    """Reasoning and sources shown under an assistant reply."""
    if reasoning:
        with st.expander("💭 Reasoning", expanded=False):
            st.markdown(reasoning)
    if sources:
        with st.expander(f"🔗 Used {len(sources)} sources", expanded=False):
            for source in sources:
                st.markdown(f"- [{source.get('title') or source['url']}]({source['url']})")


def render_history():
    for msg in st.session_state.messages:
        with st.chat_message(msg["role"]):
            st.markdown(text_of(msg))
            reasoning = "".join(p.get("text", "") for p in msg["parts"] if p["type"] == "reasoning")
            sources = [p for p in msg["parts"] if p["type"] == "source-url"]
            render_extras(reasoning, sources)


def render_chat(model: str, web_search: bool):
    """Render the chat history and handle new input."""
    render_history()

    if prompt := st.chat_input("What would you like to know?"):
        st.session_state.messages.append(ui_message("user", prompt))
        with st.chat_message("user"):
            st.markdown(prompt)

        with st.chat_message("assistant"):
            placeholder = st.empty()
            text, reasoning, sources = "", "", []

            try:
                with st.spinner("Thinking..."):
                    for event in stream_reply(model, web_search):
                        kind = event.get("type")
                        if kind == "text-delta":
                            text += event["delta"]
                            placeholder.markdown(text + "▌")
                        elif kind == "reasoning-delta":
                            reasoning += event["delta"]
                        elif kind == "source-url":
                            sources.append(event)
                        elif kind == "error":
                            raise RuntimeError(event.get("errorText", "An error occurred."))
            except RuntimeError as e:
                st.error(f"❌ {e}")
                # Drop the unanswered prompt so the user can retry
                st.session_state.messages.pop()
                return

            placeholder.markdown(text)
            render_extras(reasoning, sources)
            st.session_state.messages.append(ui_message("assistant", text, reasoning, sources))


# ============================================================
# Main App
# ============================================================

def main():
    """Main application entry point."""
    init_session_state()

    if not st.session_state.backend_connected:
        check_backend()

    model, web_search = render_sidebar()

    if not st.session_state.backend_connected:
        st.warning("⚠️ Cannot connect to backend. Please start the server:")
        st.code("uvicorn src.api.main:app --reload --port 8000", language="bash")
        return

    render_chat(model, web_search)


if __name__ == "__main__":
    main()
