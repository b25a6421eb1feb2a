"""Client-side Streamlit UI for the Gemini chat relay.

Features
--------
* Chat interface built on `st.chat_message` elements.
* Sidebar to configure the **relay base URL** and the **time zone** used for
  message timestamps.
* AI replies go through the light formatter in `chat_ui.formatting`
  (headers, bullet / numbered lists, inline bold and code).
* The transcript lives in `st.session_state` only; "Clear Chat" or a page
  reload drops it.

Run with:
    $ streamlit run chat_ui/streamlit_app.py

Make sure the relay is up (default assumes http://localhost:8080, or whatever
`PUBLIC_API_URL` says in the environment or the project `.env`) or change the
"API Base URL" in the sidebar.
"""

from __future__ import annotations

import pytz  # type: ignore
import streamlit as st

from chat_ui.formatting import STYLE, format_time, to_html
from chat_ui.relay_client import send_message
from chat_ui.session import MAX_INPUT_CHARS, ChatSession
from chat_ui.settings import load_client_settings

settings = load_client_settings()

st.set_page_config(page_title="AI Assistant", page_icon="🤖", layout="wide")

###############################################################################
# Session-state helpers
###############################################################################

if "chat" not in st.session_state:
    st.session_state.chat = ChatSession()
chat: ChatSession = st.session_state.chat

###############################################################################
# Sidebar - configuration & defaults
###############################################################################
st.sidebar.header("Server configuration")
API_BASE_URL: str = st.sidebar.text_input(
    "API Base URL", value=settings.api_url, help="Where the Gemini relay lives"
)
TZ_NAME: str = st.sidebar.text_input("Time zone", value=settings.time_zone)
try:
    TIME_ZONE = pytz.timezone(TZ_NAME)
except pytz.UnknownTimeZoneError:
    st.sidebar.warning(f"Unknown time zone {TZ_NAME!r}, showing UTC")
    TIME_ZONE = pytz.utc

###############################################################################
# Page setup
###############################################################################

st.markdown(STYLE, unsafe_allow_html=True)
title_col, clear_col = st.columns([5, 1])
with title_col:
    st.title("AI Assistant")
    st.caption("Powered by Google Gemini")
with clear_col:
    if chat.messages:
        st.button("🗑️ Clear Chat", on_click=chat.clear)

###############################################################################
# Display chat history
###############################################################################

if not chat.messages and not chat.is_sending:
    st.subheader("How can I help you today?")
    st.write("Ask me anything! I'm here to help with questions, explanations, and more.")

for msg in chat.messages:
    with st.chat_message("user" if msg.sender == "user" else "assistant"):
        if msg.sender == "ai":
            st.markdown(to_html(msg.text), unsafe_allow_html=True)
        else:
            st.text(msg.text)
        st.caption(f"🕒 {format_time(msg.timestamp, TIME_ZONE)}")

thinking = st.empty()

if chat.banner:
    st.error(chat.banner)

###############################################################################
# Chat input
###############################################################################

# chat_input exposes its text only on submit, so the count is of the last message
last_sent = next((m.text for m in reversed(chat.messages) if m.sender == "user"), "")
st.caption(f"{len(last_sent)}/{MAX_INPUT_CHARS} characters (last message)")

user_prompt = st.chat_input(
    "Type your message...", max_chars=MAX_INPUT_CHARS, disabled=chat.is_sending
)
if user_prompt and chat.submit(user_prompt):
    st.rerun()

if chat.is_sending:
    with thinking.container():
        with st.chat_message("assistant"):
            with st.spinner("AI is thinking..."):
                chat.send_pending(
                    lambda text: send_message(API_BASE_URL, text, timeout=settings.timeout_seconds)
                )
    st.rerun()
