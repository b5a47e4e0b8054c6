import os

import requests
import streamlit as st

from estate_chat.formatting import format_property_caption

st.set_page_config(page_title="Real Estate ChatBot", page_icon="🏠", layout="centered")

# -----------------------------
# CONFIG
# -----------------------------
BASE_API = os.getenv("ESTATE_CHAT_API", "http://localhost:5000")
CHAT_ENDPOINT = f"{BASE_API}/api/chat"
MAX_MESSAGE_LENGTH = 300

WELCOME = "👋 Welcome to Real Estate AI! How can I assist you today?"
SERVER_ERROR = "❌ Server error. Please try again."

# -----------------------------
# SESSION STATE
# -----------------------------
if "messages" not in st.session_state:
    st.session_state.messages = [{"role": "assistant", "content": WELCOME}]


# -----------------------------
# HELPERS
# -----------------------------
def safe_post_json(url: str, payload: dict, timeout: int = 60):
    try:
        return requests.post(url, json=payload, timeout=timeout)
    except requests.RequestException:
        return None


def render_properties(properties):
    if not properties:
        return

    for p in properties:
        with st.container(border=True):
            st.markdown(f"**{p.get('type', '')}** · {p.get('size', '')}")
            st.write(format_property_caption(p))


# -----------------------------
# MAIN UI
# -----------------------------
st.title("Real Estate ChatBot")

for m in st.session_state.messages:
    with st.chat_message(m["role"]):
        st.markdown(m["content"])

user_msg = st.chat_input("Ask something about real estate...", max_chars=MAX_MESSAGE_LENGTH)

if user_msg and user_msg.strip():
    user_msg = user_msg.strip()
    st.session_state.messages.append({"role": "user", "content": user_msg})
    with st.chat_message("user"):
        st.markdown(user_msg)

    with st.chat_message("assistant"):
        with st.spinner("Typing…"):
            r = safe_post_json(CHAT_ENDPOINT, {"message": user_msg})

        if r is None:
            reply, props = SERVER_ERROR, []
        else:
            try:
                j = r.json()
            except ValueError:
                j = {}
            reply = j.get("response") or j.get("error") or SERVER_ERROR
            props = j.get("properties") or []

        st.markdown(reply)
        render_properties(props)
        st.session_state.messages.append({"role": "assistant", "content": reply})
