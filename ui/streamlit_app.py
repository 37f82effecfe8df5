import os
import uuid

import requests
import streamlit as st

from nexus_mentor.schemas import ChatMessage, ChatRequest, GroundingChunk

API_URL = os.getenv("API_URL", "http://localhost:8000")

st.set_page_config(page_title="NEXUS Architect Mentor", page_icon="🛰️", layout="wide")

st.title("🛰️ Architect Mentor")

with st.sidebar:
    st.header("Settings")
    api = st.text_input("Backend API", API_URL)
    api_key = st.text_input("Gemini API key (optional)", type="password")
    use_search = st.toggle("Web search (Gemini Flash)", value=False)
    st.markdown("---")
    st.caption("Attach an architecture diagram with the paperclip in the chat box.")
    st.caption("Without a key the mentor answers in simulation mode.")

st.caption("🟢 Online + Web Access" if use_search else "🟢 Online")

if "messages" not in st.session_state:
    st.session_state.messages = [
        ChatMessage(
            id="init",
            role="system",
            text="AI Architect Mentor initialized. Ready to review your engineering roadmap.",
        )
    ]


def render_sources(chunks):
    links = [c for c in chunks or [] if c.web and c.web.uri]
    if not links:
        return
    st.markdown("**Sources:**")
    st.markdown(" · ".join(f"[{c.label()}]({c.web.uri})" for c in links))


for m in st.session_state.messages:
    with st.chat_message("user" if m.role == "user" else "assistant"):
        if m.attachment:
            st.image(m.attachment.raw(), caption="User upload")
        st.markdown(m.text)
        render_sources(m.grounding_chunks)

placeholder = "Ask with Google Search..." if use_search else "Ask the Architect Mentor..."
# the chat box clears its text and file after each submit, so an image is sent once
submission = st.chat_input(placeholder, accept_file=True, file_type=["png", "jpg", "jpeg", "webp"])
if submission is not None:
    req = ChatRequest.from_input(submission.text, submission.files, use_search=use_search)
    if req is None:
        st.stop()

    user_msg = ChatMessage(id=uuid.uuid4().hex, role="user", text=req.message, attachment=req.attachment)
    st.session_state.messages.append(user_msg)
    with st.chat_message("user"):
        if req.attachment:
            st.image(req.attachment.raw(), caption="User upload")
        st.markdown(req.message)

    with st.chat_message("assistant"):
        spinner = "Accessing global network..." if use_search else "Consulting architecture diagrams..."
        with st.spinner(spinner):
            headers = {"x-goog-api-key": api_key} if api_key else {}
            try:
                r = requests.post(
                    f"{api.rstrip('/')}/chat",
                    json=req.model_dump(exclude_none=True),
                    headers=headers,
                    timeout=120,
                )
                r.raise_for_status()
                data = r.json()
            except Exception as e:
                st.error(f"Error: {e}")
                st.stop()
        chunks = [GroundingChunk.model_validate(c) for c in data.get("grounding_chunks") or []]
        st.markdown(data["text"])
        render_sources(chunks)
        st.session_state.messages.append(
            ChatMessage(id=uuid.uuid4().hex, role="model", text=data["text"], grounding_chunks=chunks or None)
        )
