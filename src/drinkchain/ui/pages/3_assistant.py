import streamlit as st
from drinkchain.ui.api_client import get_client, APIError
from drinkchain.ui.state import get_chat_session_id

st.title("AI参谋")

client = get_client()
session_id = get_chat_session_id()

try:
    transcript = client.get_transcript(session_id)
except APIError as e:
    st.error(f"Failed to load conversation: {e.detail}")
    st.stop()

for msg in transcript.messages:
    with st.chat_message("user" if msg.role == "user" else "assistant"):
        st.write(msg.text)

prompt = st.chat_input("问问AI关于市场趋势的问题...", disabled=transcript.awaiting)
if prompt:
    with st.chat_message("user"):
        st.write(prompt)
    with st.spinner("思考中..."):
        try:
            client.send_chat_message(session_id, prompt)
        except APIError as e:
            if e.status_code == 409:
                st.warning("上一条消息仍在处理中，请稍候。")
            else:
                st.error(f"Failed: {e.detail}")
    st.rerun()
