import time

import streamlit as st

from state import init_state, View, begin_request, finish_request, is_busy
from ui import app_shell, guard_login, show_notice
from api import chat_precondition, get_profile, profile_is_complete, send_chat

st.set_page_config(page_title="AI Advisor", page_icon="💬", layout="centered")
init_state()
app_shell("💬 AI Advisor", active=View.CHAT)
guard_login()

token = st.session_state.get("access_token")

# 프로필은 채팅 세션 시작 시 한 번만 조회
if st.session_state.get("chat_profile") is None:
    res = get_profile(token)
    if res.ok:
        bundle = res.data or {}
        snapshot = dict(bundle.get("profile") or {})
        goal = bundle.get("goal") or {}
        if goal.get("weekly_workout_days"):
            snapshot["weekly_workout_days"] = goal["weekly_workout_days"]
        st.session_state["chat_profile"] = snapshot
    else:
        show_notice(res.notice)

profile = st.session_state.get("chat_profile") or {}

for msg in st.session_state["chat_messages"]:
    with st.chat_message(msg["role"], avatar="🤖" if msg["role"] == "assistant" else "🙂"):
        st.markdown(msg["content"])

if not profile_is_complete(profile):
    st.page_link("pages/7_Profile.py", label="👤 Complete your profile")

prompt = st.chat_input("Ask me anything about nutrition or fitness...", disabled=is_busy(View.CHAT))
if prompt and prompt.strip():
    blocked = chat_precondition(token, profile)
    if blocked:
        # 전송 전 거절 (네트워크 호출 없음)
        show_notice(blocked)
        st.stop()

    st.session_state["chat_messages"].append({"id": str(time.time_ns()), "role": "user", "content": prompt})
    with st.chat_message("user", avatar="🙂"):
        st.markdown(prompt)

    ticket = begin_request(View.CHAT)
    with st.spinner("Thinking..."):
        res = send_chat(token, prompt, profile)
    if finish_request(View.CHAT, ticket, res.ok):
        if res.ok:
            st.session_state["chat_messages"].append(
                {"id": str(time.time_ns()), "role": "assistant", "content": res.data}
            )
            st.rerun()
        show_notice(res.notice)
