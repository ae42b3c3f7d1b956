import streamlit as st

from state import init_state
from ui import app_shell

st.set_page_config(page_title="NutriSnap", page_icon="🥗", layout="centered")
init_state()

app_shell("NutriSnap 🥗", show_tabs=False)

if st.session_state.get("access_token"):
    st.switch_page("pages/2_Dashboard.py")

st.markdown(
    """
    <div style="text-align:center; margin-top:-4px;">
        <h2 style="font-weight:900; margin:6px 0;">NutriSnap</h2>
        <p style="color:#6b7280; font-size:14px; margin-bottom:12px;">
            Snap your meal, get instant nutrition, and chat with your AI advisor
        </p>
    </div>
    """,
    unsafe_allow_html=True,
)

with st.container(border=True):
    st.markdown("📸 **Snap** a photo of your meal for an AI nutrition breakdown")
    st.markdown("📊 **Track** calories and macros against your daily goal")
    st.markdown("🍳 **Cook** sustainable recipes from your leftovers")
    st.markdown("💬 **Ask** the AI advisor about diet and workouts")

# ----------------- 로그인 / 회원가입 버튼 -----------------
st.markdown("<div style='height:8px;'></div>", unsafe_allow_html=True)
c1, c2 = st.columns(2)

with c1:
    if st.button("🔐 Sign in", use_container_width=True):
        st.switch_page("pages/1_Login.py")

with c2:
    if st.button("🧾 Create account", use_container_width=True):
        st.switch_page("pages/0_Signup.py")
