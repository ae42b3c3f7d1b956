import streamlit as st

from state import init_state
from ui import app_shell, show_notice
from api import signup

st.set_page_config(page_title="Create account", page_icon="🧾", layout="centered")
init_state()
app_shell("🧾 Create account", show_tabs=False)


with st.form("signup-form", clear_on_submit=False):
    username = st.text_input("Username")
    password = st.text_input("Password", type="password")
    confirm = st.text_input("Confirm password", type="password")
    submitted = st.form_submit_button("Sign up", use_container_width=True)

if submitted:
    username = (username or "").strip()
    # 1) 클라이언트 검증
    if not username or not password:
        st.warning("Enter a username and password.")
    elif len(username) < 3 or len(username) > 50:
        st.warning("Username must be 3-50 characters.")
    elif len(password) < 4:
        st.warning("Password must be at least 4 characters.")
    elif password != confirm:
        st.warning("Passwords do not match.")
    else:
        # 2) 서버 호출
        with st.spinner("Creating your account..."):
            res = signup(username, password)
        if res.ok:
            st.success(res.data.get("message", "Signup successful ✅"))
            # 3) 다음 액션 안내
            st.info("Sign in, then fill in your profile for personalised advice.")
            st.page_link("pages/1_Login.py", label="➡ Go to sign in")
        else:
            show_notice(res.notice)

st.divider()
st.page_link("pages/1_Login.py", label="Already have an account? ➜ Sign in")
