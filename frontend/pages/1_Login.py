import streamlit as st

from state import init_state
from ui import app_shell
from api import login

st.set_page_config(page_title="Sign in", page_icon="🔐", layout="centered")
init_state()
app_shell("🔐 Sign in", show_tabs=False)

if st.session_state.get("access_token") and st.session_state.get("username"):
    st.switch_page("pages/2_Dashboard.py")

with st.form("login_form", clear_on_submit=False):
    username = st.text_input("Username", placeholder="Enter your username")
    password = st.text_input("Password", type="password", placeholder="Enter your password")
    submit = st.form_submit_button("Sign in", use_container_width=True, type="primary")


if submit:
    username = (username or "").strip()
    password = (password or "").strip()

    if not username or not password:
        st.warning("Enter both username and password.")
        st.stop()

    with st.spinner("Signing in..."):
        res = login(username, password)

    if not res.ok:
        st.error(res.notice.message)
    else:
        st.session_state["access_token"] = res.data["access_token"]
        st.session_state["username"] = res.data.get("username", username)
        st.success(f"Welcome back, {st.session_state['username']}!")
        st.switch_page("pages/2_Dashboard.py")


st.divider()
st.page_link("pages/0_Signup.py", label="No account yet? ➜ Create one")
