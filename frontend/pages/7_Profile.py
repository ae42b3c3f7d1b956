import datetime as dt

import streamlit as st

from state import init_state, logout, View
from ui import app_shell, guard_login, page_header, show_notice
from api import get_profile, save_profile

st.set_page_config(page_title="Profile", page_icon="👤", layout="centered")
init_state()
app_shell("👤 Profile", active=View.PROFILE)
guard_login()

GENDERS = ["", "male", "female", "other"]
ACTIVITY = {
    "": "Select activity level",
    "sedentary": "Sedentary (little/no exercise)",
    "light": "Light (1-3 days/week)",
    "moderate": "Moderate (3-5 days/week)",
    "active": "Active (6-7 days/week)",
    "very_active": "Very Active (physical job + exercise)",
}

token = st.session_state.get("access_token")

h1, h2 = st.columns([3, 1])
with h1:
    page_header("Profile", st.session_state.get("username") or "")
with h2:
    if st.button("Logout", use_container_width=True):
        logout()
        st.switch_page("Home.py")

res = get_profile(token)
if not res.ok:
    show_notice(res.notice)
    st.stop()

profile = (res.data or {}).get("profile") or {}
goal = (res.data or {}).get("goal") or {}


def _num(label: str, value, step, **kw):
    # 0 = 미입력
    return st.number_input(label, value=value, step=step, min_value=0 * step, **kw)


with st.form("profile-form"):
    st.markdown("<div class='h2'>Personal Information</div>", unsafe_allow_html=True)
    st.caption("Update your personal details for better AI recommendations")
    c1, c2 = st.columns(2)
    with c1:
        height = _num("Height (cm)", float(profile.get("height") or 0), 1.0)
        age = _num("Age", int(profile.get("age") or 0), 1)
    with c2:
        weight = _num("Weight (kg)", float(profile.get("weight") or 0), 0.1)
        gender = st.selectbox("Gender", GENDERS, index=GENDERS.index(profile.get("gender") or ""),
                              format_func=lambda g: g.capitalize() or "Select")
    activity = st.selectbox("Activity Level", list(ACTIVITY), format_func=ACTIVITY.get,
                            index=list(ACTIVITY).index(profile.get("activity_level") or ""))
    calorie_goal = st.number_input("Daily Calorie Goal", min_value=0, step=50,
                                   value=int(profile.get("daily_calorie_goal") or 2000))

    st.markdown("<div class='h2'>Fitness Goals</div>", unsafe_allow_html=True)
    st.caption("Set your targets to track progress")
    target_weight = _num("Target Weight (kg)", float(goal.get("target_weight") or 0), 0.1)
    has_date = bool(goal.get("target_date"))
    target_date = st.date_input(
        "Target Date",
        value=dt.date.fromisoformat(goal["target_date"]) if has_date else None,
    )
    workout_days = st.select_slider("Weekly Workout Days", options=list(range(1, 8)),
                                    value=int(goal.get("weekly_workout_days") or 3))

    submitted = st.form_submit_button("Save Profile", use_container_width=True, type="primary")

if submitted:
    payload_profile = {
        "height": height or None,
        "weight": weight or None,
        "age": int(age) or None,
        "gender": gender or None,
        "activity_level": activity or None,
        "daily_calorie_goal": int(calorie_goal) or None,
    }
    payload_goal = {
        "target_weight": target_weight or None,
        "target_date": target_date.isoformat() if target_date else None,
        "weekly_workout_days": int(workout_days),
    }
    with st.spinner("Saving..."):
        saved = save_profile(token, payload_profile, payload_goal)
    if saved.ok:
        # 채팅 프로필 스냅샷 갱신
        st.session_state["chat_profile"] = None
        st.success("Profile updated! Your profile has been saved successfully.")
    else:
        show_notice(saved.notice)
