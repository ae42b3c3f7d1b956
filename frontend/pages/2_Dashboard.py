import streamlit as st

from state import init_state, View
from ui import app_shell, guard_login, page_header, show_notice, progress_bar, macro_rings, meal_row
from api import get_dashboard

st.set_page_config(page_title="Today", page_icon="🏠", layout="centered")
init_state()
app_shell("🏠 Today", active=View.DASHBOARD)
guard_login()

page_header("Today's Progress", "Track your nutrition goals")

token = st.session_state.get("access_token")
with st.spinner("Loading today's summary..."):
    res = get_dashboard(token)

if not res.ok:
    show_notice(res.notice)
    st.stop()

dash = res.data
consumed = int(dash.get("consumed", 0))
remaining = int(dash.get("remaining", 0))
goal = int(dash.get("daily_goal", 0))
progress = float(dash.get("progress_percent", 0.0))

# ----------------- 칼로리 요약 카드 -----------------
with st.container(border=True):
    c1, c2 = st.columns(2)
    c1.metric("🔥 Calories", f"{consumed}")
    # remaining 은 음수일 수 있음 (목표 초과)
    c2.metric("Remaining", f"{remaining}", delta=None if remaining >= 0 else "over goal", delta_color="inverse")
    progress_bar(progress)
    st.markdown(
        f"<p class='caption' style='text-align:center'>Goal: {goal} kcal · {progress:.1f}%</p>",
        unsafe_allow_html=True,
    )

# ----------------- 매크로 -----------------
st.markdown("<div class='h2'>Macros</div>", unsafe_allow_html=True)
macro_rings(dash.get("macros") or {})

# ----------------- 최근 식사 -----------------
st.markdown("<div class='h2'>Recent Meals</div>", unsafe_allow_html=True)
recent = dash.get("recent_meals") or []
if not recent:
    st.info("No meals logged today yet. Tap 📸 Snap to analyse your first meal.")
for m in recent:
    when = str(m.get("created_at", ""))[11:16]
    meal_row(m.get("name", "Meal"), float(m.get("calories", 0)), when)
