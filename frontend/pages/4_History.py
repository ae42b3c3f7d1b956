import altair as alt
import pandas as pd
import streamlit as st

from state import init_state, View
from ui import app_shell, guard_login, page_header, show_notice, meal_row
from api import get_history

st.set_page_config(page_title="Meal History", page_icon="🕒", layout="centered")
init_state()
app_shell("🕒 Meal History", active=View.HISTORY)
guard_login()

page_header("Meal History", "Your logged meals and trends")

with st.spinner("Loading history..."):
    res = get_history(st.session_state.get("access_token"), days=7)

if not res.ok:
    show_notice(res.notice)
    st.stop()

data = res.data
days = data.get("days") or []
if not days:
    st.info("No history yet.")
    st.stop()

today = days[0]
change = int(data.get("calorie_change", 0))

# ----------------- 요약 카드 -----------------
with st.container(border=True):
    c1, c2, c3 = st.columns(3)
    c1.metric("Today", f"{today['total_calories']} kcal")
    c2.metric("vs yesterday", f"{abs(change)}", delta=f"{change:+d}", delta_color="inverse")
    c3.metric("Meals", f"{today['meal_count']}")

# ----------------- 일자별 추이 -----------------
df = pd.DataFrame([{"date": d["date"], "kcal": d["total_calories"], "goal": d["goal"]} for d in days])
df["date"] = pd.to_datetime(df["date"], errors="coerce")
df = df.sort_values("date")
bars = alt.Chart(df).mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4, color="#22c55e").encode(
    x=alt.X("date:T", title=None, axis=alt.Axis(format="%a")),
    y=alt.Y("kcal:Q", title="kcal"),
    tooltip=["date:T", "kcal:Q"],
)
rule = alt.Chart(df).mark_rule(color="#f97316", strokeDash=[4, 4]).encode(y="mean(goal):Q")
st.altair_chart((bars + rule).properties(height=180), use_container_width=True)

# ----------------- 날짜 선택 / 식사 목록 -----------------
labels = ["Today", "Yesterday"] + [str(d["date"]) for d in days[2:]]
choice = st.radio("Day", labels[:len(days)], horizontal=True, label_visibility="collapsed")
selected = days[labels.index(choice)]

st.markdown(f"<div class='h2'>{choice}'s Meals</div>", unsafe_allow_html=True)
if not selected["meals"]:
    st.caption("No meals logged.")
for m in selected["meals"]:
    meal_row(m["name"], float(m["calories"]), m.get("time", ""))

# ----------------- 주간 인사이트 -----------------
ins = data.get("insights") or {}
st.markdown("<div class='h2'>Weekly Insights</div>", unsafe_allow_html=True)
with st.container(border=True):
    st.markdown(f"📈 Average **{float(ins.get('average_calories', 0)):.0f} kcal** per logged day")
    st.markdown(f"🎯 On target **{ins.get('days_on_target', 0)}** of {ins.get('days_logged', 0)} logged days")
    if ins.get("top_meal"):
        st.markdown(f"🍽️ Most logged: **{ins['top_meal']}**")
