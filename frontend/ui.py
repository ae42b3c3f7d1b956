
import altair as alt
import pandas as pd
import streamlit as st

from api import Notice
from state import View, enter_view

_MOBILE_CSS = """
<style>
.block-container{
  max-width: 420px !important;
  padding-bottom: 96px !important; /* 하단 탭바 공간 */
}

/* 컬러/폰트 */
:root{
  --txt:#1f2937; --muted:#6b7280; --border:#e5e7eb; --panel:#f9fafb;
  --brand:#15803d; --brand2:#166534; --accent:#f97316;
}
html, body, [data-baseweb="baseweb"]{
  font-family: -apple-system, BlinkMacSystemFont, system-ui, Segoe UI, Roboto, Arial, sans-serif;
  color: var(--txt);
}

/* 타이포(모바일 스케일) */
.h1 {font-size: 24px; font-weight: 900; margin: 10px 0 4px;}
.h2 {font-size: 18px; font-weight: 800; margin: 10px 0 6px;}
.value-lg {font-size: 22px; font-weight: 800; margin: 2px 0 6px;}
.caption {font-size: 12px; color: var(--muted); margin: 0;}
.card{ background: var(--panel); border:1px solid var(--border); border-radius:14px; padding:12px 14px; margin:8px 0 10px; }
.badge{ display:inline-block; font-size:12px; font-weight:800; padding:3px 9px; border-radius:999px; background:#dcfce7; color:#065f46; margin:2px 4px 2px 0; }
.bar{ background:#e5e7eb; border-radius:999px; height:12px; overflow:hidden; }
.bar > div{ background: linear-gradient(90deg, var(--brand), #22c55e); height:100%; }

/* 상단 앱바 */
.appbar{
  position: sticky; top:0; z-index:50;
  background: var(--brand); color:#f0fdf4; border-bottom:1px solid var(--brand2);
  padding: 10px 14px; margin: -10px -10px 8px -10px; font-weight:800; font-size:18px; text-align:center;
}

/* 하단 탭바(고정) */
.mobile-tabbar{
  position: fixed; left:0; right:0; bottom:0; z-index:60;
  background: #ffffff; border-top:1px solid var(--border); padding:6px 6px 10px;
}
.mobile-tabbar__inner{ max-width: 420px; margin:0 auto; }
.tab-btn{ border-radius:12px; font-weight:800; font-size:12px; padding:0; overflow:hidden; color:var(--muted); }
.tab-btn.active{ color: var(--brand); background:#f0fdf4; }

/* Streamlit 기본 UI 숨김 */
#MainMenu, header, footer {visibility:hidden;}
[data-testid="stMetricValue"]{font-size:18px}
</style>
"""

# 뷰 → (탭 라벨, 페이지 경로)
VIEW_PAGES = {
    View.DASHBOARD: ("🏠 Home", "pages/2_Dashboard.py"),
    View.HISTORY:   ("🕒 History", "pages/4_History.py"),
    View.CAPTURE:   ("📸 Snap", "pages/3_Capture.py"),
    View.RECIPES:   ("🍳 Recipes", "pages/5_Recipes.py"),
    View.CHAT:      ("💬 Advisor", "pages/6_Chat.py"),
    View.PROFILE:   ("👤 Profile", "pages/7_Profile.py"),
}

LOGIN_PAGE = "pages/1_Login.py"

CLR_P = "#3b82f6"
CLR_C = "#f59e0b"
CLR_F = "#f97316"
GREY = "#e5e7eb"


def app_shell(title: str, active: View | None = None, show_tabs: bool = True):
    """
    - 각 페이지 파일 상단에서 st.set_page_config(...) 먼저 호출할 것
    - active 가 주어지면 현재 뷰로 기록 (중단된 이전 요청의 loading 해제)
    """
    if active is not None:
        enter_view(active)

    st.markdown(_MOBILE_CSS, unsafe_allow_html=True)
    st.markdown(f"<div class='appbar'>{title}</div>", unsafe_allow_html=True)

    if not show_tabs or not st.session_state.get("access_token"):
        return

    with st.container():
        st.markdown("<div class='mobile-tabbar'><div class='mobile-tabbar__inner'>", unsafe_allow_html=True)
        cols = st.columns(len(VIEW_PAGES))
        for col, (view, (label, page)) in zip(cols, VIEW_PAGES.items()):
            with col:
                btn_class = "tab-btn active" if view is active else "tab-btn"
                st.markdown(f"<div class='{btn_class}'>", unsafe_allow_html=True)
                st.page_link(page, label=label, use_container_width=True)
                st.markdown("</div>", unsafe_allow_html=True)
        st.markdown("</div></div>", unsafe_allow_html=True)


def page_header(title: str, subtitle: str = ""):
    st.markdown(f"<div class='h1'>{title}</div>", unsafe_allow_html=True)
    if subtitle:
        st.markdown(f"<p class='caption'>{subtitle}</p>", unsafe_allow_html=True)


def guard_login():
    # 토큰이 없으면 무조건 차단
    if not st.session_state.get("access_token"):
        st.warning("Please sign in first.")
        st.page_link(LOGIN_PAGE, label="🔐 Go to sign in", use_container_width=True)
        st.stop()


def show_notice(notice: Notice):
    """알림 1건 표시. 인증 만료면 토큰 비우고 로그인 링크."""
    if notice.kind == "auth":
        st.session_state["access_token"] = None
        st.warning(notice.message)
        st.page_link(LOGIN_PAGE, label="🔐 Go to sign in", use_container_width=True)
    elif notice.kind in ("rate_limited", "profile_incomplete"):
        st.warning(notice.message)
    elif notice.kind == "quota":
        st.error(notice.message)
    else:
        st.error(notice.message)


def progress_bar(percent: float):
    # 막대 폭만 100%로 자름 (값 자체는 그대로)
    width = max(0.0, min(100.0, float(percent)))
    st.markdown(f"<div class='bar'><div style='width:{width:.1f}%'></div></div>", unsafe_allow_html=True)


def badges(items):
    st.markdown("".join(f"<span class='badge'>{i}</span>" for i in items), unsafe_allow_html=True)


def ring_chart(pct: float, color: str, size: int = 92) -> alt.Chart:
    pct = float(max(0, min(1, pct)))
    bg = alt.Chart(pd.DataFrame({"v": [1]})).mark_arc(
        innerRadius=size * 0.34, outerRadius=size * 0.46, color=GREY
    ).encode(theta=alt.Theta("v:Q", stack=True))

    fg = alt.Chart(pd.DataFrame({"v": [pct]})).mark_arc(
        innerRadius=size * 0.34, outerRadius=size * 0.46, color=color
    ).encode(theta=alt.Theta("v:Q", stack=True))

    txt = alt.Chart(pd.DataFrame({"t": [f"{int(round(pct * 100))}%"]})).mark_text(
        fontWeight="bold", fontSize=16, dy=1
    ).encode(text="t:N")

    return (
        alt.layer(bg, fg, txt)
        .properties(width=size, height=size, padding={"top": 7, "right": 0, "bottom": 0, "left": 0})
        .configure_view(stroke=None)
    )


def macro_rings(macros: dict):
    """macros: {"protein": {"current", "goal"}, "carbs": {...}, "fats": {...}}"""
    cols = st.columns(3)
    for col, (key, label, color) in zip(cols, [
        ("protein", "Protein", CLR_P),
        ("carbs", "Carbs", CLR_C),
        ("fats", "Fats", CLR_F),
    ]):
        m = macros.get(key) or {}
        cur, goal = float(m.get("current", 0)), float(m.get("goal", 0))
        with col:
            st.markdown(
                f"<div class='caption'>{label}</div>"
                f"<div style='font-weight:800'>{cur:.0f}g <span class='caption'>of {goal:.0f}g</span></div>",
                unsafe_allow_html=True,
            )
            st.altair_chart(ring_chart(cur / goal if goal else 0, color), use_container_width=True)


def meal_row(name: str, calories: float, when: str = ""):
    with st.container(border=True):
        a, b = st.columns([3, 1])
        a.markdown(f"**{name}**" + (f"<br><span class='caption'>🕒 {when}</span>" if when else ""),
                   unsafe_allow_html=True)
        b.markdown(f"<div style='text-align:right;font-weight:800'>{calories:.0f} kcal</div>",
                   unsafe_allow_html=True)
