import streamlit as st

from state import init_state, View, begin_request, finish_request, is_busy, reset_request
from ui import app_shell, guard_login, page_header, show_notice, badges
from api import analyze_food, save_meal, to_data_uri

st.set_page_config(page_title="Capture Food", page_icon="📸", layout="centered")
init_state()
app_shell("📸 Capture Food", active=View.CAPTURE)
guard_login()

token = st.session_state.get("access_token")


def _retake():
    st.session_state["capture_image"] = None
    st.session_state["capture_analysis"] = None
    reset_request(View.CAPTURE)


def render_analysis(analysis: dict):
    macros = analysis.get("macros") or {}
    score = int(analysis.get("healthScore", 0))

    a, b = st.columns([3, 1])
    a.markdown(f"<div class='h2'>{analysis.get('name', 'Meal')}</div>"
               f"<p class='caption'>{analysis.get('servingSize', '')}</p>", unsafe_allow_html=True)
    b.metric("Health", f"{score}/100")

    with st.container(border=True):
        st.metric("🔥 Calories", f"{int(analysis.get('calories', 0))} kcal")
        for key, label in (("protein", "Protein"), ("carbs", "Carbs"), ("fats", "Fats")):
            m = macros.get(key) or {}
            pct = float(m.get("percentage", 0))
            st.markdown(f"**{label}** {float(m.get('amount', 0)):.0f}g "
                        f"<span class='caption'>{pct:.0f}% DV</span>", unsafe_allow_html=True)
            st.progress(max(0, min(100, int(pct))))

    nutrients = analysis.get("nutrients") or []
    if nutrients:
        st.markdown("<div class='h2'>Nutrients</div>", unsafe_allow_html=True)
        cols = st.columns(2)
        for i, n in enumerate(nutrients):
            cols[i % 2].metric(n.get("name", ""), n.get("amount", ""), f"{float(n.get('daily', 0)):.0f}% DV",
                               delta_color="off")

    ingredients = analysis.get("ingredients") or []
    if ingredients:
        st.markdown("<div class='h2'>Ingredients</div>", unsafe_allow_html=True)
        badges(ingredients)


analysis = st.session_state.get("capture_analysis")

if analysis is None:
    page_header("Take a Photo", "Snap a picture of your meal to get instant nutrition analysis")
    file = st.file_uploader("Upload photo", type=["jpg", "jpeg", "png", "webp"], label_visibility="collapsed")
    if file is not None:
        st.session_state["capture_image"] = to_data_uri(file.getvalue(), file.type or "image/jpeg")

    image = st.session_state.get("capture_image")
    if image:
        st.image(image, use_container_width=True)
        busy = is_busy(View.CAPTURE)
        if st.button("✨ Analyze Food", use_container_width=True, type="primary", disabled=busy):
            ticket = begin_request(View.CAPTURE)
            with st.spinner("Analyzing your food..."):
                res = analyze_food(token, image)
            if finish_request(View.CAPTURE, ticket, res.ok, "capture_analysis", res.data):
                if res.ok:
                    st.rerun()
                show_notice(res.notice)
        st.button("Retake Photo", use_container_width=True, on_click=_retake)
    else:
        st.caption("Take a clear photo with good lighting for best results")
else:
    image = st.session_state.get("capture_image")
    if image:
        st.image(image, use_container_width=True)
    render_analysis(analysis)

    # 저장 실패해도 분석 결과는 유지 → 다시 저장 가능
    if st.button("💾 Save to Diary", use_container_width=True, type="primary"):
        with st.spinner("Saving..."):
            res = save_meal(token, analysis, image)
        if res.ok:
            st.success("Meal saved to your diary!")
            _retake()
            st.switch_page("pages/2_Dashboard.py")
        else:
            show_notice(res.notice)
            st.info("Your analysis is kept. You can try saving again.")
    st.button("Analyze Another Meal", use_container_width=True, on_click=_retake)
