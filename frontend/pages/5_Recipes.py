import streamlit as st

from state import init_state, View, begin_request, finish_request, is_busy, reset_request
from ui import app_shell, guard_login, page_header, show_notice, badges
from api import generate_recipes, to_data_uri

st.set_page_config(page_title="Leftover Recipes", page_icon="🍳", layout="centered")
init_state()
app_shell("🍳 Leftover Recipes", active=View.RECIPES)
guard_login()

page_header("Leftover Recipes", "Reduce waste with sustainable recipe suggestions")

DIFFICULTY_BADGE = {"easy": "🟢 easy", "medium": "🟡 medium", "hard": "🔴 hard"}


def _try_again():
    st.session_state["leftover_image"] = None
    st.session_state["recipes"] = None
    reset_request(View.RECIPES)


result = st.session_state.get("recipes")

if result is None:
    with st.container(border=True):
        st.markdown("**Snap Your Leftovers**")
        st.caption("Take a photo of your leftover food and we'll suggest creative, sustainable recipes")
        file = st.file_uploader("Upload leftovers photo", type=["jpg", "jpeg", "png", "webp"],
                                label_visibility="collapsed", disabled=is_busy(View.RECIPES))

    if file is not None:
        image = to_data_uri(file.getvalue(), file.type or "image/jpeg")
        st.session_state["leftover_image"] = image
        st.image(image, use_container_width=True)
        if st.button("✨ Find Recipes", use_container_width=True, type="primary", disabled=is_busy(View.RECIPES)):
            ticket = begin_request(View.RECIPES)
            with st.spinner("Analyzing your leftovers..."):
                res = generate_recipes(st.session_state.get("access_token"), image)
            if finish_request(View.RECIPES, ticket, res.ok, "recipes", res.data):
                if res.ok:
                    st.rerun()
                show_notice(res.notice)

    with st.container(border=True):
        st.markdown("**Why Use Leftover Recipes?**")
        st.markdown("- Reduce food waste and environmental impact\n"
                    "- Save money on groceries\n"
                    "- Discover creative ways to use what you have\n"
                    "- Promote sustainable eating habits")
else:
    image = st.session_state.get("leftover_image")
    if image:
        st.image(image, use_container_width=True)

    recipes = result.get("recipes") or []
    ingredients = result.get("ingredients") or []
    if ingredients:
        st.markdown("<div class='h2'>Detected Ingredients</div>", unsafe_allow_html=True)
        badges(ingredients)

    with st.container(border=True):
        st.markdown("♻️ **Sustainability Impact**")
        st.caption("Using leftovers reduces food waste by ~30%")
        c1, c2, c3 = st.columns(3)
        c1.metric("Recipes", len(recipes))
        c2.metric("Ingredients", len(ingredients))
        avg = sum(r.get("sustainability", 0) for r in recipes) / len(recipes) if recipes else 0
        c3.metric("Avg. score", f"{avg:.0f}%")

    st.markdown("<div class='h2'>Recipe Suggestions</div>", unsafe_allow_html=True)
    if not recipes:
        st.info("No recipes found for this photo.")
    for r in recipes:
        with st.container(border=True):
            st.markdown(f"**{r.get('name', 'Recipe')}**")
            st.caption(r.get("description", ""))
            badges([
                f"⏱ {r.get('time', 0)} min",
                f"👥 {r.get('servings', 1)} servings",
                DIFFICULTY_BADGE.get(r.get("difficulty"), r.get("difficulty", "")),
                f"♻️ {r.get('sustainability', 0)}% sustainable",
                f"🔥 {r.get('calories', 0)} kcal/serving",
            ])
            with st.expander("View Recipe"):
                st.markdown("**Ingredients**")
                st.markdown("\n".join(f"- {i}" for i in r.get("ingredients") or []))
                st.markdown("**Instructions**")
                st.markdown("\n".join(f"{n}. {step}" for n, step in enumerate(r.get("instructions") or [], 1)))

    st.button("Analyze Different Leftovers", use_container_width=True, on_click=_try_again)
