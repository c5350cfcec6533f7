# app/main.py

import streamlit as st
from dotenv import load_dotenv
from ui.login import login_page, logout
from ui.categories import categories_page
from services.api import get_user_info


load_dotenv()


def sign_out():
    logout()
    st.session_state.clear()
    st.rerun()

def main_page():
    # Tokens restored from the cookie may have expired
    user = get_user_info(st.session_state["access_token"])
    if user.get("status") in (401, 404):
        sign_out()
    elif user.get("error"):
        st.error(user["error"])
        return

    st.sidebar.markdown(f"## 👋 {user['username']}님")

    if st.sidebar.button("🔓 로그아웃"):
        sign_out()

    categories_page(on_unauthorized=sign_out)


if "access_token" not in st.session_state:
    login_page()
else:
    main_page()
