# app/main.py

import streamlit as st
from dotenv import load_dotenv
from ui.login import login_page, logout
from ui.dashboard import dashboard_page
from ui.users import users_page


load_dotenv()


def is_admin(user):
    return user.get("role") == "ADMIN"


def main_page():
    user = st.session_state["user"]

    st.sidebar.markdown("## 💧 AquaLIMS")
    st.sidebar.caption(f"{user['username']} · {user['role']}")

    if st.sidebar.button("📋 Laboratory Logs"):
        st.session_state["page"] = "dashboard"
    if is_admin(user) and st.sidebar.button("👥 User Management"):
        st.session_state["page"] = "users"
    if st.sidebar.button("🔓 Logout"):
        logout()
        st.session_state.clear()
        st.rerun()

    page = st.session_state.get("page", "dashboard")
    if page == "users":
        # ADMIN-only section, everyone else goes back to the dashboard
        if not is_admin(user):
            st.session_state["page"] = "dashboard"
            st.rerun()
        users_page()
    else:
        dashboard_page()


if "access_token" not in st.session_state:
    login_page()
else:
    main_page()
