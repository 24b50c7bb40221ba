# app/ui/users.py

import streamlit as st
from services.api import list_users, create_user, toggle_user_status, reset_password


def users_page():
    st.title("👥 User Management")
    st.caption("Control access permissions and user accounts.")

    access_token = st.session_state["access_token"]

    if st.button("➕ Add User"):
        st.session_state["show_add_user"] = not st.session_state.get("show_add_user", False)

    if st.session_state.get("show_add_user"):
        handle_user_create(access_token)

    users = list_users(access_token)
    if isinstance(users, dict) and users.get("error"):
        st.error(users["error"])
        return

    columns = st.columns(3)
    for index, user in enumerate(users):
        with columns[index % 3].container(border=True):
            render_user_card(access_token, user)


def handle_user_create(access_token):
    with st.form("create_user_form"):
        username = st.text_input("Username")
        email = st.text_input("Email")
        role = st.selectbox("Role", options=["USER", "ADMIN"])
        submitted = st.form_submit_button("Create User")

    if submitted:
        if not username or not email:
            st.error("Username and email are required.")
            return
        result = create_user(access_token, username, email, role)
        if result.get("error"):
            st.error(result["error"])
            return
        st.session_state["show_add_user"] = False
        st.success(f"✅ {username} created with the default password.")
        st.rerun()


def render_user_card(access_token, user):
    badge = " 🛡️ ADMIN" if user["role"] == "ADMIN" else ""
    st.markdown(f"**{user['username']}**{badge}")
    st.caption(f"✉️ {user['email']}")
    st.write("🟢 Active" if user["isActive"] else "🔴 Disabled")

    label = "Disable" if user["isActive"] else "Enable"
    if st.button(label, key=f"toggle_{user['id']}"):
        result = toggle_user_status(access_token, user["id"])
        if result.get("error"):
            st.error(result["error"])
        else:
            st.rerun()

    with st.popover("🔑 Reset Password"):
        new_password = st.text_input(
            f"New password for {user['username']}",
            type="password",
            key=f"password_{user['id']}",
        )
        if st.button("Update", key=f"reset_{user['id']}"):
            result = reset_password(access_token, user["id"], new_password)
            if result.get("error"):
                st.error(result["error"])
            else:
                st.success("Password updated.")
