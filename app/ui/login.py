# app/ui/login.py

import os
import time
import streamlit as st
from dotenv import load_dotenv
from streamlit_cookies_manager import EncryptedCookieManager
from services.api import login_user, get_user_info

load_dotenv()

COOKIE_PASSWORD = os.getenv("COOKIE_PASSWORD", "aqualims-cookie-secret")
LOGIN_DELAY_SECONDS = 0.5

cookies = EncryptedCookieManager(prefix="aqualims/", password=COOKIE_PASSWORD)
if not cookies.ready():
    st.stop()


def logout():
    st.session_state.pop("access_token", None)
    st.session_state.pop("user", None)
    if "access_token" in cookies:
        del cookies["access_token"]
        cookies.save()


def start_session(access_token):
    """
    Loads the profile behind the token into the session.
    Returns False when the token is no longer accepted.
    """
    user = get_user_info(access_token)
    if not user or user.get("error"):
        return False
    st.session_state["access_token"] = access_token
    st.session_state["user"] = user
    return True


def login_page():
    st.title("🔐 AquaLIMS Login")

    if "access_token" not in st.session_state and cookies.get("access_token"):
        if start_session(cookies["access_token"]):
            st.rerun()
        logout()

    show_login_form()


def show_login_form():
    with st.form("login_form"):
        identifier = st.text_input("Username or email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if submitted:
        with st.spinner("Signing in..."):
            time.sleep(LOGIN_DELAY_SECONDS)
            result = login_user(identifier, password)

        if result.get("error"):
            st.error("❌ Invalid credentials or inactive account.")
            return

        if not start_session(result["access_token"]):
            st.error("❌ Could not load your profile.")
            return

        cookies["access_token"] = result["access_token"]
        cookies.save()
        st.rerun()
