# app/ui/dashboard.py

import streamlit as st
from ui.grid import grid_view
from ui.records import list_view


def dashboard_page():
    st.title("Laboratory Logs")
    st.caption("Manage and track water quality samples.")

    view = st.radio(
        "View",
        options=["Daily Entry", "List View"],
        horizontal=True,
        key="view_mode",
        label_visibility="collapsed",
    )

    if view == "Daily Entry":
        grid_view()
    else:
        list_view()
