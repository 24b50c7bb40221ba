# app/ui/grid.py

import time
from datetime import date
import pandas as pd
import streamlit as st
from services.api import get_grid, save_grid


SAVE_DELAY_SECONDS = 0.6

COLUMNS = {
    "samplePoint": "Sampling Location",
    "attribute": "Attribute",
    "limit": "Limit",
    "observation24h": "24 Hours",
    "observation48h": "48 Hours",
    "observation72h": "72 Hours",
    "negativeControl": "Neg. Control",
    "remarks": "Remarks",
}

FIXED_COLUMNS = ["samplePoint", "attribute"]


def _text(value):
    return value if isinstance(value, str) else ""


def grid_view():
    access_token = st.session_state["access_token"]

    selected = st.date_input("Date", value=date.today(), key="grid_date")
    day = selected.isoformat()

    grid = get_grid(access_token, day)
    if isinstance(grid, dict) and grid.get("error"):
        st.error(grid["error"])
        return

    saved_message = st.session_state.pop("grid_saved_message", None)
    if saved_message:
        st.success(saved_message)

    editable = grid["editable"]
    if not editable:
        st.warning("🔒 Read Only: Past Date")

    frame = pd.DataFrame([
        {column: cell.get(column, "") for column in COLUMNS}
        for cell in grid["cells"]
    ])

    edited = st.data_editor(
        frame,
        column_config={
            column: st.column_config.TextColumn(label)
            for column, label in COLUMNS.items()
        },
        disabled=FIXED_COLUMNS if editable else True,
        hide_index=True,
        use_container_width=True,
        key=f"grid_editor_{day}",
    )

    if st.button("💾 Save All Changes", disabled=not editable, type="primary"):
        cells = [
            {"date": day, **{column: _text(value) for column, value in row.items()}}
            for row in edited.to_dict("records")
        ]
        with st.spinner("Saving..."):
            result = save_grid(access_token, day, cells)
            time.sleep(SAVE_DELAY_SECONDS)

        if result.get("error"):
            st.error(result["error"])
        else:
            # Pending edits are discarded; the rerun renders the saved grid
            st.session_state.pop(f"grid_editor_{day}", None)
            st.session_state["grid_saved_message"] = f"Successfully saved {result['saved']} entries."
            st.rerun()
