# app/ui/records.py

from datetime import date
import streamlit as st
from services.api import get_options, list_records, create_record, update_record


LIST_COLUMNS = {
    "date": "Date",
    "samplePoint": "Sample Point",
    "attribute": "Attribute",
    "limit": "Limit",
    "observation24h": "24h",
    "observation48h": "48h",
    "observation72h": "72h",
    "negativeControl": "Neg. Control",
    "remarks": "Remarks",
    "createdBy": "Entered By",
    "lastModifiedBy": "Modified By",
    "adminRemark": "Admin Remark",
}


FILTER_KEYS = ["filter_search", "filter_sample", "filter_attribute", "filter_start", "filter_end"]


def clear_filters():
    for key in FILTER_KEYS:
        st.session_state.pop(key, None)
    st.session_state["filters_cleared"] = True


def list_view():
    access_token = st.session_state["access_token"]
    user = st.session_state["user"]

    options = get_options()
    if options.get("error"):
        st.error(options["error"])
        return

    # The list starts out showing records from today onwards, until filters are cleared
    default_start = None if st.session_state.get("filters_cleared") else date.today()

    with st.expander("🔍 Filters", expanded=True):
        st.text_input("Search", key="filter_search", placeholder="Sample point, attribute, user or remarks")

        c1, c2, c3, c4 = st.columns(4)
        c1.selectbox(
            "Sample Point",
            options=[""] + options["samplePoints"],
            format_func=lambda v: v or "All Sample Points",
            key="filter_sample",
        )
        c2.selectbox(
            "Attribute",
            options=[""] + options["attributes"],
            format_func=lambda v: v or "All Attributes",
            key="filter_attribute",
        )
        c3.date_input("From", value=default_start, key="filter_start")
        c4.date_input("To", value=None, key="filter_end")

        st.button("✖ Clear filters", on_click=clear_filters)

    start = st.session_state.get("filter_start")
    end = st.session_state.get("filter_end")
    result = list_records(
        access_token,
        search=st.session_state.get("filter_search"),
        sample_point=st.session_state.get("filter_sample"),
        attribute=st.session_state.get("filter_attribute"),
        date_start=start.isoformat() if start else None,
        date_end=end.isoformat() if end else None,
    )
    if result.get("error"):
        st.error(result["error"])
        return

    records = result["records"]
    st.caption(f"{len(records)} records · {result['active_filters']} active filters")

    if records:
        st.dataframe(
            [{label: r.get(key, "") for key, label in LIST_COLUMNS.items()} for r in records],
            hide_index=True,
            use_container_width=True,
        )
    else:
        st.info("No records match the current filters.")

    with st.expander("➕ New Entry"):
        entry = record_form("new_record_form", {}, options, editing=False)
        if entry is not None:
            created = create_record(access_token, entry)
            if created.get("error"):
                st.error(created["error"])
            else:
                st.success("✅ Record created.")
                st.rerun()

    if user.get("role") == "ADMIN" and records:
        with st.expander("✏️ Edit Record"):
            handle_record_edit(access_token, records, options)


def handle_record_edit(access_token, records, options):
    by_id = {r["id"]: r for r in records}
    record_id = st.selectbox(
        "Record",
        options=list(by_id),
        format_func=lambda rid: f"{by_id[rid]['date']} · {by_id[rid]['samplePoint']} · {by_id[rid]['attribute']}",
        key="edit_record_id",
    )

    entry = record_form(f"edit_record_form_{record_id}", by_id[record_id], options, editing=True)
    if entry is not None:
        updated = update_record(access_token, record_id, entry)
        if updated.get("error"):
            st.error(updated["error"])
        else:
            st.success("✅ Record updated.")
            st.rerun()


def record_form(form_key, initial, options, editing):
    """
    Renders the manual entry form and returns the payload once submitted.
    Validation happens on the server; its message is shown by the caller.
    """
    sample_points = options["samplePoints"]
    attributes = options["attributes"]

    with st.form(form_key):
        c1, c2, c3 = st.columns(3)
        entry_date = c1.date_input(
            "Date",
            value=date.fromisoformat(initial["date"]) if initial.get("date") else date.today(),
            key=f"{form_key}_date",
        )
        sample_point = c2.selectbox(
            "Sample Point",
            options=sample_points,
            index=sample_points.index(initial["samplePoint"]) if initial.get("samplePoint") in sample_points else 0,
            key=f"{form_key}_sample_point",
        )
        attribute = c3.selectbox(
            "Attribute",
            options=attributes,
            index=attributes.index(initial["attribute"]) if initial.get("attribute") in attributes else 0,
            key=f"{form_key}_attribute",
        )
        limit = st.text_input("Limit", value=initial.get("limit", ""), key=f"{form_key}_limit")

        o1, o2, o3, o4 = st.columns(4)
        observation_24h = o1.text_input("24 Hours", value=initial.get("observation24h", ""), key=f"{form_key}_observation24h")
        observation_48h = o2.text_input("48 Hours", value=initial.get("observation48h", ""), key=f"{form_key}_observation48h")
        observation_72h = o3.text_input("72 Hours", value=initial.get("observation72h", ""), key=f"{form_key}_observation72h")
        negative_control = o4.text_input("Neg. Control", value=initial.get("negativeControl", ""), key=f"{form_key}_negativeControl")
        remarks = st.text_area("Remarks", value=initial.get("remarks", ""), key=f"{form_key}_remarks")

        admin_remark = None
        if editing:
            admin_remark = st.text_area("Admin Remark (required for modifications)", key=f"{form_key}_admin_remark")

        submitted = st.form_submit_button("Update Record" if editing else "Create Record")

    if not submitted:
        return None

    entry = {
        "date": entry_date.isoformat() if entry_date else None,
        "samplePoint": sample_point,
        "attribute": attribute,
        "limit": limit,
        "observation24h": observation_24h,
        "observation48h": observation_48h,
        "observation72h": observation_72h,
        "negativeControl": negative_control,
        "remarks": remarks,
    }
    if editing:
        entry["adminRemark"] = admin_remark
    return entry
