"""
Phone Search Page
=================

Search synthetic profiles by phone number.
"""

import asyncio

import streamlit as st

from datelens_core.pipeline.search import perform_phone_search
from datelens_ui.components import profile_card


def render():
    """Render the phone search page."""

    st.title("Phone Search")
    st.markdown("Enter a phone number in any format, e.g. `+1 (212) 555-0100`.")

    st.markdown("---")

    with st.form("phone_search"):
        phone_text = st.text_input("Phone number")
        submitted = st.form_submit_button("Search")

    if not submitted:
        return

    with st.spinner("Searching..."):
        envelope = asyncio.run(perform_phone_search(phone_text))

    if not envelope.success:
        st.error(envelope.error_message)
        return

    info = envelope.payload.phone_info
    col1, col2, col3 = st.columns(3)
    col1.metric("Number", info.normalized_digits)
    col2.metric("Carrier", info.carrier_label)
    col3.metric("Region", info.region_label)

    st.markdown("---")
    st.subheader(f"{len(envelope.records)} profile(s) found")
    for record in envelope.records:
        profile_card(record)
