"""
Photo Search Page
=================

Search synthetic profiles by uploading a photo.
"""

import asyncio

import streamlit as st
from PIL import Image

from datelens_core.config import get_default_config
from datelens_core.pipeline.search import perform_image_search
from datelens_ui.components import profile_card, validation_summary


def render():
    """Render the photo search page."""

    ui_config = get_default_config().ui

    st.title("Photo Search")
    st.markdown(
        "Upload a clear photo of a person. Photos without a person return no profiles."
    )

    st.markdown("---")

    uploaded_file = st.file_uploader(
        "Upload an image",
        type=ui_config.allowed_formats,
        help="Upload a photo containing one person",
    )

    if uploaded_file is None:
        return

    data = uploaded_file.getvalue()
    if len(data) > ui_config.max_upload_size_mb * 1024 * 1024:
        st.error(f"File is larger than {ui_config.max_upload_size_mb} MB")
        return

    col1, col2 = st.columns([1, 1])

    with col1:
        st.subheader("Uploaded Image")
        st.image(Image.open(uploaded_file), use_container_width=True)

    with col2:
        st.subheader("Results")

        with st.spinner("Analyzing..."):
            envelope = asyncio.run(perform_image_search(data))

        if not envelope.success:
            st.error(envelope.error_message)
            return

        payload = envelope.payload
        validation_summary(payload.validation)

        if payload.cutout is not None:
            with st.expander("Background removed"):
                st.image(payload.cutout.pixels, use_container_width=True)

    if not payload.records:
        st.info("No profiles found")
        return

    st.markdown("---")
    st.subheader(f"{len(payload.records)} profile(s) found")
    for record in payload.records:
        profile_card(record)
