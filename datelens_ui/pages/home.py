"""
Home Page
=========

Landing page with a short overview.
"""

import streamlit as st


def render():
    """Render the home page."""

    st.markdown(
        '<h1 class="main-header">DateLens Profile Search</h1>',
        unsafe_allow_html=True,
    )

    st.markdown(
        '<p class="sub-header">'
        'Upload a photo or enter a phone number to see example dating and '
        'social profiles. All results are generated for demonstration and do '
        'not come from any real platform.'
        '</p>',
        unsafe_allow_html=True,
    )

    col1, col2 = st.columns(2)

    with col1:
        st.markdown("""
        <div class="metric-card">
            <h3>Photo Search</h3>
            <p>The photo is checked for a real person first. Photos
            without a person return no profiles.</p>
        </div>
        """, unsafe_allow_html=True)

    with col2:
        st.markdown("""
        <div class="metric-card">
            <h3>Phone Search</h3>
            <p>Numbers with 10 to 15 digits are accepted. US area codes
            are mapped to their region.</p>
        </div>
        """, unsafe_allow_html=True)

    st.markdown("---")
    st.subheader("Privacy")
    st.markdown("""
    - Uploaded photos and numbers are processed in memory only
    - Nothing is stored or sent to third parties
    - No real profile lookup takes place
    """)
