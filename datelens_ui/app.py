"""
DateLens UI
===========

Streamlit application for the DateLens profile search.

Run with:
    streamlit run datelens_ui/app.py
"""

import streamlit as st

from datelens_core import __version__
from datelens_core.config import get_default_config
from datelens_core.utils import setup_logging
from datelens_ui.pages import home, photo_search, phone_search


config = get_default_config()
setup_logging(config.log_level)

# Page configuration
st.set_page_config(
    page_title=config.ui.page_title,
    page_icon=None,
    layout="wide",
    initial_sidebar_state="expanded",
)


# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2rem;
        font-weight: normal;
        color: #333;
        text-align: left;
        margin-bottom: 1.5rem;
    }
    .sub-header {
        font-size: 1rem;
        color: #555;
        text-align: left;
        margin-bottom: 1.5rem;
    }
    .metric-card {
        background-color: #fafafa;
        border: 1px solid #ddd;
        padding: 1rem;
        text-align: left;
    }
    .profile-card {
        padding: 0.5rem 1rem;
        margin: 0.25rem 0;
    }
</style>
""", unsafe_allow_html=True)


# Navigation
PAGES = {
    "Home": home,
    "Photo Search": photo_search,
    "Phone Search": phone_search,
}


def main():
    """Main application entry point."""

    st.sidebar.title(config.project_name)
    st.sidebar.markdown("---")

    selection = st.sidebar.radio(
        "Navigation",
        list(PAGES.keys()),
        label_visibility="collapsed",
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown("### Settings")
    st.sidebar.caption(f"Device: {config.device}")
    st.sidebar.caption(
        f"Face detection: {'on' if config.detection.enabled else 'off'}"
    )
    st.sidebar.caption(
        f"Background removal: {'on' if config.validation.remove_background else 'off'}"
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        f"<small>{config.project_name} v{__version__}</small>",
        unsafe_allow_html=True,
    )

    page = PAGES[selection]
    page.render()


if __name__ == "__main__":
    main()
