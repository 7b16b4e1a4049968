"""
UI Pages
========

Streamlit pages for DateLens UI.
"""

from datelens_ui.pages import home, photo_search, phone_search

__all__ = [
    "home",
    "photo_search",
    "phone_search",
]
