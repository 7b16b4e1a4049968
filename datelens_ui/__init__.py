"""
DateLens UI
===========

Streamlit front end for the DateLens profile search core.
"""
