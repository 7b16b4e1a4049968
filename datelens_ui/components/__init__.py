"""
UI Components
=============

Reusable Streamlit components for DateLens UI.
"""

import html
from typing import Optional

import streamlit as st

from datelens_core.synthesis.records import ProfileCategory, ProfileRecord
from datelens_core.validation.gate import HumanValidationResult


CATEGORY_COLOURS = {
    ProfileCategory.DATING: "#E91E63",
    ProfileCategory.SOCIAL: "#1E88E5",
    ProfileCategory.PROFESSIONAL: "#00897B",
    ProfileCategory.ADULT: "#6D4C41",
}


def profile_card(record: ProfileRecord) -> None:
    """
    Display one synthetic profile.

    Args:
        record: Profile record to show
    """
    colour = CATEGORY_COLOURS.get(record.category, "#9E9E9E")
    badge = " &#10003; verified" if record.verified else ""

    col1, col2 = st.columns([1, 3])

    with col1:
        st.image(record.image_ref, width=96)

    with col2:
        st.markdown(f"""
        <div class="profile-card" style="border-left: 4px solid {colour};">
            <strong>{html.escape(record.display_name)}</strong>{badge}<br>
            {html.escape(record.platform_name)} &middot; {record.category.value}<br>
            {html.escape(record.location_label)} &middot; last active {record.last_active_label}<br>
            Status: {html.escape(record.status_label)}
        </div>
        """, unsafe_allow_html=True)
        confidence_bar(record.match_score / 100, label="Match score")
        confidence_bar(record.similarity / 100, label="Similarity")


def validation_summary(validation: HumanValidationResult) -> None:
    """
    Display the outcome of human validation.

    Args:
        validation: Validation result
    """
    if validation.is_human:
        st.success(validation.message)
    else:
        st.warning(validation.message)

    col1, col2, col3 = st.columns(3)
    col1.metric("Faces", validation.face_count)
    col2.metric("Confidence", f"{validation.face_confidence:.0%}")
    col3.metric("Body detected", "Yes" if validation.body_detected else "No")

    if validation.used_fallback:
        st.caption("Face model unavailable: result based on pixel analysis only.")
    if validation.detected_objects:
        st.caption("Detected: " + ", ".join(validation.detected_objects))


def confidence_bar(
    score: float,
    label: Optional[str] = None,
) -> None:
    """
    Display a confidence bar.

    Args:
        score: Confidence score (0-1)
        label: Optional label
    """
    if score >= 0.8:
        colour = "#4CAF50"
    elif score >= 0.6:
        colour = "#FFC107"
    else:
        colour = "#F44336"

    st.markdown(f"""
    <div style="margin: 0.25rem 0;">
        {f'<p style="margin: 0 0 0.25rem 0;">{label}</p>' if label else ''}
        <div style="background-color: #e0e0e0; border-radius: 5px; overflow: hidden;">
            <div style="
                width: {score * 100}%;
                height: 18px;
                background-color: {colour};
                color: white;
                font-size: 0.8rem;
                line-height: 18px;
                text-align: center;
            ">
                {score:.0%}
            </div>
        </div>
    </div>
    """, unsafe_allow_html=True)
