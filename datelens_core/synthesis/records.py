"""
Profile Records
===============

Synthetic profile record returned by a search.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ProfileCategory(str, Enum):
    """Kind of platform a profile lives on."""
    DATING = "dating"
    SOCIAL = "social"
    PROFESSIONAL = "professional"
    ADULT = "adult"


@dataclass(frozen=True)
class ProfileRecord:
    """
    One synthetic search result.

    Attributes:
        id: Unique within a single synthesis call
        platform_name: Platform the profile is attributed to
        category: Platform category
        display_name: "<First> <L>." style name
        location_label: "City, Region" label
        last_active_label: e.g. "3 days ago"
        match_score: Integer score [0, 100]
        image_ref: Placeholder face image URL
        verified: Verified-badge flag
        status_label: Account status text
        similarity: Integer similarity [0, 100], independent of match_score
    """
    id: str
    platform_name: str
    category: ProfileCategory
    display_name: str
    location_label: str
    last_active_label: str
    match_score: int
    image_ref: str
    verified: bool
    status_label: str
    similarity: int

    def __post_init__(self):
        for name in ("match_score", "similarity"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be within [0, 100], got {value}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "platform_name": self.platform_name,
            "category": self.category.value,
            "display_name": self.display_name,
            "location_label": self.location_label,
            "last_active_label": self.last_active_label,
            "match_score": self.match_score,
            "image_ref": self.image_ref,
            "verified": self.verified,
            "status_label": self.status_label,
            "similarity": self.similarity,
        }
