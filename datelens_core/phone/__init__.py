"""
Phone Module
============

Phone number parsing and area-code region lookup.
"""

from datelens_core.phone.parser import (
    AREA_CODE_REGIONS,
    PhoneNumberParser,
    PhoneParseResult,
)

__all__ = [
    "AREA_CODE_REGIONS",
    "PhoneNumberParser",
    "PhoneParseResult",
]
