"""
Phone Number Parser
===================

Normalizes free-form phone text and infers a coarse region and carrier
from North American area codes. Pure and total: no I/O, no randomness.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional
import re


AREA_CODE_REGIONS: Dict[str, str] = {
    "212": "New York, NY",
    "213": "Los Angeles, CA",
    "312": "Chicago, IL",
    "415": "San Francisco, CA",
    "617": "Boston, MA",
    "713": "Houston, TX",
    "305": "Miami, FL",
    "404": "Atlanta, GA",
    "206": "Seattle, WA",
    "702": "Las Vegas, NV",
}

US_DEFAULT_REGION = "United States"
UNKNOWN_REGION = "Unknown region"
US_CARRIER = "US Carrier"
UNKNOWN_CARRIER = "Unknown"

_NON_DIGITS = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class PhoneParseResult:
    """
    Outcome of parsing one phone string.

    Attributes:
        is_valid: Digit count within bounds
        normalized_digits: Input with every non-digit removed
        carrier_label: "US Carrier" for US-shaped numbers, else "Unknown"
        region_label: Area-code region, "United States" for unlisted US
                      area codes, "Unknown region" otherwise
    """
    is_valid: bool
    normalized_digits: str
    carrier_label: str = UNKNOWN_CARRIER
    region_label: str = UNKNOWN_REGION

    @property
    def area_code(self) -> Optional[str]:
        """Three-digit area code of a US-shaped number."""
        return _us_area_code(self.normalized_digits)

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "normalized_digits": self.normalized_digits,
            "carrier_label": self.carrier_label,
            "region_label": self.region_label,
        }


def _us_area_code(digits: str) -> Optional[str]:
    if len(digits) == 11 and digits.startswith("1"):
        return digits[1:4]
    if len(digits) == 10:
        return digits[0:3]
    return None


class PhoneNumberParser:
    """
    Phone number normalization and validation.

    Example:
        >>> PhoneNumberParser().parse("+1 (212) 555-0100")
        PhoneParseResult(is_valid=True, normalized_digits='12125550100',
                         carrier_label='US Carrier', region_label='New York, NY')
    """

    def __init__(
        self,
        min_digits: int = 10,
        max_digits: int = 15,
        area_codes: Optional[Dict[str, str]] = None,
    ):
        self.min_digits = min_digits
        self.max_digits = max_digits
        self.area_codes = dict(AREA_CODE_REGIONS if area_codes is None else area_codes)

    @staticmethod
    def normalize(raw: str) -> str:
        """Strip everything except ASCII digits 0-9."""
        return _NON_DIGITS.sub("", raw or "")

    def region_for_area_code(self, area_code: str) -> str:
        return self.area_codes.get(area_code, US_DEFAULT_REGION)

    def parse(self, raw: str) -> PhoneParseResult:
        """
        Parse a phone string.

        Args:
            raw: Free-form phone text

        Returns:
            PhoneParseResult (invalid when the digit count is out of bounds)
        """
        digits = self.normalize(raw)

        if not self.min_digits <= len(digits) <= self.max_digits:
            return PhoneParseResult(is_valid=False, normalized_digits=digits)

        area_code = _us_area_code(digits)
        if area_code is None:
            return PhoneParseResult(is_valid=True, normalized_digits=digits)

        return PhoneParseResult(
            is_valid=True,
            normalized_digits=digits,
            carrier_label=US_CARRIER,
            region_label=self.region_for_area_code(area_code),
        )
