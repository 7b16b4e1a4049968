"""
Test Phone Number Parser
========================
"""

import pytest

from datelens_core.phone.parser import (
    PhoneNumberParser,
    UNKNOWN_CARRIER,
    UNKNOWN_REGION,
    US_CARRIER,
    US_DEFAULT_REGION,
)


@pytest.fixture
def parser():
    return PhoneNumberParser()


class TestNormalize:
    """Tests for digit normalization."""

    def test_strips_formatting(self, parser):
        """Test that every non-digit is removed."""
        assert parser.normalize("+1 (212) 555-0100") == "12125550100"

    def test_none_and_empty(self, parser):
        """Test that missing input normalizes to an empty string."""
        assert parser.normalize("") == ""
        assert parser.normalize(None) == ""


class TestParse:
    """Tests for PhoneNumberParser.parse."""

    def test_us_number_with_country_code(self, parser):
        """Test an 11-digit US number with a listed area code."""
        result = parser.parse("+1 (212) 555-0100")

        assert result.is_valid is True
        assert result.normalized_digits == "12125550100"
        assert result.carrier_label == US_CARRIER
        assert result.region_label == "New York, NY"
        assert result.area_code == "212"

    def test_ten_digit_number(self, parser):
        """Test a 10-digit number is read as US."""
        result = parser.parse("415.555.0199")

        assert result.region_label == "San Francisco, CA"
        assert result.carrier_label == US_CARRIER

    def test_unlisted_area_code(self, parser):
        """Test an unlisted US area code falls back to the country."""
        result = parser.parse("999-555-0100")

        assert result.is_valid is True
        assert result.region_label == US_DEFAULT_REGION

    def test_international_number(self, parser):
        """Test a non-US number has unknown carrier and region."""
        result = parser.parse("+254 712 345 678")

        assert result.is_valid is True
        assert result.normalized_digits == "254712345678"
        assert result.carrier_label == UNKNOWN_CARRIER
        assert result.region_label == UNKNOWN_REGION
        assert result.area_code is None

    def test_eleven_digits_without_leading_one(self, parser):
        """Test an 11-digit number not starting with 1 is not US."""
        result = parser.parse("44 20 7946 095")

        assert result.is_valid is True
        assert result.carrier_label == UNKNOWN_CARRIER

    @pytest.mark.parametrize("text", ["12345", "", "abc", "1234567890123456"])
    def test_invalid_lengths(self, parser, text):
        """Test numbers outside 10 to 15 digits are invalid."""
        result = parser.parse(text)

        assert result.is_valid is False
        assert result.region_label == UNKNOWN_REGION

    def test_bounds_inclusive(self, parser):
        """Test the digit bounds are inclusive."""
        assert parser.parse("1" * 15).is_valid is True
        assert parser.parse("2" * 10).is_valid is True

    def test_pure(self, parser):
        """Test that parsing is deterministic."""
        assert parser.parse("+1 (312) 555-0100") == parser.parse("+1 (312) 555-0100")

    def test_custom_area_codes(self):
        """Test a custom area code table."""
        parser = PhoneNumberParser(area_codes={"503": "Portland, OR"})

        assert parser.parse("5035550100").region_label == "Portland, OR"
        assert parser.parse("2125550100").region_label == US_DEFAULT_REGION

    @pytest.mark.parametrize("text", [
        "\u0662\u0661\u0662\u0665\u0665\u0665\u0660\u0661\u0660\u0660",
        "\uff0b\uff11 (\uff12\uff11\uff12) \uff15\uff15\uff15-\uff10\uff11\uff10\uff10",
    ])
    def test_non_ascii_digits_stripped(self, parser, text):
        """Test Arabic-Indic and full-width digits are not counted."""
        result = parser.parse(text)

        assert result.normalized_digits == ""
        assert result.is_valid is False

    def test_mixed_digits_keep_ascii_only(self, parser):
        """Test only ASCII digits survive normalization."""
        result = parser.parse("+1 (212) 555-0100 \uff11\uff12")

        assert result.normalized_digits == "12125550100"
        assert result.normalized_digits.isascii()
        assert result.region_label == "New York, NY"

    def test_to_dict(self, parser):
        """Test dictionary conversion."""
        data = parser.parse("2125550100").to_dict()

        assert data == {
            "is_valid": True,
            "normalized_digits": "2125550100",
            "carrier_label": US_CARRIER,
            "region_label": "New York, NY",
        }
