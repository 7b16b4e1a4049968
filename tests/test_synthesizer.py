"""
Test Result Synthesizer
=======================
"""

import random

import pytest

from datelens_core.config import SynthesisConfig
from datelens_core.phone.parser import PhoneNumberParser
from datelens_core.synthesis.pools import AFRICA_POOL, GENERIC_POOL, ProfilePool, get_pool
from datelens_core.synthesis.records import ProfileCategory, ProfileRecord
from datelens_core.synthesis.synthesizer import ResultSynthesizer
from datelens_core.validation.gate import HumanValidationResult


HUMAN = HumanValidationResult(True, 1, 0.9, True, "Detected 1 face(s) with 90% confidence")
NOT_HUMAN = HumanValidationResult(False, 0, 0.0, False, "No face detected in the image")


class TestProfileRecord:
    """Tests for ProfileRecord."""

    def test_score_range(self):
        """Test scores outside [0, 100] are rejected."""
        with pytest.raises(ValueError):
            ProfileRecord(
                id="x", platform_name="Tinder", category=ProfileCategory.DATING,
                display_name="Amina O.", location_label="Nairobi, Kenya",
                last_active_label="1 day ago", match_score=101, image_ref="",
                verified=False, status_label="active", similarity=50,
            )


class TestPools:
    """Tests for profile pools."""

    def test_get_pool(self):
        """Test pool lookup by name."""
        assert get_pool("generic") is GENERIC_POOL
        assert get_pool("africa") is AFRICA_POOL

    def test_unknown_pool(self):
        """Test that unknown pool names are rejected."""
        with pytest.raises(ValueError):
            get_pool("antarctica")

    def test_empty_pool_rejected(self):
        """Test that a pool without platforms is rejected."""
        with pytest.raises(ValueError):
            ProfilePool(
                name="empty", platforms=(), first_names=("A",), last_names=("B",),
                locations=("C",), statuses=("active",),
                default_category=ProfileCategory.SOCIAL,
            )

    def test_professional_platform(self):
        """Test LinkedIn is categorized as professional."""
        assert GENERIC_POOL.category_for("LinkedIn") == ProfileCategory.PROFESSIONAL
        assert GENERIC_POOL.category_for("Instagram") == ProfileCategory.SOCIAL


class TestSynthesizer:
    """Tests for ResultSynthesizer."""

    def test_not_human_yields_nothing(self):
        """Test a photo without a confirmed human yields no records."""
        synthesizer = ResultSynthesizer(rng=random.Random(1))

        assert synthesizer.synthesize(NOT_HUMAN) == []

    def test_invalid_phone_yields_nothing(self):
        """Test an invalid phone number yields no records."""
        synthesizer = ResultSynthesizer(rng=random.Random(1))

        assert synthesizer.synthesize(PhoneNumberParser().parse("12345")) == []

    def test_bounds_and_unique_ids(self):
        """Test record counts stay in bounds and ids are unique per call."""
        synthesizer = ResultSynthesizer(rng=random.Random(42))

        counts = set()
        for _ in range(200):
            records = synthesizer.synthesize(HUMAN)
            counts.add(len(records))
            assert len({r.id for r in records}) == len(records)

        assert counts == {1, 2, 3}

    def test_photo_records_use_generic_pool(self):
        """Test photo records draw from the generic pool."""
        synthesizer = ResultSynthesizer(rng=random.Random(3))

        for _ in range(20):
            for record in synthesizer.synthesize_for_photo(HUMAN):
                assert record.platform_name in GENERIC_POOL.platforms
                assert record.location_label in GENERIC_POOL.locations
                assert 60 <= record.match_score <= 89
                assert 60 <= record.similarity <= 99
                assert record.id.startswith("photo_")

    def test_phone_records_use_africa_pool(self):
        """Test phone records draw from the dating pool."""
        synthesizer = ResultSynthesizer(rng=random.Random(3))
        parse = PhoneNumberParser().parse("+254 712 345 678")

        for _ in range(20):
            for record in synthesizer.synthesize_for_phone(parse):
                assert record.platform_name in AFRICA_POOL.platforms
                assert record.category == ProfileCategory.DATING
                assert record.status_label in AFRICA_POOL.statuses
                assert record.id.startswith("phone_")

    def test_record_labels(self):
        """Test display name and last-active formatting."""
        synthesizer = ResultSynthesizer(rng=random.Random(5))

        for record in synthesizer.synthesize(HUMAN):
            first, initial = record.display_name.split(" ")
            assert first in GENERIC_POOL.first_names
            assert len(initial) == 2 and initial.endswith(".")
            assert record.last_active_label.endswith("ago")
            assert record.image_ref.startswith("https://")

    def test_seeded_runs_are_reproducible(self):
        """Test that equal seeds give equal records."""
        first = ResultSynthesizer(rng=random.Random(9)).synthesize(HUMAN)
        second = ResultSynthesizer(rng=random.Random(9)).synthesize(HUMAN)

        assert first == second

    def test_fixed_count(self):
        """Test equal bounds give an exact count."""
        synthesizer = ResultSynthesizer(min_results=2, max_results=2, rng=random.Random(0))

        assert len(synthesizer.synthesize(HUMAN)) == 2

    def test_invalid_bounds(self):
        """Test inverted bounds are rejected."""
        with pytest.raises(ValueError):
            ResultSynthesizer(min_results=3, max_results=1)

    def test_unsupported_source(self):
        """Test that other inputs are rejected."""
        with pytest.raises(TypeError):
            ResultSynthesizer().synthesize("photo")

    def test_from_config_seed(self):
        """Test a configured seed makes output reproducible."""
        config = SynthesisConfig(seed=11)

        first = ResultSynthesizer.from_config(config).synthesize(HUMAN)
        second = ResultSynthesizer.from_config(config).synthesize(HUMAN)

        assert first == second
