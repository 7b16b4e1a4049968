"""
Result Synthesizer
==================

Generates bounded sets of synthetic profile records for confirmed photo
and phone searches. No human confirmed, or no valid number, means zero
records, unconditionally.

All randomness flows through one injectable ``random.Random`` so tests
can pin a seed and check bounds.
"""

from __future__ import annotations

from typing import List, Optional, Union
import logging
import random

from datelens_core.config import SynthesisConfig
from datelens_core.phone.parser import PhoneParseResult
from datelens_core.synthesis.pools import ProfilePool, get_pool
from datelens_core.synthesis.records import ProfileRecord
from datelens_core.validation.gate import HumanValidationResult


logger = logging.getLogger(__name__)

IMAGE_URL_TEMPLATE = "https://images.unsplash.com/photo-{photo_id}?w=150&h=150&fit=crop&crop=face"


class ResultSynthesizer:
    """
    Synthetic profile generator.

    Example:
        >>> synthesizer = ResultSynthesizer(rng=random.Random(7))
        >>> records = synthesizer.synthesize(validation)
        >>> 1 <= len(records) <= 3
        True
    """

    def __init__(
        self,
        min_results: int = 1,
        max_results: int = 3,
        photo_pool: Union[str, ProfilePool] = "generic",
        phone_pool: Union[str, ProfilePool] = "africa",
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            min_results: Minimum records for a positive search
            max_results: Maximum records for a positive search
            photo_pool: Pool (or pool name) for photo searches
            phone_pool: Pool (or pool name) for phone searches
            rng: Random source (a fresh unseeded Random when None)
        """
        if not 1 <= min_results <= max_results:
            raise ValueError(f"Invalid result bounds: [{min_results}, {max_results}]")

        self.min_results = min_results
        self.max_results = max_results
        self.photo_pool = get_pool(photo_pool) if isinstance(photo_pool, str) else photo_pool
        self.phone_pool = get_pool(phone_pool) if isinstance(phone_pool, str) else phone_pool
        self.rng = rng or random.Random()

    @classmethod
    def from_config(
        cls,
        config: SynthesisConfig,
        rng: Optional[random.Random] = None,
    ) -> "ResultSynthesizer":
        """Create a synthesizer from a SynthesisConfig."""
        return cls(
            min_results=config.min_results,
            max_results=config.max_results,
            photo_pool=config.photo_pool,
            phone_pool=config.phone_pool,
            rng=rng or random.Random(config.seed),
        )

    def synthesize(
        self,
        source: Union[HumanValidationResult, PhoneParseResult],
    ) -> List[ProfileRecord]:
        """
        Generate records for a validated photo or a parsed phone number.

        Raises:
            TypeError: For any other source type
        """
        if isinstance(source, HumanValidationResult):
            return self.synthesize_for_photo(source)
        if isinstance(source, PhoneParseResult):
            return self.synthesize_for_phone(source)
        raise TypeError(f"Cannot synthesize results from {type(source).__name__}")

    def synthesize_for_photo(self, validation: HumanValidationResult) -> List[ProfileRecord]:
        """Records for a photo search; empty unless a human is confirmed."""
        if not validation.is_human:
            logger.info("No human confirmed in image - returning empty results")
            return []
        return self._generate(self.photo_pool, prefix="photo")

    def synthesize_for_phone(self, parse: PhoneParseResult) -> List[ProfileRecord]:
        """Records for a phone search; empty unless the number is valid."""
        if not parse.is_valid:
            logger.info("Invalid phone number - returning empty results")
            return []
        return self._generate(self.phone_pool, prefix="phone")

    def _generate(self, pool: ProfilePool, prefix: str) -> List[ProfileRecord]:
        count = self.rng.randint(self.min_results, self.max_results)
        # Shared per-call token, index keeps ids distinct within the call
        token = f"{self.rng.getrandbits(48):012x}"

        records = [
            self._make_record(pool, record_id=f"{prefix}_{token}_{i}")
            for i in range(count)
        ]

        logger.info(f"Generated {len(records)} {pool.name} profile(s)")
        return records

    def _make_record(self, pool: ProfilePool, record_id: str) -> ProfileRecord:
        rng = self.rng

        first_name = rng.choice(pool.first_names)
        last_name = rng.choice(pool.last_names)
        platform = rng.choice(pool.platforms)
        days = rng.randint(*pool.last_active_days)

        return ProfileRecord(
            id=record_id,
            platform_name=platform,
            category=pool.category_for(platform),
            display_name=f"{first_name} {last_name[0]}.",
            location_label=rng.choice(pool.locations),
            last_active_label=f"{days} day ago" if days == 1 else f"{days} days ago",
            match_score=rng.randint(*pool.match_score_range),
            image_ref=IMAGE_URL_TEMPLATE.format(
                photo_id=1500000000000 + rng.randrange(100000000)
            ),
            verified=rng.random() < pool.verified_probability,
            status_label=rng.choice(pool.statuses),
            similarity=rng.randint(*pool.similarity_range),
        )
