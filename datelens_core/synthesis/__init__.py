"""
Synthesis Module
================

Synthetic profile generation for confirmed searches.
"""

from datelens_core.synthesis.records import ProfileCategory, ProfileRecord
from datelens_core.synthesis.pools import (
    AFRICA_POOL,
    GENERIC_POOL,
    POOLS,
    ProfilePool,
    get_pool,
)
from datelens_core.synthesis.synthesizer import ResultSynthesizer

__all__ = [
    "ProfileCategory",
    "ProfileRecord",
    "AFRICA_POOL",
    "GENERIC_POOL",
    "POOLS",
    "ProfilePool",
    "get_pool",
    "ResultSynthesizer",
]
