"""
Profile Pools
=============

Fixed vocabularies that synthetic profiles are sampled from.

Two coherent pools exist. ``generic`` is used for photo searches:
mainstream social platforms, Western names and US cities. ``africa``
is used for phone searches: dating platforms only, African names and
African cities, each city labelled with its own country.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from datelens_core.synthesis.records import ProfileCategory


@dataclass(frozen=True)
class ProfilePool:
    """
    Vocabulary and numeric ranges for one family of synthetic profiles.

    Ranges are inclusive (low, high) integer bounds.
    """
    name: str
    platforms: Tuple[str, ...]
    first_names: Tuple[str, ...]
    last_names: Tuple[str, ...]
    locations: Tuple[str, ...]
    statuses: Tuple[str, ...]
    default_category: ProfileCategory
    platform_categories: Dict[str, ProfileCategory] = field(default_factory=dict)
    last_active_days: Tuple[int, int] = (1, 30)
    match_score_range: Tuple[int, int] = (60, 89)
    similarity_range: Tuple[int, int] = (60, 99)
    verified_probability: float = 0.3

    def __post_init__(self):
        for attr in ("platforms", "first_names", "last_names", "locations", "statuses"):
            if not getattr(self, attr):
                raise ValueError(f"Pool '{self.name}' has no {attr}")
        for attr in ("match_score_range", "similarity_range"):
            low, high = getattr(self, attr)
            if not 0 <= low <= high <= 100:
                raise ValueError(f"Pool '{self.name}' has invalid {attr}: {(low, high)}")
        low, high = self.last_active_days
        if not 0 <= low <= high:
            raise ValueError(f"Pool '{self.name}' has invalid last_active_days: {(low, high)}")

    def category_for(self, platform: str) -> ProfileCategory:
        return self.platform_categories.get(platform, self.default_category)


GENERIC_POOL = ProfilePool(
    name="generic",
    platforms=("Instagram", "Facebook", "LinkedIn", "Twitter", "TikTok"),
    first_names=("Alex", "Jordan", "Casey", "Morgan", "Riley", "Taylor", "Jamie", "Avery"),
    last_names=("Smith", "Johnson", "Brown", "Davis", "Miller", "Wilson", "Moore", "Taylor"),
    locations=(
        "New York, NY",
        "Los Angeles, CA",
        "Chicago, IL",
        "Houston, TX",
        "Phoenix, AZ",
        "Philadelphia, PA",
    ),
    statuses=("active", "private", "public"),
    default_category=ProfileCategory.SOCIAL,
    platform_categories={"LinkedIn": ProfileCategory.PROFESSIONAL},
    last_active_days=(1, 30),
    match_score_range=(60, 89),
    similarity_range=(60, 99),
)

AFRICA_POOL = ProfilePool(
    name="africa",
    platforms=(
        "Tinder", "Bumble", "Hinge", "OkCupid", "Match.com", "eHarmony",
        "Coffee Meets Bagel", "Plenty of Fish", "Zoosk", "Elite Singles",
        "Christian Mingle", "JDate", "BlackPeopleMeet", "Silver Singles",
        "OurTime", "SeniorMatch", "FarmersOnly", "JSwipe",
    ),
    first_names=(
        "Amina", "Fatima", "Hassan", "Ali", "Mariam", "Ahmed", "Zainab", "Omar",
        "Aisha", "Khalid", "Naima", "Yusuf", "Halima", "Abdullah", "Safiya", "Ibrahim",
        "Chioma", "Kemi", "Adebayo", "Folake", "Tunde", "Bisi", "Ayo",
        "Ngozi", "Chukwudi", "Ifeoma", "Emeka",
    ),
    last_names=(
        "Ochieng", "Odhiambo", "Onyango", "Otieno", "Ouma", "Owino", "Owuor",
        "Wanjiku", "Wanjiru", "Wambui", "Wambugu", "Wamalwa", "Wamae", "Wanjala",
        "Okechukwu", "Nwachukwu", "Eze", "Okafor", "Okonkwo", "Nwankwo", "Ezechi",
        "Obi", "Nwosu", "Okeke", "Onyeka", "Ezeogu", "Nwabueze", "Okoro",
    ),
    locations=(
        "Nairobi, Kenya", "Mombasa, Kenya", "Kisumu, Kenya", "Nakuru, Kenya",
        "Eldoret, Kenya", "Thika, Kenya", "Malindi, Kenya", "Kitale, Kenya",
        "Lagos, Nigeria", "Abuja, Nigeria", "Kano, Nigeria", "Ibadan, Nigeria",
        "Port Harcourt, Nigeria", "Kaduna, Nigeria", "Enugu, Nigeria", "Calabar, Nigeria",
        "Johannesburg, South Africa", "Cape Town, South Africa", "Durban, South Africa",
        "Pretoria, South Africa", "Port Elizabeth, South Africa", "Bloemfontein, South Africa",
        "Accra, Ghana", "Kumasi, Ghana", "Tamale, Ghana", "Sekondi-Takoradi, Ghana",
        "Ashaiman, Ghana", "Sunyani, Ghana",
        "Kampala, Uganda", "Gulu, Uganda", "Lira, Uganda", "Mbarara, Uganda",
        "Jinja, Uganda", "Arua, Uganda",
        "Dar es Salaam, Tanzania", "Mwanza, Tanzania", "Arusha, Tanzania",
        "Dodoma, Tanzania", "Mbeya, Tanzania", "Morogoro, Tanzania",
        "Addis Ababa, Ethiopia", "Dire Dawa, Ethiopia", "Mekelle, Ethiopia",
        "Gondar, Ethiopia", "Bahir Dar, Ethiopia", "Hawassa, Ethiopia",
    ),
    statuses=("active", "online", "recently active"),
    default_category=ProfileCategory.DATING,
    last_active_days=(1, 14),
    match_score_range=(65, 94),
    similarity_range=(65, 99),
)

POOLS: Dict[str, ProfilePool] = {
    GENERIC_POOL.name: GENERIC_POOL,
    AFRICA_POOL.name: AFRICA_POOL,
}


def get_pool(name: str) -> ProfilePool:
    """
    Look up a pool by name.

    Raises:
        ValueError: If the pool does not exist
    """
    try:
        return POOLS[name]
    except KeyError:
        raise ValueError(f"Unknown profile pool '{name}'. Available: {sorted(POOLS)}") from None
