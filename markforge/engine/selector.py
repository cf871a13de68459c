"""Heuristic algorithm selection from brand-name features."""
from __future__ import annotations

import re

from markforge.engine.algorithms import ALL_ALGORITHMS, Algorithm
from markforge.engine.seed import normalize_brand_name
from markforge.utils.seed import name_digest

GOOD_INITIALS = frozenset("akmvw")
ROUNDED_INITIALS = frozenset("oqc")
NEGATIVE_SPACE_INITIALS = frozenset("khnm")

_SECOND_INITIAL = re.compile(r"\s[a-z]", re.IGNORECASE)
_TECH_KEYWORDS = re.compile(r"tech|data|cloud|ai|digital")
_PREMIUM_KEYWORDS = re.compile(r"pro|premium|elite|halo|glow|light")


def select_algorithm(brand_name: str) -> Algorithm:
    """Pick the algorithm with the best thematic fit; first matching rule wins."""

    brand = normalize_brand_name(brand_name)
    name = brand.lower()
    digest = name_digest(brand)
    first = name[0]
    is_short = len(name) <= 5

    if is_short and first in GOOD_INITIALS:
        return Algorithm.LETTER_FUSION if digest[0] > 128 else Algorithm.LETTER_EXTRACT
    if _SECOND_INITIAL.search(brand):
        return Algorithm.MONOGRAM_MERGE
    if first in ROUNDED_INITIALS or len(name) == 4:
        return Algorithm.CLOVER_RADIAL
    if is_short and digest[1] > 180:
        return Algorithm.SINGLE_STROKE
    if len(name) > 10 or _TECH_KEYWORDS.search(name):
        return Algorithm.INTERLOCKING_GEOMETRY
    if _PREMIUM_KEYWORDS.search(name):
        return Algorithm.GRADIENT_GLOW
    if first in NEGATIVE_SPACE_INITIALS:
        return Algorithm.NEGATIVE_SPACE_LETTER
    return ALL_ALGORITHMS[digest[2] % len(ALL_ALGORITHMS)]
