"""The closed set of mark generation algorithms."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union


class Algorithm(str, Enum):
    LETTER_FUSION = "letter-fusion"
    INTERLOCKING_GEOMETRY = "interlocking-geometry"
    NEGATIVE_SPACE_LETTER = "negative-space-letter"
    MONOGRAM_MERGE = "monogram-merge"
    CLOVER_RADIAL = "clover-radial"
    SINGLE_STROKE = "single-stroke"
    LETTER_EXTRACT = "letter-extract"
    GRADIENT_GLOW = "gradient-glow"

    def __str__(self) -> str:
        return self.value


# Order is significant: the selector's fallback indexes into it.
ALL_ALGORITHMS: Tuple[Algorithm, ...] = tuple(Algorithm)


@dataclass(frozen=True)
class AlgorithmInfo:
    name: str
    description: str
    example: str


_ALGORITHM_INFO: Dict[Algorithm, AlgorithmInfo] = {
    Algorithm.LETTER_FUSION: AlgorithmInfo(
        name="Letter Fusion",
        description="Initial letterform merged with abstract concept",
        example="A + leaf, K + arrow",
    ),
    Algorithm.INTERLOCKING_GEOMETRY: AlgorithmInfo(
        name="Interlocking Geometry",
        description="Multiple shapes weaving together",
        example="3 shapes interlocked",
    ),
    Algorithm.NEGATIVE_SPACE_LETTER: AlgorithmInfo(
        name="Negative Space Letter",
        description="Letter revealed through strategic cutouts",
        example="K from cutouts",
    ),
    Algorithm.MONOGRAM_MERGE: AlgorithmInfo(
        name="Monogram Merge",
        description="Two letters sharing common strokes",
        example="DB sharing stem",
    ),
    Algorithm.CLOVER_RADIAL: AlgorithmInfo(
        name="Clover Radial",
        description="Shape repeated with rotational symmetry",
        example="4-petal clover",
    ),
    Algorithm.SINGLE_STROKE: AlgorithmInfo(
        name="Single Stroke",
        description="Continuous line forming abstract mark",
        example="One flowing line",
    ),
    Algorithm.LETTER_EXTRACT: AlgorithmInfo(
        name="Letter Extract",
        description="Stylized portion of letterform",
        example="A apex triangle",
    ),
    Algorithm.GRADIENT_GLOW: AlgorithmInfo(
        name="Gradient Glow",
        description="Shape with luminous inner gradient",
        example="Glowing orb",
    ),
}


def parse_algorithm(value: Union[str, Algorithm]) -> Algorithm:
    if isinstance(value, Algorithm):
        return value
    try:
        return Algorithm(value.strip().lower())
    except ValueError as exc:
        valid = ", ".join(a.value for a in ALL_ALGORITHMS)
        raise ValueError(f"Unsupported algorithm: {value!r} (expected one of {valid})") from exc


def algorithm_info(algorithm: Union[str, Algorithm]) -> AlgorithmInfo:
    return _ALGORITHM_INFO[parse_algorithm(algorithm)]
