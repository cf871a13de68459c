"""Seed parameter model and hash-based extraction.

Every field of :class:`SeedParameters` is read from its own byte of the
primary digest. Three conversions are used:

* ``normalized``: linear map of the byte (0-255) into ``[lo, hi]``
* ``integer``: floor of ``normalized`` over ``[lo, hi + 0.99]``, inclusive range
* ``choice``: ``options[byte % len(options)]``

The letter-anatomy fields (bytes 20-23) are anchored to a digest of the
brand name alone, so fresh salts for the same brand keep a family
resemblance. The ranges below are part of the renderer contract.
"""
from __future__ import annotations

import math
from typing import Literal, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from markforge.utils.seed import DIGEST_SIZE, DigestLike, coerce_digest, name_digest

T = TypeVar("T")

StrokeCap = Literal["round", "square", "butt"]
StrokeJoin = Literal["round", "bevel", "miter"]
SymmetryType = Literal["bilateral", "radial", "none", "point"]
GradientType = Literal["linear", "radial", "none"]
LetterPart = Literal["stem", "bowl", "crossbar", "terminal", "apex", "counter", "serif", "full"]
LetterWeight = Literal["light", "regular", "bold", "heavy"]

STROKE_CAPS: tuple[StrokeCap, ...] = ("round", "square", "butt")
STROKE_JOINS: tuple[StrokeJoin, ...] = ("round", "bevel", "miter")
SYMMETRY_TYPES: tuple[SymmetryType, ...] = ("bilateral", "radial", "none", "point")
GRADIENT_TYPES: tuple[GradientType, ...] = ("linear", "radial", "none")
LETTER_PARTS: tuple[LetterPart, ...] = ("stem", "bowl", "crossbar", "terminal", "apex", "counter", "serif", "full")
LETTER_WEIGHTS: tuple[LetterWeight, ...] = ("light", "regular", "bold", "heavy")


class SeedParameters(BaseModel):
    """Immutable visual parameters derived from a master seed digest."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    # stroke
    stroke_width: float = Field(ge=1, le=8)
    stroke_taper: float = Field(ge=0, le=100)
    stroke_cap: StrokeCap
    stroke_join: StrokeJoin
    stroke_dash_ratio: float = Field(ge=0, le=1)

    # shape
    corner_radius: float = Field(ge=0, le=50)
    rotation: float = Field(ge=0, le=360)
    curve_tension: float = Field(ge=0.1, le=1.0)
    element_count: int = Field(ge=2, le=6)
    spacing_ratio: float = Field(ge=0.5, le=2.0)
    scale_variance: float = Field(ge=0.8, le=1.2)
    symmetry_type: SymmetryType
    aspect_ratio: float = Field(ge=0.5, le=2.0)
    shape_complexity: int = Field(ge=1, le=5)
    edge_softness: float = Field(ge=0, le=1)

    # fill
    fill_opacity: float = Field(ge=0.3, le=1.0)
    gradient_angle: float = Field(ge=0, le=360)
    gradient_type: GradientType
    gradient_stops: int = Field(ge=2, le=5)
    gradient_spread: float = Field(ge=0.3, le=1.0)

    # letter anatomy
    letter_part: LetterPart
    cutout_position: int = Field(ge=0, le=11)
    interlock_depth: float = Field(ge=10, le=90)
    letter_weight: LetterWeight

    # layout
    offset_x: float = Field(ge=-20, le=20)
    offset_y: float = Field(ge=-20, le=20)
    layer_count: int = Field(ge=1, le=4)
    layer_spacing: float = Field(ge=0.5, le=2.0)
    overlap_amount: float = Field(ge=0, le=50)
    alignment_bias: float = Field(ge=-1, le=1)
    margin_ratio: float = Field(ge=0.05, le=0.2)


class _ByteReader:
    def __init__(self, digest: bytes, anchor: bytes) -> None:
        self._digest = digest
        self._anchor = anchor

    def byte(self, index: int, anchored: bool = False) -> int:
        value = self._digest[index % DIGEST_SIZE]
        if anchored:
            value = (3 * self._anchor[index % DIGEST_SIZE] + value) // 4
        return value

    def normalized(self, index: int, lo: float = 0.0, hi: float = 1.0, anchored: bool = False) -> float:
        value = lo + (self.byte(index, anchored) / 255) * (hi - lo)
        # float rounding at byte 255 can overshoot hi by one ulp
        return min(max(value, lo), hi)

    def integer(self, index: int, lo: int, hi: int, anchored: bool = False) -> int:
        return math.floor(self.normalized(index, lo, hi + 0.99, anchored))

    def choice(self, index: int, options: Sequence[T], anchored: bool = False) -> T:
        return options[self.byte(index, anchored) % len(options)]


def extract_parameters(digest: DigestLike, brand_name: str) -> SeedParameters:
    """Derive the full parameter set from a 32-byte digest (raw or hex)."""

    read = _ByteReader(coerce_digest(digest), name_digest(brand_name))
    return SeedParameters(
        stroke_width=read.normalized(0, 1, 8),
        stroke_taper=read.normalized(1, 0, 100),
        stroke_cap=read.choice(2, STROKE_CAPS),
        stroke_join=read.choice(3, STROKE_JOINS),
        stroke_dash_ratio=read.normalized(4),
        corner_radius=read.normalized(5, 0, 50),
        rotation=read.normalized(6, 0, 360),
        curve_tension=read.normalized(7, 0.1, 1.0),
        element_count=read.integer(8, 2, 6),
        spacing_ratio=read.normalized(9, 0.5, 2.0),
        scale_variance=read.normalized(10, 0.8, 1.2),
        symmetry_type=read.choice(11, SYMMETRY_TYPES),
        aspect_ratio=read.normalized(12, 0.5, 2.0),
        shape_complexity=read.integer(13, 1, 5),
        edge_softness=read.normalized(14),
        fill_opacity=read.normalized(15, 0.3, 1.0),
        gradient_angle=read.normalized(16, 0, 360),
        gradient_type=read.choice(17, GRADIENT_TYPES),
        gradient_stops=read.integer(18, 2, 5),
        gradient_spread=read.normalized(19, 0.3, 1.0),
        letter_part=read.choice(20, LETTER_PARTS, anchored=True),
        cutout_position=read.integer(21, 0, 11, anchored=True),
        interlock_depth=read.normalized(22, 10, 90, anchored=True),
        letter_weight=read.choice(23, LETTER_WEIGHTS, anchored=True),
        offset_x=read.normalized(24, -20, 20),
        offset_y=read.normalized(25, -20, 20),
        layer_count=read.integer(26, 1, 4),
        layer_spacing=read.normalized(27, 0.5, 2.0),
        overlap_amount=read.normalized(28, 0, 50),
        alignment_bias=read.normalized(29, -1, 1),
        margin_ratio=read.normalized(30, 0.05, 0.2),
    )
