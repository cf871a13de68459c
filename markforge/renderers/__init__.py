"""Renderer registry exports."""
from __future__ import annotations

from typing import Dict, Type, Union

from markforge.engine.algorithms import Algorithm, parse_algorithm
from markforge.engine.seed import MasterSeed

from .base import BaseMarkRenderer
from .geometric import CloverRadialRenderer, GradientGlowRenderer, InterlockingGeometryRenderer
from .letterforms import (
    LetterExtractRenderer,
    LetterFusionRenderer,
    MonogramMergeRenderer,
    NegativeSpaceLetterRenderer,
    SingleStrokeRenderer,
)

RENDERER_REGISTRY: Dict[Algorithm, Type[BaseMarkRenderer]] = {
    cls.algorithm: cls
    for cls in (
        LetterFusionRenderer,
        InterlockingGeometryRenderer,
        NegativeSpaceLetterRenderer,
        MonogramMergeRenderer,
        CloverRadialRenderer,
        SingleStrokeRenderer,
        LetterExtractRenderer,
        GradientGlowRenderer,
    )
}


def get_renderer(algorithm: Union[str, Algorithm]) -> BaseMarkRenderer:
    return RENDERER_REGISTRY[parse_algorithm(algorithm)]()


def render_seed(seed: MasterSeed) -> str:
    """Default render function: compose the SVG mark for ``seed``."""

    return get_renderer(seed.algorithm).render(seed)


__all__ = [
    "BaseMarkRenderer",
    "CloverRadialRenderer",
    "GradientGlowRenderer",
    "InterlockingGeometryRenderer",
    "LetterExtractRenderer",
    "LetterFusionRenderer",
    "MonogramMergeRenderer",
    "NegativeSpaceLetterRenderer",
    "RENDERER_REGISTRY",
    "SingleStrokeRenderer",
    "get_renderer",
    "render_seed",
]
