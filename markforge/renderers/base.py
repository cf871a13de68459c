"""Renderer abstraction layer."""
from __future__ import annotations

import abc
from typing import Iterable, List, Tuple

import numpy as np

from markforge.engine.algorithms import Algorithm
from markforge.engine.seed import MasterSeed

SIZE = 100.0
CX = SIZE / 2
CY = SIZE / 2

_BG_STYLE = (
    "<style>svg { --bg-color: white; } "
    "@media (prefers-color-scheme: dark) { svg { --bg-color: #1a1a1a; } }</style>"
)


def fmt(value: float) -> str:
    """Format a coordinate with at most 3 decimals and no trailing zeros."""

    text = f"{float(value):.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def attrs(**values: object) -> str:
    parts = []
    for key, value in values.items():
        if value is None:
            continue
        rendered = fmt(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else str(value)
        parts.append(f'{key.rstrip("_").replace("_", "-")}="{rendered}"')
    return " ".join(parts)


def element(tag: str, **values: object) -> str:
    return f"<{tag} {attrs(**values)}/>"


def radial_points(
    cx: float, cy: float, radius: float, count: int, phase: float = 0.0
) -> List[Tuple[float, float, float]]:
    """Return ``(x, y, angle)`` for ``count`` points evenly spaced on a circle."""

    angles = np.arange(count) / count * 2 * np.pi + phase
    xs = cx + np.cos(angles) * radius
    ys = cy + np.sin(angles) * radius
    return [(float(x), float(y), float(a)) for x, y, a in zip(xs, ys, angles)]


def wrap_svg(parts: Iterable[str], needs_bg_var: bool = False) -> str:
    body = "\n  ".join(parts)
    style = f"{_BG_STYLE}\n  " if needs_bg_var else ""
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {fmt(SIZE)} {fmt(SIZE)}" fill="none">\n'
        f"  {style}{body}\n"
        "</svg>"
    )


class BaseMarkRenderer(abc.ABC):
    """Shared interface for all mark algorithms.

    Renderers must be pure functions of the seed: the same seed always
    produces the same markup.
    """

    algorithm: Algorithm
    needs_bg_var: bool = False

    @abc.abstractmethod
    def compose(self, seed: MasterSeed) -> List[str]:
        """Return the SVG element strings for the mark body."""

    def render(self, seed: MasterSeed) -> str:
        if seed.algorithm is not self.algorithm:
            raise ValueError(f"{type(self).__name__} cannot render {seed.algorithm} seeds")
        return wrap_svg(self.compose(seed), needs_bg_var=self.needs_bg_var)
