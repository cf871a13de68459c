"""Renderers built around the brand's initial letterforms."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

from markforge.engine.algorithms import Algorithm
from markforge.engine.params import SeedParameters
from markforge.engine.seed import MasterSeed
from markforge.renderers.base import CX, CY, SIZE, BaseMarkRenderer, element, fmt, radial_points

Segment = Tuple[float, float, float, float]
Point = Tuple[float, float]

BG_FILL = "var(--bg-color, white)"


@dataclass(frozen=True)
class LetterAnatomy:
    stems: List[Segment]
    apex: Point
    bowls: List[Tuple[float, float, float, float]] = field(default_factory=list)
    crossbars: List[Segment] = field(default_factory=list)
    baseline: float = 85


LETTER_ANATOMY: Dict[str, LetterAnatomy] = {
    "A": LetterAnatomy(
        stems=[(50, 85, 30, 15), (50, 85, 70, 15)],
        crossbars=[(35, 55, 65, 55)],
        apex=(50, 15),
    ),
    "B": LetterAnatomy(
        stems=[(30, 15, 30, 85)],
        bowls=[(45, 35, 20, 18), (48, 65, 23, 20)],
        crossbars=[(30, 50, 55, 50)],
        apex=(30, 15),
    ),
    "K": LetterAnatomy(stems=[(30, 15, 30, 85)], apex=(70, 15)),
    "M": LetterAnatomy(
        stems=[(20, 85, 20, 15), (20, 15, 50, 50), (50, 50, 80, 15), (80, 15, 80, 85)],
        apex=(50, 50),
    ),
    "N": LetterAnatomy(
        stems=[(25, 85, 25, 15), (25, 15, 75, 85), (75, 85, 75, 15)],
        apex=(25, 15),
    ),
    "V": LetterAnatomy(stems=[(20, 15, 50, 85), (80, 15, 50, 85)], apex=(50, 85)),
    "W": LetterAnatomy(
        stems=[(10, 15, 25, 85), (25, 85, 40, 40), (40, 40, 55, 85), (55, 85, 70, 40), (70, 40, 90, 15)],
        apex=(25, 85),
    ),
}


def anatomy_for(initial: str) -> LetterAnatomy:
    return LETTER_ANATOMY.get(initial, LETTER_ANATOMY["A"])


def initial_of(seed: MasterSeed) -> str:
    return seed.brand_name[0].upper()


def _leaf(cx: float, cy: float, size: float, p: SeedParameters) -> str:
    t = p.curve_tension
    d = (
        f"M {fmt(cx)} {fmt(cy - size * 0.5)} "
        f"Q {fmt(cx + size * 0.4 * t)} {fmt(cy - size * 0.2)} {fmt(cx + size * 0.3)} {fmt(cy + size * 0.3)} "
        f"Q {fmt(cx)} {fmt(cy + size * 0.5)} {fmt(cx - size * 0.3)} {fmt(cy + size * 0.3)} "
        f"Q {fmt(cx - size * 0.4 * t)} {fmt(cy - size * 0.2)} {fmt(cx)} {fmt(cy - size * 0.5)}"
    )
    return element("path", d=d, fill="currentColor")


def _arrow(cx: float, cy: float, size: float, p: SeedParameters) -> str:
    w, h = size * 0.3, size * 0.5
    points = [
        (cx, cy - h), (cx + w, cy + h * 0.3), (cx + w * 0.3, cy + h * 0.3), (cx + w * 0.3, cy + h),
        (cx - w * 0.3, cy + h), (cx - w * 0.3, cy + h * 0.3), (cx - w, cy + h * 0.3),
    ]
    d = "M " + " L ".join(f"{fmt(x)} {fmt(y)}" for x, y in points) + " Z"
    return element("path", d=d, fill="currentColor")


def _wave(cx: float, cy: float, size: float, p: SeedParameters) -> str:
    amp = size * 0.2 * p.curve_tension
    d = (
        f"M {fmt(cx - size * 0.4)} {fmt(cy)} "
        f"Q {fmt(cx - size * 0.2)} {fmt(cy - amp)} {fmt(cx)} {fmt(cy)} "
        f"Q {fmt(cx + size * 0.2)} {fmt(cy + amp)} {fmt(cx + size * 0.4)} {fmt(cy)}"
    )
    return element("path", d=d, fill="none", stroke="currentColor", stroke_width=p.stroke_width)


def _circle(cx: float, cy: float, size: float, p: SeedParameters) -> str:
    return element("circle", cx=cx, cy=cy, r=size * 0.3, fill="none", stroke="currentColor", stroke_width=p.stroke_width)


def _diamond(cx: float, cy: float, size: float, p: SeedParameters) -> str:
    s = size * 0.35
    d = f"M {fmt(cx)} {fmt(cy - s)} L {fmt(cx + s)} {fmt(cy)} L {fmt(cx)} {fmt(cy + s)} L {fmt(cx - s)} {fmt(cy)} Z"
    return element("path", d=d, fill="currentColor", stroke_linejoin=p.stroke_join)


def _drop(cx: float, cy: float, size: float, p: SeedParameters) -> str:
    t = p.curve_tension
    d = (
        f"M {fmt(cx)} {fmt(cy - size * 0.4)} "
        f"Q {fmt(cx + size * 0.3 * t)} {fmt(cy)} {fmt(cx)} {fmt(cy + size * 0.4)} "
        f"Q {fmt(cx - size * 0.3 * t)} {fmt(cy)} {fmt(cx)} {fmt(cy - size * 0.4)}"
    )
    return element("path", d=d, fill="currentColor")


CONCEPT_SHAPES: Dict[str, Callable[[float, float, float, SeedParameters], str]] = {
    "leaf": _leaf,
    "arrow": _arrow,
    "wave": _wave,
    "circle": _circle,
    "diamond": _diamond,
    "drop": _drop,
}


def concept_for(params: SeedParameters) -> str:
    names = list(CONCEPT_SHAPES)
    return names[int(params.curve_tension * len(names)) % len(names)]


class LetterFusionRenderer(BaseMarkRenderer):
    """Initial letterform with an abstract concept shape fused at its apex."""

    algorithm = Algorithm.LETTER_FUSION

    def compose(self, seed: MasterSeed) -> List[str]:
        p = seed.parameters
        letter = anatomy_for(initial_of(seed))
        scale = 0.7
        ox, oy = CX * (1 - scale), CY * (1 - scale)
        cap = "round" if p.stroke_taper > 50 else "butt"

        parts = [f'<g transform="rotate({fmt(p.rotation * 0.1)}, {fmt(CX)}, {fmt(CY)})">']
        for x1, y1, x2, y2 in letter.stems:
            parts.append(element(
                "line", x1=x1 * scale + ox, y1=y1 * scale + oy, x2=x2 * scale + ox, y2=y2 * scale + oy,
                stroke="currentColor", stroke_width=p.stroke_width, stroke_linecap=cap,
            ))
        for bx, by, rx, ry in letter.bowls:
            parts.append(element(
                "ellipse", cx=bx * scale + ox, cy=by * scale + oy, rx=rx * scale, ry=ry * scale,
                fill="none", stroke="currentColor", stroke_width=p.stroke_width,
            ))
        for x1, y1, x2, y2 in letter.crossbars:
            parts.append(element(
                "line", x1=x1 * scale + ox, y1=y1 * scale + oy, x2=x2 * scale + ox, y2=y2 * scale + oy,
                stroke="currentColor", stroke_width=p.stroke_width,
            ))
        parts.append("</g>")

        fusion_x = CX + (p.cutout_position - 6) * 3
        fusion_y = letter.apex[1] * scale + oy + p.offset_y * 0.5
        size = SIZE * 0.25 * p.scale_variance
        parts.append(CONCEPT_SHAPES[concept_for(p)](fusion_x, fusion_y, size, p))
        return parts


def cutout_positions(letter: str, cx: float, cy: float, size: float, p: SeedParameters) -> List[Point]:
    offset = size * 0.2
    if letter == "K":
        return [(cx + offset, cy - offset), (cx + offset, cy + offset), (cx - offset * 0.5, cy)]
    if letter == "A":
        return [(cx, cy + offset), (cx - offset, cy + offset * 0.5), (cx + offset, cy + offset * 0.5)]
    if letter == "H":
        return [(cx, cy - offset), (cx, cy + offset)]
    if letter == "N":
        return [(cx - offset * 0.8, cy + offset * 0.5), (cx + offset * 0.8, cy - offset * 0.5)]
    count = 2 + p.cutout_position // 4
    return [(x, y) for x, y, _ in radial_points(cx, cy, offset, count, math.radians(p.rotation))]


class NegativeSpaceLetterRenderer(BaseMarkRenderer):
    """Solid tile whose cutouts suggest the initial."""

    algorithm = Algorithm.NEGATIVE_SPACE_LETTER
    needs_bg_var = True

    def compose(self, seed: MasterSeed) -> List[str]:
        p = seed.parameters
        bg_size = SIZE * 0.7
        corner = p.corner_radius * 0.01 * bg_size * 0.3
        bg_x, bg_y = CX - bg_size / 2, CY - bg_size / 2
        clip_id = f"clip-{seed.short_digest}"

        parts = [
            "<defs>",
            f'<clipPath id="{clip_id}">',
            element("rect", x=bg_x, y=bg_y, width=bg_size, height=bg_size, rx=corner),
            "</clipPath>",
            "</defs>",
            element("rect", x=bg_x, y=bg_y, width=bg_size, height=bg_size, rx=corner, fill="currentColor"),
        ]

        radius = bg_size * 0.3 * (0.5 + p.scale_variance * 0.3)
        for idx, (x, y) in enumerate(cutout_positions(initial_of(seed), CX, CY, bg_size, p)):
            if p.symmetry_type == "radial" or idx % 2 == 0:
                parts.append(element("circle", cx=x, cy=y, r=radius, fill=BG_FILL, clip_path=f"url(#{clip_id})"))
            else:
                side = radius * 1.5
                parts.append(element(
                    "rect", x=x - side / 2, y=y - side / 2, width=side, height=side,
                    rx=p.corner_radius * 0.01 * side * 0.5, fill=BG_FILL, clip_path=f"url(#{clip_id})",
                    transform=f"rotate({fmt(p.rotation * 0.5)}, {fmt(x)}, {fmt(y)})",
                ))
        return parts


_LETTER_WEIGHT_SCALE = {"light": 0.7, "regular": 1.0, "bold": 1.2, "heavy": 1.5}


class MonogramMergeRenderer(BaseMarkRenderer):
    """Two initials sharing a common vertical stroke."""

    algorithm = Algorithm.MONOGRAM_MERGE

    def compose(self, seed: MasterSeed) -> List[str]:
        p = seed.parameters
        left_x = CX - SIZE * 0.15
        right_x = CX + SIZE * 0.15 * (1 - p.overlap_amount / 100)
        share_x = (left_x + right_x) / 2
        top, bottom = CY - SIZE * 0.25, CY + SIZE * 0.25
        width = p.stroke_width * _LETTER_WEIGHT_SCALE[p.letter_weight]

        def stroke(x1: float, y1: float, x2: float, y2: float, w: float) -> str:
            return element("line", x1=x1, y1=y1, x2=x2, y2=y2, stroke="currentColor", stroke_width=w, stroke_linecap="round")

        parts = [
            stroke(left_x - SIZE * 0.1, top, left_x - SIZE * 0.1, bottom, width),
            stroke(share_x, top, share_x, bottom, width),
            stroke(right_x + SIZE * 0.1, top, right_x + SIZE * 0.1, bottom, width),
            stroke(left_x - SIZE * 0.1, CY - SIZE * 0.1, share_x, CY - SIZE * 0.1, width * 0.8),
            stroke(share_x, CY + SIZE * 0.1, right_x + SIZE * 0.1, CY + SIZE * 0.1, width * 0.8),
        ]
        if p.interlock_depth > 50:
            parts.append(element("circle", cx=share_x, cy=CY, r=width * 1.5, fill="currentColor"))
        return parts


class SingleStrokeRenderer(BaseMarkRenderer):
    """One continuous line inspired by the initial."""

    algorithm = Algorithm.SINGLE_STROKE

    def compose(self, seed: MasterSeed) -> List[str]:
        p = seed.parameters
        initial = initial_of(seed)
        margin = SIZE * 0.15
        left, right, top, bottom = margin, SIZE - margin, margin, SIZE - margin
        t = p.curve_tension

        if initial in "AVW":
            d = (
                f"M {fmt(left)} {fmt(bottom)} Q {fmt(left + (CX - left) * t)} {fmt(top)} {fmt(CX)} {fmt(top)} "
                f"Q {fmt(right - (right - CX) * t)} {fmt(top)} {fmt(right)} {fmt(bottom)}"
            )
        elif initial in "SC":
            d = (
                f"M {fmt(right)} {fmt(top + 10)} Q {fmt(right)} {fmt(top)} {fmt(CX)} {fmt(top)} "
                f"Q {fmt(left)} {fmt(top)} {fmt(left)} {fmt(CY - 10)} Q {fmt(left)} {fmt(CY + 10)} {fmt(CX)} {fmt(CY)} "
                f"Q {fmt(right)} {fmt(CY)} {fmt(right)} {fmt(bottom - 10)} Q {fmt(right)} {fmt(bottom)} {fmt(CX)} {fmt(bottom)} "
                f"Q {fmt(left)} {fmt(bottom)} {fmt(left)} {fmt(bottom - 10)}"
            )
        elif initial in "OQ":
            r = (right - left) / 2
            ry = r * p.aspect_ratio
            d = (
                f"M {fmt(CX)} {fmt(top)} A {fmt(r)} {fmt(ry)} 0 1 1 {fmt(CX)} {fmt(bottom)} "
                f"A {fmt(r)} {fmt(ry)} 0 1 1 {fmt(CX)} {fmt(top)}"
            )
        else:
            d = (
                f"M {fmt(left)} {fmt(CY)} C {fmt(left + (right - left) * 0.3)} {fmt(top + t * 20)} "
                f"{fmt(right - (right - left) * 0.3)} {fmt(bottom - t * 20)} {fmt(right)} {fmt(CY)}"
            )

        parts = [element(
            "path", d=d, fill="none", stroke="currentColor", stroke_width=p.stroke_width,
            stroke_linecap=p.stroke_cap, stroke_linejoin=p.stroke_join,
        )]
        if p.stroke_taper > 50:
            end_y = bottom if initial == "A" else CY
            for x in (left, right):
                parts.append(element("circle", cx=x, cy=end_y, r=p.stroke_width * 0.8, fill="currentColor"))
        return parts


class LetterExtractRenderer(BaseMarkRenderer):
    """A single stylized anatomical part of the initial."""

    algorithm = Algorithm.LETTER_EXTRACT
    needs_bg_var = True

    def compose(self, seed: MasterSeed) -> List[str]:
        p = seed.parameters
        letter = anatomy_for(initial_of(seed))
        width = p.stroke_width * 1.5
        part = p.letter_part

        if part in ("apex", "terminal"):
            tri = SIZE * 0.25
            inner = tri * 0.4
            parts = [element(
                "path",
                d=f"M {fmt(CX)} {fmt(CY - tri * 0.7)} L {fmt(CX + tri)} {fmt(CY + tri * 0.5)} L {fmt(CX - tri)} {fmt(CY + tri * 0.5)} Z",
                fill="currentColor",
            )]
            if p.interlock_depth > 30:
                parts.append(element(
                    "path",
                    d=f"M {fmt(CX)} {fmt(CY + tri * 0.1)} L {fmt(CX + inner)} {fmt(CY + tri * 0.4)} L {fmt(CX - inner)} {fmt(CY + tri * 0.4)} Z",
                    fill=BG_FILL,
                ))
            return parts

        if part in ("bowl", "counter"):
            if not letter.bowls:
                return [element("circle", cx=CX, cy=CY, r=SIZE * 0.25, fill="none", stroke="currentColor", stroke_width=width)]
            _, _, rx, ry = letter.bowls[0]
            brx = rx * 0.8 * 1.5
            bry = ry * 0.8 * 1.5 * p.aspect_ratio
            parts = [element("ellipse", cx=CX, cy=CY, rx=brx, ry=bry, fill="none", stroke="currentColor", stroke_width=width)]
            if p.element_count > 2:
                parts.append(element("circle", cx=CX + brx * 0.6, cy=CY, r=width, fill="currentColor"))
            return parts

        if part == "crossbar":
            bar_w, bar_h = SIZE * 0.5, width * 2
            bar_r = p.corner_radius * 0.3 * bar_h * 0.1
            parts = [element("rect", x=CX - bar_w / 2, y=CY - bar_h / 2, width=bar_w, height=bar_h, rx=bar_r, fill="currentColor")]
            if p.element_count > 2:
                accent = SIZE * 0.3
                parts.append(element("rect", x=CX - bar_h / 2, y=CY - accent / 2, width=bar_h, height=accent, rx=bar_r, fill="currentColor"))
            return parts

        stem_w, stem_h = width * 2, SIZE * 0.5
        parts = [element(
            "rect", x=CX - stem_w / 2, y=CY - stem_h / 2, width=stem_w, height=stem_h,
            rx=p.corner_radius * 0.01 * stem_w, fill="currentColor",
        )]
        if p.element_count > 2:
            length = SIZE * 0.25
            # tan diverges near 90 degrees; keep the accent inside the viewBox
            rise = max(-length, min(length, length * math.tan(math.radians(p.rotation * 0.5))))
            y = CY - stem_h * 0.3
            parts.append(element(
                "line", x1=CX, y1=y, x2=CX + length, y2=y - rise,
                stroke="currentColor", stroke_width=width, stroke_linecap="round",
            ))
        return parts
