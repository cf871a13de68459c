"""Renderers built from abstract geometry."""
from __future__ import annotations

import math
from typing import List

from markforge.engine.algorithms import Algorithm
from markforge.engine.seed import MasterSeed
from markforge.renderers.base import CX, CY, SIZE, BaseMarkRenderer, element, fmt, radial_points


class InterlockingGeometryRenderer(BaseMarkRenderer):
    """Three or more outlined shapes weaving around the centre."""

    algorithm = Algorithm.INTERLOCKING_GEOMETRY

    def compose(self, seed: MasterSeed) -> List[str]:
        p = seed.parameters
        count = max(3, p.element_count)
        depth = p.interlock_depth / 100
        base = SIZE * 0.25
        distance = SIZE * 0.15 * (1 - depth * 0.5)
        stroke = {"fill": "none", "stroke": "currentColor", "stroke_width": p.stroke_width}

        parts: List[str] = []
        for idx, (x, y, angle) in enumerate(radial_points(CX, CY, distance, count, math.radians(p.rotation))):
            size = base * (0.8 + (idx / count) * 0.4 * p.scale_variance)
            kind = (idx + int(p.corner_radius // 20)) % 3
            if kind == 0:
                w, h = size, size * p.aspect_ratio
                turn = math.degrees(angle) + p.rotation * 0.5
                parts.append(element(
                    "rect", x=x - w / 2, y=y - h / 2, width=w, height=h,
                    rx=p.corner_radius * 0.01 * min(w, h) * 0.5,
                    transform=f"rotate({fmt(turn)}, {fmt(x)}, {fmt(y)})", **stroke,
                ))
            elif kind == 1:
                rx = size * 0.5
                parts.append(element("ellipse", cx=x, cy=y, rx=rx, ry=rx * p.aspect_ratio, **stroke))
            else:
                corners = radial_points(x, y, size * 0.5, 3, angle - math.pi / 2)
                points = " ".join(f"{fmt(px)},{fmt(py)}" for px, py, _ in corners)
                parts.append(element("polygon", points=points, stroke_linejoin=p.stroke_join, **stroke))

        if p.interlock_depth > 30:
            hub = radial_points(CX, CY, SIZE * 0.1, count)
            for (x1, y1, _), (x2, y2, _) in zip(hub, hub[1:] + hub[:1]):
                parts.append(element(
                    "line", x1=x1, y1=y1, x2=x2, y2=y2, stroke="currentColor",
                    stroke_width=p.stroke_width * 0.5, opacity=0.5,
                ))
        return parts


class CloverRadialRenderer(BaseMarkRenderer):
    """A petal repeated three to six times with rotational symmetry."""

    algorithm = Algorithm.CLOVER_RADIAL

    def compose(self, seed: MasterSeed) -> List[str]:
        p = seed.parameters
        count = max(3, min(6, p.element_count))
        petal = SIZE * 0.18
        distance = SIZE * 0.12 * p.spacing_ratio
        phase = math.radians(p.rotation) - math.pi / 2

        parts: List[str] = []
        for x, y, angle in radial_points(CX, CY, distance, count, phase):
            rx = petal * p.scale_variance
            ry = petal * p.aspect_ratio
            corner = p.corner_radius * 0.01 * rx
            if corner > rx * 0.4:
                parts.append(element("circle", cx=x, cy=y, r=rx, fill="currentColor", fill_opacity=p.fill_opacity))
            else:
                parts.append(element(
                    "rect", x=x - rx, y=y - ry, width=rx * 2, height=ry * 2, rx=corner,
                    fill="currentColor", fill_opacity=p.fill_opacity,
                    transform=f"rotate({fmt(math.degrees(angle))}, {fmt(x)}, {fmt(y)})",
                ))

        centre = SIZE * 0.08 * p.scale_variance
        if p.symmetry_type == "radial":
            parts.append(element("circle", cx=CX, cy=CY, r=centre, fill="currentColor"))
        else:
            parts.append(element(
                "rect", x=CX - centre, y=CY - centre, width=centre * 2, height=centre * 2,
                rx=p.corner_radius * 0.01 * centre, fill="currentColor",
            ))
        return parts


class GradientGlowRenderer(BaseMarkRenderer):
    """A solid shape lit from within by a gradient and soft glow."""

    algorithm = Algorithm.GRADIENT_GLOW

    def compose(self, seed: MasterSeed) -> List[str]:
        p = seed.parameters
        gradient_id = f"glow-{seed.short_digest}"
        blur_id = f"blur-{seed.short_digest}"
        stop_offsets = [idx / (p.gradient_stops - 1) for idx in range(p.gradient_stops)]

        def stops(floor: float) -> List[str]:
            return [
                element(
                    "stop", offset=f"{fmt(offset * 100)}%", stop_color="currentColor",
                    stop_opacity=p.fill_opacity * (1 - offset * (1 - floor)),
                )
                for offset in stop_offsets
            ]

        parts = ["<defs>"]
        if p.gradient_type == "radial":
            parts.append(f'<radialGradient id="{gradient_id}" cx="50%" cy="50%" r="{fmt(p.gradient_spread * 100)}%">')
            parts.extend(stops(0.3))
            parts.append("</radialGradient>")
        else:
            rad = math.radians(p.gradient_angle)
            dx, dy = math.cos(rad) * 50, math.sin(rad) * 50
            parts.append(
                f'<linearGradient id="{gradient_id}" x1="{fmt(50 + dx)}%" y1="{fmt(50 + dy)}%" '
                f'x2="{fmt(50 - dx)}%" y2="{fmt(50 - dy)}%">'
            )
            parts.extend(stops(0.5))
            parts.append("</linearGradient>")
        parts.extend([
            f'<filter id="{blur_id}" x="-50%" y="-50%" width="200%" height="200%">',
            element("feGaussianBlur", in_="SourceGraphic", stdDeviation=p.edge_softness * 3),
            "</filter>",
            "</defs>",
        ])

        size = SIZE * 0.3
        corner = p.corner_radius * 0.01 * size
        fill = f"url(#{gradient_id})"
        if p.edge_softness > 0.3:
            parts.append(element(
                "rect", x=CX - size * 1.1, y=CY - size * 1.1, width=size * 2.2, height=size * 2.2,
                rx=corner * 1.5, fill=fill, filter=f"url(#{blur_id})", opacity=0.6,
            ))

        kind = p.shape_complexity % 3
        if kind == 0:
            parts.append(element("rect", x=CX - size, y=CY - size, width=size * 2, height=size * 2, rx=corner, fill=fill))
        elif kind == 1:
            parts.append(element("circle", cx=CX, cy=CY, r=size, fill=fill))
        else:
            h = size * math.sqrt(3)
            parts.append(element(
                "path",
                d=f"M {fmt(CX)} {fmt(CY - size)} L {fmt(CX + size)} {fmt(CY + h / 2)} L {fmt(CX - size)} {fmt(CY + h / 2)} Z",
                fill=fill,
            ))

        highlight = size * 0.4
        parts.append(element("ellipse", cx=CX, cy=CY - size * 0.3, rx=highlight, ry=highlight * 0.6, fill="currentColor", opacity=0.3))
        return parts
