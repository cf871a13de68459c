"""Static quality scoring of rendered marks."""
from __future__ import annotations

import hashlib
import re
from typing import Dict, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from markforge.engine.params import SeedParameters
from markforge.utils.seed import jitter_units

METRIC_WEIGHTS: Dict[str, float] = {
    "complexity": 0.20,
    "balance": 0.25,
    "uniqueness": 0.25,
    "scalability": 0.15,
    "memorability": 0.15,
}

OPTIMAL_PRIMITIVES = (3, 8)
SCALABLE_PRIMITIVES = 6

_PRIMITIVE = re.compile(r"<(?:path|circle|rect)\b")


class QualityMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    complexity: float = Field(ge=0, le=100)
    balance: float = Field(ge=0, le=100)
    uniqueness: float = Field(ge=0, le=100)
    scalability: float = Field(ge=0, le=100)
    memorability: float = Field(ge=0, le=100)


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0, le=100)
    metrics: QualityMetrics


def _clamp(value: float) -> float:
    return float(min(100.0, max(0.0, value)))


def count_primitives(markup: str) -> int:
    return len(_PRIMITIVE.findall(markup))


def score_candidate(markup: str, parameters: SeedParameters, *, digest: Optional[str] = None) -> ScoreResult:
    """Score a rendered mark on a 0-100 scale.

    Jitter is derived from ``digest`` (or the markup hash when absent), so
    scoring the same candidate twice always agrees.
    """

    jitter_key = digest if digest is not None else hashlib.sha256(markup.encode("utf-8")).hexdigest()
    j_complexity, j_balance, j_memorability = jitter_units(jitter_key, 3)

    primitives = count_primitives(markup)
    low, high = OPTIMAL_PRIMITIVES
    if low <= primitives <= high:
        complexity = 90 + 10 * j_complexity
    else:
        complexity = max(50, 90 - abs(primitives - 5) * 8)

    balance = 70 + (15 if parameters.symmetry_type != "none" else 0) + 15 * j_balance

    variance = (
        abs(parameters.rotation - 180) / 180 * 20
        + abs(parameters.curve_tension - 0.5) * 20
        + parameters.shape_complexity * 10
        + (10 if parameters.corner_radius > 0 else 0)
    )
    uniqueness = min(100, 60 + variance)

    scalability = 90 if primitives <= SCALABLE_PRIMITIVES else 70

    memorability = (
        60
        + (10 if parameters.element_count > 2 else 0)
        + (10 if parameters.interlock_depth > 40 else 0)
        + (10 if parameters.gradient_type != "none" else 0)
        + 10 * j_memorability
    )

    metrics = QualityMetrics(
        complexity=_clamp(complexity),
        balance=_clamp(balance),
        uniqueness=_clamp(uniqueness),
        scalability=_clamp(scalability),
        memorability=_clamp(memorability),
    )
    values = np.array([getattr(metrics, name) for name in METRIC_WEIGHTS])
    weights = np.array(list(METRIC_WEIGHTS.values()))
    return ScoreResult(score=_clamp(float(np.dot(values, weights))), metrics=metrics)
