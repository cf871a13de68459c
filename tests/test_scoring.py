from __future__ import annotations

import pytest

from markforge.engine.params import SeedParameters, extract_parameters
from markforge.engine.scoring import METRIC_WEIGHTS, count_primitives, score_candidate

from conftest import sample_digests


def _markup(primitives: int) -> str:
    shapes = ["<path d='M0 0'/>", "<circle r='1'/>", "<rect width='1'/>"]
    body = "".join(shapes[idx % 3] for idx in range(primitives))
    return f"<svg><defs><radialGradient id='g'/></defs>{body}<polygon points=''/></svg>"


def _params(**overrides: object) -> SeedParameters:
    return extract_parameters(sample_digests(1)[0], "Nova").model_copy(update=overrides)


def test_primitive_count_ignores_lookalikes() -> None:
    assert count_primitives(_markup(5)) == 5
    assert count_primitives("<rectangle/><pathway/><radialGradient/>") == 0


def test_scores_are_bounded() -> None:
    for digest in sample_digests(200):
        params = extract_parameters(digest, "Bounds")
        for primitives in (0, 1, 3, 6, 8, 9, 20):
            result = score_candidate(_markup(primitives), params, digest=digest.hex())
            assert 0 <= result.score <= 100
            for value in result.metrics.model_dump().values():
                assert 0 <= value <= 100


def test_scoring_is_deterministic() -> None:
    params = _params()
    assert score_candidate(_markup(4), params) == score_candidate(_markup(4), params)
    assert score_candidate(_markup(4), params, digest="ab" * 32) == score_candidate(_markup(4), params, digest="ab" * 32)


def test_complexity_band() -> None:
    params = _params()
    assert score_candidate(_markup(5), params).metrics.complexity >= 90
    assert score_candidate(_markup(0), params).metrics.complexity == 50
    assert score_candidate(_markup(10), params).metrics.complexity == 50
    assert score_candidate(_markup(9), params).metrics.complexity == pytest.approx(58)


def test_scalability_penalizes_dense_marks() -> None:
    params = _params()
    assert score_candidate(_markup(6), params).metrics.scalability == 90
    assert score_candidate(_markup(7), params).metrics.scalability == 70


def test_symmetry_lifts_balance() -> None:
    symmetric = score_candidate(_markup(4), _params(symmetry_type="radial"), digest="cd" * 32)
    asymmetric = score_candidate(_markup(4), _params(symmetry_type="none"), digest="cd" * 32)
    assert 85 <= symmetric.metrics.balance <= 100
    assert 70 <= asymmetric.metrics.balance <= 85
    assert symmetric.metrics.balance - asymmetric.metrics.balance == pytest.approx(15)


def test_uniqueness_formula() -> None:
    neutral = _params(rotation=180.0, curve_tension=0.5, shape_complexity=1, corner_radius=0.0)
    assert score_candidate(_markup(4), neutral).metrics.uniqueness == pytest.approx(70)
    busy = _params(rotation=0.0, curve_tension=1.0, shape_complexity=5, corner_radius=12.0)
    assert score_candidate(_markup(4), busy).metrics.uniqueness == 100


def test_memorability_bonuses() -> None:
    plain = _params(element_count=2, interlock_depth=20.0, gradient_type="none")
    rich = _params(element_count=5, interlock_depth=60.0, gradient_type="linear")
    plain_score = score_candidate(_markup(4), plain, digest="ef" * 32).metrics.memorability
    rich_score = score_candidate(_markup(4), rich, digest="ef" * 32).metrics.memorability
    assert 60 <= plain_score <= 70
    assert rich_score - plain_score == pytest.approx(30)


def test_composite_is_weighted_sum() -> None:
    result = score_candidate(_markup(4), _params(), digest="12" * 32)
    metrics = result.metrics.model_dump()
    expected = sum(metrics[name] * weight for name, weight in METRIC_WEIGHTS.items())
    assert result.score == pytest.approx(expected)
    assert sum(METRIC_WEIGHTS.values()) == pytest.approx(1.0)
