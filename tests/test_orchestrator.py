from __future__ import annotations

import random
import threading
import time
from typing import List

import pytest
from pydantic import ValidationError

from markforge.config import MarkForgeSettings
from markforge.engine.algorithms import ALL_ALGORITHMS, Algorithm
from markforge.engine.orchestrator import (
    UniqueLogoParams,
    build_algorithm_order,
    describe_concept,
    generate_all_algorithm_samples,
    generate_single_logo,
    generate_unique_logos,
    regenerate_logo,
)
from markforge.engine.registry import InMemoryDigestRegistry
from markforge.engine.seed import MasterSeed
from markforge.renderers import render_seed


class RecordingRenderer:
    def __init__(self) -> None:
        self.seeds: List[MasterSeed] = []
        self._lock = threading.Lock()

    def __call__(self, seed: MasterSeed) -> str:
        with self._lock:
            self.seeds.append(seed)
        return render_seed(seed)


def _assert_top_k(candidates, top_k: int = 5, threshold: float = 85) -> None:
    assert len(candidates) <= top_k
    scores = [c.quality_score for c in candidates]
    assert scores == sorted(scores, reverse=True)
    assert all(score >= threshold for score in scores)


def test_top_k_ordering(registry: InMemoryDigestRegistry) -> None:
    candidates = generate_unique_logos(UniqueLogoParams(brand_name="Nova"), registry=registry, rng=random.Random(7))
    _assert_top_k(candidates)
    assert len({c.digest for c in candidates}) == len(candidates)
    for candidate in candidates:
        assert candidate.markup.startswith("<svg")
        assert candidate.concept


def test_samples_cycle_through_algorithms(registry: InMemoryDigestRegistry) -> None:
    renderer = RecordingRenderer()
    params = UniqueLogoParams(brand_name="Nova", preferred_algorithm="gradient-glow")
    generate_unique_logos(params, renderer, registry=registry, rng=random.Random(3))
    algos = [seed.algorithm for seed in renderer.seeds]
    assert len(algos) == 15
    assert algos[0] is Algorithm.GRADIENT_GLOW
    assert set(algos[:8]) == set(ALL_ALGORITHMS)
    assert algos[8:] == algos[:7]
    assert len(registry) == 15


def test_algorithm_order() -> None:
    preferred = build_algorithm_order(Algorithm.SINGLE_STROKE, random.Random(1))
    assert preferred[0] is Algorithm.SINGLE_STROKE
    assert sorted(preferred) == sorted(ALL_ALGORITHMS)
    shuffled = build_algorithm_order(None, random.Random(1))
    assert sorted(shuffled) == sorted(ALL_ALGORITHMS)
    assert shuffled == build_algorithm_order(None, random.Random(1))


def test_render_failures_are_dropped(registry: InMemoryDigestRegistry, caplog: pytest.LogCaptureFixture) -> None:
    calls = {"n": 0}

    def flaky(seed: MasterSeed) -> str:
        calls["n"] += 1
        if calls["n"] % 2:
            raise RuntimeError("renderer exploded")
        return render_seed(seed)

    cfg = MarkForgeSettings(quality_threshold=0, top_k=15)
    candidates = generate_unique_logos(UniqueLogoParams(brand_name="Nova"), flaky, registry=registry, settings=cfg)
    assert calls["n"] == 15
    assert len(candidates) == 7
    assert "renderer exploded" in caplog.text


def test_all_failures_yield_empty_result(registry: InMemoryDigestRegistry) -> None:
    def broken(seed: MasterSeed) -> str:
        raise ValueError("no")

    assert generate_unique_logos(UniqueLogoParams(brand_name="Nova"), broken, registry=registry) == []


def test_shortfall_is_not_padded(registry: InMemoryDigestRegistry) -> None:
    cfg = MarkForgeSettings(quality_threshold=100)
    result = generate_unique_logos(UniqueLogoParams(brand_name="Nova"), lambda seed: "", registry=registry, settings=cfg)
    assert result == []


def test_parallel_sampling(registry: InMemoryDigestRegistry) -> None:
    renderer = RecordingRenderer()
    cfg = MarkForgeSettings(max_workers=4, quality_threshold=0)
    candidates = generate_unique_logos(UniqueLogoParams(brand_name="Orbit"), renderer, registry=registry, settings=cfg)
    assert len(renderer.seeds) == 15
    assert len(registry) == 15
    _assert_top_k(candidates, threshold=0)
    assert len(candidates) == 5


def test_slow_renders_time_out(registry: InMemoryDigestRegistry) -> None:
    def slow(seed: MasterSeed) -> str:
        time.sleep(1.0)
        return render_seed(seed)

    cfg = MarkForgeSettings(max_workers=2, candidate_count=2, quality_threshold=0, render_timeout_seconds=0.05)
    assert generate_unique_logos(UniqueLogoParams(brand_name="Nova"), slow, registry=registry, settings=cfg) == []


def test_stuck_renders_do_not_drop_queued_samples(registry: InMemoryDigestRegistry) -> None:
    calls: List[str] = []
    lock = threading.Lock()

    def first_two_stick(seed: MasterSeed) -> str:
        with lock:
            calls.append(seed.digest)
            stuck = len(calls) <= 2
        if stuck:
            time.sleep(1.0)
        return render_seed(seed)

    cfg = MarkForgeSettings(
        max_workers=2, candidate_count=15, top_k=15, quality_threshold=0, render_timeout_seconds=0.3
    )
    candidates = generate_unique_logos(
        UniqueLogoParams(brand_name="Nova"), first_two_stick, registry=registry, settings=cfg
    )
    assert len(candidates) == 13
    assert not {c.digest for c in candidates} & set(calls[:2])


def test_params_validation() -> None:
    params = UniqueLogoParams(brand_name="  Blue   Harbor ", preferred_algorithm="monogram-merge", style="minimal")
    assert params.brand_name == "Blue Harbor"
    assert params.preferred_algorithm is Algorithm.MONOGRAM_MERGE
    with pytest.raises(ValidationError):
        UniqueLogoParams(brand_name="   ")
    with pytest.raises(ValidationError):
        UniqueLogoParams(brand_name="Nova", preferred_algorithm="spirograph")


def test_single_logo_uses_selector(registry: InMemoryDigestRegistry) -> None:
    candidate = generate_single_logo("Nova", registry=registry)
    assert candidate.algorithm is Algorithm.CLOVER_RADIAL
    assert 0 <= candidate.quality_score <= 100


def test_regenerate_mints_new_digest(registry: InMemoryDigestRegistry) -> None:
    first = generate_single_logo("Nova", Algorithm.SINGLE_STROKE, registry=registry)
    again = regenerate_logo("Nova", Algorithm.SINGLE_STROKE, registry=registry)
    assert again.algorithm is Algorithm.SINGLE_STROKE
    assert again.digest != first.digest


def test_all_algorithm_samples(registry: InMemoryDigestRegistry) -> None:
    samples = generate_all_algorithm_samples("Nova", registry=registry)
    assert [s.algorithm for s in samples] == list(ALL_ALGORITHMS)


def test_concepts_reference_the_seed(registry: InMemoryDigestRegistry) -> None:
    samples = generate_all_algorithm_samples("Nova", registry=registry)
    by_algo = {s.algorithm: s for s in samples}
    fusion = by_algo[Algorithm.LETTER_FUSION]
    assert '"Nova"' in fusion.concept
    assert fusion.seed.parameters.letter_part in fusion.concept
    glow = by_algo[Algorithm.GRADIENT_GLOW]
    assert describe_concept(Algorithm.GRADIENT_GLOW, glow.seed) == glow.concept


def test_registry_with_only_has_and_put() -> None:
    class HasPutRegistry:
        def __init__(self) -> None:
            self.digests: List[str] = []

        def has(self, digest: str) -> bool:
            return digest in self.digests

        def put(self, digest: str) -> None:
            self.digests.append(digest)

    store = HasPutRegistry()
    cfg = MarkForgeSettings(quality_threshold=0)
    candidates = generate_unique_logos(UniqueLogoParams(brand_name="Nova"), registry=store, settings=cfg)
    assert len(candidates) == 5
    assert len(store.digests) == 15
    assert {c.digest for c in candidates} <= set(store.digests)
