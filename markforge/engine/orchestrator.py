"""Candidate generation orchestration: sample, score, filter, rank."""
from __future__ import annotations

import logging
import random
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, field_validator

from markforge.config import MarkForgeSettings, settings as default_settings
from markforge.engine.algorithms import ALL_ALGORITHMS, Algorithm, parse_algorithm
from markforge.engine.registry import DigestRegistry
from markforge.engine.scoring import QualityMetrics, score_candidate
from markforge.engine.seed import MasterSeed, generate_unique_seed, normalize_brand_name
from markforge.engine.selector import select_algorithm

logger = logging.getLogger(__name__)

RenderFn = Callable[[MasterSeed], str]


class UniqueLogoParams(BaseModel):
    brand_name: str
    preferred_algorithm: Optional[Algorithm] = None
    style: Optional[str] = None
    color_scheme: Optional[str] = None

    @field_validator("brand_name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        return normalize_brand_name(value)

    @field_validator("preferred_algorithm", mode="before")
    @classmethod
    def parse_preferred(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_algorithm(value)
        return value


@dataclass
class GeneratedCandidate:
    seed: MasterSeed
    markup: str
    quality_score: float
    metrics: QualityMetrics
    concept: str

    @property
    def digest(self) -> str:
        return self.seed.digest

    @property
    def algorithm(self) -> Algorithm:
        return self.seed.algorithm


def describe_concept(algorithm: Algorithm, seed: MasterSeed) -> str:
    p = seed.parameters
    name = seed.brand_name
    descriptions = {
        Algorithm.LETTER_FUSION: f'"{name}" initial fused with {p.letter_part} element, {round(p.curve_tension * 100)}% organic flow',
        Algorithm.INTERLOCKING_GEOMETRY: f"{max(3, p.element_count)} interlocking shapes at {round(p.interlock_depth)}% depth, {p.symmetry_type} balance",
        Algorithm.NEGATIVE_SPACE_LETTER: f'"{name[0]}" revealed through negative space, {round(p.corner_radius)}% softness',
        Algorithm.MONOGRAM_MERGE: f"Merged letterforms with shared strokes, {p.letter_weight} weight",
        Algorithm.CLOVER_RADIAL: f"{max(3, p.element_count)}-fold radial symmetry, {round(p.spacing_ratio * 100)}% spacing",
        Algorithm.SINGLE_STROKE: f'Continuous line capturing "{name}", {round(p.curve_tension * 100)}% tension',
        Algorithm.LETTER_EXTRACT: f'Stylized {p.letter_part} from "{name[0]}", architectural precision',
        Algorithm.GRADIENT_GLOW: f"Luminous mark with {p.gradient_type} glow at {round(p.gradient_angle)}°",
    }
    return descriptions[algorithm]


def _resolve_render_fn(render_fn: Optional[RenderFn]) -> RenderFn:
    if render_fn is not None:
        return render_fn
    from markforge.renderers import render_seed

    return render_seed


def build_algorithm_order(
    preferred: Optional[Algorithm] = None, rng: Optional[random.Random] = None
) -> List[Algorithm]:
    """Preferred algorithm first, the rest Fisher-Yates shuffled."""

    rng = rng or random.Random()
    rest = [algo for algo in ALL_ALGORITHMS if algo is not preferred]
    for idx in range(len(rest) - 1, 0, -1):
        swap = rng.randint(0, idx)
        rest[idx], rest[swap] = rest[swap], rest[idx]
    return [preferred, *rest] if preferred is not None else rest


def _build_candidate(seed: MasterSeed, render_fn: RenderFn) -> GeneratedCandidate:
    markup = render_fn(seed)
    result = score_candidate(markup, seed.parameters, digest=seed.digest)
    return GeneratedCandidate(
        seed=seed,
        markup=markup,
        quality_score=result.score,
        metrics=result.metrics,
        concept=describe_concept(seed.algorithm, seed),
    )


def _sample(
    brand_name: str,
    algorithm: Algorithm,
    render_fn: RenderFn,
    max_retries: int,
    registry: Optional[DigestRegistry],
) -> Optional[GeneratedCandidate]:
    seed = generate_unique_seed(brand_name, algorithm, max_retries, registry=registry)
    try:
        return _build_candidate(seed, render_fn)
    except Exception as exc:  # renderer failures drop only this sample
        logger.warning("Render failed for %s seed %s: %s", algorithm, seed.short_digest, exc)
        return None


def _sample_sequential(
    brand_name: str,
    schedule: Sequence[Algorithm],
    render_fn: RenderFn,
    cfg: MarkForgeSettings,
    registry: Optional[DigestRegistry],
) -> List[GeneratedCandidate]:
    samples = (_sample(brand_name, algo, render_fn, cfg.max_retries, registry) for algo in schedule)
    return [candidate for candidate in samples if candidate is not None]


def _sample_parallel(
    brand_name: str,
    schedule: Sequence[Algorithm],
    render_fn: RenderFn,
    cfg: MarkForgeSettings,
    registry: Optional[DigestRegistry],
) -> List[GeneratedCandidate]:
    candidates: List[GeneratedCandidate] = []
    started: Dict[int, float] = {}

    def run(index: int, algorithm: Algorithm) -> Optional[GeneratedCandidate]:
        started[index] = time.monotonic()
        return _sample(brand_name, algorithm, render_fn, cfg.max_retries, registry)

    pool = ThreadPoolExecutor(max_workers=cfg.max_workers, thread_name_prefix="markforge")
    try:
        pending: Dict[Future, Tuple[int, Algorithm]] = {
            pool.submit(run, index, algo): (index, algo) for index, algo in enumerate(schedule)
        }
        while pending:
            # budgets run from each render's own start; queued work has not started its clock
            now = time.monotonic()
            deadlines = [
                started[index] + cfg.render_timeout_seconds
                for index, _ in pending.values()
                if index in started
            ]
            wait_for = max(0.0, min(deadlines) - now) if deadlines else cfg.render_timeout_seconds
            done, _ = wait(pending, timeout=wait_for, return_when=FIRST_COMPLETED)
            for future in done:
                pending.pop(future)
                candidate = future.result()
                if candidate is not None:
                    candidates.append(candidate)
            now = time.monotonic()
            for future, (index, algo) in list(pending.items()):
                began = started.get(index)
                if began is not None and now - began >= cfg.render_timeout_seconds and not future.done():
                    pending.pop(future)
                    logger.warning(
                        "Render for %s exceeded %.1fs; dropping sample", algo, cfg.render_timeout_seconds
                    )
    finally:
        # a stuck render must not hold the batch open
        pool.shutdown(wait=False, cancel_futures=True)
    return candidates


def generate_unique_logos(
    params: UniqueLogoParams,
    render_fn: Optional[RenderFn] = None,
    *,
    registry: Optional[DigestRegistry] = None,
    settings: Optional[MarkForgeSettings] = None,
    rng: Optional[random.Random] = None,
) -> List[GeneratedCandidate]:
    """Sample candidates across algorithms and return the best ones.

    Candidates below the quality threshold are discarded and never padded
    back in, so the result may be shorter than ``top_k`` or empty.
    """

    cfg = settings if settings is not None else default_settings
    render = _resolve_render_fn(render_fn)
    order = build_algorithm_order(params.preferred_algorithm, rng)
    schedule = [order[idx % len(order)] for idx in range(cfg.candidate_count)]

    logger.debug("Sampling %d candidates for %r: %s", len(schedule), params.brand_name, [a.value for a in order])
    sampler = _sample_parallel if cfg.max_workers > 1 else _sample_sequential
    candidates = sampler(params.brand_name, schedule, render, cfg, registry)

    qualified = [c for c in candidates if c.quality_score >= cfg.quality_threshold]
    qualified.sort(key=lambda c: c.quality_score, reverse=True)
    selected = qualified[: cfg.top_k]
    if len(selected) < cfg.top_k:
        logger.info(
            "Only %d of %d candidates for %r cleared the %.0f-point bar",
            len(qualified),
            len(candidates),
            params.brand_name,
            cfg.quality_threshold,
        )
    return selected


def generate_single_logo(
    brand_name: str,
    algorithm: Optional[Algorithm] = None,
    render_fn: Optional[RenderFn] = None,
    *,
    registry: Optional[DigestRegistry] = None,
    max_retries: int = 10,
) -> GeneratedCandidate:
    algo = parse_algorithm(algorithm) if algorithm is not None else select_algorithm(brand_name)
    seed = generate_unique_seed(brand_name, algo, max_retries, registry=registry)
    return _build_candidate(seed, _resolve_render_fn(render_fn))


def regenerate_logo(
    brand_name: str,
    algorithm: Algorithm,
    render_fn: Optional[RenderFn] = None,
    *,
    registry: Optional[DigestRegistry] = None,
    max_retries: int = 10,
) -> GeneratedCandidate:
    """Mint a fresh salt for the same brand and algorithm ("try again")."""

    return generate_single_logo(brand_name, algorithm, render_fn, registry=registry, max_retries=max_retries)


def generate_all_algorithm_samples(
    brand_name: str,
    render_fn: Optional[RenderFn] = None,
    *,
    registry: Optional[DigestRegistry] = None,
    max_retries: int = 10,
) -> List[GeneratedCandidate]:
    return [
        generate_single_logo(brand_name, algo, render_fn, registry=registry, max_retries=max_retries)
        for algo in ALL_ALGORITHMS
    ]
