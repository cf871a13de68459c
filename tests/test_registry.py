from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from markforge.engine.registry import (
    DigestRegistry,
    InMemoryDigestRegistry,
    RegistryStats,
    claim_digest,
    registry_stats,
    verify_uniqueness,
)


def test_claim_is_check_then_insert(registry: InMemoryDigestRegistry) -> None:
    assert registry.claim("a" * 64)
    assert not registry.claim("a" * 64)
    assert registry.has("a" * 64)
    assert registry.collisions == 1
    assert len(registry) == 1


def test_concurrent_claims_admit_one_winner(registry: InMemoryDigestRegistry) -> None:
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: registry.claim("b" * 64), range(64)))
    assert results.count(True) == 1
    assert registry.collisions == 63


def test_verify_uniqueness_and_stats(registry: InMemoryDigestRegistry) -> None:
    assert verify_uniqueness("c" * 64, registry)
    registry.put("c" * 64)
    assert not verify_uniqueness("c" * 64, registry)
    registry.claim("c" * 64)
    stats = registry_stats(registry)
    assert stats == RegistryStats(issued=1, collisions=1)
    assert stats.collision_rate == pytest.approx(0.5)


def test_clear_resets_state(registry: InMemoryDigestRegistry) -> None:
    registry.claim("d" * 64)
    registry.claim("d" * 64)
    registry.clear()
    assert len(registry) == 0
    assert registry.stats().collision_rate == 0.0


def test_protocol_is_structural(registry: InMemoryDigestRegistry) -> None:
    assert isinstance(registry, DigestRegistry)


def test_stats_require_reporting_registry() -> None:
    class Bare:
        def has(self, digest: str) -> bool:
            return False

        def put(self, digest: str) -> None:
            pass

    with pytest.raises(RuntimeError):
        registry_stats(Bare())


class SetStore:
    def __init__(self) -> None:
        self.digests = set()

    def has(self, digest: str) -> bool:
        return digest in self.digests

    def put(self, digest: str) -> None:
        self.digests.add(digest)


def test_two_method_store_satisfies_protocol() -> None:
    assert isinstance(SetStore(), DigestRegistry)


def test_claim_digest_falls_back_to_has_then_put() -> None:
    store = SetStore()
    assert claim_digest(store, "e" * 64)
    assert not claim_digest(store, "e" * 64)
    assert store.digests == {"e" * 64}


def test_claim_digest_prefers_atomic_claim(registry: InMemoryDigestRegistry) -> None:
    assert claim_digest(registry, "f" * 64)
    assert not claim_digest(registry, "f" * 64)
    assert registry.stats() == RegistryStats(issued=1, collisions=1)
