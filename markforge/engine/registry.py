"""Digest deduplication registries.

The in-memory registry only spans one process. Deployments serving
several processes should inject an implementation backed by a shared store.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional, Protocol, Set, runtime_checkable


@runtime_checkable
class DigestRegistry(Protocol):
    """Minimal store interface: ``has`` and ``put``.

    Stores may also provide an atomic ``claim(digest) -> bool``. Without it,
    uniqueness falls back to ``has`` then ``put``, and callers sharing such a
    store across threads must serialize generation themselves.
    """

    def has(self, digest: str) -> bool:
        ...

    def put(self, digest: str) -> None:
        ...


@dataclass(frozen=True)
class RegistryStats:
    issued: int
    collisions: int

    @property
    def collision_rate(self) -> float:
        attempts = self.issued + self.collisions
        return self.collisions / attempts if attempts else 0.0


class InMemoryDigestRegistry:
    """Thread-safe set of issued digests."""

    def __init__(self) -> None:
        self._digests: Set[str] = set()
        self._lock = threading.Lock()
        self.collisions = 0

    def has(self, digest: str) -> bool:
        with self._lock:
            return digest in self._digests

    def put(self, digest: str) -> None:
        with self._lock:
            self._digests.add(digest)

    def claim(self, digest: str) -> bool:
        with self._lock:
            if digest in self._digests:
                self.collisions += 1
                return False
            self._digests.add(digest)
            return True

    def clear(self) -> None:
        with self._lock:
            self._digests.clear()
            self.collisions = 0

    def stats(self) -> RegistryStats:
        with self._lock:
            return RegistryStats(issued=len(self._digests), collisions=self.collisions)

    def __contains__(self, digest: object) -> bool:
        return isinstance(digest, str) and self.has(digest)

    def __len__(self) -> int:
        with self._lock:
            return len(self._digests)


_DEFAULT_REGISTRY = InMemoryDigestRegistry()


def default_registry() -> InMemoryDigestRegistry:
    return _DEFAULT_REGISTRY


def resolve_registry(registry: Optional[DigestRegistry]) -> DigestRegistry:
    return registry if registry is not None else _DEFAULT_REGISTRY


def verify_uniqueness(digest: str, registry: Optional[DigestRegistry] = None) -> bool:
    return not resolve_registry(registry).has(digest)


def registry_stats(registry: Optional[DigestRegistry] = None) -> RegistryStats:
    target = resolve_registry(registry)
    stats = getattr(target, "stats", None)
    if callable(stats):
        return stats()
    raise RuntimeError(f"{type(target).__name__} does not report statistics")


def claim_digest(registry: DigestRegistry, digest: str) -> bool:
    """Insert ``digest`` unless already issued; True when this call issued it."""

    claim = getattr(registry, "claim", None)
    if callable(claim):
        return claim(digest)
    if registry.has(digest):
        return False
    registry.put(digest)
    return True
