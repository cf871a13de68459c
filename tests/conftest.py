from __future__ import annotations

import hashlib

import pytest

from markforge.engine.registry import InMemoryDigestRegistry

FIXED_SALT = "ab" * 32
FIXED_TIMESTAMP = 1_700_000_000_000


def digest_with(**bytes_at: int) -> bytes:
    """32 zero bytes with selected indexes overridden, e.g. ``digest_with(b8=128)``."""

    raw = bytearray(32)
    for key, value in bytes_at.items():
        raw[int(key[1:])] = value
    return bytes(raw)


def sample_digests(count: int) -> list[bytes]:
    return [hashlib.sha256(f"sample-{idx}".encode()).digest() for idx in range(count)]


@pytest.fixture
def registry() -> InMemoryDigestRegistry:
    return InMemoryDigestRegistry()
