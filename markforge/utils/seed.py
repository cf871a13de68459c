"""Digest helpers for reproducible mark generation."""
from __future__ import annotations

import hashlib
import struct
from typing import Iterable, Union

DigestLike = Union[bytes, bytearray, str]

DIGEST_SIZE = 32


def sha256_bytes(text: str) -> bytes:
    return hashlib.sha256(text.encode("utf-8")).digest()


def name_digest(brand_name: str) -> bytes:
    return sha256_bytes(brand_name)


def coerce_digest(digest: DigestLike) -> bytes:
    """Accept a raw 32-byte digest or its 64-character hex form."""

    if isinstance(digest, str):
        try:
            raw = bytes.fromhex(digest)
        except ValueError as exc:
            raise ValueError(f"Digest is not valid hex: {digest!r}") from exc
    else:
        raw = bytes(digest)
    if len(raw) != DIGEST_SIZE:
        raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(raw)}")
    return raw


def length_prefixed(tag: str, fields: Iterable[str]) -> bytes:
    """Serialize fields as ``tag`` followed by u32-big-endian length + UTF-8 payload pairs."""

    chunks = [tag.encode("ascii")]
    for field in fields:
        encoded = field.encode("utf-8")
        chunks.append(struct.pack(">I", len(encoded)))
        chunks.append(encoded)
    return b"".join(chunks)


def jitter_units(digest: DigestLike, count: int, tag: str = "markforge.jitter.v1") -> list[float]:
    raw = digest.encode("utf-8") if isinstance(digest, str) else bytes(digest)
    stream = hashlib.sha256(tag.encode("ascii") + raw).digest()
    return [stream[idx % DIGEST_SIZE] / 255 for idx in range(count)]
