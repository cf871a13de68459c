"""Master seed generation with collision-checked digests."""
from __future__ import annotations

import hashlib
import logging
import re
import secrets
import time
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from markforge.engine.algorithms import Algorithm, parse_algorithm
from markforge.engine.params import SeedParameters, extract_parameters
from markforge.engine.registry import DigestRegistry, claim_digest, resolve_registry
from markforge.utils.seed import length_prefixed

logger = logging.getLogger(__name__)

SEED_FORMAT_TAG = "markforge.seed.v1"
SALT_BYTES = 32

_WHITESPACE = re.compile(r"\s+")


class MasterSeed(BaseModel):
    """Identity of one generation attempt."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    digest: str = Field(pattern=r"^[0-9a-f]{64}$")
    salt: str
    created_at: int
    brand_name: str
    algorithm: Algorithm
    parameters: SeedParameters

    @property
    def short_digest(self) -> str:
        return self.digest[:8]


def normalize_brand_name(brand_name: str) -> str:
    normalized = _WHITESPACE.sub(" ", brand_name).strip()
    if not normalized:
        raise ValueError("Brand name must not be empty")
    return normalized


def compute_digest(brand_name: str, algorithm: Union[str, Algorithm], created_at: int, salt: str) -> bytes:
    payload = length_prefixed(
        SEED_FORMAT_TAG,
        (brand_name, parse_algorithm(algorithm).value, str(created_at), salt),
    )
    return hashlib.sha256(payload).digest()


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def generate_master_seed(
    brand_name: str,
    algorithm: Union[str, Algorithm],
    *,
    salt: Optional[str] = None,
    created_at: Optional[int] = None,
) -> MasterSeed:
    """Hash brand, algorithm, timestamp and salt into a seed.

    Supplying both ``salt`` and ``created_at`` reproduces an earlier seed
    exactly. Nothing is registered here; see :func:`generate_unique_seed`.
    """

    name = normalize_brand_name(brand_name)
    algo = parse_algorithm(algorithm)
    salt = salt if salt is not None else secrets.token_hex(SALT_BYTES)
    created_at = created_at if created_at is not None else _now_ms()

    digest = compute_digest(name, algo, created_at, salt)
    return MasterSeed(
        digest=digest.hex(),
        salt=salt,
        created_at=created_at,
        brand_name=name,
        algorithm=algo,
        parameters=extract_parameters(digest, name),
    )


def generate_unique_seed(
    brand_name: str,
    algorithm: Union[str, Algorithm],
    max_retries: int = 10,
    *,
    registry: Optional[DigestRegistry] = None,
) -> MasterSeed:
    """Draw seeds until one claims a fresh digest, accepting the last draw after ``max_retries``."""

    store = resolve_registry(registry)
    seed = generate_master_seed(brand_name, algorithm)
    retries = 0
    while not claim_digest(store, seed.digest):
        if retries >= max_retries:
            logger.warning(
                "Digest collision persisted after %d retries for %s/%s; accepting %s",
                max_retries,
                seed.brand_name,
                seed.algorithm,
                seed.short_digest,
            )
            store.put(seed.digest)
            break
        retries += 1
        logger.debug("Digest collision on %s; reseeding (attempt %d)", seed.short_digest, retries)
        seed = generate_master_seed(brand_name, algorithm)
    return seed
