"""Utility exports."""
from .io import atomic_write, ensure_dir, log_path, write_json, write_text
from .seed import coerce_digest, jitter_units, length_prefixed, name_digest, sha256_bytes

__all__ = [
    "atomic_write",
    "coerce_digest",
    "ensure_dir",
    "jitter_units",
    "length_prefixed",
    "log_path",
    "name_digest",
    "sha256_bytes",
    "write_json",
    "write_text",
]
