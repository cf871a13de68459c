"""Filesystem helpers for exporting marks."""
from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterator

from rich.console import Console

console = Console()

TEMP_SUFFIX = ".part"


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


@contextlib.contextmanager
def atomic_write(path: Path, mode: str = "w", **kwargs: Any) -> Iterator[Any]:
    """Write through a hidden sibling temp file, replacing ``path`` only on success.

    A failure inside the block leaves ``path`` untouched and removes the temp file.
    """

    ensure_dir(path.parent)
    tmp = tempfile.NamedTemporaryFile(
        mode=mode, delete=False, dir=path.parent, prefix=f".{path.name}.", suffix=TEMP_SUFFIX, **kwargs
    )
    tmp_path = Path(tmp.name)
    try:
        with tmp:
            yield tmp
            tmp.flush()
            os.fsync(tmp.fileno())
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def write_json(path: Path, payload: Dict[str, Any]) -> None:
    with atomic_write(path, mode="w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2)
        fh.write("\n")


def write_text(path: Path, text: str) -> None:
    """Write ``text`` atomically, ending it with exactly one newline."""

    with atomic_write(path, mode="w", encoding="utf-8") as fh:
        fh.write(text.rstrip("\n") + "\n")


def log_path(path: Path, label: str = "wrote") -> None:
    console.log(f"[bold green]✔[/] {label} {path}")
