"""MarkForge command-line interface."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from markforge.config import settings
from markforge.engine.algorithms import ALL_ALGORITHMS, Algorithm, algorithm_info, parse_algorithm
from markforge.engine.orchestrator import (
    GeneratedCandidate,
    UniqueLogoParams,
    generate_all_algorithm_samples,
    generate_unique_logos,
)
from markforge.engine.seed import generate_master_seed
from markforge.engine.selector import select_algorithm
from markforge.utils.io import ensure_dir, log_path, write_json, write_text

app = typer.Typer(help="Generate unique procedural logo marks from a brand name.")
console = Console()
logging.basicConfig(level=logging.INFO)


def _parse_algorithm_option(value: Optional[str]) -> Optional[Algorithm]:
    if value is None:
        return None
    try:
        return parse_algorithm(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _candidate_table(title: str, candidates: List[GeneratedCandidate]) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Algorithm")
    table.add_column("Score", justify="right")
    table.add_column("Digest")
    table.add_column("Concept")
    for rank, candidate in enumerate(candidates, start=1):
        table.add_row(
            str(rank),
            candidate.algorithm.value,
            f"{candidate.quality_score:.1f}",
            candidate.seed.short_digest,
            candidate.concept,
        )
    return table


def _export(candidates: List[GeneratedCandidate], out: Path) -> None:
    ensure_dir(out)
    entries = []
    for rank, candidate in enumerate(candidates, start=1):
        svg_path = out / f"{rank:02d}-{candidate.algorithm.value}-{candidate.seed.short_digest}.svg"
        write_text(svg_path, candidate.markup)
        log_path(svg_path)
        entries.append(
            {
                "rank": rank,
                "file": svg_path.name,
                "qualityScore": round(candidate.quality_score, 3),
                "metrics": candidate.metrics.model_dump(),
                "concept": candidate.concept,
                "seed": candidate.seed.model_dump(mode="json", by_alias=True),
            }
        )
    manifest = out / "manifest.json"
    write_json(manifest, {"candidates": entries})
    log_path(manifest, label="manifest")


@app.callback()
def main_options(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")) -> None:
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@app.command()
def generate(
    brand: str = typer.Argument(..., help="Brand name to generate marks for."),
    algorithm: Optional[str] = typer.Option(None, "--algorithm", "-a", help="Preferred algorithm, tried first."),
    out: Optional[Path] = typer.Option(None, help="Directory to write SVGs and manifest.json into."),
    workers: Optional[int] = typer.Option(None, min=1, help="Worker threads for sampling."),
    threshold: Optional[float] = typer.Option(None, min=0, max=100, help="Minimum quality score."),
    top_k: Optional[int] = typer.Option(None, "--top-k", min=1, help="Maximum number of marks returned."),
    style: Optional[str] = typer.Option(None, help="Free-form style hint."),
    color_scheme: Optional[str] = typer.Option(None, help="Free-form colour scheme hint."),
) -> None:
    try:
        params = UniqueLogoParams(
            brand_name=brand,
            preferred_algorithm=_parse_algorithm_option(algorithm),
            style=style,
            color_scheme=color_scheme,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    overrides = {
        key: value
        for key, value in {"max_workers": workers, "quality_threshold": threshold, "top_k": top_k}.items()
        if value is not None
    }
    run_settings = settings.model_copy(update=overrides)

    candidates = generate_unique_logos(params, settings=run_settings)
    if not candidates:
        console.print(f"[yellow]No marks cleared the {run_settings.quality_threshold:.0f}-point quality bar.[/]")
        return
    if len(candidates) < run_settings.top_k:
        console.print(f"[yellow]Only {len(candidates)} marks cleared the quality bar.[/]")

    console.print(_candidate_table(f"Marks for {params.brand_name}", candidates))
    if out is not None:
        _export(candidates, out)


@app.command()
def samples(
    brand: str = typer.Argument(..., help="Brand name to sample."),
    out: Optional[Path] = typer.Option(None, help="Directory to write SVGs and manifest.json into."),
) -> None:
    """Render one unfiltered sample per algorithm."""

    try:
        candidates = generate_all_algorithm_samples(brand)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    console.print(_candidate_table(f"Samples for {candidates[0].seed.brand_name}", candidates))
    if out is not None:
        _export(candidates, out)


@app.command()
def select(brand: str = typer.Argument(..., help="Brand name to classify.")) -> None:
    try:
        chosen = select_algorithm(brand)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    info = algorithm_info(chosen)
    console.print(f"[bold]{chosen.value}[/] ({info.name}): {info.description}")


@app.command()
def algorithms() -> None:
    table = Table(title="Algorithms")
    table.add_column("Key")
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Example")
    for algo in ALL_ALGORITHMS:
        info = algorithm_info(algo)
        table.add_row(algo.value, info.name, info.description, info.example)
    console.print(table)


@app.command()
def inspect(
    brand: str = typer.Argument(..., help="Brand name."),
    algorithm: str = typer.Option(..., "--algorithm", "-a", help="Algorithm key."),
    salt: Optional[str] = typer.Option(None, help="Salt to reproduce; random when omitted."),
    timestamp: Optional[int] = typer.Option(None, help="Epoch milliseconds to reproduce; now when omitted."),
) -> None:
    """Print a seed and its parameters as JSON."""

    algo = _parse_algorithm_option(algorithm)
    try:
        seed = generate_master_seed(brand, algo, salt=salt, created_at=timestamp)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(json.dumps(seed.model_dump(mode="json", by_alias=True), indent=2))


def main() -> None:  # pragma: no cover - CLI entrypoint
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
