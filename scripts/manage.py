"""CLI entrypoint for Profileforge.

Usage (uv):
  uv run python -m scripts.manage setup-db
  uv run python -m scripts.manage seed-traits
  uv run python -m scripts.manage generate --seed abc --count 3
  uv run python -m scripts.manage serve --port 3000

Or via installed script:
  profileforge generate --seed abc
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from profileforge.config import get_settings
from profileforge.filtering import filter_fields, parse_fields
from profileforge.generator import CharacterGenerator, InvalidOverrideError, generate_multiple
from profileforge.logging_utils import configure_logging
from profileforge.pools import load_pools
from profileforge.types import GenerationOptions

app = typer.Typer(add_completion=False, help="Profileforge character profile service")


@app.callback()
def _root(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL for this run"),
) -> None:
    configure_logging(log_level or get_settings().log_level)


@app.command("setup-db")
def setup_db() -> None:
    """Create all tables on the configured database."""
    from profileforge import db, models  # noqa: F401  (registers tables on Base.metadata)

    engine = db.get_engine()
    db.Base.metadata.create_all(engine)
    typer.echo(f"Database tables created ({engine.url.render_as_string(hide_password=True)})")


@app.command("seed-traits")
def seed_traits(
    pools_path: Optional[Path] = typer.Option(None, "--pools", help="JSON file overriding the built-in pools"),
) -> None:
    """Replace the available_traits reference table with the current pools."""
    from profileforge import db
    from profileforge.store import CharacterStore

    pools = load_pools(pools_path or get_settings().trait_pools_path)
    with db.session_scope() as session:
        breakdown = CharacterStore().replace_reference_traits(session, pools)

    typer.echo(f"Seeded {sum(breakdown.values())} reference traits")
    typer.echo("Breakdown:")
    for category, n in breakdown.items():
        typer.echo(f"- {category}: {n}")


@app.command()
def generate(
    seed: Optional[str] = typer.Option(None, "--seed", "-s", help="Seed for deterministic output; with --count N, character i uses <seed>_<i>"),
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of characters to generate"),
    name: Optional[str] = typer.Option(None, help="Name override"),
    gender: Optional[str] = typer.Option(None, help="male, female, non-binary or other"),
    age: Optional[str] = typer.Option(None, help="Age override"),
    occupation: Optional[str] = typer.Option(None, help="Occupation override"),
    hair_color: Optional[str] = typer.Option(None, help="Hair color override"),
    eye_color: Optional[str] = typer.Option(None, help="Eye color override"),
    height_cm: Optional[str] = typer.Option(None, help="Height override in cm"),
    build: Optional[str] = typer.Option(None, help="Build override"),
    fields: Optional[str] = typer.Option(None, help="Comma-separated list of fields to print"),
    pools_path: Optional[Path] = typer.Option(None, "--pools", help="JSON file overriding the built-in pools"),
) -> None:
    """Print generated characters as JSON. Nothing is written to the database."""
    pools = load_pools(pools_path or get_settings().trait_pools_path)
    options = GenerationOptions(
        name=name,
        gender=gender,
        age=age,
        occupation=occupation,
        hair_color=hair_color,
        eye_color=eye_color,
        height_cm=height_cm,
        build=build,
    )
    try:
        if count == 1:
            result = filter_fields(CharacterGenerator(pools, seed).generate(options), parse_fields(fields))
        else:
            result = filter_fields(generate_multiple(pools, count, seed=seed, options=options), parse_fields(fields))
    except InvalidOverrideError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)
    typer.echo(json.dumps(result, indent=2, ensure_ascii=False))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default HOST or 127.0.0.1)"),
    port: Optional[int] = typer.Option(None, help="Bind port (default PORT or 3000)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    typer.echo(f"Profileforge API on http://{bind_host}:{bind_port}{settings.api_prefix}")
    uvicorn.run("profileforge.api:app", host=bind_host, port=bind_port, reload=reload, log_level=settings.log_level.lower())


if __name__ == "__main__":  # pragma: no cover
    app()
