"""
ffjson inception — CLI entrypoint.

Usage:
    python -m inception.main --help
    python -m inception.main generate
    python -m inception.main resolve models/user.go
    python -m inception.main bridge-path models/user.go
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from inception import __version__
from inception.core.observability.logging_config import (
    FILE_ENV,
    FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="inception")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to inception.yml (default: auto-detect).",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    envvar=FILE_ENV,
    default=None,
    help="Also write a DEBUG log, including go output, to this file.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    log_file: str | None,
) -> None:
    """ffjson inception — expose Go types to the ffjson generator."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=log_file,
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(ctx: click.Context, as_json: bool) -> None:
    """Run a full inception cycle for the manifest."""
    from inception.core.use_cases.generate import run_inception

    result = run_inception(manifest_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    if not result.ok:
        click.secho(f"❌ {result.error_kind}: {result.error}", fg="red", err=True)
        sys.exit(1)

    if not ctx.obj.get("quiet"):
        click.secho(f"✅ {result.output_path}", fg="green")
        click.echo(f"   {result.type_count} types from {result.import_identity}")
        click.echo(f"   {result.duration_ms} ms")
    if not result.clean:
        click.secho(f"⚠️  Leftover artifacts, remove {result.bridge_path} by hand", fg="yellow", err=True)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
def resolve(input_path: str) -> None:
    """Print the Go import path of INPUT_PATH's package."""
    from inception.core.config.settings import ToolchainSettings
    from inception.core.errors import ResolutionError
    from inception.core.services.import_resolver import resolve_import_identity

    settings = ToolchainSettings.from_env()
    try:
        identity = resolve_import_identity(
            settings.build_toolchain(), input_path, settings.search_roots
        )
    except ResolutionError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    click.echo(identity)


@cli.command("bridge-path")
@click.argument("input_path")
def bridge_path(input_path: str) -> None:
    """Print the bridge file path generated for INPUT_PATH."""
    from inception.core.services.emitters import derive_bridge_path

    click.echo(derive_bridge_path(input_path))


if __name__ == "__main__":
    cli()
