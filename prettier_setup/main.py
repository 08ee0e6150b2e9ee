"""
prettier-setup — CLI entrypoint.

Usage:
    prettier-setup --help
    prettier-setup apply [PROJECT_DIR] [--dry-run] [--skip-install]
    prettier-setup resolve prettier lint-staged
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from prettier_setup import __version__
from prettier_setup.core.observability.logging_config import LEVELS, setup_logging


_LEVEL_CHOICE = click.Choice(list(LEVELS), case_sensitive=False)


@click.group()
@click.version_option(version=__version__, prog_name="prettier-setup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--log-level",
    type=_LEVEL_CHOICE,
    envvar="PRETTIER_SETUP_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    help="Console log level when no -v/-q/--debug flag is given.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="PRETTIER_SETUP_LOG_FILE",
    default=None,
    help="Also append log records to this file.",
)
@click.option(
    "--log-file-level",
    type=_LEVEL_CHOICE,
    envvar="PRETTIER_SETUP_LOG_FILE_LEVEL",
    default=None,
    help="Log level for --log-file (default: the console level).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    log_level: str,
    log_file: Path | None,
    log_file_level: str | None,
) -> None:
    """prettier-setup — add Prettier, lint-staged and husky to a Node project.

    Every --log-* option can also be set through the matching
    PRETTIER_SETUP_LOG_* environment variable.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    elif quiet:
        log_level = "ERROR"

    setup_logging(level=log_level, log_file=log_file, log_file_level=log_file_level)


@cli.command()
@click.argument(
    "project_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to settings file (default: PROJECT_DIR/.prettier-setup.yml).",
)
@click.option("--dry-run", is_flag=True, help="Show what would change without writing.")
@click.option("--skip-install", is_flag=True, help="Don't run the package install.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def apply(
    ctx: click.Context,
    project_dir: Path,
    config_path: Path | None,
    dry_run: bool,
    skip_install: bool,
    as_json: bool,
) -> None:
    """Add Prettier, lint-staged and husky to PROJECT_DIR.

    Examples:

        prettier-setup apply

        prettier-setup apply ./my-app --dry-run

        prettier-setup apply --skip-install --json
    """
    from prettier_setup.core.use_cases.setup import run_setup

    result = run_setup(
        project_root=project_dir,
        config_path=config_path,
        dry_run=dry_run,
        install=not skip_install,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error or result.install_failed:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False)
    mode_label = "[dry-run] " if dry_run else ""

    if not quiet:
        click.secho(f"\n✨ {mode_label}Prettier setup — {result.project_root}", fg="cyan", bold=True)
        click.echo()

    # Files
    if result.changes:
        verb = "Would write" if dry_run else "Wrote"
        click.secho(f"   {verb} {len(result.changes)} file(s):", fg="white", bold=True)
        for change in result.changes:
            color = "green" if change.kind == "create" else "yellow"
            click.secho(f"     {change.kind.upper():<9}", fg=color, nl=False)
            click.echo(f" {change.path}")
    else:
        click.secho("   Nothing to change — already set up.", fg="green")

    # Steps
    if ctx.obj.get("verbose") and result.pipeline:
        click.echo()
        for step in result.pipeline.steps:
            click.echo(f"     • {step.name} ({step.duration_ms}ms)")

    # Install
    if result.receipts:
        click.echo()
        for receipt in result.receipts:
            command = " ".join(receipt.command)
            if receipt.ok:
                click.secho(f"   ✓ {command}", fg="green", nl=False)
                click.echo(f" ({receipt.duration_ms}ms)")
            else:
                click.secho(f"   ✗ {command or receipt.kind}", fg="red")
                for line in (receipt.error or "").split("\n")[:5]:
                    click.echo(f"     │ {line}")
    elif result.pipeline and result.pipeline.tasks and not quiet:
        click.echo()
        click.secho("   ⊘ Package install skipped — run 'npm install' yourself.", fg="yellow")

    click.echo()
    if result.install_failed:
        sys.exit(1)


@cli.command()
@click.argument("packages", nargs=-1, required=True)
@click.option("--registry", default=None, help="Registry URL (default: public npm).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def resolve(packages: tuple[str, ...], registry: str | None, as_json: bool) -> None:
    """Look up the latest published version of PACKAGES."""
    from prettier_setup.adapters.npm_registry import NpmRegistryClient

    client = NpmRegistryClient(registry) if registry else NpmRegistryClient()
    resolved = list(client.iter_latest_versions(packages))

    if as_json:
        click.echo(json.dumps([p.model_dump() for p in resolved], indent=2))
        return

    for package in resolved:
        if package.is_fallback:
            click.secho(f"   ? {package.name} ", fg="yellow", nl=False)
            click.echo("(unresolved, would record 'latest')")
        else:
            click.secho(f"   ✓ {package.name} ", fg="green", nl=False)
            click.echo(package.version)


if __name__ == "__main__":
    cli()
