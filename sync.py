#!/usr/bin/env python3
"""
AirTable → Outline Sync CLI

Usage:
    python sync.py                  # Run full sync
    python sync.py --dry-run        # Render without writing to Outline
    python sync.py --document-id X  # Update document X instead of the configured one
    python sync.py preview          # Print the rendered Markdown
    python sync.py version          # Show version
"""

import dataclasses
import sys
import traceback

import click
from rich.console import Console

from airtable_outline_sync import __version__
from airtable_outline_sync.config import Config
from airtable_outline_sync.sync_engine import SyncEngine

console = Console()
progress_console = Console(stderr=True)


@click.group(invoke_without_command=True)
@click.option("--dry-run", is_flag=True, help="Render the document without writing to Outline")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.option("--document-id", default=None, help="Outline document to update (overrides OUTLINE_DOCUMENT_ID)")
@click.pass_context
def cli(ctx, dry_run: bool, debug: bool, document_id: str):
    """
    AirTable → Outline Sync

    Mirrors an AirTable table into an Outline document as a Markdown table.
    """
    ctx.ensure_object(dict)
    ctx.obj["dry_run"] = dry_run
    ctx.obj["debug"] = debug
    ctx.obj["document_id"] = document_id

    # If no subcommand, run sync
    if ctx.invoked_subcommand is None:
        ctx.invoke(sync)


def _load_config(ctx) -> Config:
    """Load configuration and apply CLI overrides."""
    config = Config.from_env()

    overrides = {}
    if ctx.obj.get("dry_run"):
        overrides["dry_run"] = True
    if ctx.obj.get("debug"):
        overrides["debug"] = True
    if ctx.obj.get("document_id"):
        overrides["outline_document_id"] = ctx.obj["document_id"]

    return dataclasses.replace(config, **overrides) if overrides else config


@cli.command()
@click.pass_context
def sync(ctx):
    """Run synchronization from AirTable to Outline."""
    debug = ctx.obj.get("debug", False)

    try:
        config = _load_config(ctx)
        debug = debug or config.debug
        SyncEngine(config).sync()
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        console.print("\n[dim]Make sure you have created a .env file with your credentials.[/dim]")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Sync cancelled.[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if debug:
            traceback.print_exc()
        sys.exit(1)


@cli.command()
@click.pass_context
def preview(ctx):
    """Print the rendered Markdown without writing to Outline."""
    try:
        config = _load_config(ctx)
        markdown, _ = SyncEngine(config, console=progress_console).render()
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    click.echo(markdown)


@cli.command()
def version():
    """Show version information."""
    console.print(f"AirTable → Outline Sync v{__version__}")


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
