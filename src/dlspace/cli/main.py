"""CLI commands for dlspace.

Usage:
    dlspace space [PATH] [--json]
    dlspace du PATH [--json]
    dlspace format BYTES
    dlspace parse SIZE
    dlspace check SIZE [PATH]
    dlspace config [--json]
    dlspace config set <key> <value>
"""

import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from dlspace.config.manager import ConfigManager
from dlspace.utils.disk import (
    UNKNOWN_DISK_SPACE,
    InsufficientDiskSpaceError,
    check_size_string_fits,
    get_available_disk_space,
    get_directory_size,
)
from dlspace.utils.size import SIZE_PATTERN, format_bytes, parse_size_to_bytes

console = Console()


def setup_logging(verbose: bool) -> None:
    """Route library log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show debug log output.")
@click.pass_context
def cli(ctx, verbose: bool):
    """dlspace - disk space helpers for download management"""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = ConfigManager()


@cli.command()
@click.argument("path", required=False)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def space(ctx, path: str | None, output_json: bool):
    """Show free space on the filesystem containing PATH."""
    config = ctx.obj["config"]
    target = path or str(config.config.downloads.directory_path)

    available = get_available_disk_space(target)

    if output_json:
        click.echo(json.dumps({"path": target, "available_bytes": available}))
    elif available is UNKNOWN_DISK_SPACE:
        console.print(f"[red]Error: Could not determine free space for {target}[/red]")
    else:
        console.print(f"{target}: [green]{format_bytes(available)}[/green] available")

    if available is UNKNOWN_DISK_SPACE:
        sys.exit(1)


@cli.command()
@click.argument("path")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON.")
def du(path: str, output_json: bool):
    """Show the total size of regular files under PATH."""
    total = get_directory_size(path)

    if output_json:
        click.echo(json.dumps({"path": path, "size_bytes": total}))
        return

    console.print(f"{path}: [cyan]{format_bytes(total)}[/cyan] ({total} bytes)")


@cli.command("format")
@click.argument("size_bytes", type=click.FloatRange(min=0))
def format_cmd(size_bytes: float):
    """Format a byte count as a human-readable size."""
    click.echo(format_bytes(size_bytes))


@cli.command()
@click.argument("size")
def parse(size: str):
    """Parse a size such as '1500 MB' into bytes."""
    size_bytes = parse_size_to_bytes(size)

    # "0 MB" is a valid zero; anything else parsing to 0 is a failure
    if size_bytes == 0 and not _is_zero_size(size):
        console.print(f"[red]Error: Could not parse size: {size!r}[/red]")
        sys.exit(1)

    click.echo(size_bytes)


def _is_zero_size(size: str) -> bool:
    match = SIZE_PATTERN.match(size.strip())
    if not match:
        return False
    try:
        return float(match.group(1)) == 0
    except ValueError:
        return False


@cli.command()
@click.argument("size")
@click.argument("path", required=False)
@click.pass_context
def check(ctx, size: str, path: str | None):
    """Check that a download of SIZE fits in PATH."""
    downloads = ctx.obj["config"].config.downloads
    target = path or str(downloads.directory_path)

    if parse_size_to_bytes(size) == 0 and not _is_zero_size(size):
        console.print(f"[red]Error: Could not parse size: {size!r}[/red]")
        sys.exit(1)

    try:
        check_size_string_fits(
            size,
            target,
            multiplier=downloads.space_multiplier,
            reserve_bytes=downloads.reserve_bytes,
        )
    except InsufficientDiskSpaceError as e:
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)

    console.print(f"[green]✓ {size} fits in {target}[/green]")


@cli.group(invoke_without_command=True)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config(ctx, output_json: bool):
    """Display or modify configuration."""
    if ctx.invoked_subcommand is not None:
        return

    config_manager = ctx.obj["config"]
    all_config = config_manager.get_all()

    if output_json:
        click.echo(json.dumps(all_config, indent=2))
        return

    console.print("[bold]Current Configuration[/bold]")
    console.print()

    console.print("[cyan]Download Settings:[/cyan]")
    console.print(f"  downloads.directory: {all_config['downloads']['directory']}")
    console.print(f"  downloads.reserve: {all_config['downloads']['reserve']}")
    console.print(f"  downloads.space_multiplier: {all_config['downloads']['space_multiplier']}")
    console.print()

    console.print("[cyan]Progress Settings:[/cyan]")
    console.print(f"  progress.debounce_ms: {all_config['progress']['debounce_ms']}")
    console.print()

    console.print("[dim]Use 'dlspace config set <key> <value>' to change settings[/dim]")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx, key: str, value: str):
    """Modify configuration value."""
    config_manager = ctx.obj["config"]

    try:
        config_manager.set(key, value)
        config_manager.save()
        console.print(f"[green]✓ Set {key} = {value}[/green]")
    except (KeyError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
