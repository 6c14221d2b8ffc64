"""Command line interface for file focus."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.tree import Tree

from . import __version__
from .core.file_focus import FileFocus
from .exceptions import FileFocusError
from .models.config import (
    Config,
    create_default_config,
    default_config_path,
    load_config,
    resolve_root,
)
from .tree.nodes import DisplayNode
from .tree.projector import TreeProjector

console = Console()


def setup_logging(level: str) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_settings(root: Optional[Path], config_path: Optional[Path]) -> Config:
    root_path = resolve_root(root or Path("."))
    if config_path is None:
        candidate = default_config_path(root_path)
        config_path = candidate if candidate.exists() else None
    if config_path is not None:
        return load_config(config_path, root_path=root_path)
    return Config(root_path=root_path)


def _run(ctx: click.Context, action: Callable[[FileFocus], Awaitable[Any]]) -> Any:
    """Open the workspace, run an async action against it and report errors."""
    async def _main():
        focus = FileFocus(ctx.obj["config"])
        try:
            await focus.open()
            return await action(focus)
        finally:
            focus.close()

    try:
        return asyncio.run(_main())
    except FileFocusError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


async def build_tree(projector: TreeProjector, max_depth: int) -> Tree:
    """Walk the projected tree down to ``max_depth`` levels into a rich Tree."""
    tree = Tree("[bold cyan]Groups[/bold cyan]")

    async def _walk(parent: Tree, node: Optional[DisplayNode], depth: int) -> None:
        if depth > max_depth:
            return
        for child in await projector.get_children(node):
            item = projector.get_tree_item(child)
            label = item.label
            if item.icon == "warning":
                label = f"[yellow]{label}[/yellow]"
            elif item.icon == "folder":
                label = f"[bold]{label}[/bold]"
            if item.description:
                label = f"{label} [dim]{item.description}[/dim]"
            branch = parent.add(label)
            if child.is_expandable:
                await _walk(branch, child, depth + 1)

    await _walk(tree, None, 1)
    return tree


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--root',
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Workspace root (defaults to the current directory)'
)
@click.option(
    '--config',
    'config_path',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Configuration file path'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Verbose output'
)
@click.pass_context
def cli(ctx: click.Context, root: Optional[Path], config_path: Optional[Path], verbose: bool):
    """Organize files and folders into named groups, independent of where they live."""
    try:
        config = _load_settings(root, config_path)
    except FileFocusError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    setup_logging("DEBUG" if verbose else config.log_level)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command()
@click.pass_context
def init(ctx: click.Context):
    """Write a default configuration file for the workspace."""
    config: Config = ctx.obj["config"]
    config_path = default_config_path(config.root_path)
    if config_path.exists():
        console.print(f"[yellow]Configuration already exists at {config_path}[/yellow]")
        return
    create_default_config(config_path, config.root_path)
    console.print(f"[green]Created {config_path}[/green]")


@cli.command()
@click.pass_context
def groups(ctx: click.Context):
    """List groups."""
    async def _action(focus: FileFocus):
        return focus.groups(), focus.store.pinned_group_id

    group_list, pinned_id = _run(ctx, _action)
    if not group_list:
        console.print("[yellow]No groups yet[/yellow]")
        return

    table = Table(title="Groups")
    table.add_column("Name", style="cyan")
    table.add_column("Resources", justify="right")
    table.add_column("Pinned")
    table.add_column("Id", style="dim")
    for group in group_list:
        table.add_row(group.name, str(len(group)), "yes" if group.id == pinned_id else "", group.id)
    console.print(table)


@cli.command()
@click.argument('name')
@click.pass_context
def create(ctx: click.Context, name: str):
    """Create a group called NAME."""
    group = _run(ctx, lambda focus: focus.create_group(name))
    console.print(f"[green]Created group {group.name}[/green]")


@cli.command()
@click.argument('group')
@click.argument('name')
@click.pass_context
def rename(ctx: click.Context, group: str, name: str):
    """Rename GROUP to NAME."""
    renamed = _run(ctx, lambda focus: focus.rename_group(group, name))
    console.print(f"[green]Renamed group to {renamed.name}[/green]")


@cli.command()
@click.argument('group')
@click.pass_context
def delete(ctx: click.Context, group: str):
    """Delete GROUP. Files on disk are not touched."""
    deleted = _run(ctx, lambda focus: focus.delete_group(group))
    console.print(f"[green]Deleted group {deleted.name}[/green]")


@cli.command()
@click.argument('group')
@click.argument('paths', nargs=-1, required=True, type=click.Path(path_type=Path))
@click.pass_context
def add(ctx: click.Context, group: str, paths: Tuple[Path, ...]):
    """Add PATHS to GROUP."""
    added = _run(ctx, lambda focus: focus.add_resources(group, paths))
    if added:
        console.print(f"[green]Added {len(added)} resources to {group}[/green]")
    else:
        console.print("[yellow]Nothing added[/yellow]")


@cli.command()
@click.argument('group')
@click.argument('paths', nargs=-1, required=True, type=click.Path(path_type=Path))
@click.pass_context
def remove(ctx: click.Context, group: str, paths: Tuple[Path, ...]):
    """Remove PATHS from GROUP. Files on disk are not touched."""
    removed = _run(ctx, lambda focus: focus.remove_resources(group, paths))
    if removed:
        console.print(f"[green]Removed {len(removed)} resources from {group}[/green]")
    else:
        console.print("[yellow]Nothing removed[/yellow]")


@cli.command()
@click.argument('group', required=False)
@click.option('--clear', is_flag=True, help='Clear the pinned group')
@click.pass_context
def pin(ctx: click.Context, group: Optional[str], clear: bool):
    """Pin GROUP as the favourite."""
    if not clear and group is None:
        raise click.UsageError("Give a GROUP to pin or use --clear")

    pinned = _run(ctx, lambda focus: focus.pin_group(None if clear else group))
    if pinned is None:
        console.print("[green]Cleared pinned group[/green]")
    else:
        console.print(f"[green]Pinned {pinned.name}[/green]")


@cli.command()
@click.argument('source')
@click.argument('paths', nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option('--to', 'target', required=True, help='Group to move the resources into')
@click.pass_context
def move(ctx: click.Context, source: str, paths: Tuple[Path, ...], target: str):
    """Move PATHS from group SOURCE into another group."""
    result = _run(ctx, lambda focus: focus.move_resources(paths, source, target))
    if result.moved_count:
        console.print(f"[green]Moved {result.moved_count} resources to {target}[/green]")
    else:
        console.print("[yellow]Nothing moved[/yellow]")


@cli.command()
@click.option('--depth', default=2, show_default=True, type=click.IntRange(min=1),
              help='Levels to expand (1 shows groups only)')
@click.pass_context
def tree(ctx: click.Context, depth: int):
    """Show groups and their resources as a tree."""
    rendered = _run(ctx, lambda focus: build_tree(focus.projector, depth))
    console.print(rendered)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
