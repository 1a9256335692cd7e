"""CLI entry point using typer."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from charsheet_terminal import __version__
from charsheet_terminal.config import (
    CONFIG_FILE,
    LOG_FILE,
    AppConfig,
    load_config,
    save_config,
)
from charsheet_terminal.services.character import CharacterRecord
from charsheet_terminal.utils.system import check_character_file

app = typer.Typer(
    name="charsheet-terminal",
    help="Animated terminal for a tabletop character sheet.",
    add_completion=False,
)
console = Console()


def setup_logging(config: AppConfig) -> None:
    """Log to a file only; stdout belongs to the session display."""
    log_path = Path(config.logging.file).expanduser().resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.FileHandler(str(log_path))],
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    fast_boot: bool = typer.Option(False, "--fast-boot", "-f", help="Skip the boot sequence"),
    open_file: str = typer.Option(None, "--open", "-o", help="Character file to load"),
) -> None:
    """Start the character terminal."""
    if ctx.invoked_subcommand is not None:
        return

    config = load_config()
    path = open_file or config.session.character_file

    valid, resolved = check_character_file(path)
    if not valid:
        console.print(f"[red]{resolved}[/red]")
        raise typer.Exit(1)

    character = CharacterRecord()
    try:
        character.load(resolved)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        console.print(f"[red]Could not load character: {e}[/red]")
        raise typer.Exit(1)

    setup_logging(config)

    from charsheet_terminal.session.app import run_session

    try:
        asyncio.run(run_session(config, character, fast_boot=fast_boot))
    except KeyboardInterrupt:
        pass


@app.command()
def config(
    key: str = typer.Argument(None, help="Config key (e.g., output.char_delay_ms)"),
    value: str = typer.Argument(None, help="New value"),
) -> None:
    """View or modify configuration."""
    cfg = load_config()

    if key is None:
        table = Table(title="Configuration")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")

        for section_name, section in cfg.sections().items():
            for attr, current in vars(section).items():
                table.add_row(f"{section_name}.{attr}", json.dumps(current))

        console.print(table)
        if not CONFIG_FILE.exists():
            console.print(f"[dim]Defaults shown; no file at {CONFIG_FILE}[/dim]")
        return

    if value is None:
        console.print("[red]Usage: charsheet-terminal config <key> <value>[/red]")
        raise typer.Exit(1)

    parts = key.split(".")
    if len(parts) != 2:
        console.print("[red]Key format: section.key (e.g., output.char_delay_ms)[/red]")
        raise typer.Exit(1)

    section_name, attr = parts
    sections = cfg.sections()
    if section_name not in sections:
        console.print(f"[red]Unknown section: {section_name}[/red]")
        raise typer.Exit(1)

    obj = sections[section_name]
    if not hasattr(obj, attr):
        console.print(f"[red]Unknown key: {key}[/red]")
        raise typer.Exit(1)

    # Type coercion
    current = getattr(obj, attr)
    try:
        if isinstance(current, bool):
            typed_value: object = value.lower() in ("true", "1", "yes")
        elif isinstance(current, int):
            typed_value = int(value)
        else:
            typed_value = value
    except ValueError:
        console.print(f"[red]Invalid value type for {key}[/red]")
        raise typer.Exit(1)

    setattr(obj, attr, typed_value)
    save_config(cfg)
    console.print(f"[green]{key} = {typed_value}[/green]")


@app.command()
def logs(
    lines: int = typer.Option(50, "--lines", "-n", help="Number of lines"),
) -> None:
    """View session logs."""
    log_path = Path(LOG_FILE).expanduser().resolve()
    if not log_path.exists():
        console.print("[dim]No log file found.[/dim]")
        return

    content = log_path.read_text()
    for line in content.strip().split("\n")[-lines:]:
        console.print(line, markup=False)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"charsheet-terminal v{__version__}")
    console.print(f"Python: {sys.version.split()[0]}")
    console.print(f"Config: {CONFIG_FILE}")


if __name__ == "__main__":
    app()
