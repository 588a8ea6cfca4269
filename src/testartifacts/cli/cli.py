"""Typer CLI entrypoint for inspecting the test artifact root."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from testartifacts.config import (
    ArtifactConfig,
    ArtifactConfigError,
    load_artifact_config,
    resolve_artifact_config,
)
from testartifacts.inventory import (
    ReservationRecord,
    ReservationState,
    find_orphaned_locks,
    scan_reservations,
)

app = typer.Typer(help="Test artifact root inspection")
_CONSOLE = Console()
_LOGGING_CONFIGURED = False
_STATE_STYLES = {
    ReservationState.HELD: "green",
    ReservationState.ORPHANED_LOCK: "yellow",
    ReservationState.UNLOCKED_DIRECTORY: "red",
}

RootOption = Annotated[
    Path | None,
    typer.Option(
        "--root",
        file_okay=False,
        dir_okay=True,
        help="Artifact root override.",
    ),
]
ConfigFileOption = Annotated[
    Path | None,
    typer.Option(
        "--config-file",
        file_okay=True,
        dir_okay=False,
        help="Path to artifact config YAML/JSON file.",
    ),
]


def _configure_logging() -> None:
    """Configure Rich-backed logging once for CLI commands."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    _LOGGING_CONFIGURED = True


def _resolve_config(root: Path | None, config_file: Path | None) -> ArtifactConfig:
    """Resolve config from file or environment, then apply --root.

    Raises:
        Exit: With code 2 when the config file is invalid.
    """
    try:
        if config_file is not None:
            config = load_artifact_config(config_file, base_dir=Path.cwd())
        else:
            config = resolve_artifact_config(os.environ, base_dir=Path.cwd())
    except ArtifactConfigError as exc:
        _CONSOLE.print(Panel(str(exc), title="Config Error", border_style="red"))
        raise typer.Exit(code=2) from exc
    if root is not None:
        config = config.model_copy(update={"artifacts_root": root.absolute()})
    return config


def _render_records(title: str, records: list[ReservationRecord]) -> None:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Reservation", style="bold")
    table.add_column("State")
    table.add_column("Artifacts")
    for record in records:
        style = _STATE_STYLES[record.state]
        table.add_row(
            record.name,
            f"[{style}]{record.state.value}[/{style}]",
            ", ".join(record.artifact_names),
        )
    _CONSOLE.print(table)


@app.command("config")
def config_command(root: RootOption = None, config_file: ConfigFileOption = None) -> None:
    """Print the resolved artifact configuration.

    Args:
        root: Optional artifact root override.
        config_file: Optional artifact config file path.
    """
    _configure_logging()
    config = _resolve_config(root, config_file)
    _CONSOLE.print(
        Panel(
            (
                f"Root: {config.artifacts_root}\n"
                f"Preserve runs: {config.preserve_runs}\n"
                f"Max reservation attempts: {config.max_reservation_attempts}"
            ),
            title="Artifact Config",
            border_style="cyan",
            expand=True,
        )
    )


@app.command("list")
def list_command(root: RootOption = None, config_file: ConfigFileOption = None) -> None:
    """List reservations under the artifact root.

    Args:
        root: Optional artifact root override.
        config_file: Optional artifact config file path.
    """
    _configure_logging()
    config = _resolve_config(root, config_file)
    records = scan_reservations(config.artifacts_root)
    if not records:
        _CONSOLE.print(f"No reservations under {config.artifacts_root}")
        return
    _render_records(f"Reservations ({config.artifacts_root})", records)


@app.command("orphans")
def orphans_command(root: RootOption = None, config_file: ConfigFileOption = None) -> None:
    """Report lock markers whose reservation directory is gone.

    Orphaned markers are reported, not removed.

    Args:
        root: Optional artifact root override.
        config_file: Optional artifact config file path.

    Raises:
        Exit: With code 1 when orphaned markers exist.
    """
    _configure_logging()
    config = _resolve_config(root, config_file)
    orphans = find_orphaned_locks(config.artifacts_root)
    if not orphans:
        _CONSOLE.print(f"No orphaned lock markers under {config.artifacts_root}")
        return
    _render_records(f"Orphaned lock markers ({config.artifacts_root})", orphans)
    raise typer.Exit(code=1)
