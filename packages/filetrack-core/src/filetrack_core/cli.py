"""CLI entry point for filetrack.

Usage:
    filetrack snapshot src/*.py --output baseline.json
    filetrack check baseline.json
    filetrack config init
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from filetrack_core.config import DEFAULT_CONFIG_TEMPLATE, FileTrackConfig, load_config
from filetrack_core.freshness import FileAccessError, FreshnessEvaluator, Snapshot
from filetrack_core.logs import configure_logging
from filetrack_core.tracking import FileStatus, FileStatusAPI, FileTrackerService

app = typer.Typer(
    name="filetrack",
    help="Record what files looked like when read, and find out which copies went stale.",
)

config_app = typer.Typer(help="Manage filetrack configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: FileTrackConfig | None = None

# Keeps `snapshot` stdout clean JSON
err_console = Console(stderr=True)

_STATUS_STYLE = {
    FileStatus.current: "green",
    FileStatus.stale: "yellow",
    FileStatus.error: "red",
}


def _get_config() -> FileTrackConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to filetrack.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


@app.command()
def snapshot(
    paths: list[Path] = typer.Argument(..., help="Files to capture"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the baseline here"),
) -> None:
    """Capture mtime, size and (optionally) content digests as a JSON baseline."""
    cfg = _get_config()
    evaluator = FreshnessEvaluator.from_config(cfg.tracker)

    files: dict[str, dict] = {}
    failed = False
    for p in paths:
        key = str(p.absolute())
        try:
            snap = evaluator.capture(key)
        except FileAccessError as e:
            err_console.print(f"[red]Error:[/red] {escape(str(e))}")
            failed = True
            continue
        files[key] = snap.model_dump(mode="json", exclude={"content"})

    baseline = {
        "use_content_hash": cfg.tracker.use_content_hash,
        "hash_algorithm": cfg.tracker.hash_algorithm,
        "files": files,
    }
    text = json.dumps(baseline, indent=2)
    if output is not None:
        output.write_text(text)
        rprint(f"[green]Wrote[/green] {len(files)} snapshot(s) to {output}")
    else:
        typer.echo(text)

    if failed:
        raise typer.Exit(1)


@app.command()
def check(
    baseline: Path = typer.Argument(..., help="Baseline JSON written by `filetrack snapshot`"),
) -> None:
    """Compare a baseline against the files on disk now."""
    cfg = _get_config()
    try:
        data = json.loads(baseline.read_text())
        snapshots = {
            path: Snapshot.model_validate(fields) for path, fields in data["files"].items()
        }
    except ValidationError as e:
        rprint(f"[red]Error:[/red] malformed baseline {baseline}: {escape(str(e))}")
        raise typer.Exit(1)
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
        rprint(f"[red]Error:[/red] cannot load baseline {baseline}: {escape(str(e))}")
        raise typer.Exit(1)

    # Compare the same way the baseline was captured
    tracker_cfg = cfg.tracker.model_copy(update={
        "use_content_hash": data.get("use_content_hash", cfg.tracker.use_content_hash),
        "hash_algorithm": data.get("hash_algorithm", cfg.tracker.hash_algorithm),
        "max_tracked_files": max(cfg.tracker.max_tracked_files, len(snapshots)),
    })
    service = FileTrackerService(tracker_cfg)
    api = FileStatusAPI(service)

    for path, snap in snapshots.items():
        service.register(path, snap)
    for entry in service.get_all_tracked_files():
        service.update_state(entry.path, entry.snapshot)

    table = Table(title=f"Tracked files ({len(service)})")
    table.add_column("Path", style="cyan")
    table.add_column("Status")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    for entry in sorted(service.get_all_tracked_files(), key=lambda e: e.path):
        style = _STATUS_STYLE.get(entry.status, "white")
        status = f"[{style}]{entry.status.value}[/{style}]"
        if entry.error_reason:
            status += f" ({entry.error_reason})"
        table.add_row(
            entry.path,
            status,
            str(entry.snapshot.size),
            entry.snapshot.mtime.strftime("%Y-%m-%d %H:%M:%S"),
        )
    rprint(table)

    summary = api.get_summary()
    rprint(
        f"{summary.current_files} current, {summary.stale_files} stale, "
        f"{summary.error_files} error"
    )
    if api.get_files_needing_attention():
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default filetrack.yaml in current directory."""
    target = Path("filetrack.yaml")
    if target.exists() and not force:
        rprint("[yellow]filetrack.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
