"""
ZeroApp Builder CLI.

Command-line interface for building projects, previewing rendered documents
and running the HTTP server.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .core.config import get_config
from .core.logging import setup_logging
from .models.project import Project

app = typer.Typer(
    name="zeroapp",
    help="Generate Android project sources from a JSON app description",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"ZeroApp Builder v{__version__}")
        raise typer.Exit()


def load_project(path: Path) -> Project:
    """Load and validate a project description, exiting with a message on failure."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Not valid JSON: {e}[/red]")
        raise typer.Exit(1)

    # Accept both a bare project and a {"project": ...} request body
    if isinstance(data, dict) and "project" in data and "screens" not in data:
        data = data["project"]

    try:
        return Project.model_validate(data)
    except PydanticValidationError as e:
        console.print("[red]Invalid project data:[/red]")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "<root>"
            console.print(f"  • {location}: {error['msg']}")
        raise typer.Exit(1)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """ZeroApp Builder: app description to Android project."""


@app.command()
def build(
    project_path: Path = typer.Argument(
        ...,
        help="Path to the project JSON file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    password: Optional[str] = typer.Option(
        None,
        "--password",
        "-p",
        help="Keystore password (a placeholder keystore is written without one)",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Storage directory (defaults to the configured storage path)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Generate the project tree, keystore and packaged artifact."""
    config = get_config().model_copy(deep=True)
    if verbose:
        config.log_level = "DEBUG"
    if output_dir is not None:
        config.storage.base_path = output_dir
    setup_logging(config)

    project = load_project(project_path)

    console.print(Panel.fit(
        "[bold blue]ZeroApp Builder[/bold blue]\n"
        "App description → Android project → APK placeholder",
        border_style="blue",
    ))
    console.print(f"\n[bold]App:[/bold] {project.name} ({project.package} v{project.version})")
    console.print(f"[bold]Screens:[/bold] {len(project.screens)}")
    console.print(f"[bold]Storage:[/bold] {config.storage.base_path}\n")

    from .orchestration import BuildPipeline

    pipeline = BuildPipeline.from_config(config)
    result = asyncio.run(pipeline.run(project, password))

    if not result.success:
        console.print("\n[bold red]✗ Build failed![/bold red]")
        console.print(f"Error: {result.error}")
        if result.failed_stage:
            console.print(f"Failed at: {result.failed_stage}")
        raise typer.Exit(1)

    console.print("[bold green]✓ Build completed successfully![/bold green]\n")

    table = Table(title="Build Results")
    table.add_column("Stage", style="cyan")
    table.add_column("Status")
    table.add_column("Duration", justify="right")
    for stage in result.stages:
        table.add_row(stage.stage_name, stage.status.value, f"{stage.duration_seconds:.2f}s")
    console.print(table)

    if result.keystore is not None and result.keystore.is_simulated:
        console.print(f"\n[yellow]Keystore is a placeholder: {result.keystore.detail}[/yellow]")

    console.print(f"\n[bold]Project sources:[/bold] {config.storage.base_path / result.project_directory}")
    console.print(f"[bold]Artifact:[/bold] {config.storage.base_path / result.apk_key}")
    console.print(f"[bold]Download as:[/bold] {result.apk_filename}")


@app.command()
def render(
    project_path: Path = typer.Argument(
        ...,
        help="Path to the project JSON file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    screen: Optional[str] = typer.Option(
        None,
        "--screen",
        "-s",
        help="Screen id whose layout to print (prints the manifest when omitted)",
    ),
) -> None:
    """Print a rendered document without writing anything."""
    from .services.renderer import UiTreeRenderer

    project = load_project(project_path)
    renderer = UiTreeRenderer(max_depth=get_config().render.max_depth)

    if screen is None:
        document = renderer.render_manifest(project)
    elif screen in project.screens:
        document = renderer.render_layout(project.screens[screen], project.name)
    else:
        console.print(f"[red]Unknown screen '{screen}'. Available: {', '.join(project.screens)}[/red]")
        raise typer.Exit(1)

    console.print(Syntax(document, "xml", theme="ansi_dark", word_wrap=True))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the HTTP server."""
    import uvicorn

    config = get_config()
    setup_logging(config)
    bind_host = host or config.server.host
    bind_port = port or config.server.port

    console.print(f"ZeroApp Builder server running on http://{bind_host}:{bind_port}")
    uvicorn.run(
        "zeroapp.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
    )


@app.command()
def config() -> None:
    """Show the current configuration."""
    cfg = get_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("Server", f"{cfg.server.host}:{cfg.server.port}")
    table.add_row("Upload Limit", f"{cfg.server.max_upload_bytes // (1024 * 1024)} MB")
    table.add_row("Storage Path", str(cfg.storage.base_path))
    table.add_row("Render Max Depth", str(cfg.render.max_depth))
    table.add_row("keytool", cfg.signing.keytool_path)
    table.add_row("Simulated Keystore", "allowed" if cfg.signing.allow_simulated else "disabled")

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  ZEROAPP_LOG_LEVEL, ZEROAPP_HOST, ZEROAPP_PORT (or PORT), ZEROAPP_STORAGE_PATH")
    console.print("  ZEROAPP_RENDER_MAX_DEPTH, ZEROAPP_KEYTOOL, ZEROAPP_ALLOW_SIMULATED_KEYSTORE")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
