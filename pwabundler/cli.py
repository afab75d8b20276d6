# pwabundler/cli.py
from __future__ import annotations
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from pwabundler.core.errors import BundlerError

console = Console()

app = typer.Typer(
    name="pwabundler",
    help="Bundle and publish frontend assets of active extensions.",
    no_args_is_help=True,
)

ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to a pwabundler.json5 config file",
)



def _bootstrap(configPath: Optional[Path]):
    from pwabundler.app.config import initConfig
    from pwabundler.app.factory import buildAssetService
    from pwabundler.core.logging import configureLogging

    store = initConfig(configPath, force=configPath is not None)
    configureLogging()
    return buildAssetService(store)



@app.command("dump")
def dump(
    config: Optional[Path] = ConfigOption,
    noChecksum: bool = typer.Option(
        False,
        "--no-checksum",
        help="Publish under the fixed default name instead of the checksum",
    ),
) -> None:
    """Build the asset bundle and publish it.

    Examples:
        pwabundler dump
        pwabundler dump --config ./pwabundler.json5 --no-checksum
    """
    service = _bootstrap(config)
    try:
        result = service.buildBundle(useChecksum=not noChecksum)
    except BundlerError as err:
        console.print(f"[red]Bundling failed: {err}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Published[/green] {result.path} ({result.entryCount} entries, {len(result.extensions)} extensions)")



@app.command("extensions")
def extensions(config: Optional[Path] = ConfigOption) -> None:
    """List active extensions and the checksum they produce."""
    service = _bootstrap(config)
    try:
        found, checksum = service.listExtensions()
    except BundlerError as err:
        console.print(f"[red]Cannot list extensions: {err}[/red]")
        raise typer.Exit(1)

    if not found:
        console.print("[yellow]No active extensions[/yellow]")
    else:
        table = Table(title="Active Extensions")
        table.add_column("Name", style="cyan")
        table.add_column("Path")
        for ext in found:
            table.add_row(ext.name, ext.path)
        console.print(table)

    console.print(f"Checksum: [bold]{checksum}[/bold]")



@app.command("serve")
def serve(
    config: Optional[Path] = ConfigOption,
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
) -> None:
    """Run the HTTP actions (dump-bundles, extensions, artifacts)."""
    import uvicorn

    from pwabundler.app.config import config as configValue
    from pwabundler.app.factory import createApp

    service = _bootstrap(config)
    webApp = createApp(assetService=service, configureLogs=False)
    uvicorn.run(
        webApp,
        host=host or str(configValue("http.host", "127.0.0.1")),
        port=port or int(configValue("http.port", 8000)),
    )
