"""CLI interface for inspecting an application's layered configuration.

This module provides a Typer-based command-line interface to load the
configuration of an application root the way the application itself does,
and print the merged result, single values or generated paths.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from layerconf.conf import Conf
from layerconf.config.loader import dump_yaml
from layerconf.errors import ConfigError, ConfigOtherError
from layerconf.telemetry import configure_logging
from layerconf.values import ValueKind

app = typer.Typer(help="Inspect layered application configuration")
console = Console()
err_console = Console(stderr=True)

ROOT_OPTION = typer.Option(
    Path("."), "--root", "-r", help="Application root holding the manifest and defaults.yml"
)
CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="Extra configuration file overriding all other sources"
)


@app.callback()
def main() -> None:
    """Inspect layered application configuration."""
    configure_logging()


def _prepared(root: Path, config: Optional[Path]) -> Conf:
    """Build and prepare a Conf, exiting with status 1 on failure."""
    conf = Conf(root)
    try:
        conf.prepare(config=config)
    except ConfigError as e:
        message = e.args[0] if isinstance(e, ConfigOtherError) else str(e)
        err_console.print(f"[bold red]{type(e).__name__}:[/bold red] {message}")
        raise typer.Exit(code=1) from e
    return conf


@app.command(name="dump")
def dump_command(root: Path = ROOT_OPTION, config: Optional[Path] = CONFIG_OPTION) -> None:
    """Print the merged configuration as YAML.

    Examples:
        layerconf dump --root /srv/myapp
        APP_ENV=staging layerconf dump -c ./override.yml
    """
    conf = _prepared(root, config)
    typer.echo(conf.dump(), nl=False)


@app.command(name="get")
def get_command(
    path: str = typer.Argument(..., help="Dotted path, e.g. logs.newrelic or hosts.0"),
    root: Path = ROOT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Print the value at a dotted path; exit with status 1 when absent."""
    conf = _prepared(root, config)
    value = conf.lookup(*path.split("."))
    if value.is_absent:
        err_console.print(f"[yellow]{path}: not set[/yellow]")
        raise typer.Exit(code=1)
    if value.kind in (ValueKind.MAPPING, ValueKind.SEQUENCE):
        typer.echo(dump_yaml({path: value.value}), nl=False)
    else:
        typer.echo(value.value)


@app.command(name="paths")
def paths_command(root: Path = ROOT_OPTION, config: Optional[Path] = CONFIG_OPTION) -> None:
    """Show generated paths and the files that fed the configuration."""
    conf = _prepared(root, config)

    table = Table(title=f"{conf.app_name} {conf.app_version} ({conf.app_env})")
    table.add_column("Name", style="cyan")
    table.add_column("Value")
    table.add_row("root", str(conf.app_root))
    table.add_row("libs", str(conf.app_libs))
    table.add_row("pidfile", conf.gen_pidfile())
    table.add_row("process name", conf.gen_process_name())
    table.add_row("system config", conf.gen_config_etc())
    table.add_row("sample config", conf.gen_config_sample())
    for source in conf.files:
        loaded = "loaded" if source in conf.loaded_files else "[dim]missing[/dim]"
        table.add_row("source", f"{source} {loaded}")
    console.print(table)


@app.command(name="check")
def check_command(root: Path = ROOT_OPTION, config: Optional[Path] = CONFIG_OPTION) -> None:
    """Load the configuration and report problems an operator should fix."""
    conf = _prepared(root, config)

    etc_path = Path(conf.gen_config_etc())
    if etc_path not in conf.loaded_files:
        console.print(f"[yellow]System configuration not found: {etc_path}[/yellow]")
        console.print(conf.gen_config_message())

    state = "enabled" if conf.newrelic_enabled() else "disabled"
    console.print(f"[green]OK[/green] {conf.app_name} {conf.app_version}, newrelic {state}")


if __name__ == "__main__":
    app()
