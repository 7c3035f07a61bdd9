"""Floodlight console CLI"""

import getpass
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .backend import RestDeviceInventory, SwitchClient
from .commands import build_registry
from .config import ConsoleConfig, load_config
from .core.logging import setup_logging
from .exceptions import ConsoleError, StartupError
from .shell import ConsoleServer, ShellFactory, StreamConsole

app = typer.Typer(
    name="floodlight-console",
    help="Cisco-style SSH command console for the Floodlight controller",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/]")
    raise typer.Exit(1)


@app.callback()
def _global(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(
        None, "--log-file", help="Also write logs to this file"
    ),
):
    setup_logging(debug=debug, log_file=log_file)


def _config(
    config_file: Optional[str], rest_url: Optional[str] = None, **overrides
) -> ConsoleConfig:
    try:
        return load_config(config_file, rest_url=rest_url, **overrides)
    except StartupError as e:
        _fail(str(e))


def _registry(config: ConsoleConfig):
    switches = SwitchClient(config.rest_url, timeout=config.rest_timeout)
    devices = RestDeviceInventory(config.rest_url, timeout=config.rest_timeout)
    try:
        return build_registry(switches, devices)
    except ConsoleError as e:
        _fail(f"Command registry is broken: {e}")


@app.command("serve")
def serve(
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML configuration file"
    ),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="SSH listen port"),
    username: Optional[str] = typer.Option(None, "--username", "-u"),
    password: Optional[str] = typer.Option(None, "--password"),
    hostkey: Optional[str] = typer.Option(None, "--hostkey", help="Host key file"),
    rest_url: Optional[str] = typer.Option(
        None, "--rest-url", help="Controller REST API base URL"
    ),
):
    """Run the SSH console server"""
    config = _config(
        config_file,
        rest_url=rest_url,
        port=port,
        username=username,
        password=password,
        hostkey=hostkey,
    )
    server = ConsoleServer(config, ShellFactory(_registry(config), config))
    try:
        server.start()
    except StartupError as e:
        _fail(str(e))
    host, bound_port = server.address
    console.print(f"[green]Console listening on {host}:{bound_port}[/]")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        console.print("[dim]Stopping console...[/]")
        server.shutdown()


@app.command("local")
def local(
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML configuration file"
    ),
    rest_url: Optional[str] = typer.Option(
        None, "--rest-url", help="Controller REST API base URL"
    ),
):
    """Run one console session on this terminal as the current OS user"""
    config = _config(config_file, rest_url=rest_url)
    factory = ShellFactory(_registry(config), config)
    session = factory.create_session(
        StreamConsole(sys.stdin, sys.stdout), getpass.getuser()
    )
    try:
        session.run()
    except KeyboardInterrupt:
        session.close()


@app.command("show-config")
def show_config(
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML configuration file"
    ),
):
    """Show the effective configuration"""
    config = _config(config_file)
    for key, value in config.masked().items():
        console.print(f"[bold]{key}:[/] {escape(str(value))}", highlight=False)


def main():
    app()


if __name__ == "__main__":
    main()
