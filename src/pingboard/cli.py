"""Pingboard CLI - Command line interface."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
import sys

import click
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.table import Table

console = Console()

_shutdown_requested = False

BANNER = """
 ___ _           _                     _
| _ (_)_ _  __ _| |__  ___  __ _ _ _ __| |
|  _/ | ' \\/ _` | '_ \\/ _ \\/ _` | '_/ _` |
|_| |_|_||_\\__, |_.__/\\___/\\__,_|_| \\__,_|
           |___/
      Live latency and routes for your targets
"""


def parse_target(spec: str) -> tuple[str, str | None]:
    """Split an ``ADDRESS[=LABEL]`` argument into address and label."""
    address, sep, label = spec.partition("=")
    address = address.strip()
    if not address:
        raise click.BadParameter(f"missing address in {spec!r}", param_hint="TARGET")
    return address, (label.strip() or None) if sep else None


def _configure_logging(log_level: str) -> None:
    import structlog

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@click.group(invoke_without_command=True)
@click.option(
    "--config", "-c",
    "config_file",
    type=click.Path(exists=True),
    help="Path to YAML or TOML config file",
)
@click.pass_context
def main(ctx: click.Context, config_file: str | None):
    """Pingboard - Live latency and route dashboard.

    Examples:

        pingboard watch 8.8.8.8=Google 1.1.1.1

        pingboard watch example.com --server http://probe.local:3001

    Use 'pingboard COMMAND --help' for more info on specific commands.
    """
    if config_file:
        from pingboard.core.config import load_config
        try:
            load_config(config_file)
            console.print(f"Loaded config from {config_file}", style="dim")
        except (OSError, ValueError) as e:
            console.print(f"[red]Failed to load config:[/red] {escape(str(e))}")
            sys.exit(1)

    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file

    if ctx.invoked_subcommand is None:
        console.print(BANNER, style="cyan")
        console.print("Usage: pingboard watch 8.8.8.8=Google 1.1.1.1", style="yellow")
        console.print("\nCommands:", style="bold")
        console.print("  pingboard watch    Monitor targets live", style="dim")
        console.print("  pingboard config   View configuration", style="dim")
        console.print("  pingboard version  Show version information", style="dim")


@main.command()
@click.argument("targets", nargs=-1, required=True)
@click.option("--server", "-s", default=None, help="Probing service URL (default: PINGBOARD_SERVER_URL)")
@click.option(
    "--refresh",
    "-r",
    type=click.FloatRange(min=0.1),
    default=1.0,
    help="Screen refresh interval in seconds (default: 1)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
    help="Log level (default: warning, use --verbose for debug)",
)
def watch(targets: tuple[str, ...], server: str | None, refresh: float, verbose: bool, log_level: str):
    """Monitor TARGETS live. Each TARGET is ADDRESS or ADDRESS=LABEL."""
    parsed = [parse_target(t) for t in targets]
    _configure_logging("debug" if verbose else log_level)
    exit_code = _run_with_signal_handling(run_dashboard(parsed, server, refresh))
    if exit_code:
        sys.exit(exit_code)


def _run_with_signal_handling(coro) -> int:
    """Run the dashboard with clean Ctrl+C shutdown."""
    global _shutdown_requested
    _shutdown_requested = False

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    main_task = loop.create_task(coro)

    def signal_handler(sig: int, frame: object) -> None:
        global _shutdown_requested
        if _shutdown_requested:
            console.print("\n[red]Force shutdown![/red]")
            sys.exit(1)
        _shutdown_requested = True
        main_task.cancel()

    signal.signal(signal.SIGINT, signal_handler)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, signal_handler)

    try:
        return loop.run_until_complete(main_task)
    except (asyncio.CancelledError, KeyboardInterrupt):
        return 0
    finally:
        pending = asyncio.all_tasks(loop)
        for task in pending:
            task.cancel()
        if pending:
            loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
        loop.close()


async def run_dashboard(
    targets: list[tuple[str, str | None]],
    server: str | None,
    refresh: float = 1.0,
) -> int:
    """Connect, add targets and render the dashboard until cancelled.

    Returns:
        Process exit code.
    """
    from pingboard.channel import SocketIOChannel
    from pingboard.core.config import get_config
    from pingboard.core.exceptions import ChannelUnavailableError, PingboardError
    from pingboard.dashboard import DashboardController, render_dashboard

    cfg = get_config()
    channel_config = cfg.channel
    if server:
        channel_config = channel_config.model_copy(update={"server_url": server})

    controller = DashboardController(
        SocketIOChannel(channel_config, cfg.reconnect),
        history_config=cfg.history,
    )

    try:
        await controller.open()
    except ChannelUnavailableError as e:
        console.print(f"[red]Error:[/red] {e}")
        await controller.close()
        return 1

    console.print(f"Connected to {channel_config.server_url}", style="green")

    try:
        for address, label in targets:
            try:
                await controller.add_target(address, label)
            except PingboardError as e:
                console.print(f"[yellow]Skipped:[/yellow] {e}")

        with Live(render_dashboard(controller), console=console, auto_refresh=False) as live:
            while True:
                await asyncio.sleep(refresh)
                live.update(render_dashboard(controller), refresh=True)
    finally:
        for target in controller.targets():
            with contextlib.suppress(PingboardError):
                await controller.remove_target(target.address)
        await controller.close()
        console.print("[green]Dashboard closed.[/green]")


@main.command()
def version():
    """Show version information."""
    from pingboard import __version__

    console.print(BANNER, style="cyan")
    console.print(f"[bold]Version:[/bold] {__version__}")
    console.print(f"[bold]Python:[/bold] {sys.version}")


@main.group()
def config():
    """View and export configuration settings.

    All settings can be configured via environment variables with the
    PINGBOARD_ prefix. Use these commands to see current values.

    Examples:

        pingboard config show            # Show all config settings

        pingboard config export          # Export as env vars
    """
    pass


@config.command("show")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--section", "-s", help="Show only specific section (channel, reconnect, history)")
def config_show(json_output: bool, section: str | None):
    """Show current configuration settings.

    Values come from environment variables or defaults.
    """
    from pingboard.core.config import get_config

    display = get_config().to_display_dict()

    if section:
        section = section.lower()
        if section not in display:
            console.print(f"[red]Unknown section:[/red] {section}")
            console.print(f"[dim]Available: {', '.join(display.keys())}[/dim]")
            sys.exit(1)
        display = {section: display[section]}

    if json_output:
        import json
        click.echo(json.dumps(display, indent=2))
        return

    console.print("[bold]Current Configuration[/bold]\n")

    for section_name, settings in display.items():
        table = Table(title=section_name.title())
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")
        table.add_column("Env Variable", style="dim")

        for key, value in settings.items():
            env_var = f"PINGBOARD_{key.upper()}"
            value_str = str(value) if value is not None else "[dim]None[/dim]"
            table.add_row(key, value_str, env_var)

        console.print(table)
        console.print()


@config.command("export")
@click.option("--shell", type=click.Choice(["bash", "powershell", "cmd"]), default="bash", help="Shell format")
def config_export(shell: str):
    """Export current configuration as environment variables."""
    from pingboard.core.config import get_config

    env_dict = get_config().to_env_dict()

    click.echo(f"# Pingboard Configuration Export ({shell})")

    for key, value in env_dict.items():
        if not value:
            continue
        if shell == "bash":
            click.echo(f'export {key}="{value}"')
        elif shell == "powershell":
            click.echo(f'$env:{key}="{value}"')
        elif shell == "cmd":
            click.echo(f"set {key}={value}")


if __name__ == "__main__":
    main()
