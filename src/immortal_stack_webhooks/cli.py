"""CLI entry point for the Immortal Stack webhook server."""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import ServerConfig
from .webhooks.signature import generate_signature

app = typer.Typer(
    name="immortal-webhooks",
    help="""Webhook receiver for GitHub and Make.com that creates ClickUp tasks.

Configuration is read from environment variables (CLICKUP_API_TOKEN,
GITHUB_WEBHOOK_SECRET, MAKE_WEBHOOK_SECRET, PORT, ...).

Quick start:
  immortal-webhooks config
  immortal-webhooks serve --port 3000
""",
    add_completion=False,
)
console = Console()


def _load_config(**overrides: object) -> ServerConfig:
    try:
        config = ServerConfig.from_env()
        updates = {key: value for key, value in overrides.items() if value is not None}
        if updates:
            config = ServerConfig.model_validate({**config.model_dump(), **updates})
        return config
    except ValidationError as e:
        console.print(f"[red]Error: Invalid configuration:[/red]\n{escape(str(e))}")
        raise typer.Exit(1) from None


@app.command()
def serve(
    host: str | None = typer.Option(
        None, "--host", help="Interface to bind (default: HOST or 127.0.0.1)"
    ),
    port: int | None = typer.Option(
        None, "--port", "-p", help="Port to listen on (default: PORT or 3000)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info (default), warning, error",
    ),
) -> None:
    """Run the webhook server.

    Examples:
        immortal-webhooks serve
        immortal-webhooks serve --host 0.0.0.0 --port 8080 -l debug
    """
    from .api.server import run_server

    config = _load_config(host=host, port=port, log_level=log_level)
    console.print(
        f"[bold green]Starting webhook server[/bold green] on http://{config.host}:{config.port}"
    )
    run_server(config)


@app.command("config")
def show_config() -> None:
    """Show the effective configuration with secrets masked."""
    config = _load_config()
    table = Table(title="Webhook Server Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for key, value in config.masked().items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                table.add_row(f"{key}.{sub_key}", str(sub_value or "(not set)"))
        elif isinstance(value, list):
            table.add_row(key, ", ".join(value))
        else:
            table.add_row(key, str(value))

    console.print(table)


@app.command()
def sign(
    payload_file: Path = typer.Argument(
        ..., help="JSON payload file to sign", exists=True, dir_okay=False
    ),
    secret: str | None = typer.Option(
        None,
        "--secret",
        "-s",
        help="Signing secret (default: GITHUB_WEBHOOK_SECRET)",
    ),
) -> None:
    """Print the X-Hub-Signature-256 header for a payload file.

    Useful for replaying GitHub deliveries against a local server:

        curl -X POST localhost:3000/api/github/webhook \\
          -H "X-GitHub-Event: push" \\
          -H "X-Hub-Signature-256: $(immortal-webhooks sign push.json)" \\
          --data-binary @push.json
    """
    effective_secret = secret or _load_config().github_webhook_secret
    if not effective_secret:
        console.print("[red]Error: No secret. Pass --secret or set GITHUB_WEBHOOK_SECRET.[/red]")
        raise typer.Exit(1)

    signature = generate_signature(payload_file.read_bytes(), effective_secret)
    typer.echo(signature)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"immortal-stack-webhooks [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
