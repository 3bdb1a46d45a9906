"""
Command-line interface for VC Dispatcher.

Usage:
    vc-dispatch issuers --type online
    vc-dispatch verify credential.json --issuer jharseva
    cat credential.json | vc-dispatch verify - --method offline
    vc-dispatch serve --port 3010
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click
import httpx
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from vc_dispatcher import __version__, config
from vc_dispatcher.exceptions import DispatchError
from vc_dispatcher.logging_config import configure_logging
from vc_dispatcher.registry import IssuerDescriptor, IssuerRegistry
from vc_dispatcher.service import VerificationService
from vc_dispatcher.verifiers.base import VerificationResult


console = Console()


def format_result(result: VerificationResult) -> None:
    """Format and print verification result."""
    if result.success:
        status_icon = "[bold green]VERIFIED[/]"
        panel_style = "green"
    else:
        status_icon = "[bold red]FAILED[/]"
        panel_style = "red"

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("Status", status_icon)
    table.add_row("Message", result.message)

    console.print(Panel(table, title="Verification Result", border_style=panel_style))

    if result.errors:
        console.print("\n[bold red]Errors:[/]")
        for error in result.errors:
            console.print(f"  [red]x[/] {error.error}")
            if error.raw != error.error:
                console.print(f"    [dim]{error.raw}[/]")


def format_issuers(issuers: list[IssuerDescriptor]) -> None:
    """Print the issuer catalog as a table."""
    table = Table(title=f"Issuers ({len(issuers)})")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Description", style="dim")

    for issuer in issuers:
        table.add_row(issuer.id, issuer.name, issuer.type.value, issuer.description)

    console.print(table)


def load_credential(source: str, timeout: float) -> dict[str, Any]:
    """Load credential from file, URL, or stdin.

    Args:
        source: File path, URL, or "-" for stdin.
        timeout: HTTP timeout when fetching from a URL.

    Returns:
        Parsed credential JSON.
    """
    if source == "-":
        return json.loads(sys.stdin.read())

    if source.startswith("http://") or source.startswith("https://"):
        with httpx.Client(timeout=timeout) as client:
            response = client.get(
                source,
                headers={"Accept": "application/vc+ld+json, application/json"},
            )
            response.raise_for_status()
            return response.json()

    path = Path(source)
    if not path.exists():
        raise click.ClickException(f"File not found: {source}")

    with path.open(encoding="utf-8") as f:
        return json.load(f)


def _print_error(message: str, json_output: bool) -> None:
    if json_output:
        console.print_json(data={"error": message})
    else:
        console.print(f"[red]Error:[/] {message}")


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Log level (defaults to VC_DISPATCHER_LOG_LEVEL)",
)
@click.version_option(__version__)
def main(log_level: str | None) -> None:
    """Dispatch credential verification to the matching issuer verifier."""
    configure_logging(log_level)


@main.command()
@click.option(
    "--type",
    "issuer_type",
    type=click.Choice(["online", "offline"]),
    default=None,
    help="Only list issuers of this type",
)
@click.option("--json-output", is_flag=True, help="Output result as JSON")
def issuers(issuer_type: str | None, json_output: bool) -> None:
    """List the issuers that credentials can be verified against."""
    found = IssuerRegistry().list_issuers(issuer_type)

    if json_output:
        console.print_json(
            data={
                "success": True,
                "count": len(found),
                "data": [issuer.to_dict() for issuer in found],
            }
        )
    else:
        format_issuers(found)


@main.command()
@click.argument("source", required=True)
@click.option(
    "--method",
    type=click.Choice(["online", "offline"]),
    default="online",
    show_default=True,
    help="Verification method",
)
@click.option("--issuer", "issuer_name", default=None, help="Issuer name for online verification")
@click.option("--json-output", is_flag=True, help="Output result as JSON")
@click.option(
    "--timeout",
    type=float,
    default=config.VC_DISPATCHER_HTTP_TIMEOUT,
    help="HTTP timeout in seconds when SOURCE is a URL",
)
def verify(
    source: str,
    method: str,
    issuer_name: str | None,
    json_output: bool,
    timeout: float,
) -> None:
    """Verify a credential.

    SOURCE can be:
    - A file path (e.g., credential.json)
    - A URL (e.g., https://example.com/credentials/123)
    - "-" to read from stdin

    Examples:

        vc-dispatch verify credential.json --issuer jharseva

        cat credential.json | vc-dispatch verify - --method offline
    """
    verification_config: dict[str, Any] = {"method": method}
    if issuer_name:
        verification_config["issuerName"] = issuer_name

    try:
        credential = load_credential(source, timeout)
        result = asyncio.run(
            VerificationService().verify(credential, verification_config)
        )

    except json.JSONDecodeError as e:
        _print_error(f"Invalid JSON: {e}", json_output)
        sys.exit(2)

    except httpx.HTTPError as e:
        _print_error(f"HTTP error: {e}", json_output)
        sys.exit(2)

    except click.ClickException as e:
        _print_error(e.format_message(), json_output)
        sys.exit(2)

    except DispatchError as e:
        _print_error(str(e), json_output)
        sys.exit(2)

    except Exception as e:
        _print_error(str(e), json_output)
        sys.exit(2)

    if json_output:
        console.print_json(data=result.to_dict())
    else:
        format_result(result)

    sys.exit(0 if result.success else 1)


@main.command()
@click.option("--host", default=config.VC_DISPATCHER_HOST, show_default=True, help="Bind address")
@click.option("--port", type=int, default=config.VC_DISPATCHER_PORT, show_default=True, help="Bind port")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the verification HTTP API."""
    import uvicorn

    uvicorn.run("vc_dispatcher.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
