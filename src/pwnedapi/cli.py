"""
CLI commands for the Have I Been Pwned client.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from pwnedapi import __version__
from pwnedapi.client import DEFAULT_BASE_URL, Client
from pwnedapi.errors import ApiError, HIBPError
from pwnedapi.models import Breach

console = Console()


def _send(request, description: str):
    """Send a request behind a spinner and unwrap it, exiting on error."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(description, total=None)
        result = request.send()

    try:
        return result.unwrap()
    except ApiError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if e.retry_after is not None:
            console.print(f"Retry after {e.retry_after}s")
        raise SystemExit(1)
    except HIBPError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)


def _print_json(data) -> None:
    console.print_json(json.dumps(data, default=str))


def _breach_table(title: str, breaches: tuple[Breach, ...]) -> Table:
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Date", style="yellow")
    table.add_column("Accounts", justify="right")
    table.add_column("Domain")
    table.add_column("Data Exposed")
    table.add_column("Verified", justify="center")

    for breach in breaches:
        date_str = breach.breach_date.isoformat() if breach.breach_date else "Unknown"
        data_types = ", ".join(breach.data_classes[:3])
        if len(breach.data_classes) > 3:
            data_types += f" (+{len(breach.data_classes) - 3})"

        table.add_row(
            breach.title or breach.name,
            date_str,
            f"{breach.pwn_count:,}",
            breach.domain or "-",
            data_types,
            "[green]Yes[/green]" if breach.is_verified else "[dim]No[/dim]",
        )

    return table


@click.group()
@click.version_option(version=__version__, prog_name="pwnedapi")
@click.option(
    "--user-agent", "-u",
    envvar="PWNEDAPI_USER_AGENT",
    default=f"pwnedapi-cli/{__version__}",
    show_default=True,
    help="User-Agent sent to the API",
)
@click.option(
    "--base-url",
    envvar="PWNEDAPI_BASE_URL",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="API root URL",
)
@click.option("--verbose", "-v", is_flag=True, help="Log requests to stderr")
@click.pass_context
def main(ctx: click.Context, user_agent: str, base_url: str, verbose: bool) -> None:
    """Have I Been Pwned - breach and paste lookups.

    Uses the HIBP API (https://haveibeenpwned.com).
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        client = Client(user_agent=user_agent, base_url=base_url)
    except ValueError as e:
        raise click.UsageError(str(e))

    ctx.ensure_object(dict)
    ctx.obj["client"] = client
    ctx.call_on_close(client.close)


# =============================================================================
# Breach Database Commands
# =============================================================================

@main.command("breaches")
@click.option("--domain", "-d", help="Filter by domain")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def list_breaches(ctx: click.Context, domain: str | None, json_output: bool) -> None:
    """List all breaches in the HIBP database.

    Example:
        pwnedapi breaches --domain adobe.com
    """
    request = ctx.obj["client"].get_all_breaches()
    if domain:
        request = request.with_domain(domain)

    breaches = _send(request, "Fetching breach database...")

    if json_output:
        _print_json([b.to_dict() for b in breaches])
        return

    if not breaches:
        console.print("[yellow]No breaches found[/yellow]")
        return

    total_accounts = sum(b.pwn_count for b in breaches)
    console.print(f"\n[bold]Total Breaches:[/bold] {len(breaches)}")
    console.print(f"[bold]Total Compromised Accounts:[/bold] {total_accounts:,}\n")
    console.print(_breach_table("Known Data Breaches", breaches))


@main.command("breach")
@click.argument("name")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def show_breach(ctx: click.Context, name: str, json_output: bool) -> None:
    """Get details for a specific breach.

    Example:
        pwnedapi breach Adobe
    """
    breach = _send(ctx.obj["client"].get_breach(name), f"Fetching {name}...")

    if breach is None:
        console.print(f"[red]Breach not found: {name}[/red]")
        raise SystemExit(1)

    if json_output:
        _print_json(breach.to_dict())
        return

    date_str = breach.breach_date.strftime("%B %d, %Y") if breach.breach_date else "Unknown"

    flags = []
    if breach.is_verified:
        flags.append("[green]Verified[/green]")
    if breach.is_sensitive:
        flags.append("[red]Sensitive[/red]")
    if breach.is_retired:
        flags.append("[dim]Retired[/dim]")
    if breach.is_spam_list:
        flags.append("[yellow]Spam List[/yellow]")

    console.print(Panel(
        f"[bold]{breach.title}[/bold]\n\n"
        f"Domain: [cyan]{breach.domain or 'N/A'}[/cyan]\n"
        f"Breach Date: [yellow]{date_str}[/yellow]\n"
        f"Compromised Accounts: [red]{breach.pwn_count:,}[/red]\n"
        f"Flags: {' '.join(flags) if flags else 'None'}\n\n"
        f"[bold]Data Exposed:[/bold]\n"
        f"{', '.join(breach.data_classes)}\n\n"
        f"[bold]Description:[/bold]\n"
        f"{breach.description[:500]}{'...' if len(breach.description) > 500 else ''}",
        title=f"Breach Details: {breach.name}"
    ))


@main.command("dataclasses")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def list_data_classes(ctx: click.Context, json_output: bool) -> None:
    """List the data classes used to describe exposed data."""
    data_classes = _send(ctx.obj["client"].get_data_classes(), "Fetching data classes...")

    if json_output:
        _print_json(list(data_classes))
        return

    for data_class in data_classes:
        console.print(data_class)


# =============================================================================
# Account Lookups
# =============================================================================

@main.command("account")
@click.argument("account")
@click.option("--truncate", is_flag=True, help="Only return breach names")
@click.option("--domain", "-d", help="Only breaches of this domain")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def check_account(
    ctx: click.Context,
    account: str,
    truncate: bool,
    domain: str | None,
    json_output: bool,
) -> None:
    """Check if an account has been in any data breaches.

    Example:
        pwnedapi account user@example.com
    """
    request = ctx.obj["client"].get_breaches_for_account(account).with_truncate(truncate)
    if domain:
        request = request.with_domain(domain)

    breaches = _send(request, f"Checking {account}...")

    if json_output:
        _print_json([b.to_dict() for b in breaches])
        return

    if not breaches:
        console.print(Panel(
            f"[green]Good news![/green] No breaches found for [cyan]{account}[/cyan]",
            title="Breach Check Result"
        ))
        return

    if truncate:
        console.print(f"[red]Found in {len(breaches)} breach(es)[/red]")
        for breach in breaches:
            console.print(f"  - {breach.name}")
        return

    console.print(Panel(
        f"[red]Oh no![/red] [cyan]{account}[/cyan] found in "
        f"[bold red]{len(breaches)}[/bold red] breach(es)",
        title="Breach Check Result"
    ))
    console.print(_breach_table("\nBreach Details", breaches))


@main.command("pastes")
@click.argument("account")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def check_pastes(ctx: click.Context, account: str, json_output: bool) -> None:
    """Check if an account has appeared in any pastes.

    Example:
        pwnedapi pastes user@example.com
    """
    pastes = _send(
        ctx.obj["client"].get_pastes_for_account(account),
        f"Checking pastes for {account}...",
    )

    if json_output:
        _print_json([p.to_dict() for p in pastes])
        return

    if not pastes:
        console.print(f"[green]No pastes found for {account}[/green]")
        return

    console.print(f"\n[red]Found in {len(pastes)} paste(s)[/red]\n")

    table = Table(title="Paste Appearances")
    table.add_column("Source", style="cyan")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Date", style="yellow")
    table.add_column("Email Count", justify="right")

    for paste in pastes:
        date_str = paste.date.strftime("%Y-%m-%d") if paste.date else "Unknown"
        table.add_row(
            paste.source,
            paste.id[:20],
            (paste.title or "Untitled")[:30],
            date_str,
            f"{paste.email_count:,}",
        )

    console.print(table)


if __name__ == "__main__":
    main()
