#!/usr/bin/env python3
"""
internboard CLI - Typer-based command-line interface.

Provides commands for:
- Searching posts with the same filters as the listing endpoints
- Geocoding an address
- Index management
"""

from __future__ import annotations

import asyncio
import sys

import typer
from pydantic import ValidationError
from pymongo.errors import PyMongoError
from rich.console import Console
from rich.table import Table

from ..config.settings import get_settings
from ..db.mongodb import MongoConnection, ensure_indexes
from ..geography.geocoder import Geocoder
from ..logging_config import setup_logging
from ..pagination.models import PaginationQuery
from ..services.listings import ListingService

# Initialize Typer app
app = typer.Typer(
    name="internboard",
    help="internboard - internship listings search over MongoDB",
    add_completion=False,
)

# Rich console
console = Console()


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        from .. import __version__

        console.print(f"internboard version: {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging",
    ),
):
    """
    internboard CLI.

    Use 'internboard COMMAND --help' for command-specific help.
    """
    setup_logging("DEBUG" if verbose else get_settings().log_level)


@app.command()
def search(
    query: str | None = typer.Argument(None, help="Free-text search"),
    sector: str | None = typer.Option(None, "--sector", help="Exact sector"),
    post_type: str | None = typer.Option(None, "--type", help="Work mode"),
    skill: list[str] | None = typer.Option(None, "--skill", "-s", help="Key skill (repeatable)"),
    min_salary: int | None = typer.Option(None, "--min-salary"),
    max_salary: int | None = typer.Option(None, "--max-salary"),
    city: str | None = typer.Option(None, "--city", help="City to search around"),
    radius_km: float | None = typer.Option(None, "--radius-km", help="Radius around --city"),
    page: int = typer.Option(1, "--page", "-p"),
    limit: int | None = typer.Option(None, "--limit", "-l", help="Items per page (default from settings)"),
    sort: str = typer.Option("dateDesc", "--sort", help="dateAsc or dateDesc"),
    include_hidden: bool = typer.Option(False, "--include-hidden", help="List hidden posts too"),
):
    """
    Search posts and print one page of results.
    """
    try:
        paging = {"page": page} if limit is None else {"page": page, "limit": limit}
        request = PaginationQuery(
            **paging,
            sort=sort,
            search_query=query,
            sector=sector,
            type=post_type,
            key_skills=skill or None,
            min_salary=min_salary,
            max_salary=max_salary,
            city=city,
            radius_km=radius_km,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid search parameters:[/red]\n{e}")
        raise typer.Exit(code=1)

    async def _search():
        settings = get_settings()
        connection = MongoConnection.from_settings(settings)
        geocoder = Geocoder.from_settings(settings)
        try:
            await connection.connect()
            service = ListingService(connection.database, geocoder=geocoder, settings=settings)
            return await service.find_posts(request, include_hidden=include_hidden)
        finally:
            await geocoder.aclose()
            await connection.close()

    try:
        result = asyncio.run(_search())
    except PyMongoError as e:
        console.print(f"[red]Database error:[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=f"Posts (page {result.page}/{max(result.total_pages, 1)}, {result.total} total)")
    table.add_column("Title", style="cyan")
    table.add_column("Company", style="green")
    table.add_column("Sector")
    table.add_column("Type")
    table.add_column("Salary", style="yellow")

    for post in result.data:
        company = post.get("company") or {}
        salary = "-"
        if post.get("minSalary") is not None:
            salary = f"{post['minSalary']} - {post.get('maxSalary', '?')}"
        table.add_row(
            str(post.get("title", "")),
            str(company.get("name", "")) if isinstance(company, dict) else "",
            str(post.get("sector", "")),
            str(post.get("type", "")),
            salary,
        )

    console.print(table)


@app.command()
def geocode(
    address: str = typer.Argument(..., help="Address or city to resolve"),
):
    """
    Resolve an address to (longitude, latitude).
    """

    async def _geocode():
        geocoder = Geocoder.from_settings(get_settings())
        try:
            return await geocoder.geocode_address(address)
        finally:
            await geocoder.aclose()

    coordinates = asyncio.run(_geocode())
    if coordinates is None:
        console.print(f"[yellow]No coordinates found for '{address}'[/yellow]")
        raise typer.Exit(code=1)

    lon, lat = coordinates
    console.print(f"[green]{address}[/green]: lon={lon} lat={lat}")


@app.command()
def indexes():
    """
    Create the MongoDB indexes used by the listings.
    """

    async def _create():
        settings = get_settings()
        connection = MongoConnection.from_settings(settings)
        try:
            await connection.connect()
            return await ensure_indexes(connection.database, settings)
        finally:
            await connection.close()

    try:
        names = asyncio.run(_create())
    except PyMongoError as e:
        console.print(f"[red]Index creation failed:[/red] {e}")
        raise typer.Exit(code=1)

    for name in names:
        console.print(f"[green]✓ {name}[/green]")


def run():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    run()
