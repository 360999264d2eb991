"""CLI commands for wedding RSVP management."""

import asyncio
import csv
from pathlib import Path

import typer
import uvicorn

from src.config.database import StoreError, get_store_client
from src.config.logging import setup_logging
from src.config.settings import settings
from src.guests.directory import get_guest_directory
from src.guests.dtos import (
    DirectoryUnavailableError,
    GuestRecordDTO,
    ImportFailedError,
    ImportResultDTO,
)
from src.guests.features.import_guests.csv_loader import load_guests_from_csv
from src.guests.features.import_guests.write_model import StoreImportGuestsWriteModel
from src.guests.repository.orm_models import RSVP, Guest, create_table_sql
from src.guests.repository.write_models import SupabaseGuestWriteModel

app = typer.Typer(help="CLI commands for wedding RSVP management")

DEFAULT_INVITE_LIST = Path(__file__).resolve().parent / "invite_list.csv"


async def _import_guests(records: list[GuestRecordDTO]) -> ImportResultDTO:
    """Async helper to import the parsed invite list."""
    write_model = StoreImportGuestsWriteModel(
        guest_write_model=SupabaseGuestWriteModel(),
        directory=get_guest_directory(),
    )
    return await write_model.import_guests(records)


@app.command()
def import_guests(
    file: Path = typer.Option(
        DEFAULT_INVITE_LIST,
        "--file",
        "-f",
        help="Invite list CSV (Name, Address, ...) with a header row",
    ),
):
    """Import the invite list into Supabase, skipping guests already there."""
    setup_logging()

    if not file.is_file():
        typer.secho(f"CSV file not found: {file}", fg=typer.colors.RED)
        raise typer.Exit(1)

    if not get_store_client().is_configured:
        typer.secho(
            "SUPABASE_URL and SUPABASE_API_KEY must be set to import guests",
            fg=typer.colors.RED,
        )
        raise typer.Exit(1)

    try:
        records = load_guests_from_csv(file)
    except (UnicodeDecodeError, csv.Error) as e:
        typer.secho(f"Import failed: could not read {file}: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)

    try:
        result = asyncio.run(_import_guests(records))
    except (ImportFailedError, DirectoryUnavailableError, StoreError) as e:
        typer.secho(f"Import failed: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Import complete!", fg=typer.colors.GREEN)
    typer.secho(f"  Imported: {result.imported}", fg=typer.colors.BLUE)
    typer.secho(f"  Already on the guest list: {result.skipped}", fg=typer.colors.BLUE)
    if result.duplicates:
        typer.secho(f"  Repeated in the file: {result.duplicates}", fg=typer.colors.YELLOW)


@app.command()
def create_table(
    apply: bool = typer.Option(
        False,
        "--apply",
        help="Run the statements through the exec_sql RPC instead of printing them",
    ),
):
    """Print (or apply) the DDL for the guests and rsvps tables."""
    setup_logging()
    statements = [create_table_sql(model) for model in (Guest, RSVP)]

    if not apply:
        for sql in statements:
            typer.echo(sql)
            typer.echo()
        return

    async def _apply():
        client = get_store_client()
        for sql in statements:
            await client.rpc("exec_sql", {"query": sql})

    try:
        asyncio.run(_apply())
    except StoreError as e:
        typer.secho(f"Could not create tables: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)
    typer.secho("Tables ready!", fg=typer.colors.GREEN)


@app.command()
def serve(
    host: str = typer.Option(settings.app_host, help="Interface to bind"),
    port: int = typer.Option(settings.app_port, help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
):
    """Run the API with uvicorn."""
    uvicorn.run("src.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
