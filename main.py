"""
Main entry point for the YNAB CSV importer.

Reads a CSV of bank transactions, prints a summary and posts the
transactions to YNAB in one request. Environment variables are loaded
from a local .env before configuration is validated.
"""
import sys
from pathlib import Path
from typing import List

# Add project root to Python path for module imports
PROJECT_ROOT = Path(__file__).parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import typer
from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from core.config import get_settings
from core.exceptions import ConfigurationError, InputFileError, YnabImportException
from core.logger import setup_logger
from core.normalize import format_transaction_line
from core.parsing import validate_csv_path
from core.schema import YnabTransaction
from services.import_service import ImportService

logger = setup_logger(__name__)

app = typer.Typer(
    add_completion=False,
    help=(
        "Import transactions from a CSV file into YNAB. "
        "Loads YNAB_ACCESS_TOKEN, YNAB_ACCOUNT_ID and YNAB_BUDGET_ID from a local .env."
    ),
)


def _error(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)


def _print_summary(transactions: List[YnabTransaction]) -> None:
    typer.echo(f"\nFound {len(transactions)} transactions:")
    for i, txn in enumerate(transactions, start=1):
        typer.echo(format_transaction_line(i, txn))


def run_import(csv_path: Path, dry_run: bool = False, import_ids: bool = False) -> int:
    """
    Run one import and return the process exit code.

    Args:
        csv_path: Path to the CSV file
        dry_run: Stop before sending anything to YNAB
        import_ids: Attach YNAB-style import ids to each transaction

    Returns:
        0 on success or completed dry run, 1 on any failure
    """
    try:
        service = ImportService(get_settings())
    except ConfigurationError as e:
        _error(e.message)
        typer.echo("Please create a .env file based on .env.example and set the missing value", err=True)
        return 1
    except PydanticValidationError as e:
        _error(f"Invalid configuration: {e}")
        return 1

    try:
        path = validate_csv_path(csv_path)
    except InputFileError as e:
        _error(e.message)
        typer.echo("Usage: ynab-csv-import <path-to-csv-file> [--dry-run]", err=True)
        return 1

    try:
        typer.echo(f"Reading transactions from: {path}")
        transactions = service.load_transactions(path, with_import_ids=import_ids)
        _print_summary(transactions)

        if dry_run:
            service.submit(transactions, dry_run=True)
            typer.echo("\nDry run mode - no transactions were sent to YNAB")
            return 0

        typer.echo("\nSending transactions to YNAB...")
        result = service.submit(transactions)
    except YnabImportException as e:
        _error(e.message)
        if e.details:
            logger.error(f"Details: {e.details}")
        return 1
    except Exception as e:
        logger.error(f"Import failed: {e}", exc_info=True)
        _error(str(e))
        return 1

    typer.echo(f"\nSuccessfully created {result.created_count} transactions!")
    if result.duplicate_import_ids:
        typer.echo(f"YNAB skipped {len(result.duplicate_import_ids)} transactions with duplicate import ids.")
    typer.echo("Check your YNAB budget to see the imported transactions.")
    return 0


@app.command()
def main(
    csv_path: Path = typer.Argument(..., help="Path to the CSV file of transactions."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Read and map transactions without sending them to YNAB."
    ),
    import_ids: bool = typer.Option(
        False, "--import-ids", help="Attach import ids so YNAB skips rows it has already imported."
    ),
) -> None:
    """Import transactions from CSV_PATH into YNAB."""
    load_dotenv(override=False)
    raise typer.Exit(code=run_import(csv_path, dry_run=dry_run, import_ids=import_ids))


if __name__ == "__main__":
    app()
