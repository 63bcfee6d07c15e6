"""
CSV import service.
Composes CSV reading, row mapping and a single submission to YNAB.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from core.config import Settings, get_settings, require_credentials
from core.logger import setup_logger
from core.normalize import assign_import_ids, map_rows
from core.parsing import read_csv_rows
from core.schema import YnabTransaction
from ynab_api.client import YnabClient

logger = setup_logger(__name__)


@dataclass
class ImportResult:
    """Outcome of one import run."""
    transactions: List[YnabTransaction]
    dry_run: bool
    created_count: int = 0
    duplicate_import_ids: List[str] = field(default_factory=list)


class ImportService:
    """Service for importing a CSV of bank transactions into YNAB."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[YnabClient] = None):
        """
        Initialize import service.

        Args:
            settings: Settings to use (defaults to the global settings)
            client: YNAB client to submit with (defaults to one built from these settings on first submit)
        """
        self.settings = settings or get_settings()
        require_credentials(self.settings)
        self._client = client

    @property
    def client(self) -> YnabClient:
        if self._client is None:
            self._client = YnabClient(self.settings)
        return self._client

    def load_transactions(
        self,
        csv_path: Union[str, Path],
        with_import_ids: bool = False
    ) -> List[YnabTransaction]:
        """
        Read a CSV file and map every row to a transaction.

        Args:
            csv_path: Path to CSV file
            with_import_ids: Attach YNAB-style import ids

        Returns:
            Transactions in file order
        """
        rows = read_csv_rows(csv_path)
        transactions = map_rows(rows, self.settings.ynab_account_id)
        if with_import_ids:
            transactions = assign_import_ids(transactions)
        logger.info(f"Loaded {len(transactions)} transactions from {Path(csv_path).name}")
        return transactions

    def submit(self, transactions: List[YnabTransaction], dry_run: bool = False) -> ImportResult:
        """
        Send transactions to YNAB in one request.

        Args:
            transactions: Transactions to create
            dry_run: Skip the network call

        Returns:
            Import result
        """
        if dry_run:
            logger.info(f"Dry run: skipping submission of {len(transactions)} transactions")
            return ImportResult(transactions=transactions, dry_run=True)

        if not transactions:
            logger.warning("No transactions to submit")
            return ImportResult(transactions=transactions, dry_run=False)

        response = self.client.create_transactions(transactions)
        data = response.data
        created = len(data.transaction_ids) if data.transaction_ids else len(transactions)
        duplicates = list(data.duplicate_import_ids or [])

        logger.info(f"Created {created} transactions")
        if duplicates:
            logger.info(f"API reported {len(duplicates)} duplicate import ids")

        return ImportResult(
            transactions=transactions,
            dry_run=False,
            created_count=created,
            duplicate_import_ids=duplicates
        )

