"""
Row to transaction mapping.
Handles currency conversion to milliunits, date reformatting and column aliases.
Nothing in this module raises on malformed row content.
"""
import re
from collections import Counter
from datetime import datetime
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Iterable, List, Mapping, Sequence, Tuple, Union

from core.logger import setup_logger
from core.schema import YnabTransaction

logger = setup_logger(__name__)

DATE_COLUMNS: Tuple[str, ...] = ("date", "Date")
AMOUNT_COLUMNS: Tuple[str, ...] = ("amount", "Amount")
MEMO_COLUMNS: Tuple[str, ...] = ("memo", "Memo", "description", "Description")
PAYEE_COLUMNS: Tuple[str, ...] = ("payee", "Payee")

MILLIUNITS_PER_UNIT = 1000

# Leading decimal number, trailing characters are ignored
_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def _parse_decimal(value: Union[str, int, float, Decimal]) -> Decimal:
    """Parse an amount value, returning 0 when nothing numeric can be read."""
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal(0)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = Decimal(str(value))
        except InvalidOperation:
            return Decimal(0)
        return parsed if parsed.is_finite() else Decimal(0)

    cleaned = str(value).replace("$", "").replace(",", "")
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        if cleaned.strip():
            logger.warning(f"Failed to parse amount: '{value}', using 0")
        return Decimal(0)
    return Decimal(match.group(1))


def convert_to_milliunits(amount: Union[str, int, float, Decimal]) -> int:
    """
    Convert a currency amount to negated YNAB milliunits.

    "$1,234.50" -> -1234500. Source amounts are treated as outflows, so an
    already negative amount becomes a positive (inflow) value.

    Args:
        amount: Amount string (optional "$" prefix, grouping commas) or number

    Returns:
        Signed integer milliunits, 0 when the amount cannot be parsed
    """
    try:
        scaled = _parse_decimal(amount) * MILLIUNITS_PER_UNIT
        # Halves round toward positive infinity
        rounded = int((scaled + Decimal("0.5")).quantize(Decimal(1), rounding=ROUND_FLOOR))
    except ArithmeticError:
        logger.warning(f"Amount out of range: '{amount}', using 0")
        return 0
    return -rounded


def format_date(value: str) -> str:
    """
    Reformat a DD/MM/YYYY date as YYYY-MM-DD.

    Args:
        value: Date string from the CSV

    Returns:
        ISO calendar date, or "" when missing or malformed
    """
    if not value or not value.strip():
        return ""
    try:
        return datetime.strptime(value.strip(), "%d/%m/%Y").date().isoformat()
    except ValueError:
        logger.warning(f"Unrecognized date '{value}', expected DD/MM/YYYY")
        return ""


def pick_field(row: Mapping[str, str], aliases: Sequence[str]) -> str:
    """Return the first non-empty value among the column aliases, or ""."""
    for alias in aliases:
        value = row.get(alias)
        if value:
            return value
    return ""


def map_row(row: Mapping[str, str], account_id: str) -> YnabTransaction:
    """
    Map a single CSV row to a YNAB transaction.

    Args:
        row: Column name -> string value mapping
        account_id: YNAB account the transaction is posted to

    Returns:
        Immutable transaction record
    """
    payee = pick_field(row, PAYEE_COLUMNS)
    return YnabTransaction(
        account_id=account_id,
        date=format_date(pick_field(row, DATE_COLUMNS)),
        amount=convert_to_milliunits(pick_field(row, AMOUNT_COLUMNS) or "0"),
        memo=pick_field(row, MEMO_COLUMNS),
        payee_name=payee or None,
        cleared="uncleared",
        approved=False,
    )


def map_rows(rows: Iterable[Mapping[str, str]], account_id: str) -> List[YnabTransaction]:
    """Map rows in order, one transaction per row."""
    transactions = [map_row(row, account_id) for row in rows]
    logger.debug(f"Mapped {len(transactions)} rows to transactions")
    return transactions


def assign_import_ids(transactions: Sequence[YnabTransaction]) -> List[YnabTransaction]:
    """
    Attach YNAB-style import ids so the API can reject re-imported rows.

    Format is "YNAB:{amount}:{date}:{occurrence}", occurrence counting from 1
    for each identical (amount, date) pair in input order. Transactions
    without a date are returned unchanged.
    """
    occurrences: Counter = Counter()
    result = []
    for txn in transactions:
        if not txn.date:
            result.append(txn)
            continue
        key = (txn.amount, txn.date)
        occurrences[key] += 1
        import_id = f"YNAB:{txn.amount}:{txn.date}:{occurrences[key]}"
        result.append(txn.model_copy(update={"import_id": import_id}))
    return result


def format_transaction_line(index: int, txn: YnabTransaction) -> str:
    """Render one transaction for the console summary (1-based index)."""
    return (
        f"  {index}. {txn.date} - ${txn.amount / MILLIUNITS_PER_UNIT:.2f} - "
        f"{txn.memo or '(no memo)'} - Payee: {txn.payee_name or '(no payee)'}"
    )
