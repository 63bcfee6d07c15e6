"""
Pydantic schemas for the YNAB transactions API.
Request records are immutable; response models ignore unknown fields.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ClearedStatus = Literal["cleared", "uncleared", "reconciled"]
FlagColor = Literal["red", "orange", "yellow", "green", "blue", "purple"]


class YnabTransaction(BaseModel):
    """
    A transaction as sent to POST /budgets/{budget_id}/transactions.

    `date` is kept as a plain string: rows with an unparseable date map to ""
    and are passed to the API as-is.
    """
    model_config = ConfigDict(frozen=True)

    account_id: str
    date: str
    amount: int = Field(..., description="Signed amount in milliunits")
    memo: Optional[str] = None
    payee_name: Optional[str] = None
    payee_id: Optional[str] = None
    category_id: Optional[str] = None
    cleared: Optional[ClearedStatus] = None
    approved: Optional[bool] = None
    flag_color: Optional[FlagColor] = None
    import_id: Optional[str] = None

    def to_payload(self) -> dict:
        """Serialize for the request body, omitting unset optional fields."""
        return self.model_dump(exclude_none=True)


class SavedTransaction(BaseModel):
    """Transaction echoed back by the API after creation."""
    model_config = ConfigDict(extra="ignore")

    id: str
    date: str
    amount: int
    memo: Optional[str] = None
    cleared: Optional[str] = None
    approved: Optional[bool] = None
    account_id: Optional[str] = None


class SaveTransactionsData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    transaction_ids: Optional[List[str]] = None
    transactions: Optional[List[SavedTransaction]] = None
    duplicate_import_ids: Optional[List[str]] = None
    server_knowledge: Optional[int] = None


class SaveTransactionsResponse(BaseModel):
    """Successful response body of the transaction-creation endpoint."""
    model_config = ConfigDict(extra="ignore")

    data: SaveTransactionsData


class ErrorDetail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error document returned by the API on non-2xx responses."""
    model_config = ConfigDict(extra="ignore")

    error: ErrorDetail
