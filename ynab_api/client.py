"""
YNAB client using direct REST API calls.
Submits a batch of transactions in a single request; no retries.
"""
import json
from typing import Any, Dict, Optional, Sequence

import requests
from pydantic import ValidationError as PydanticValidationError

from core.config import Settings, get_settings, require_credentials
from core.exceptions import ValidationError, YnabApiError
from core.logger import setup_logger
from core.schema import ErrorResponse, SaveTransactionsResponse, YnabTransaction

logger = setup_logger(__name__)

# Seconds to wait on the single POST before giving up
REQUEST_TIMEOUT = 60


class YnabClient:
    """Wrapper for the YNAB REST API transaction-creation endpoint."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize REST API client.

        Args:
            settings: Settings to read credentials and budget from (defaults to the global settings)
        """
        settings = settings or get_settings()
        require_credentials(settings)

        self.api_base = settings.ynab_api_base
        self.budget_id = settings.ynab_budget_id
        self.access_token = settings.ynab_access_token

        logger.info(f"Initialized YNAB REST client for budget: {self.budget_id}, base: {self.api_base}")

    @property
    def transactions_url(self) -> str:
        return f"{self.api_base}/budgets/{self.budget_id}/transactions"

    def create_transactions(self, transactions: Sequence[YnabTransaction]) -> SaveTransactionsResponse:
        """
        Create transactions in YNAB.

        Args:
            transactions: Non-empty ordered sequence of transactions

        Returns:
            Parsed API response

        Raises:
            ValidationError: If no transactions are given
            YnabApiError: If the request fails or the API returns a non-2xx status
        """
        if not transactions:
            raise ValidationError(
                "At least one transaction is required",
                details={"count": 0}
            )

        payload = {"transactions": [txn.to_payload() for txn in transactions]}
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json"
        }

        logger.info(f"Posting {len(transactions)} transactions to {self.transactions_url}")

        try:
            response = requests.post(
                self.transactions_url,
                headers=headers,
                data=json.dumps(payload),
                timeout=REQUEST_TIMEOUT
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"YNAB request timeout after {REQUEST_TIMEOUT}s: {e}")
            raise YnabApiError(
                f"YNAB request timeout after {REQUEST_TIMEOUT}s",
                details={"url": self.transactions_url, "timeout": REQUEST_TIMEOUT}
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"YNAB request failed: {e}")
            raise YnabApiError(
                f"Failed to connect to YNAB API: {str(e)}",
                details={"url": self.transactions_url, "error": str(e)}
            )

        if not 200 <= response.status_code < 300:
            raise self._error_from_response(response)

        try:
            result = SaveTransactionsResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Failed to parse YNAB response: {e}")
            raise YnabApiError(
                f"YNAB API returned an unexpected response: {response.text}",
                details={"status_code": response.status_code, "error": str(e)},
                status_code=response.status_code
            )

        logger.debug(f"Server knowledge: {result.data.server_knowledge}")
        return result

    def _error_from_response(self, response: requests.Response) -> YnabApiError:
        """Build an error carrying the response body verbatim."""
        body = response.text
        details: Dict[str, Any] = {
            "url": self.transactions_url,
            "status_code": response.status_code,
            "response_text": body,
        }
        try:
            error_doc = ErrorResponse.model_validate(response.json())
            details.update(error_doc.error.model_dump())
        except (ValueError, PydanticValidationError):
            logger.debug("Error body is not a YNAB error document")

        logger.error(f"YNAB API HTTP error {response.status_code}: {body}")
        return YnabApiError(
            f"YNAB API Error: {body}",
            details=details,
            status_code=response.status_code
        )

