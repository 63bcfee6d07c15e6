"""
Unit tests for the import service.
"""
import json

import pytest

from core.config import Settings, get_settings
from core.exceptions import ConfigurationError, InputFileError, YnabApiError
from services.import_service import ImportService

CSV_TEXT = (
    "date,amount,memo,payee\n"
    "15/03/2024,$42.50,Coffee,Cafe\n"
    "16/03/2024,-100,Salary,Employer\n"
    "bad-date,abc,,\n"
)


def _import(service, csv_path, dry_run=False):
    return service.submit(service.load_transactions(csv_path), dry_run=dry_run)


def test_service_requires_credentials():
    with pytest.raises(ConfigurationError):
        ImportService(get_settings())


def test_load_transactions(ynab_env, write_csv):
    service = ImportService()
    txns = service.load_transactions(write_csv(CSV_TEXT))

    assert [(t.date, t.amount, t.memo, t.payee_name) for t in txns] == [
        ("2024-03-15", -42500, "Coffee", "Cafe"),
        ("2024-03-16", 100000, "Salary", "Employer"),
        ("", 0, "", None),
    ]
    assert all(t.account_id == "acct-123" for t in txns)
    assert all(t.import_id is None for t in txns)


def test_load_transactions_with_import_ids(ynab_env, write_csv):
    txns = ImportService().load_transactions(write_csv(CSV_TEXT), with_import_ids=True)
    assert txns[0].import_id == "YNAB:-42500:2024-03-15:1"
    assert txns[2].import_id is None


def test_load_transactions_missing_file(ynab_env, tmp_path):
    with pytest.raises(InputFileError):
        ImportService().load_transactions(tmp_path / "missing.csv")


def test_dry_run_makes_no_request(ynab_env, write_csv, fake_post):
    result = _import(ImportService(), write_csv(CSV_TEXT), dry_run=True)

    assert result.dry_run is True
    assert len(result.transactions) == 3
    assert result.created_count == 0
    assert fake_post.calls == []


def test_empty_csv_dry_run(ynab_env, write_csv, fake_post):
    result = _import(ImportService(), write_csv("date,amount\n"), dry_run=True)
    assert result.transactions == []
    assert fake_post.calls == []


def test_empty_csv_submit_is_noop(ynab_env, write_csv, fake_post):
    result = _import(ImportService(), write_csv("date,amount\n"))
    assert result.dry_run is False
    assert result.created_count == 0
    assert fake_post.calls == []


def test_submit_reports_created_and_duplicates(ynab_env, write_csv, fake_post):
    fake_post.respond(201, json.dumps({
        "data": {"transaction_ids": ["a", "b"], "duplicate_import_ids": ["YNAB:0::1"]}
    }))

    result = _import(ImportService(), write_csv(CSV_TEXT))

    assert len(fake_post.calls) == 1
    assert len(json.loads(fake_post.calls[0]["data"])["transactions"]) == 3
    assert result.created_count == 2
    assert result.duplicate_import_ids == ["YNAB:0::1"]


def test_created_count_falls_back_to_sent_count(ynab_env, write_csv, fake_post):
    fake_post.respond(201, '{"data": {"transaction_ids": []}}')
    result = _import(ImportService(), write_csv(CSV_TEXT))
    assert result.created_count == 3


def test_api_error_propagates(ynab_env, write_csv, fake_post):
    fake_post.respond(409, '{"error": {"id": "409", "name": "conflict", "detail": "dup"}}')
    with pytest.raises(YnabApiError):
        _import(ImportService(), write_csv(CSV_TEXT))


def test_submit_uses_the_service_settings(ynab_env, write_csv, fake_post):
    settings = Settings(
        YNAB_ACCESS_TOKEN="other-token",
        YNAB_ACCOUNT_ID="acct-x",
        YNAB_BUDGET_ID="budget-x",
    )
    service = ImportService(settings)

    _import(service, write_csv(CSV_TEXT))

    call = fake_post.calls[0]
    assert call["url"] == "https://api.ynab.com/v1/budgets/budget-x/transactions"
    assert call["headers"]["Authorization"] == "Bearer other-token"
    sent = json.loads(call["data"])["transactions"]
    assert all(t["account_id"] == "acct-x" for t in sent)
