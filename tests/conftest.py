"""
Shared fixtures.

Every test runs in its own temporary working directory with the YNAB
environment variables cleared, so a developer's .env never leaks in.
"""
from pathlib import Path

import pytest

from core.config import reset_settings

ENV_VARS = (
    "YNAB_ACCESS_TOKEN",
    "YNAB_ACCOUNT_ID",
    "YNAB_BUDGET_ID",
    "YNAB_API_BASE",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def ynab_env(monkeypatch: pytest.MonkeyPatch):
    """Minimal valid configuration."""
    monkeypatch.setenv("YNAB_ACCESS_TOKEN", "test-token")
    monkeypatch.setenv("YNAB_ACCOUNT_ID", "acct-123")


@pytest.fixture
def write_csv(tmp_path: Path):
    """Write CSV text to a file under tmp_path and return its path."""
    def _write(text: str, name: str = "transactions.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


class FakeResponse:
    """Stand-in for requests.Response."""

    def __init__(self, status_code: int, text: str):
        self.status_code = status_code
        self.text = text

    def json(self):
        import json
        return json.loads(self.text)


@pytest.fixture
def fake_post(monkeypatch: pytest.MonkeyPatch):
    """
    Replace requests.post in the YNAB client.

    Call `fake_post.respond(status, body)` before the call; every call is recorded in
    `fake_post.calls` as a dict of url, headers and data.
    """
    class _FakePost:
        def __init__(self):
            self.calls = []
            self.response = FakeResponse(201, '{"data": {"transaction_ids": []}}')

        def respond(self, status_code: int, body: str):
            self.response = FakeResponse(status_code, body)

        def __call__(self, url, headers=None, data=None, timeout=None):
            self.calls.append({"url": url, "headers": headers, "data": data, "timeout": timeout})
            return self.response

    fake = _FakePost()
    monkeypatch.setattr("ynab_api.client.requests.post", fake)
    return fake
