import pytest

from qachat.config.secrets import load_runtime_secrets
from qachat.secrets.keyring_store import SecretStoreError


class _DummyStore:
    def __init__(self, values: dict[str, str]) -> None:
        self._values = values

    def get_secret(self, account: str) -> str:
        if account not in self._values:
            raise SecretStoreError(f"missing: {account}")
        return self._values[account]


def test_load_runtime_secrets_gemini_optional(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "qachat.config.secrets.create_secret_store",
        lambda service_name: _DummyStore({"telegram_bot_token": "tg_token"}),
    )

    secrets = load_runtime_secrets()
    assert secrets.telegram_bot_token == "tg_token"
    assert secrets.gemini_api_key is None


def test_load_runtime_secrets_gemini_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "qachat.config.secrets.create_secret_store",
        lambda service_name: _DummyStore({"telegram_bot_token": "tg_token"}),
    )

    with pytest.raises(SecretStoreError):
        load_runtime_secrets(require_gemini_api_key=True)


def test_load_runtime_secrets_requires_telegram_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "qachat.config.secrets.create_secret_store",
        lambda service_name: _DummyStore({"gemini_api_key": "g"}),
    )

    with pytest.raises(SecretStoreError):
        load_runtime_secrets()
