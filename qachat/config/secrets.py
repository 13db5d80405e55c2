"""Secret accessor facade.

Accounts in OS store:
- telegram_bot_token
- gemini_api_key
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from qachat.secrets.keyring_store import KeyringSecretStore, SecretStoreError
from qachat.secrets.factory import create_secret_store


@dataclass(frozen=True)
class RuntimeSecrets:
    telegram_bot_token: str
    gemini_api_key: Optional[str]


def _optional_secret(store: KeyringSecretStore, account: str) -> Optional[str]:
    try:
        return store.get_secret(account)
    except SecretStoreError:
        return None


def load_runtime_secrets(
    service_name: str = "qachat",
    require_gemini_api_key: bool = False,
) -> RuntimeSecrets:
    store = create_secret_store(service_name=service_name)
    gemini_api_key: Optional[str]
    if require_gemini_api_key:
        gemini_api_key = store.get_secret("gemini_api_key")
    else:
        gemini_api_key = _optional_secret(store=store, account="gemini_api_key")

    return RuntimeSecrets(
        telegram_bot_token=store.get_secret("telegram_bot_token"),
        gemini_api_key=gemini_api_key,
    )


__all__ = ["RuntimeSecrets", "load_runtime_secrets", "SecretStoreError"]
