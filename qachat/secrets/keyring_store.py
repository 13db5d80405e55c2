"""OS credential store adapter backed by keyring.

Secrets come from OS credential stores only; there is no file or env fallback.
"""

from __future__ import annotations

import importlib


class SecretStoreError(RuntimeError):
    """Raised when a secret cannot be loaded securely."""


class KeyringSecretStore:
    def __init__(self, service_name: str, backend_label: str = "keyring") -> None:
        self._service_name = service_name
        self._backend_label = backend_label
        try:
            self._keyring = importlib.import_module("keyring")
        except Exception as exc:  # pragma: no cover - import guarded at runtime
            raise SecretStoreError(f"keyring package is required for {backend_label} access") from exc

    @property
    def backend_label(self) -> str:
        return self._backend_label

    def get_secret(self, account: str) -> str:
        """Return the secret stored for `account`; empty or unreadable entries raise."""
        try:
            value = self._keyring.get_password(self._service_name, account)
        except Exception as exc:
            raise SecretStoreError(f"failed to read {self._backend_label} secret '{account}'") from exc
        if not value:
            raise SecretStoreError(f"missing {self._backend_label} secret '{account}'")
        return value
