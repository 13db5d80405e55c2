"""Secret store factory based on OS."""

from __future__ import annotations

import platform

from qachat.secrets.keyring_store import KeyringSecretStore, SecretStoreError

_BACKENDS = {
    "darwin": "Keychain",
    "windows": "Credential Manager",
    "linux": "Secret Service",
}


def create_secret_store(service_name: str = "qachat") -> KeyringSecretStore:
    system = platform.system().lower()
    label = _BACKENDS.get(system)
    if label is None:
        raise SecretStoreError(
            f"unsupported OS for secret storage: {platform.system()} "
            "(supported: macOS, Windows, Linux)"
        )
    return KeyringSecretStore(service_name=service_name, backend_label=label)
