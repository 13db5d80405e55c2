import platform

import pytest

from qachat.secrets.factory import create_secret_store
from qachat.secrets.keyring_store import KeyringSecretStore, SecretStoreError


@pytest.mark.parametrize(
    ("system", "label"),
    [("Darwin", "Keychain"), ("Windows", "Credential Manager"), ("Linux", "Secret Service")],
)
def test_factory_supports_known_os(monkeypatch: pytest.MonkeyPatch, system: str, label: str) -> None:
    monkeypatch.setattr(platform, "system", lambda: system)
    store = create_secret_store()
    assert isinstance(store, KeyringSecretStore)
    assert store.backend_label == label


def test_factory_rejects_unknown_os(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Plan9")
    with pytest.raises(SecretStoreError):
        create_secret_store()


def test_keyring_store_reports_missing_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    store = KeyringSecretStore(service_name="qachat.test", backend_label="Keychain")
    monkeypatch.setattr(store, "_keyring", type("K", (), {"get_password": staticmethod(lambda s, a: None)}))
    with pytest.raises(SecretStoreError, match="missing Keychain secret 'gemini_api_key'"):
        store.get_secret("gemini_api_key")
