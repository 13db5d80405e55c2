#!/usr/bin/env python3
"""Store qachat secrets in the OS credential store."""

from __future__ import annotations

import argparse
import getpass
import re
import sys
from typing import Optional

ACCOUNTS = (
    ("telegram_bot_token", "Telegram bot token", True),
    ("gemini_api_key", "Gemini API key", False),
)


def _resolve_instance_id(raw: str) -> str:
    value = (raw or "default").strip() or "default"
    if not re.fullmatch(r"[A-Za-z0-9_-]{1,40}", value):
        raise RuntimeError("instance_id must match [A-Za-z0-9_-]{1,40}")
    return value


def _service_name_for_instance(instance_id: str) -> str:
    if instance_id == "default":
        return "qachat"
    return f"qachat.{instance_id}"


def _import_keyring():
    try:
        import keyring  # type: ignore
    except Exception as exc:  # pragma: no cover - runtime check
        raise RuntimeError("keyring is required. Install dependencies first.") from exc
    return keyring


def ask_yes_no(question: str, default_yes: bool = True) -> bool:
    suffix = "[Y/n]" if default_yes else "[y/N]"
    while True:
        raw = input(f"{question} {suffix}: ").strip().lower()
        if not raw:
            return default_yes
        if raw in {"y", "yes"}:
            return True
        if raw in {"n", "no"}:
            return False
        print("Please answer y or n.")


def set_secret_if_needed(service_name: str, account: str, prompt_label: str, required: bool) -> Optional[str]:
    keyring = _import_keyring()
    existing = keyring.get_password(service_name, account)
    if existing and not ask_yes_no(f"{account} already stored. Replace it?", default_yes=False):
        print(f"Keeping existing {account}.")
        return existing

    while True:
        value = getpass.getpass(f"Enter {prompt_label}: ").strip()
        if value:
            keyring.set_password(service_name, account, value)
            print(f"Stored {account}.")
            return value
        if required:
            print(f"{account} is required.")
            continue
        print(f"Skipped {account}.")
        return None


def main() -> int:
    parser = argparse.ArgumentParser(description="qachat secret setup")
    parser.add_argument("--instance-id", help="Instance id (alnum/_/-). default: default")
    parser.add_argument("--skip-gemini", action="store_true", help="Do not prompt for the Gemini API key")
    args = parser.parse_args()

    try:
        instance_id = _resolve_instance_id(args.instance_id or "default")
    except RuntimeError as exc:
        print(str(exc))
        return 2

    service_name = _service_name_for_instance(instance_id)
    print(f"Secret service: {service_name}")
    for account, label, required in ACCOUNTS:
        if account == "gemini_api_key" and args.skip_gemini:
            continue
        set_secret_if_needed(service_name=service_name, account=account, prompt_label=label, required=required)

    print("Done. Start the bot with: python -m qachat.main")
    if instance_id != "default":
        print(f"  (add --instance-id {instance_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
