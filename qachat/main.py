"""qachat Telegram bot entrypoint."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
import re

from telegram import BotCommand, MenuButtonCommands
from telegram.ext import Application, ApplicationBuilder, CommandHandler, MessageHandler, filters

from qachat.bot.handlers import TelegramHandlers
from qachat.bot.menu import resolve_lang
from qachat.config.settings import ConfigLoadError
from qachat.core.runtime import AppRuntime
from qachat.secrets.keyring_store import SecretStoreError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("telegram").setLevel(logging.WARNING)


def _resolve_instance_id(raw: str) -> str:
    value = (raw or "default").strip()
    if not value:
        return "default"
    if not re.fullmatch(r"[A-Za-z0-9_-]{1,40}", value):
        raise ValueError("instance_id must match [A-Za-z0-9_-]{1,40}")
    return value


def _default_config_path(workspace_root: Path, instance_id: str) -> Path:
    if instance_id == "default":
        return workspace_root / "config/app.yaml"
    return workspace_root / "config" / "instances" / instance_id / "app.yaml"


def _default_secret_service_name(instance_id: str) -> str:
    if instance_id == "default":
        return "qachat"
    return f"qachat.{instance_id}"


def _commands_for_lang(lang: str) -> list[BotCommand]:
    if lang == "en":
        return [
            BotCommand("start", "Open quick guide"),
            BotCommand("mode", "Switch Gemini / QA mode"),
            BotCommand("new", "Start a new conversation"),
            BotCommand("status", "Show runtime status"),
            BotCommand("help", "How it works"),
        ]
    return [
        BotCommand("start", "Mở hướng dẫn nhanh"),
        BotCommand("mode", "Đổi chế độ Gemini / QA"),
        BotCommand("new", "Bắt đầu cuộc trò chuyện mới"),
        BotCommand("status", "Xem trạng thái"),
        BotCommand("help", "Cách sử dụng"),
    ]


def _build_post_init(lang: str):
    async def _post_init(application: Application) -> None:
        """Register command menu shown in Telegram chat UI."""
        commands = _commands_for_lang(lang)
        await application.bot.set_my_commands(commands=commands)
        await application.bot.set_my_commands(commands=commands, language_code=lang)
        await application.bot.set_chat_menu_button(menu_button=MenuButtonCommands())

    return _post_init


def main() -> int:
    parser = argparse.ArgumentParser(description="Gemini & Gradio QA Telegram chat")
    parser.add_argument(
        "--instance-id",
        help="Instance id for multi-bot isolation (default: default)",
    )
    parser.add_argument("--config", help="Path to app.yaml (overrides instance default)")
    args = parser.parse_args()

    workspace_root = Path(os.getenv("QACHAT_WORKSPACE_ROOT", Path(__file__).resolve().parents[1]))
    instance_id = _resolve_instance_id(args.instance_id or os.getenv("QACHAT_INSTANCE_ID", "default"))

    config_path_raw = (args.config or os.getenv("QACHAT_CONFIG_PATH", "")).strip()
    if config_path_raw:
        config_path = Path(config_path_raw)
    else:
        config_path = _default_config_path(workspace_root=workspace_root, instance_id=instance_id)

    secret_service_name = os.getenv("QACHAT_SECRET_SERVICE_NAME", "").strip() or _default_secret_service_name(
        instance_id=instance_id
    )
    logging.info(
        "starting instance_id=%s config=%s secret_service=%s",
        instance_id,
        config_path,
        secret_service_name,
    )

    try:
        runtime = AppRuntime(
            config_path=config_path,
            secret_service_name=secret_service_name,
        )
    except SecretStoreError as exc:
        logging.error("startup blocked by missing secret: %s", exc)
        print(
            "Startup failed: required secret is missing in OS credential store.\n"
            f"- instance_id: {instance_id}\n"
            f"- secret_service: {secret_service_name}\n"
            f"- detail: {exc}\n"
            "Store secrets first:\n"
            f"- python scripts/setup_secrets.py --instance-id {instance_id}"
        )
        return 2
    except ConfigLoadError as exc:
        logging.error("startup blocked by invalid config: %s", exc)
        print(
            "Startup failed: config is invalid.\n"
            f"- config: {config_path}\n"
            f"- detail: {exc}"
        )
        return 2
    ui_lang = resolve_lang(runtime.config.ui.language)
    handlers = TelegramHandlers(runtime, language=ui_lang)

    app = (
        ApplicationBuilder()
        .token(runtime.telegram_bot_token)
        .concurrent_updates(True)
        .post_init(_build_post_init(ui_lang))
        .build()
    )

    app.add_handler(CommandHandler("start", handlers.start))
    app.add_handler(CommandHandler("help", handlers.help))
    app.add_handler(CommandHandler("mode", handlers.mode))
    app.add_handler(CommandHandler("new", handlers.new_chat))
    app.add_handler(CommandHandler("status", handlers.status))
    app.add_handler(MessageHandler(filters.TEXT & (~filters.COMMAND), handlers.menu_text))

    app.run_polling(drop_pending_updates=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
