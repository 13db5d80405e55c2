"""Telegram command handlers."""

from __future__ import annotations

import asyncio
import html
import logging
import re
import time

from telegram import Update
from telegram.constants import ParseMode
from telegram.error import BadRequest
from telegram.ext import ContextTypes

from qachat.bot.menu import main_menu_markup, menu_action_from_text, mode_from_arg, resolve_lang
from qachat.bot.templates import (
    busy_text,
    chat_failed_text,
    chat_in_progress_text,
    greeting_text,
    help_text,
    mode_changed_text,
    mode_usage_text,
    new_chat_text,
    runtime_status_text,
    start_text,
)
from qachat.core.runtime import AppRuntime
from qachat.core.shell import ShellBusyError
from qachat.models.chat import ChatMode

LOGGER = logging.getLogger(__name__)

_LINK_RE = re.compile(r"\[([^\]\n]+)\]\(((?:[^\s()]|\([^\s()]*\))+)\)")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")


def _chat_id(update: Update) -> int:
    assert update.effective_chat is not None
    return int(update.effective_chat.id)


def _args(context: ContextTypes.DEFAULT_TYPE) -> list[str]:
    raw = getattr(context, "args", None)
    if not raw:
        return []
    return [str(x) for x in raw]


def render_telegram_html(text: str) -> str:
    # Escape user/model text first, then allow markdown links and **bold**.
    escaped = html.escape(text or "")

    def _link_sub(match: re.Match[str]) -> str:
        label, url = match.group(1), match.group(2)
        if not url.lower().startswith(("http://", "https://")):
            return match.group(0)
        return f'<a href="{url}">{label}</a>'

    def _bold_sub(match: re.Match[str]) -> str:
        inner = match.group(1)
        if not inner.strip():
            return match.group(0)
        return f"<b>{inner}</b>"

    return _BOLD_RE.sub(_bold_sub, _LINK_RE.sub(_link_sub, escaped))


class TelegramHandlers:
    def __init__(self, runtime: AppRuntime, language: str = "vi") -> None:
        self.runtime = runtime
        self.lang = resolve_lang(language)

    def _mode(self, update: Update) -> str:
        return self.runtime.shell_for(_chat_id(update)).mode.value

    async def _reply(self, update: Update, text: str) -> None:
        message = update.message
        if message is None:
            return
        rendered = render_telegram_html(text)
        reply_markup = main_menu_markup(self.lang, mode=self._mode(update))
        try:
            await message.reply_text(
                rendered,
                parse_mode=ParseMode.HTML,
                disable_web_page_preview=True,
                reply_markup=reply_markup,
            )
        except BadRequest:
            await message.reply_text(text, reply_markup=reply_markup)

    async def _answer_chat_text(self, update: Update, user_text: str) -> None:
        chat_id = _chat_id(update)
        shell = self.runtime.shell_for(chat_id)
        if shell.busy:
            await self._reply(update, busy_text(self.lang))
            return

        await self._reply(update, chat_in_progress_text(shell.mode.value, self.lang))
        LOGGER.info("chat requested chat_id=%s mode=%s text_len=%s", chat_id, shell.mode.value, len(user_text))
        started_at = time.time()
        try:
            answer = await asyncio.to_thread(self.runtime.answer_chat, chat_id, user_text)
        except ShellBusyError:
            await self._reply(update, busy_text(self.lang))
            return
        except (ValueError, RuntimeError) as exc:
            await self._reply(update, chat_failed_text(str(exc), self.lang))
            return
        elapsed_ms = int((time.time() - started_at) * 1000)
        LOGGER.info("chat answered chat_id=%s elapsed_ms=%s", chat_id, elapsed_ms)
        await self._reply(update, answer)

    async def _switch_mode(self, update: Update, mode: ChatMode) -> None:
        if not self.runtime.select_mode(_chat_id(update), mode):
            await self._reply(update, busy_text(self.lang))
            return
        LOGGER.info("mode selected chat_id=%s mode=%s", _chat_id(update), mode.value)
        await self._reply(update, mode_changed_text(mode.value, self.lang))

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        chat_id = _chat_id(update)
        is_new = not self.runtime.has_chat(chat_id)
        shell = self.runtime.shell_for(chat_id)
        await self._reply(update, start_text(shell.mode.value, self.lang))
        if is_new:
            greeting = shell.greet(greeting_text(self.lang))
            await self._reply(update, greeting.text)

    async def help(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._reply(update, help_text(self.lang))

    async def mode(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        args = _args(context)
        if not args:
            current = self.runtime.shell_for(_chat_id(update)).mode
            target = ChatMode.QA if current == ChatMode.GEMINI else ChatMode.GEMINI
            await self._switch_mode(update, target)
            return

        value = mode_from_arg(args[0]) if len(args) == 1 else None
        if value is None:
            await self._reply(update, mode_usage_text(self.lang))
            return
        await self._switch_mode(update, ChatMode(value))

    async def new_chat(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        chat_id = _chat_id(update)
        if self.runtime.shell_for(chat_id).busy:
            await self._reply(update, busy_text(self.lang))
            return
        shell = self.runtime.reset_chat(chat_id)
        await self._reply(update, new_chat_text(self.lang))
        greeting = shell.greet(greeting_text(self.lang))
        await self._reply(update, greeting.text)

    async def status(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        status = self.runtime.get_runtime_status(_chat_id(update))
        await self._reply(update, runtime_status_text(status, self.lang))

    async def menu_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message is None:
            return
        text = (update.message.text or "").strip()
        if not text:
            return

        action = menu_action_from_text(text)
        if action == "mode_qa":
            await self._switch_mode(update, ChatMode.QA)
            return
        if action == "mode_gemini":
            await self._switch_mode(update, ChatMode.GEMINI)
            return
        if action == "new_chat":
            await self.new_chat(update, context)
            return
        if action == "status":
            await self.status(update, context)
            return
        if action == "help":
            await self.help(update, context)
            return

        await self._answer_chat_text(update, user_text=text)
