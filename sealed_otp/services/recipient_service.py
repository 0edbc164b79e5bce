"""
Recipient Service
Decides which Telegram chat receives the OTP
"""

from typing import Any, Dict, Optional
import logging

from sealed_otp.exceptions.custom_exceptions import NoRecipientFoundException, SelfRecipientException
from sealed_otp.services.telegram_service import TelegramClient

logger = logging.getLogger(__name__)


def _dig(data: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


class RecipientResolver:
    """
    Chat id resolution with single-slot caches

    Both the looked-up chat id and the bot's own user id are cached on
    the instance for its whole life. Nothing invalidates them; a restart
    builds a fresh resolver.
    """

    def __init__(self, telegram: TelegramClient, fixed_chat_id: str = ""):
        self.telegram = telegram
        self.fixed_chat_id = fixed_chat_id
        self._cached_chat_id: str = ""
        self._cached_bot_user_id: str = ""

    @property
    def cached_chat_id(self) -> str:
        return self._cached_chat_id

    # ========================================================================
    # BOT IDENTITY
    # ========================================================================

    async def get_bot_user_id(self) -> str:
        """Bot's own user id from getMe, empty when getMe carries none"""
        if self._cached_bot_user_id:
            return self._cached_bot_user_id

        bot_info = await self.telegram.get_me()
        bot_id = bot_info.get("id") if isinstance(bot_info, dict) else None
        if bot_id is not None:
            self._cached_bot_user_id = str(bot_id)

        return self._cached_bot_user_id

    async def assert_not_bot_chat_id(self, chat_id: str) -> None:
        bot_user_id = await self.get_bot_user_id()
        if bot_user_id and str(chat_id) == bot_user_id:
            logger.warning("Refusing to use the bot's own id as recipient")
            raise SelfRecipientException()

    # ========================================================================
    # RESOLUTION
    # ========================================================================

    async def resolve(self, explicit_chat_id: Optional[str] = None) -> str:
        """
        Resolve the delivery chat id

        Priority: explicit, fixed from config, cached, getUpdates lookup.

        Raises:
            SelfRecipientException: Candidate is the bot itself
            NoRecipientFoundException: Nothing to deliver to
            UpstreamException: Telegram call failed
        """
        explicit_chat_id = (explicit_chat_id or "").strip()
        if explicit_chat_id:
            candidate = explicit_chat_id
        elif self.fixed_chat_id:
            candidate = self.fixed_chat_id
        elif self._cached_chat_id:
            candidate = self._cached_chat_id
        else:
            candidate = await self._lookup_recent_chat()

        await self.assert_not_bot_chat_id(candidate)

        if not explicit_chat_id and not self.fixed_chat_id:
            self._cached_chat_id = candidate

        return candidate

    async def _lookup_recent_chat(self) -> str:
        """Most recent update not sent by a bot"""
        updates = await self.telegram.get_updates()

        for update in reversed(updates):
            if self._is_from_bot(update):
                continue

            chat_id = self._chat_id_of(update)
            if chat_id is not None:
                logger.info("Resolved recipient chat from recent bot activity")
                return str(chat_id)

        raise NoRecipientFoundException()

    @staticmethod
    def _is_from_bot(update: Dict[str, Any]) -> bool:
        return any(
            bool(_dig(update, kind, "from", "is_bot"))
            for kind in ("message", "edited_message", "callback_query")
        )

    @staticmethod
    def _chat_id_of(update: Dict[str, Any]) -> Any:
        for path in (
            ("message", "chat", "id"),
            ("edited_message", "chat", "id"),
            ("callback_query", "message", "chat", "id"),
        ):
            chat_id = _dig(update, *path)
            if chat_id is not None:
                return chat_id
        return None
