"""
Telegram Service
Thin wrapper over the Telegram Bot HTTP API
"""

from typing import Any, Dict, List, Optional
import logging

import httpx

from sealed_otp.exceptions.custom_exceptions import ConfigurationException, UpstreamException

logger = logging.getLogger(__name__)


class TelegramClient:
    """
    Bot API client

    One request per call, no retry. A call that does not answer with
    {"ok": true} raises UpstreamException with the provider description.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = "https://api.telegram.org",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.token)

    def _url(self, method: str) -> str:
        if not self.is_configured:
            raise ConfigurationException()
        return f"{self.base_url}/bot{self.token}/{method}"

    async def aclose(self) -> None:
        await self._client.aclose()

    # ========================================================================
    # CORE CALLS
    # ========================================================================

    async def get(self, method: str) -> Any:
        """
        Call a Bot API method with GET

        Args:
            method: Bot API method name (getMe, getUpdates, ...)

        Returns:
            The decoded "result" field
        """
        url = self._url(method)
        return await self._send("GET", url, method, fallback="Telegram API GET call failed")

    async def post(self, method: str, payload: Dict[str, Any]) -> Any:
        """
        Call a Bot API method with a JSON body

        Args:
            method: Bot API method name (sendMessage, ...)
            payload: JSON body

        Returns:
            The decoded "result" field
        """
        url = self._url(method)
        return await self._send("POST", url, method, fallback="Telegram API POST call failed", payload=payload)

    async def _send(
        self,
        http_method: str,
        url: str,
        method: str,
        *,
        fallback: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            response = await self._client.request(http_method, url, json=payload)
        except httpx.RequestError as e:
            logger.error(f"Telegram {method} request failed: {e.__class__.__name__}")
            raise UpstreamException(fallback)

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not isinstance(data, dict):
            data = {}

        if not response.is_success or not data.get("ok"):
            description = data.get("description") or fallback
            logger.warning(f"Telegram {method} failed ({response.status_code}): {description}")
            raise UpstreamException(description, details={"method": method, "status": response.status_code})

        return data.get("result")

    # ========================================================================
    # BOT API SHORTCUTS
    # ========================================================================

    async def get_me(self) -> Dict[str, Any]:
        return await self.get("getMe") or {}

    async def get_updates(self) -> List[Dict[str, Any]]:
        return await self.get("getUpdates") or []

    async def send_message(self, chat_id: str, text: str) -> Dict[str, Any]:
        return await self.post("sendMessage", {"chat_id": chat_id, "text": text})
