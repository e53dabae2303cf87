"""Push provider clients used by the notification dispatcher."""

from __future__ import annotations

import logging
import re
from typing import Any, Protocol

import httpx

from notifier.config import Settings
from notifier.domain.entities import PushMessage, PushOutcome

logger = logging.getLogger(__name__)

_EXPO_TOKEN_PATTERN = re.compile(r"^Expo(?:nent)?PushToken\[[^\]]+\]$")
_INVALID_TOKEN_ERRORS = frozenset({"DeviceNotRegistered"})


class PushSender(Protocol):
    """Deliver one push message to one device token."""

    async def send(self, token: str, message: PushMessage) -> PushOutcome:
        ...

    async def aclose(self) -> None:
        ...


def _token_prefix(token: str) -> str:
    return (token or "")[:24]


class NullPushSender:
    """No-op sender used when push notifications are disabled."""

    async def send(self, token: str, message: PushMessage) -> PushOutcome:
        logger.debug(
            "Push notifications disabled; dropping push token_prefix=%s", _token_prefix(token)
        )
        return PushOutcome.OK

    async def aclose(self) -> None:
        return None


class ExpoPushSender:
    """Send push notifications through the Expo push HTTP API.

    Every call is attempted once. Responses are classified into
    :class:`PushOutcome` values; no exception escapes :meth:`send`.
    """

    def __init__(
        self,
        *,
        url: str,
        access_token: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        headers = {"Accept": "application/json", "Accept-Encoding": "gzip, deflate"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = headers

    @staticmethod
    def is_valid_token(token: str) -> bool:
        return bool(_EXPO_TOKEN_PATTERN.match(token or ""))

    async def send(self, token: str, message: PushMessage) -> PushOutcome:
        if not self.is_valid_token(token):
            logger.warning("Rejecting malformed Expo push token token_prefix=%s", _token_prefix(token))
            return PushOutcome.INVALID_TOKEN

        body = {
            "to": token,
            "title": message.title,
            "body": message.body,
            "data": message.data,
            "sound": "default",
        }
        try:
            response = await self._client.post(self._url, json=body, headers=self._headers)
        except httpx.TimeoutException:
            logger.warning("Expo push request timed out token_prefix=%s", _token_prefix(token))
            return PushOutcome.TRANSIENT_ERROR
        except httpx.HTTPError as exc:
            logger.warning(
                "Expo push request failed token_prefix=%s: %s", _token_prefix(token), exc
            )
            return PushOutcome.TRANSIENT_ERROR

        if not 200 <= response.status_code < 300:
            logger.warning(
                "Expo push API responded with status %s: %s",
                response.status_code,
                _extract_error_details(response),
            )
            return PushOutcome.TRANSIENT_ERROR

        try:
            payload = response.json()
        except ValueError:
            logger.warning("Expo push API returned a non JSON body")
            return PushOutcome.TRANSIENT_ERROR
        return _classify_ticket(token, payload)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _classify_ticket(token: str, payload: Any) -> PushOutcome:
    """Map an Expo push ticket to a :class:`PushOutcome`."""

    ticket = payload.get("data") if isinstance(payload, dict) else None
    if isinstance(ticket, list):
        ticket = ticket[0] if ticket else None
    if not isinstance(ticket, dict):
        logger.warning("Expo push API returned an unexpected body: %s", payload)
        return PushOutcome.TRANSIENT_ERROR

    if ticket.get("status") == "ok":
        return PushOutcome.OK

    details = ticket.get("details") or {}
    error_code = details.get("error") if isinstance(details, dict) else None
    if error_code in _INVALID_TOKEN_ERRORS:
        logger.info("Expo reported token as unregistered token_prefix=%s", _token_prefix(token))
        return PushOutcome.INVALID_TOKEN

    logger.warning(
        "Expo push ticket error %s: %s", error_code or "unknown", ticket.get("message")
    )
    return PushOutcome.TRANSIENT_ERROR


def _extract_error_details(response: httpx.Response) -> str | None:
    """Return a human readable description for an Expo error response."""

    try:
        parsed = response.json()
    except ValueError:
        text = response.text.strip()
        return text or None

    errors = parsed.get("errors") if isinstance(parsed, dict) else None
    if isinstance(errors, list):
        messages = [
            str(item.get("message"))
            for item in errors
            if isinstance(item, dict) and item.get("message")
        ]
        if messages:
            return "; ".join(messages)
    return str(parsed)


def create_push_sender(settings: Settings) -> PushSender:
    """Build the push sender described by ``settings``."""

    if not settings.push_enabled:
        logger.info("Push delivery disabled by configuration")
        return NullPushSender()
    return ExpoPushSender(
        url=settings.expo_push_url,
        access_token=settings.expo_access_token,
        timeout=settings.push_timeout_seconds,
    )


__all__ = ["ExpoPushSender", "NullPushSender", "PushSender", "create_push_sender"]
