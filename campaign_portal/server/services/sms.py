"""
SMS gateway client.

Sends single messages through an HTTP SMS gateway. The gateway answers with
JSON; a send only counts as delivered to the gateway when the HTTP status is
2xx and the body reports ``status == "success"`` or ``status_code == 200``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from campaign_portal.core.logging_config import get_logger
from campaign_portal.core.utils import gateway_phone, normalize_bd_phone
from campaign_portal.server.core.config import SMSConfig, settings

logger = get_logger(__name__)


class SmsGatewayError(Exception):
    """The gateway is unconfigured, unreachable or refused the message."""


class InvalidPhoneNumber(ValueError):
    pass


class SmsClient:
    """
    Async client for the SMS gateway.

    Args:
        config: Gateway URL, key, sender id and timeout
        transport: Optional httpx transport (tests use ``httpx.MockTransport``)
    """

    def __init__(self, config: SMSConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    @property
    def configured(self) -> bool:
        return self.config.configured

    async def send(self, phone: str, message: str) -> Dict[str, Any]:
        """
        Send ``message`` to a Bangladeshi mobile number.

        Returns:
            The gateway's JSON response

        Raises:
            InvalidPhoneNumber: the number is not a valid ``01XXXXXXXXX`` mobile
            SmsGatewayError: gateway not configured, unreachable or reporting failure
        """
        local = normalize_bd_phone(phone)
        if local is None:
            raise InvalidPhoneNumber("Invalid Bangladeshi mobile number")
        if not self.configured:
            raise SmsGatewayError("SMS gateway is not configured")

        payload = {
            "api_key": self.config.api_key,
            "sender_id": self.config.sender_id,
            "to": gateway_phone(local),
            "message": message,
            "type": "unicode",
        }
        headers = {"Authorization": f"Bearer {self.config.api_key}", "Content-Type": "application/json"}

        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds, transport=self._transport) as client:
                response = await client.post(self.config.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"SMS gateway request failed: {e}")
            raise SmsGatewayError("SMS gateway is unreachable") from e

        try:
            body = response.json()
        except ValueError:
            body = {"raw": response.text}

        accepted = response.is_success and (body.get("status") == "success" or body.get("status_code") == 200)
        if not accepted:
            logger.warning(f"SMS gateway rejected message to {payload['to']}: HTTP {response.status_code} {body}")
            raise SmsGatewayError(body.get("message") or "SMS gateway rejected the message")

        logger.info(f"SMS sent to {payload['to']}")
        return body


def get_sms_client() -> SmsClient:
    """Dependency returning an SMS client built from current settings."""
    return SmsClient(settings.sms)
