from decimal import Decimal

import requests

from audit.logger import logger
from exceptions.payment_exceptions import (
    GENERIC_PAYMENT_ERROR,
    GENERIC_STATUS_ERROR,
    GatewayRejected,
    NetworkUnknown,
)
from models.charges import Charge, ChargeStatus

DEFAULT_TIMEOUT_SECONDS = 15


class PixProxyClient:
    """
    Storefront side of the PIX proxy. Talks JSON over HTTP and hands back
    the normalized Charge / ChargeStatus types.
    """

    def __init__(self, url, *, api_key=None, timeout_seconds=DEFAULT_TIMEOUT_SECONDS, session=None):
        self.url = url
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def _headers(self):
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _post(self, payload, fallback_message):
        try:
            response = self.session.post(
                self.url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.warning(f"PIX proxy unreachable | url={self.url} | error={e}")
            raise NetworkUnknown(fallback_message) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        return response, body if isinstance(body, dict) else {}

    def create_charge(self, amount: Decimal, customer: dict) -> Charge:
        response, body = self._post(
            {"amount": float(amount), "customer": customer},
            GENERIC_PAYMENT_ERROR,
        )

        if not response.ok or not body.get("success") or not isinstance(body.get("data"), dict):
            raise GatewayRejected(body.get("message") or GENERIC_PAYMENT_ERROR)

        try:
            return Charge.from_wire(body["data"])
        except KeyError as e:
            raise GatewayRejected(GENERIC_PAYMENT_ERROR) from e

    def check_status(self, identifier: str) -> ChargeStatus:
        response, body = self._post(
            {"checkStatus": True, "identifier": identifier},
            GENERIC_STATUS_ERROR,
        )

        if not response.ok or not body.get("success"):
            raise NetworkUnknown(body.get("message") or GENERIC_STATUS_ERROR)

        data = body.get("data") or {}
        return ChargeStatus.from_raw(data.get("status"))
