"""
Provider adapters for PIX charges.

Each provider speaks its own JSON. Adapters translate it into the shared
Charge / ChargeStatus contract so nothing provider-specific reaches the proxy
response or the checkout flow. Every public call performs exactly one
outbound request; retrying is the caller's decision.
"""
from decimal import Decimal
from urllib.parse import quote

import requests

from audit.logger import logger
from exceptions.payment_exceptions import (
    GENERIC_PAYMENT_ERROR,
    TOKEN_NOT_CONFIGURED,
    ConfigurationError,
    NetworkUnknown,
)
from models.charges import Charge, ChargeStatus

DEFAULT_TIMEOUT_SECONDS = 10


class PaymentGateway:
    name = "base"
    default_base_url = ""
    # Provider status (lowercased, spaces as underscores) -> ChargeStatus
    status_aliases = {}

    def __init__(self, token, base_url=None, *, timeout_seconds=DEFAULT_TIMEOUT_SECONDS, session=None):
        if not token:
            raise ConfigurationError(TOKEN_NOT_CONFIGURED)

        self.token = token
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def create_charge(self, amount: Decimal, customer: dict) -> Charge:
        raise NotImplementedError()

    def check_status(self, identifier: str) -> ChargeStatus:
        raise NotImplementedError()

    def normalize_status(self, raw_status) -> ChargeStatus:
        key = str(raw_status or "").strip().lower().replace(" ", "_")
        return self.status_aliases.get(key, ChargeStatus.UNKNOWN)

    def _resource_path(self, collection: str, identifier) -> str:
        # The identifier comes from the caller; it must stay a single path segment
        return f"{collection}/{quote(str(identifier), safe='')}"

    def _send(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"

        try:
            response = self.session.request(
                method,
                url,
                timeout=self.timeout_seconds,
                **kwargs,
            )
        except requests.RequestException as e:
            logger.warning(
                f"Gateway request failed | provider={self.name} | method={method} | path={path} | error={e}"
            )
            raise NetworkUnknown(GENERIC_PAYMENT_ERROR) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            logger.warning(
                f"Gateway returned a non-JSON body | provider={self.name} | status={response.status_code}"
            )
            body = {}

        return response, body
