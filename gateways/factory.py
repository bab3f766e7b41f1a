from audit.logger import logger
from exceptions.payment_exceptions import GENERIC_PAYMENT_ERROR, ConfigurationError
from gateways.base import DEFAULT_TIMEOUT_SECONDS
from gateways.podpay import PodPayGateway
from gateways.risepay import RisePayGateway

# provider -> (gateway class, credential config key, base url config key)
PROVIDERS = {
    "risepay": (RisePayGateway, "RISEPAY_PRIVATE_TOKEN", "RISEPAY_API_URL"),
    "podpay": (PodPayGateway, "PODPAY_SECRET_KEY", "PODPAY_API_URL"),
}


def get_gateway(config, session=None):
    """
    Builds the configured provider adapter from a Flask-style config mapping.
    Raises ConfigurationError when the provider is unknown or its credential
    is missing.
    """
    provider = (config.get("PAYMENT_PROVIDER") or "risepay").strip().lower()

    if provider not in PROVIDERS:
        logger.error(f"Unknown payment provider | provider={provider}")
        raise ConfigurationError(GENERIC_PAYMENT_ERROR)

    gateway_cls, token_key, url_key = PROVIDERS[provider]

    return gateway_cls(
        config.get(token_key),
        config.get(url_key),
        timeout_seconds=config.get("GATEWAY_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        session=session,
    )
