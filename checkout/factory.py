from checkout.controller import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_POLL_TIMEOUT_SECONDS,
    CheckoutController,
    log_notifier,
)
from clients.proxy_client import PixProxyClient
from config import Config
from exceptions.payment_exceptions import ConfigurationError
from services.killswitch import DEFAULT_KILLSWITCH_KEY, Killswitch, RedisFlagStore


def _config_mapping(config):
    if config is None:
        return {key: getattr(Config, key) for key in dir(Config) if key.isupper()}
    return config


def build_checkout(config=None, *, redis=None, session=None, scheduler=None, notifier=log_notifier):
    """
    Wires a CheckoutController the way the storefront runs it: the proxy
    client pointed at PROXY_URL, the killswitch read from the same Redis key
    the admin endpoint toggles, and the configured poll interval and timeout.

    `config` is any mapping with the Config keys (Flask's app.config works);
    the Config class is used when omitted.
    """
    config = _config_mapping(config)

    proxy_url = config.get("PROXY_URL")
    if not proxy_url:
        raise ConfigurationError("PROXY_URL is not configured")

    if redis is None:
        from infrastructure.redis_client import redis_client
        redis = redis_client

    killswitch = Killswitch(
        RedisFlagStore(redis),
        key=config.get("KILLSWITCH_KEY") or DEFAULT_KILLSWITCH_KEY,
    )

    return CheckoutController(
        PixProxyClient(proxy_url, session=session),
        killswitch,
        scheduler=scheduler,
        notifier=notifier,
        poll_interval_seconds=float(config.get("POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS)),
        poll_timeout_seconds=float(config.get("POLL_TIMEOUT_SECONDS", DEFAULT_POLL_TIMEOUT_SECONDS)),
    )
