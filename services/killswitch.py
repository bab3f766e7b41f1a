"""
Payment killswitch.

A single persisted flag decides whether checkout may create charges. The
flag lives behind a small key-value store interface so the storefront can
back it with Redis in production and with a dict locally.
"""
import time

from audit.logger import logger
from exceptions.payment_exceptions import GENERIC_PAYMENT_ERROR, KillswitchBlocked

DEFAULT_KILLSWITCH_KEY = "pks_e7x9z"
ENABLED_VALUE = "1"
DISABLED_VALUE = "0"


class InMemoryFlagStore:
    def __init__(self, initial=None):
        self.store = dict(initial or {})

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value):
        self.store[key] = value


class RedisFlagStore:
    def __init__(self, client):
        self.client = client

    def get(self, key):
        value = self.client.get(key)
        if isinstance(value, bytes):
            value = value.decode()
        return value

    def set(self, key, value):
        self.client.set(key, value)


class Killswitch:
    def __init__(self, store, key: str = DEFAULT_KILLSWITCH_KEY):
        self._store = store
        self._key = key
        # Anything but an explicit "0" keeps payments on
        self.enabled = store.get(key) != DISABLED_VALUE

    def ensure_enabled(self) -> None:
        if not self.enabled:
            raise KillswitchBlocked(GENERIC_PAYMENT_ERROR)

    def toggle(self, enabled: bool) -> None:
        self._store.set(self._key, ENABLED_VALUE if enabled else DISABLED_VALUE)
        self.enabled = bool(enabled)

        logger.warning(f"Payment killswitch toggled | enabled={self.enabled}")


class SecretGesture:
    """
    Reveals the killswitch panel after CLICK_THRESHOLD clicks, each within
    CLICK_WINDOW_SECONDS of the previous one.
    """

    CLICK_THRESHOLD = 7
    CLICK_WINDOW_SECONDS = 2.0

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self.click_count = 0
        self.last_click_at = None
        self.panel_visible = False

    def click(self) -> bool:
        now = self._clock()

        if self.last_click_at is None or now - self.last_click_at > self.CLICK_WINDOW_SECONDS:
            self.click_count = 1
        else:
            self.click_count += 1

        self.last_click_at = now

        if self.click_count >= self.CLICK_THRESHOLD:
            self.panel_visible = True
            self.click_count = 0

        return self.panel_visible

    def close_panel(self) -> None:
        self.panel_visible = False
