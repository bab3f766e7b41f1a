import os

from dotenv import load_dotenv

# Load environment variables from .env for local development
load_dotenv()


class Config:
    # Payment provider used by the PIX proxy ("risepay" or "podpay").
    PAYMENT_PROVIDER = os.getenv("PAYMENT_PROVIDER", "risepay")

    # Provider credentials. Read server-side only, never sent to the storefront.
    RISEPAY_PRIVATE_TOKEN = os.getenv("RISEPAY_PRIVATE_TOKEN")
    RISEPAY_API_URL = os.getenv("RISEPAY_API_URL", "https://api.risepay.com.br")
    PODPAY_SECRET_KEY = os.getenv("PODPAY_SECRET_KEY")
    PODPAY_API_URL = os.getenv("PODPAY_API_URL", "https://api.podpay.co/v1")

    # Network timeout for outbound provider requests.
    GATEWAY_TIMEOUT_SECONDS = float(os.getenv("GATEWAY_TIMEOUT_SECONDS", "10"))

    # Origin allowed to call the proxy from the browser.
    CORS_ALLOW_ORIGIN = os.getenv("CORS_ALLOW_ORIGIN", "*")

    # Key protecting the killswitch admin endpoints.
    EXTERNAL_API_KEY = os.getenv("EXTERNAL_API_KEY")

    # Storage key of the payment killswitch flag.
    KILLSWITCH_KEY = os.getenv("KILLSWITCH_KEY", "pks_e7x9z")

    # Checkout polling. The timeout bounds how long a PIX charge is watched.
    POLL_INTERVAL_SECONDS = float(os.getenv("POLL_INTERVAL_SECONDS", "5"))
    POLL_TIMEOUT_SECONDS = float(os.getenv("POLL_TIMEOUT_SECONDS", "600"))

    # Where the checkout client reaches the proxy.
    PROXY_URL = os.getenv(
        "PROXY_URL",
        "http://localhost:5000/functions/create-pix-payment"
    )

    # flask-limiter storage. Point at Redis when running more than one worker.
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
