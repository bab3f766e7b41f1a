import pytest
from flask import Flask

from extensions import limiter
from routes.catalog import catalog_bp
from routes.killswitch import killswitch_bp
from routes.pix_payments import pix_payments_bp
from fakes import FakeRedis, FakeSession


@pytest.fixture
def fake_redis(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr("routes.killswitch.redis_client", fake)
    return fake


@pytest.fixture
def app(fake_redis):
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["PAYMENT_PROVIDER"] = "risepay"
    app.config["RISEPAY_PRIVATE_TOKEN"] = "test-risepay-token"
    app.config["RISEPAY_API_URL"] = "https://risepay.test"
    app.config["PODPAY_SECRET_KEY"] = "test-podpay-key"
    app.config["PODPAY_API_URL"] = "https://podpay.test/v1"
    app.config["EXTERNAL_API_KEY"] = "test-admin-key"
    app.config["CORS_ALLOW_ORIGIN"] = "https://loja.test"

    limiter.init_app(app)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(pix_payments_bp)
    app.register_blueprint(killswitch_bp)

    app.fake_redis = fake_redis
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def gateway_session(monkeypatch):
    """Routes every provider call made by the proxy through a FakeSession."""
    from gateways.factory import get_gateway

    session = FakeSession()
    monkeypatch.setattr(
        "routes.pix_payments.get_gateway",
        lambda config: get_gateway(config, session=session),
    )
    return session
