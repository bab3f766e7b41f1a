from decimal import Decimal

import pytest
import requests

from exceptions.payment_exceptions import (
    GENERIC_PAYMENT_ERROR,
    TOKEN_NOT_CONFIGURED,
    ConfigurationError,
    GatewayRejected,
    NetworkUnknown,
)
from gateways.factory import get_gateway
from gateways.podpay import PodPayGateway
from gateways.risepay import RisePayGateway
from models.charges import ChargeStatus
from fakes import FakeResponse, FakeSession

CUSTOMER = {
    "name": "Maria Souza",
    "cpf": "529.982.247-25",
    "email": "maria@example.com",
    "phone": "11999990000",
}


def _risepay(*responses):
    session = FakeSession(*responses)
    return RisePayGateway("rise-token", "https://risepay.test/", session=session), session


def _podpay(*responses):
    session = FakeSession(*responses)
    return PodPayGateway("pod-key", "https://podpay.test/v1", session=session), session


def test_risepay_create_charge_sends_reais_and_normalizes_response():
    gateway, session = _risepay(FakeResponse(200, {
        "success": True,
        "object": {
            "identifier": "rp-123",
            "status": "Waiting Payment",
            "amount": 520.0,
            "pix": {"qrCode": "00020126...6304ABCD"},
        },
    }))

    charge = gateway.create_charge(Decimal("520.00"), CUSTOMER)

    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://risepay.test/api/External/Transactions"
    assert call["headers"]["Authorization"] == "rise-token"
    assert call["json"]["amount"] == 520.0
    assert call["json"]["payment"] == {"method": "pix"}
    assert call["json"]["customer"]["cpf"] == "52998224725"
    assert len(session.calls) == 1

    assert charge.identifier == "rp-123"
    assert charge.status == ChargeStatus.WAITING
    assert charge.amount == Decimal("520.00")
    assert charge.qr_code_payload == "00020126...6304ABCD"
    assert charge.qr_code_image_url is None


def test_risepay_rejection_surfaces_provider_message():
    gateway, _ = _risepay(FakeResponse(400, {"success": False, "message": "CPF inválido"}))

    with pytest.raises(GatewayRejected, match="CPF inválido"):
        gateway.create_charge(Decimal("260.00"), CUSTOMER)


def test_risepay_rejection_without_message_uses_generic_text():
    gateway, _ = _risepay(FakeResponse(200, {"success": False}))

    with pytest.raises(GatewayRejected, match=GENERIC_PAYMENT_ERROR):
        gateway.create_charge(Decimal("260.00"), CUSTOMER)


def test_risepay_check_status_maps_paid():
    gateway, session = _risepay(FakeResponse(200, {"success": True, "object": {"identifier": "rp-1", "status": "Paid"}}))

    assert gateway.check_status("rp-1") == ChargeStatus.PAID
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "https://risepay.test/api/External/Transactions/rp-1"


def test_unrecognized_provider_status_is_unknown():
    gateway, _ = _risepay(FakeResponse(200, {"success": True, "object": {"status": "Chargeback"}}))

    assert gateway.check_status("rp-1") == ChargeStatus.UNKNOWN


def test_transport_error_becomes_network_unknown():
    gateway, session = _risepay(requests.ConnectionError("connection refused"))

    with pytest.raises(NetworkUnknown):
        gateway.check_status("rp-1")
    assert len(session.calls) == 1


def test_podpay_create_charge_converts_to_cents_once():
    gateway, session = _podpay(FakeResponse(201, {
        "id": 98765,
        "status": "waiting_payment",
        "amount": 52000,
        "pix": {"qrcode": "00020126-podpay"},
    }))

    charge = gateway.create_charge(Decimal("520.00"), CUSTOMER)

    call = session.calls[0]
    assert call["url"] == "https://podpay.test/v1/transactions"
    assert call["auth"] == ("pod-key", "x")
    assert call["json"]["amount"] == 52000
    assert call["json"]["items"][0]["unitPrice"] == 52000
    assert call["json"]["customer"]["document"] == {"type": "cpf", "number": "52998224725"}

    assert charge.identifier == "98765"
    assert charge.status == ChargeStatus.WAITING
    assert charge.amount == Decimal("520.00")
    assert charge.qr_code_payload == "00020126-podpay"


def test_podpay_sends_cnpj_document_type():
    gateway, session = _podpay(FakeResponse(200, {"data": {"id": "tx-1", "status": "waiting_payment", "amount": 26000, "pix": {"qrcode": "x"}}}))

    gateway.create_charge(Decimal("260.00"), {**CUSTOMER, "cpf": "11.222.333/0001-81"})

    assert session.calls[0]["json"]["customer"]["document"] == {"type": "cnpj", "number": "11222333000181"}


def test_podpay_refusal_is_gateway_rejected():
    gateway, _ = _podpay(FakeResponse(422, {"message": "Valor mínimo não atingido"}))

    with pytest.raises(GatewayRejected, match="Valor mínimo"):
        gateway.create_charge(Decimal("1.00"), CUSTOMER)


def test_podpay_check_status():
    gateway, _ = _podpay(FakeResponse(200, {"id": "tx-1", "status": "paid"}))

    assert gateway.check_status("tx-1") == ChargeStatus.PAID


def test_podpay_status_error_is_network_unknown():
    gateway, _ = _podpay(FakeResponse(503, None))

    with pytest.raises(NetworkUnknown):
        gateway.check_status("tx-1")


def test_factory_selects_provider_and_requires_credential():
    config = {
        "PAYMENT_PROVIDER": "PodPay",
        "PODPAY_SECRET_KEY": "pod-key",
        "PODPAY_API_URL": "https://podpay.test/v1",
    }
    assert isinstance(get_gateway(config, session=FakeSession()), PodPayGateway)

    with pytest.raises(ConfigurationError, match=TOKEN_NOT_CONFIGURED):
        get_gateway({"PAYMENT_PROVIDER": "risepay"}, session=FakeSession())

    with pytest.raises(ConfigurationError, match=GENERIC_PAYMENT_ERROR):
        get_gateway({"PAYMENT_PROVIDER": "mercadopago"}, session=FakeSession())
