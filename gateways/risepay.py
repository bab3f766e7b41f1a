from decimal import Decimal

from exceptions.payment_exceptions import GENERIC_PAYMENT_ERROR, GatewayRejected, NetworkUnknown
from gateways.base import PaymentGateway
from models.charges import Charge, ChargeStatus
from services.documents import strip_non_digits
from services.formatting import quantize_brl, to_decimal


class RisePayGateway(PaymentGateway):
    """
    RisePay external transactions API.

    Amounts are sent and received in reais. The private token goes straight
    into the Authorization header.
    """

    name = "risepay"
    default_base_url = "https://api.risepay.com.br"
    transactions_path = "/api/External/Transactions"

    status_aliases = {
        "waiting_payment": ChargeStatus.WAITING,
        "waiting": ChargeStatus.WAITING,
        "pending": ChargeStatus.WAITING,
        "paid": ChargeStatus.PAID,
        "approved": ChargeStatus.PAID,
    }

    def _headers(self):
        return {
            "Authorization": self.token,
            "Content-Type": "application/json",
        }

    def create_charge(self, amount: Decimal, customer: dict) -> Charge:
        payload = {
            "amount": float(quantize_brl(amount)),
            "payment": {"method": "pix"},
            "customer": {
                "name": customer.get("name") or "",
                "cpf": strip_non_digits(customer.get("cpf") or ""),
                "email": customer.get("email") or "",
                "phone": customer.get("phone") or "",
            },
        }

        response, body = self._send(
            "POST",
            self.transactions_path,
            json=payload,
            headers=self._headers(),
        )

        if not response.ok or not body.get("success"):
            raise GatewayRejected(body.get("message") or GENERIC_PAYMENT_ERROR)

        obj = body.get("object") or {}
        identifier = obj.get("identifier")
        if not identifier:
            raise GatewayRejected(GENERIC_PAYMENT_ERROR)

        pix = obj.get("pix") or {}
        charged = to_decimal(obj.get("amount"))

        return Charge(
            identifier=str(identifier),
            status=self.normalize_status(obj.get("status")),
            amount=quantize_brl(charged) if charged is not None else quantize_brl(amount),
            qr_code_payload=pix.get("qrCode") or "",
            qr_code_image_url=pix.get("qrCodeImage") or pix.get("qrCodeUrl"),
        )

    def check_status(self, identifier: str) -> ChargeStatus:
        response, body = self._send(
            "GET",
            self._resource_path(self.transactions_path, identifier),
            headers=self._headers(),
        )

        if not response.ok or not body.get("success"):
            raise NetworkUnknown(body.get("message") or f"RisePay status check failed ({response.status_code})")

        obj = body.get("object") or {}
        return self.normalize_status(obj.get("status"))
