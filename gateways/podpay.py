from decimal import Decimal

from exceptions.payment_exceptions import GENERIC_PAYMENT_ERROR, GatewayRejected, NetworkUnknown
from gateways.base import PaymentGateway
from models.charges import Charge, ChargeStatus
from services.documents import document_type, strip_non_digits
from services.formatting import from_minor_units, to_minor_units

ITEM_TITLE = "Locação de caçamba"


class PodPayGateway(PaymentGateway):
    """
    PodPay transactions API.

    PodPay bills in cents: the amount is converted to minor units once on the
    way out and back to reais once on the way in. Authentication is HTTP
    basic with the secret key as user and "x" as password.
    """

    name = "podpay"
    default_base_url = "https://api.podpay.co/v1"
    transactions_path = "/transactions"

    status_aliases = {
        "waiting_payment": ChargeStatus.WAITING,
        "pending": ChargeStatus.WAITING,
        "processing": ChargeStatus.WAITING,
        "authorized": ChargeStatus.WAITING,
        "paid": ChargeStatus.PAID,
    }

    def _auth(self):
        return (self.token, "x")

    @staticmethod
    def _unwrap(body: dict) -> dict:
        data = body.get("data")
        return data if isinstance(data, dict) else body

    def create_charge(self, amount: Decimal, customer: dict) -> Charge:
        cents = to_minor_units(amount)
        document = strip_non_digits(customer.get("cpf") or "")

        payload = {
            "amount": cents,
            "paymentMethod": "pix",
            "customer": {
                "name": customer.get("name") or "",
                "email": customer.get("email") or "",
                "phone": customer.get("phone") or "",
                "document": {
                    "type": document_type(document) or "cpf",
                    "number": document,
                },
            },
            "items": [
                {
                    "title": ITEM_TITLE,
                    "unitPrice": cents,
                    "quantity": 1,
                    "tangible": False,
                }
            ],
        }

        response, body = self._send(
            "POST",
            self.transactions_path,
            json=payload,
            auth=self._auth(),
        )

        data = self._unwrap(body)
        identifier = data.get("id")

        if not response.ok or not identifier:
            raise GatewayRejected(body.get("message") or GENERIC_PAYMENT_ERROR)

        pix = data.get("pix") or {}
        charged = data.get("amount")

        return Charge(
            identifier=str(identifier),
            status=self.normalize_status(data.get("status")),
            amount=from_minor_units(charged) if charged is not None else from_minor_units(cents),
            qr_code_payload=pix.get("qrcode") or pix.get("qrCode") or "",
            qr_code_image_url=pix.get("qrcodeUrl") or pix.get("url"),
        )

    def check_status(self, identifier: str) -> ChargeStatus:
        response, body = self._send(
            "GET",
            self._resource_path(self.transactions_path, identifier),
            auth=self._auth(),
        )

        if not response.ok:
            raise NetworkUnknown(body.get("message") or f"PodPay status check failed ({response.status_code})")

        return self.normalize_status(self._unwrap(body).get("status"))
