from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from services.formatting import quantize_brl, to_decimal


class ChargeStatus(str, Enum):
    WAITING = "waiting"
    PAID = "paid"
    UNKNOWN = "unknown"

    @classmethod
    def from_raw(cls, raw) -> "ChargeStatus":
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass
class Charge:
    """A PIX charge in the normalized shape shared by proxy and checkout."""

    identifier: str
    status: ChargeStatus
    amount: Decimal
    qr_code_payload: str
    qr_code_image_url: Optional[str] = None

    def to_wire(self) -> dict:
        data = {
            "identifier": self.identifier,
            "status": self.status.value,
            "amount": float(self.amount),
            "qrCode": self.qr_code_payload,
        }
        if self.qr_code_image_url:
            data["qrCodeImage"] = self.qr_code_image_url
        return data

    @classmethod
    def from_wire(cls, data: dict) -> "Charge":
        amount = to_decimal(data.get("amount"))
        return cls(
            identifier=str(data["identifier"]),
            status=ChargeStatus.from_raw(data.get("status")),
            amount=quantize_brl(amount) if amount is not None else Decimal("0.00"),
            qr_code_payload=data.get("qrCode") or "",
            qr_code_image_url=data.get("qrCodeImage"),
        )
