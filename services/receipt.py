import random
import string
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from services.documents import format_document
from services.formatting import format_price

RECEIPT_CODE_LENGTH = 8
RECEIPT_CODE_ALPHABET = string.ascii_uppercase + string.digits


@dataclass(frozen=True)
class Receipt:
    document_number: str
    product_title: str
    size_label: str
    quantity: int
    amount_paid: Decimal
    receipt_code: str
    product_reference: str
    timestamp: datetime


def generate_receipt(order, charge, now=None, rng=None) -> Receipt:
    """
    Builds the receipt for a paid charge. Receipt code and product reference
    are random display tokens; nothing here is sent back to a server.
    """
    rng = rng or random.SystemRandom()

    return Receipt(
        document_number=order.document_number,
        product_title=order.product.title,
        size_label=order.product.size_label,
        quantity=order.quantity,
        amount_paid=charge.amount,
        receipt_code="".join(rng.choice(RECEIPT_CODE_ALPHABET) for _ in range(RECEIPT_CODE_LENGTH)),
        product_reference=f"{rng.randint(0, 99999):05d}",
        timestamp=now or datetime.now(),
    )


def render_receipt_text(receipt: Receipt) -> str:
    lines = [
        "COMPROVANTE DE PAGAMENTO - PIX",
        "",
        f"Código: {receipt.receipt_code}",
        f"Data: {receipt.timestamp.strftime('%d/%m/%Y %H:%M:%S')}",
        f"CPF/CNPJ: {format_document(receipt.document_number)}",
        "",
        f"Produto: {receipt.product_title} (ref. {receipt.product_reference})",
        f"Tamanho: {receipt.size_label}",
        f"Quantidade: {receipt.quantity}",
        f"Valor pago: {format_price(receipt.amount_paid)}",
    ]
    return "\n".join(lines) + "\n"
