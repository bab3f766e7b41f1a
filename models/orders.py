from dataclasses import dataclass
from decimal import Decimal

from catalog.products import Product
from exceptions.payment_exceptions import ValidationError
from services.formatting import quantize_brl


@dataclass
class Order:
    product: Product
    quantity: int = 1
    document_number: str = ""
    customer_name: str = ""

    def set_quantity(self, quantity: int) -> None:
        if not isinstance(quantity, int) or not 1 <= quantity <= self.product.max_quantity:
            raise ValidationError(
                f"Quantidade deve estar entre 1 e {self.product.max_quantity}"
            )
        self.quantity = quantity

    @property
    def total(self) -> Decimal:
        return quantize_brl(self.product.unit_price * self.quantity)
