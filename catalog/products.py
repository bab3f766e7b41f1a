from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from services.formatting import format_price


@dataclass(frozen=True)
class Product:
    id: int
    title: str
    size_label: str
    unit_price: Decimal
    image_ref: str
    max_quantity: int = 3

    @property
    def price_label(self) -> str:
        return format_price(self.unit_price)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "size": self.size_label,
            "price": self.price_label,
            "unitPrice": float(self.unit_price),
            "image": self.image_ref,
            "maxQuantity": self.max_quantity,
        }


# The 26m³ container is rented one at a time.
CATALOG = (
    Product(1, "CAÇAMBA DE 3M³", "3m³", Decimal("260.00"), "assets/cacamba-3m.avif"),
    Product(2, "CAÇAMBA DE 4M³", "4m³", Decimal("290.00"), "assets/cacamba-4m-real.jpg"),
    Product(3, "CAÇAMBA DE 5M³", "5m³", Decimal("340.00"), "assets/cacamba-5m-real.webp"),
    Product(4, "CAÇAMBA DE 7M³", "7m³", Decimal("380.00"), "assets/cacamba-7m-real.jpg"),
    Product(5, "CAÇAMBA DE 10M³", "10m³", Decimal("460.00"), "assets/cacamba-10m-real.webp"),
    Product(6, "CAÇAMBA DE 26M³", "26m³", Decimal("900.00"), "assets/cacamba-26m.avif", max_quantity=1),
)


def list_products():
    return list(CATALOG)


def get_product(product_id) -> Optional[Product]:
    for product in CATALOG:
        if product.id == product_id:
            return product
    return None
