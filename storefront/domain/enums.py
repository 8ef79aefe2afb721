# storefront/domain/enums.py
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"

    @classmethod
    def parse(cls, value: str | None) -> "OrderStatus | None":
        """Zwraca enumerant dla wartosci z requestu albo None gdy nieznana."""
        try:
            return cls(value)
        except ValueError:
            return None


class PaymentMethod(str, Enum):
    CREDIT_CARD = "Credit Card"
    PAYPAL = "PayPal"
    BANK_TRANSFER = "Bank Transfer"
    CASH_ON_DELIVERY = "Cash on Delivery"


class Availability(str, Enum):
    IN_STOCK = "In Stock"
    OUT_OF_STOCK = "Out of Stock"


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class CancelledBy(str, Enum):
    USER = "user"
    ADMIN = "admin"
