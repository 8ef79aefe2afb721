"""Error kinds raised by the services and mapped to HTTP responses."""


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(StorefrontError):
    """Raised when required input is missing or malformed."""

    status_code = 400


class ItemNotFound(StorefrontError):
    status_code = 404

    def __init__(self, item_id: int, name: str | None = None):
        self.item_id = item_id
        super().__init__(f"Item {name or item_id} not found")


class OrderNotFound(StorefrontError):
    status_code = 404

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__("Order not found")


class PriceRecordNotFound(StorefrontError):
    status_code = 404

    def __init__(self, price_id: int):
        self.price_id = price_id
        super().__init__("Price record not found")


class ItemUnavailable(StorefrontError):
    status_code = 400

    def __init__(self, item_id: int, name: str | None = None):
        self.item_id = item_id
        super().__init__(f"Item {name or item_id} is out of stock")


class PriceMismatch(StorefrontError):
    """Raised when a submitted unit price differs from the catalog price."""

    status_code = 400

    def __init__(self, item_id: int, name: str | None = None):
        self.item_id = item_id
        super().__init__(f"Price mismatch for item {name or item_id}")


class InvalidStatus(StorefrontError):
    status_code = 400

    def __init__(self, status: str | None):
        self.status = status
        super().__init__("Invalid status value")


class AlreadyCancelled(StorefrontError):
    status_code = 400

    def __init__(self):
        super().__init__("Order is already cancelled")


class CannotCancelDelivered(StorefrontError):
    status_code = 400

    def __init__(self):
        super().__init__("Cannot cancel delivered order")


class CannotCancelShipped(StorefrontError):
    status_code = 400

    def __init__(self):
        super().__init__("Cannot cancel shipped order. Please contact support.")


class Unauthenticated(StorefrontError):
    status_code = 401


class AccessDenied(StorefrontError):
    status_code = 403


class ConcurrentModification(StorefrontError):
    """Raised when the stored order changed between read and save."""

    status_code = 409

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__("Order was modified by another request, retry")


class StoreFailure(StorefrontError):
    """Unclassified persistence or catalog failure, never shown in detail."""

    status_code = 500

    def __init__(self, message: str = "Server error, please try again later"):
        super().__init__(message)
