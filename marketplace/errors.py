"""Custom exceptions for marketplace."""


class MarketError(Exception):
    """Base exception for all marketplace errors."""

    pass


class NotFoundError(MarketError):
    """Raised when an id does not resolve, or resolves to the wrong owner."""

    def __init__(self, kind: str, entity_id, reason: str | None = None):
        self.kind = kind
        self.entity_id = entity_id
        msg = f"{kind.capitalize()} not found: {entity_id}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class ValidationError(MarketError):
    """Raised when an argument is out of range or empty."""

    pass


class InsufficientStockError(MarketError):
    """Raised when a vendor holds less stock than requested."""

    def __init__(self, product_id: int, available: int, requested: int):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for product {product_id}: have {available}, need {requested}"
        )


class InvalidStateError(MarketError):
    """Raised when an entity's status forbids the attempted action."""

    def __init__(self, kind: str, entity_id, status, action: str):
        self.kind = kind
        self.entity_id = entity_id
        self.status = status
        self.action = action
        label = getattr(status, "value", status)
        super().__init__(f"Cannot {action}: {kind} {entity_id} is {label}")
