"""Order status values and the bucket every view and counter groups them by."""

from enum import Enum

from protean.exceptions import ValidationError


class OrderStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PROCESSING = "processing"
    COMPLETED = "completed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value) -> "OrderStatus":
        """Read a status from free text, ignoring case and surrounding whitespace."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            allowed = ", ".join(status.value for status in cls)
            raise ValidationError({"status": [f"Unknown order status '{value}'. Expected one of: {allowed}"]})

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


class StatusBucket(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.DELIVERED, OrderStatus.CANCELLED})

_BUCKETS = {
    OrderStatus.PENDING: StatusBucket.PENDING,
    OrderStatus.APPROVED: StatusBucket.PROCESSING,
    OrderStatus.PROCESSING: StatusBucket.PROCESSING,
    OrderStatus.COMPLETED: StatusBucket.DONE,
    OrderStatus.DELIVERED: StatusBucket.DONE,
    OrderStatus.CANCELLED: StatusBucket.CANCELLED,
}

# What a tailor sees on the "pending" page
OPEN_BUCKETS = frozenset({StatusBucket.PENDING, StatusBucket.PROCESSING})


def bucket_of(status) -> StatusBucket:
    """Classify a status (enum or free text) into its bucket."""
    return _BUCKETS[OrderStatus.parse(status)]
