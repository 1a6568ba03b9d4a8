"""Exception types raised by the order repository and its stores."""


class OrderbookError(Exception):
    """Base class for all orderbook errors."""


class ValidationError(OrderbookError):
    """Raised when an order is structurally invalid and must not be persisted."""


class PersistenceError(OrderbookError):
    """Raised when a primary store is unreachable or rejects a write."""


class SyncError(OrderbookError):
    """Background mirror or reconciliation failure.

    Never propagated to callers; the background queue logs and records it.
    """

    def __init__(self, task_name: str, cause: Exception):
        self.task_name = task_name
        self.cause = cause
        super().__init__(f"{task_name}: {cause}")
