class InventoryServiceError(Exception):
    """Base class for failures that are rendered as a JSON error body."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryServiceError):
    """Malformed, missing or out-of-range input."""
    status_code = 400


class NotFound(InventoryServiceError):
    """A referenced parent row does not exist."""
    status_code = 404


class Conflict(InventoryServiceError):
    """A uniqueness constraint rejected the write."""
    status_code = 409


class StorageFailure(InventoryServiceError):
    """Any other error reported by the storage engine."""
    status_code = 500
