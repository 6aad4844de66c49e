# inventory/exceptions.py


class InventoryError(Exception):
    """Base class for every error raised by the inventory package."""


class CsvLoadError(InventoryError):
    """A CSV seed file could not be read."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load CSV from {path}: {reason}")


class RecordValidationError(InventoryError):
    """User input for a new record failed validation.

    The message is meant to be shown to the user as-is.
    """


class ReturnReasonRequiredError(RecordValidationError):
    pass


class InvalidTransitionError(InventoryError):
    def __init__(self, action: str, status):
        self.action = action
        self.status = status
        super().__init__(f"Action '{action}' is not allowed while status is {status.value}.")


class InventoryLockedError(InventoryError):
    """Records cannot change once the final approval is given."""
