class PickerError(Exception):
    """Base error carrying a user-facing message and a stable kind."""

    kind: str = "unknown"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PickerError):
    """A required filter is missing."""

    kind = "validation"


class EmptyResultError(PickerError):
    """Filters are valid but the catalog returned nothing."""

    kind = "empty_result"


class UpstreamError(PickerError):
    """Non-success HTTP status or transport failure talking to a catalog."""

    kind = "upstream"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PersistenceError(PickerError):
    """The favorites store could not be read or written."""

    kind = "persistence"
