"""Project-wide custom exception types."""


class FeedbackSourceError(RuntimeError):
    """Raised when a feedback snapshot cannot be read or is not a JSON array."""

    def __init__(self, message: str) -> None:  # noqa: D401 – simple constructor
        super().__init__(message)


class CatalogError(RuntimeError):
    """Raised when a department catalog cannot be read or is malformed."""

    def __init__(self, message: str) -> None:  # noqa: D401 – simple constructor
        super().__init__(message)


class UnknownDepartmentError(KeyError):
    """Raised when a department key is not present in the catalog."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown department: {self.key}"
