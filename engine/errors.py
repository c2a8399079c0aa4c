"""Error taxonomy for catalog search."""

from __future__ import annotations


class CatalogSearchError(Exception):
    pass


class ValidationError(CatalogSearchError, ValueError):
    """Caller-input fault; never reaches the aggregator."""


class MissingTermError(ValidationError):
    def __init__(self, message="term parameter is required"):
        super().__init__(message)


class MalformedNumberError(ValidationError):
    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"invalid {field} parameter")


class ProviderError(CatalogSearchError):
    """Raised by a provider on transport or parse failure of its data source."""


class ProviderFailureError(CatalogSearchError):
    def __init__(self, category, cause: BaseException):
        self.category = category
        self.cause = cause
        label = getattr(category, "value", category)
        super().__init__(f"error searching {label}: {cause}")


class EncodingError(CatalogSearchError):
    pass
