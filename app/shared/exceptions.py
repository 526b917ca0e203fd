class AppError(Exception):
    """Base class for failures surfaced to API callers as a generic 500."""


class FetchError(AppError):
    """The remote dataset could not be fetched or was not a JSON array."""


class StoreError(AppError):
    """A query, aggregation or insert against MongoDB failed."""
