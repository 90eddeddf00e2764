"""Error taxonomy for CloudFront inventory operations."""


class CloudFrontInventoryError(Exception):
    """Base class for errors raised by cfinventory."""


class NotFoundError(CloudFrontInventoryError):
    """The requested distribution does not exist."""

    def __init__(self, distribution_id: str):
        super().__init__(f"Distribution not found: {distribution_id}")
        self.distribution_id = distribution_id


class TransportError(CloudFrontInventoryError):
    """A CloudFront API call failed."""

    def __init__(self, operation: str, message: str, code: str | None = None):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.code = code


class MalformedUpstreamError(CloudFrontInventoryError, ValueError):
    """CloudFront returned a response shape we cannot interpret."""
