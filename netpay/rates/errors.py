class RateFetchError(RuntimeError):
    """Raised when the rate-discovery service cannot be reached or answers with an error."""


class RateResponseError(ValueError):
    """Raised when the rate-discovery reply is not a usable rate table."""
