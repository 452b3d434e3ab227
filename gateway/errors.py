# gateway/errors.py - Error taxonomy for the AI request gateway


class GatewayError(Exception):
    """Base class for errors raised while handling a gateway request."""
    status_code = 500


class RateLimitExceeded(GatewayError):
    """Caller used up its quota for the current window."""
    status_code = 429

    def __init__(self, remaining: int, reset_time: float):
        super().__init__("Rate limit exceeded")
        self.remaining = remaining
        self.reset_time = reset_time


class InvalidRequestError(GatewayError):
    """Malformed body or an input over its size cap."""
    status_code = 400


class ConfigurationError(GatewayError):
    """Server is missing configuration needed to call the upstream API."""
    status_code = 500


class UpstreamError(GatewayError):
    """Upstream call failed, timed out, or returned an unusable reply."""
    status_code = 500
