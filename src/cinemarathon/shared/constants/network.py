"""
Network Configuration Constants

HTTP status codes and client defaults shared by the source adapters.
"""


class NetworkConfig:
    """Network configuration constants."""

    DEFAULT_TIMEOUT = 10.0  # seconds per outbound request
    DEFAULT_RETRIES = 3
    RETRY_DELAY = 1.0

    # Token bucket polling interval while waiting for capacity
    RATE_LIMIT_POLL_INTERVAL = 0.1
    DEFAULT_TOKEN_BUCKET_CAPACITY = 35
    DEFAULT_TOKEN_REFILL_RATE = 35.0


class HTTPStatusCodes:
    """HTTP status codes handled by the source adapters."""

    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    TOO_MANY_REQUESTS = 429

    @staticmethod
    def is_server_error(status_code: int) -> bool:
        return 500 <= status_code < 600
