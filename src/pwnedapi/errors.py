"""
Error types raised (or returned) by the Have I Been Pwned client.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""


class HIBPError(Exception):
    """Base class for all client errors."""


class NetworkError(HIBPError):
    """Connection, DNS or timeout failure before a response was received."""


class DecodeError(HIBPError):
    """Response body is not JSON or does not have the expected shape."""


class ApiError(HIBPError):
    """Upstream answered with a non-success status other than 404."""

    def __init__(
        self,
        status_code: int,
        message: str = "",
        retry_after: int | None = None,
    ):
        self.status_code = status_code
        self.message = message
        self.retry_after = retry_after
        super().__init__(f"HTTP {status_code}: {message}" if message else f"HTTP {status_code}")


# Names used by older callers
RequestError = NetworkError
ParseError = DecodeError
