"""
Have I Been Pwned (HIBP) API client.

Provides request builders for breach, data class and paste lookups
against the HIBP API, returning typed read-only records.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"

from pwnedapi.errors import (
    ApiError,
    DecodeError,
    HIBPError,
    NetworkError,
    ParseError,
    RequestError,
)
from pwnedapi.models import (
    Breach,
    Paste,
    SendResult,
)
from pwnedapi.client import (
    AccountBreachesRequest,
    AccountPastesRequest,
    AllBreachesRequest,
    BreachRequest,
    Client,
    DataClassesRequest,
)

__all__ = [
    "Client",
    "AccountBreachesRequest",
    "AllBreachesRequest",
    "BreachRequest",
    "DataClassesRequest",
    "AccountPastesRequest",
    "Breach",
    "Paste",
    "SendResult",
    "HIBPError",
    "NetworkError",
    "DecodeError",
    "ApiError",
    "RequestError",
    "ParseError",
]
