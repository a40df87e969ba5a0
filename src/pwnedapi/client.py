"""
Have I Been Pwned API client.

Implements request builders for the HIBP breach and paste endpoints:
- Breaches for an account
- The full breach catalog, or a single breach by name
- Data classes
- Pastes for an account

Building a request performs no I/O; ``send()`` issues one synchronous GET
and returns a ``SendResult`` holding the decoded value or the error.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import dataclasses
import logging
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar
from urllib.parse import quote

import httpx

from pwnedapi.errors import ApiError, DecodeError, HIBPError, NetworkError
from pwnedapi.models import (
    Breach,
    Paste,
    SendResult,
    breaches_from_json,
    data_classes_from_json,
    pastes_from_json,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BASE_URL = "https://haveibeenpwned.com/api/v3"
DEFAULT_TIMEOUT = 30.0  # seconds

# Printable ASCII only: no CR/LF header injection, nothing httpx would reject
_USER_AGENT_RE = re.compile(r"[\x20-\x7e]+")


def validate_user_agent(user_agent: str) -> str:
    """Check a User-Agent value against HTTP header rules.

    Raises:
        ValueError: If the value is empty or not a valid header value.
    """
    if not isinstance(user_agent, str) or not user_agent.strip():
        raise ValueError("User agent must be a non-empty string")
    if not _USER_AGENT_RE.fullmatch(user_agent):
        raise ValueError(f"User agent contains invalid characters: {user_agent!r}")
    return user_agent


def validate_base_url(base_url: str) -> str:
    """Check that the API root is an absolute http(s) URL.

    Raises:
        ValueError: If the URL cannot be parsed or lacks a scheme or host.
    """
    if not isinstance(base_url, str) or not base_url:
        raise ValueError("Base URL must not be empty")
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise ValueError(f"Invalid base URL {base_url!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError(f"Base URL must be an absolute http(s) URL: {base_url!r}")
    return base_url


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


def _parse_retry_after(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class Client:
    """Client for the Have I Been Pwned API v3.

    Holds the User-Agent sent on every request. Upstream rejects requests
    without a descriptive one, so it is mandatory.

    One connection pool is shared by every request sent through the
    client, so lookups from several threads reuse connections. Call
    ``close()`` (or use the client as a context manager) when done. A
    transport passed in by the caller is never closed here.

    Args:
        user_agent: Identifies the calling application
        base_url: API root (default: the public v3 endpoint)
        timeout: Seconds before a request is abandoned
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``
    """

    user_agent: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    transport: httpx.BaseTransport | None = field(default=None, repr=False, compare=False)
    _http: httpx.Client = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        validate_user_agent(self.user_agent)
        validate_base_url(self.base_url)
        object.__setattr__(self, "_http", httpx.Client(transport=self.transport))

    def close(self) -> None:
        """Close the connection pool, unless the transport belongs to the caller."""
        if self.transport is None:
            self._http.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def url_for(self, *segments: str) -> str:
        """Join path segments onto the base URL, percent-encoding each."""
        path = "/".join(quote(s, safe="@") for s in segments)
        return f"{self.base_url.rstrip('/')}/{path}"

    # =========================================================================
    # Request builders
    # =========================================================================

    def get_breaches_for_account(self, account: str) -> "AccountBreachesRequest":
        """Breaches an account (usually an email address) appears in."""
        return AccountBreachesRequest(client=self, account=account)

    def get_all_breaches(self) -> "AllBreachesRequest":
        """Every breach in the HIBP catalog."""
        return AllBreachesRequest(client=self)

    def get_breach(self, name: str) -> "BreachRequest":
        """A single breach by its name (e.g. 'Adobe')."""
        return BreachRequest(client=self, name=name)

    def get_data_classes(self) -> "DataClassesRequest":
        """All data classes (types of compromised data)."""
        return DataClassesRequest(client=self)

    def get_pastes_for_account(self, account: str) -> "AccountPastesRequest":
        """Pastes an account has appeared in."""
        return AccountPastesRequest(client=self, account=account)


@dataclass(frozen=True)
class _Request(Generic[T]):
    """Common GET/decode behaviour for every endpoint."""

    client: Client

    # Value returned for HTTP 404; endpoints without one report ApiError
    translates_not_found: ClassVar[bool] = False
    not_found_value: ClassVar[Any] = None

    @property
    def url(self) -> str:
        return str(self.build_request().url)

    def _path(self) -> tuple[str, ...]:
        raise NotImplementedError

    def _params(self) -> dict[str, str]:
        return {}

    def _decode(self, data: Any) -> T:
        raise NotImplementedError

    def build_request(self) -> httpx.Request:
        """Build the GET request without sending it."""
        return httpx.Request(
            "GET",
            self.client.url_for(*self._path()),
            params=self._params() or None,
            headers={
                "User-Agent": self.client.user_agent,
                "Accept": "application/json",
            },
            extensions={"timeout": httpx.Timeout(self.client.timeout).as_dict()},
        )

    def send(self) -> SendResult[T]:
        """Perform the request and decode the response.

        Returns:
            SendResult with the decoded value, or with a NetworkError,
            DecodeError or ApiError.
        """
        request = self.build_request()
        logger.debug(f"GET {request.url}")

        try:
            response = self.client._http.send(request)
        except httpx.RequestError as e:
            error = NetworkError(f"Request failed: {e}")
            error.__cause__ = e
            return SendResult(error=error)

        try:
            return SendResult(value=self._handle_response(response))
        except HIBPError as e:
            return SendResult(error=e)

    def _handle_response(self, response: httpx.Response) -> T:
        status = response.status_code

        if response.is_success:
            try:
                data = response.json()
            except ValueError as e:
                raise DecodeError(f"Response is not valid JSON: {response.text[:200]!r}") from e
            return self._decode(data)

        if status == 404 and self.translates_not_found:
            logger.debug(f"Not found: {response.request.url}")
            return self.not_found_value

        retry_after = _parse_retry_after(response.headers.get("Retry-After"))
        if status == 429:
            logger.warning(f"Rate limited. Retry after {retry_after}s")

        raise ApiError(status, response.text[:200], retry_after=retry_after)


@dataclass(frozen=True)
class AccountBreachesRequest(_Request[tuple[Breach, ...]]):
    """GET /breachedaccount/{account}."""

    account: str = ""
    truncate_response: bool = False
    include_unverified: bool = True
    domain: str | None = None

    translates_not_found: ClassVar[bool] = True
    not_found_value: ClassVar[Any] = ()

    def with_truncate(self, truncate: bool = True) -> "AccountBreachesRequest":
        """Only return breach names."""
        return dataclasses.replace(self, truncate_response=truncate)

    def with_unverified(self, include: bool = True) -> "AccountBreachesRequest":
        return dataclasses.replace(self, include_unverified=include)

    def with_domain(self, domain: str) -> "AccountBreachesRequest":
        """Restrict results to breaches of one domain."""
        return dataclasses.replace(self, domain=domain)

    def _path(self) -> tuple[str, ...]:
        return ("breachedaccount", self.account)

    def _params(self) -> dict[str, str]:
        params = {
            "truncateResponse": _bool_param(self.truncate_response),
            "includeUnverified": _bool_param(self.include_unverified),
        }
        if self.domain:
            params["domain"] = self.domain
        return params

    def _decode(self, data: Any) -> tuple[Breach, ...]:
        return breaches_from_json(data)


@dataclass(frozen=True)
class AllBreachesRequest(_Request[tuple[Breach, ...]]):
    """GET /breaches."""

    domain: str | None = None

    def with_domain(self, domain: str) -> "AllBreachesRequest":
        return dataclasses.replace(self, domain=domain)

    def _path(self) -> tuple[str, ...]:
        return ("breaches",)

    def _params(self) -> dict[str, str]:
        return {"domain": self.domain} if self.domain else {}

    def _decode(self, data: Any) -> tuple[Breach, ...]:
        return breaches_from_json(data)


@dataclass(frozen=True)
class BreachRequest(_Request[Breach | None]):
    """GET /breach/{name}. A missing breach decodes to None."""

    name: str = ""

    translates_not_found: ClassVar[bool] = True

    def _path(self) -> tuple[str, ...]:
        return ("breach", self.name)

    def _decode(self, data: Any) -> Breach | None:
        if isinstance(data, list):
            raise DecodeError("Expected a single breach object, got a list")
        return breaches_from_json(data)[0]


@dataclass(frozen=True)
class DataClassesRequest(_Request[tuple[str, ...]]):
    """GET /dataclasses."""

    def _path(self) -> tuple[str, ...]:
        return ("dataclasses",)

    def _decode(self, data: Any) -> tuple[str, ...]:
        return data_classes_from_json(data)


@dataclass(frozen=True)
class AccountPastesRequest(_Request[tuple[Paste, ...]]):
    """GET /pasteaccount/{account}."""

    account: str = ""

    translates_not_found: ClassVar[bool] = True
    not_found_value: ClassVar[Any] = ()

    def _path(self) -> tuple[str, ...]:
        return ("pasteaccount", self.account)

    def _decode(self, data: Any) -> tuple[Paste, ...]:
        return pastes_from_json(data)
