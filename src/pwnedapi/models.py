"""
Data models for Have I Been Pwned API responses.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Generic, TypeVar

from pwnedapi.errors import DecodeError, HIBPError

T = TypeVar("T")

_MISSING = object()


def _get(data: dict[str, Any], key: str, kind: type | tuple[type, ...], default: Any) -> Any:
    """Fetch an optional field, checking its JSON type when present."""
    value = data.get(key, _MISSING)
    if value is _MISSING or value is None:
        return default
    # bool is an int subclass; a flag is never a count
    if isinstance(value, bool) and kind is int:
        raise DecodeError(f"Field {key!r} should be a number, got {value!r}")
    if not isinstance(value, kind):
        raise DecodeError(f"Field {key!r} has unexpected type: {value!r}")
    return value


def _require_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def parse_date(date_str: str | None) -> date | None:
    if not date_str:
        return None
    try:
        return date.fromisoformat(date_str[:10])
    except ValueError:
        return None


def parse_datetime(date_str: str | None) -> datetime | None:
    if not date_str:
        return None
    try:
        # HIBP uses ISO format with a trailing Z
        return datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except ValueError:
        return None


def _format_datetime(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Breach:
    """Represents a single data breach from HIBP."""

    name: str
    title: str = ""
    domain: str = ""
    breach_date: date | None = None
    added_date: datetime | None = None
    modified_date: datetime | None = None
    pwn_count: int = 0
    description: str = ""
    logo_path: str | None = None
    data_classes: tuple[str, ...] = ()
    is_verified: bool = False
    is_fabricated: bool = False
    is_sensitive: bool = False
    is_retired: bool = False
    is_spam_list: bool = False
    is_malware: bool = False
    is_subscription_free: bool = False

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Breach":
        """Create Breach from HIBP API response.

        Only ``Name`` is mandatory; truncated responses carry nothing else.

        Raises:
            DecodeError: If the object is missing ``Name`` or a field has
                the wrong JSON type.
        """
        data = _require_object(data)
        name = data.get("Name")
        if not isinstance(name, str):
            raise DecodeError(f"Breach is missing a Name: {data!r}")

        data_classes = _get(data, "DataClasses", list, [])
        if not all(isinstance(dc, str) for dc in data_classes):
            raise DecodeError(f"DataClasses must be strings: {data_classes!r}")

        return cls(
            name=name,
            title=_get(data, "Title", str, ""),
            domain=_get(data, "Domain", str, ""),
            breach_date=parse_date(_get(data, "BreachDate", str, None)),
            added_date=parse_datetime(_get(data, "AddedDate", str, None)),
            modified_date=parse_datetime(_get(data, "ModifiedDate", str, None)),
            pwn_count=_get(data, "PwnCount", int, 0),
            description=_get(data, "Description", str, ""),
            logo_path=_get(data, "LogoPath", str, None),
            data_classes=tuple(data_classes),
            is_verified=_get(data, "IsVerified", bool, False),
            is_fabricated=_get(data, "IsFabricated", bool, False),
            is_sensitive=_get(data, "IsSensitive", bool, False),
            is_retired=_get(data, "IsRetired", bool, False),
            is_spam_list=_get(data, "IsSpamList", bool, False),
            is_malware=_get(data, "IsMalware", bool, False),
            is_subscription_free=_get(data, "IsSubscriptionFree", bool, False),
        )

    def to_api_dict(self) -> dict[str, Any]:
        """Convert back to the HIBP API JSON shape."""
        return {
            "Name": self.name,
            "Title": self.title,
            "Domain": self.domain,
            "BreachDate": self.breach_date.isoformat() if self.breach_date else None,
            "AddedDate": _format_datetime(self.added_date),
            "ModifiedDate": _format_datetime(self.modified_date),
            "PwnCount": self.pwn_count,
            "Description": self.description,
            "LogoPath": self.logo_path,
            "DataClasses": list(self.data_classes),
            "IsVerified": self.is_verified,
            "IsFabricated": self.is_fabricated,
            "IsSensitive": self.is_sensitive,
            "IsRetired": self.is_retired,
            "IsSpamList": self.is_spam_list,
            "IsMalware": self.is_malware,
            "IsSubscriptionFree": self.is_subscription_free,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "title": self.title,
            "domain": self.domain,
            "breach_date": self.breach_date.isoformat() if self.breach_date else None,
            "added_date": self.added_date.isoformat() if self.added_date else None,
            "modified_date": self.modified_date.isoformat() if self.modified_date else None,
            "pwn_count": self.pwn_count,
            "description": self.description,
            "logo_path": self.logo_path,
            "data_classes": list(self.data_classes),
            "is_verified": self.is_verified,
            "is_fabricated": self.is_fabricated,
            "is_sensitive": self.is_sensitive,
            "is_retired": self.is_retired,
            "is_spam_list": self.is_spam_list,
            "is_malware": self.is_malware,
            "is_subscription_free": self.is_subscription_free,
        }


@dataclass(frozen=True)
class Paste:
    """Represents a paste containing the account."""

    source: str
    id: str
    title: str | None = None
    date: datetime | None = None
    email_count: int = 0

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Paste":
        """Create Paste from HIBP API response."""
        data = _require_object(data)
        return cls(
            source=_get(data, "Source", str, ""),
            id=_get(data, "Id", str, ""),
            title=_get(data, "Title", str, None),
            date=parse_datetime(_get(data, "Date", str, None)),
            email_count=_get(data, "EmailCount", int, 0),
        )

    def to_api_dict(self) -> dict[str, Any]:
        return {
            "Source": self.source,
            "Id": self.id,
            "Title": self.title,
            "Date": _format_datetime(self.date),
            "EmailCount": self.email_count,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "source": self.source,
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat() if self.date else None,
            "email_count": self.email_count,
        }


def breaches_from_json(data: Any) -> tuple[Breach, ...]:
    """Decode a breach list, or a single breach object, into records."""
    if isinstance(data, list):
        return tuple(Breach.from_api_response(item) for item in data)
    if isinstance(data, dict):
        return (Breach.from_api_response(data),)
    raise DecodeError(f"Improperly formatted breach response: {data!r}")


def pastes_from_json(data: Any) -> tuple[Paste, ...]:
    if not isinstance(data, list):
        raise DecodeError(f"Expected a list of pastes, got {type(data).__name__}")
    return tuple(Paste.from_api_response(item) for item in data)


def data_classes_from_json(data: Any) -> tuple[str, ...]:
    if not isinstance(data, list) or not all(isinstance(dc, str) for dc in data):
        raise DecodeError(f"Failed to parse data classes into a list of strings: {data!r}")
    return tuple(data)


@dataclass(frozen=True)
class SendResult(Generic[T]):
    """Outcome of sending a request: either a value or an error.

    Failures are returned rather than raised so callers decide how to
    recover. ``unwrap()`` gives the exception-raising behaviour.
    """

    value: T | None = None
    error: HIBPError | None = field(default=None)

    @property
    def ok(self) -> bool:
        """True when the request succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return default if self.error is not None else self.value  # type: ignore[return-value]
