"""Shared fixtures for the HIBP client tests."""

from typing import Callable

import httpx
import pytest

from pwnedapi import Client

USER_AGENT = "pwnedapi-tests/1.0"


@pytest.fixture
def breach_payload() -> list[dict]:
    """Two breach records as the API returns them."""
    return [
        {
            "Name": "Adobe",
            "Title": "Adobe",
            "Domain": "adobe.com",
            "BreachDate": "2013-10-04",
            "AddedDate": "2013-12-04T00:00:00Z",
            "ModifiedDate": "2022-05-15T23:52:49Z",
            "PwnCount": 152445165,
            "Description": "In October 2013, 153 million Adobe accounts were breached.",
            "LogoPath": "https://haveibeenpwned.com/Content/Images/PwnedLogos/Adobe.png",
            "DataClasses": ["Email addresses", "Password hints", "Passwords", "Usernames"],
            "IsVerified": True,
            "IsFabricated": False,
            "IsSensitive": False,
            "IsRetired": False,
            "IsSpamList": False,
            "IsMalware": False,
            "IsSubscriptionFree": False,
        },
        {
            "Name": "Gawker",
            "Title": "Gawker",
            "Domain": "gawker.com",
            "BreachDate": "2010-12-11",
            "AddedDate": "2013-12-04T00:00:00Z",
            "ModifiedDate": "2013-12-04T00:00:00Z",
            "PwnCount": 1247574,
            "Description": "In December 2010, Gawker was attacked by the hacker collective Gnosis.",
            "LogoPath": None,
            "DataClasses": ["Email addresses", "Passwords", "Usernames"],
            "IsVerified": True,
            "IsFabricated": False,
            "IsSensitive": False,
            "IsRetired": True,
            "IsSpamList": False,
            "IsMalware": False,
            "IsSubscriptionFree": False,
        },
    ]


@pytest.fixture
def paste_payload() -> list[dict]:
    return [
        {
            "Source": "Pastebin",
            "Id": "8Q0BvKD8",
            "Title": "syslog",
            "Date": "2014-03-04T19:14:54Z",
            "EmailCount": 139,
        },
        {
            "Source": "Pastie",
            "Id": "7152479",
            "Title": None,
            "Date": None,
            "EmailCount": 30,
        },
    ]


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], Client]:
    """Build a Client whose requests are answered by ``handler``."""
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> Client:
        return Client(USER_AGENT, transport=httpx.MockTransport(handler))
    return _make
