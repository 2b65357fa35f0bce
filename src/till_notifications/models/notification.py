from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from requests.structures import CaseInsensitiveDict

JSONValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]


class TransactionType(str, Enum):
    DEBIT = "DEBIT"
    CAPTURE = "CAPTURE"
    DEREGISTER = "DEREGISTER"
    PREAUTHORIZE = "PREAUTHORIZE"
    REFUND = "REFUND"
    REGISTER = "REGISTER"
    VOID = "VOID"
    CHARGEBACK = "CHARGEBACK"
    CHARGEBACK_REVERSAL = "CHARGEBACK-REVERSAL"
    PAYOUT = "PAYOUT"


class TransactionResult(str, Enum):
    OK = "OK"
    PENDING = "PENDING"
    ERROR = "ERROR"


class CapturedHeaders(CaseInsensitiveDict):
    """Case-insensitive header mapping that cannot change once captured."""

    def __init__(self, data=None, **kwargs):
        self._sealed = False
        super().__init__(data, **kwargs)
        self._sealed = True

    def __setitem__(self, key, value):
        if self._sealed:
            raise TypeError("captured notification headers are read-only")
        super().__setitem__(key, value)

    def __delitem__(self, key):
        raise TypeError("captured notification headers are read-only")


@dataclass(frozen=True)
class RawNotification:
    """Inbound HTTP call exactly as received, captured once per request."""

    method: str
    uri: str  # request target including the query string
    headers: CapturedHeaders = field(default_factory=CapturedHeaders)
    body: bytes = b""

    def __post_init__(self):
        object.__setattr__(self, "method", self.method.upper())
        if not isinstance(self.headers, CapturedHeaders):
            object.__setattr__(self, "headers", CapturedHeaders(self.headers))
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))
        elif self.body is None:
            object.__setattr__(self, "body", b"")

    @classmethod
    def capture(
        cls,
        method: str,
        uri: str,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        body: bytes | str | None = None,
    ) -> "RawNotification":
        return cls(
            method=method,
            uri=uri,
            headers=CapturedHeaders(headers or {}),
            body=body or b"",
        )


@dataclass(frozen=True)
class VerificationVerdict:
    valid: bool
    reason: str
    canonical_string: str | None = None
    expected_signature: str | None = None

    def __bool__(self) -> bool:
        return self.valid


@dataclass(frozen=True)
class NotificationResponse:
    """The acknowledgement the gateway expects before it stops redelivering."""

    status_code: int = 200
    content_type: str = "text/plain"
    body: bytes = b"OK"
