"""Lazy JSON decoding of a status notification and lookups into it."""

import calendar
import json
import logging
from collections.abc import Callable
from datetime import MAXYEAR, MINYEAR, date
from typing import Any

from till_notifications.models.notification import JSONValue, RawNotification
from till_notifications.notification.errors import (
    InvalidPayloadError,
    MalformedExpiryError,
    MissingBodyError,
    NotificationError,
)

logger = logging.getLogger(__name__)

# Accessor name -> dotted path into the notification document.
FIELD_PATHS: dict[str, str] = {
    "transaction_reference": "uuid",
    "transaction_id": "merchantTransactionId",
    "transaction_status": "result",
    "transaction_type": "transactionType",
    "payment_method": "paymentMethod",
    "amount": "amount",
    "currency": "currency",
    "message": "message",
    "code": "code",
    "card_holder": "returnData.cardHolder",
    "card_type": "returnData.type",
    "expiry_month": "returnData.expiryMonth",
    "expiry_year": "returnData.expiryYear",
    "first_six_digits": "returnData.firstSixDigits",
    "last_four_digits": "returnData.lastFourDigits",
    "bin_digits": "returnData.binDigits",
    "first_name": "customer.firstName",
    "last_name": "customer.lastName",
    "email": "customer.email",
    "billing_phone": "customer.billingPhone",
}


class NotificationParser:
    """Read-only view over the JSON body of one status notification.

    The body is decoded on first use and the result (or the failure) is kept
    for the lifetime of the parser. Field lookups never raise for absent or
    oddly shaped optional fields; they fall back to a default instead.
    """

    def __init__(
        self,
        notification: RawNotification,
        decoder: Callable[[bytes], Any] = json.loads,
    ):
        self.notification = notification
        self._decoder = decoder
        self._data: dict[str, JSONValue] | None = None
        self._error: NotificationError | None = None

    def get_data(self) -> dict[str, JSONValue]:
        """Decode the body once. Raises MissingBodyError or InvalidPayloadError."""
        if self._data is not None:
            return self._data
        if self._error is not None:
            raise self._error

        content = self.notification.body
        if not content:
            self._error = MissingBodyError()
            raise self._error

        try:
            data = self._decoder(content)
        except (ValueError, RecursionError) as e:
            self._error = InvalidPayloadError(
                getattr(e, "msg", str(e)),
                lineno=getattr(e, "lineno", None),
                colno=getattr(e, "colno", None),
                pos=getattr(e, "pos", None),
            )
            logger.debug("Rejected notification body: %s", self._error)
            raise self._error from e

        if not isinstance(data, dict):
            self._error = InvalidPayloadError(
                f"expected a JSON object, got {type(data).__name__}"
            )
            raise self._error

        self._data = data
        return self._data

    def get_value(self, path: str, default: Any = None) -> Any:
        """Walk ``path`` (dot separated) through the document.

        Returns ``default`` as soon as a step is missing, null, or lands on
        something that cannot be indexed by the next key.
        """
        node: Any = self.get_data()
        for key in path.split("."):
            if isinstance(node, dict):
                node = node.get(key)
            elif isinstance(node, list) and key.isdecimal() and int(key) < len(node):
                node = node[int(key)]
            else:
                return default
            if node is None:
                return default
        return node

    def fields(self) -> dict[str, Any]:
        return {name: self.get_value(path) for name, path in FIELD_PATHS.items()}

    def get_transaction_reference(self) -> str | None:
        """Gateway-assigned unique identifier for the transaction."""
        return self.get_value(FIELD_PATHS["transaction_reference"])

    def get_transaction_id(self) -> str | None:
        return self.get_value(FIELD_PATHS["transaction_id"])

    def get_transaction_status(self) -> str | None:
        """``OK``, ``PENDING`` or ``ERROR``; ``None`` when the payload omits it."""
        return self.get_value(FIELD_PATHS["transaction_status"])

    def get_card_reference(self) -> str | None:
        """Reference to pass as ``referenceUuid`` on a follow-up transaction."""
        return self.get_transaction_reference()

    def get_message(self) -> str | None:
        return self.get_value(FIELD_PATHS["message"])

    def get_code(self) -> str | None:
        return self.get_value(FIELD_PATHS["code"])

    def get_transaction_type(self) -> str | None:
        return self.get_value(FIELD_PATHS["transaction_type"])

    def get_payment_method(self) -> str | None:
        return self.get_value(FIELD_PATHS["payment_method"])

    def get_amount(self) -> str | None:
        return self.get_value(FIELD_PATHS["amount"])

    def get_currency(self) -> str | None:
        return self.get_value(FIELD_PATHS["currency"])

    def get_card_holder(self) -> str | None:
        return self.get_value(FIELD_PATHS["card_holder"])

    def get_card_type(self) -> str | None:
        return self.get_value(FIELD_PATHS["card_type"])

    def get_expiry_month(self) -> str | None:
        return self.get_value(FIELD_PATHS["expiry_month"])

    def get_expiry_year(self) -> str | None:
        return self.get_value(FIELD_PATHS["expiry_year"])

    def get_expiry_date(self) -> date:
        """Last day of the card's expiry month.

        Raises MalformedExpiryError when month or year is missing, not a whole
        number, or out of range.
        """
        month = _as_int(self.get_expiry_month(), "expiryMonth")
        year = _as_int(self.get_expiry_year(), "expiryYear")
        if not 1 <= month <= 12:
            raise MalformedExpiryError(f"expiryMonth out of range: {month}")
        if not MINYEAR <= year <= MAXYEAR:
            raise MalformedExpiryError(f"expiryYear out of range: {year}")
        last_day = calendar.monthrange(year, month)[1]
        return date(year, month, last_day)

    def get_first_six_digits(self) -> str | None:
        return self.get_value(FIELD_PATHS["first_six_digits"])

    def get_last_four_digits(self) -> str | None:
        return self.get_value(FIELD_PATHS["last_four_digits"])

    def get_bin_digits(self) -> str | None:
        return self.get_value(FIELD_PATHS["bin_digits"])

    def get_first_name(self) -> str | None:
        return self.get_value(FIELD_PATHS["first_name"])

    def get_last_name(self) -> str | None:
        return self.get_value(FIELD_PATHS["last_name"])

    def get_email(self) -> str | None:
        return self.get_value(FIELD_PATHS["email"])

    def get_billing_phone(self) -> str | None:
        return self.get_value(FIELD_PATHS["billing_phone"])


def _as_int(value: Any, name: str) -> int:
    if value is None:
        raise MalformedExpiryError(f"{name} is missing")
    if isinstance(value, bool):
        raise MalformedExpiryError(f"{name} is not numeric: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    raise MalformedExpiryError(f"{name} is not numeric: {value!r}")
