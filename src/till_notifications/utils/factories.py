import json
import uuid
from email.utils import formatdate

from till_notifications.models.notification import RawNotification, TransactionResult, TransactionType
from till_notifications.utils.crypto import generate_signature

DEFAULT_CONTENT_TYPE = "application/json; charset=utf-8"


class NotificationFactory:
    """Factory for Till-style status notification payloads and signed requests."""

    @staticmethod
    def create_payload(
        transaction_type: str = TransactionType.DEBIT.value,
        result: str = TransactionResult.OK.value,
        **overrides,
    ) -> dict:
        transaction_reference = overrides.pop("uuid", uuid.uuid4().hex[:20])
        payload = {
            "result": result,
            "uuid": transaction_reference,
            "merchantTransactionId": overrides.pop(
                "merchantTransactionId", f"order-{uuid.uuid4().hex[:8]}"
            ),
            "purchaseId": overrides.pop("purchaseId", f"{uuid.uuid4().hex[:8]}-{transaction_reference}"),
            "transactionType": transaction_type,
            "paymentMethod": overrides.pop("paymentMethod", "Creditcard"),
            "amount": str(overrides.pop("amount", "9.99")),
            "currency": overrides.pop("currency", "AUD"),
            "returnData": {
                "_TYPE": "cardData",
                "type": "visa",
                "cardHolder": "Jane Citizen",
                "expiryMonth": "02",
                "expiryYear": "2024",
                "binDigits": "41111111",
                "firstSixDigits": "411111",
                "lastFourDigits": "1111",
            },
            "customer": {
                "firstName": "Jane",
                "lastName": "Citizen",
                "email": "jane@example.com",
                "billingPhone": "+61400000000",
            },
        }

        if result == TransactionResult.ERROR:
            payload["message"] = overrides.pop("message", "The transaction was declined")
            payload["code"] = overrides.pop("code", "2003")

        for group in ("returnData", "customer"):
            if group in overrides:
                group_overrides = overrides.pop(group)
                if group_overrides is None:
                    del payload[group]
                else:
                    payload[group].update(group_overrides)

        payload.update(overrides)
        return payload

    @staticmethod
    def create_body(payload: dict | None = None, **kwargs) -> bytes:
        if payload is None:
            payload = NotificationFactory.create_payload(**kwargs)
        return json.dumps(payload).encode("utf-8")

    @staticmethod
    def create_raw(
        secret: str | None,
        body: bytes | None = None,
        method: str = "POST",
        uri: str = "/notify",
        content_type: str = DEFAULT_CONTENT_TYPE,
        date: str | None = None,
        **payload_kwargs,
    ) -> RawNotification:
        """Build a RawNotification, signed with ``secret`` unless it is None."""
        if body is None:
            body = NotificationFactory.create_body(**payload_kwargs)
        if date is None:
            date = formatdate(usegmt=True)

        headers = {"Content-Type": content_type, "X-Date": date}
        if secret is not None:
            headers["X-Signature"] = generate_signature(
                secret, method, body, content_type, date, uri
            )
        return RawNotification.capture(method, uri, headers, body)
