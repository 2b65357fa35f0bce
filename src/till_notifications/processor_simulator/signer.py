from email.utils import formatdate

from till_notifications.utils.crypto import generate_signature


class NotificationSigner:
    """Signs outgoing status notifications the way the Till gateway does (HMAC-SHA512)."""

    def __init__(self, secret: str, content_type: str = "application/json; charset=utf-8"):
        self.secret = secret
        self.content_type = content_type

    def sign(self, method: str, request_uri: str, body: bytes, date: str | None = None) -> str:
        if date is None:
            date = formatdate(usegmt=True)
        return generate_signature(self.secret, method, body, self.content_type, date, request_uri)

    def headers(self, method: str, request_uri: str, body: bytes, date: str | None = None) -> dict[str, str]:
        """Content-Type, X-Date and X-Signature headers for one delivery."""
        if date is None:
            date = formatdate(usegmt=True)
        return {
            "Content-Type": self.content_type,
            "X-Date": date,
            "X-Signature": self.sign(method, request_uri, body, date),
        }
