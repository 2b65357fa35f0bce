import logging

from till_notifications.models.notification import RawNotification, VerificationVerdict
from till_notifications.utils.crypto import (
    build_canonical_string,
    sign_canonical_string,
    signatures_match,
)

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Signature"
DATE_HEADER = "X-Date"
CONTENT_TYPE_HEADER = "Content-Type"


class SignatureVerifier:
    """Checks the HMAC-SHA512 signature the gateway attaches to a notification.

    Verification is fail-closed: every problem (missing header, missing key,
    mismatch) produces a negative verdict rather than an exception.
    """

    def __init__(self, notification: RawNotification, secret_key: str | bytes | None):
        self.notification = notification
        self._secret_key = secret_key

    def __repr__(self) -> str:
        return f"SignatureVerifier({self.notification.method} {self.notification.uri})"

    def verify(self) -> VerificationVerdict:
        headers = self.notification.headers
        signature = headers.get(SIGNATURE_HEADER)
        date = headers.get(DATE_HEADER)
        content_type = headers.get(CONTENT_TYPE_HEADER)

        missing = [
            name for name, value in (
                (SIGNATURE_HEADER, signature),
                (DATE_HEADER, date),
                (CONTENT_TYPE_HEADER, content_type),
            )
            if not value or not isinstance(value, str)
        ]
        if missing:
            return self._reject(f"missing headers: {', '.join(missing)}")
        if not self._secret_key or not isinstance(self._secret_key, (str, bytes)):
            return self._reject("no secret key configured")

        canonical = build_canonical_string(
            self.notification.method,
            self.notification.body,
            content_type,
            date,
            self.notification.uri,
        )
        try:
            expected = sign_canonical_string(canonical, self._secret_key)
        except UnicodeError:
            return self._reject("signature inputs are not encodable", canonical)

        if not signatures_match(expected, signature):
            return self._reject("signature mismatch", canonical, expected)

        logger.debug("Signature verified for %s %s", self.notification.method, self.notification.uri)
        return VerificationVerdict(True, "signature verified", canonical, expected)

    def is_signature_valid(self) -> bool:
        return self.verify().valid

    def _reject(
        self,
        reason: str,
        canonical: str | None = None,
        expected: str | None = None,
    ) -> VerificationVerdict:
        logger.info(
            "Rejected notification signature for %s %s: %s",
            self.notification.method,
            self.notification.uri,
            reason,
        )
        return VerificationVerdict(False, reason, canonical, expected)
