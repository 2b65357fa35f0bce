from typing import BinaryIO

from till_notifications.models.notification import NotificationResponse, VerificationVerdict
from till_notifications.notification.errors import UnauthorizedNotificationError
from till_notifications.notification.verifier import SignatureVerifier


class AcknowledgementResponder:
    """Acknowledges receipt of a status notification.

    Success here means the signature checked out. It says nothing about
    whether the transaction itself was approved.
    """

    RESPONSE_MESSAGE = b"OK"

    def __init__(self, verification: SignatureVerifier | VerificationVerdict):
        self._verification = verification

    def verdict(self) -> VerificationVerdict:
        if isinstance(self._verification, VerificationVerdict):
            return self._verification
        return self._verification.verify()

    def is_successful(self) -> bool:
        return self.verdict().valid

    def acknowledge(self, out: BinaryIO | None = None) -> NotificationResponse:
        """Write the ``OK`` token to ``out`` and return the response to send.

        Raises UnauthorizedNotificationError, without writing anything, when
        the signature did not verify.
        """
        verdict = self.verdict()
        if not verdict.valid:
            raise UnauthorizedNotificationError(reason=verdict.reason)

        if out is not None:
            out.write(self.RESPONSE_MESSAGE)
        return NotificationResponse(body=self.RESPONSE_MESSAGE)
