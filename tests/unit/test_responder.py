import io

import pytest

from till_notifications.models.notification import VerificationVerdict
from till_notifications.notification.errors import UnauthorizedNotificationError
from till_notifications.notification.responder import AcknowledgementResponder
from till_notifications.notification.verifier import SignatureVerifier
from till_notifications.utils.factories import NotificationFactory


class TestAcknowledge:
    """Tests for AcknowledgementResponder.acknowledge()."""

    @pytest.mark.unit
    def test_verified_notification_writes_ok(self, signed_notification, notification_secret):
        out = io.BytesIO()
        responder = AcknowledgementResponder(SignatureVerifier(signed_notification, notification_secret))

        response = responder.acknowledge(out)

        assert out.getvalue() == b"OK"
        assert not out.getvalue().endswith(b"\n")
        assert response.status_code == 200
        assert response.content_type == "text/plain"
        assert response.body == b"OK"

    @pytest.mark.unit
    def test_unverified_notification_raises_and_writes_nothing(self, notification_secret):
        raw = NotificationFactory.create_raw("some-other-secret")
        out = io.BytesIO()
        responder = AcknowledgementResponder(SignatureVerifier(raw, notification_secret))

        with pytest.raises(UnauthorizedNotificationError) as exc_info:
            responder.acknowledge(out)

        assert out.getvalue() == b""
        assert exc_info.value.reason == "signature mismatch"

    @pytest.mark.unit
    def test_unsigned_notification_raises(self, notification_secret):
        raw = NotificationFactory.create_raw(None)
        responder = AcknowledgementResponder(SignatureVerifier(raw, notification_secret))
        assert responder.is_successful() is False
        with pytest.raises(UnauthorizedNotificationError):
            responder.acknowledge()

    @pytest.mark.unit
    def test_accepts_precomputed_verdict(self):
        responder = AcknowledgementResponder(VerificationVerdict(True, "signature verified"))
        assert responder.acknowledge().body == b"OK"

        rejected = AcknowledgementResponder(VerificationVerdict(False, "missing headers: X-Date"))
        with pytest.raises(UnauthorizedNotificationError):
            rejected.acknowledge()

    @pytest.mark.unit
    def test_success_reflects_signature_not_transaction_result(self, notification_secret):
        raw = NotificationFactory.create_raw(notification_secret, result="ERROR")
        responder = AcknowledgementResponder(SignatureVerifier(raw, notification_secret))
        assert responder.is_successful() is True
        assert responder.acknowledge().body == b"OK"
