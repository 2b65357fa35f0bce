"""Verification and acknowledgement of Till Payments status notifications."""

from till_notifications.models.notification import (
    NotificationResponse,
    RawNotification,
    VerificationVerdict,
)
from till_notifications.notification import (
    AcknowledgementResponder,
    InvalidPayloadError,
    MalformedExpiryError,
    MissingBodyError,
    NotificationError,
    NotificationParser,
    SignatureVerifier,
    UnauthorizedNotificationError,
)

__version__ = "0.1.0"

__all__ = [
    "RawNotification", "VerificationVerdict", "NotificationResponse",
    "NotificationParser", "SignatureVerifier", "AcknowledgementResponder",
    "NotificationError", "MissingBodyError", "InvalidPayloadError",
    "MalformedExpiryError", "UnauthorizedNotificationError",
]
