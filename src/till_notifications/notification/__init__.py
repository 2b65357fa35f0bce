from .errors import (
    InvalidPayloadError,
    MalformedExpiryError,
    MissingBodyError,
    NotificationError,
    UnauthorizedNotificationError,
)
from .parser import FIELD_PATHS, NotificationParser
from .verifier import SignatureVerifier
from .responder import AcknowledgementResponder

__all__ = [
    "NotificationParser", "FIELD_PATHS",
    "SignatureVerifier",
    "AcknowledgementResponder",
    "NotificationError", "MissingBodyError", "InvalidPayloadError",
    "MalformedExpiryError", "UnauthorizedNotificationError",
]
