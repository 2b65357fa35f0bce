from .notification import (
    CapturedHeaders,
    JSONValue,
    NotificationResponse,
    RawNotification,
    TransactionResult,
    TransactionType,
    VerificationVerdict,
)
from .delivery import DeliveryAttempt

__all__ = [
    "JSONValue", "CapturedHeaders", "RawNotification", "VerificationVerdict", "NotificationResponse",
    "TransactionType", "TransactionResult",
    "DeliveryAttempt",
]
