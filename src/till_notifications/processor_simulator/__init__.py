from .engine import NotificationDeliveryEngine
from .retry import RedeliveryPolicy
from .logger import DeliveryLogger
from .signer import NotificationSigner

__all__ = [
    "NotificationDeliveryEngine",
    "RedeliveryPolicy",
    "DeliveryLogger",
    "NotificationSigner",
]
