import logging
import threading

from till_notifications.models.delivery import DeliveryAttempt

log = logging.getLogger(__name__)


class DeliveryLogger:
    """Thread-safe record of notification delivery attempts."""

    def __init__(self):
        self._attempts: list[DeliveryAttempt] = []
        self._lock = threading.Lock()

    def log(self, attempt: DeliveryAttempt) -> None:
        with self._lock:
            self._attempts.append(attempt)
        if attempt.acknowledged:
            log.info("Delivered %s to %s", attempt.transaction_reference, attempt.url)
        else:
            log.warning(
                "Delivery of %s to %s not acknowledged: status=%s error=%s",
                attempt.transaction_reference,
                attempt.url,
                attempt.status_code,
                attempt.error,
            )

    def get_attempts(self, transaction_reference: str | None = None) -> list[DeliveryAttempt]:
        with self._lock:
            if transaction_reference is None:
                return list(self._attempts)
            return [a for a in self._attempts if a.transaction_reference == transaction_reference]

    def get_unacknowledged_attempts(self) -> list[DeliveryAttempt]:
        with self._lock:
            return [a for a in self._attempts if not a.acknowledged]

    def clear(self) -> None:
        with self._lock:
            self._attempts.clear()
