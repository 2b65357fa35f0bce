import json
import time
import uuid
from datetime import datetime, timezone
from urllib.parse import urlsplit

import requests

from till_notifications.models.delivery import DeliveryAttempt
from till_notifications.processor_simulator.logger import DeliveryLogger
from till_notifications.processor_simulator.retry import RedeliveryPolicy
from till_notifications.processor_simulator.signer import NotificationSigner


def request_target(url: str) -> str:
    """Path plus query string, as the receiving server will see it."""
    parts = urlsplit(url)
    target = parts.path or "/"
    if parts.query:
        target = f"{target}?{parts.query}"
    return target


def _reference_from_body(body: bytes) -> str:
    """``uuid`` of a serialized notification, or ``""`` when it has none."""
    try:
        document = json.loads(body)
    except (ValueError, RecursionError):
        return ""
    if not isinstance(document, dict) or document.get("uuid") is None:
        return ""
    return str(document["uuid"])


class NotificationDeliveryEngine:
    """Delivers signed status notifications to merchant endpoints, redelivering until acknowledged."""

    def __init__(
        self,
        signer: NotificationSigner,
        policy: RedeliveryPolicy,
        logger: DeliveryLogger,
        timeout_seconds: float = 30,
    ):
        self.signer = signer
        self.policy = policy
        self.logger = logger
        self.timeout_seconds = timeout_seconds

    def deliver(self, payload: dict | bytes, url: str, method: str = "POST") -> DeliveryAttempt:
        """Deliver a single notification. Returns the delivery attempt result."""
        if isinstance(payload, bytes):
            body = payload
            transaction_reference = _reference_from_body(body)
        else:
            body = json.dumps(payload).encode("utf-8")
            transaction_reference = str(payload.get("uuid", ""))

        headers = self.signer.headers(method, request_target(url), body)

        start = time.monotonic()
        status_code = None
        response_body = ""
        error = None

        try:
            resp = requests.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self.timeout_seconds,
            )
            status_code = resp.status_code
            response_body = resp.text
        except requests.exceptions.Timeout:
            error = "timeout"
        except requests.exceptions.ConnectionError:
            error = "connection_error"
        except requests.exceptions.RequestException as e:
            error = str(e)

        elapsed_ms = (time.monotonic() - start) * 1000

        attempt = DeliveryAttempt(
            attempt_id=f"att_{uuid.uuid4().hex[:16]}",
            transaction_reference=transaction_reference,
            url=url,
            status_code=status_code,
            timestamp=datetime.now(timezone.utc),
            response_time_ms=elapsed_ms,
            response_body=response_body,
            error=error,
        )
        self.logger.log(attempt)
        return attempt

    def deliver_until_acknowledged(
        self,
        payload: dict | bytes,
        url: str,
        delay_factor: float = 1.0,
    ) -> list[DeliveryAttempt]:
        """Deliver, then redeliver per the policy until the receiver answers ``OK``.

        Args:
            payload: Notification document, or an already serialized body.
            url: The merchant notification URL.
            delay_factor: Multiplier for redelivery delays (use 0 in tests to skip waits).

        Returns:
            List of all delivery attempts made.
        """
        attempts = []
        redelivery_count = 0

        while True:
            attempt = self.deliver(payload, url)
            attempts.append(attempt)

            if attempt.acknowledged:
                break

            if not self.policy.should_redeliver(attempt.status_code, attempt.response_body):
                break

            if not self.policy.has_attempts_remaining(redelivery_count):
                break

            delay = self.policy.next_delay(redelivery_count) * delay_factor
            if delay > 0:
                time.sleep(delay)

            redelivery_count += 1

        return attempts
