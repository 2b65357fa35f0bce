# Locust load test for notification verification throughput.
#
# How to run:
#   locust -f tests/load/locustfile.py --headless -u 50 -r 10 --run-time 30s --host http://127.0.0.1:8080
#
# The test starts a NotificationReceiverServer on port 8080 via
# on_test_start/on_test_stop events, so no external server is needed.
#
# Every fifth request carries a forged signature; those must come back 401
# and must never be acknowledged.

import json
import logging
import threading

from locust import HttpUser, between, events, task

from till_notifications.merchant_receiver.server import NotificationReceiverServer
from till_notifications.processor_simulator.signer import NotificationSigner
from till_notifications.utils.factories import NotificationFactory

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Shared state: tracking sent vs acknowledged for loss assertions
# ---------------------------------------------------------------------------
NOTIFICATION_SECRET = "load-test-secret"
FORGED_EVERY = 5

_stats_lock = threading.Lock()
_signed_count: int = 0
_forged_count: int = 0
_acknowledged_count: int = 0
_failure_count: int = 0

_server: NotificationReceiverServer | None = None

TRANSACTION_TYPES = [
    "DEBIT",
    "PREAUTHORIZE",
    "CAPTURE",
    "REFUND",
    "VOID",
]


def _increment(name: str) -> None:
    global _signed_count, _forged_count, _acknowledged_count, _failure_count
    with _stats_lock:
        if name == "signed":
            _signed_count += 1
        elif name == "forged":
            _forged_count += 1
        elif name == "acknowledged":
            _acknowledged_count += 1
        else:
            _failure_count += 1


# ---------------------------------------------------------------------------
# Locust lifecycle events
# ---------------------------------------------------------------------------
@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    """Start a NotificationReceiverServer on port 8080 before the load test begins."""
    global _server, _signed_count, _forged_count, _acknowledged_count, _failure_count

    with _stats_lock:
        _signed_count = 0
        _forged_count = 0
        _acknowledged_count = 0
        _failure_count = 0

    _server = NotificationReceiverServer(host="127.0.0.1", port=8080, secret=NOTIFICATION_SECRET)
    _server.start()
    logger.info("NotificationReceiverServer started on port 8080")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    """Stop the receiver and check that every signed notification, and nothing else, was accepted."""
    global _server

    received = 0
    if _server is not None:
        received = _server.get_processed_count()
        _server.stop()
        _server = None
        logger.info("NotificationReceiverServer stopped")

    with _stats_lock:
        signed = _signed_count
        forged = _forged_count
        acknowledged = _acknowledged_count
        failures = _failure_count

    logger.info(
        "Load test summary: signed=%d, forged=%d, acknowledged=%d, failures=%d, server_received=%d",
        signed,
        forged,
        acknowledged,
        failures,
        received,
    )

    if failures:
        environment.process_exit_code = 1
        logger.error("ASSERTION FAILED: %d requests got an unexpected response", failures)
    if received != signed:
        environment.process_exit_code = 1
        logger.error(
            "ASSERTION FAILED: receiver accepted %d notifications, %d were correctly signed",
            received,
            signed,
        )

    for stat in environment.runner.stats.entries.values():
        p95 = stat.get_response_time_percentile(0.95)
        if p95 and p95 > 5000:
            environment.process_exit_code = 1
            logger.error("ASSERTION FAILED: p95 latency %dms exceeds 5000ms for '%s'", p95, stat.name)


# ---------------------------------------------------------------------------
# Locust user
# ---------------------------------------------------------------------------
class GatewayUser(HttpUser):
    """Simulates the payment gateway posting status notifications to a merchant."""

    wait_time = between(0.01, 0.05)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._signer = NotificationSigner(NOTIFICATION_SECRET)
        self._forger = NotificationSigner("forged-secret")
        self._sequence = 0

    @task
    def post_notification(self) -> None:
        transaction_type = TRANSACTION_TYPES[self._sequence % len(TRANSACTION_TYPES)]
        forged = self._sequence % FORGED_EVERY == FORGED_EVERY - 1
        self._sequence += 1

        payload = NotificationFactory.create_payload(transaction_type)
        body = json.dumps(payload).encode("utf-8")
        signer = self._forger if forged else self._signer
        headers = signer.headers("POST", "/notify", body)

        _increment("forged" if forged else "signed")

        name = "/notify [forged]" if forged else f"/notify [{transaction_type}]"
        with self.client.post("/notify", data=body, headers=headers, catch_response=True, name=name) as response:
            if forged and response.status_code == 401:
                response.success()
            elif not forged and response.status_code == 200 and response.text == "OK":
                _increment("acknowledged")
                response.success()
            else:
                _increment("failure")
                response.failure(f"HTTP {response.status_code}: {response.text[:200]}")
