import pytest

from till_notifications.merchant_receiver.server import NotificationReceiverServer
from till_notifications.processor_simulator.engine import NotificationDeliveryEngine
from till_notifications.processor_simulator.logger import DeliveryLogger
from till_notifications.processor_simulator.retry import RedeliveryPolicy
from till_notifications.processor_simulator.signer import NotificationSigner
from till_notifications.utils.factories import NotificationFactory


NOTIFICATION_SECRET = "test-secret-key-for-hmac"


@pytest.fixture
def notification_secret():
    return NOTIFICATION_SECRET


@pytest.fixture
def signer():
    return NotificationSigner(NOTIFICATION_SECRET)


@pytest.fixture
def redelivery_policy():
    return RedeliveryPolicy()


@pytest.fixture
def delivery_logger():
    return DeliveryLogger()


@pytest.fixture
def engine(signer, redelivery_policy, delivery_logger):
    return NotificationDeliveryEngine(
        signer=signer,
        policy=redelivery_policy,
        logger=delivery_logger,
        timeout_seconds=5,
    )


@pytest.fixture
def receiver():
    server = NotificationReceiverServer(secret=NOTIFICATION_SECRET)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def notification_factory():
    return NotificationFactory


@pytest.fixture
def signed_notification():
    """A RawNotification carrying a valid signature for NOTIFICATION_SECRET."""
    return NotificationFactory.create_raw(NOTIFICATION_SECRET)
