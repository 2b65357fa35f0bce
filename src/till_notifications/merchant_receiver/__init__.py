from .server import NotificationReceiverServer

__all__ = ["NotificationReceiverServer"]
