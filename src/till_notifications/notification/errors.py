class NotificationError(Exception):
    """Base class for errors raised while handling a status notification."""


class MissingBodyError(NotificationError):
    def __init__(self, message: str = "Missing JSON data"):
        super().__init__(message)


class InvalidPayloadError(NotificationError, ValueError):
    """The body could not be decoded as a JSON object.

    ``lineno``, ``colno`` and ``pos`` are copied from the decoder error when it
    reports them, otherwise left as ``None``.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        colno: int | None = None,
        pos: int | None = None,
    ):
        super().__init__(f"Invalid JSON data: {message}")
        self.lineno = lineno
        self.colno = colno
        self.pos = pos


class MalformedExpiryError(NotificationError, ValueError):
    pass


class UnauthorizedNotificationError(NotificationError):
    def __init__(self, message: str = "Cannot acknowledge an invalid notification", reason: str | None = None):
        super().__init__(message)
        self.reason = reason
