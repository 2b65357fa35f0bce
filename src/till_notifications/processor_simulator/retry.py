class RedeliveryPolicy:
    """Decides whether the gateway should deliver a notification again.

    Anything short of a 200 whose body is exactly ``OK`` counts as undelivered.
    """

    DEFAULT_SCHEDULE = [30, 300, 1800, 7200]  # 30s, 5m, 30m, 2h

    # The receiver rejected the notification itself, sending it again won't help
    NO_REDELIVERY_CODES = {400, 404, 405, 422}

    def __init__(self, schedule: list[int] | None = None, max_redeliveries: int | None = None):
        if schedule is not None and not schedule:
            raise ValueError("redelivery schedule must not be empty")
        self.schedule = list(schedule if schedule is not None else self.DEFAULT_SCHEDULE)
        self.max_redeliveries = max_redeliveries if max_redeliveries is not None else len(self.schedule)

    def should_redeliver(self, status_code: int | None, body: str = "") -> bool:
        """True for connection errors, 5xx, 401 and any 2xx that is not an ``OK`` acknowledgement."""
        if status_code is None:
            return True
        if status_code == 200 and body == "OK":
            return False
        if status_code in self.NO_REDELIVERY_CODES:
            return False
        if 200 <= status_code < 300:
            return True
        if status_code == 401:
            return True
        return status_code >= 500

    def next_delay(self, attempt: int) -> float:
        """Delay in seconds before redelivery number ``attempt`` (0-indexed)."""
        if attempt >= len(self.schedule):
            return self.schedule[-1]
        return float(self.schedule[attempt])

    def has_attempts_remaining(self, attempt: int) -> bool:
        return attempt < self.max_redeliveries
