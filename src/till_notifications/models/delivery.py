from dataclasses import dataclass
from datetime import datetime


@dataclass
class DeliveryAttempt:
    attempt_id: str
    transaction_reference: str
    url: str
    status_code: int | None
    timestamp: datetime
    response_time_ms: float
    response_body: str = ""
    error: str | None = None

    @property
    def acknowledged(self) -> bool:
        """Only a 200 carrying exactly ``OK`` counts as delivered."""
        return self.status_code == 200 and self.response_body == "OK"
