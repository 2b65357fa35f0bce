import json
import logging
import threading
import time
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler
from typing import Self

from till_notifications.models.notification import RawNotification
from till_notifications.notification.errors import (
    InvalidPayloadError,
    MissingBodyError,
    UnauthorizedNotificationError,
)
from till_notifications.notification.parser import NotificationParser
from till_notifications.notification.responder import AcknowledgementResponder
from till_notifications.notification.verifier import SignatureVerifier

logger = logging.getLogger(__name__)


class _NotificationHandler(BaseHTTPRequestHandler):
    """HTTP request handler for Till status notifications."""

    def do_POST(self):
        self._handle()

    def do_PUT(self):
        self._handle()

    def _handle(self):
        try:
            content_length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            logger.warning("Rejected notification %s %s: bad Content-Length", self.command, self.path)
            self._send_json(400, {"error": "invalid Content-Length"})
            return
        body = self.rfile.read(content_length) if content_length > 0 else b""

        server_config = self.server.config  # type: ignore[attr-defined]

        if server_config["response_delay"] > 0:
            time.sleep(server_config["response_delay"])

        # self.path is the request target exactly as sent, query string included
        raw = RawNotification.capture(self.command, self.path, self.headers.items(), body)

        parser = NotificationParser(raw)
        try:
            parser.get_data()
        except (MissingBodyError, InvalidPayloadError) as e:
            logger.warning("Rejected notification %s %s: %s", raw.method, raw.uri, e)
            self._send_json(400, {"error": str(e)})
            return

        verifier = SignatureVerifier(raw, server_config["secret"])
        verdict = verifier.verify()
        responder = AcknowledgementResponder(verdict)
        try:
            response = responder.acknowledge()
        except UnauthorizedNotificationError as e:
            self._send_json(401, {"error": str(e), "reason": e.reason})
            return

        transaction_reference = parser.get_transaction_reference()
        with server_config["lock"]:
            server_config["received_notifications"].append({
                "transaction_reference": transaction_reference,
                "fields": parser.fields(),
                "headers": dict(raw.headers),
                "uri": raw.uri,
            })
        logger.info(
            "Acknowledged notification %s (%s %s)",
            transaction_reference,
            parser.get_transaction_type(),
            parser.get_transaction_status(),
        )

        self.send_response(response.status_code)
        self.send_header("Content-Type", response.content_type)
        self.send_header("Content-Length", str(len(response.body)))
        self.end_headers()
        self.wfile.write(response.body)

    def _send_json(self, code: int, body: dict) -> None:
        encoded = json.dumps(body).encode()
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(encoded)))
        self.end_headers()
        self.wfile.write(encoded)

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class NotificationReceiverServer:
    """Threaded HTTP endpoint that verifies and acknowledges status notifications."""

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 0,
        secret: str | bytes | None = None,
        path: str = "/notify",
    ):
        self._host = host
        self._port = port
        self._path = path
        self._config = {
            "secret": secret,
            "response_delay": 0,
            "received_notifications": [],
            "lock": threading.Lock(),
        }
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def set_secret(self, secret: str | bytes | None) -> Self:
        self._config["secret"] = secret
        return self

    def set_response_delay(self, seconds: float) -> Self:
        self._config["response_delay"] = seconds
        return self

    def start(self) -> None:
        self._server = ThreadingHTTPServer((self._host, self._port), _NotificationHandler)
        self._server.config = self._config  # type: ignore[attr-defined]
        self._port = self._server.server_address[1]
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()
        logger.info("Notification receiver listening on %s", self.url)

    def stop(self) -> None:
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None

    @property
    def url(self) -> str:
        return f"http://{self._host}:{self._port}{self._path}"

    @property
    def port(self) -> int:
        return self._port

    def get_received_notifications(self) -> list[dict]:
        with self._config["lock"]:
            return list(self._config["received_notifications"])

    def get_processed_count(self) -> int:
        with self._config["lock"]:
            return len(self._config["received_notifications"])

    def was_notification_processed(self, transaction_reference: str) -> bool:
        with self._config["lock"]:
            return any(
                n["transaction_reference"] == transaction_reference
                for n in self._config["received_notifications"]
            )

    def clear_notifications(self) -> None:
        with self._config["lock"]:
            self._config["received_notifications"].clear()
