import base64
import hashlib
import hmac


def hash_body(body: bytes) -> str:
    """Hex SHA-512 of the raw request body, byte for byte as received."""
    return hashlib.sha512(body).hexdigest()


def build_canonical_string(
    method: str,
    body: bytes,
    content_type: str,
    date: str,
    request_uri: str,
) -> str:
    """Newline-joined signing input. Field order is part of the wire contract."""
    parts = [method, hash_body(body), content_type, date, request_uri]
    return "\n".join(parts)


def sign_canonical_string(canonical_string: str, secret: str | bytes) -> str:
    """Base64 of the raw HMAC-SHA512 digest. A ``str`` secret is UTF-8 encoded."""
    key = secret if isinstance(secret, bytes) else secret.encode("utf-8")
    digest = hmac.new(
        key,
        canonical_string.encode("utf-8"),
        hashlib.sha512,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def generate_signature(
    secret: str | bytes,
    method: str,
    body: bytes,
    content_type: str,
    date: str,
    request_uri: str,
) -> str:
    """Generate the X-Signature value for a notification."""
    canonical = build_canonical_string(method, body, content_type, date, request_uri)
    return sign_canonical_string(canonical, secret)


def signatures_match(expected: str, received: str) -> bool:
    """Constant-time comparison of two signature strings."""
    try:
        return hmac.compare_digest(
            expected.encode("ascii"),
            received.encode("utf-8", "surrogateescape"),
        )
    except UnicodeError:
        return False
