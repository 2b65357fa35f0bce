from .crypto import (
    build_canonical_string,
    generate_signature,
    hash_body,
    sign_canonical_string,
    signatures_match,
)
from .factories import NotificationFactory

__all__ = [
    "hash_body", "build_canonical_string", "sign_canonical_string",
    "generate_signature", "signatures_match",
    "NotificationFactory",
]
