# merchstore/services/order_code.py
import hashlib
import json
import secrets

ORDER_CODE_LENGTH = 12
NONCE_BYTES = 16


def generate_order_code(email: str, items, nonce: bytes | None = None) -> str:
    """Public order code: first 12 hex chars of sha256 over email, items and
    a random nonce, uppercased. Pass ``nonce`` to get a reproducible code."""
    if nonce is None:
        nonce = secrets.token_bytes(NONCE_BYTES)
    seed = json.dumps(
        {"email": email, "items": items, "nonce": nonce.hex()},
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()[:ORDER_CODE_LENGTH].upper()
