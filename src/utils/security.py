import hmac
import hashlib


def compute_signature(payload: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def _parse_calendly_header(signature: str) -> tuple[str | None, str | None]:
    """Split a 't=<timestamp>,v1=<hex>' header into its parts."""
    parts = dict(
        item.split("=", 1) for item in signature.split(",") if "=" in item
    )
    return parts.get("t"), parts.get("v1")


def verify_webhook_signature(payload: bytes, signature: str, secret: str) -> bool:
    """
    Check an HMAC-SHA256 (hex) signature over the raw request body.

    Accepts either a bare hex digest of the body, or Calendly's
    't=<timestamp>,v1=<hex>' form where the digest covers '<timestamp>.<body>'.
    The digest comparison is constant-time.
    """
    if not signature or not secret:
        return False

    signature = signature.strip()
    if "v1=" in signature:
        timestamp, provided = _parse_calendly_header(signature)
        if not timestamp or not provided:
            return False
        signed = timestamp.encode("utf-8") + b"." + payload
    else:
        provided = signature
        signed = payload

    expected = compute_signature(signed, secret)
    return hmac.compare_digest(provided.strip().lower().encode("utf-8"), expected.encode("utf-8"))


def verify_bearer_token(authorization: str | None, expected_key: str) -> bool:
    if not authorization or not expected_key:
        return False
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return False
    return hmac.compare_digest(token.strip().encode("utf-8"), expected_key.encode("utf-8"))
