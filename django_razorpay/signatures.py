"""
HMAC-SHA256 signature checks for Razorpay callbacks.

Payment verification signs ``order_id + "|" + payment_id`` with the API key
secret. Webhooks sign the raw request body with the webhook secret, so the
body must be checked before it is parsed.
"""
import hashlib
import hmac
import logging

from django_razorpay.exceptions import ConfigurationError, SignatureInvalid

logger = logging.getLogger(__name__)


def compute_signature(secret: str, payload: str | bytes) -> str:
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def _check(secret: str | None, payload: str | bytes, signature: str | None) -> None:
    if not secret:
        raise ConfigurationError("Signature secret is not configured.")

    expected = compute_signature(secret, payload)
    if not signature or not hmac.compare_digest(
        expected.encode("ascii"), str(signature).encode("utf-8")
    ):
        raise SignatureInvalid("Signature mismatch")


def verify_payment_signature(
    order_id: str, payment_id: str, signature: str | None, secret: str | None
) -> None:
    """
    Verify the checkout signature returned to the client.

    Raises:
        ConfigurationError: If the key secret is missing
        SignatureInvalid: If the signature does not match
    """
    _check(secret, f"{order_id}|{payment_id}", signature)
    logger.debug("[django-razorpay] Signature verified for payment %s", payment_id)


def verify_webhook_signature(
    raw_body: bytes, signature: str | None, secret: str | None
) -> None:
    """
    Verify a webhook signature over the exact request body bytes.

    Raises:
        ConfigurationError: If the webhook secret is missing
        SignatureInvalid: If the signature does not match
    """
    _check(secret, raw_body, signature)
