import json

from django_razorpay.signatures import compute_signature

KEY_SECRET = "test-key-secret"
WEBHOOK_SECRET = "test-webhook-secret"


def sign_payment(order_id: str, payment_id: str, secret: str = KEY_SECRET) -> str:
    return compute_signature(secret, f"{order_id}|{payment_id}")


def make_webhook_event(
    event: str = "payment.captured",
    event_id: str = "evt_Test123",
    payment_id: str = "pay_Test123",
) -> dict:
    """Build a Razorpay webhook body for ``event``."""
    payment = {
        "entity": {
            "id": payment_id,
            "amount": 100000,
            "currency": "INR",
            "status": "captured",
            "order_id": "order_Test123",
        }
    }
    if event == "order.paid":
        payload = {
            "order": {"entity": {"id": "order_Test123", "amount": 100000}},
            "payment": payment,
        }
    elif event == "refund.created":
        payload = {
            "refund": {
                "entity": {"id": "rfnd_Test123", "payment_id": payment_id}
            },
        }
    else:
        payload = {"payment": payment}

    return {
        "entity": "event",
        "id": event_id,
        "event": event,
        "created_at": 1700000000,
        "payload": payload,
    }


def signed_body(data: dict, secret: str = WEBHOOK_SECRET) -> tuple[bytes, str]:
    body = json.dumps(data).encode("utf-8")
    return body, compute_signature(secret, body)
