from enum import Enum

SIGNATURE_HEADER = "X-Razorpay-Signature"

ORDERS_URL = "/orders"

# Razorpay rejects orders below 1 INR
MIN_ORDER_AMOUNT_PAISE = 100
PAISE_PER_RUPEE = 100

MAX_CART_ITEMS = 50
MAX_ITEM_QUANTITY = 100

# Shipping carrier tokens are valid for 10 days; refresh a day early
SHIPPING_TOKEN_TTL_SECONDS = 9 * 24 * 60 * 60
SHIPPING_LOGIN_URL = "/auth/login"


class WebhookEventType(str, Enum):
    payment_authorized = "payment.authorized"
    payment_captured = "payment.captured"
    payment_failed = "payment.failed"
    order_paid = "order.paid"
    refund_created = "refund.created"
