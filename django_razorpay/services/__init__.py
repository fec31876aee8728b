from .coupon_service import CouponService
from .ledger import IdempotencyLedger, payment_ledger, webhook_ledger
from .order_total import OrderTotalVerifier
from .payment_service import PaymentService
from .price_oracle import PriceOracle
from .webhook_processor import WebhookProcessor

__all__ = [
    "CouponService",
    "IdempotencyLedger",
    "OrderTotalVerifier",
    "PaymentService",
    "PriceOracle",
    "WebhookProcessor",
    "payment_ledger",
    "webhook_ledger",
]
