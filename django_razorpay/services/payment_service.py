import logging
import time
from dataclasses import dataclass
from typing import Any

from django.db import transaction

from django_razorpay import signals
from django_razorpay.client import RazorpayClient
from django_razorpay.conf import settings as app_settings
from django_razorpay.constants import MIN_ORDER_AMOUNT_PAISE
from django_razorpay.exceptions import RequestValidationError, SignatureInvalid
from django_razorpay.models import ProcessedPayment
from django_razorpay.services.ledger import payment_ledger
from django_razorpay.services.order_total import OrderTotalVerifier, VerifiedOrder
from django_razorpay.signatures import verify_payment_signature
from django_razorpay.utils import to_paise

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentVerificationResult:
    verified: bool
    already_processed: bool
    payment_id: str
    order_id: str


@dataclass(frozen=True)
class GatewayOrder:
    order_id: str
    amount: int
    currency: str
    verified_order: VerifiedOrder


class PaymentService:
    """
    High-level service for Razorpay payments.

    Coordinates the order-total verifier, the payment ledger and the
    gateway client.
    """

    ledger = payment_ledger

    @classmethod
    def get_client(cls) -> RazorpayClient:
        return RazorpayClient()

    @classmethod
    def verify_payment(
        cls,
        order_id: str,
        payment_id: str,
        signature: str,
        *,
        user_id: str | None = None,
        order_details: Any = None,
    ) -> PaymentVerificationResult:
        """
        Verify a checkout signature exactly once per payment id.

        A payment id already in the ledger short-circuits before the
        signature is checked and returns the order id recorded the first time.

        Raises:
            ConfigurationError: If the key secret is not configured
            SignatureInvalid: If the signature does not match
        """
        secret = app_settings.require("KEY_SECRET")

        existing = cls.ledger.check(payment_id)
        if existing.already_processed:
            logger.info("[django-razorpay] Payment %s already verified", payment_id)
            return PaymentVerificationResult(
                verified=True,
                already_processed=True,
                payment_id=payment_id,
                order_id=existing.record.order_id,
            )

        try:
            verify_payment_signature(order_id, payment_id, signature, secret)
        except SignatureInvalid:
            logger.warning(
                "[django-razorpay] Signature verification failed for payment %s",
                payment_id,
            )
            raise

        # A failing receiver rolls back the ledger row
        with transaction.atomic():
            entry = cls.ledger.record(
                payment_id,
                order_id=order_id,
                user_id=user_id,
                status=ProcessedPayment.Status.VERIFIED,
            )
            if entry.already_processed:
                return PaymentVerificationResult(
                    verified=True,
                    already_processed=True,
                    payment_id=payment_id,
                    order_id=entry.record.order_id,
                )

            signals.payment_verified.send(
                sender=ProcessedPayment,
                record=entry.record,
                order_details=order_details,
            )

        logger.info(
            "[django-razorpay] Verified payment %s for order %s", payment_id, order_id
        )
        return PaymentVerificationResult(
            verified=True,
            already_processed=False,
            payment_id=payment_id,
            order_id=order_id,
        )

    @classmethod
    def create_order(
        cls,
        cart_items,
        coupon_code: str | None = None,
        *,
        receipt: str | None = None,
        notes: dict[str, str] | None = None,
    ) -> GatewayOrder:
        """
        Create a gateway order for the server-verified cart total.

        Raises:
            ProductNotFound: If a cart item has no catalog price
            RequestValidationError: If the total is below the gateway minimum
            ConfigurationError: If gateway credentials are missing
            GatewayError: If the gateway call fails
        """
        client = cls.get_client()
        verified = OrderTotalVerifier().verify(cart_items, coupon_code)

        amount = to_paise(verified.final_total)
        if amount < MIN_ORDER_AMOUNT_PAISE:
            raise RequestValidationError(
                "Invalid amount. Minimum is ₹1 (100 paise)",
                details=[{"field": "amount", "message": "Below gateway minimum"}],
            )

        response = client.create_order(
            amount=amount,
            currency=app_settings.CURRENCY,
            receipt=receipt or f"order_{int(time.time() * 1000)}",
            notes=notes,
        )

        logger.info(
            "[django-razorpay] Created gateway order %s for %s paise",
            response["id"],
            amount,
        )

        return GatewayOrder(
            order_id=response["id"],
            amount=response.get("amount", amount),
            currency=response.get("currency", app_settings.CURRENCY),
            verified_order=verified,
        )
