import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from django.utils import timezone

from django_razorpay.models import Coupon
from django_razorpay.utils import floor_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CouponResult:
    discount: Decimal
    applied: bool
    code: str | None = None
    reason: str = ""


class CouponService:
    """Validates coupon codes and computes discounts against a trusted subtotal."""

    @staticmethod
    def normalize_code(code: str | None) -> str:
        return (code or "").strip().upper()

    @classmethod
    def get_active(cls, code: str | None) -> Coupon | None:
        normalized = cls.normalize_code(code)
        if not normalized:
            return None
        return Coupon.objects.filter(code=normalized, is_active=True).first()

    @staticmethod
    def rejection_reason(
        coupon: Coupon, subtotal: Decimal, now: datetime
    ) -> str | None:
        """Return why a coupon cannot be applied, or None if it can."""
        if now > coupon.expiry_date:
            return "This coupon has expired"
        if coupon.usage_count >= coupon.usage_limit:
            return "This coupon has reached its usage limit"
        if subtotal < coupon.min_order_amount:
            return f"Minimum order amount of ₹{coupon.min_order_amount} required"
        return None

    @staticmethod
    def calculate_discount(coupon: Coupon, subtotal: Decimal) -> Decimal:
        """
        Discount for ``coupon`` on ``subtotal``.

        Floored to a whole amount, then clamped to [0, subtotal] whatever
        the coupon's value.
        """
        value = Decimal(coupon.value)
        if coupon.coupon_type == Coupon.Type.PERCENTAGE:
            discount = subtotal * value / Decimal(100)
        else:
            discount = min(value, subtotal)

        discount = floor_amount(discount)
        return max(Decimal(0), min(discount, subtotal))

    @classmethod
    def evaluate(
        cls, code: str | None, subtotal: Decimal, now: datetime | None = None
    ) -> CouponResult:
        """
        Evaluate ``code`` against a verified subtotal.

        A missing, inactive or ineligible coupon is not an error: the
        result simply carries a zero discount.
        """
        now = now or timezone.now()
        normalized = cls.normalize_code(code)

        coupon = cls.get_active(normalized)
        if coupon is None:
            logger.debug("[django-razorpay] Unknown or inactive coupon %s", normalized)
            return CouponResult(
                discount=Decimal(0),
                applied=False,
                code=normalized or None,
                reason="Invalid or inactive coupon code",
            )

        reason = cls.rejection_reason(coupon, subtotal, now)
        if reason:
            logger.info("[django-razorpay] Coupon %s rejected: %s", coupon.code, reason)
            return CouponResult(
                discount=Decimal(0), applied=False, code=coupon.code, reason=reason
            )

        discount = cls.calculate_discount(coupon, subtotal)
        return CouponResult(discount=discount, applied=True, code=coupon.code)
