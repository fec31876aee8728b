import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from django_razorpay.services.coupon_service import CouponResult, CouponService
from django_razorpay.services.price_oracle import PriceOracle
from django_razorpay.utils import money_to_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerifiedLineItem:
    product_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    def as_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "quantity": self.quantity,
            "unitPrice": money_to_json(self.unit_price),
            "itemTotal": money_to_json(self.line_total),
        }


@dataclass(frozen=True)
class VerifiedOrder:
    verified_total: Decimal
    discount: Decimal
    final_total: Decimal
    line_items: tuple[VerifiedLineItem, ...]
    coupon: CouponResult | None = None

    def as_dict(self) -> dict:
        return {
            "verifiedTotal": money_to_json(self.verified_total),
            "discount": money_to_json(self.discount),
            "finalTotal": money_to_json(self.final_total),
            "verificationDetails": [item.as_dict() for item in self.line_items],
        }


class OrderTotalVerifier:
    """
    Recomputes an order total from catalog prices and coupon rules.

    This is the only authority for accepting Cash-on-Delivery orders; the
    total a client claims is never read.
    """

    def __init__(
        self,
        price_oracle: PriceOracle | None = None,
        coupon_service: type[CouponService] = CouponService,
    ):
        self.price_oracle = price_oracle or PriceOracle()
        self.coupon_service = coupon_service

    def verify(
        self,
        cart_items: Iterable,
        coupon_code: str | None = None,
        now: datetime | None = None,
    ) -> VerifiedOrder:
        """
        Args:
            cart_items: Objects with ``product_id`` and ``quantity``
            coupon_code: Optional coupon code
            now: Evaluation time for coupon expiry (defaults to now)

        Raises:
            ProductNotFound: If any cart item has no catalog price
        """
        cart_items = list(cart_items)
        prices = self.price_oracle.require(item.product_id for item in cart_items)

        line_items = []
        verified_total = Decimal(0)
        for item in cart_items:
            unit_price = prices[str(item.product_id)]
            line_total = unit_price * item.quantity
            verified_total += line_total
            line_items.append(
                VerifiedLineItem(
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    unit_price=unit_price,
                    line_total=line_total,
                )
            )

        coupon = None
        discount = Decimal(0)
        if coupon_code:
            coupon = self.coupon_service.evaluate(coupon_code, verified_total, now=now)
            discount = coupon.discount

        final_total = max(Decimal(0), verified_total - discount)

        logger.info(
            "[django-razorpay] Verified order total=%s discount=%s final=%s",
            verified_total,
            discount,
            final_total,
        )

        return VerifiedOrder(
            verified_total=verified_total,
            discount=discount,
            final_total=final_total,
            line_items=tuple(line_items),
            coupon=coupon,
        )
