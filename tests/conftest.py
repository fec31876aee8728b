from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from django_razorpay.models import Coupon, Product
from tests.apps.testapp import signals as testapp_signals


@pytest.fixture(autouse=True)
def clear_received_signals():
    testapp_signals.received.clear()
    yield
    testapp_signals.received.clear()


@pytest.fixture
def received_signals():
    return testapp_signals.received


@pytest.fixture
def products(db):
    """Two priced products with catalog ids and one zero-priced product."""
    return [
        Product.objects.create(
            doc_id="doc-shirt", catalog_id="SKU-1", name="Shirt", price="₹500"
        ),
        Product.objects.create(
            doc_id="doc-mug", catalog_id="SKU-2", name="Mug", price="₹1,599"
        ),
        Product.objects.create(doc_id="doc-free", name="Sticker", price="₹0"),
    ]


@pytest.fixture
def make_coupon(db):
    def _make_coupon(**kwargs):
        defaults = {
            "code": "SAVE10",
            "coupon_type": Coupon.Type.PERCENTAGE,
            "value": Decimal("10"),
            "min_order_amount": Decimal("0"),
            "expiry_date": timezone.now() + timedelta(days=30),
            "usage_limit": 100,
            "usage_count": 0,
        }
        defaults.update(kwargs)
        return Coupon.objects.create(**defaults)

    return _make_coupon
