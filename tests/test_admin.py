from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib import admin
from django.contrib.auth.models import User
from django.contrib.messages import get_messages
from django.contrib.messages.middleware import MessageMiddleware
from django.contrib.sessions.middleware import SessionMiddleware
from django.urls import reverse
from django.utils import timezone

from django_razorpay.admin import (
    CouponAdmin,
    ProcessedPaymentAdmin,
    ProcessedWebhookEventAdmin,
    ProductAdmin,
)
from django_razorpay.models import (
    Coupon,
    ProcessedPayment,
    ProcessedWebhookEvent,
    Product,
)

pytestmark = pytest.mark.django_db


def dummy_get_response(request):
    return None


def setup_admin_request(rf, path="/admin/"):
    """Helper to create a request with session, messages, and admin user."""
    request = rf.post(path)

    SessionMiddleware(dummy_get_response).process_request(request)
    MessageMiddleware(dummy_get_response).process_request(request)
    request.session.save()

    user, _ = User.objects.get_or_create(
        username="admin",
        defaults={"is_staff": True, "is_active": True, "is_superuser": True},
    )
    request.user = user
    return request


class TestProductAdmin:
    def test_display_parsed_price(self):
        model_admin = ProductAdmin(Product, admin.site)

        assert model_admin.display_parsed_price(
            Product(doc_id="d", price="₹1,599")
        ) == "₹1599"

    def test_display_unpriced(self):
        model_admin = ProductAdmin(Product, admin.site)

        assert "Unpriced" in model_admin.display_parsed_price(
            Product(doc_id="d", price="TBD")
        )

    def test_changelist_renders(self, admin_client, products):
        response = admin_client.get(
            reverse("admin:django_razorpay_product_changelist")
        )

        assert response.status_code == 200


class TestCouponAdmin:
    def test_display_usage(self, make_coupon):
        coupon = make_coupon(usage_limit=10, usage_count=3)

        assert CouponAdmin(Coupon, admin.site).display_usage(coupon) == "3 / 10"

    def test_display_is_usable(self, make_coupon):
        model_admin = CouponAdmin(Coupon, admin.site)

        assert model_admin.display_is_usable(make_coupon(code="OK"))
        assert not model_admin.display_is_usable(
            make_coupon(code="OLD", expiry_date=timezone.now() - timedelta(days=1))
        )
        assert not model_admin.display_is_usable(
            make_coupon(code="USED", usage_limit=1, usage_count=1)
        )

    def test_deactivate_coupons(self, rf, make_coupon):
        make_coupon(code="A")
        make_coupon(code="B", value=Decimal("5"))
        request = setup_admin_request(rf)

        CouponAdmin(Coupon, admin.site).deactivate_coupons(
            request, Coupon.objects.all()
        )

        assert not Coupon.objects.filter(is_active=True).exists()
        messages = [str(m) for m in get_messages(request)]
        assert messages == ["Deactivated 2 coupon(s)."]


class TestLedgerAdmins:
    @pytest.mark.parametrize(
        "admin_class,model",
        [
            (ProcessedPaymentAdmin, ProcessedPayment),
            (ProcessedWebhookEventAdmin, ProcessedWebhookEvent),
        ],
    )
    def test_read_only(self, rf, admin_class, model):
        model_admin = admin_class(model, admin.site)
        request = setup_admin_request(rf)

        assert not model_admin.has_add_permission(request)
        assert not model_admin.has_change_permission(request)
        assert not model_admin.has_delete_permission(request)

    def test_payment_changelist_renders(self, admin_client):
        ProcessedPayment.objects.create(payment_id="pay_1", order_id="order_1")

        response = admin_client.get(
            reverse("admin:django_razorpay_processedpayment_changelist")
        )

        assert response.status_code == 200
        assert b"pay_1" in response.content
