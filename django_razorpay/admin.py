import logging

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils import timezone
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from django_razorpay.models import (
    Coupon,
    ProcessedPayment,
    ProcessedWebhookEvent,
    Product,
)
from django_razorpay.utils import parse_price

logger = logging.getLogger(__name__)


class ReadOnlyLedgerAdmin(admin.ModelAdmin):
    """Ledger rows are written by the app only; the admin may just look."""

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def has_change_permission(self, request: HttpRequest, obj=None) -> bool:
        return False

    def has_delete_permission(self, request: HttpRequest, obj=None) -> bool:
        return False


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "doc_id",
        "catalog_id",
        "name",
        "price",
        "display_parsed_price",
        "is_active",
        "updated_at",
    )
    list_filter = ("is_active",)
    search_fields = ("doc_id", "catalog_id", "name")
    ordering = ["doc_id"]
    readonly_fields = ("created_at", "updated_at")

    @admin.display(description=_("Checkout Price"))
    def display_parsed_price(self, obj: Product) -> str:
        price = parse_price(obj.price)
        if not price:
            return format_html('<span style="color: red;">{}</span>', _("Unpriced"))
        return f"₹{price}"


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "coupon_type",
        "value",
        "min_order_amount",
        "display_usage",
        "expiry_date",
        "display_is_usable",
        "is_active",
    )
    list_filter = ("coupon_type", "is_active", "expiry_date")
    search_fields = ("code",)
    ordering = ["code"]
    readonly_fields = ("usage_count", "created_at")

    actions = ["deactivate_coupons"]

    @admin.display(description=_("Usage"))
    def display_usage(self, obj: Coupon) -> str:
        return f"{obj.usage_count} / {obj.usage_limit}"

    @admin.display(description=_("Usable"), boolean=True)
    def display_is_usable(self, obj: Coupon) -> bool:
        return (
            obj.is_active
            and obj.expiry_date >= timezone.now()
            and obj.usage_count < obj.usage_limit
        )

    @admin.action(description=_("Deactivate selected coupons"))
    def deactivate_coupons(self, request: HttpRequest, queryset: QuerySet[Coupon]):
        updated = queryset.update(is_active=False)
        logger.info("[django-razorpay] Deactivated %s coupon(s)", updated)
        self.message_user(request, f"Deactivated {updated} coupon(s).")


@admin.register(ProcessedPayment)
class ProcessedPaymentAdmin(ReadOnlyLedgerAdmin):
    list_display = ("payment_id", "order_id", "user_id", "status", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("payment_id", "order_id", "user_id")
    date_hierarchy = "created_at"
    ordering = ["-created_at"]


@admin.register(ProcessedWebhookEvent)
class ProcessedWebhookEventAdmin(ReadOnlyLedgerAdmin):
    list_display = (
        "event_id",
        "event_type",
        "payment_id",
        "status",
        "retry_count",
        "processed_at",
    )
    list_filter = ("event_type", "status", "processed_at")
    search_fields = ("event_id", "payment_id")
    date_hierarchy = "processed_at"
    ordering = ["-processed_at"]
