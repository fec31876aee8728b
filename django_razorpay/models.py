from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class Product(models.Model):
    """
    Trusted catalog entry.

    A product can be addressed by its document id or by the secondary
    catalog id the storefront exposes; prices are stored in display form.
    """

    doc_id = models.CharField(
        max_length=100,
        primary_key=True,
        help_text=_("Document identifier of the product"),
    )
    catalog_id = models.CharField(
        max_length=100,
        blank=True,
        null=True,
        db_index=True,
        help_text=_("Secondary product identifier used by the storefront"),
    )
    name = models.CharField(max_length=255, blank=True)
    price = models.CharField(
        max_length=64,
        help_text=_("Display price, e.g. ₹1,599"),
    )
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "razorpay_product"
        verbose_name = _("Product")
        verbose_name_plural = _("Products")
        ordering = ["doc_id"]

    def __str__(self):
        return self.name or self.doc_id


class Coupon(models.Model):
    class Type(models.TextChoices):
        PERCENTAGE = "percentage", _("Percentage")
        FIXED = "fixed", _("Fixed amount")

    code = models.CharField(
        max_length=50,
        unique=True,
        help_text=_("Coupon code (stored uppercase)"),
    )
    coupon_type = models.CharField(
        max_length=16, choices=Type.choices, default=Type.PERCENTAGE
    )
    value = models.DecimalField(max_digits=10, decimal_places=2)
    min_order_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    expiry_date = models.DateTimeField()
    is_active = models.BooleanField(default=True, db_index=True)
    usage_limit = models.PositiveIntegerField(default=1)
    usage_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "razorpay_coupon"
        verbose_name = _("Coupon")
        verbose_name_plural = _("Coupons")
        ordering = ["code"]

    def __str__(self):
        return self.code

    def save(self, *args, **kwargs):
        self.code = (self.code or "").strip().upper()
        super().save(*args, **kwargs)


class ProcessedPayment(models.Model):
    """
    Idempotency marker for synchronous payment verification.

    The existence of a row for a payment id means the payment was verified.
    """

    class Status(models.TextChoices):
        VERIFIED = "verified", _("Verified")

    payment_id = models.CharField(max_length=64, primary_key=True)
    order_id = models.CharField(max_length=64)
    user_id = models.CharField(max_length=128, blank=True, null=True)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.VERIFIED
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "razorpay_processed_payment"
        verbose_name = _("Processed Payment")
        verbose_name_plural = _("Processed Payments")
        ordering = ["-created_at"]

    def __str__(self):
        return self.payment_id


class ProcessedWebhookEvent(models.Model):
    """
    Idempotency marker for webhook events.

    Written only once the event's side effects succeeded; a missing row
    lets a gateway retry re-run them.
    """

    class Status(models.TextChoices):
        PROCESSED = "processed", _("Processed")

    event_id = models.CharField(max_length=64, primary_key=True)
    event_type = models.CharField(max_length=64, db_index=True)
    payment_id = models.CharField(max_length=64, blank=True, null=True)
    processed_at = models.DateTimeField(auto_now_add=True)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.PROCESSED
    )
    retry_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "razorpay_processed_webhook_event"
        verbose_name = _("Processed Webhook Event")
        verbose_name_plural = _("Processed Webhook Events")
        ordering = ["-processed_at"]

    def __str__(self):
        return f"{self.event_type} ({self.event_id})"
