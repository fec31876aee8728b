# Generated manually for v0.1.0

from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "doc_id",
                    models.CharField(
                        help_text="Document identifier of the product",
                        max_length=100,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "catalog_id",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Secondary product identifier used by the storefront",
                        max_length=100,
                        null=True,
                    ),
                ),
                ("name", models.CharField(blank=True, max_length=255)),
                (
                    "price",
                    models.CharField(
                        help_text="Display price, e.g. ₹1,599", max_length=64
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Product",
                "verbose_name_plural": "Products",
                "db_table": "razorpay_product",
                "ordering": ["doc_id"],
            },
        ),
        migrations.CreateModel(
            name="Coupon",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "code",
                    models.CharField(
                        help_text="Coupon code (stored uppercase)",
                        max_length=50,
                        unique=True,
                    ),
                ),
                (
                    "coupon_type",
                    models.CharField(
                        choices=[
                            ("percentage", "Percentage"),
                            ("fixed", "Fixed amount"),
                        ],
                        default="percentage",
                        max_length=16,
                    ),
                ),
                ("value", models.DecimalField(decimal_places=2, max_digits=10)),
                (
                    "min_order_amount",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=10
                    ),
                ),
                ("expiry_date", models.DateTimeField()),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("usage_limit", models.PositiveIntegerField(default=1)),
                ("usage_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Coupon",
                "verbose_name_plural": "Coupons",
                "db_table": "razorpay_coupon",
                "ordering": ["code"],
            },
        ),
        migrations.CreateModel(
            name="ProcessedPayment",
            fields=[
                (
                    "payment_id",
                    models.CharField(max_length=64, primary_key=True, serialize=False),
                ),
                ("order_id", models.CharField(max_length=64)),
                ("user_id", models.CharField(blank=True, max_length=128, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("verified", "Verified")],
                        default="verified",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Processed Payment",
                "verbose_name_plural": "Processed Payments",
                "db_table": "razorpay_processed_payment",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ProcessedWebhookEvent",
            fields=[
                (
                    "event_id",
                    models.CharField(max_length=64, primary_key=True, serialize=False),
                ),
                ("event_type", models.CharField(db_index=True, max_length=64)),
                ("payment_id", models.CharField(blank=True, max_length=64, null=True)),
                ("processed_at", models.DateTimeField(auto_now_add=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("processed", "Processed")],
                        default="processed",
                        max_length=16,
                    ),
                ),
                ("retry_count", models.PositiveIntegerField(default=0)),
            ],
            options={
                "verbose_name": "Processed Webhook Event",
                "verbose_name_plural": "Processed Webhook Events",
                "db_table": "razorpay_processed_webhook_event",
                "ordering": ["-processed_at"],
            },
        ),
    ]
