from django.dispatch import Signal

# Sent once per payment id, after its signature is verified and recorded
payment_verified = Signal()  # sender=ProcessedPayment, record=instance, order_details

# Webhook-triggered signals aligned with Razorpay event names
payment_authorized = Signal()  # sender=WebhookProcessor, event=PaymentAuthorizedEvent
payment_captured = Signal()  # sender=WebhookProcessor, event=PaymentCapturedEvent
payment_failed = Signal()  # sender=WebhookProcessor, event=PaymentFailedEvent
order_paid = Signal()  # sender=WebhookProcessor, event=OrderPaidEvent
refund_created = Signal()  # sender=WebhookProcessor, event=RefundCreatedEvent
