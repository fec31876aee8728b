import json
import logging
from dataclasses import dataclass

from django.db import transaction

from django_razorpay import signals
from django_razorpay.conf import settings as app_settings
from django_razorpay.constants import WebhookEventType
from django_razorpay.exceptions import ProcessingFailure, RequestValidationError
from django_razorpay.schemas import (
    OrderPaidEvent,
    PaymentAuthorizedEvent,
    PaymentCapturedEvent,
    PaymentFailedEvent,
    RefundCreatedEvent,
    WebhookEvent,
    parse_webhook_event,
)
from django_razorpay.services.ledger import webhook_ledger
from django_razorpay.signatures import verify_webhook_signature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebhookResult:
    event_id: str
    event_type: str
    already_processed: bool
    payment_id: str | None = None


class WebhookProcessor:
    """
    Processes Razorpay webhook events exactly once per event id.

    The ledger row for an event is written only after its handler
    succeeded. A handler failure leaves no row, so the gateway's retry of
    the same event runs the handler again instead of being dropped.
    """

    HANDLERS = {
        WebhookEventType.payment_authorized.value: "_handle_payment_authorized",
        WebhookEventType.payment_captured.value: "_handle_payment_captured",
        WebhookEventType.payment_failed.value: "_handle_payment_failed",
        WebhookEventType.order_paid.value: "_handle_order_paid",
        WebhookEventType.refund_created.value: "_handle_refund_created",
    }

    ledger = webhook_ledger

    @classmethod
    def verify_and_parse(cls, raw_body: bytes, signature: str | None) -> WebhookEvent:
        """
        Authenticate a webhook body, then validate it into an event.

        The signature is checked over the raw bytes before any parsing.

        Raises:
            ConfigurationError: If the webhook secret is not configured
            RequestValidationError: If the signature header is missing or
                the body is not a valid event
            SignatureInvalid: If the signature does not match
        """
        secret = app_settings.require("WEBHOOK_SECRET")

        if not signature:
            raise RequestValidationError("Missing signature")

        verify_webhook_signature(raw_body, signature, secret)

        try:
            data = json.loads(raw_body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RequestValidationError("Invalid JSON") from e

        return parse_webhook_event(data)

    @classmethod
    def process(cls, event: WebhookEvent) -> WebhookResult:
        """
        Dispatch an authenticated event unless it was already processed.

        Raises:
            ProcessingFailure: If the handler for a recognized event fails
        """
        existing = cls.ledger.check(event.id)
        if existing.already_processed:
            logger.info("[django-razorpay] Event %s already processed", event.id)
            return WebhookResult(
                event_id=event.id,
                event_type=event.event,
                already_processed=True,
                payment_id=existing.record.payment_id,
            )

        handler_name = cls.HANDLERS.get(event.event)
        if handler_name:
            handler = getattr(cls, handler_name)
            try:
                with transaction.atomic():
                    handler(event)
            except Exception as e:
                logger.exception(
                    "[django-razorpay] Webhook processing failed: %s (%s)",
                    event.id,
                    event.event,
                )
                raise ProcessingFailure(event.id, event.event) from e
        else:
            logger.info("[django-razorpay] Unhandled webhook event: %s", event.event)

        entry = cls.ledger.record(
            event.id,
            event_type=event.event,
            payment_id=event.payment_id,
        )

        return WebhookResult(
            event_id=event.id,
            event_type=event.event,
            already_processed=entry.already_processed,
            payment_id=event.payment_id,
        )

    @classmethod
    def handle(cls, raw_body: bytes, signature: str | None) -> WebhookResult:
        event = cls.verify_and_parse(raw_body, signature)
        logger.info("[django-razorpay] Webhook received: %s %s", event.event, event.id)
        return cls.process(event)

    @classmethod
    def _handle_payment_authorized(cls, event: PaymentAuthorizedEvent) -> None:
        """Payment authorized but not yet captured."""
        logger.info("[django-razorpay] Payment authorized: %s", event.payment_id)
        signals.payment_authorized.send(sender=cls, event=event)

    @classmethod
    def _handle_payment_captured(cls, event: PaymentCapturedEvent) -> None:
        logger.info("[django-razorpay] Payment captured: %s", event.payment_id)
        signals.payment_captured.send(sender=cls, event=event)

    @classmethod
    def _handle_payment_failed(cls, event: PaymentFailedEvent) -> None:
        entity = event.payload.payment.entity
        logger.info(
            "[django-razorpay] Payment failed: %s %s",
            entity.id,
            entity.error_description or "",
        )
        signals.payment_failed.send(sender=cls, event=event)

    @classmethod
    def _handle_order_paid(cls, event: OrderPaidEvent) -> None:
        logger.info("[django-razorpay] Order paid: %s", event.order_id)
        signals.order_paid.send(sender=cls, event=event)

    @classmethod
    def _handle_refund_created(cls, event: RefundCreatedEvent) -> None:
        logger.info(
            "[django-razorpay] Refund created: %s for payment %s",
            event.refund_id,
            event.payment_id,
        )
        signals.refund_created.send(sender=cls, event=event)
