"""Tests for PaymentService verification and gateway order creation."""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from django_razorpay import signals
from django_razorpay.client import RazorpayClient
from django_razorpay.exceptions import (
    ConfigurationError,
    RequestValidationError,
    SignatureInvalid,
)
from django_razorpay.models import Coupon, ProcessedPayment
from django_razorpay.schemas import CartItem
from django_razorpay.services import PaymentService
from tests.helpers import sign_payment

pytestmark = pytest.mark.django_db

ORDER_ID = "order_Abc123"
PAYMENT_ID = "pay_Xyz789"


class TestVerifyPayment:
    def test_valid_signature_records_payment(self, received_signals):
        result = PaymentService.verify_payment(
            ORDER_ID, PAYMENT_ID, sign_payment(ORDER_ID, PAYMENT_ID), user_id="7"
        )

        assert result.verified
        assert not result.already_processed
        record = ProcessedPayment.objects.get(pk=PAYMENT_ID)
        assert record.order_id == ORDER_ID
        assert record.user_id == "7"
        assert record.status == ProcessedPayment.Status.VERIFIED
        assert received_signals == [("payment_verified", PAYMENT_ID)]

    def test_second_verification_is_already_processed(self, received_signals):
        signature = sign_payment(ORDER_ID, PAYMENT_ID)
        PaymentService.verify_payment(ORDER_ID, PAYMENT_ID, signature)

        result = PaymentService.verify_payment(ORDER_ID, PAYMENT_ID, signature)

        assert result.verified
        assert result.already_processed
        assert result.order_id == ORDER_ID
        assert ProcessedPayment.objects.count() == 1
        assert len(received_signals) == 1

    def test_known_payment_short_circuits_before_signature(self):
        ProcessedPayment.objects.create(payment_id=PAYMENT_ID, order_id=ORDER_ID)

        result = PaymentService.verify_payment("order_Other", PAYMENT_ID, "0" * 64)

        assert result.already_processed
        assert result.order_id == ORDER_ID

    def test_tampered_signature_not_recorded(self, received_signals):
        signature = sign_payment(ORDER_ID, PAYMENT_ID)
        tampered = signature[:-1] + ("0" if signature[-1] != "0" else "1")

        with pytest.raises(SignatureInvalid):
            PaymentService.verify_payment(ORDER_ID, PAYMENT_ID, tampered)

        assert not ProcessedPayment.objects.exists()
        assert received_signals == []

    def test_missing_key_secret(self, settings):
        settings.DJANGO_RAZORPAY_KEY_SECRET = None

        with pytest.raises(ConfigurationError):
            PaymentService.verify_payment(ORDER_ID, PAYMENT_ID, "0" * 64)

        assert not ProcessedPayment.objects.exists()

    def test_failing_receiver_rolls_back_record(self):
        def broken_receiver(sender, **kwargs):
            raise RuntimeError("fulfilment down")

        signals.payment_verified.connect(broken_receiver)
        try:
            with pytest.raises(RuntimeError):
                PaymentService.verify_payment(
                    ORDER_ID, PAYMENT_ID, sign_payment(ORDER_ID, PAYMENT_ID)
                )
        finally:
            signals.payment_verified.disconnect(broken_receiver)

        assert not ProcessedPayment.objects.exists()

    def test_order_details_passed_to_receivers(self):
        calls = []

        def handler(sender, **kwargs):
            calls.append(dict(kwargs, sender=sender))

        signals.payment_verified.connect(handler)
        try:
            PaymentService.verify_payment(
                ORDER_ID,
                PAYMENT_ID,
                sign_payment(ORDER_ID, PAYMENT_ID),
                order_details={"address": "Pune"},
            )
        finally:
            signals.payment_verified.disconnect(handler)

        assert len(calls) == 1
        kwargs = calls[0]
        assert kwargs["sender"] is ProcessedPayment
        assert kwargs["record"].payment_id == PAYMENT_ID
        assert kwargs["order_details"] == {"address": "Pune"}


class TestCreateOrder:
    @pytest.fixture
    def mock_client(self, mocker):
        client = Mock(spec=RazorpayClient)
        client.create_order.return_value = {
            "id": "order_Gw123",
            "amount": 100000,
            "currency": "INR",
        }
        mocker.patch.object(PaymentService, "get_client", return_value=client)
        return client

    def test_creates_order_for_verified_total(self, products, mock_client):
        order = PaymentService.create_order(
            [CartItem(productId="doc-shirt", quantity=2)], receipt="rcpt_1"
        )

        assert order.order_id == "order_Gw123"
        assert order.amount == 100000
        assert order.verified_order.final_total == Decimal("1000")
        mock_client.create_order.assert_called_once_with(
            amount=100000, currency="INR", receipt="rcpt_1", notes=None
        )

    def test_coupon_reduces_gateway_amount(self, products, make_coupon, mock_client):
        make_coupon(value=Decimal("10"))

        PaymentService.create_order(
            [CartItem(productId="doc-shirt", quantity=2)], "SAVE10"
        )

        assert mock_client.create_order.call_args.kwargs["amount"] == 90000

    def test_default_receipt(self, products, mock_client):
        PaymentService.create_order([CartItem(productId="doc-shirt", quantity=1)])

        receipt = mock_client.create_order.call_args.kwargs["receipt"]
        assert receipt.startswith("order_")

    def test_below_minimum_amount(self, products, make_coupon, mock_client):
        make_coupon(coupon_type=Coupon.Type.FIXED, value=Decimal("500"))

        with pytest.raises(RequestValidationError):
            PaymentService.create_order(
                [CartItem(productId="doc-shirt", quantity=1)], "SAVE10"
            )

        mock_client.create_order.assert_not_called()
