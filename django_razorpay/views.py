import json
import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from django_razorpay.constants import SIGNATURE_HEADER
from django_razorpay.exceptions import (
    ConfigurationError,
    GatewayError,
    ProcessingFailure,
    ProductNotFound,
    RequestValidationError,
    SignatureInvalid,
)
from django_razorpay.schemas import (
    CodValidationRequest,
    CreateOrderRequest,
    VerifyPaymentRequest,
    validate_request,
)
from django_razorpay.services import (
    OrderTotalVerifier,
    PaymentService,
    WebhookProcessor,
)
from django_razorpay.utils import get_user_id, money_to_json

logger = logging.getLogger(__name__)


def _parse_json_body(request: HttpRequest) -> tuple[dict | None, JsonResponse | None]:
    """
    Parse JSON body from request.

    Returns:
        (data, None) on success
        (None, error_response) on failure
    """
    try:
        return json.loads(request.body), None
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None, JsonResponse({"error": "Invalid JSON"}, status=400)


def _validation_error(error: RequestValidationError, **extra) -> JsonResponse:
    return JsonResponse(
        {"error": error.message, "details": error.details, **extra}, status=400
    )


@require_http_methods(["POST"])
def validate_cod(request):
    data, error = _parse_json_body(request)
    if error:
        return error

    try:
        body = validate_request(CodValidationRequest, data)
        verified = OrderTotalVerifier().verify(body.cart_items, body.coupon_code)
    except RequestValidationError as e:
        return _validation_error(e)
    except ProductNotFound as e:
        return JsonResponse({"error": str(e)}, status=400)
    except Exception:
        logger.exception("[django-razorpay] COD validation failed")
        return JsonResponse({"error": "Verification failed"}, status=500)

    logger.info(
        "[django-razorpay] COD order verified for user %s", get_user_id(request)
    )
    return JsonResponse({"verified": True, **verified.as_dict()})


@require_http_methods(["POST"])
def create_order(request):
    data, error = _parse_json_body(request)
    if error:
        return error

    try:
        body = validate_request(CreateOrderRequest, data)
        order = PaymentService.create_order(
            body.cart_items,
            body.coupon_code,
            receipt=body.receipt,
            notes=body.notes,
        )
    except RequestValidationError as e:
        return _validation_error(e)
    except ProductNotFound as e:
        return JsonResponse({"error": str(e)}, status=400)
    except ConfigurationError:
        logger.error("[django-razorpay] Gateway credentials not configured")
        return JsonResponse({"error": "Payment gateway not configured"}, status=503)
    except GatewayError:
        return JsonResponse({"error": "Failed to create payment order"}, status=502)
    except Exception:
        logger.exception("[django-razorpay] Failed to create gateway order")
        return JsonResponse({"error": "Failed to create payment order"}, status=500)

    verified = order.verified_order
    return JsonResponse(
        {
            "orderId": order.order_id,
            "amount": order.amount,
            "currency": order.currency,
            "verifiedTotal": money_to_json(verified.verified_total),
            "discount": money_to_json(verified.discount),
            "finalTotal": money_to_json(verified.final_total),
        }
    )


@require_http_methods(["POST"])
def verify_payment(request):
    data, error = _parse_json_body(request)
    if error:
        return error

    try:
        body = validate_request(VerifyPaymentRequest, data)
        result = PaymentService.verify_payment(
            order_id=body.razorpay_order_id,
            payment_id=body.razorpay_payment_id,
            signature=body.razorpay_signature,
            user_id=get_user_id(request),
            order_details=body.order_details,
        )
    except RequestValidationError as e:
        return _validation_error(e, verified=False)
    except ConfigurationError:
        logger.error("[django-razorpay] DJANGO_RAZORPAY_KEY_SECRET not configured")
        return JsonResponse(
            {"error": "Payment verification not configured"}, status=503
        )
    except SignatureInvalid:
        return JsonResponse(
            {"error": "Payment verification failed", "verified": False}, status=400
        )
    except Exception:
        logger.exception("[django-razorpay] Payment verification error")
        return JsonResponse(
            {"error": "Payment verification failed", "verified": False}, status=500
        )

    return JsonResponse(
        {
            "verified": result.verified,
            "already_processed": result.already_processed,
            "payment_id": result.payment_id,
            "order_id": result.order_id,
            "message": (
                "Payment already verified"
                if result.already_processed
                else "Payment verified successfully"
            ),
        }
    )


@csrf_exempt
@require_http_methods(["POST"])
def webhook(request):
    """
    Razorpay webhook endpoint.

    Answers 2xx only once the event is durably recorded (or deliberately
    ignored); any processing failure answers 5xx so the gateway retries.
    """
    try:
        result = WebhookProcessor.handle(
            request.body, request.headers.get(SIGNATURE_HEADER)
        )
    except ConfigurationError:
        logger.error("[django-razorpay] DJANGO_RAZORPAY_WEBHOOK_SECRET not configured")
        return JsonResponse({"error": "Webhook not configured"}, status=503)
    except SignatureInvalid:
        logger.warning("[django-razorpay] Webhook signature verification failed")
        return JsonResponse({"error": "Invalid signature"}, status=401)
    except RequestValidationError as e:
        logger.warning("[django-razorpay] Rejected webhook: %s", e.message)
        return _validation_error(e)
    except ProcessingFailure as e:
        return JsonResponse(
            {"received": False, "error": "Processing failed", "event_id": e.event_id},
            status=500,
        )
    except Exception:
        logger.exception("[django-razorpay] Webhook error")
        return JsonResponse({"received": False, "error": "Internal error"}, status=500)

    return JsonResponse(
        {
            "received": True,
            "already_processed": result.already_processed,
            "event_id": result.event_id,
            "event_type": result.event_type,
        }
    )
