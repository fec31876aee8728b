"""
Request and webhook payload schemas.

Everything arriving from a client or from the gateway is validated here
before any service code touches it. Webhook events are a tagged union keyed
by the ``event`` name, so handlers only ever see a payload whose shape was
checked for that event type.
"""
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
)

from django_razorpay.constants import (
    MAX_CART_ITEMS,
    MAX_ITEM_QUANTITY,
    WebhookEventType,
)
from django_razorpay.exceptions import RequestValidationError

# --- Client requests ---------------------------------------------------------


class CartItem(BaseModel):
    """Untrusted cart line. Any client-side price is ignored."""

    product_id: str = Field(
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("productId", "id", "product_id"),
    )
    quantity: int = Field(ge=1, le=MAX_ITEM_QUANTITY)


class CodValidationRequest(BaseModel):
    cart_items: list[CartItem] = Field(
        min_length=1,
        max_length=MAX_CART_ITEMS,
        validation_alias=AliasChoices("cartItems", "cart_items"),
    )
    coupon_code: str | None = Field(
        default=None,
        max_length=50,
        validation_alias=AliasChoices("couponCode", "coupon_code"),
    )


class CreateOrderRequest(CodValidationRequest):
    receipt: str | None = Field(default=None, max_length=40)
    notes: dict[str, str] | None = None


class VerifyPaymentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    razorpay_order_id: str = Field(pattern=r"^order_[a-zA-Z0-9]+$")
    razorpay_payment_id: str = Field(pattern=r"^pay_[a-zA-Z0-9]+$")
    razorpay_signature: str = Field(min_length=64, max_length=64)
    order_details: Any | None = None


# --- Webhook entities --------------------------------------------------------


class _Entity(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = Field(min_length=1)


class PaymentEntity(_Entity):
    amount: int = Field(ge=0)
    status: str
    order_id: str | None = None
    error_description: str | None = None


class OrderEntity(_Entity):
    amount: int | None = None
    status: str | None = None


class RefundEntity(_Entity):
    payment_id: str | None = None
    amount: int | None = None


class PaymentContainer(BaseModel):
    entity: PaymentEntity


class OrderContainer(BaseModel):
    entity: OrderEntity


class RefundContainer(BaseModel):
    entity: RefundEntity


class PaymentPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    payment: PaymentContainer


class OrderPaidPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    order: OrderContainer
    payment: PaymentContainer | None = None


class RefundPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    refund: RefundContainer
    payment: PaymentContainer | None = None


# --- Webhook events ----------------------------------------------------------

EVENT_ID_PATTERN = r"^evt_[a-zA-Z0-9]+$"


class _BaseEvent(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = Field(pattern=EVENT_ID_PATTERN)
    created_at: int | None = None

    @property
    def payment_id(self) -> str | None:
        return None


class _PaymentEvent(_BaseEvent):
    payload: PaymentPayload

    @property
    def payment_id(self) -> str | None:
        return self.payload.payment.entity.id


class PaymentAuthorizedEvent(_PaymentEvent):
    event: Literal["payment.authorized"]


class PaymentCapturedEvent(_PaymentEvent):
    event: Literal["payment.captured"]


class PaymentFailedEvent(_PaymentEvent):
    event: Literal["payment.failed"]


class OrderPaidEvent(_BaseEvent):
    event: Literal["order.paid"]
    payload: OrderPaidPayload

    @property
    def order_id(self) -> str:
        return self.payload.order.entity.id

    @property
    def payment_id(self) -> str | None:
        if self.payload.payment is None:
            return None
        return self.payload.payment.entity.id


class RefundCreatedEvent(_BaseEvent):
    event: Literal["refund.created"]
    payload: RefundPayload

    @property
    def refund_id(self) -> str:
        return self.payload.refund.entity.id

    @property
    def payment_id(self) -> str | None:
        if self.payload.refund.entity.payment_id:
            return self.payload.refund.entity.payment_id
        if self.payload.payment is not None:
            return self.payload.payment.entity.id
        return None


class UnknownEvent(_BaseEvent):
    """Any event type this app does not act on."""

    event: str
    payload: dict[str, Any] = Field(default_factory=dict)


KnownWebhookEvent = Annotated[
    Union[
        PaymentAuthorizedEvent,
        PaymentCapturedEvent,
        PaymentFailedEvent,
        OrderPaidEvent,
        RefundCreatedEvent,
    ],
    Field(discriminator="event"),
]

WebhookEvent = Union[
    PaymentAuthorizedEvent,
    PaymentCapturedEvent,
    PaymentFailedEvent,
    OrderPaidEvent,
    RefundCreatedEvent,
    UnknownEvent,
]

_known_event_adapter = TypeAdapter(KnownWebhookEvent)
_KNOWN_EVENT_NAMES = {event_type.value for event_type in WebhookEventType}


def format_validation_errors(exc: ValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]


def validate_request(model: type[BaseModel], data: Any) -> BaseModel:
    """
    Validate a decoded request body against ``model``.

    Raises:
        RequestValidationError: With field-level details
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(
            "Invalid request data", details=format_validation_errors(e)
        ) from e


def parse_webhook_event(data: Any) -> WebhookEvent:
    """
    Validate a decoded webhook body into its event variant.

    Raises:
        RequestValidationError: If the body does not match its event's shape
    """
    event_name = data.get("event") if isinstance(data, dict) else None
    known = isinstance(event_name, str) and event_name in _KNOWN_EVENT_NAMES
    model = _known_event_adapter if known else None

    try:
        if model is not None:
            return model.validate_python(data)
        return UnknownEvent.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(
            "Invalid webhook payload", details=format_validation_errors(e)
        ) from e
