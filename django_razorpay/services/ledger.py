import logging
from dataclasses import dataclass

from django.db import IntegrityError, models, transaction

from django_razorpay.models import ProcessedPayment, ProcessedWebhookEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerEntry:
    already_processed: bool
    record: models.Model | None = None


class IdempotencyLedger:
    """
    Keyed "already processed" markers.

    The row's existence is the only idempotency signal. Writes are
    create-if-absent on the primary key, so two racing writers cannot both
    record the same key: the loser sees ``already_processed=True``.
    """

    def __init__(self, model: type[models.Model]):
        self.model = model

    @property
    def key_field(self) -> str:
        return self.model._meta.pk.name

    def check(self, key: str) -> LedgerEntry:
        record = self.model.objects.filter(pk=key).first()
        return LedgerEntry(already_processed=record is not None, record=record)

    def record(self, key: str, **fields) -> LedgerEntry:
        """
        Durably record ``key`` as processed.

        Returns:
            LedgerEntry with already_processed=False if this call created the
            row, or True with the existing row if another writer got there first.
        """
        try:
            with transaction.atomic():
                record = self.model.objects.create(**{self.key_field: key}, **fields)
        except IntegrityError:
            record = self.model.objects.get(pk=key)
            logger.info(
                "[django-razorpay] %s %s already recorded",
                self.model.__name__,
                key,
            )
            return LedgerEntry(already_processed=True, record=record)

        logger.debug("[django-razorpay] Recorded %s %s", self.model.__name__, key)
        return LedgerEntry(already_processed=False, record=record)


payment_ledger = IdempotencyLedger(ProcessedPayment)
webhook_ledger = IdempotencyLedger(ProcessedWebhookEvent)
