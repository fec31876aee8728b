import logging
from collections.abc import Iterable
from decimal import Decimal

from django.db.models import Q

from django_razorpay.conf import settings as app_settings
from django_razorpay.exceptions import ProductNotFound
from django_razorpay.models import Product
from django_razorpay.utils import chunked, parse_price

logger = logging.getLogger(__name__)


class PriceOracle:
    """
    Resolves authoritative unit prices from the catalog.

    Client-supplied prices are never an input here. Lookups are batched so
    each ``__in`` filter carries at most ``batch_size`` values.
    """

    def __init__(self, batch_size: int | None = None):
        self.batch_size = batch_size or app_settings.PRICE_LOOKUP_BATCH_SIZE

    def resolve(self, product_ids: Iterable[str]) -> dict[str, Decimal]:
        """
        Map each resolvable product id to its unit price.

        A product is registered under both its document id and its catalog
        id, so a cart may use either. Inactive products and ids without a
        usable price are absent from the result.
        """
        unique_ids = list(dict.fromkeys(str(pid) for pid in product_ids))
        prices: dict[str, Decimal] = {}

        for chunk in chunked(unique_ids, self.batch_size):
            products = Product.objects.filter(
                Q(doc_id__in=chunk) | Q(catalog_id__in=chunk), is_active=True
            )
            for product in products:
                price = parse_price(product.price)
                if not price:
                    logger.warning(
                        "[django-razorpay] Unusable price %r for product %s",
                        product.price,
                        product.doc_id,
                    )
                    continue

                prices[product.doc_id] = price
                if product.catalog_id:
                    prices[product.catalog_id] = price

        return prices

    def require(self, product_ids: Iterable[str]) -> dict[str, Decimal]:
        """
        Like resolve(), but every id must have a price.

        Raises:
            ProductNotFound: For the first id (in input order) without a price
        """
        product_ids = [str(pid) for pid in product_ids]
        prices = self.resolve(product_ids)

        for product_id in product_ids:
            if product_id not in prices:
                logger.info("[django-razorpay] Product not found: %s", product_id)
                raise ProductNotFound(product_id)

        return prices
