"""
Razorpay REST API client.

Provides a Django-friendly interface to the Razorpay Orders API with
configuration taken from Django settings.
"""
import logging
from typing import Any, Optional

import httpx

from .conf import settings
from .constants import ORDERS_URL, SHIPPING_LOGIN_URL, SHIPPING_TOKEN_TTL_SECONDS
from .exceptions import ConfigurationError, GatewayError
from .token_cache import TokenCache

logger = logging.getLogger(__name__)


class RazorpayClient:
    """
    Thin httpx wrapper around the Razorpay Orders API.

    Automatically uses credentials from Django settings.
    """

    def __init__(
        self,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        """
        Initialize the Razorpay client.

        Args:
            key_id: API key id (defaults to settings.KEY_ID)
            key_secret: API key secret (defaults to settings.KEY_SECRET)
            base_url: API base URL (defaults to settings.API_BASE_URL)
            timeout: Request timeout in seconds
        """
        self.key_id = key_id or settings.KEY_ID
        self.key_secret = key_secret or settings.KEY_SECRET
        self.base_url = base_url or settings.API_BASE_URL
        self.timeout = timeout or settings.HTTP_TIMEOUT

        if not self.key_id or not self.key_secret:
            raise ConfigurationError(
                "DJANGO_RAZORPAY_KEY_ID and DJANGO_RAZORPAY_KEY_SECRET must be set"
            )

    def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = httpx.post(
                f"{self.base_url}{path}",
                json=payload,
                auth=(self.key_id, self.key_secret),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "[django-razorpay] Gateway returned %s for %s",
                e.response.status_code,
                path,
            )
            raise GatewayError(f"Gateway error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error("[django-razorpay] Gateway request failed: %s", e)
            raise GatewayError("Gateway unreachable") from e

        return response.json()

    def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """
        Create a gateway order.

        Args:
            amount: Amount in the smallest currency unit (paise)
            currency: ISO currency code
            receipt: Merchant receipt reference
            notes: Free-form key/value notes

        Returns:
            dict with at least id, amount and currency

        Raises:
            GatewayError: If the gateway call fails
        """
        logger.info(
            "[django-razorpay] Creating order receipt=%s amount=%s", receipt, amount
        )
        return self._post(
            ORDERS_URL,
            {
                "amount": amount,
                "currency": currency,
                "receipt": receipt,
                "notes": notes or {},
            },
        )


class ShippingTokenProvider:
    """
    Logs in to the shipping carrier API and caches the bearer token.

    The cache is injected so callers and tests control its lifetime.
    """

    def __init__(
        self,
        cache: Optional[TokenCache] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        self.cache = cache or TokenCache(ttl=SHIPPING_TOKEN_TTL_SECONDS)
        self.email = email or settings.SHIPPING_EMAIL
        self.password = password or settings.SHIPPING_PASSWORD
        self.base_url = base_url or settings.SHIPPING_API_BASE_URL

    def _login(self) -> str:
        if not self.email or not self.password:
            raise ConfigurationError("Shipping carrier credentials not configured")

        try:
            response = httpx.post(
                f"{self.base_url}{SHIPPING_LOGIN_URL}",
                json={"email": self.email, "password": self.password},
                timeout=settings.HTTP_TIMEOUT,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise GatewayError("Failed to authenticate with shipping carrier") from e

        logger.info("[django-razorpay] Authenticated with shipping carrier")
        return response.json()["token"]

    def get_token(self) -> str:
        return self.cache.get(self._login)

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.get_token()}"}
