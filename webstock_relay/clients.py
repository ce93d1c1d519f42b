"""
This module provides communication clients for external systems used by the relay:
- WebStock (REST API, basic auth) — receives the translated sales orders
- Shopify Admin API (REST) — re-fetches a full order when only its id is known
Each class encapsulates its protocol logic, error handling, and connection management.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from .config import Settings
from .errors import SubmissionError, UpstreamFetchError
from .models import SalesOrder, ShopifyOrder

log = logging.getLogger(__name__)


# --- WebStock Client (REST) ---
class WebStockClient:
    """
    Client for the WebStock SalesOrders API.
    Submits orders and classifies the response.
    """
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initializes the HTTP client with basic auth and an explicit timeout.

        Args:
            settings (Settings): Supplies base URL, credentials and timeout.
            transport (httpx.AsyncBaseTransport): Optional transport override (used in tests).
        """
        self.client = httpx.AsyncClient(
            transport=transport,
            base_url=settings.WEBSTOCK_BASE_URL,
            auth=httpx.BasicAuth(settings.WEBSTOCK_USER, settings.WEBSTOCK_PASS),
            timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS),
        )

    async def aclose(self):
        """Closes the HTTP client session."""
        await self.client.aclose()

    async def submit_order(self, sales_order: SalesOrder) -> str:
        """
        Sends a sales order to WebStock.

        Args:
            sales_order (SalesOrder): The translated order document.
        Returns:
            str: WebStock's response body.
        Raises:
            SubmissionError: On any non-2xx response, timeout or transport error.
                Submissions are never retried here.
        """
        order_ref = sales_order.SalesOrderNumber
        try:
            response = await self.client.post("/SalesOrders", json=sales_order.model_dump())
        except httpx.TimeoutException as e:
            log.error(f"[Order: {order_ref}] WebStock Timeout. Status unbekannt: {e!r}")
            raise SubmissionError(None, f"timeout: {e!r}") from e
        except httpx.HTTPError as e:
            log.error(f"[Order: {order_ref}] WebStock nicht erreichbar: {e!r}")
            raise SubmissionError(None, repr(e)) from e

        text = response.text
        if not response.is_success:
            log.error(f"[Order: {order_ref}] WebStock Fehler: {response.status_code} {text}")
            raise SubmissionError(response.status_code, text)

        log.info(f"[Order: {order_ref}] WebStock OK: {text}")
        return text


# --- Shopify Client (REST) ---
class ShopifyClient:
    """
    Client for the Shopify Admin API.
    Only used when a fulfillment event has to be resolved to its full order.
    """
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_version = settings.SHOPIFY_API_VERSION
        self.client = httpx.AsyncClient(
            transport=transport,
            base_url=settings.SHOPIFY_STORE_URL,
            headers={"X-Shopify-Access-Token": settings.SHOPIFY_ACCESS_TOKEN},
            timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS),
        )

    async def aclose(self):
        await self.client.aclose()

    async def fetch_order(self, order_id: str) -> ShopifyOrder:
        """
        Fetches a full order by id.

        Args:
            order_id (str): Shopify order id.
        Returns:
            ShopifyOrder: The parsed `order` object of the response.
        Raises:
            UpstreamFetchError: On a non-2xx response, transport error or an
                unparsable body.
        """
        path = f"/admin/api/{self.api_version}/orders/{order_id}.json"
        try:
            response = await self.client.get(path)
        except httpx.HTTPError as e:
            log.error(f"[Order: {order_id}] Shopify nicht erreichbar: {e!r}")
            raise UpstreamFetchError(order_id, None, repr(e)) from e

        if not response.is_success:
            log.error(f"[Order: {order_id}] Shopify Fehler beim Abruf: {response.status_code} {response.text}")
            raise UpstreamFetchError(order_id, response.status_code, response.text)

        try:
            return ShopifyOrder.model_validate(response.json()["order"])
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            log.error(f"[Order: {order_id}] Ungültige Shopify-Antwort: {e}")
            raise UpstreamFetchError(order_id, response.status_code, response.text) from e
