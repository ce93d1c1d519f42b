"""
workflow.py — Core Orchestration Logic for the Relay

This module ties the components together for a single webhook event.

Workflow Overview:
1. Trigger Gate: does the event carry a qualifying fulfillment state?
2. Deduplication: was the order already sent (or is it being sent right now)?
3. (fulfillment events only) Re-fetch the full order from Shopify
4. Transform the Shopify order into a WebStock SalesOrder
5. Submit to WebStock and record the order as sent
"""

import logging

from .clients import ShopifyClient, WebStockClient
from .gate import TriggerGate
from .models import FulfillmentEvent, RelayOutcome, RelayResult, ShopifyOrder
from .transformer import OrderTransformer

log = logging.getLogger(__name__)


class RelayWorkflow:
    """
    Runs the gate → transform → submit pipeline.

    Args:
        gate (TriggerGate): State check and deduplication.
        transformer (OrderTransformer): Shopify → WebStock mapping.
        webstock (WebStockClient): Outbound submitter.
        shopify (ShopifyClient): Order re-fetch for fulfillment events.
    """

    def __init__(
            self,
            gate: TriggerGate,
            transformer: OrderTransformer,
            webstock: WebStockClient,
            shopify: ShopifyClient
    ):
        self.gate = gate
        self.transformer = transformer
        self.webstock = webstock
        self.shopify = shopify

    async def handle_order(self, order: ShopifyOrder) -> RelayResult:
        """
        Handles an orders/updated event that carries the full order.

        Returns:
            RelayResult: NO_ACTION, ALREADY_SENT or SENT.
        Raises:
            RelayError: If the WebStock submission fails.
        """
        order_ref = order.reference
        log_prefix = f"[Order: {order_ref}]"
        log.info(f"{log_prefix} Webhook erhalten. fulfillment_status={order.fulfillment_status}, "
                 f"financial_status={order.financial_status}, closed_at={order.closed_at}")

        if not self.gate.order_qualifies(order):
            log.info(f"{log_prefix} Kein qualifizierender Fulfillment-Status. Kein WebStock-Push.")
            return RelayResult(RelayOutcome.NO_ACTION, order_ref)

        return await self._relay(order)

    async def handle_fulfillment(self, event: FulfillmentEvent) -> RelayResult:
        """
        Handles a fulfillments/update event. The order is fetched from Shopify only
        after gating and the already-sent check, and claimed only after the fetch
        succeeded, so a failed fetch leaves the order eligible.

        Raises:
            RelayError: If the re-fetch or the WebStock submission fails.
        """
        order_id = str(event.order_id)
        log_prefix = f"[Order: {order_id}]"
        log.info(f"{log_prefix} Fulfillment-Update erhalten. status={event.status}")

        if not self.gate.fulfillment_qualifies(event):
            log.info(f"{log_prefix} Fulfillment-Status nicht qualifizierend. Kein WebStock-Push.")
            return RelayResult(RelayOutcome.NO_ACTION, order_id)

        if self.gate.is_sent(order_id):
            log.info(f"{log_prefix} Bereits an WebStock gesendet.")
            return RelayResult(RelayOutcome.ALREADY_SENT, order_id)

        log.info(f"{log_prefix} Lade vollständige Order von Shopify...")
        order = await self.shopify.fetch_order(order_id)
        return await self._relay(order)

    async def _relay(self, order: ShopifyOrder) -> RelayResult:
        order_id = str(order.id)
        order_ref = order.reference
        log_prefix = f"[Order: {order_ref}]"

        if not self.gate.claim(order_id):
            log.info(f"{log_prefix} Bereits an WebStock gesendet (oder in Bearbeitung).")
            return RelayResult(RelayOutcome.ALREADY_SENT, order_ref)

        try:
            sales_order = self.transformer.transform(order)
            log.info(f"{log_prefix} Sende an WebStock: {sales_order.SalesOrderNumber}, "
                     f"{len(sales_order.OrderLines)} Regeln")
            response_text = await self.webstock.submit_order(sales_order)
        except BaseException:
            # also covers cancellation, which must not leave the claim behind
            self.gate.release(order_id)
            raise

        self.gate.confirm(order_id)
        log.info(f"{log_prefix} Verarbeitung erfolgreich abgeschlossen.")
        return RelayResult(RelayOutcome.SENT, order_ref, response_text)
