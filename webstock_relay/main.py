"""
main.py — FastAPI Entry Point for the Shopify → WebStock Relay

This module provides the webhook interface between Shopify and the relay workflow.

Responsibilities:
    • Verify Shopify webhook signatures over the raw request body
    • Parse order / fulfillment payloads
    • Hand qualifying events to the relay workflow and map its outcome to HTTP
    • Provide system health information
"""

import json
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from .articles import ArticleResolver
from .clients import ShopifyClient, WebStockClient
from .config import Settings
from .errors import RelayError
from .gate import TriggerGate
from .logging_config import get_logger, setup_logging
from .models import FulfillmentEvent, RelayOutcome, ShopifyOrder
from .registry import InMemorySentOrderRegistry, SentOrderRegistry
from .signature import SIGNATURE_HEADER, SignatureVerifier
from .transformer import OrderTransformer
from .workflow import RelayWorkflow

log = get_logger(__name__)


def create_app(
        settings: Optional[Settings] = None,
        registry: Optional[SentOrderRegistry] = None,
        webstock: Optional[WebStockClient] = None,
        shopify: Optional[ShopifyClient] = None
) -> FastAPI:
    """
    Builds the FastAPI application and wires all components from one Settings object.

    Args:
        settings (Settings): Configuration; read from the environment when omitted.
        registry (SentOrderRegistry): Dedupe store; in-memory when omitted.
        webstock (WebStockClient): Outbound submitter; built from settings when omitted.
        shopify (ShopifyClient): Order re-fetch client; built from settings when omitted.

    Returns:
        FastAPI: The configured application.
    """
    settings = settings or Settings()
    setup_logging(settings)

    verifier = SignatureVerifier(settings.SHOPIFY_WEBHOOK_SECRET)
    gate = TriggerGate(
        policy=settings.GATING_POLICY,
        qualifying_statuses=settings.get_qualifying_statuses(),
        registry=registry if registry is not None else InMemorySentOrderRegistry(),
        mark_mode=settings.MARK_SENT,
    )
    transformer = OrderTransformer(settings, ArticleResolver(settings.ARTICLE_MAPPING))
    webstock = webstock or WebStockClient(settings)
    shopify = shopify or ShopifyClient(settings)
    workflow = RelayWorkflow(gate, transformer, webstock, shopify)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info(f"Relay-Service startet. Gating-Policy: {gate.policy.value}, "
                 f"qualifizierende Status: {sorted(gate.qualifying_statuses)}, Markierung: {gate.mark_mode.value}")
        yield
        await webstock.aclose()
        await shopify.aclose()
        log.info("Relay-Service gestoppt.")

    app = FastAPI(title="Shopify → WebStock Relay", lifespan=lifespan)
    app.state.settings = settings
    app.state.gate = gate
    app.state.workflow = workflow

    async def read_webhook(request: Request, model, topic: str):
        """
        Verifies and parses a webhook body. Returns (payload, None) on success or
        (None, error_response).
        """
        raw_body = await request.body()

        if not verifier.verify(raw_body, request.headers.get(SIGNATURE_HEADER)):
            log.warning(f"Ungültiger Shopify-Webhook ({topic})")
            return None, PlainTextResponse("Unauthorized", status_code=401)

        try:
            data = json.loads(raw_body)
        except ValueError as e:
            log.error(f"JSON parse error ({topic}): {e}")
            return None, PlainTextResponse("Invalid JSON", status_code=400)

        try:
            return model.model_validate(data), None
        except ValidationError as e:
            log.error(f"Ungültiger Payload ({topic}): {e.error_count()} Fehler")
            return None, PlainTextResponse("Invalid payload", status_code=400)

    async def run(handler, payload, topic: str) -> PlainTextResponse:
        try:
            result = await handler(payload)
        except RelayError as e:
            log.error(f"Fehler während WebStock-Push ({topic}): {e}")
            return PlainTextResponse("Server error", status_code=500)
        except Exception as e:
            log.critical(f"Unbekannter Fehler im Workflow ({topic}): {e}", exc_info=True)
            return PlainTextResponse("Server error", status_code=500)
        return PlainTextResponse(result.outcome.value, status_code=200)

    # Health Check Endpoints
    @app.get("/")
    def index():
        return {
            "ok": True,
            "service": "Shopify -> WebStock",
            "time": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/health")
    def health_check():
        """
        Simple health check endpoint for monitoring systems and container orchestrators.
        """
        return {"status": "ok"}

    # Webhook: orders/updated (Shopify → Relay)
    @app.post("/webhooks/shopify/orders-updated")
    async def orders_updated(request: Request):
        """
        Receives a Shopify orders/updated webhook.

        Responses:
            401 on signature failure, 400 on a malformed body, 500 if WebStock fails,
            otherwise 200 with "No action", "Order already sent" or "Order sent to WebStock".
        """
        order, error = await read_webhook(request, ShopifyOrder, "orders-updated")
        if error:
            return error
        return await run(workflow.handle_order, order, "orders-updated")

    # Webhook: fulfillments/update (Shopify → Relay)
    @app.post("/webhooks/shopify/fulfillments-updated")
    async def fulfillments_updated(request: Request):
        """
        Receives a Shopify fulfillments/update webhook. Under the `fulfillment_event`
        policy a qualifying event re-fetches the order from Shopify before pushing it.
        """
        event, error = await read_webhook(request, FulfillmentEvent, "fulfillments-updated")
        if error:
            return error
        return await run(workflow.handle_fulfillment, event, "fulfillments-updated")

    # Webhook: orders/create is acknowledged but never pushed
    @app.post("/webhooks/shopify/orders-create")
    async def orders_create(request: Request):
        raw_body = await request.body()
        if not verifier.verify(raw_body, request.headers.get(SIGNATURE_HEADER)):
            log.warning("Ungültiger Shopify-Webhook (orders-create)")
            return PlainTextResponse("Unauthorized", status_code=401)
        log.info("orders-create Webhook erhalten. Wird ignoriert.")
        return PlainTextResponse(RelayOutcome.IGNORED.value, status_code=200)

    return app


app = create_app()
