"""Pytest fixtures for relay tests."""

import copy
import os

# The module-level app in webstock_relay.main is built at import; no log file for it.
os.environ.setdefault("LOG_FILE", "")

import pytest

from webstock_relay.config import Settings
from webstock_relay.signature import compute_signature

SECRET = "shopify-test-secret"

ORDER_PAYLOAD = {
    "id": 5550001042,
    "admin_graphql_api_id": "gid://shopify/Order/5550001042",
    "name": "#1042",
    "order_number": 1042,
    "email": "jan@example.com",
    "phone": "+31600000000",
    "financial_status": "paid",
    "fulfillment_status": "fulfilled",
    "closed_at": None,
    "customer": {"id": 777, "first_name": "Jan", "last_name": "Jansen"},
    "shipping_address": {
        "name": "Jan Jansen",
        "company": "Jansen BV",
        "address1": "Kerkstraat 12A",
        "address2": "2e verdieping",
        "city": "Amsterdam",
        "zip": "1017 GC",
        "country": "Netherlands",
        "country_code": "NL",
        "phone": "+31611111111",
    },
    "line_items": [
        {"title": "Blue Razzberry", "sku": "BR-500", "quantity": 2, "price": "9.50", "variant_title": None},
    ],
    "fulfillments": [{"id": 1, "order_id": 5550001042, "status": "success"}],
}


def make_settings(**overrides) -> Settings:
    """Build settings that ignore the environment's .env file."""
    values = {
        "SHOPIFY_WEBHOOK_SECRET": SECRET,
        "SHOPIFY_STORE_URL": "https://shop.test",
        "SHOPIFY_ACCESS_TOKEN": "shpat_test",
        "WEBSTOCK_BASE_URL": "http://webstock.test",
        "WEBSTOCK_USER": "relay",
        "WEBSTOCK_PASS": "relay",
        "LOG_FILE": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def sign(body: bytes) -> str:
    return compute_signature(SECRET, body)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def order_payload():
    """A fresh, mutable copy of a qualifying Shopify order."""
    return copy.deepcopy(ORDER_PAYLOAD)
