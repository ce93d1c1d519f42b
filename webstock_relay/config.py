"""
config.py — Central Configuration for the Relay Service

All settings are read once at process start (environment variables or a `.env`
file) and handed to each component explicitly. Nothing reads the environment at
import time.
"""

import json
from enum import Enum
from typing import Dict, FrozenSet

from pydantic_settings import BaseSettings, SettingsConfigDict


class GatingPolicy(str, Enum):
    """Which fulfillment indicator decides whether an order is pushed."""
    ORDER_STATUS = "order_status"
    NESTED_FULFILLMENTS = "nested_fulfillments"
    FULFILLMENT_EVENT = "fulfillment_event"


class MarkSentMode(str, Enum):
    """When an order id is written to the sent-order registry."""
    BEFORE_SUBMIT = "before_submit"
    AFTER_SUCCESS = "after_success"


class AddressBlock(str, Enum):
    """Which WebStock address block(s) receive the shipping address."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    BOTH = "both"


DEFAULT_ARTICLE_MAPPING = {
    "fruit punch": "8720892642738",
    "blue razzberry": "8720892642714",
    "juicy mango": "8720892642752",
    "orange blast": "8720892642776",
}


class Settings(BaseSettings):
    """Relay configuration"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "relay.log"

    # Shopify
    SHOPIFY_WEBHOOK_SECRET: str = ""
    SHOPIFY_STORE_URL: str = ""
    SHOPIFY_ACCESS_TOKEN: str = ""
    SHOPIFY_API_VERSION: str = "2024-01"

    # WebStock
    WEBSTOCK_BASE_URL: str = "https://altena.webstock.nl/wsapp/api/v1"
    WEBSTOCK_USER: str = ""
    WEBSTOCK_PASS: str = ""
    WEBSTOCK_WAREHOUSE: str = "Test"
    WEBSTOCK_ORDER_PREFIX: str = "GWT"

    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Deployment behaviour
    GATING_POLICY: GatingPolicy = GatingPolicy.ORDER_STATUS
    # Comma-separated ("fulfilled,in progress") or a JSON array
    QUALIFYING_STATUSES: str = "fulfilled"
    MARK_SENT: MarkSentMode = MarkSentMode.BEFORE_SUBMIT
    ADDRESS_BLOCK: AddressBlock = AddressBlock.PRIMARY
    FOLD_ADDRESS_LINE2: bool = False

    # Product title -> EAN, JSON object in the environment
    ARTICLE_MAPPING: Dict[str, str] = dict(DEFAULT_ARTICLE_MAPPING)

    def get_qualifying_statuses(self) -> FrozenSet[str]:
        """Parse QUALIFYING_STATUSES into a set of lowercase status values"""
        raw = (self.QUALIFYING_STATUSES or "").strip()
        if not raw:
            return frozenset()

        try:
            values = json.loads(raw)
            if isinstance(values, list):
                return frozenset(str(v).strip().lower() for v in values if str(v).strip())
        except (json.JSONDecodeError, ValueError):
            pass

        return frozenset(v.strip().lower() for v in raw.split(",") if v.strip())
