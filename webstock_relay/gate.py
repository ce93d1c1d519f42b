"""
gate.py — Trigger Gate

Decides whether an inbound Shopify event should result in a WebStock push and
makes sure each order is pushed at most once.

Gating policies (one per deployment, see `GatingPolicy`):
    - order_status:         order.fulfillment_status is a qualifying value
    - nested_fulfillments:  any order.fulfillments[*].status is a qualifying value
    - fulfillment_event:    a separate fulfillments/update event carries a qualifying status

Mark-sent modes (see `MarkSentMode`):
    - before_submit: the id is registered when claimed. A failed submission is never
                     retried (never double-ship).
    - after_success: the id is only reserved while in flight and registered after a
                     successful submission. A failed submission frees the reservation.
"""

import logging
import threading
from typing import Iterable, Set

from .config import GatingPolicy, MarkSentMode
from .models import FulfillmentEvent, ShopifyOrder
from .registry import SentOrderRegistry

log = logging.getLogger(__name__)


def _normalize_status(status) -> str:
    return str(status or "").strip().lower()


class TriggerGate:
    def __init__(
            self,
            policy: GatingPolicy,
            qualifying_statuses: Iterable[str],
            registry: SentOrderRegistry,
            mark_mode: MarkSentMode = MarkSentMode.BEFORE_SUBMIT
    ):
        self.policy = GatingPolicy(policy)
        self.qualifying_statuses = frozenset(_normalize_status(s) for s in qualifying_statuses)
        self.registry = registry
        self.mark_mode = MarkSentMode(mark_mode)
        self._in_flight: Set[str] = set()
        self._lock = threading.Lock()

    # --- State check ---

    def is_qualifying(self, status) -> bool:
        return _normalize_status(status) in self.qualifying_statuses

    def order_qualifies(self, order: ShopifyOrder) -> bool:
        """
        Checks the fulfillment state carried by the order itself.

        Always False under the `fulfillment_event` policy, which only reacts to
        fulfillment-update events.
        """
        if self.policy == GatingPolicy.ORDER_STATUS:
            return self.is_qualifying(order.fulfillment_status)
        if self.policy == GatingPolicy.NESTED_FULFILLMENTS:
            return any(self.is_qualifying(f.status) for f in order.fulfillments)
        return False

    def fulfillment_qualifies(self, event: FulfillmentEvent) -> bool:
        if self.policy != GatingPolicy.FULFILLMENT_EVENT:
            return False
        return self.is_qualifying(event.status)

    # --- Deduplication ---

    def is_sent(self, order_id: str) -> bool:
        return order_id in self.registry

    def claim(self, order_id: str) -> bool:
        """
        Claims the order for submission. Returns False if it was already sent or
        another request is currently submitting it.
        """
        if self.mark_mode == MarkSentMode.BEFORE_SUBMIT:
            return self.registry.add_if_absent(order_id)

        with self._lock:
            if order_id in self._in_flight or order_id in self.registry:
                return False
            self._in_flight.add(order_id)
            return True

    def confirm(self, order_id: str):
        """Marks a claimed order as successfully submitted."""
        if self.mark_mode == MarkSentMode.BEFORE_SUBMIT:
            return
        with self._lock:
            self.registry.add_if_absent(order_id)
            self._in_flight.discard(order_id)

    def release(self, order_id: str):
        """Gives up a claim after a failed submission."""
        if self.mark_mode == MarkSentMode.BEFORE_SUBMIT:
            log.warning(f"[Order: {order_id}] Bleibt als gesendet markiert. Kein automatischer Retry!")
            return
        with self._lock:
            self._in_flight.discard(order_id)
        log.info(f"[Order: {order_id}] Reservierung freigegeben. Order kann erneut gesendet werden.")
