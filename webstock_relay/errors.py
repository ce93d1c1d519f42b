"""Exceptions raised by the relay when an outbound call fails."""

from typing import Optional


class RelayError(Exception):
    """Base exception for all relay failures that end in HTTP 500."""

    pass


class SubmissionError(RelayError):
    """Raised when WebStock rejects an order or cannot be reached.

    `status_code` is None for transport errors and timeouts.
    """

    def __init__(self, status_code: Optional[int], body: str):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            msg = f"WebStock not reachable: {body}"
        else:
            msg = f"WebStock {status_code}: {body}"
        super().__init__(msg)


class UpstreamFetchError(RelayError):
    """Raised when an order cannot be re-fetched from Shopify."""

    def __init__(self, order_id: str, status_code: Optional[int], body: str):
        self.order_id = order_id
        self.status_code = status_code
        self.body = body
        super().__init__(f"Shopify order {order_id} fetch failed ({status_code}): {body}")
