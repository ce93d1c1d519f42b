"""Shopify webhook signature verification (HMAC-SHA256, base64).

The digest must be computed over the raw request bytes before any JSON parsing:
re-serializing the payload changes the byte sequence and breaks the check.
"""

import base64
import hashlib
import hmac
import logging
from typing import Optional, Union

log = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Shopify-Hmac-Sha256"


def compute_signature(secret: str, raw_body: bytes) -> str:
    """Return the base64 HMAC-SHA256 digest Shopify sends for `raw_body`."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


class SignatureVerifier:
    """
    Verifies that a webhook body was signed with the shared Shopify secret.

    An unconfigured secret rejects every request (fail-closed).
    """

    def __init__(self, secret: str):
        self._secret = secret or ""
        if not self._secret:
            log.warning("SHOPIFY_WEBHOOK_SECRET nicht gesetzt. Alle Webhooks werden abgelehnt.")

    def verify(self, raw_body: bytes, provided_signature: Optional[Union[str, bytes]]) -> bool:
        """
        Checks the signature header against the raw request body.

        Args:
            raw_body (bytes): The unparsed request body.
            provided_signature (str): Value of the X-Shopify-Hmac-Sha256 header.

        Returns:
            bool: True only if the signature matches. Never raises.
        """
        if not self._secret or not provided_signature:
            return False

        expected = compute_signature(self._secret, raw_body)
        try:
            if isinstance(provided_signature, str):
                provided_signature = provided_signature.encode("utf-8")
            return hmac.compare_digest(expected.encode("utf-8"), provided_signature)
        except (TypeError, ValueError, UnicodeError):
            return False
