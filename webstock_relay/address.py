"""Splits a Shopify `address1` line into street, house number and addition."""

import re
from dataclasses import dataclass

# street, then the last token starting with 1-5 ASCII digits, then any trailing
# letters / digits / "-" / "/" of that token
_ADDRESS_RE = re.compile(r"^(?P<street>.+?)\s+(?P<number>[0-9]{1,5}(?![0-9]))(?P<addition>[A-Za-z0-9/-]*)$")


@dataclass(frozen=True)
class DecomposedAddress:
    street: str
    house_number: str = ""
    addition: str = ""


def decompose(address_line) -> DecomposedAddress:
    """
    Decomposes a free-text address line.

    Examples:
        "Main Street 25"   -> ("Main Street", "25", "")
        "Main Street 12A"  -> ("Main Street", "12", "A")
        "Main Street 10-3" -> ("Main Street", "10", "-3")
        "NoNumberHere"     -> ("NoNumberHere", "", "")

    Without a trailing house number the whole line is returned as the street.
    """
    text = (address_line or "").strip()
    match = _ADDRESS_RE.match(text)
    if not match:
        return DecomposedAddress(street=text)

    return DecomposedAddress(
        street=match.group("street").strip(),
        house_number=match.group("number"),
        addition=match.group("addition"),
    )
