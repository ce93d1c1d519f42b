"""
transformer.py — Shopify Order → WebStock SalesOrder

Pure mapping from the inbound Shopify order to the outbound WebStock document.
No I/O happens here; every field WebStock requires is always emitted, falling back
to an empty string, zero or null when Shopify has no value for it.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Dict

from .address import decompose
from .articles import ArticleResolver
from .config import AddressBlock, Settings
from .models import LineItem, SalesOrder, SalesOrderLine, ShippingAddress, ShopifyOrder

# Larger quantities are treated like non-numeric input
MAX_QUANTITY = 10 ** 9


def to_quantity(value) -> int:
    """Parse a quantity; absent, negative, oversized or non-numeric values become 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        quantity = Decimal(str(value).strip())
    except (ValueError, ArithmeticError):
        return 0
    if not quantity.is_finite() or quantity < 0 or quantity > MAX_QUANTITY:
        return 0
    return int(quantity)


def to_price(value) -> float:
    """Parse a decimal price string or number; anything unparsable or out of float range becomes 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        price = float(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError):
        return 0.0
    if not math.isfinite(price):
        return 0.0
    return price


class OrderTransformer:
    """
    Builds WebStock SalesOrders from Shopify orders.

    Args:
        settings (Settings): Supplies the order-number prefix, warehouse label and
            the address-block / address-line-2 options.
        resolver (ArticleResolver): Title → article number lookup.
    """

    def __init__(self, settings: Settings, resolver: ArticleResolver):
        self.order_prefix = settings.WEBSTOCK_ORDER_PREFIX
        self.warehouse = settings.WEBSTOCK_WAREHOUSE
        self.address_block = settings.ADDRESS_BLOCK
        self.fold_address_line2 = settings.FOLD_ADDRESS_LINE2
        self.resolver = resolver

    def transform(self, order: ShopifyOrder) -> SalesOrder:
        shipping = order.shipping_address or ShippingAddress()
        customer = order.customer

        first_name = (customer.first_name or "") if customer else ""
        last_name = (customer.last_name or "") if customer else ""
        customer_name = f"{first_name} {last_name}".strip() or shipping.name or order.name or ""
        email = order.email or order.contact_email or (customer.email if customer else None) or ""
        sequence = "" if order.order_number is None else order.order_number

        fields = {
            "SalesOrderExternId": order.id,
            "SalesOrderExternGuid": order.admin_graphql_api_id or "",
            "SalesOrderNumber": f"{self.order_prefix}{sequence}",
            "CustomerNumber": str(customer.id) if customer and customer.id else "",
            "CustomerName": customer_name,
            "CustomerContact": shipping.name or "",
            "CustomerEmail": email,
            "CustomerReference": order.name or "",
            "SalesOrderDescription": f"Shopify order {order.name or ''}".strip(),
            "WareHouse": self.warehouse,
            "OrderLines": [self.transform_line(item) for item in order.line_items],
        }

        if self.address_block in (AddressBlock.PRIMARY, AddressBlock.BOTH):
            fields.update(self._address_fields(order, shipping, email, "1"))
        if self.address_block in (AddressBlock.SECONDARY, AddressBlock.BOTH):
            fields.update(self._address_fields(order, shipping, email, "2"))
            fields["Address2Name"] = shipping.company or shipping.name or ""

        return SalesOrder(**fields)

    def transform_line(self, item: LineItem) -> SalesOrderLine:
        article = self.resolver.resolve(item)
        return SalesOrderLine(
            ArticleNumber=article.article_number,
            Eancode=article.ean,
            ProductName=item.title or "",
            ProductDescription=item.variant_title or item.title or "",
            QuantityOrdered=to_quantity(item.quantity),
            PricePerArticle=to_price(item.price),
        )

    def _address_fields(
            self, order: ShopifyOrder, shipping: ShippingAddress, email: str, block: str
    ) -> Dict[str, str]:
        parts = decompose(shipping.address1)
        addition = parts.addition
        if self.fold_address_line2 and shipping.address2:
            addition = f"{addition} {shipping.address2.strip()}".strip()

        return {
            f"AddressContactPerson{block}": shipping.name or "",
            f"AddressStreet{block}": parts.street,
            f"AddressHouseNumber{block}": parts.house_number,
            f"AddressHouseNumberAddition{block}": addition,
            f"AddressZipcode{block}": shipping.zip or "",
            f"AddressCity{block}": shipping.city or "",
            f"AddressCountry{block}": shipping.country_code or shipping.country or "",
            f"AddressPhonenumber{block}": shipping.phone or order.phone or "",
            f"AddressEmail{block}": email,
        }
