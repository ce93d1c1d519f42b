"""
models.py — Data Models for the Shopify → WebStock Relay

Inbound models mirror the Shopify order and fulfillment webhook payloads. They are
deliberately lenient: unknown fields are ignored and numeric fields accept strings,
numbers or null, because coercion is the transformer's job and a sloppy value must
never reject the whole event.

Outbound models use the WebStock SalesOrders field names verbatim. WebStock expects
every key to be present, so every field has a default.

Models:
    - LineItem, ShippingAddress, Customer, Fulfillment, ShopifyOrder: inbound order payload.
    - FulfillmentEvent: inbound fulfillment-update payload.
    - SalesOrderLine, SalesOrder: outbound WebStock document.
    - RelayOutcome, RelayResult: result of handling one webhook.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float, str]


class ShopifyModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class LineItem(ShopifyModel):
    """
    A single product line of a Shopify order.

    Attributes:
        title (str): Product title as shown in the storefront.
        sku (str): Optional stock keeping unit.
        quantity: Ordered quantity (integer, numeric string or null).
        price: Unit price as a decimal string or number.
        variant_title (str): Optional variant label (e.g. "500 ml").
    """
    title: Optional[str] = None
    sku: Optional[str] = None
    quantity: Optional[Number] = None
    price: Optional[Number] = None
    variant_title: Optional[str] = None


class ShippingAddress(ShopifyModel):
    """
    Shopify shipping address. `address1` holds street and house number combined.
    """
    name: Optional[str] = None
    company: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    phone: Optional[str] = None


class Customer(ShopifyModel):
    id: Optional[Union[int, str]] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class Fulfillment(ShopifyModel):
    id: Optional[Union[int, str]] = None
    order_id: Optional[Union[int, str]] = None
    status: Optional[str] = None


class ShopifyOrder(ShopifyModel):
    """
    Represents the Shopify order payload (orders/updated webhook, or the `order`
    object returned by the Admin API).

    Attributes:
        id: External Shopify order id, used as the deduplication key.
        name (str): Human-readable reference, e.g. "#1042".
        order_number: Numeric sequence number, e.g. 1042.
        fulfillment_status (str): Overall fulfillment state ("fulfilled", "partial", null).
        fulfillments (List[Fulfillment]): Nested fulfillment records with their own status.
    """
    id: Union[int, str]
    admin_graphql_api_id: Optional[str] = None
    name: Optional[str] = None
    order_number: Optional[Union[int, str]] = None
    email: Optional[str] = None
    contact_email: Optional[str] = None
    phone: Optional[str] = None
    financial_status: Optional[str] = None
    fulfillment_status: Optional[str] = None
    closed_at: Optional[str] = None
    shipping_address: Optional[ShippingAddress] = None
    customer: Optional[Customer] = None
    line_items: List[LineItem] = Field(default_factory=list)
    fulfillments: List[Fulfillment] = Field(default_factory=list)

    @property
    def reference(self) -> str:
        return self.name or str(self.id)


class FulfillmentEvent(ShopifyModel):
    """
    Shopify fulfillments/update webhook payload. It only references the order by id,
    so the full order must be fetched before it can be transformed.
    """
    id: Optional[Union[int, str]] = None
    order_id: Union[int, str]
    status: Optional[str] = None


class SalesOrderLine(BaseModel):
    SalesOrderLineExternId: int = 0
    SalesOrderLineExternGuid: str = ""
    ArticleId: int = 0
    ArticleExternId: int = 0
    ArticleExternGuid: str = ""
    ArticleNumber: str = ""
    Eancode: str = ""
    PackagingUnit: str = "st"
    PackagingQuantity: int = 1
    ProductGroup: str = ""
    ProductName: str = ""
    ProductDescription: str = ""
    QuantityOrdered: int = 0
    QuantityDelivered: int = 0
    PricePerArticle: float = 0.0
    Description: str = ""
    LotId: int = 0
    LotName: str = ""
    LotDescription: str = ""
    LotBestBeforeDate: str = ""


class SalesOrder(BaseModel):
    """
    WebStock SalesOrder document. Address block 1 and 2 are independent; which one
    carries the shipping address depends on the deployment (see `ADDRESS_BLOCK`).
    """
    SalesOrderExternId: Union[int, str] = 0
    SalesOrderExternGuid: str = ""
    SalesOrderExternParentId: int = 0

    SalesOrderNumber: str = ""
    Status: int = 10  # New

    CustomerId: int = 0
    CustomerNumber: str = ""
    CustomerName: str = ""
    CustomerContact: str = ""
    CustomerEmail: str = ""

    ProjectName: str = ""
    ProjectDescription: str = ""
    HandlingType: str = ""
    HandlingDate: Optional[str] = None
    ReadyDate: Optional[str] = None

    CustomerReference: str = ""
    SalesOrderDescription: str = ""

    DeliveryTerms: str = ""
    ShippingDetails: str = ""
    SalesOrderDocuments: str = ""

    AddressContactPerson1: str = ""
    AddressAttention1: str = ""
    AddressStreet1: str = ""
    AddressHouseNumber1: str = ""
    AddressHouseNumberAddition1: str = ""
    AddressZipcode1: str = ""
    AddressCity1: str = ""
    AddressCountry1: str = ""
    AddressPhonenumber1: str = ""
    AddressEmail1: str = ""

    Address2Name: str = ""
    AddressContactPerson2: str = ""
    AddressAttention2: str = ""
    AddressStreet2: str = ""
    AddressHouseNumber2: str = ""
    AddressHouseNumberAddition2: str = ""
    AddressZipcode2: str = ""
    AddressCity2: str = ""
    AddressCountry2: str = ""
    AddressPhonenumber2: str = ""
    AddressEmail2: str = ""

    WareHouse: str = ""

    OrderLines: List[SalesOrderLine] = Field(default_factory=list)


class RelayOutcome(str, Enum):
    NO_ACTION = "No action"
    ALREADY_SENT = "Order already sent"
    SENT = "Order sent to WebStock"
    IGNORED = "Ignored"


@dataclass
class RelayResult:
    """Outcome of handling one webhook, plus the WebStock response text when sent."""
    outcome: RelayOutcome
    order_ref: str = ""
    response_text: str = ""
