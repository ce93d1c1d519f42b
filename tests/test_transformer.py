"""Tests for the Shopify order → WebStock SalesOrder mapping."""

import pytest

from conftest import make_settings
from webstock_relay.articles import ArticleResolver
from webstock_relay.models import SalesOrder, SalesOrderLine, ShopifyOrder
from webstock_relay.transformer import OrderTransformer, to_price, to_quantity


def build(payload, **overrides):
    settings = make_settings(**overrides)
    transformer = OrderTransformer(settings, ArticleResolver(settings.ARTICLE_MAPPING))
    return transformer.transform(ShopifyOrder.model_validate(payload))


class TestOrderHeader:
    def test_reference_fields(self, order_payload):
        doc = build(order_payload)
        assert doc.SalesOrderNumber == "GWT1042"
        assert doc.SalesOrderExternId == 5550001042
        assert doc.SalesOrderExternGuid == "gid://shopify/Order/5550001042"
        assert doc.CustomerReference == "#1042"
        assert doc.SalesOrderDescription == "Shopify order #1042"
        assert doc.Status == 10
        assert doc.WareHouse == "Test"
        assert doc.CustomerNumber == "777"
        assert doc.CustomerEmail == "jan@example.com"

    def test_prefix_and_warehouse_from_settings(self, order_payload):
        doc = build(order_payload, WEBSTOCK_ORDER_PREFIX="ABC", WEBSTOCK_WAREHOUSE="Main")
        assert doc.SalesOrderNumber == "ABC1042"
        assert doc.WareHouse == "Main"

    def test_unused_fields_present_and_empty(self, order_payload):
        dumped = build(order_payload).model_dump()
        assert set(dumped) == set(SalesOrder.model_fields)
        assert dumped["HandlingDate"] is None
        assert dumped["ReadyDate"] is None
        assert dumped["ProjectName"] == ""
        assert dumped["SalesOrderExternParentId"] == 0

    def test_customer_email_is_last_fallback(self, order_payload):
        order_payload["email"] = None
        order_payload["customer"]["email"] = "customer@example.com"
        doc = build(order_payload)
        assert doc.CustomerEmail == "customer@example.com"
        assert doc.AddressEmail1 == "customer@example.com"

    def test_contact_email_fallback(self, order_payload):
        order_payload["email"] = None
        order_payload["contact_email"] = "contact@example.com"
        doc = build(order_payload)
        assert doc.CustomerEmail == "contact@example.com"
        assert doc.AddressEmail1 == "contact@example.com"


class TestCustomerName:
    def test_prefers_customer_first_and_last_name(self, order_payload):
        assert build(order_payload).CustomerName == "Jan Jansen"

    def test_only_first_name(self, order_payload):
        order_payload["customer"] = {"first_name": "Jan"}
        assert build(order_payload).CustomerName == "Jan"

    def test_falls_back_to_shipping_name(self, order_payload):
        order_payload["customer"] = {"first_name": "", "last_name": None}
        order_payload["shipping_address"]["name"] = "Piet Pieters"
        assert build(order_payload).CustomerName == "Piet Pieters"

    def test_falls_back_to_order_name(self, order_payload):
        order_payload["customer"] = None
        order_payload["shipping_address"] = None
        assert build(order_payload).CustomerName == "#1042"


class TestAddress:
    def test_primary_block_is_decomposed(self, order_payload):
        doc = build(order_payload)
        assert doc.AddressContactPerson1 == "Jan Jansen"
        assert doc.AddressStreet1 == "Kerkstraat"
        assert doc.AddressHouseNumber1 == "12"
        assert doc.AddressHouseNumberAddition1 == "A"
        assert doc.AddressZipcode1 == "1017 GC"
        assert doc.AddressCity1 == "Amsterdam"
        assert doc.AddressCountry1 == "NL"
        assert doc.AddressPhonenumber1 == "+31611111111"
        assert doc.AddressEmail1 == "jan@example.com"
        assert doc.AddressStreet2 == ""
        assert doc.Address2Name == ""

    def test_country_name_when_no_code(self, order_payload):
        order_payload["shipping_address"]["country_code"] = None
        assert build(order_payload).AddressCountry1 == "Netherlands"

    def test_order_phone_fallback(self, order_payload):
        order_payload["shipping_address"]["phone"] = None
        assert build(order_payload).AddressPhonenumber1 == "+31600000000"

    def test_secondary_block(self, order_payload):
        doc = build(order_payload, ADDRESS_BLOCK="secondary")
        assert doc.AddressStreet1 == ""
        assert doc.AddressStreet2 == "Kerkstraat"
        assert doc.AddressHouseNumber2 == "12"
        assert doc.AddressCity2 == "Amsterdam"
        assert doc.Address2Name == "Jansen BV"

    def test_both_blocks(self, order_payload):
        doc = build(order_payload, ADDRESS_BLOCK="both")
        assert doc.AddressStreet1 == doc.AddressStreet2 == "Kerkstraat"
        assert doc.AddressZipcode1 == doc.AddressZipcode2 == "1017 GC"

    def test_address_line2_ignored_by_default(self, order_payload):
        assert build(order_payload).AddressHouseNumberAddition1 == "A"

    def test_address_line2_folded_into_addition(self, order_payload):
        doc = build(order_payload, FOLD_ADDRESS_LINE2=True)
        assert doc.AddressHouseNumberAddition1 == "A 2e verdieping"

    def test_missing_shipping_address(self, order_payload):
        order_payload["shipping_address"] = None
        order_payload["phone"] = None
        doc = build(order_payload)
        assert doc.AddressStreet1 == ""
        assert doc.AddressHouseNumber1 == ""
        assert doc.AddressCity1 == ""
        assert doc.AddressPhonenumber1 == ""
        assert doc.CustomerContact == ""


class TestOrderLines:
    def test_mapped_line(self, order_payload):
        doc = build(order_payload)
        assert len(doc.OrderLines) == 1
        line = doc.OrderLines[0]
        assert line.ArticleNumber == "8720892642714"
        assert line.Eancode == "8720892642714"
        assert line.QuantityOrdered == 2
        assert line.PricePerArticle == 9.50
        assert line.PackagingUnit == "st"
        assert line.PackagingQuantity == 1
        assert line.ProductName == "Blue Razzberry"
        assert line.ProductDescription == "Blue Razzberry"
        assert line.LotBestBeforeDate == ""

    def test_lines_keep_order(self, order_payload):
        order_payload["line_items"] = [
            {"title": "Juicy Mango", "quantity": 1, "price": "3.00"},
            {"title": "Unmapped", "sku": "X-1", "quantity": 4, "price": 1},
            {"title": "Orange Blast", "quantity": "3", "price": 2.25, "variant_title": "6-pack"},
        ]
        lines = build(order_payload).OrderLines
        assert [line.ArticleNumber for line in lines] == ["8720892642752", "X-1", "8720892642776"]
        assert [line.QuantityOrdered for line in lines] == [1, 4, 3]
        assert lines[2].ProductDescription == "6-pack"
        assert lines[1].Eancode == ""

    def test_no_line_items(self, order_payload):
        order_payload["line_items"] = []
        assert build(order_payload).OrderLines == []

    def test_missing_quantity_and_price(self, order_payload):
        order_payload["line_items"] = [{"title": "Fruit Punch"}]
        line = build(order_payload).OrderLines[0]
        assert line == SalesOrderLine(
            ArticleNumber="8720892642738",
            Eancode="8720892642738",
            ProductName="Fruit Punch",
            ProductDescription="Fruit Punch",
        )


@pytest.mark.parametrize(
    "value, expected",
    [(None, 0), (2, 2), ("3", 3), ("abc", 0), (-1, 0), (2.0, 2), ("", 0), (True, 0),
     ("2.7", 2), ("1e999999999", 0), (10 ** 9 + 1, 0), ("NaN", 0), ("Infinity", 0)],
)
def test_to_quantity(value, expected):
    assert to_quantity(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(None, 0.0), ("9.50", 9.5), (4, 4.0), (1.25, 1.25), ("n/a", 0.0), ("NaN", 0.0), (" 2.10 ", 2.1),
     ("1e400", 0.0), ("-1e400", 0.0), ("Infinity", 0.0)],
)
def test_to_price(value, expected):
    assert to_price(value) == expected
