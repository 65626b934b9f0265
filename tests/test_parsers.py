"""
Test suite for XML payload parsers
"""

import pytest

from prestashop_client import UnexpectedValue
from prestashop_client.parsers import ImageParser, NodeParser, model_ids, parser_for

PRODUCT_XML = """<?xml version="1.0" encoding="UTF-8"?>
<prestashop xmlns:xlink="http://www.w3.org/1999/xlink">
<product>
  <id><![CDATA[12]]></id>
  <id_manufacturer xlink:href="https://shop.test/api/manufacturers/3"><![CDATA[3]]></id_manufacturer>
  <price><![CDATA[29.900000]]></price>
  <ean13></ean13>
  <name>
    <language id="1" xlink:href="https://shop.test/api/languages/1"><![CDATA[Linen shirt]]></language>
    <language id="2" xlink:href="https://shop.test/api/languages/2"><![CDATA[Chemise en lin]]></language>
  </name>
  <associations>
    <categories nodeType="category" api="categories">
      <category xlink:href="https://shop.test/api/categories/2"><id><![CDATA[2]]></id></category>
      <category xlink:href="https://shop.test/api/categories/5"><id><![CDATA[5]]></id></category>
    </categories>
    <product_bundle nodeType="product" api="products">
      <product><id><![CDATA[40]]></id><quantity><![CDATA[2]]></quantity></product>
    </product_bundle>
  </associations>
</product>
</prestashop>
"""


class TestModelIds:

    def test_model_ids_returns_ids_in_document_order(self):
        # Arrange
        payload = (
            '<prestashop xmlns:xlink="http://www.w3.org/1999/xlink"><stock_availables>'
            '<stock_available id="3" xlink:href="x"/><stock_available id="1" xlink:href="y"/>'
            '</stock_availables></prestashop>'
        )

        # Act
        ids = model_ids(payload, 'stock_availables', 'stock_available')

        # Assert
        assert ids == [3, 1]

    def test_model_ids_without_collection_node_returns_empty_list(self):
        # Act & Assert
        assert model_ids('<prestashop/>', 'products', 'product') == []

    def test_model_ids_with_malformed_payload_raises_unexpected_value(self):
        # Act & Assert
        with pytest.raises(UnexpectedValue):
            model_ids('<prestashop><products>', 'products', 'product')


class TestNodeParser:

    def test_attributes_resolve_translations_for_active_language(self):
        # Act
        english = NodeParser('product').attributes(PRODUCT_XML, 1)
        french = NodeParser('product').attributes(PRODUCT_XML, 2)

        # Assert
        assert english['name'] == 'Linen shirt'
        assert french['name'] == 'Chemise en lin'

    def test_attributes_with_unknown_language_leave_translation_empty(self):
        # Act & Assert
        assert NodeParser('product').attributes(PRODUCT_XML, 9)['name'] is None

    def test_attributes_coerce_numbers_and_keep_empty_text(self):
        # Act
        attrs = NodeParser('product').attributes(PRODUCT_XML, 1)

        # Assert
        assert attrs['id'] == 12
        assert attrs['id_manufacturer'] == 3
        assert attrs['price'] == pytest.approx(29.9)
        assert attrs['ean13'] == ''

    def test_attributes_flatten_associations(self):
        # Act
        associations = NodeParser('product').attributes(PRODUCT_XML, 1)['associations']

        # Assert
        assert associations['categories'] == [2, 5]
        assert associations['product_bundle'] == [{'id': 40, 'quantity': 2}]

    def test_attributes_with_missing_node_raise_unexpected_value(self):
        # Act & Assert
        with pytest.raises(UnexpectedValue):
            NodeParser('manufacturer').attributes(PRODUCT_XML, 1)


class TestImageParser:

    def test_attributes_list_every_declination(self):
        # Arrange
        payload = (
            '<prestashop xmlns:xlink="http://www.w3.org/1999/xlink"><image id="4">'
            '<declination id="10" xlink:href="https://shop.test/api/images/products/4/10"/>'
            '<declination id="11" xlink:href="https://shop.test/api/images/products/4/11"/>'
            '</image></prestashop>'
        )

        # Act
        attrsets = ImageParser().attributes(payload)

        # Assert
        assert attrsets == [
            {'id': 10, 'product_id': 4, 'url': 'https://shop.test/api/images/products/4/10'},
            {'id': 11, 'product_id': 4, 'url': 'https://shop.test/api/images/products/4/11'},
        ]

    def test_attributes_for_image_listing_use_image_links(self):
        # Arrange
        payload = (
            '<prestashop xmlns:xlink="http://www.w3.org/1999/xlink"><images>'
            '<image id="1" xlink:href="https://shop.test/api/images/products/1"/>'
            '</images></prestashop>'
        )

        # Act & Assert
        assert ImageParser().attributes(payload) == [
            {'id': 1, 'url': 'https://shop.test/api/images/products/1'},
        ]


def test_parser_for_known_and_unknown_node_types():
    # Act & Assert
    assert isinstance(parser_for('product_option_value'), NodeParser)
    assert isinstance(parser_for('image'), ImageParser)
    assert parser_for('cart') is None
