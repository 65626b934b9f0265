"""
XML payload parsers for PrestaShop web service responses

List payloads look like::

    <prestashop xmlns:xlink="http://www.w3.org/1999/xlink">
      <products>
        <product id="1" xlink:href="https://shop/api/products/1"/>
      </products>
    </prestashop>

and single object payloads wrap one ``<product>`` element whose children are
the object's fields. Multilingual fields carry one ``<language id="N">`` child
per configured shop language.
"""

from typing import Any, Dict, List, Optional
from xml.etree.ElementTree import Element, ParseError

from defusedxml import ElementTree

from .exceptions import UnexpectedValue
from .lang import coerce

XLINK_HREF = '{http://www.w3.org/1999/xlink}href'


def _root(xml: str) -> Element:
    try:
        return ElementTree.fromstring(xml)
    except ParseError as e:
        raise UnexpectedValue(f"malformed XML payload: {e}")


def model_ids(xml: str, api: str, nodetype: str) -> List[Any]:
    """
    Return the ordered ids listed in a collection payload

    Args:
        xml: Raw response body
        api: Collection element name, e.g. ``products``
        nodetype: Item element name, e.g. ``product``

    Returns:
        Ids in document order; empty when the collection is empty
    """
    collection = _root(xml).find(api)
    if collection is None:
        return []
    return [coerce(node.get('id')) for node in collection.findall(nodetype) if node.get('id') is not None]


class NodeParser:
    """Turns a single object payload into a flat attribute mapping"""

    def __init__(self, nodetype: str):
        self.nodetype = nodetype

    def attributes(self, xml: str, language_id: Optional[int] = None) -> Dict[str, Any]:
        node = _root(xml).find(self.nodetype)
        if node is None:
            raise UnexpectedValue(f"node <{self.nodetype}> not found in payload")

        attrs = {}
        for field in node:
            if field.tag == 'associations':
                attrs['associations'] = self.parse_associations(field)
            elif field.find('language') is not None:
                attrs[field.tag] = self.parse_translation(field, language_id)
            else:
                attrs[field.tag] = coerce(field.text or '')
        return attrs

    def parse_translation(self, field: Element, language_id: Optional[int]) -> Optional[str]:
        """Pick the text of the <language> child matching the active language"""
        for translation in field.findall('language'):
            if translation.get('id') == str(language_id):
                return translation.text or ''
        return None

    def parse_associations(self, field: Element) -> Dict[str, List[Any]]:
        associations = {}
        for association in field:
            members = []
            for member in association:
                children = list(member)
                if len(children) == 1 and children[0].tag == 'id':
                    members.append(coerce(children[0].text or ''))
                else:
                    members.append({child.tag: coerce(child.text or '') for child in children})
            associations[association.tag] = members
        return associations


class ImageParser:
    """
    Image payloads list declinations (one per stored image) directly, so a
    single request yields every image's attributes
    """

    nodetype = 'image'

    def attributes(self, xml: str, language_id: Optional[int] = None) -> List[Dict[str, Any]]:
        root = _root(xml)
        attrsets = []

        for image in root.iter('image'):
            declinations = image.findall('declination')
            if not declinations:
                attrsets.append({'id': coerce(image.get('id')), 'url': image.get(XLINK_HREF)})
                continue
            for declination in declinations:
                attrsets.append({
                    'id': coerce(declination.get('id')),
                    'product_id': coerce(image.get('id')),
                    'url': declination.get(XLINK_HREF),
                })

        return attrsets


PARSERS = {
    'product': NodeParser('product'),
    'image': ImageParser(),
    'manufacturer': NodeParser('manufacturer'),
    'combination': NodeParser('combination'),
    'stock_available': NodeParser('stock_available'),
    'product_option_value': NodeParser('product_option_value'),
}


def parser_for(nodetype: str):
    """Return the attribute parser registered for ``nodetype``, or None"""
    return PARSERS.get(nodetype)
