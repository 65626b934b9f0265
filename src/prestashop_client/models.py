"""
Domain models built from parsed web service payloads
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


class Model:
    """
    Read-only attribute bag for one remote object

    Attributes are reachable as mapping lookups (``model.get('name')``) or as
    Python attributes (``model.name``). The model keeps a reference to the
    client and resource it came from but never performs I/O on its own.
    """

    def __init__(self, client: Any = None, resource: Any = None,
                 attrs: Optional[Mapping[str, Any]] = None):
        self.client = client
        self.resource = resource
        self.attrs = MappingProxyType(dict(attrs or {}))

    def __getattr__(self, name: str) -> Any:
        # guard against lookups before __init__ has populated attrs (copy, pickle)
        if name == 'attrs':
            raise AttributeError(name)
        try:
            return self.attrs[name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__} has no attribute '{name}'")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return type(self) is type(other) and dict(self.attrs) == dict(other.attrs)

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"

    @property
    def id(self) -> Any:
        return self.attrs.get('id')

    @property
    def empty(self) -> bool:
        return not self.attrs

    def get(self, name: str, default: Any = None) -> Any:
        return self.attrs.get(name, default)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.attrs)


class Product(Model):

    @property
    def price(self) -> float:
        return float(self.attrs.get('price') or 0)

    @property
    def category_ids(self):
        return self.attrs.get('associations', {}).get('categories', [])


class Image(Model):

    @property
    def url(self) -> Optional[str]:
        return self.attrs.get('url')


class Manufacturer(Model):
    pass


class Combination(Model):

    @property
    def option_value_ids(self):
        return self.attrs.get('associations', {}).get('product_option_values', [])


class StockAvailable(Model):

    @property
    def quantity(self) -> int:
        return int(self.attrs.get('quantity') or 0)


class ProductOptionValue(Model):

    @property
    def position(self) -> int:
        return int(self.attrs.get('position') or 0)


MODELS = {
    'Model': Model,
    'Product': Product,
    'Image': Image,
    'Manufacturer': Manufacturer,
    'Combination': Combination,
    'StockAvailable': StockAvailable,
    'ProductOptionValue': ProductOptionValue,
}
