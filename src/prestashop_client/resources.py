"""
Resources turn PrestaShop web service endpoints into Model instances

A Resource uses a Client to fetch XML payloads. The default ``list()`` is a
two-phase fetch: one request for the collection's ids, then one request per
id, run concurrently. Subclasses registered in ``RESOURCES`` change the
derived configuration or the listing strategy.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from . import parsers
from .config_loader import LOGGER_NAME
from .exceptions import UnexpectedValue
from .models import MODELS, Model
from .sorting import ascending
from .strings import snake


class SetupFailurePolicy(Enum):
    """What ``Resource.get()`` does when the request cannot even be built"""
    DEGRADE_TO_EMPTY = 'degrade_to_empty'
    RAISE = 'raise'


@dataclass
class ResourceConfig:
    """Per-instance resource configuration; derived from the resource name by default"""
    client: Any
    logger: logging.Logger
    model: Type[Model]
    root: str
    api: str
    nodetype: str
    filter: Optional[Callable[[Model], bool]] = None
    sort: Optional[Callable[[List[Model]], List[Model]]] = None
    on_setup_failure: SetupFailurePolicy = SetupFailurePolicy.DEGRADE_TO_EMPTY


RESOURCES: Dict[str, Type['Resource']] = {}


def register(cls: Type['Resource']) -> Type['Resource']:
    """Class decorator adding a resource to the registry under its canonical name"""
    RESOURCES[cls.name] = cls
    return cls


class Resource:
    """HTTP-aware accessor for one collection of remote objects"""

    # canonical name every derived default is computed from
    name = 'Resource'

    def defaults(self) -> ResourceConfig:
        """Return instance configuration defaults"""
        api = snake(self.name)
        modelname = self.name[:-1]

        return ResourceConfig(
            client=None,
            logger=logging.getLogger(LOGGER_NAME),
            model=MODELS.get(modelname, Model),
            root=f"/{api}",
            api=api,
            nodetype=api[:-1],
        )

    def __init__(self, **options: Any):
        """
        Args:
            options: Any ResourceConfig field, overriding the derived default
        """
        self.config = replace(self.defaults(), **options)
        self.client = self.config.client
        self.logger = self.config.logger

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root={self.config.root!r})"

    @property
    def language(self) -> int:
        """Active PrestaShop language id of the client"""
        return self.client.language

    async def list(self, query: Optional[Mapping[str, Any]] = None) -> List[Model]:
        """
        Fetch every model of the collection

        Ids come back in collection order and the result keeps that order,
        whatever order the per-id requests complete in. Any failing request
        fails the whole call.
        """
        response = await asyncio.shield(self.client.get(self.config.root, query=query))
        ids = self.parse_model_ids(response.text)
        models = await self.create_models(ids)
        return self.refine(models)

    async def first(self, query: Optional[Mapping[str, Any]] = None) -> Optional[Model]:
        """Return the first member of a ``list()`` result, or None"""
        models = await self.list(query)
        return models[0] if models else None

    async def get(self, id: Any) -> Model:
        """
        Fetch a single model

        If the client refuses to even build the request, the error is logged
        and an empty model is returned (unless ``on_setup_failure`` is RAISE).
        Failures of the request itself propagate.
        """
        uri = f"{self.config.root}/{id}"

        try:
            pending = self.client.get(uri)
        except Exception:
            if self.config.on_setup_failure is SetupFailurePolicy.RAISE:
                raise
            self.logger.exception(f"Failed to acquire model properties on request path {uri}")
            return self.create_model()

        # the task may be shared with other callers; cancelling this one must not cancel it
        response = await asyncio.shield(pending)
        attrs = self.parse_model_attributes(response.text)
        return self.create_model(attrs)

    def refine(self, models: List[Model]) -> List[Model]:
        """Apply the configured filter, then the configured sort"""
        if self.config.filter:
            models = [model for model in models if self.config.filter(model)]
        if self.config.sort:
            models = self.config.sort(models)
        return list(models)

    async def create_models(self, ids: List[Any]) -> List[Model]:
        """Map ids to models concurrently, keeping positional order"""
        return list(await asyncio.gather(*(self.get(id) for id in ids)))

    def create_model(self, attrs: Optional[Mapping[str, Any]] = None) -> Model:
        return self.config.model(client=self.client, resource=self, attrs=attrs or {})

    def parse_model_ids(self, payload: str) -> List[Any]:
        return parsers.model_ids(payload, self.config.api, self.config.nodetype)

    def parse_model_attributes(self, payload: str) -> Dict[str, Any]:
        """
        Parse a single object payload into model attributes

        Raises:
            UnexpectedValue: If no attribute parser exists for the node type
        """
        nodetype = self.config.nodetype
        parser = parsers.parser_for(nodetype)

        if parser is None:
            raise UnexpectedValue(f"parser namespace not found on node type {nodetype}")
        if not callable(getattr(parser, 'attributes', None)):
            raise UnexpectedValue(f"model properties parser not found on node type {nodetype}")

        return parser.attributes(payload, self.language)


@register
class Products(Resource):
    name = 'Products'


@register
class Images(Resource):
    """Image payloads carry every image's attributes; no per-id requests"""

    name = 'Images'

    async def list(self, query: Optional[Mapping[str, Any]] = None) -> List[Model]:
        response = await asyncio.shield(self.client.get(self.config.root, query=query))
        attrsets = self.parse_image_attributes(response.text)
        return self.refine([self.create_model(attrs) for attrs in attrsets])

    def parse_image_attributes(self, payload: str) -> List[Dict[str, Any]]:
        return parsers.PARSERS['image'].attributes(payload)

    def parse_model_attributes(self, payload: str) -> Dict[str, Any]:
        attrsets = self.parse_image_attributes(payload)
        return attrsets[0] if attrsets else {}


@register
class Manufacturers(Resource):
    name = 'Manufacturers'


@register
class Combinations(Resource):
    name = 'Combinations'


@register
class StockAvailables(Resource):
    name = 'StockAvailables'


@register
class ProductOptionValues(Resource):
    name = 'ProductOptionValues'

    def defaults(self) -> ResourceConfig:
        return replace(super().defaults(), sort=ascending(lambda model: model.position))
