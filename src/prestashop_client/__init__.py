"""
Client library for the PrestaShop XML web service
Lists and fetches products, images, manufacturers, combinations, stock records
and option values as typed models, with in-flight request deduplication
"""

from .config_loader import ClientConfig, ConfigLoader, FetchConfig, WebserviceConfig, configure
from .exceptions import (
    ConfigurationError,
    EnvironmentError,
    InvalidArgument,
    PrestaShopError,
    UnexpectedResponse,
    UnexpectedValue,
)
from .http_client import Client, RequestKey
from .models import MODELS, Model
from .resources import RESOURCES, Resource, ResourceConfig, SetupFailurePolicy, register
from .transport import RequestsFetch

__all__ = [
    'Client',
    'ClientConfig',
    'ConfigLoader',
    'ConfigurationError',
    'EnvironmentError',
    'FetchConfig',
    'InvalidArgument',
    'MODELS',
    'Model',
    'PrestaShopError',
    'RESOURCES',
    'RequestKey',
    'RequestsFetch',
    'Resource',
    'ResourceConfig',
    'SetupFailurePolicy',
    'UnexpectedResponse',
    'UnexpectedValue',
    'WebserviceConfig',
    'configure',
    'register',
]
