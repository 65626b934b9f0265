"""
Exception hierarchy for the PrestaShop web service client
"""

from typing import Optional


class PrestaShopError(Exception):
    """Base class for every error raised by this package"""
    pass


class InvalidArgument(PrestaShopError, ValueError):
    """Raised when a caller supplies a value the client cannot accept"""
    pass


class UnexpectedValue(PrestaShopError):
    """Raised when the web service or a parser produces something unusable"""
    pass


class UnexpectedResponse(UnexpectedValue):
    """Raised for non-2XX HTTP responses"""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ConfigurationError(PrestaShopError):
    """Raised when a configuration file is invalid or incomplete"""
    pass


class EnvironmentError(PrestaShopError):
    """Raised when required environment variables are missing"""
    pass
