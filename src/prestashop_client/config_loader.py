"""
ConfigLoader module for building and loading client configuration
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from .exceptions import ConfigurationError, EnvironmentError, InvalidArgument
from .lang import merge

LOGGER_NAME = 'prestashop_client'


def defaults() -> Dict[str, Any]:
    """Return client configuration defaults"""
    return {
        'language': 'en',

        # these must match the shop's languages: ISO code => language id
        'languages': {
            'en': 1,
        },

        'webservice': {
            'key': 'your-prestashop-key',
            'scheme': 'https',
            'host': 'your-prestashop-host',
            'root': '/api',
        },

        'logger': None,

        'fetch': {
            # the fetch primitive; None selects the requests based default
            'algo': None,
            'defaults': {
                'timeout': 30,
            },
        },
    }


@dataclass
class WebserviceConfig:
    """PrestaShop web service location and credentials"""
    key: str
    scheme: str = 'https'
    host: str = 'localhost'
    root: str = '/api'


@dataclass
class FetchConfig:
    """HTTP primitive and the options passed to it on every request"""
    algo: Optional[Callable[..., Any]] = None
    defaults: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ClientConfig:
    """Configuration data class for Client"""
    language: str
    languages: Dict[str, int]
    webservice: WebserviceConfig
    fetch: FetchConfig
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(LOGGER_NAME))

    def __post_init__(self):
        if self.language not in self.languages:
            raise InvalidArgument(f'language "{self.language}" is not configured')

    @property
    def language_id(self) -> int:
        return self.languages[self.language]

    def set_language(self, iso: str) -> None:
        """Switch the active language; the current one is kept on failure"""
        if iso not in self.languages:
            raise InvalidArgument(f'language "{iso}" is not configured')
        self.language = iso


def configure(options: Optional[Mapping[str, Any]] = None) -> ClientConfig:
    """
    Merge caller options over the defaults and build a ClientConfig

    Args:
        options: Partial configuration; nested ``webservice`` and ``fetch``
            groups are merged key by key, everything else is replaced

    Returns:
        Validated ClientConfig

    Raises:
        InvalidArgument: If the selected language is not in ``languages``
    """
    options = dict(options or {})
    base = defaults()

    # languages replace the default map wholesale
    if 'languages' in options:
        base['languages'] = {}

    merged = merge(base, options)
    webservice = {k: v for k, v in merged['webservice'].items() if k in WebserviceConfig.__dataclass_fields__}

    return ClientConfig(
        language=merged['language'],
        languages=dict(merged['languages']),
        webservice=WebserviceConfig(**webservice),
        fetch=FetchConfig(
            algo=merged['fetch'].get('algo'),
            defaults=dict(merged['fetch'].get('defaults') or {}),
        ),
        logger=merged['logger'] or logging.getLogger(LOGGER_NAME),
    )


class ConfigLoader:
    """Loads client options from TOML or YAML files"""

    REQUIRED_KEYS = {
        'webservice': ['host'],
    }

    @staticmethod
    def load(config_path: Path) -> Dict[str, Any]:
        """
        Load client options from a configuration file

        Args:
            config_path: Path to a ``.toml``, ``.yml`` or ``.yaml`` file

        Returns:
            Options mapping suitable for ``configure()``

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigurationError: If the file is malformed or incomplete
            EnvironmentError: If ``webservice.key_env`` names an unset variable
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() == '.toml':
            config_data = ConfigLoader._load_toml(config_path)
        else:
            config_data = ConfigLoader._load_yaml(config_path)

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Configuration root must be a table/mapping: {config_path}")

        ConfigLoader._validate_required_keys(config_data)
        return ConfigLoader._resolve_environment(config_data)

    @staticmethod
    def _load_toml(config_path: Path) -> Any:
        try:
            with open(config_path, 'rb') as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {config_path}: {e}")

    @staticmethod
    def _load_yaml(config_path: Path) -> Any:
        try:
            with open(config_path, 'r') as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}")

    @staticmethod
    def _validate_required_keys(config_data: Dict[str, Any]) -> None:
        missing_items = []

        for section_name, required_keys in ConfigLoader.REQUIRED_KEYS.items():
            section = config_data.get(section_name)
            if not isinstance(section, dict):
                missing_items.append(f"Section [{section_name}]")
                continue
            for key in required_keys:
                if key not in section:
                    missing_items.append(f"Key '{key}' in section [{section_name}]")

        webservice = config_data.get('webservice') or {}
        if 'key' not in webservice and 'key_env' not in webservice:
            missing_items.append("Key 'key' or 'key_env' in section [webservice]")

        if missing_items:
            raise ConfigurationError(
                f"Missing required configuration items: {', '.join(missing_items)}"
            )

    @staticmethod
    def _resolve_environment(config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Replace ``webservice.key_env`` with the value of that variable"""
        webservice = dict(config_data['webservice'])
        env_var_name = webservice.pop('key_env', None)

        if env_var_name is not None:
            value = os.getenv(env_var_name)
            if value is None:
                raise EnvironmentError(f"Environment variable '{env_var_name}' is not set")
            webservice['key'] = value

        return {**config_data, 'webservice': webservice}
