"""
Client module: authenticated, deduplicated access to the PrestaShop web service
"""

import asyncio
import base64
import posixpath
import re
from pathlib import Path
from typing import Any, Dict, Mapping, NamedTuple, Optional, Union

from .config_loader import ClientConfig, ConfigLoader, configure
from .exceptions import InvalidArgument, UnexpectedResponse
from .lang import empty, tuples
from .querystring import stringify
from .resources import RESOURCES, Resource
from .strings import studly
from .transport import RequestsFetch

_ABSOLUTE_URL = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.\-]*://')


class RequestKey(NamedTuple):
    """Identity of an in-flight request in the funnel"""
    language: int
    method: str
    url: str

    def __str__(self) -> str:
        return f"{self.language}:{self.method}:{self.url}"


class Client:
    """
    HTTP client for the PrestaShop web service

    Concurrent ``get()`` calls for the same language, method and URL converge
    on one in-flight task (the funnel). The funnel is only touched from the
    event loop thread, and each entry is dropped as soon as its request
    settles, so a later identical call issues a fresh request.
    """

    def __init__(self, options: Union[ClientConfig, Mapping[str, Any], None] = None):
        """
        Initialise Client

        Args:
            options: A ClientConfig, or an options mapping merged over the
                defaults (see ``config_loader.configure``)
        """
        self.config = options if isinstance(options, ClientConfig) else configure(options)
        self.fetch = self.config.fetch.algo or RequestsFetch()
        self.logger = self.config.logger
        self.funnel: Dict[RequestKey, asyncio.Task] = {}

    @classmethod
    def from_file(cls, config_path: Path, **overrides: Any) -> 'Client':
        """Build a client from a TOML or YAML configuration file"""
        options = ConfigLoader.load(config_path)
        options.update(overrides)
        return cls(options)

    def __enter__(self) -> 'Client':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the fetch primitive's resources, if it holds any"""
        close = getattr(self.fetch, 'close', None)
        if callable(close):
            close()

    @property
    def language(self) -> int:
        """Active PrestaShop language id"""
        return self.config.language_id

    def get_language_id(self) -> int:
        return self.config.language_id

    def set_language_iso(self, iso: str) -> None:
        """
        Set the active language by ISO code

        Raises:
            InvalidArgument: If ``iso`` is not a configured language
        """
        self.config.set_language(iso)

    def get_language_iso(self) -> str:
        return self.config.language

    def get(self, uri: str, query: Optional[Mapping[str, Any]] = None,
            fetch: Optional[Mapping[str, Any]] = None) -> 'asyncio.Task':
        """
        Send a GET request, sharing the in-flight task with identical callers

        Must be called while an event loop is running. Errors in building the
        request are raised here, synchronously; transport failures and non-2XX
        responses surface when the returned task is awaited.

        Args:
            uri: Path relative to the web service root, or an absolute URL
            query: Query parameters
            fetch: Extra options for the fetch primitive

        Returns:
            Task resolving to the raw response
        """
        url = self.url(uri, query)
        key = RequestKey(self.language, 'GET', url)
        funnel = self.funnel

        # concurrent requests on the same url converge on a single task
        if key in funnel:
            self.logger.debug(f"Joining in-flight request {key}")
            return funnel[key]

        options = self.create_fetch_options({**(fetch or {}), 'method': 'GET'})
        loop = asyncio.get_running_loop()

        self.logger.debug(f"Issuing request {key}")
        task = loop.create_task(self._send(url, options))
        funnel[key] = task

        # registered before any awaiter, so the entry is gone by the time callers resume
        task.add_done_callback(lambda done: self._release(key, done))
        return task

    def _release(self, key: RequestKey, task: asyncio.Task) -> None:
        if self.funnel.get(key) is task:
            del self.funnel[key]

    async def _send(self, url: str, options: Dict[str, Any]) -> Any:
        response = await self.fetch(url, options)
        self.validate_response(response, url)
        return response

    def url(self, uri: str, query: Optional[Mapping[str, Any]] = None) -> str:
        """
        Return a fully qualified API url

        Query pairs are sorted so logically identical requests always map to
        the same URL, whatever order the caller built the mapping in.
        """
        qs = ''

        if not empty(query):
            qs = '?' + stringify(sorted(tuples(query)))

        if _ABSOLUTE_URL.match(uri):
            return uri + qs

        webservice = self.config.webservice
        fullpath = posixpath.normpath('/' + f"{webservice.root}/{uri}".lstrip('/'))

        return f"{webservice.scheme}://{webservice.host}{fullpath}{qs}"

    def create_fetch_options(self, augments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Merge fetch defaults, fresh headers and per-request augments"""
        return {
            **self.config.fetch.defaults,
            'headers': self.create_headers(),
            **(augments or {}),
        }

    def create_headers(self, augments: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        authorization = self.create_authorization_header(self.config.webservice.key)
        return {**(augments or {}), 'Authorization': authorization}

    def validate_response(self, response: Any, url: Optional[str] = None) -> None:
        """
        Raises:
            UnexpectedResponse: If the response is not a 2XX
        """
        if not response.ok:
            status_code = getattr(response, 'status_code', None)
            raise UnexpectedResponse(
                f"got non-2XX HTTP response ({status_code}) for {url}",
                status_code=status_code,
                url=url,
            )

    @staticmethod
    def create_authorization_header(key: str) -> str:
        """Basic auth value: the web service key is the username, password empty"""
        credentials = base64.b64encode(f"{key}:".encode('utf-8')).decode('ascii')
        return f"Basic {credentials}"

    def resource(self, api: str, **options: Any) -> Resource:
        """
        Return a new Resource for a snake case resource name

        Args:
            api: e.g. ``products`` or ``product_option_values``
            options: ResourceConfig overrides (root, filter, sort, ...)

        Raises:
            InvalidArgument: If no resource is registered under that name
        """
        classname = studly(api)
        constructor = RESOURCES.get(classname)

        if constructor is None:
            raise InvalidArgument(f'invalid root resource: "{api}"')

        return constructor(**{**options, 'client': self, 'logger': self.logger})
