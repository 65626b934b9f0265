"""
Default HTTP primitive backed by requests
"""

import asyncio
from typing import Any, Dict, Optional

import requests


class RequestsFetch:
    """
    Awaitable fetch primitive: ``await fetch(url, options) -> requests.Response``

    The blocking ``requests`` call runs in a worker thread so the event loop
    stays free while the request is in flight. ``options`` holds ``method``,
    ``headers`` and any other ``requests.Session.request`` keyword such as
    ``timeout`` or ``verify``.

    Concurrent requests share one ``requests.Session`` from several worker
    threads. requests does not document ``Session`` as thread-safe: its
    connection pool tolerates concurrent checkouts, but the cookie jar is
    written by every response. The web service authenticates per request and
    sets no session state, so this is fine for PrestaShop; do not hand in a
    session whose headers, adapters or cookies you change while requests are
    in flight.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session

    async def __call__(self, url: str, options: Optional[Dict[str, Any]] = None) -> requests.Response:
        options = dict(options or {})
        method = options.pop('method', 'GET')

        # Create session if not exists
        if self.session is None:
            self.session = requests.Session()

        return await asyncio.to_thread(self.session.request, method, url, **options)

    def close(self) -> None:
        """Close HTTP session and release resources"""
        if self.session:
            self.session.close()
            self.session = None
