"""
Shared fixtures: an in-memory fetch primitive and sample web service payloads
"""

import asyncio
import logging

import pytest

from prestashop_client import Client

BASE = 'https://shop.test/api'


class FakeResponse:
    """Stands in for requests.Response: success flag, status and re-readable text"""

    def __init__(self, text='', status_code=200):
        self.text = text
        self.status_code = status_code

    @property
    def ok(self):
        return 200 <= self.status_code < 300


class FakeFetch:
    """
    Async fetch primitive serving canned responses by URL

    ``delays`` holds per-URL sleep times so tests can force completion order;
    ``gate`` (an asyncio.Event) holds every request until it is set.
    """

    def __init__(self, routes=None, delays=None, gate=None):
        self.routes = dict(routes or {})
        self.delays = dict(delays or {})
        self.gate = gate
        self.calls = []

    async def __call__(self, url, options):
        self.calls.append((url, options))

        if self.gate is not None:
            await self.gate.wait()
        await asyncio.sleep(self.delays.get(url, 0))

        route = self.routes.get(url)
        if route is None:
            return FakeResponse('', status_code=404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, FakeResponse):
            return route
        return FakeResponse(route)

    def urls(self):
        return [url for url, _ in self.calls]


def collection_xml(api, nodetype, ids):
    items = ''.join(
        f'<{nodetype} id="{id}" xlink:href="{BASE}/{api}/{id}"/>' for id in ids
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<prestashop xmlns:xlink="http://www.w3.org/1999/xlink">'
        f'<{api}>{items}</{api}>'
        '</prestashop>'
    )


def item_xml(nodetype, fields):
    body = ''.join(f'<{name}><![CDATA[{value}]]></{name}>' for name, value in fields.items())
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<prestashop xmlns:xlink="http://www.w3.org/1999/xlink">'
        f'<{nodetype}>{body}</{nodetype}>'
        '</prestashop>'
    )


@pytest.fixture
def fake_fetch():
    return FakeFetch()


@pytest.fixture
def client_options(fake_fetch):
    return {
        'language': 'en',
        'languages': {'en': 1, 'fr': 2},
        'webservice': {
            'key': 'TESTKEY',
            'scheme': 'https',
            'host': 'shop.test',
            'root': '/api',
        },
        'logger': logging.getLogger('prestashop_client.tests'),
        'fetch': {'algo': fake_fetch},
    }


@pytest.fixture
def client(client_options):
    return Client(client_options)
