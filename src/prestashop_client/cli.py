#!/usr/bin/env python3
"""
Command line access to the PrestaShop web service

Examples:
    prestashop-client --config shop.toml list products --query display=full
    prestashop-client --config shop.yml --language fr get manufacturers 3
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import requests

from .exceptions import InvalidArgument, PrestaShopError
from .http_client import Client

logger = logging.getLogger(__name__)


def parse_query(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Turn ``KEY=VALUE`` arguments into a query mapping"""
    query = {}
    for pair in pairs or []:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise InvalidArgument(f"Query parameters must look like KEY=VALUE, got '{pair}'")
        query[key] = value
    return query


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='prestashop-client',
        description='Fetch PrestaShop web service resources as JSON lines',
    )
    parser.add_argument('--config', required=True, type=Path, help='TOML or YAML client configuration')
    parser.add_argument('--language', help='ISO code of the language to request')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    commands = parser.add_subparsers(dest='command', required=True)

    list_command = commands.add_parser('list', help='List every model of a resource')
    list_command.add_argument('resource', help='Resource name, e.g. products')
    list_command.add_argument('--query', action='append', metavar='KEY=VALUE', help='Query parameter (repeatable)')
    list_command.add_argument('--first', action='store_true', help='Only print the first model')

    get_command = commands.add_parser('get', help='Fetch a single model by id')
    get_command.add_argument('resource', help='Resource name, e.g. products')
    get_command.add_argument('id', help='Model id')

    return parser


async def run(client: Client, args: argparse.Namespace) -> list:
    resource = client.resource(args.resource)

    if args.command == 'get':
        return [await resource.get(args.id)]

    query = parse_query(args.query)
    if args.first:
        model = await resource.first(query)
        return [model] if model is not None else []
    return await resource.list(query)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        with Client.from_file(args.config) as client:
            if args.language:
                client.set_language_iso(args.language)
            models = asyncio.run(run(client, args))
    except (PrestaShopError, requests.RequestException, FileNotFoundError) as e:
        logger.error(f"Request failed: {e}")
        return 1

    for model in models:
        print(json.dumps(model.to_dict(), default=str))

    logger.info(f"Fetched {len(models)} {args.resource}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
