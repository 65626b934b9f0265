"""
String case helpers for mapping resource names to class names and back
"""

import re

_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])')


def studly(name: str) -> str:
    """snake_case (or kebab-case) -> StudlyCase"""
    return ''.join(part[:1].upper() + part[1:] for part in re.split(r'[_\-\s]+', name) if part)


def snake(name: str) -> str:
    """StudlyCase -> snake_case"""
    return _BOUNDARY.sub('_', name).lower()
