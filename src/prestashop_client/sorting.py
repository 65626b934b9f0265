"""
Sort builders used by resources to order model lists
"""

from typing import Any, Callable, List

SortFunction = Callable[[List[Any]], List[Any]]


def ascending(key: Callable[[Any], Any]) -> SortFunction:
    """Return a function that sorts models by ``key``, smallest first (stable)"""
    def sort(models: List[Any]) -> List[Any]:
        return sorted(models, key=key)
    return sort


def descending(key: Callable[[Any], Any]) -> SortFunction:
    def sort(models: List[Any]) -> List[Any]:
        return sorted(models, key=key, reverse=True)
    return sort
