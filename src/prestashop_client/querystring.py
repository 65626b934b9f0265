"""
Canonical query string serialisation
"""

from typing import Iterable, Tuple
from urllib.parse import urlencode

# Characters PrestaShop filter syntax relies on; left unescaped for readable URLs
SAFE_CHARACTERS = '[]|,'


def stringify(pairs: Iterable[Tuple[str, str]]) -> str:
    """Encode ordered (key, value) tuples; order is kept exactly as given"""
    return urlencode(list(pairs), safe=SAFE_CHARACTERS)
