"""
Lenient parsing of semi-structured colour blobs.

Data files store dark-mode palettes as JSON-ish text, sometimes valid JSON,
sometimes ``{primary: #0F172A, 'background': "#020617"}``. Parsing never
raises; anything unusable yields ``None``.
"""

import json
import re
from typing import Dict, Optional

# key: quoted or bare identifier; value: quoted string or bare token up to , ; } or newline
_PAIR = re.compile(
    r"""
    (?:"(?P<dq_key>[^"]+)"|'(?P<sq_key>[^']+)'|(?P<key>[A-Za-z0-9_-]+))
    \s*:\s*
    (?:"(?P<dq_val>[^"]*)"|'(?P<sq_val>[^']*)'|(?P<val>[^,;}\n]+))
    """,
    re.VERBOSE,
)


def _from_json(text: str) -> Optional[Dict[str, str]]:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict) or not data:
        return None
    return {str(key): str(value) for key, value in data.items() if value is not None}


def parse_color_blob(text: Optional[str]) -> Optional[Dict[str, str]]:
    """
    Parse a colour mapping from ``text``.

    Strict JSON objects are tried first, then the ``key: value`` grammar.

    Examples:
        >>> parse_color_blob('{"background": "#0F172A"}')
        {'background': '#0F172A'}

        >>> parse_color_blob("primary: #6366F1; text: '#F8FAFC'")
        {'primary': '#6366F1', 'text': '#F8FAFC'}

        >>> parse_color_blob("not a palette") is None
        True
    """
    if not text or not text.strip():
        return None

    parsed = _from_json(text.strip())
    if parsed:
        return parsed

    pairs: Dict[str, str] = {}
    for match in _PAIR.finditer(text):
        key = match.group("dq_key") or match.group("sq_key") or match.group("key")
        value = match.group("dq_val")
        if value is None:
            value = match.group("sq_val")
        if value is None:
            value = match.group("val").strip()
        if key and value:
            pairs[key.strip()] = value
    return pairs or None
