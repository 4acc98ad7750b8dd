"""
Query parameter construction.

Parameters are layered from three sources, later ones winning:

1. the authentication descriptor,
2. the request data, for GET requests only (other verbs send it as the body),
3. the operation's override rules, where ``OMIT`` removes the key.
"""

from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote

from ..schemas.endpoints import OMIT, HttpMethod, get_operation
from ..utils import stringify

# characters encodeURIComponent leaves alone besides alphanumerics and "-_."
_SAFE_CHARS = "!~*'()"


def build_query_params(
    authentication: Mapping[str, Any],
    operation: str,
    http_method: Union[str, HttpMethod],
    data: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Merge authentication, request data and override rules into one mapping.

    Args:
        authentication: Authentication fields sent with every request
        operation: Operation name, used to look up override rules
        http_method: Verb of the request; data is only merged for GET
        data: Request data

    Returns:
        Flat parameter mapping. Keys removed by an ``OMIT`` rule are absent.
    """
    params: Dict[str, Any] = dict(authentication)

    if HttpMethod(http_method).is_read and data:
        params.update(data)

    for key, rule in get_operation(operation).query_params_override.items():
        if rule is OMIT:
            params.pop(key, None)
        else:
            params[key] = rule

    return params


def encode_component(value: Any) -> str:
    return quote(stringify(value), safe=_SAFE_CHARS)


def build_query_string(params: Mapping[str, Any]) -> str:
    """
    Serialize parameters to a query string with a leading ``?``.

    Keys whose value is None (or ``OMIT``) are dropped, so an omitted key and a
    key that was never set serialize identically.
    """
    pairs = [
        f"{encode_component(key)}={encode_component(value)}"
        for key, value in params.items()
        if value is not None and value is not OMIT
    ]
    return "?" + "&".join(pairs)
