from .payloads import build_payload
from .queries import build_query_params, build_query_string
from .urls import get_base_url, interpolate, resolve_url

__all__ = [
    "build_payload",
    "build_query_params",
    "build_query_string",
    "get_base_url",
    "interpolate",
    "resolve_url",
]
