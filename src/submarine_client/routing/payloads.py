"""
Request body construction.
"""

import json
from typing import Any, Optional, Union

from ..schemas.endpoints import HttpMethod


def build_payload(http_method: Union[str, HttpMethod], data: Any) -> Optional[bytes]:
    """
    Return the UTF-8 JSON body for a request, or None for GET and DELETE.
    """
    if not HttpMethod(http_method).has_body:
        return None
    return json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
