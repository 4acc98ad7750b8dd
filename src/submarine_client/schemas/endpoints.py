"""
Endpoint Registry for the Submarine Customer API

Static, closed table mapping every API operation name to its HTTP method,
path template and query parameter override rules. Path templates reference
request context values with ``{{ name }}`` placeholders, for example::

    /customers/{{ customer_id }}/subscriptions/{{ id }}.json

The table is built once at import time and exposed read-only; there is no
registration API.
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..engine.exceptions import UnknownOperationError


#: Matches ``{{ name }}`` placeholders in endpoint templates.
PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def is_read(self) -> bool:
        return self is HttpMethod.GET

    @property
    def has_body(self) -> bool:
        return self not in (HttpMethod.GET, HttpMethod.DELETE)


class QueryOverride(Enum):
    """Special override rule values."""
    OMIT = "omit"

    def __repr__(self) -> str:
        return f"{type(self).__name__}.{self.name}"


#: Override rule that removes a parameter from the query string.
OMIT = QueryOverride.OMIT


class OperationDescriptor(BaseModel):
    """Description of a single API operation.

    Attributes:
        http_method: HTTP verb used for the call.
        endpoint: Path template appended to the environment base URL.
        query_params_override: Rules applied last when building the query;
            a value of ``OMIT`` removes the key entirely.
    """
    model_config = ConfigDict(frozen=True)

    http_method: HttpMethod
    endpoint: str = Field(..., description="Path template with {{ name }} placeholders")
    query_params_override: Dict[str, Any] = Field(default_factory=dict)

    @property
    def placeholders(self) -> Tuple[str, ...]:
        """Placeholder names referenced by the template, in order of first use."""
        return tuple(dict.fromkeys(PLACEHOLDER_PATTERN.findall(self.endpoint)))


def _operation(http_method: HttpMethod, endpoint: str, **overrides: Any) -> OperationDescriptor:
    return OperationDescriptor(
        http_method=http_method,
        endpoint=endpoint,
        query_params_override=overrides,
    )


# ============================================================================
# Operation Table
# ============================================================================

_CUSTOMER = "/customers/{{ customer_id }}"

API_OPERATIONS: Mapping[str, OperationDescriptor] = MappingProxyType({
    # Payment methods
    "get_payment_methods": _operation(HttpMethod.GET, f"{_CUSTOMER}/payment_methods.json"),
    "create_payment_method": _operation(HttpMethod.POST, f"{_CUSTOMER}/payment_methods.json"),
    "get_payment_method": _operation(HttpMethod.GET, f"{_CUSTOMER}/payment_methods/{{{{ id }}}}.json"),
    "update_payment_method": _operation(HttpMethod.PATCH, f"{_CUSTOMER}/payment_methods/{{{{ id }}}}.json"),
    "remove_payment_method": _operation(HttpMethod.DELETE, f"{_CUSTOMER}/payment_methods/{{{{ id }}}}.json"),

    # Subscriptions
    "get_subscription": _operation(HttpMethod.GET, f"{_CUSTOMER}/subscriptions/{{{{ id }}}}.json"),
    "get_subscriptions": _operation(HttpMethod.GET, f"{_CUSTOMER}/subscriptions.json"),
    "duplicate_subscription": _operation(HttpMethod.POST, f"{_CUSTOMER}/subscriptions/{{{{ id }}}}/duplicate.json"),
    "update_subscription": _operation(HttpMethod.PUT, f"{_CUSTOMER}/subscriptions/{{{{ id }}}}.json"),
    "bulk_update_subscriptions": _operation(HttpMethod.POST, f"{_CUSTOMER}/subscriptions/bulk_update.json"),
    "cancel_subscription": _operation(HttpMethod.DELETE, f"{_CUSTOMER}/subscriptions/{{{{ id }}}}.json"),

    # Orders
    "create_upsell": _operation(HttpMethod.POST, f"{_CUSTOMER}/orders/{{{{ order_id }}}}/upsells.json"),

    # Checkout operations run before a customer session exists
    "generate_payment_processor_client_token": _operation(
        HttpMethod.POST, "/payment_processor_client_tokens.json", customer_id=OMIT
    ),
    "create_preliminary_payment_method": _operation(
        HttpMethod.POST, "/preliminary_payment_methods.json", customer_id=OMIT
    ),
})


def get_operation(operation: str) -> OperationDescriptor:
    """
    Look up the descriptor for an operation name.

    Raises:
        UnknownOperationError: If the name is not registered
    """
    try:
        return API_OPERATIONS[operation]
    except KeyError:
        raise UnknownOperationError(operation) from None
