"""
HTTP Request/Response Schema Models for the Submarine Customer API

Models for the pieces of the wire exchange the client builds or
reports: the request headers sent with every API call, the outcome of a
bearer token fetch, and the final (result, errors) pair handed back to the
caller.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..engine.exceptions import ApiResponseError


JSON_CONTENT_TYPE = "application/json; charset=utf-8"


# ============================================================================
# Request Headers
# ============================================================================

class ClientRequestHeader(BaseModel):
    """HTTP request headers sent by the client.

    Attributes:
        content_type: MIME type of request body.
        authorization: Bearer authorization header value.
    """
    model_config = ConfigDict(populate_by_name=True)
    content_type: str = Field(default=JSON_CONTENT_TYPE, alias="Content-Type")
    authorization: Optional[str] = Field(default=None, alias="Authorization")

    @classmethod
    def bearer(cls, token: str) -> "ClientRequestHeader":
        return cls(authorization=f"Bearer {token}")

    def to_headers(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# ============================================================================
# Token Fetch
# ============================================================================

class TokenResult(BaseModel):
    """Outcome of fetching a bearer token.

    Exactly one of ``token`` and ``errors`` is set.

    Attributes:
        token: Raw bearer token returned by the token endpoint.
        errors: Human readable failure description.
    """
    token: Optional[str] = None
    errors: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "TokenResult":
        if (self.token is None) == (self.errors is None):
            raise ValueError("TokenResult requires exactly one of token or errors")
        return self

    @property
    def ok(self) -> bool:
        return self.errors is None

    def __repr__(self) -> str:
        if self.ok:
            return "TokenResult(token=***)"
        return f"TokenResult(errors={self.errors!r})"


# ============================================================================
# Execution Result
# ============================================================================

@dataclass(frozen=True)
class ExecutionResult:
    """Terminal outcome of one API call.

    ``errors`` is None on success. A successful call may still carry a None
    ``result`` when the response had no body.

    Attributes:
        result: Synchronized model, list of models, or the raw decoded body.
        errors: Error payload of a failed call.
        status_code: HTTP status of the API response, when one was received.
    """
    result: Any = None
    errors: Any = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.errors is None

    def raise_for_errors(self) -> Any:
        """
        Return ``result``, or raise ``ApiResponseError`` if the call failed.
        """
        if not self.ok:
            raise ApiResponseError(self.status_code, self.errors)
        return self.result

    def __iter__(self) -> Iterator[Any]:
        # allows ``result, errors = await client.execute(...)``
        yield self.result
        yield self.errors
