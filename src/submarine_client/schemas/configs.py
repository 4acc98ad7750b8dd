"""
Client Configuration Models

Pydantic models describing how a client is configured: which environment it
talks to, who the authenticated customer is, and where bearer tokens are
obtained from.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..engine.exceptions import ConfigurationError


class Environment(str, Enum):
    PRODUCTION = "production"
    STAGING = "staging"
    UAT = "uat"

    @classmethod
    def from_string(cls, value: Union[str, "Environment"]) -> "Environment":
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(
                f"Unsupported environment: {value!r} (expected one of: {', '.join(e.value for e in cls)})"
            ) from None


API_ENDPOINTS: Mapping[Environment, str] = MappingProxyType({
    Environment.PRODUCTION: "https://submarine.discolabs.com/api/v1",
    Environment.STAGING: "https://submarine-staging.discolabs.com/api/v1",
    Environment.UAT: "https://submarine-uat.discolabs.com/api/v1",
})

#: Path of the token endpoint served by the shop's storefront app proxy.
TOKEN_PATH = "/apps/submarine/auth/tokens"


class Authentication(BaseModel):
    """Authentication descriptor merged into every query string.

    Extra fields (for example a ``timestamp`` and ``signature`` pair) are kept
    and sent along with the identifiers.

    Attributes:
        shop: Shopify shop domain, e.g. ``example.myshopify.com``.
        customer_id: Identifier of the authenticated customer.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    shop: str = Field(..., min_length=1)
    customer_id: str = Field(..., min_length=1)

    @field_validator("customer_id", mode="before")
    @classmethod
    def _coerce_customer_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def as_params(self) -> Dict[str, Any]:
        """Return the descriptor as a plain mapping, extra fields included."""
        return self.model_dump()


class ClientConfig(BaseModel):
    """Complete client configuration.

    Attributes:
        authentication: Shop and customer identifiers.
        environment: Which API deployment to talk to.
        token_url: Bearer token endpoint. Defaults to the shop's storefront
            token path.
    """
    model_config = ConfigDict(frozen=True)

    authentication: Authentication
    environment: Environment = Environment.PRODUCTION
    token_url: Optional[str] = None

    @field_validator("environment", mode="before")
    @classmethod
    def _parse_environment(cls, value: Any) -> Environment:
        return Environment.from_string(value)

    @model_validator(mode="after")
    def _default_token_url(self) -> "ClientConfig":
        if self.token_url is None:
            object.__setattr__(self, "token_url", f"https://{self.authentication.shop}{TOKEN_PATH}")
        elif not self.token_url.startswith(("http://", "https://")):
            raise ValueError(f"token_url must be an absolute http(s) URL, got {self.token_url!r}")
        return self

    @property
    def base_url(self) -> str:
        return API_ENDPOINTS[self.environment]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClientConfig":
        """
        Build a configuration, converting validation failures into
        ``ConfigurationError``.
        """
        try:
            return cls.model_validate(dict(data))
        except ConfigurationError:
            raise
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid client configuration: {exc}") from exc
