"""
Asynchronous client for the Submarine Customer API.

Resolves named operations into HTTP requests, authenticates them with a
short-lived bearer token and synchronizes JSON:API responses into an
identity-stable local model graph.
"""

from .clients import SubmarineClient
from .configs import load_client_config
from .engine.exceptions import (
    ApiResponseError,
    ConfigurationError,
    InvalidTransition,
    MissingContextError,
    RequestBuildError,
    SubmarineError,
    TokenError,
    TokenFetchError,
    UnknownOperationError,
)
from .engine.executors import PreparedRequest, RequestExecutor
from .engine.states import RequestLifecycle, RequestState, TransitionHooks
from .models import LocalModel, ModelStore, ResourceKey, synchronize
from .schemas import (
    API_OPERATIONS,
    OMIT,
    Authentication,
    ClientConfig,
    Environment,
    ExecutionResult,
    HttpMethod,
    TokenResult,
)
from .utils import logger, setup_logger

__version__ = "0.1.0"

__all__ = [
    "SubmarineClient",
    "load_client_config",
    "ApiResponseError",
    "ConfigurationError",
    "InvalidTransition",
    "MissingContextError",
    "RequestBuildError",
    "SubmarineError",
    "TokenError",
    "TokenFetchError",
    "UnknownOperationError",
    "PreparedRequest",
    "RequestExecutor",
    "RequestLifecycle",
    "RequestState",
    "TransitionHooks",
    "LocalModel",
    "ModelStore",
    "ResourceKey",
    "synchronize",
    "API_OPERATIONS",
    "OMIT",
    "Authentication",
    "ClientConfig",
    "Environment",
    "ExecutionResult",
    "HttpMethod",
    "TokenResult",
    "logger",
    "setup_logger",
]
