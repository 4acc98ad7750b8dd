from .configs import API_ENDPOINTS, TOKEN_PATH, Authentication, ClientConfig, Environment
from .endpoints import API_OPERATIONS, OMIT, HttpMethod, OperationDescriptor, QueryOverride, get_operation
from .https import ClientRequestHeader, ExecutionResult, TokenResult

__all__ = [
    "API_ENDPOINTS",
    "TOKEN_PATH",
    "Authentication",
    "ClientConfig",
    "Environment",
    "API_OPERATIONS",
    "OMIT",
    "HttpMethod",
    "OperationDescriptor",
    "QueryOverride",
    "get_operation",
    "ClientRequestHeader",
    "ExecutionResult",
    "TokenResult",
]
