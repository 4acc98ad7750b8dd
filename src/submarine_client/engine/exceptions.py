"""
Exception and Error Definitions Module

Defines the exception hierarchy for request building, token acquisition
and response handling. All exceptions inherit from SubmarineError for
unified exception handling.

Exception Hierarchy:
    SubmarineError (root)
    ├── ConfigurationError
    ├── RequestBuildError
    │   ├── UnknownOperationError
    │   └── MissingContextError
    ├── TokenError
    │   └── TokenFetchError
    └── ApiResponseError
    InvalidTransition

Configuration problems are raised when a client is constructed. Errors that
happen while a request is in flight are caught by the executor and handed to
the caller as error values, never raised across ``execute``.
"""

from typing import Any, Iterable, Optional


class SubmarineError(Exception):
    """
    Root exception class for all project-specific exceptions.
    """
    pass


class ConfigurationError(SubmarineError):
    """
    Raised when client configuration is missing or invalid.

    This includes scenarios such as:
    - Unrecognized environment name
    - Missing shop or customer identifier
    - Malformed token endpoint URL
    """
    pass


class RequestBuildError(SubmarineError):
    """
    Base exception for failures while resolving an operation into a request.
    """
    pass


class UnknownOperationError(RequestBuildError, KeyError):
    """
    Raised when an operation name is not present in the endpoint registry.

    Attributes:
        operation: The operation name that was looked up
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Unknown API operation: {operation!r}")

    def __str__(self) -> str:
        return self.args[0]


class MissingContextError(RequestBuildError):
    """
    Raised when the request context lacks a placeholder used by a path template.

    Attributes:
        operation: Operation whose template could not be resolved
        missing: Placeholder names with no context value
    """

    def __init__(self, operation: str, missing: Iterable[str]):
        self.operation = operation
        self.missing = tuple(missing)
        super().__init__(
            f"Context for {operation!r} is missing placeholder(s): {', '.join(self.missing)}"
        )


class TokenError(SubmarineError):
    """
    Base exception for bearer token related errors.
    """
    pass


class TokenFetchError(TokenError):
    """
    Raised when the token endpoint cannot be reached or answers with a
    non-success status.

    Attributes:
        status_code: HTTP status of the token endpoint, None for transport errors
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ApiResponseError(SubmarineError):
    """
    Raised for a classified error response from the payments API.

    Attributes:
        status_code: HTTP status of the response, None if no response was received
        errors: Error payload that is surfaced to the caller
    """

    def __init__(self, status_code: Optional[int], errors: Any):
        self.status_code = status_code
        self.errors = errors
        if status_code is None:
            super().__init__(f"Request failed: {errors!r}")
        else:
            super().__init__(f"API responded with {status_code}: {errors!r}")


class InvalidTransition(Exception):
    """
    Raised when a request lifecycle is moved into a state that is not
    reachable from its current state.

    Attributes:
        current_state: State the lifecycle was in
        target_state: State that was requested
    """

    def __init__(self, current_state: Any, target_state: Any):
        self.current_state = current_state
        self.target_state = target_state
        super().__init__(f"Cannot transition from {current_state} to {target_state}")
