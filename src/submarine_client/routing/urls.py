"""
URL resolution for API operations.

Turns an environment, an operation name and a request context into the fully
qualified URL of the call.
"""

from typing import Any, Mapping, Optional, Union

from ..engine.exceptions import MissingContextError
from ..schemas.configs import API_ENDPOINTS, Environment
from ..schemas.endpoints import PLACEHOLDER_PATTERN, get_operation
from ..utils import stringify


def get_base_url(environment: Union[str, Environment]) -> str:
    """
    Return the API base URL of an environment.

    Raises:
        ConfigurationError: If the environment is not recognised
    """
    return API_ENDPOINTS[Environment.from_string(environment)]


def interpolate(template: str, context: Optional[Mapping[str, Any]]) -> str:
    """
    Replace every ``{{ name }}`` in ``template`` whose name is in ``context``.

    Unknown placeholders are left untouched.
    """
    context = context or {}

    def _substitute(match) -> str:
        name = match.group(1)
        if name in context:
            return stringify(context[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_substitute, template)


def resolve_url(
    environment: Union[str, Environment],
    operation: str,
    context: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Build the URL for an operation.

    Args:
        environment: Environment selecting the base URL
        operation: Operation name from the endpoint registry
        context: Placeholder values; extra keys are ignored

    Returns:
        Base URL joined with the interpolated path template

    Raises:
        ConfigurationError: Unknown environment
        UnknownOperationError: Unknown operation name
        MissingContextError: A placeholder has no value in ``context``
    """
    descriptor = get_operation(operation)
    url = interpolate(get_base_url(environment) + descriptor.endpoint, context)

    leftover = PLACEHOLDER_PATTERN.findall(url)
    if leftover:
        raise MissingContextError(operation, dict.fromkeys(leftover))
    return url
