"""
Request execution engine.

Resolves an operation into a concrete request, authenticates it with a bearer
token from the token endpoint, performs the call, classifies the response and
synchronizes successful JSON:API payloads into the model store.

Request-time failures never raise out of :meth:`RequestExecutor.execute`;
they are reported through the returned :class:`ExecutionResult` and the
optional completion callback.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

import httpx

from ..models.store import ModelStore
from ..models.synchronizer import synchronize
from ..routing.payloads import build_payload
from ..routing.queries import build_query_params, build_query_string
from ..routing.urls import resolve_url
from ..schemas.configs import ClientConfig
from ..schemas.endpoints import HttpMethod, get_operation
from ..schemas.https import ClientRequestHeader, ExecutionResult, TokenResult
from ..utils import logger
from .exceptions import RequestBuildError, TokenFetchError
from .states import RequestLifecycle, RequestState, TransitionHooks

#: Statuses whose bodies are surfaced as a single-element error list.
FAULT_STATUSES = frozenset({400, 422, 500})

CompletionCallback = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class PreparedRequest:
    """A fully resolved API request, before authentication."""
    operation: str
    method: HttpMethod
    url: str
    body: Optional[bytes]


# ============================================================================
# Response helpers
# ============================================================================

def decode_body(response: httpx.Response) -> Any:
    """
    Decode a response body as JSON.

    Returns None for an empty body and the raw text when the body is not
    valid JSON.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _wrap(status_code: int, body: Any) -> list:
    if body is None:
        return [f"HTTP error : {status_code}"]
    return [body]


def classify_response(status_code: int, body: Any) -> Optional[Any]:
    """
    Decide whether a response is an error.

    Checked in order:
        1. 401: the body's ``errors`` member
        2. a non-empty ``errors`` member, whatever the status
        3. 400, 422 or 500: the whole body wrapped in a list

    Returns:
        The error payload, or None when the response should be synchronized
    """
    errors = body.get("errors") if isinstance(body, Mapping) else None

    if status_code == 401:
        return errors if errors else _wrap(status_code, body)
    if errors:
        return errors
    if status_code in FAULT_STATUSES:
        return _wrap(status_code, body)
    return None


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


# ============================================================================
# Executor
# ============================================================================

class RequestExecutor:
    """
    Runs API operations for one client.

    Args:
        http: Transport used for both the token endpoint and the API
        config: Client configuration
        store: Model store successful responses are synchronized into
        hooks: Optional lifecycle hooks
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        config: ClientConfig,
        store: ModelStore,
        hooks: Optional[TransitionHooks] = None,
    ) -> None:
        self._http = http
        self.config = config
        self.store = store
        self.hooks = hooks or TransitionHooks()

    def prepare(
        self,
        operation: str,
        data: Optional[Mapping[str, Any]] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> PreparedRequest:
        """
        Resolve URL, verb, query and body for an operation.

        Raises:
            RequestBuildError: Unknown operation or missing context value
        """
        data = {} if data is None else data
        method = get_operation(operation).http_method
        url = resolve_url(self.config.environment, operation, context)
        params = build_query_params(
            self.config.authentication.as_params(), operation, method, data
        )
        return PreparedRequest(
            operation=operation,
            method=method,
            url=url + build_query_string(params),
            body=build_payload(method, data),
        )

    async def fetch_token(self) -> TokenResult:
        """
        Fetch a bearer token from the token endpoint.

        Returns:
            TokenResult holding either the raw token text or an error message
        """
        try:
            token = await self._request_token()
        except (httpx.HTTPError, TokenFetchError) as exc:
            return TokenResult(errors=_describe(exc))
        return TokenResult(token=token)

    async def _request_token(self) -> str:
        response = await self._http.get(self.config.token_url)
        if not response.is_success:
            raise TokenFetchError(f"HTTP error : {response.status_code}", status_code=response.status_code)
        return response.text

    async def execute(
        self,
        operation: str,
        data: Optional[Mapping[str, Any]] = None,
        context: Optional[Mapping[str, Any]] = None,
        callback: Optional[CompletionCallback] = None,
    ) -> ExecutionResult:
        """
        Execute an API operation.

        Args:
            operation: Operation name from the endpoint registry
            data: Query data for GET requests, JSON body otherwise
            context: Values for the path template placeholders
            callback: Optional ``callback(result, errors)``, sync or async,
                invoked exactly once on completion

        Returns:
            ExecutionResult; ``errors`` is None on success
        """
        lifecycle = RequestLifecycle(operation, self.hooks)

        try:
            request = self.prepare(operation, data, context)
        except RequestBuildError as exc:
            logger.error("Could not build request for %s: %s", operation, exc)
            return await self._fail(lifecycle, [_describe(exc)], callback)

        logger.debug("Resolved %s to %s %s", operation, request.method.value, request.url)

        await lifecycle.advance(RequestState.AWAITING_TOKEN)
        token_result = await self.fetch_token()
        if not token_result.ok:
            logger.warning("Token fetch failed for %s: %s", operation, token_result.errors)
            return await self._fail(lifecycle, token_result.errors, callback)

        await lifecycle.advance(RequestState.AWAITING_RESPONSE)
        headers = ClientRequestHeader.bearer(token_result.token).to_headers()
        try:
            response = await self._http.request(
                request.method.value,
                request.url,
                headers=headers,
                content=request.body,
            )
        except httpx.HTTPError as exc:
            logger.warning("Request %s failed: %s", operation, _describe(exc))
            return await self._fail(lifecycle, [_describe(exc)], callback)

        body = decode_body(response)
        errors = classify_response(response.status_code, body)
        if errors is not None:
            logger.warning("%s responded with %d: %r", operation, response.status_code, errors)
            return await self._fail(lifecycle, errors, callback, status_code=response.status_code)

        await lifecycle.advance(RequestState.SYNCHRONIZING)
        try:
            result = synchronize(self.store, body)
        except ValueError as exc:
            logger.error("Could not synchronize %s response: %s", operation, exc)
            return await self._fail(
                lifecycle, [_describe(exc)], callback, status_code=response.status_code
            )

        await lifecycle.advance(RequestState.DONE)
        logger.info("%s completed with %d", operation, response.status_code)
        outcome = ExecutionResult(result=result, status_code=response.status_code)
        await self._complete(outcome, callback)
        return outcome

    async def _fail(
        self,
        lifecycle: RequestLifecycle,
        errors: Any,
        callback: Optional[CompletionCallback],
        status_code: Optional[int] = None,
    ) -> ExecutionResult:
        await lifecycle.advance(RequestState.FAILED)
        outcome = ExecutionResult(errors=errors, status_code=status_code)
        await self._complete(outcome, callback)
        return outcome

    @staticmethod
    async def _complete(outcome: ExecutionResult, callback: Optional[CompletionCallback]) -> None:
        if callback is None:
            return
        returned = callback(outcome.result, outcome.errors)
        if inspect.isawaitable(returned):
            await returned
