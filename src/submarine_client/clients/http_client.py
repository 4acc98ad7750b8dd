"""
Submarine Customer API Client

An ``httpx.AsyncClient`` that knows the Submarine Customer API: every
resource method resolves an operation, authenticates it with a bearer token
from the shop's token endpoint and returns synchronized local models.
"""

import warnings
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Union

import httpx

from ..engine.executors import CompletionCallback, PreparedRequest, RequestExecutor
from ..engine.states import RequestState, TransitionHookFunc, TransitionHooks
from ..models.store import ModelStore
from ..schemas.configs import ClientConfig
from ..schemas.https import ExecutionResult, TokenResult

Identifier = Union[str, int]


class SubmarineClient(httpx.AsyncClient):
    """
    Extended httpx.AsyncClient for the Submarine Customer API.

    Each client owns its own model store, so resources returned by different
    calls on the same client are the same Python objects.

    Usage:
        ```python
        config = ClientConfig(
            authentication={"shop": "example.myshopify.com", "customer_id": "5594588086341"},
            environment="staging",
        )
        async with SubmarineClient(config) as client:
            subscriptions, errors = await client.get_subscriptions({"status": "active"})
        ```
    """

    def __init__(
        self,
        config: Union[ClientConfig, Mapping[str, Any]],
        **kwargs
    ):
        """
        Initialize client from a configuration.

        Args:
            config: ClientConfig or a mapping accepted by ``ClientConfig.from_dict``
            **kwargs: All standard httpx.AsyncClient arguments (timeout, transport, etc.)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        if not isinstance(config, ClientConfig):
            config = ClientConfig.from_dict(config)
        super().__init__(**kwargs)
        self.config = config
        self.models = ModelStore()
        self._executor = RequestExecutor(self, config, self.models, TransitionHooks())

    @property
    def authentication(self) -> Dict[str, Any]:
        return self.config.authentication.as_params()

    # =========================================================================
    # Core
    # =========================================================================

    async def execute(
        self,
        operation: str,
        data: Optional[Mapping[str, Any]] = None,
        context: Optional[Mapping[str, Any]] = None,
        callback: Optional[CompletionCallback] = None,
    ) -> ExecutionResult:
        """
        Execute an API operation against the Submarine API.

        See :meth:`RequestExecutor.execute`.
        """
        return await self._executor.execute(operation, data, context, callback)

    def prepare(
        self,
        operation: str,
        data: Optional[Mapping[str, Any]] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> PreparedRequest:
        """Resolve an operation into a request without sending it."""
        return self._executor.prepare(operation, data, context)

    async def fetch_token(self) -> TokenResult:
        return await self._executor.fetch_token()

    def add_hook(self, state: RequestState, hook: TransitionHookFunc) -> None:
        """Register an async hook called whenever a request enters ``state``.

        Example:
            ```python
            async def log_failure(lifecycle, previous):
                print(f"{lifecycle.operation} failed after {previous}")

            client.add_hook(RequestState.FAILED, log_failure)
            ```
        """
        self._executor.hooks.hook(state, hook)

    def hook(self, state: RequestState) -> Callable:
        """Decorator form of :meth:`add_hook`."""
        def decorator(hook_func: TransitionHookFunc) -> TransitionHookFunc:
            self.add_hook(state, hook_func)
            return hook_func
        return decorator

    def _customer_context(self, **extra: Any) -> Dict[str, Any]:
        return {**self.authentication, **extra}

    # =========================================================================
    # Payment Methods
    # =========================================================================

    async def get_payment_methods(self, callback: Optional[CompletionCallback] = None) -> ExecutionResult:
        """Get the payment methods of the authenticated customer."""
        return await self.execute("get_payment_methods", {}, self._customer_context(), callback)

    async def create_payment_method(
        self,
        payment_method: Mapping[str, Any],
        callback: Optional[CompletionCallback] = None,
    ) -> ExecutionResult:
        """Create a payment method for the authenticated customer."""
        return await self.execute("create_payment_method", payment_method, self._customer_context(), callback)

    async def get_payment_method(self, id: Identifier, callback: Optional[CompletionCallback] = None) -> ExecutionResult:
        return await self.execute("get_payment_method", {}, self._customer_context(id=id), callback)

    async def update_payment_method(
        self,
        id: Identifier,
        payment_method: Mapping[str, Any],
        callback: Optional[CompletionCallback] = None,
    ) -> ExecutionResult:
        return await self.execute("update_payment_method", payment_method, self._customer_context(id=id), callback)

    async def remove_payment_method(self, id: Identifier, callback: Optional[CompletionCallback] = None) -> ExecutionResult:
        return await self.execute("remove_payment_method", {}, self._customer_context(id=id), callback)

    # =========================================================================
    # Subscriptions
    # =========================================================================

    async def get_subscriptions(
        self,
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[CompletionCallback] = None,
    ) -> ExecutionResult:
        """
        Get the subscriptions of the authenticated customer.

        Args:
            params: Extra query parameters, e.g. ``{"status": "paused"}``
            callback: Optional completion callback
        """
        return await self.execute("get_subscriptions", dict(params or {}), self._customer_context(), callback)

    async def get_subscription(self, id: Identifier, callback: Optional[CompletionCallback] = None) -> ExecutionResult:
        return await self.execute("get_subscription", {}, self._customer_context(id=id), callback)

    async def update_subscription(
        self,
        id: Identifier,
        subscription: Mapping[str, Any],
        callback: Optional[CompletionCallback] = None,
    ) -> ExecutionResult:
        return await self.execute("update_subscription", subscription, self._customer_context(id=id), callback)

    async def bulk_update_subscriptions(
        self,
        subscription_ids: Sequence[Identifier],
        subscription: Mapping[str, Any],
        callback: Optional[CompletionCallback] = None,
    ) -> ExecutionResult:
        """
        Apply the same update to several subscriptions at once.

        Args:
            subscription_ids: Subscriptions to update
            subscription: Attributes to set on each of them
            callback: Optional completion callback
        """
        payload = {
            "bulk_update": {
                "subscription_ids": list(subscription_ids),
                "subscription": dict(subscription),
            }
        }
        return await self.execute("bulk_update_subscriptions", payload, self._customer_context(), callback)

    async def cancel_subscription(self, id: Identifier, callback: Optional[CompletionCallback] = None) -> ExecutionResult:
        """
        Cancel a subscription.

        .. deprecated::
            Use :meth:`update_subscription` with ``{"status": "cancelled"}``.
        """
        warnings.warn(
            "cancel_subscription is deprecated, call update_subscription with a status of 'cancelled' instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return await self.execute("cancel_subscription", {}, self._customer_context(id=id), callback)

    async def duplicate_subscription(self, id: Identifier, callback: Optional[CompletionCallback] = None) -> ExecutionResult:
        return await self.execute("duplicate_subscription", {}, self._customer_context(id=id), callback)

    # =========================================================================
    # Orders and Checkout
    # =========================================================================

    async def create_upsell(
        self,
        order_id: Identifier,
        upsell: Mapping[str, Any],
        callback: Optional[CompletionCallback] = None,
    ) -> ExecutionResult:
        """Create an upsell on an existing order."""
        payload = {
            "data": {
                "type": "upsell",
                "attributes": dict(upsell),
            }
        }
        return await self.execute("create_upsell", payload, self._customer_context(order_id=order_id), callback)

    async def generate_payment_processor_client_token(
        self,
        payment_processor: str,
        callback: Optional[CompletionCallback] = None,
    ) -> ExecutionResult:
        """Generate a client token for a payment processor (e.g. ``braintree``)."""
        payload = {
            "data": {
                "type": "payment_processor_client_token",
                "attributes": {"payment_processor": payment_processor},
            }
        }
        return await self.execute("generate_payment_processor_client_token", payload, {}, callback)

    async def create_preliminary_payment_method(
        self,
        preliminary_payment_method: Mapping[str, Any],
        callback: Optional[CompletionCallback] = None,
    ) -> ExecutionResult:
        """
        Create a preliminary payment method for an in-progress checkout.

        Only needed during checkout, before a customer record exists.
        """
        return await self.execute("create_preliminary_payment_method", preliminary_payment_method, {}, callback)
