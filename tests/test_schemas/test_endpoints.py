import pytest

from submarine_client.engine.exceptions import RequestBuildError, UnknownOperationError
from submarine_client.schemas.endpoints import (
    API_OPERATIONS,
    OMIT,
    HttpMethod,
    OperationDescriptor,
    get_operation,
)


def test_registry_is_closed_and_read_only():
    assert len(API_OPERATIONS) == 14
    with pytest.raises(TypeError):
        API_OPERATIONS["delete_everything"] = get_operation("get_subscriptions")


def test_descriptors_are_frozen():
    descriptor = get_operation("get_subscriptions")
    with pytest.raises(Exception):
        descriptor.http_method = HttpMethod.DELETE


@pytest.mark.parametrize(
    "operation, method, endpoint",
    [
        ("get_payment_methods", HttpMethod.GET, "/customers/{{ customer_id }}/payment_methods.json"),
        ("update_payment_method", HttpMethod.PATCH, "/customers/{{ customer_id }}/payment_methods/{{ id }}.json"),
        ("remove_payment_method", HttpMethod.DELETE, "/customers/{{ customer_id }}/payment_methods/{{ id }}.json"),
        ("update_subscription", HttpMethod.PUT, "/customers/{{ customer_id }}/subscriptions/{{ id }}.json"),
        ("duplicate_subscription", HttpMethod.POST, "/customers/{{ customer_id }}/subscriptions/{{ id }}/duplicate.json"),
        ("bulk_update_subscriptions", HttpMethod.POST, "/customers/{{ customer_id }}/subscriptions/bulk_update.json"),
        ("create_upsell", HttpMethod.POST, "/customers/{{ customer_id }}/orders/{{ order_id }}/upsells.json"),
        ("generate_payment_processor_client_token", HttpMethod.POST, "/payment_processor_client_tokens.json"),
    ],
)
def test_operation_table(operation, method, endpoint):
    descriptor = get_operation(operation)
    assert descriptor.http_method is method
    assert descriptor.endpoint == endpoint


def test_checkout_operations_omit_customer_id():
    omitting = {
        name for name, descriptor in API_OPERATIONS.items()
        if descriptor.query_params_override.get("customer_id") is OMIT
    }
    assert omitting == {"generate_payment_processor_client_token", "create_preliminary_payment_method"}


def test_placeholders_in_order_of_first_use():
    assert get_operation("create_upsell").placeholders == ("customer_id", "order_id")
    assert get_operation("create_preliminary_payment_method").placeholders == ()

    descriptor = OperationDescriptor(http_method="GET", endpoint="/{{ a }}/{{b}}/{{ a }}")
    assert descriptor.placeholders == ("a", "b")


def test_unknown_operation():
    with pytest.raises(UnknownOperationError) as exc_info:
        get_operation("refund_everything")

    assert isinstance(exc_info.value, RequestBuildError)
    assert isinstance(exc_info.value, KeyError)
    assert "refund_everything" in str(exc_info.value)


def test_http_method_flags():
    assert HttpMethod.GET.is_read
    assert not HttpMethod.POST.is_read
    assert not HttpMethod.GET.has_body
    assert not HttpMethod.DELETE.has_body
    assert HttpMethod.PATCH.has_body
