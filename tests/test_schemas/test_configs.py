import pytest

from submarine_client import ConfigurationError, load_client_config
from submarine_client.schemas.configs import API_ENDPOINTS, Authentication, ClientConfig, Environment
from submarine_client.schemas.https import ClientRequestHeader, ExecutionResult, TokenResult
from submarine_client.engine.exceptions import ApiResponseError


AUTH = {"shop": "example.myshopify.com", "customer_id": "42"}


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("SUBMARINE_SHOP", "SUBMARINE_CUSTOMER_ID", "SUBMARINE_ENVIRONMENT", "SUBMARINE_TOKEN_URL"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_environment_base_urls():
    assert API_ENDPOINTS[Environment.PRODUCTION] == "https://submarine.discolabs.com/api/v1"
    assert API_ENDPOINTS[Environment.STAGING] == "https://submarine-staging.discolabs.com/api/v1"
    assert API_ENDPOINTS[Environment.UAT] == "https://submarine-uat.discolabs.com/api/v1"


def test_unknown_environment_fails_at_configuration_time():
    with pytest.raises(ConfigurationError, match="dev"):
        ClientConfig.from_dict({"authentication": AUTH, "environment": "dev"})


def test_missing_customer_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        ClientConfig.from_dict({"authentication": {"shop": "example.myshopify.com"}})


def test_default_token_url_points_at_the_shop():
    config = ClientConfig(authentication=AUTH, environment="uat")

    assert config.environment is Environment.UAT
    assert config.token_url == "https://example.myshopify.com/apps/submarine/auth/tokens"
    assert config.base_url == "https://submarine-uat.discolabs.com/api/v1"


def test_relative_token_url_rejected():
    with pytest.raises(ConfigurationError):
        ClientConfig.from_dict({"authentication": AUTH, "token_url": "/apps/submarine/auth/tokens"})


def test_authentication_keeps_extra_fields():
    auth = Authentication(shop="example.myshopify.com", customer_id=42, timestamp=1700000000, signature="abc")

    assert auth.customer_id == "42"
    assert auth.as_params() == {
        "shop": "example.myshopify.com",
        "customer_id": "42",
        "timestamp": 1700000000,
        "signature": "abc",
    }


def test_load_client_config_from_env_file(tmp_path, clean_env):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "SUBMARINE_SHOP=file-shop.myshopify.com\n"
        "SUBMARINE_CUSTOMER_ID=100\n"
        "SUBMARINE_ENVIRONMENT=staging\n"
    )
    clean_env.setenv("SUBMARINE_ENVIRONMENT", "uat")

    config = load_client_config(env_file, customer_id="200")

    assert config.authentication.shop == "file-shop.myshopify.com"
    assert config.authentication.customer_id == "200"
    assert config.environment is Environment.UAT


def test_load_client_config_defaults_to_production(clean_env, tmp_path):
    clean_env.setenv("SUBMARINE_SHOP", "env-shop.myshopify.com")
    clean_env.setenv("SUBMARINE_CUSTOMER_ID", "7")

    config = load_client_config(tmp_path / "missing.env")

    assert config.environment is Environment.PRODUCTION
    assert config.token_url == "https://env-shop.myshopify.com/apps/submarine/auth/tokens"


def test_load_client_config_requires_identifiers(clean_env):
    with pytest.raises(ConfigurationError, match="SUBMARINE_CUSTOMER_ID"):
        load_client_config(None, shop="example.myshopify.com")


def test_load_client_config_rejects_unknown_overrides(clean_env):
    with pytest.raises(TypeError):
        load_client_config(None, region="eu")


def test_token_result_requires_exactly_one_field():
    assert TokenResult(token="abc").ok
    assert not TokenResult(errors="HTTP error : 500").ok
    assert "abc" not in repr(TokenResult(token="abc"))

    with pytest.raises(ValueError):
        TokenResult()
    with pytest.raises(ValueError):
        TokenResult(token="abc", errors="boom")


def test_request_header_aliases():
    headers = ClientRequestHeader.bearer("abc").to_headers()

    assert headers == {
        "Content-Type": "application/json; charset=utf-8",
        "Authorization": "Bearer abc",
    }


def test_execution_result_unpacks_and_raises():
    result, errors = ExecutionResult(result="ok", status_code=200)
    assert (result, errors) == ("ok", None)

    failed = ExecutionResult(errors=["unauthorized"], status_code=401)
    with pytest.raises(ApiResponseError) as exc_info:
        failed.raise_for_errors()
    assert exc_info.value.status_code == 401
    assert exc_info.value.errors == ["unauthorized"]
