"""
Environment-driven configuration loading.

Reads ``SUBMARINE_*`` variables from the process environment and an optional
``.env`` file and turns them into a :class:`ClientConfig`.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import dotenv_values

from .engine.exceptions import ConfigurationError
from .schemas.configs import ClientConfig, Environment

_ENV_KEYS = {
    "shop": "SUBMARINE_SHOP",
    "customer_id": "SUBMARINE_CUSTOMER_ID",
    "environment": "SUBMARINE_ENVIRONMENT",
    "token_url": "SUBMARINE_TOKEN_URL",
}


def _read_env(env_file: Optional[Union[str, Path]]) -> Dict[str, Optional[str]]:
    values: Dict[str, Optional[str]] = {}
    if env_file is not None and Path(env_file).exists():
        values.update(dotenv_values(env_file))
    # process variables win over the file
    for env_key in _ENV_KEYS.values():
        if env_key in os.environ:
            values[env_key] = os.environ[env_key]
    return values


def load_client_config(env_file: Optional[Union[str, Path]] = ".env", **overrides: Any) -> ClientConfig:
    """
    Load client configuration from the environment.

    Args:
        env_file: Optional ``.env`` file; skipped when None or missing
        **overrides: Explicit values (``shop``, ``customer_id``, ``environment``,
            ``token_url``) that win over anything read from the environment

    Returns:
        Validated client configuration

    Raises:
        ConfigurationError: If shop or customer id is missing, or a value is invalid
    """
    unknown = set(overrides) - set(_ENV_KEYS)
    if unknown:
        raise TypeError(f"Unknown configuration parameter(s): {', '.join(sorted(unknown))}")

    values = _read_env(env_file)
    settings: Dict[str, Any] = {
        name: values.get(env_key) for name, env_key in _ENV_KEYS.items()
    }
    settings.update({k: v for k, v in overrides.items() if v is not None})

    missing = [_ENV_KEYS[name] for name in ("shop", "customer_id") if not settings.get(name)]
    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")

    return ClientConfig.from_dict({
        "authentication": {"shop": settings["shop"], "customer_id": settings["customer_id"]},
        "environment": settings.get("environment") or Environment.PRODUCTION,
        "token_url": settings.get("token_url") or None,
    })
