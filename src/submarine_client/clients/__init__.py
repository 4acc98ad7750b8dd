"""
Client module for the Submarine Customer API.

Provides an ``httpx.AsyncClient`` subclass with one coroutine per API
operation, bearer token handling and JSON:API synchronization.
"""

from .http_client import SubmarineClient

__all__ = ["SubmarineClient"]
