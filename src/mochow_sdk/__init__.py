"""Asynchronous Python client for the Mochow vector database.

Usage:
    >>> from mochow_sdk import MochowClient
    >>> async with MochowClient.create("root", "api-key", "127.0.0.1:5287") as client:
    ...     await client.create_database("book")
    ...     print((await client.list_database()).databases)
"""

__version__ = "0.1.0"

from mochow_sdk.auth import Credentials
from mochow_sdk.client import MochowClient
from mochow_sdk.config import ClientConfiguration
from mochow_sdk.errors import MochowError, OtherError, ParamsError, ServiceError, TransportError

__all__ = [
    "ClientConfiguration",
    "Credentials",
    "MochowClient",
    "MochowError",
    "OtherError",
    "ParamsError",
    "ServiceError",
    "TransportError",
]
