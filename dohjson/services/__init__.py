# Services Package
from dohjson.services.doh_client import (
    ClientError,
    DecodeError,
    DoHClient,
    HTTPError,
    QueryResult,
    ServerTimeoutError,
    TransportError,
)
from dohjson.services.forwarder import Forwarder

__all__ = [
    'ClientError',
    'DecodeError',
    'DoHClient',
    'HTTPError',
    'QueryResult',
    'ServerTimeoutError',
    'TransportError',
    'Forwarder',
]
