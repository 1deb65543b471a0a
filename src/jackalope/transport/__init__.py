"""Transport layer implementations."""

from .base import (
    Transport,
    TransactionalTransport,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    TransportPortError,
)
