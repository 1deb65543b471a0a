"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`jackalope.repository` so that transports never depend
on the repository layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence, Union


DescriptorValue = Union[str, Sequence[str]]


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """A request did not receive a timely response."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class TransportPortError(TransportError):
    """No suitable port could be bound or connected."""


class Transport(ABC):
    """Minimal contract for a repository transport."""

    @abstractmethod
    def login(self, credentials: Any, workspace_name: str) -> bool:
        """Authenticate against *workspace_name*; False if declined."""

    @abstractmethod
    def get_repository_descriptors(self) -> Mapping[str, DescriptorValue]:
        """Return every descriptor the repository reports."""

    def get_binary(self, path: str) -> bytes:
        """Return the raw value of the binary property at *path*."""
        raise NotImplementedError('this transport cannot retrieve binary values')

    def logout(self) -> None:
        """Release any server-side state held for the current login."""


_transactional_methods = ('begin_transaction', 'commit_transaction', 'rollback_transaction')


class TransactionalTransport(Transport):
    """Optional extension for transports that support user transactions.

    Objects that provide all three transaction methods are treated as
    transactional even if they do not inherit from this class.
    """

    @abstractmethod
    def begin_transaction(self) -> None:
        """Open a transaction on the server side."""

    @abstractmethod
    def commit_transaction(self) -> None:
        """Commit the open transaction."""

    @abstractmethod
    def rollback_transaction(self) -> None:
        """Discard the open transaction."""

    @classmethod
    def __subclasshook__(cls, C):
        if cls is not TransactionalTransport:
            return NotImplemented

        for method in _transactional_methods:
            for base in C.__mro__:
                if method in base.__dict__:
                    if base.__dict__[method] is None:
                        return NotImplemented
                    break
            else:
                return NotImplemented

        return True


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
