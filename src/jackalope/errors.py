""" Exceptions raised by the repository layer. Transport errors live in
    :mod:`jackalope.transport.base`, so that the transport layer does not
    depend on anything above it.
"""


class RepositoryException(Exception):
    """Base class for all repository-layer errors."""


class RepositoryAccessError(RepositoryException):
    """Authentication was declined, or the login failed for another reason."""


class LoginError(RepositoryAccessError):
    """The transport reported that the supplied credentials were rejected."""


class TransactionStateError(RepositoryException):
    """A user transaction was used out of order."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
