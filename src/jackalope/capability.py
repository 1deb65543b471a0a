""" Capability negotiation: which optional features a repository exposes is
    the intersection of what the caller asked for and what the transport
    actually implements.
"""

from .transport.base import TransactionalTransport


def supports_transactions(transport):
    """ Return True if the *transport* implements the transactional
        extension, either by inheritance or by providing the
        transaction methods directly.
    """

    return isinstance(transport, TransactionalTransport)



def negotiate_transactions(requested, transport):
    """ Return the effective transaction support: the *requested* flag
        is honored only if the *transport* can back it.
    """

    return bool(requested) and supports_transactions(transport)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
