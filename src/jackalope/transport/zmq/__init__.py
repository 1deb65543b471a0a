""" Repository transport over ZeroMQ request/response sockets. Each
    transport operation is a single request to a repository server,
    answered with a single response.
"""

from ...errors import LoginError
from .. import message
from ..base import TransactionalTransport, Transport, TransportError
from . import request


class ZmqTransport(Transport):
    """ Transport to a repository server listening at *address* and *port*.
        Connections are shared between transports addressing the same
        server, see :func:`request.client`. The *timeout*, in seconds,
        applies to each individual request.
    """

    def __init__(self, address, port, timeout=None):

        self.address = address
        self.port = int(port)
        self.timeout = timeout
        self.client = request.client(address, self.port)


    def __repr__(self):
        return '%s(%r, %r)' % (self.__class__.__name__, self.address, self.port)


    def _send(self, type, target=None, value=None):
        """ Send a request and return the response :class:`Payload`. An
            error reported by the server is raised as a
            :class:`TransportError`.
        """

        req = message.Request(type, target, message.Payload(value))
        response = self.client.send(req, self.timeout)

        payload = response.payload
        if payload is None:
            return message.Payload(value=None)

        error = payload.error
        if error is not None:
            text = '%s: %s' % (error.get('type'), error.get('text'))
            raise TransportError(text)

        return payload


    def login(self, credentials, workspace_name):

        if credentials is None:
            value = None
        else:
            value = credentials.to_dict()

        try:
            payload = self._send(message.LOGIN, workspace_name, value)
        except TransportError as exc:
            if type(exc) is TransportError:
                raise LoginError(str(exc)) from exc
            raise

        return bool(payload.value)


    def logout(self):
        self._send(message.LOGOUT)


    def get_repository_descriptors(self):

        payload = self._send(message.DESCRIPTORS)
        descriptors = payload.value

        if descriptors is None:
            return None

        if not isinstance(descriptors, dict):
            raise TransportError('malformed descriptors: ' + repr(descriptors))

        return descriptors


    def get_binary(self, path):

        payload = self._send(message.BINARY, path)

        if payload.bulk is None:
            return b''

        return payload.bulk


# end of class ZmqTransport



class ZmqTransactionalTransport(ZmqTransport, TransactionalTransport):
    """ A :class:`ZmqTransport` for servers that support user transactions.
    """

    def begin_transaction(self):
        self._send(message.BEGIN)


    def commit_transaction(self):
        self._send(message.COMMIT)


    def rollback_transaction(self):
        self._send(message.ROLLBACK)


# end of class ZmqTransactionalTransport


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
