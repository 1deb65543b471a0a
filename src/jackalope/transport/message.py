""" A class representation of a jackalope request/response message, as
    carried by the message-based transports.
"""

import itertools
import threading
import time as timemodule


# This is the version of the on-the-wire protocol implemented here,
# identified by a single byte.

version = b'a'

# Reply types.

ACK = 'ACK'
REP = 'REP'

# Request types.

LOGIN = 'LOGIN'
LOGOUT = 'LOGOUT'
DESCRIPTORS = 'DESCRIPTORS'
BINARY = 'BINARY'
BEGIN = 'BEGIN'
COMMIT = 'COMMIT'
ROLLBACK = 'ROLLBACK'


class Message:
    """ The :class:`Message` provides a very thin encapsulation of what it
        means to be a message in a jackalope context: the message *type*,
        the *target* of the request (a workspace name, or a path), the
        *payload* of the message (a :class:`Payload` instance), and an
        identification number unique to this correspondence.

        :ivar valid_types: A set of valid strings for the message type.
        :ivar prefix: Routing frames to prepend when replying via a
            ROUTER socket; empty for client-side messages.
    """

    valid_types = set((ACK, REP))

    def __init__(self, type, target=None, payload=None, id=None):

        if type in self.valid_types:
            pass
        else:
            raise ValueError('invalid message type: ' + repr(type))

        self.id = id
        self.type = type
        self.target = target
        self.payload = payload
        self.prefix = ()


    def __repr__(self):
        return '%s(%r, %r, %r, id=%r)' % (self.__class__.__name__, self.type, self.target, self.payload, self.id)


# end of class Message



class Request(Message):
    """ A :class:`Request` is a :class:`Message` that expects a response.
        Requests are normally created without an id, in which case a
        locally unique id is generated so that the response can be tied
        back to the request that prompted it.
    """

    valid_types = set((LOGIN, LOGOUT, DESCRIPTORS, BINARY, BEGIN, COMMIT, ROLLBACK))

    def __init__(self, type, target=None, payload=None, id=None):

        if id is None:
            id = _id_next()

        Message.__init__(self, type, target, payload, id)


# end of class Request



class Payload:
    """ This is a lightweight class to encapsulate a Python-native *value*
        for inclusion in a :class:`Message`. The *error*, if present, is a
        dictionary describing an exception raised on the far side; *bulk*
        is raw bytes carried alongside the JSON-encoded fields.
    """

    def __init__(self, value=None, error=None, bulk=None, time=None):

        if time is None:
            time = timemodule.time()

        self.value = value
        self.error = error
        self.bulk = bulk
        self.time = time


    def __repr__(self):
        return 'Payload(%r, error=%r)' % (self.value, self.error)


    def to_dict(self):

        payload = dict()
        payload['value'] = self.value
        payload['time'] = self.time

        if self.error is not None:
            payload['error'] = self.error

        return payload


    @classmethod
    def from_dict(cls, payload, bulk=None):
        return cls(payload.get('value'), payload.get('error'), bulk, payload.get('time'))


# end of class Payload


_id_min = 0
_id_max = 0xFFFFFFFF
_id_lock = threading.Lock()
_id_ticker = itertools.count(_id_min)


def _id_next():
    """ Return the next request identification number for subroutines to
        use when constructing a message.
    """

    global _id_ticker

    with _id_lock:
        id = next(_id_ticker)

        if id >= _id_max:
            _id_ticker = itertools.count(_id_min)

    id = '%08x' % (id)
    id = id.encode()
    return id


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
