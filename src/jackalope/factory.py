""" Implementation of :func:`get_repository`, the entry point for callers
    that describe a repository with a flat set of parameters rather than
    constructing a transport themselves.
"""

from .options import boolean
from .repository import Repository
from .transport import zmq


parameter_prefix = 'jackalope.'


def get_repository(parameters):
    """ Return a new :class:`jackalope.Repository` described by the
        *parameters* mapping. The recognized parameters are:

        ``jackalope.zmq.address``, ``jackalope.zmq.port``
            Location of the repository server. Required.
        ``jackalope.zmq.timeout``
            Per-request timeout in seconds.
        ``jackalope.zmq.transactional``
            Whether the server supports user transactions; defaults
            to False.
        ``jackalope.transactions``, ``jackalope.stream_wrapper``
            Repository options, see :class:`jackalope.options.Options`.

        Any other ``jackalope.*`` parameter is passed along as an
        unrecognized repository option.
    """

    if parameters is None:
        raise ValueError('repository parameters must be specified')

    parameters = dict(parameters)

    try:
        address = parameters.pop('jackalope.zmq.address')
        port = parameters.pop('jackalope.zmq.port')
    except KeyError as missing:
        raise ValueError('missing repository parameter: ' + str(missing))

    timeout = parameters.pop('jackalope.zmq.timeout', None)
    if timeout is not None:
        timeout = float(timeout)

    transactional = boolean(parameters.pop('jackalope.zmq.transactional', False))

    if transactional:
        transport = zmq.ZmqTransactionalTransport(address, port, timeout)
    else:
        transport = zmq.ZmqTransport(address, port, timeout)

    options = dict()

    for key,value in parameters.items():
        if key.startswith(parameter_prefix):
            options[key[len(parameter_prefix):]] = value

    return Repository(transport, options)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
