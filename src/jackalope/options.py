""" Repository options. An :class:`Options` instance is resolved once, when a
    :class:`jackalope.Repository` is constructed, and is not modified after
    that point; :func:`Options.replace` returns a new instance instead.
"""

import logging
import os
import types


logger = logging.getLogger(__name__)

untruths = set((None, False, 0, '0', 'false', 'f', 'no', 'n', 'off', 'disable', ''))

# Environment variables that override the built-in defaults. They are
# consulted each time an Options instance is built without an explicit
# value for the corresponding switch.

environment = dict()
environment['transactions'] = 'JACKALOPE_TRANSACTIONS'
environment['stream_wrapper'] = 'JACKALOPE_STREAM_WRAPPER'


def boolean(value):
    """ Interpret *value* as a boolean, accepting the usual string spellings
        for false ('off', 'no', 'false', etc.). Anything not recognized as
        false is true.
    """

    if isinstance(value, str):
        value = value.strip().lower()

    try:
        return value not in untruths
    except TypeError:
        raise ValueError('cannot interpret as a boolean: ' + repr(value))



def _default(name):

    variable = environment[name]

    try:
        value = os.environ[variable]
    except KeyError:
        return True

    logger.debug("option %s taken from $%s=%r", name, variable, value)
    return boolean(value)



class Options:
    """ The recognized repository switches, *transactions* and
        *stream_wrapper*, plus any unrecognized keys, which are preserved
        in :attr:`extra` but otherwise ignored.

        :ivar transactions: Expose transaction support if the transport
            provides it.
        :ivar stream_wrapper: Install the lazy binary URL handler.
        :ivar extra: Read-only mapping of unrecognized keys.
    """

    recognized = ('transactions', 'stream_wrapper')

    def __init__(self, transactions=None, stream_wrapper=None, extra=None):

        if transactions is None:
            transactions = _default('transactions')
        if stream_wrapper is None:
            stream_wrapper = _default('stream_wrapper')

        self._transactions = boolean(transactions)
        self._stream_wrapper = boolean(stream_wrapper)
        self._extra = types.MappingProxyType(dict(extra or ()))


    @property
    def transactions(self):
        return self._transactions


    @property
    def stream_wrapper(self):
        return self._stream_wrapper


    @property
    def extra(self):
        return self._extra


    def __eq__(self, other):
        if not isinstance(other, Options):
            return NotImplemented
        return self.as_dict() == other.as_dict()


    def __repr__(self):
        return 'Options(%s)' % (', '.join('%s=%r' % pair for pair in self.as_dict().items()))


    def as_dict(self):
        options = dict(self._extra)
        options['transactions'] = self._transactions
        options['stream_wrapper'] = self._stream_wrapper
        return options


    def replace(self, **changes):
        """ Return a new :class:`Options` with the requested *changes*
            applied on top of this instance's values.
        """

        options = self.as_dict()
        options.update(changes)
        return Options.from_mapping(options)


    @classmethod
    def from_mapping(cls, options):
        """ Build an :class:`Options` from a mapping of option names to
            values. Every key other than the recognized switches ends up
            in :attr:`extra`, whatever its name.
        """

        items = dict(options)
        transactions = items.pop('transactions', None)
        stream_wrapper = items.pop('stream_wrapper', None)

        return cls(transactions, stream_wrapper, items)


    @classmethod
    def resolve(cls, options=None):
        """ Accept None, an existing :class:`Options` instance, or a
            mapping of option names to values, and return an
            :class:`Options` instance. Mappings are copied; the caller
            is free to modify or discard theirs afterwards.
        """

        if options is None:
            resolved = cls()
        elif isinstance(options, Options):
            resolved = options
        else:
            try:
                items = dict(options)
            except (TypeError, ValueError):
                raise TypeError('options must be a mapping, not ' + type(options).__name__)

            for key in items.keys():
                if not isinstance(key, str):
                    raise TypeError('option names must be strings: ' + repr(key))

            resolved = cls.from_mapping(items)

        logger.debug("resolved %r", resolved)
        return resolved


# end of class Options


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
