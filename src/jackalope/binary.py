""" Lazy loading of binary property values. A binary value is addressed by a
    ``jackalope://<session token>/<path>`` URL; opening that URL through
    :func:`urllib.request.urlopen` yields a :class:`LazyBinary` stream that
    does not contact the transport until it is first read.

    The URL handler is installed process-wide by :func:`ensure_registered`.
    Only the first call has any effect, whatever later callers ask for.
"""

import io
import logging
import threading
import urllib.error
import urllib.parse
import urllib.request
import weakref


logger = logging.getLogger(__name__)

scheme = 'jackalope'

_registered = None
_registered_lock = threading.Lock()

# The opener the handler was added to, the handler itself, and whether the
# opener was created here (no opener had been installed before).

_opener = None
_opener_created = False
_handler = None

_sessions = weakref.WeakValueDictionary()
_sessions_lock = threading.Lock()


def ensure_registered(enabled):
    """ Install the ``jackalope://`` URL handler if *enabled* is True and
        this is the first invocation in this process. The decision made by
        the first invocation is permanent; the return value is that
        decision.

        The handler is added to whatever opener is currently installed
        via :func:`urllib.request.install_opener`, so handlers installed
        by the application remain in effect. An opener installed after
        this point replaces the handler along with everything else.
    """

    global _registered

    with _registered_lock:
        if _registered is None:
            enabled = bool(enabled)

            if enabled:
                _add_handler()

            _registered = enabled
            logger.debug("binary stream handler registration: %s", enabled)

        return _registered



def _add_handler():

    global _opener, _opener_created, _handler

    # urllib.request offers no public accessor for the installed opener.
    opener = urllib.request._opener

    if opener is None:
        opener = urllib.request.build_opener()
        urllib.request.install_opener(opener)
        _opener_created = True
    else:
        _opener_created = False

    handler = BinaryHandler()
    opener.add_handler(handler)

    _opener = opener
    _handler = handler



def _remove_handler():

    global _opener, _opener_created, _handler

    opener = _opener
    handler = _handler

    if _opener_created:
        if urllib.request._opener is opener:
            urllib.request.install_opener(None)
    else:
        opener.handlers.remove(handler)

        handlers = opener.handle_open.get(scheme, [])
        if handler in handlers:
            handlers.remove(handler)
        if not handlers:
            opener.handle_open.pop(scheme, None)

    _opener = None
    _opener_created = False
    _handler = None



def is_registered():
    """ Return the registration decision: True or False, or None if
        :func:`ensure_registered` has not yet been called.
    """

    return _registered



def _clear():
    """ Forget the registration decision and take the handler back out of
        the URL opener. This only exists so that the test suite can
        exercise the first-call behavior more than once per process.
    """

    global _registered

    with _registered_lock:
        if _handler is not None:
            _remove_handler()
        _registered = None



def register_session(session):
    """ Make the *session* reachable via its token for ``jackalope://`` URLs.
        Only a weak reference is kept; a discarded session disappears from
        the registry on its own.
    """

    with _sessions_lock:
        _sessions[session.token] = session



def unregister_session(session):

    with _sessions_lock:
        try:
            existing = _sessions[session.token]
        except KeyError:
            return

        if existing is session:
            del _sessions[session.token]



def lookup_session(token):

    with _sessions_lock:
        return _sessions.get(token)



def url(session, path):
    """ Return the ``jackalope://`` URL for the binary property at *path*,
        as seen by *session*.
    """

    if not path.startswith('/'):
        path = '/' + path

    return '%s://%s%s' % (scheme, session.token, urllib.parse.quote(path))



class LazyBinary(io.RawIOBase):
    """ A read-only stream over a binary property value. The value is
        requested from the session's transport on the first read, and
        held in memory after that.
    """

    def __init__(self, session, path, url=None):

        io.RawIOBase.__init__(self)

        self.session = session
        self.path = path
        self.url = url
        self._buffer = None


    @property
    def loaded(self):
        return self._buffer is not None


    def _load(self):

        if self._buffer is None:
            logger.debug("loading binary value for %s", self.path)
            value = self.session.get_binary(self.path)
            self._buffer = io.BytesIO(bytes(value))

        return self._buffer


    def readable(self):
        return True


    def readinto(self, buffer):
        data = self._load().read(len(buffer))
        count = len(data)
        buffer[:count] = data
        return count


    def seekable(self):
        return True


    def seek(self, offset, whence=io.SEEK_SET):
        return self._load().seek(offset, whence)


    def tell(self):
        if self._buffer is None:
            return 0
        return self._buffer.tell()


    def geturl(self):
        return self.url


    def info(self):
        return dict()


# end of class LazyBinary



class BinaryHandler(urllib.request.BaseHandler):
    """ :mod:`urllib.request` handler for the ``jackalope`` URL scheme.
    """

    def jackalope_open(self, request):

        token = request.host
        path = urllib.parse.unquote(request.selector)

        session = lookup_session(token)
        if session is None:
            raise urllib.error.URLError('no live session for ' + repr(request.full_url))

        return LazyBinary(session, path, request.full_url)


# end of class BinaryHandler


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
