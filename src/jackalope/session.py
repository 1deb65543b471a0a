import logging
import uuid

from . import binary
from .errors import RepositoryException


logger = logging.getLogger(__name__)


class Session:
    """ A :class:`Session` is the result of a successful
        :func:`jackalope.Repository.login`. It ties together the
        *repository* that created it, the *workspace_name* it is bound to,
        the *credentials* used to log in, and the *transport* carrying
        requests to the remote repository.

        The node and property API lives elsewhere; this class carries
        only the state established at login, plus access to binary values
        for the ``jackalope://`` URL handler.
    """

    def __init__(self, repository, workspace_name, credentials, transport):

        self.repository = repository
        self.credentials = credentials
        self.transport = transport
        self.token = uuid.uuid4().hex
        self.workspace = Workspace(self, workspace_name)

        self._live = True
        binary.register_session(self)


    def __repr__(self):
        return 'Session(%r, %r)' % (self.user_id, self.workspace.name)


    @property
    def user_id(self):
        return getattr(self.credentials, 'user_id', None)


    def binary_url(self, path):
        """ Return a ``jackalope://`` URL that lazily loads the binary
            property at *path* when opened and read.
        """

        return binary.url(self, path)


    def get_binary(self, path):

        if not self._live:
            raise RepositoryException('session is no longer live')

        return self.transport.get_binary(path)


    def is_live(self):
        return self._live


    def logout(self):
        """ Release this session. Logging out more than once has no
            additional effect.
        """

        if not self._live:
            return

        self._live = False
        binary.unregister_session(self)

        logger.debug("logout: %r", self)
        self.transport.logout()


# end of class Session



class Workspace:

    def __init__(self, session, name):

        self.session = session
        self.name = name
        self.transaction_coordinator = None


    def __repr__(self):
        return 'Workspace(%r)' % (self.name)


    def set_transaction_coordinator(self, coordinator):
        self.transaction_coordinator = coordinator


# end of class Workspace


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
