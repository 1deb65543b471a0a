import logging

from . import binary
from . import capability
from . import descriptors
from .errors import RepositoryAccessError
from .options import Options
from .session import Session
from .transaction import UserTransaction


logger = logging.getLogger(__name__)

default_workspace = 'default'


class Repository:
    """ The :class:`Repository` is the entry point for a connection to a
        remote content repository. It is bound to a single *transport*,
        which it references but does not own; closing the transport, if
        that is ever necessary, is up to whoever created it.

        The *options* may be None, a mapping, or an
        :class:`jackalope.options.Options` instance; see that class for
        the recognized switches. The effective options are resolved once,
        here, and are available afterwards as :attr:`options`. Transaction
        support is only enabled if it was requested and the transport is
        able to provide it.

        The *session_factory* and *transaction_factory* are the callables
        used by :func:`login` to build a session and, if transactions are
        enabled, the transaction coordinator attached to the session's
        workspace.
    """

    def __init__(self, transport, options=None, session_factory=Session, transaction_factory=UserTransaction):

        options = Options.resolve(options)
        transactions = capability.negotiate_transactions(options.transactions, transport)

        self.transport = transport
        self.options = options.replace(transactions=transactions)
        self.session_factory = session_factory
        self.transaction_factory = transaction_factory

        local = dict()
        local[descriptors.OPTION_TRANSACTIONS_SUPPORTED] = self.options.transactions

        self._descriptors = descriptors.DescriptorCache(transport, local)

        # Register the handler that lazily loads binary property values.
        # Only the first Repository in the process gets a say in whether
        # that happens.

        binary.ensure_registered(self.options.stream_wrapper)


    def __repr__(self):
        return 'Repository(%r, %r)' % (self.transport, self.options)


    def login(self, credentials=None, workspace_name=None):
        """ Authenticate with the supplied *credentials* against the named
            workspace, and return a new :class:`jackalope.session.Session`.
            The workspace defaults to 'default' if no name is given.

            A :class:`jackalope.errors.RepositoryAccessError` is raised if
            the transport declines the login; any exception raised by the
            transport itself is passed through unchanged.
        """

        if not workspace_name:
            workspace_name = default_workspace

        logger.debug("login to workspace %r", workspace_name)

        if not self.transport.login(credentials, workspace_name):
            raise RepositoryAccessError('transport failed to login without telling why')

        session = self.session_factory(self, workspace_name, credentials, self.transport)

        if self.options.transactions:
            coordinator = self.transaction_factory(self.transport, session)
            session.workspace.set_transaction_coordinator(coordinator)

        logger.debug("login to workspace %r succeeded", workspace_name)
        return session


    def get_descriptor_keys(self):
        """ Return the set of descriptor keys reported by the repository.
            This will fetch the descriptors if they have not been requested
            before.
        """

        return self._descriptors.keys()


    def get_descriptor(self, key):
        """ Return the value of the descriptor *key*: a string, a tuple of
            strings, or None if the repository does not report it. Unknown
            keys are not an error; not every transport reports every
            descriptor.
        """

        return self._descriptors.get(key)


    def is_standard_descriptor(self, key):
        return descriptors.is_standard(key)


# end of class Repository



def new_repository(transport, options=None):
    """ Return a new :class:`Repository` bound to *transport*, configured
        with the supplied *options*.
    """

    return Repository(transport, options)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
