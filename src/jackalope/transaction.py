import logging

from .errors import TransactionStateError


logger = logging.getLogger(__name__)


class UserTransaction:
    """ Coordinator for user-managed transactions on a *session*. The
        actual transaction handling is up to the *transport*; this class
        only tracks whether a transaction is open, and refuses calls made
        out of order.
    """

    def __init__(self, transport, session):

        self.transport = transport
        self.session = session
        self._active = False


    def begin(self):

        if self._active:
            raise TransactionStateError('a transaction is already in progress')

        self.transport.begin_transaction()
        self._active = True
        logger.debug("transaction started for %r", self.session)


    def commit(self):

        if not self._active:
            raise TransactionStateError('no transaction in progress to commit')

        try:
            self.transport.commit_transaction()
        finally:
            self._active = False


    def rollback(self):

        if not self._active:
            raise TransactionStateError('no transaction in progress to roll back')

        try:
            self.transport.rollback_transaction()
        finally:
            self._active = False


    def in_transaction(self):
        return self._active


# end of class UserTransaction


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
