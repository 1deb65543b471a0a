import pytest

import jackalope
from jackalope.session import Session
from jackalope.transaction import UserTransaction

from stubs import StubTransport


def test_login_default_workspace(transport):
    repository = jackalope.new_repository(transport)
    credentials = jackalope.SimpleCredentials('admin', 'admin')

    session = repository.login(credentials)

    assert isinstance(session, Session)
    assert session.workspace.name == 'default'
    assert session.repository is repository
    assert session.transport is transport
    assert session.credentials is credentials
    assert session.user_id == 'admin'
    assert transport.logins == [(credentials, 'default')]


def test_login_named_workspace(transport):
    repository = jackalope.Repository(transport)

    session = repository.login(None, 'tests')
    assert session.workspace.name == 'tests'
    assert session.user_id is None

    session = repository.login(workspace_name='')
    assert session.workspace.name == 'default'


def test_login_declined():
    transport = StubTransport(accept=False)
    repository = jackalope.Repository(transport)

    with pytest.raises(jackalope.RepositoryAccessError):
        repository.login(jackalope.SimpleCredentials('admin', 'wrong'), 'tests')

    assert len(transport.logins) == 1


def test_login_transport_error_passes_through(transport):

    class Refused(Exception):
        pass

    def login(credentials, workspace_name):
        raise Refused('no')

    transport.login = login
    repository = jackalope.Repository(transport)

    with pytest.raises(Refused):
        repository.login()


def test_independent_sessions(transport):
    repository = jackalope.Repository(transport)

    first = repository.login(None, 'one')
    second = repository.login(None, 'two')

    assert first is not second
    assert first.token != second.token
    assert first.workspace.name == 'one'
    assert second.workspace.name == 'two'

    # Logging in does not load the descriptors.

    assert transport.fetches == 0


def test_transaction_coordinator_attached(transactional_transport):
    repository = jackalope.Repository(transactional_transport)
    session = repository.login()

    coordinator = session.workspace.transaction_coordinator
    assert isinstance(coordinator, UserTransaction)
    assert coordinator.transport is transactional_transport
    assert coordinator.session is session


def test_no_coordinator_without_support(transport, transactional_transport):
    repository = jackalope.Repository(transport)
    session = repository.login()
    assert session.workspace.transaction_coordinator is None

    repository = jackalope.Repository(transactional_transport, {'transactions': False})
    session = repository.login()
    assert session.workspace.transaction_coordinator is None


def test_custom_factories(transactional_transport):
    created = list()

    def session_factory(repository, workspace_name, credentials, transport):
        session = Session(repository, workspace_name, credentials, transport)
        created.append(('session', workspace_name))
        return session

    def transaction_factory(transport, session):
        created.append(('transaction', session.workspace.name))
        return 'coordinator'

    repository = jackalope.Repository(transactional_transport, None, session_factory, transaction_factory)
    session = repository.login(None, 'custom')

    assert created == [('session', 'custom'), ('transaction', 'custom')]
    assert session.workspace.transaction_coordinator == 'coordinator'


def test_options_preserved(transport):
    repository = jackalope.Repository(transport, {'transactions': True, 'vendor_hint': 'x'})

    assert repository.options.transactions == False
    assert repository.options.extra['vendor_hint'] == 'x'

    repr(repository)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
