import pytest

import jackalope
import unitserver
from stubs import StubTransport, StubTransactionalTransport


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """ Keep option overrides in the calling environment from leaking
        into the built-in defaults the tests expect.
    """

    monkeypatch.delenv('JACKALOPE_TRANSACTIONS', raising=False)
    monkeypatch.delenv('JACKALOPE_STREAM_WRAPPER', raising=False)


@pytest.fixture
def transport():
    return StubTransport()


@pytest.fixture
def transactional_transport():
    return StubTransactionalTransport()


@pytest.fixture(scope="module")
def unit_server():

    server = unitserver.Server()
    yield server
    server.stop()


@pytest.fixture
def fresh_registration():
    """ Forget any earlier binary handler registration, before and after
        the test, so that the test sees first-call behavior.
    """

    jackalope.binary._clear()
    yield
    jackalope.binary._clear()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
