import os
import pytest

import jackalope
from jackalope.options import Options, boolean

from stubs import StubTransactionalTransport


def test_defaults(monkeypatch):
    monkeypatch.delenv('JACKALOPE_TRANSACTIONS', raising=False)
    monkeypatch.delenv('JACKALOPE_STREAM_WRAPPER', raising=False)

    options = Options.resolve(None)
    assert options.transactions == True
    assert options.stream_wrapper == True
    assert len(options.extra) == 0


def test_environment_cleared():
    """ The conftest fixture removes any overrides set by the calling
        environment, so the built-in defaults apply.
    """

    assert 'JACKALOPE_TRANSACTIONS' not in os.environ
    assert 'JACKALOPE_STREAM_WRAPPER' not in os.environ

    repository = jackalope.Repository(StubTransactionalTransport())
    assert repository.options.transactions == True
    assert repository.options.stream_wrapper == True


def test_mapping_is_copied():
    supplied = {'transactions': False, 'cache_size': 100}
    options = Options.resolve(supplied)

    supplied['transactions'] = True
    supplied['cache_size'] = 5

    assert options.transactions == False
    assert options.stream_wrapper == True
    assert options.extra['cache_size'] == 100

    with pytest.raises(TypeError):
        options.extra['cache_size'] = 5


def test_resolve_existing_instance():
    options = Options(transactions=False)
    assert Options.resolve(options) is options


def test_bad_options():
    with pytest.raises(TypeError):
        Options.resolve(42)

    with pytest.raises(TypeError):
        Options.resolve({1: True})

    with pytest.raises(ValueError):
        Options(transactions=[1, 2])


def test_boolean_spellings():
    for value in (False, 0, '0', 'false', 'FALSE', 'off', ' no ', 'n', 'disable', ''):
        assert boolean(value) == False

    for value in (True, 1, 'true', 'on', 'yes', 'enabled'):
        assert boolean(value) == True


def test_environment_defaults(monkeypatch):
    monkeypatch.setenv('JACKALOPE_TRANSACTIONS', 'off')
    monkeypatch.setenv('JACKALOPE_STREAM_WRAPPER', 'no')

    options = Options()
    assert options.transactions == False
    assert options.stream_wrapper == False

    # Explicit values take precedence over the environment.

    options = Options(transactions=True)
    assert options.transactions == True
    assert options.stream_wrapper == False

    monkeypatch.setenv('JACKALOPE_TRANSACTIONS', '0')
    monkeypatch.setenv('JACKALOPE_STREAM_WRAPPER', '1')

    options = Options()
    assert options.transactions == False
    assert options.stream_wrapper == True

    repository = jackalope.Repository(StubTransactionalTransport(), {'stream_wrapper': False})
    assert repository.options.transactions == False


def test_replace():
    options = Options(transactions=True, stream_wrapper=False, extra={'extra_key': 'x'})
    replaced = options.replace(transactions=False)

    assert replaced is not options
    assert options.transactions == True
    assert replaced.transactions == False
    assert replaced.stream_wrapper == False
    assert replaced.extra['extra_key'] == 'x'

    assert replaced == Options(transactions=False, stream_wrapper=False, extra={'extra_key': 'x'})
    assert replaced != options

    repr(replaced)


def test_zero_string():
    options = Options.resolve({'transactions': '0', 'stream_wrapper': '0'})
    assert options.transactions == False
    assert options.stream_wrapper == False

    repository = jackalope.Repository(StubTransactionalTransport(), {'transactions': '0', 'stream_wrapper': False})
    assert repository.options.transactions == False


def test_unrecognized_names_preserved():
    supplied = {'self': 'x', 'extra': 'y', 'cls': 'z', 'transactions': False}
    options = Options.resolve(supplied)

    assert options.transactions == False
    assert options.extra == {'self': 'x', 'extra': 'y', 'cls': 'z'}

    replaced = options.replace(stream_wrapper=False)
    assert replaced.stream_wrapper == False
    assert replaced.extra == {'self': 'x', 'extra': 'y', 'cls': 'z'}

    repository = jackalope.Repository(StubTransactionalTransport(), supplied)
    assert repository.options.extra['self'] == 'x'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
