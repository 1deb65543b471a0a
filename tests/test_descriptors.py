import pytest
import threading

import jackalope
from jackalope import descriptors

from stubs import StubTransport


def new_repository(transport):
    return jackalope.Repository(transport, {'stream_wrapper': False})


def test_transactions_answered_locally(transport):
    repository = new_repository(transport)

    value = repository.get_descriptor(descriptors.OPTION_TRANSACTIONS_SUPPORTED)
    assert value == False
    assert transport.fetches == 0


def test_single_fetch(transport):
    repository = new_repository(transport)

    assert repository.get_descriptor(descriptors.REP_NAME_DESC) == 'stub'
    assert repository.get_descriptor(descriptors.REP_NAME_DESC) == 'stub'
    assert repository.get_descriptor('custom.descriptor') == 'custom'
    assert repository.get_descriptor_keys() == set(transport.descriptors.keys())

    assert transport.fetches == 1


def test_sequence_values(transport):
    repository = new_repository(transport)

    languages = repository.get_descriptor(descriptors.QUERY_LANGUAGES)
    assert languages == ('JCR-SQL2', 'JCR-JQOM')

    # Changes to the transport's copy are not visible afterwards.

    transport.descriptors[descriptors.QUERY_LANGUAGES].append('sql')
    languages = repository.get_descriptor(descriptors.QUERY_LANGUAGES)
    assert languages == ('JCR-SQL2', 'JCR-JQOM')


def test_unknown_key(transport):
    repository = new_repository(transport)

    assert repository.get_descriptor('no.such.descriptor') is None
    assert transport.fetches == 1


def test_keys_load_descriptors(transport):
    repository = new_repository(transport)

    keys = repository.get_descriptor_keys()
    assert transport.fetches == 1
    assert 'custom.descriptor' in keys

    # The locally answered key is not one the transport reported.

    assert descriptors.OPTION_TRANSACTIONS_SUPPORTED not in keys

    repository.get_descriptor('custom.descriptor')
    assert transport.fetches == 1


def test_fetch_failure_retries(transport):
    repository = new_repository(transport)
    transport.fail = RuntimeError('remote end went away')

    with pytest.raises(RuntimeError):
        repository.get_descriptor(descriptors.REP_NAME_DESC)

    with pytest.raises(RuntimeError):
        repository.get_descriptor_keys()

    assert transport.fetches == 2

    transport.fail = None
    assert repository.get_descriptor(descriptors.REP_NAME_DESC) == 'stub'
    assert repository.get_descriptor_keys() == set(transport.descriptors.keys())
    assert transport.fetches == 3


def test_transport_returns_nothing():
    transport = StubTransport()
    transport.descriptors = None
    repository = new_repository(transport)

    with pytest.raises(jackalope.RepositoryException):
        repository.get_descriptor(descriptors.REP_NAME_DESC)

    transport.descriptors = {'late': 'arrival'}
    assert repository.get_descriptor('late') == 'arrival'


def test_is_standard_descriptor(transport):
    repository = new_repository(transport)

    for key in descriptors.STANDARD_DESCRIPTORS:
        assert repository.is_standard_descriptor(key) == True

    assert repository.is_standard_descriptor('custom.descriptor') == False
    assert repository.is_standard_descriptor('jcr.repository') == False
    assert repository.is_standard_descriptor(descriptors.SPEC_VERSION_DESC) == True
    assert repository.is_standard_descriptor(descriptors.OPTION_TRANSACTIONS_SUPPORTED) == True

    assert transport.fetches == 0


def test_concurrent_first_access(transport):
    """ Threads that race to load the descriptors should result in a single
        fetch, and every thread should see the complete set.
    """

    repository = new_repository(transport)
    transport.delay = threading.Event()

    results = list()
    results_lock = threading.Lock()

    def lookup():
        value = repository.get_descriptor(descriptors.REP_NAME_DESC)
        keys = repository.get_descriptor_keys()
        with results_lock:
            results.append((value, keys))

    threads = list()
    for count in range(8):
        thread = threading.Thread(target=lookup)
        thread.start()
        threads.append(thread)

    transport.delay.set()

    for thread in threads:
        thread.join(5)

    assert transport.fetches == 1
    assert len(results) == 8

    expected = set(transport.descriptors.keys())
    for value, keys in results:
        assert value == 'stub'
        assert keys == expected


def test_cache_directly(transport):
    cache = descriptors.DescriptorCache(transport, {'local.key': 'here'})

    assert cache.loaded == False
    assert cache.get('local.key') == 'here'
    assert cache.loaded == False

    assert 'custom.descriptor' in cache
    assert 'local.key' in cache
    assert 'missing' not in cache
    assert cache.loaded == True
    assert transport.fetches == 1


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
