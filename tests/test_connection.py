import pytest
from unittest import mock
from polydoc.connection import Connection
from polydoc.errors import NotConnectedError
from polydoc.store.memory_store import MemoryStore


def test_memory_backend():
    connection = Connection()

    store = connection.start(backend='memory')

    assert isinstance(store, MemoryStore)
    assert connection.store() is store
    assert connection.contexts() == ['main']

def test_unknown_backend():
    with pytest.raises(ValueError):
        Connection().start(backend='riak')

def test_options_with_explicit_store():
    with pytest.raises(ValueError):
        Connection().start(store=MemoryStore(), address=('localhost', 1))

def test_store_before_start():
    with pytest.raises(NotConnectedError):
        Connection().store('main')

def test_restart_closes_previous_store():
    connection = Connection()
    first = mock.MagicMock()
    second = MemoryStore()

    connection.start(store=first)
    connection.start(store=second)

    first.close.assert_called_once()
    assert connection.store() is second

def test_close_all():
    connection = Connection()
    stores = [mock.MagicMock(), mock.MagicMock()]
    connection.start('a', store=stores[0])
    connection.start('b', store=stores[1])

    connection.close_all()

    for store in stores:
        store.open.assert_called_once()
        store.close.assert_called_once()
    assert connection.contexts() == []

def test_polypheny_backend():
    with mock.patch('polydoc.store.document_store.polypheny') as polypheny:
        connection = Connection()
        store = connection.start(address=('db', 20590), user='u', password='p')

        polypheny.connect.assert_called_once_with(('db', 20590), username='u', password='p', transport='plain')
        connection.close()
        polypheny.connect.return_value.close.assert_called_once()
