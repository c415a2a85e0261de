from polydoc.memo import MemoCache, UNRESOLVED
from polydoc.embedding import EmbeddingStore


def test_slots_start_unresolved():
    memo = MemoCache()

    assert memo.get('post') is UNRESOLVED
    assert not memo.is_resolved('post')

def test_none_is_a_resolved_value():
    memo = MemoCache()
    memo.set('post', None)

    assert memo.is_resolved('post')
    assert memo.get('post') is None

def test_invalidate_and_clear():
    memo = MemoCache()
    memo.set('post', 1)
    memo.set('comments', [])

    memo.invalidate('post')
    assert memo.resolved_names() == ['comments']

    memo.clear()
    assert memo.resolved_names() == []

def test_embedding_entries_exist_once_assigned():
    embedding = EmbeddingStore()
    assert not embedding.has('author')

    embedding.assign('author', {'name': 'foo'})

    assert embedding.has('author')
    assert embedding.names() == ['author']

def test_embedding_append_grows_list():
    embedding = EmbeddingStore()

    embedding.append('authors', {'name': 'one'})
    embedding.append('authors', {'name': 'two'})

    assert embedding.get('authors') == [{'name': 'one'}, {'name': 'two'}]

def test_embedding_copies_mappings():
    mapping = {'name': 'foo'}
    embedding = EmbeddingStore({'author': mapping})

    mapping['name'] = 'bar'
    snapshot = embedding.to_dict()
    snapshot['author']['name'] = 'baz'

    assert embedding.get('author') == {'name': 'foo'}
